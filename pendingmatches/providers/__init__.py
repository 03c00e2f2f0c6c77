"""Upstream bracket data providers."""
