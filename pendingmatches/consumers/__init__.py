"""Consumers of the Challonge provider: roster cache and match aggregation."""
