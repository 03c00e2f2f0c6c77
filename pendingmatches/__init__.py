"""Pending matches across in-progress Challonge tournaments."""

__version__ = "0.1.0"
