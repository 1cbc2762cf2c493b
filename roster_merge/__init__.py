"""Roster / chat transcript / topic table reconciliation."""

__version__ = "0.1.0"
