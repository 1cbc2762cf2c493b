"""Pydantic data models for the reconciliation pipeline."""

from .records import MatchResult, MergedRow, RosterEntry, TopicEntry, TranscriptLine

__all__ = [
    "RosterEntry",
    "TopicEntry",
    "TranscriptLine",
    "MatchResult",
    "MergedRow",
]
