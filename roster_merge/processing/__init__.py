"""Reconciliation core: roster, topics, identity, transcript, assembly."""

from .assembly import assemble_rows, extract_identity_hint
from .identity import best_match, bigrams, similarity
from .roster import extract_roster, parse_roster_line
from .topics import (
    build_topic_lookup,
    dedupe_topics,
    normalize_date,
    topics_from_lines,
    topics_from_records,
)
from .transcript import collect_questions, parse_transcript_line, scan_transcript, split_speaker

__all__ = [
    "assemble_rows",
    "best_match",
    "bigrams",
    "build_topic_lookup",
    "collect_questions",
    "dedupe_topics",
    "extract_identity_hint",
    "extract_roster",
    "normalize_date",
    "parse_roster_line",
    "parse_transcript_line",
    "scan_transcript",
    "similarity",
    "split_speaker",
    "topics_from_lines",
    "topics_from_records",
]
