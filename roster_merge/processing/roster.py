"""Roster Extractor: flattened PDF text lines → RosterEntry records.

HEURISTIC, BEST-EFFORT:
- Header, page-number and totals lines are rejected up front
- A seniority hint (closed vocabulary) anchors the end of the row
- A leading integer is a row number
- Whatever sits between is split into name and title
- Rows without a hint fall back to positional assignment

A line that fits none of this is skipped, never raised.
"""

import re
from typing import Iterable, Optional

import structlog

from roster_merge.config import PatternTables, get_pattern_tables
from roster_merge.extraction.text import normalize_text
from roster_merge.models import RosterEntry

logger = structlog.get_logger(__name__)

_ROW_NUMBER = re.compile(r"^\d+$")
_CJK_NAME = re.compile(r"^[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]{2,10}$")
_ASCII_ALNUM = re.compile(r"[A-Za-z0-9]")

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MIN_FALLBACK_TOKENS = 4


def extract_roster(
    lines: Iterable[str],
    patterns: Optional[PatternTables] = None,
) -> list[RosterEntry]:
    """Parse roster rows from text lines.

    Args:
        lines: Extracted lines in document order.
        patterns: Pattern tables; defaults to the configured tables.

    Returns:
        Entries in document order, duplicate names removed (first wins).
    """
    patterns = patterns or get_pattern_tables()

    entries: dict[str, RosterEntry] = {}
    total = 0
    for line in lines:
        total += 1
        entry = parse_roster_line(line, patterns)
        if entry is None:
            continue
        if entry.name in entries:
            logger.debug("roster_duplicate_skipped", name=entry.name)
            continue
        entries[entry.name] = entry

    logger.info("roster_extracted", lines=total, rows=len(entries))
    return list(entries.values())


def parse_roster_line(line: str, patterns: PatternTables) -> Optional[RosterEntry]:
    """Parse one line into a RosterEntry, or None if it is not a roster row."""
    s = normalize_text(line)
    if not s or patterns.is_roster_header(s) or patterns.is_roster_noise(s):
        return None

    tokens = s.split(" ")

    hint = _find_seniority(tokens, patterns)
    if hint is None:
        return _positional_fallback(tokens)

    index, seniority, leftover = hint
    body = tokens[:index]
    if leftover:
        body.append(leftover)

    if body and _ROW_NUMBER.match(body[0]):
        body = body[1:]
    if not body:
        return None

    name, title = _split_name_title(body, patterns)
    if not name:
        return None
    return RosterEntry(name=name, title=title, seniority=seniority)


def _find_seniority(
    tokens: list[str],
    patterns: PatternTables,
) -> Optional[tuple[int, str, str]]:
    """Scan tokens from the end for a seniority hint.

    Returns:
        ``(token_index, label, leftover_prefix)`` or None.
    """
    # Never treat the row number itself as the hint
    for index in range(len(tokens) - 1, -1, -1):
        if index == 0 and len(tokens) > 1 and _ROW_NUMBER.match(tokens[0]):
            break
        found = patterns.match_seniority(tokens[index])
        if found:
            label, leftover = found
            return index, label, leftover
    return None


def _split_name_title(body: list[str], patterns: PatternTables) -> tuple[str, str]:
    if len(body) == 1:
        return body[0], ""

    # Trailing run of occupation-looking tokens, leaving at least one for the name
    run_start = len(body)
    while run_start > 1 and patterns.is_occupation(body[run_start - 1]):
        run_start -= 1

    if run_start == len(body):
        run_start = len(body) - 1

    title = " ".join(body[run_start:])
    name = _join_name(body[:run_start])
    return name, title


def _join_name(parts: list[str]) -> str:
    """Concatenate name fragments split by PDF flattening.

    CJK fragments are joined directly; a space is kept between two ASCII
    alphanumerics so Latin names stay readable.
    """
    name = ""
    for part in parts:
        if name and _ASCII_ALNUM.match(name[-1]) and _ASCII_ALNUM.match(part[0]):
            name += " "
        name += part
    return name


def _positional_fallback(tokens: list[str]) -> Optional[RosterEntry]:
    """``[row, name, title..., seniority]`` for rows with an unknown tenure label."""
    if len(tokens) < MIN_FALLBACK_TOKENS or not _ROW_NUMBER.match(tokens[0]):
        return None

    name = tokens[1]
    if not (_CJK_NAME.match(name) or MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH):
        return None

    return RosterEntry(
        name=name,
        title=" ".join(tokens[2:-1]),
        seniority=tokens[-1],
    )
