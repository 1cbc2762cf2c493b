"""Row Assembler: roster + matches + topic table → MergedRow per person."""

import re
from typing import Mapping, Optional

import structlog

from roster_merge.config import PatternTables, get_pattern_tables
from roster_merge.models import MatchResult, MergedRow, RosterEntry

logger = structlog.get_logger(__name__)

# "物理治療師（3~5年）" / "PT(學生)": short token, then a parenthesized inner token
IDENTITY_HINT = re.compile(
    r"([^\s()（）,，、。!！?？:：]{1,12})\s*[（(]\s*([^()（）]{1,20}?)\s*[）)]"
)


def extract_identity_hint(
    question: str,
    patterns: Optional[PatternTables] = None,
) -> Optional[tuple[str, str]]:
    """Find a ``title（seniority）`` hint inside question text.

    Returns:
        ``(title, seniority)`` where seniority is ``""`` unless the inner
        token looks like a tenure expression; None if no hint is present.
    """
    patterns = patterns or get_pattern_tables()

    m = IDENTITY_HINT.search(question)
    if not m:
        return None
    # The token run may start with a greeting or "我是"; keep what follows it
    title = patterns.strip_lead_in(m.group(1)).strip()
    inner = m.group(2).strip()
    seniority = inner if patterns.looks_like_tenure(inner) else ""
    return title, seniority


def assemble_rows(
    roster: list[RosterEntry],
    matches: Mapping[str, MatchResult],
    topic_lookup: Optional[Mapping[str, str]] = None,
    patterns: Optional[PatternTables] = None,
) -> list[MergedRow]:
    """Produce exactly one MergedRow per roster entry, in roster order.

    Empty title/seniority are back-filled from an identity hint in the
    matched question; existing values are never overwritten.
    """
    patterns = patterns or get_pattern_tables()
    topic_lookup = topic_lookup or {}

    rows: list[MergedRow] = []
    backfilled = 0
    for entry in roster:
        match = matches.get(entry.name)
        row = MergedRow(
            name=entry.name,
            title=entry.title,
            seniority=entry.seniority,
            question=match.question if match else "",
            date=match.date if match else "",
            match_score=match.score if match else 0.0,
        )
        row.topic = topic_lookup.get(row.date, "") if row.date else ""

        if row.question and (not row.title or not row.seniority):
            hint = extract_identity_hint(row.question, patterns)
            if hint:
                title, seniority = hint
                if not row.title and title:
                    row.title = title
                if not row.seniority and seniority:
                    row.seniority = seniority
                backfilled += 1

        rows.append(row)

    logger.info(
        "rows_assembled",
        rows=len(rows),
        matched=sum(1 for r in rows if r.question),
        with_topic=sum(1 for r in rows if r.topic),
        backfilled=backfilled,
    )
    return rows
