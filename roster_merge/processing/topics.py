"""Topic Table Builder: spreadsheet rows or transcript text → date → topic."""

import re
from typing import Iterable, Mapping, Optional

import structlog

from roster_merge.config import PatternTables, get_pattern_tables, get_settings
from roster_merge.models import TopicEntry

logger = structlog.get_logger(__name__)

# Embedded full date inside free text, e.g. "2025/3/5" or "2025-03-05"
DATE_TOKEN = re.compile(r"(\d{4}[/\-]\d{1,2}[/\-]\d{1,2})")

_FULL_DATE = re.compile(r"^(\d{4})/(\d{1,2})/(\d{1,2})")
_MONTH_DAY = re.compile(r"^(\d{1,2})/(\d{1,2})$")
_TIME_AND_TOPIC = re.compile(r"^(\d{1,2}:\d{2})\s+(\S+)")


def normalize_date(value: str, default_year: Optional[int] = None) -> str:
    """Canonicalize a date string to ``YYYY/MM/DD``.

    Accepts ``YYYY/M/D`` and ``YYYY-M-D`` (anything after the day, such as a
    time of day, is ignored) and bare ``M/D``, which takes ``default_year``.

    Returns:
        The canonical date, or ``""`` if the value has none of these shapes.
    """
    s = value.strip().replace("-", "/")

    m = _FULL_DATE.match(s)
    if m:
        year, month, day = m.groups()
        return f"{year}/{month.zfill(2)}/{day.zfill(2)}"

    m = _MONTH_DAY.match(s)
    if m:
        if default_year is None:
            default_year = get_settings().default_year
        month, day = m.groups()
        return f"{default_year}/{month.zfill(2)}/{day.zfill(2)}"

    return ""


def find_date(line: str) -> str:
    """Return the first embedded full date on a line, normalized, or ``""``."""
    m = DATE_TOKEN.search(line)
    return normalize_date(m.group(1)) if m else ""


def topics_from_records(
    records: Iterable[Mapping[str, object]],
    patterns: Optional[PatternTables] = None,
    default_year: Optional[int] = None,
) -> list[TopicEntry]:
    """Build topic entries from tabular rows with synonym column names.

    Rows whose date cannot be normalized (blank rows, repeated headers) are
    dropped. The topic may be empty.
    """
    patterns = patterns or get_pattern_tables()

    entries: list[TopicEntry] = []
    for record in records:
        date = normalize_date(
            _first_value(record, patterns.topic_date_columns), default_year
        )
        if not date:
            continue
        topic = _first_value(record, patterns.topic_topic_columns)
        entries.append(TopicEntry(date=date, topic=topic))

    return dedupe_topics(entries)


def topics_from_lines(
    lines: Iterable[str],
    placeholder: Optional[str] = None,
) -> list[TopicEntry]:
    """Build topic entries from transcript-style text.

    A line carrying a date followed by ``HH:MM <token>`` yields ``<token>`` as
    the topic. A dated line without that shape still records the date, with
    the placeholder topic, so date coverage is kept.
    """
    if placeholder is None:
        placeholder = get_settings().topic_placeholder

    entries: list[TopicEntry] = []
    for line in lines:
        m = DATE_TOKEN.search(line)
        if not m:
            continue
        date = normalize_date(m.group(1))
        if not date:
            continue

        after = line[m.end():].strip()
        tm = _TIME_AND_TOPIC.match(after)
        topic = tm.group(2).strip() if tm else placeholder
        entries.append(TopicEntry(date=date, topic=topic))

    return dedupe_topics(entries)


def dedupe_topics(entries: Iterable[TopicEntry]) -> list[TopicEntry]:
    """Keep the first entry per date, preserving order."""
    by_date: dict[str, TopicEntry] = {}
    total = 0
    for entry in entries:
        total += 1
        by_date.setdefault(entry.date, entry)

    logger.info("topics_built", candidates=total, unique_dates=len(by_date))
    return list(by_date.values())


def build_topic_lookup(entries: Iterable[TopicEntry]) -> dict[str, str]:
    """date → topic, first entry per date wins."""
    lookup: dict[str, str] = {}
    for entry in entries:
        lookup.setdefault(entry.date, entry.topic)
    return lookup


def _first_value(record: Mapping[str, object], columns: list[str]) -> str:
    for column in columns:
        value = record.get(column)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""
