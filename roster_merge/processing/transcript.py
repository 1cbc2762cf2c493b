"""Transcript Scanner: first question per roster person from a chat log.

TWO PASSES:
- Pass 1 resolves every question line against the full roster. A line
  whose speaker resolves to someone already matched is ignored.
- Pass 2 retries the same question lines for the names pass 1 left
  unmatched, matching each speaker only against that smaller pool. A
  broad pass-1 match can consume a line that is the only plausible fit for
  a short, ambiguous name; the narrower pool gives it a second chance.

Results are accumulated insert-on-absence: the first qualifying question
per person wins and is never overwritten.
"""

import re
from typing import Iterable, Optional

import structlog

from roster_merge.config import PatternTables, Settings, get_pattern_tables, get_settings
from roster_merge.extraction.text import normalize_text
from roster_merge.models import MatchResult, TranscriptLine

from .identity import best_match
from .topics import find_date

logger = structlog.get_logger(__name__)

QUESTION_MARKS = re.compile(r"[?？]")


def _speaker_patterns(max_length: int) -> tuple[re.Pattern, re.Pattern]:
    # A colon between two digits is a clock time, not the speaker delimiter
    colon = re.compile(rf"^(.{{1,{max_length}}}?)(?:(?<!\d)[：:]|[：:](?!\d))\s*(.*)$")
    whitespace = re.compile(rf"^(\S.{{0,{max_length - 1}}}?)\s+(.*)$")
    return colon, whitespace


def split_speaker(line: str, max_length: int = 20) -> Optional[tuple[str, str]]:
    """Split ``speaker：content`` / ``speaker content`` into its two parts.

    Returns:
        ``(speaker, content)`` with both parts non-empty, or None.
    """
    colon, whitespace = _speaker_patterns(max_length)
    m = colon.match(line) or whitespace.match(line)
    if not m:
        return None
    speaker = m.group(1).strip()
    content = m.group(2).strip()
    if not speaker or not content:
        return None
    return speaker, content


def parse_transcript_line(
    line: str,
    current_date: str = "",
    settings: Optional[Settings] = None,
    patterns: Optional[PatternTables] = None,
) -> Optional[TranscriptLine]:
    """Extract a question-shaped TranscriptLine from one chat line.

    Args:
        line: Raw or normalized chat line.
        current_date: Date carried from the most recent dated line.
        settings: Application settings.
        patterns: Pattern tables.

    Returns:
        TranscriptLine if the line is a non-system message containing a
        question mark; None otherwise.
    """
    settings = settings or get_settings()
    patterns = patterns or get_pattern_tables()

    s = normalize_text(line)
    if not s or patterns.is_system_notice(s):
        return None

    parts = split_speaker(patterns.strip_timestamp(s), settings.speaker_max_length)
    if parts is None:
        return None
    speaker, content = parts

    if not QUESTION_MARKS.search(content):
        return None

    return TranscriptLine(
        speaker=speaker,
        content=content,
        date=find_date(s) or current_date,
    )


def collect_questions(
    lines: Iterable[str],
    settings: Optional[Settings] = None,
    patterns: Optional[PatternTables] = None,
) -> list[TranscriptLine]:
    """Walk the chat log and keep question-shaped lines in order.

    Any dated line (including day headers that are not messages) moves the
    current date forward; question lines without their own date inherit it.
    """
    settings = settings or get_settings()
    patterns = patterns or get_pattern_tables()

    questions: list[TranscriptLine] = []
    current_date = ""
    for line in lines:
        current_date = find_date(line) or current_date
        parsed = parse_transcript_line(line, current_date, settings, patterns)
        if parsed is not None:
            questions.append(parsed)
    return questions


def match_questions(
    questions: Iterable[TranscriptLine],
    candidates: list[str],
    matches: dict[str, MatchResult],
    threshold: float,
) -> int:
    """One matching pass; inserts into ``matches`` only for absent names.

    Matched names are removed from ``candidates`` as the pass proceeds.

    Returns:
        Number of names newly matched.
    """
    added = 0
    for question in questions:
        if not candidates:
            break
        resolved = best_match(question.speaker, candidates, threshold)
        if resolved is None:
            continue
        name, score = resolved
        if name in matches:
            continue
        matches[name] = MatchResult(question=question.content, date=question.date, score=score)
        candidates.remove(name)
        added += 1
    return added


def scan_transcript(
    lines: Iterable[str],
    names: Iterable[str],
    settings: Optional[Settings] = None,
    patterns: Optional[PatternTables] = None,
) -> dict[str, MatchResult]:
    """Find each roster name's first question in the chat log.

    Args:
        lines: Chat lines in chronological order.
        names: Roster names.
        settings: Application settings (threshold, speaker length).
        patterns: Pattern tables (system notices, timestamp prefix).

    Returns:
        Mapping of roster name → MatchResult for every name that matched.
    """
    settings = settings or get_settings()
    patterns = patterns or get_pattern_tables()

    roster_names = list(dict.fromkeys(names))
    questions = collect_questions(lines, settings, patterns)
    matches: dict[str, MatchResult] = {}

    # Pass 1: full roster, matched names stay in the pool
    for question in questions:
        resolved = best_match(question.speaker, roster_names, settings.match_threshold)
        if resolved is None:
            continue
        name, score = resolved
        if name not in matches:
            matches[name] = MatchResult(
                question=question.content, date=question.date, score=score
            )
    first_pass = len(matches)

    # Pass 2: only names still unmatched
    unmatched = [n for n in roster_names if n not in matches]
    second_pass = 0
    if unmatched:
        second_pass = match_questions(questions, unmatched, matches, settings.match_threshold)

    logger.info(
        "transcript_scanned",
        question_lines=len(questions),
        roster=len(roster_names),
        first_pass=first_pass,
        second_pass=second_pass,
        unmatched=len(roster_names) - len(matches),
    )
    return matches
