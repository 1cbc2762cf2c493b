"""File-level operations: parse roster, parse topics, merge transcript.

These are the three request boundaries. They are the only places that raise
(missing input, malformed input, zero yield, decoder failure); everything
below them skips what it cannot parse.
"""

from pathlib import PurePath
from typing import Optional

import structlog
from pydantic import TypeAdapter, ValidationError

from roster_merge.config import PatternTables, Settings, get_pattern_tables, get_settings
from roster_merge.errors import (
    MalformedInputError,
    MissingInputError,
    UnsupportedFormatError,
    ZeroYieldError,
)
from roster_merge.extraction import extract_pdf_lines, extract_pdf_text, read_spreadsheet, split_lines
from roster_merge.extraction.pdf_extractor import PDF_MAGIC
from roster_merge.extraction.spreadsheet import SPREADSHEET_SUFFIXES
from roster_merge.models import MergedRow, RosterEntry, TopicEntry
from roster_merge.processing import (
    assemble_rows,
    build_topic_lookup,
    extract_roster,
    scan_transcript,
    topics_from_lines,
    topics_from_records,
)

logger = structlog.get_logger(__name__)

_roster_list = TypeAdapter(list[RosterEntry])
_topic_list = TypeAdapter(list[TopicEntry])


def decode_text(content: bytes) -> str:
    """Decode uploaded text as UTF-8, tolerating a byte-order mark."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"檔案編碼錯誤，請使用 UTF-8: {e}") from e


def _suffix(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def _require_content(content: Optional[bytes], what: str) -> bytes:
    if not content:
        raise MissingInputError(f"缺少{what}")
    return content


def _pdf_bytes(content: bytes) -> bytes:
    if not content.startswith(PDF_MAGIC):
        raise MalformedInputError("Invalid PDF file")
    return content


# =============================================================================
# Roster
# =============================================================================

def parse_roster_file(
    content: Optional[bytes],
    filename: str,
    patterns: Optional[PatternTables] = None,
) -> list[RosterEntry]:
    """Parse a roster PDF (or plain-text export) into RosterEntry records.

    Args:
        content: Uploaded file bytes.
        filename: Original filename; its extension selects the decoder.
        patterns: Pattern tables; defaults to the configured tables.

    Returns:
        Roster entries in document order, duplicates removed.

    Raises:
        MissingInputError: No file content.
        UnsupportedFormatError: Not a PDF or TXT file.
        MalformedInputError: Bytes are not a PDF / not UTF-8.
        PDFExtractionError: pdfplumber failed.
        ZeroYieldError: No row could be parsed.
    """
    content = _require_content(content, "檔案")
    suffix = _suffix(filename)

    if suffix == ".pdf":
        lines = extract_pdf_lines(_pdf_bytes(content))
    elif suffix == ".txt":
        lines = split_lines(decode_text(content))
    else:
        raise UnsupportedFormatError("不支援的格式，請上傳 PDF")

    rows = extract_roster(lines, patterns)
    if not rows:
        logger.warning("roster_zero_yield", filename=filename, lines=len(lines))
        raise ZeroYieldError("未解析到資料，請檢查 PDF 排版")
    return rows


# =============================================================================
# Topics
# =============================================================================

def parse_topic_file(
    content: Optional[bytes],
    filename: str,
    settings: Optional[Settings] = None,
    patterns: Optional[PatternTables] = None,
) -> list[TopicEntry]:
    """Parse a topic table from CSV / XLSX rows or PDF / TXT transcript text.

    Raises:
        MissingInputError: No file content.
        UnsupportedFormatError: Extension is not CSV, XLSX, PDF or TXT.
        MalformedInputError: Bytes are not a PDF / not UTF-8.
        DecoderError: pandas or pdfplumber failed.
        ZeroYieldError: No valid date was found.
    """
    settings = settings or get_settings()
    patterns = patterns or get_pattern_tables()
    content = _require_content(content, "檔案")
    suffix = _suffix(filename)

    if suffix in SPREADSHEET_SUFFIXES:
        records = read_spreadsheet(content, filename)
        topics = topics_from_records(records, patterns, settings.default_year)
    elif suffix == ".pdf":
        lines = split_lines(extract_pdf_text(_pdf_bytes(content)))
        topics = topics_from_lines(lines, settings.topic_placeholder)
    elif suffix == ".txt":
        topics = topics_from_lines(split_lines(decode_text(content)), settings.topic_placeholder)
    else:
        raise UnsupportedFormatError("不支援的格式，請上傳 CSV / XLSX / PDF")

    if not topics:
        logger.warning("topics_zero_yield", filename=filename)
        raise ZeroYieldError("未解析到主題資料，請檢查檔案欄位（需有 日期 欄位）")
    return topics


# =============================================================================
# Merge
# =============================================================================

def load_roster_json(data: Optional[str | bytes]) -> list[RosterEntry]:
    """Decode a JSON roster list (as sent back by a client)."""
    if not data:
        raise MissingInputError("缺少名單")
    try:
        return _roster_list.validate_json(data)
    except ValidationError as e:
        raise MalformedInputError(f"名單格式錯誤: {e.error_count()} 個欄位無效") from e


def load_topics_json(data: Optional[str | bytes]) -> list[TopicEntry]:
    """Decode a JSON topic list; absent input means no topic table."""
    if not data:
        return []
    try:
        return _topic_list.validate_json(data)
    except ValidationError as e:
        raise MalformedInputError(f"主題格式錯誤: {e.error_count()} 個欄位無效") from e


def merge_transcript(
    transcript: Optional[bytes | str],
    roster: list[RosterEntry],
    topics: Optional[list[TopicEntry]] = None,
    settings: Optional[Settings] = None,
    patterns: Optional[PatternTables] = None,
) -> list[MergedRow]:
    """Merge a chat transcript against a roster and optional topic table.

    Args:
        transcript: Chat export as bytes (UTF-8) or already-decoded text.
        roster: Parsed roster.
        topics: Parsed topic table, if any.
        settings: Application settings.
        patterns: Pattern tables.

    Returns:
        One MergedRow per roster entry, in roster order.

    Raises:
        MissingInputError: No transcript, or an empty roster.
        MalformedInputError: Transcript bytes are not UTF-8.
    """
    settings = settings or get_settings()
    patterns = patterns or get_pattern_tables()

    if not transcript:
        raise MissingInputError("缺少檔案或名單")
    if not roster:
        raise MissingInputError("缺少檔案或名單")

    text = decode_text(transcript) if isinstance(transcript, bytes) else transcript
    lines = split_lines(text)

    matches = scan_transcript(
        lines,
        (entry.name for entry in roster),
        settings,
        patterns,
    )
    rows = assemble_rows(roster, matches, build_topic_lookup(topics or []), patterns)

    logger.info(
        "merge_complete",
        lines=len(lines),
        roster=len(roster),
        topics=len(topics or []),
        matched=len(matches),
    )
    return rows
