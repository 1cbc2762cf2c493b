"""Closed vocabularies used by the heuristic parsers.

Every keyword list the parsers depend on lives here as data, so a new
document layout can be supported by editing (or overriding via a JSON file)
the tables instead of the parsing code.

Override example (``PATTERNS_FILE=patterns.json``)::

    {
        "seniority_rules": [{"label": "15年以上", "pattern": "15\\\\s*年以上"}],
        "occupation_suffixes": ["師", "員", "長"]
    }

Fields omitted from the override keep their defaults.
"""

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog
from pydantic import BaseModel, Field, ValidationError

from .settings import get_settings

logger = structlog.get_logger(__name__)

_RANGE = r"\s*[~～〜\-]\s*"


class SeniorityRule(BaseModel):
    """A tenure-bucket label and the regex that detects it."""

    label: str = Field(..., min_length=1, description="Canonical seniority label")
    pattern: str = Field(..., min_length=1, description="Regex matched at the end of a token")


DEFAULT_SENIORITY_RULES = [
    SeniorityRule(label="0~2年", pattern=rf"(?<!\d)0{_RANGE}2\s*年"),
    SeniorityRule(label="1~3年", pattern=rf"(?<!\d)1{_RANGE}3\s*年"),
    SeniorityRule(label="2~5年", pattern=rf"(?<!\d)2{_RANGE}5\s*年"),
    SeniorityRule(label="3~5年", pattern=rf"(?<!\d)3{_RANGE}5\s*年"),
    SeniorityRule(label="5~10年", pattern=rf"(?<!\d)5{_RANGE}10\s*年"),
    SeniorityRule(label="10年以上", pattern=r"(?<!\d)10\s*年以上"),
    SeniorityRule(label="20年以上", pattern=r"(?<!\d)20\s*年以上"),
    SeniorityRule(label="一年以內", pattern=r"一年以[內内]"),
    SeniorityRule(label="在學學生", pattern=r"在學學生"),
    SeniorityRule(label="目前為學生", pattern=r"目前為學生"),
    SeniorityRule(label="學生", pattern=r"學生"),
    SeniorityRule(label="未職業", pattern=r"未職業"),
    SeniorityRule(label="Entry-Level", pattern=r"(?i:entry[\s\-]?level)"),
]

DEFAULT_OCCUPATION_SUFFIXES = [
    "師", "員", "長", "主任", "經理", "顧問", "助理", "專員", "管理師",
    "Engineer", "Manager", "Designer", "Consultant",
]

DEFAULT_ROSTER_HEADER_PATTERNS = [
    r"^編號\s*姓名\s*背景\s*年資$",
]

DEFAULT_ROSTER_HEADER_TOKENS = [
    "編號", "序號", "姓名", "名字", "背景", "職稱", "工作職稱", "年資", "工作年資",
    "單位", "No", "No.", "Name", "Title", "Seniority", "Background",
]

DEFAULT_ROSTER_SKIP_PATTERNS = [
    # page numbers
    r"^第\s*\d+\s*頁(\s*[,，/]?\s*共\s*\d+\s*頁)?$",
    r"^(?i:page)\s*\d+(\s*(?i:of)\s*\d+)?$",
    r"^\d+\s*/\s*\d+$",
    r"^-\s*\d+\s*-$",
    # totals
    r"^(合計|總計|小計|共計|共)\s*[:：]?\s*\d+\s*(人|名|筆|位)?$",
    r"^(?i:total)\b",
    # digits / punctuation only
    r"^[\d\W_]+$",
]

DEFAULT_SYSTEM_NOTICE_PATTERNS = [
    r"加入聊天",
    r"已加入",
    r"已退出",
    r"離開了聊天",
    r"已收回訊息",
    r"變更了聊天室圖片",
    r"歡迎您參加",
    r"請您將顯示名稱",
    r"已將.*強制退出",
    r"已分享記事本",
    r"https?://",
    r"開始了直播",
    r"直播已結束",
    r"(?i:LINE LIVE)",
]

DEFAULT_TIMESTAMP_PREFIX = (
    r"^(?:上午|下午|(?i:am|pm))?\s*\d{1,2}:\d{2}(?::\d{2})?(?:\s*(?i:am|pm))?\s+"
)

DEFAULT_TENURE_PATTERNS = [
    r"年",
    rf"\d+{_RANGE}\d+",
]

DEFAULT_TOPIC_DATE_COLUMNS = ["date", "Date", "DATE", "日期", "時間"]
DEFAULT_TOPIC_TOPIC_COLUMNS = ["topic", "Topic", "TOPIC", "主題"]

# Greetings and verbs that precede a self-introduced title, e.g. "大家好我是物理治療師（3~5年）"
DEFAULT_IDENTITY_LEAD_INS = [
    "大家好", "各位好", "老師好", "您好", "你好",
    "想請問", "請問", "想問",
    "我是一名", "我是一位", "我是一個", "我是", "本人是", "目前是", "本身是",
]


class PatternTables(BaseModel):
    """All closed vocabularies, with the lookups the parsers need."""

    seniority_rules: list[SeniorityRule] = Field(
        default_factory=lambda: list(DEFAULT_SENIORITY_RULES)
    )
    occupation_suffixes: list[str] = Field(
        default_factory=lambda: list(DEFAULT_OCCUPATION_SUFFIXES)
    )
    roster_header_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ROSTER_HEADER_PATTERNS)
    )
    roster_header_tokens: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ROSTER_HEADER_TOKENS)
    )
    roster_skip_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ROSTER_SKIP_PATTERNS)
    )
    system_notice_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SYSTEM_NOTICE_PATTERNS)
    )
    timestamp_prefix: str = DEFAULT_TIMESTAMP_PREFIX
    tenure_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TENURE_PATTERNS)
    )
    topic_date_columns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TOPIC_DATE_COLUMNS)
    )
    topic_topic_columns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TOPIC_TOPIC_COLUMNS)
    )
    identity_lead_ins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IDENTITY_LEAD_INS)
    )

    # -------------------------------------------------------------------------
    # Roster lookups
    # -------------------------------------------------------------------------

    def is_roster_header(self, line: str) -> bool:
        if any(re.search(p, line) for p in self.roster_header_patterns):
            return True
        tokens = line.split(" ")
        return len(tokens) >= 2 and all(t in self.roster_header_tokens for t in tokens)

    def is_roster_noise(self, line: str) -> bool:
        return any(re.search(p, line) for p in self.roster_skip_patterns)

    def match_seniority(self, token: str) -> Optional[tuple[str, str]]:
        """Match a seniority rule anchored at the end of ``token``.

        Returns:
            ``(label, leftover_prefix)`` for the longest matching rule, or None.
        """
        best: Optional[tuple[str, int]] = None
        for rule in self.seniority_rules:
            m = re.search(rf"(?:{rule.pattern})$", token)
            if m and (best is None or m.start() < best[1]):
                best = (rule.label, m.start())
        if best is None:
            return None
        label, start = best
        return label, token[:start].strip()

    def is_occupation(self, token: str) -> bool:
        return any(token.endswith(suffix) for suffix in self.occupation_suffixes)

    def looks_like_tenure(self, text: str) -> bool:
        return any(re.search(p, text) for p in self.tenure_patterns)

    # -------------------------------------------------------------------------
    # Transcript lookups
    # -------------------------------------------------------------------------

    def is_system_notice(self, line: str) -> bool:
        return any(re.search(p, line) for p in self.system_notice_patterns)

    def strip_timestamp(self, line: str) -> str:
        return re.sub(self.timestamp_prefix, "", line, count=1)

    def strip_lead_in(self, text: str) -> str:
        """Drop everything up to the end of the last lead-in phrase in ``text``."""
        end = 0
        for phrase in self.identity_lead_ins:
            index = text.rfind(phrase)
            if index >= 0:
                end = max(end, index + len(phrase))
        return text[end:]


class PatternFileError(Exception):
    """Pattern override file could not be loaded."""

    pass


def load_pattern_tables(path: str | Path) -> PatternTables:
    """Load pattern tables from a JSON override file.

    Args:
        path: JSON file whose keys are ``PatternTables`` field names.

    Returns:
        PatternTables with the overridden fields applied.

    Raises:
        PatternFileError: If the file is missing or invalid.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        tables = PatternTables.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise PatternFileError(f"Invalid pattern file {path}: {e}") from e

    for pattern in _all_patterns(tables):
        try:
            re.compile(pattern)
        except re.error as e:
            raise PatternFileError(f"Invalid regex {pattern!r} in {path}: {e}") from e

    logger.info("pattern_tables_loaded", path=str(path), overridden=sorted(data))
    return tables


def _all_patterns(tables: PatternTables) -> list[str]:
    return [
        *(rule.pattern for rule in tables.seniority_rules),
        *tables.roster_header_patterns,
        *tables.roster_skip_patterns,
        *tables.system_notice_patterns,
        *tables.tenure_patterns,
        tables.timestamp_prefix,
    ]


@lru_cache
def get_pattern_tables() -> PatternTables:
    """Get cached pattern tables (defaults, or the configured override file)."""
    settings = get_settings()
    if settings.patterns_file:
        return load_pattern_tables(settings.patterns_file)
    return PatternTables()
