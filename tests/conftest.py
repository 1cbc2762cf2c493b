"""Pytest configuration and fixtures."""

import pytest

from roster_merge.config import PatternTables, Settings
from roster_merge.models import RosterEntry, TopicEntry


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def patterns() -> PatternTables:
    """Built-in pattern tables."""
    return PatternTables()


@pytest.fixture
def roster_lines() -> list[str]:
    """Lines as they come out of a flattened roster PDF."""
    return [
        "學員名單",
        "編號 姓名 背景 年資",
        "1 王小明 物理治療師 3~5年",
        "2 陳大文 學生",
        "3 林 美玲 職能治療師 0~2年",
        "4 張三 護理師5~10年",
        "第 1 頁",
        "5 王小明 藥師 1~3年",
        "合計 5 人",
    ]


@pytest.fixture
def roster() -> list[RosterEntry]:
    return [
        RosterEntry(name="王小明", title="物理治療師", seniority="3~5年"),
        RosterEntry(name="陳大文", title="", seniority=""),
        RosterEntry(name="林美玲", title="職能治療師", seniority="0~2年"),
    ]


@pytest.fixture
def chat_text() -> str:
    """A LINE-style chat export."""
    return "\n".join([
        "[LINE] 復健課程的聊天記錄",
        "2025/03/05（三）",
        "14:00\t王小明\t大家好",
        "14:01\t王小明 已收回訊息",
        "14:02\t陳大文\t物理治療師（3~5年）想請問這個怎麼用？",
        "14:03\t王小明\t請問講義在哪裡下載？",
        "14:04\t王小明\t還有一個問題？",
        "2025/03/12（三）",
        "10:00\t林美玲\t請問 https://example.com 可以看嗎？",
        "10:05\t林美玲\t下週的作業是什麼？",
    ])


@pytest.fixture
def topics() -> list[TopicEntry]:
    return [
        TopicEntry(date="2025/03/05", topic="開場介紹"),
        TopicEntry(date="2025/03/12", topic="肩關節評估"),
    ]


@pytest.fixture
def topic_csv_bytes() -> bytes:
    return (
        "日期,主題\n"
        "2025/3/5,開場介紹\n"
        "2025-03-12,肩關節評估\n"
        ",空白列\n"
        "2025/03/05,重複日期\n"
    ).encode("utf-8")
