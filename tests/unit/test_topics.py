"""Unit tests for the topic table builder."""

import pytest

from roster_merge.config import PatternTables
from roster_merge.models import TopicEntry
from roster_merge.processing.topics import (
    build_topic_lookup,
    dedupe_topics,
    find_date,
    normalize_date,
    topics_from_lines,
    topics_from_records,
)


class TestNormalizeDate:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2025/3/5", "2025/03/05"),
            ("2025-03-12", "2025/03/12"),
            ("2025/03/05 14:00", "2025/03/05"),
            (" 2025/12/1 ", "2025/12/01"),
        ],
    )
    def test_full_dates(self, value, expected):
        assert normalize_date(value) == expected

    def test_month_day_takes_default_year(self):
        assert normalize_date("3/5", default_year=2024) == "2024/03/05"

    def test_month_day_uses_configured_year(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_YEAR", "2031")
        from roster_merge.config import get_settings

        get_settings.cache_clear()
        try:
            assert normalize_date("3/5") == "2031/03/05"
        finally:
            get_settings.cache_clear()

    @pytest.mark.parametrize("value", ["", "日期", "三月五日", "2025", "abc/def"])
    def test_unrecognized(self, value):
        assert normalize_date(value, default_year=2025) == ""


class TestFindDate:
    def test_embedded_date(self):
        assert find_date("2025/3/5（三）") == "2025/03/05"

    def test_no_date(self):
        assert find_date("14:00 王小明 大家好") == ""


class TestTopicsFromRecords:
    def test_synonym_columns(self, patterns):
        records = [
            {"Date": "2025/3/5", "Topic": "開場介紹"},
            {"日期": "3/12", "主題": "肩關節評估"},
        ]
        topics = topics_from_records(records, patterns, default_year=2025)
        assert topics == [
            TopicEntry(date="2025/03/05", topic="開場介紹"),
            TopicEntry(date="2025/03/12", topic="肩關節評估"),
        ]

    def test_first_non_empty_column_wins(self, patterns):
        records = [{"date": "", "日期": "2025/03/05", "topic": "", "主題": "膝關節"}]
        topics = topics_from_records(records, patterns, default_year=2025)
        assert topics == [TopicEntry(date="2025/03/05", topic="膝關節")]

    def test_rows_without_date_dropped(self, patterns):
        records = [
            {"日期": "", "主題": "空白"},
            {"日期": "日期", "主題": "主題"},
            {"主題": "沒有日期欄"},
        ]
        assert topics_from_records(records, patterns, default_year=2025) == []

    def test_missing_topic_is_empty(self, patterns):
        topics = topics_from_records([{"日期": "2025/03/05"}], patterns, default_year=2025)
        assert topics == [TopicEntry(date="2025/03/05", topic="")]

    def test_duplicate_dates_keep_first(self, patterns):
        records = [
            {"日期": "2025/03/05", "主題": "第一"},
            {"日期": "2025-3-5", "主題": "第二"},
        ]
        topics = topics_from_records(records, patterns, default_year=2025)
        assert topics == [TopicEntry(date="2025/03/05", topic="第一")]

    def test_custom_columns(self):
        tables = PatternTables(topic_date_columns=["day"], topic_topic_columns=["subject"])
        topics = topics_from_records(
            [{"day": "2025/04/01", "subject": "總結"}], tables, default_year=2025
        )
        assert topics == [TopicEntry(date="2025/04/01", topic="總結")]


class TestTopicsFromLines:
    def test_time_and_topic(self):
        topics = topics_from_lines(["2025/03/05 14:00 開場介紹 其他文字"], placeholder="無資料")
        assert topics == [TopicEntry(date="2025/03/05", topic="開場介紹")]

    def test_date_only_gets_placeholder(self):
        topics = topics_from_lines(["2025/03/12（三）"], placeholder="無資料")
        assert topics == [TopicEntry(date="2025/03/12", topic="無資料")]

    def test_undated_lines_ignored(self):
        assert topics_from_lines(["14:00 王小明 大家好"], placeholder="無資料") == []

    def test_first_per_date(self):
        topics = topics_from_lines(
            [
                "2025/03/05 09:00 開場",
                "2025/03/05 10:00 第二段",
                "2025/03/06 09:00 複習",
            ],
            placeholder="無資料",
        )
        assert topics == [
            TopicEntry(date="2025/03/05", topic="開場"),
            TopicEntry(date="2025/03/06", topic="複習"),
        ]

    def test_placeholder_from_settings(self, monkeypatch):
        monkeypatch.setenv("TOPIC_PLACEHOLDER", "N/A")
        from roster_merge.config import get_settings

        get_settings.cache_clear()
        try:
            assert topics_from_lines(["2025/03/12"]) == [TopicEntry(date="2025/03/12", topic="N/A")]
        finally:
            get_settings.cache_clear()


class TestLookup:
    def test_dedupe_preserves_order(self):
        entries = [
            TopicEntry(date="2025/03/12", topic="B"),
            TopicEntry(date="2025/03/05", topic="A"),
            TopicEntry(date="2025/03/12", topic="C"),
        ]
        assert [e.topic for e in dedupe_topics(entries)] == ["B", "A"]

    def test_build_lookup(self, topics):
        assert build_topic_lookup(topics) == {
            "2025/03/05": "開場介紹",
            "2025/03/12": "肩關節評估",
        }
