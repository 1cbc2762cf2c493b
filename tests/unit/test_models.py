"""Unit tests for the record models."""

import pytest
from pydantic import ValidationError

from roster_merge.models import MatchResult, MergedRow, RosterEntry, TopicEntry


class TestRosterEntry:
    def test_defaults(self):
        entry = RosterEntry(name="王小明")
        assert entry.title == ""
        assert entry.seniority == ""

    def test_whitespace_stripped(self):
        entry = RosterEntry(name=" 王小明 ", title=" 護理師", seniority="3~5年 ")
        assert (entry.name, entry.title, entry.seniority) == ("王小明", "護理師", "3~5年")

    def test_name_required(self):
        with pytest.raises(ValidationError):
            RosterEntry(name="")
        with pytest.raises(ValidationError):
            RosterEntry(name="   ")

    def test_frozen(self):
        entry = RosterEntry(name="王小明")
        with pytest.raises(ValidationError):
            entry.title = "藥師"


class TestTopicEntry:
    def test_canonical_date(self):
        assert TopicEntry(date="2025/03/05").topic == ""

    @pytest.mark.parametrize("date", ["2025/3/5", "2025-03-05", "3/5", ""])
    def test_non_canonical_date_rejected(self, date):
        with pytest.raises(ValidationError):
            TopicEntry(date=date, topic="x")


class TestMatchResult:
    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            MatchResult(question="請問？", score=1.5)


class TestMergedRow:
    def test_editable(self):
        row = MergedRow(name="王小明")
        row.title = "藥師"
        assert row.title == "藥師"
        assert row.match_score == 0.0

    def test_json_roundtrip(self):
        row = MergedRow(name="王小明", question="請問？", date="2025/03/05", match_score=0.9)
        assert MergedRow.model_validate_json(row.model_dump_json()) == row

    def test_score_serialized_as_camel_case(self):
        row = MergedRow(name="王小明", match_score=0.9)
        assert row.model_dump(by_alias=True)["matchScore"] == 0.9

    def test_score_accepted_under_either_name(self):
        assert MergedRow.model_validate({"name": "王小明", "matchScore": 0.5}).match_score == 0.5
        assert MergedRow.model_validate({"name": "王小明", "match_score": 0.5}).match_score == 0.5
