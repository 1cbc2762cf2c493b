"""Unit tests for text normalization."""

import pytest

from roster_merge.extraction.text import normalize_text, split_lines


class TestNormalizeText:
    """Tests for whitespace canonicalization."""

    def test_collapses_runs(self):
        assert normalize_text("  王小明 \t 物理治療師\n3~5年  ") == "王小明 物理治療師 3~5年"

    def test_full_width_space(self):
        assert normalize_text("王　小明") == "王 小明"

    def test_empty(self):
        assert normalize_text("") == ""
        assert normalize_text(" \t\n ") == ""

    @pytest.mark.parametrize(
        "text",
        ["a  b", "  lead", "trail  ", "多\t\t空白\n行", "　全形　", "plain"],
    )
    def test_idempotent(self, text):
        once = normalize_text(text)
        assert normalize_text(once) == once
        assert "  " not in once
        assert once == once.strip()


class TestSplitLines:
    """Tests for line splitting."""

    def test_mixed_line_endings(self):
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_drops_blank_lines(self):
        assert split_lines("first\n\n   \n second ") == ["first", "second"]
