"""Unit tests for the transcript scanner."""

import pytest

from roster_merge.config import Settings
from roster_merge.models import TranscriptLine
from roster_merge.processing.transcript import (
    collect_questions,
    parse_transcript_line,
    scan_transcript,
    split_speaker,
)
from roster_merge.extraction import split_lines


class TestSplitSpeaker:
    def test_fullwidth_colon(self):
        assert split_speaker("王小明：請問這題？") == ("王小明", "請問這題？")

    def test_ascii_colon(self):
        assert split_speaker("Amy: how?") == ("Amy", "how?")

    def test_whitespace_fallback(self):
        assert split_speaker("王小明 請問 這題？") == ("王小明", "請問 這題？")

    def test_clock_time_in_content_is_not_delimiter(self):
        assert split_speaker("王小明 請問課程是 10:30 開始嗎？") == (
            "王小明",
            "請問課程是 10:30 開始嗎？",
        )

    def test_speaker_ending_in_digit(self):
        assert split_speaker("學員1：請問？") == ("學員1", "請問？")

    def test_speaker_length_limit(self):
        line = "甲" * 25 + "：請問？"
        assert split_speaker(line, max_length=20) is None

    def test_empty_content(self):
        assert split_speaker("王小明：") is None
        assert split_speaker("王小明") is None


class TestParseTranscriptLine:
    def test_question_line(self, settings, patterns):
        parsed = parse_transcript_line("王小明：請問講義在哪？", "2025/03/05", settings, patterns)
        assert parsed == TranscriptLine(speaker="王小明", content="請問講義在哪？", date="2025/03/05")

    def test_halfwidth_question_mark(self, settings, patterns):
        parsed = parse_transcript_line("Amy: is this recorded?", "", settings, patterns)
        assert parsed is not None
        assert parsed.content == "is this recorded?"

    def test_no_question_mark(self, settings, patterns):
        assert parse_transcript_line("王小明：大家好", "", settings, patterns) is None

    @pytest.mark.parametrize(
        "line",
        [
            "王小明已加入群組？",
            "陳大文 已收回訊息",
            "林美玲 請問 https://example.com 這個？",
            "王小明 開始了直播",
        ],
    )
    def test_system_notices_dropped(self, settings, patterns, line):
        assert parse_transcript_line(line, "", settings, patterns) is None

    @pytest.mark.parametrize(
        "line",
        ["14:03\t王小明\t請問？", "下午02:15 王小明 請問？", "9:05 王小明：請問？"],
    )
    def test_timestamp_stripped(self, settings, patterns, line):
        parsed = parse_transcript_line(line, "", settings, patterns)
        assert parsed is not None
        assert parsed.speaker == "王小明"
        assert parsed.content == "請問？"

    def test_clock_time_inside_question(self, settings, patterns):
        parsed = parse_transcript_line("王小明 請問課程是 10:30 開始嗎？", "", settings, patterns)
        assert parsed == TranscriptLine(speaker="王小明", content="請問課程是 10:30 開始嗎？")

    def test_own_date_overrides_current(self, settings, patterns):
        parsed = parse_transcript_line(
            "2025/03/12 王小明：請問？", "2025/03/05", settings, patterns
        )
        assert parsed is not None
        assert parsed.date == "2025/03/12"


class TestCollectQuestions:
    def test_date_carried_from_headers(self, chat_text, settings, patterns):
        questions = collect_questions(split_lines(chat_text), settings, patterns)

        assert [(q.speaker, q.date) for q in questions] == [
            ("陳大文", "2025/03/05"),
            ("王小明", "2025/03/05"),
            ("王小明", "2025/03/05"),
            ("林美玲", "2025/03/12"),
        ]

    def test_no_dates_anywhere(self, settings, patterns):
        questions = collect_questions(["王小明：請問？"], settings, patterns)
        assert questions[0].date == ""


class TestScanTranscript:
    def test_sample_chat(self, chat_text, roster, settings, patterns):
        matches = scan_transcript(
            split_lines(chat_text), [r.name for r in roster], settings, patterns
        )

        assert set(matches) == {"王小明", "陳大文", "林美玲"}
        assert matches["王小明"].question == "請問講義在哪裡下載？"
        assert matches["陳大文"].question == "物理治療師（3~5年）想請問這個怎麼用？"
        assert matches["林美玲"].question == "下週的作業是什麼？"
        assert matches["林美玲"].date == "2025/03/12"

    def test_first_question_wins(self, settings, patterns):
        lines = ["王小明：第一題？", "王小明：第二題？"]
        matches = scan_transcript(lines, ["王小明"], settings, patterns)
        assert matches["王小明"].question == "第一題？"

    def test_fuzzy_speaker(self, settings, patterns):
        lines = ["林美玲物理治療師：請問？"]
        matches = scan_transcript(lines, ["林美玲物理治療"], settings, patterns)
        assert matches["林美玲物理治療"].score == pytest.approx(12 / 13)

    def test_speaker_below_threshold(self, settings, patterns):
        matches = scan_transcript(["路人甲：請問？"], ["王小明"], settings, patterns)
        assert matches == {}

    def test_second_pass_recovers_shadowed_name(self, settings, patterns):
        # "alicewu" ties between both names; pass 1 gives it to the first,
        # who is already matched, so only pass 2 can assign it.
        lines = ["mralicewu: first?", "alicewu: second?"]
        matches = scan_transcript(lines, ["mralicewu", "alicewujr"], settings, patterns)

        assert matches["mralicewu"].question == "first?"
        assert matches["mralicewu"].score == 1.0
        assert matches["alicewujr"].question == "second?"
        assert matches["alicewujr"].score == pytest.approx(12 / 14)

    def test_threshold_from_settings(self, patterns):
        lenient = Settings(_env_file=None, match_threshold=0.5)
        matches = scan_transcript(["王小美：請問？"], ["王小明"], lenient, patterns)
        assert matches["王小明"].score == pytest.approx(0.5)

    def test_duplicate_roster_names(self, settings, patterns):
        matches = scan_transcript(["王小明：請問？"], ["王小明", "王小明"], settings, patterns)
        assert list(matches) == ["王小明"]

    def test_empty_inputs(self, settings, patterns):
        assert scan_transcript([], ["王小明"], settings, patterns) == {}
        assert scan_transcript(["王小明：請問？"], [], settings, patterns) == {}
