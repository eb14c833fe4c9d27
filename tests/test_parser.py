"""Unit tests for the lenient SRT parser.

WHY: The parser consumes output from a non-deterministic speech
recognition process. It must keep every good cue even when some blocks
are broken, and must never raise for a malformed block.

HOW: Each test feeds a small hand-written SRT string and checks the
resulting Cue list field by field.

RULES:
- Malformed blocks are dropped, the rest survive unchanged
- Corrupt indices are replaced by encounter position
"""

import logging

import pytest

from subtitle_converter.core.ir import Cue
from subtitle_converter.core.parser import parse_srt, parse_srt_file
from subtitle_converter.errors import ConversionError, ErrorCode


class TestWellFormed:

    def test_parses_sample(self, sample_srt, sample_cues):
        assert parse_srt(sample_srt) == sample_cues

    def test_multi_line_text_kept(self, sample_srt):
        cues = parse_srt(sample_srt)
        assert cues[1].lines == ["but a few hours later", "you could not even start?"]

    def test_crlf_input(self, sample_srt, sample_cues):
        assert parse_srt(sample_srt.replace("\n", "\r\n")) == sample_cues

    def test_bom_stripped(self, sample_srt, sample_cues):
        assert parse_srt("\ufeff" + sample_srt) == sample_cues

    def test_runs_of_blank_lines(self):
        content = (
            "1\n00:00:01,000 --> 00:00:02,000\nA\n"
            "\n\n   \n\n"
            "2\n00:00:02,000 --> 00:00:03,000\nB\n"
        )
        cues = parse_srt(content)
        assert [c.text for c in cues] == ["A", "B"]

    def test_text_trimmed(self):
        cues = parse_srt("1\n00:00:01,000 --> 00:00:02,000\n   padded text   \n")
        assert cues[0].text == "padded text"

    def test_block_without_text_is_kept(self):
        cues = parse_srt("1\n00:00:01,000 --> 00:00:02,000\n")
        assert cues == [Cue(index=1, start_ms=1000, end_ms=2000, text="")]

    def test_zero_duration_cue(self):
        cues = parse_srt("1\n00:00:01,000 --> 00:00:01,000\nblip\n")
        assert cues[0].start_ms == cues[0].end_ms == 1000

    def test_empty_input(self):
        assert parse_srt("") == []
        assert parse_srt("\n\n  \n") == []

    def test_not_resorted(self):
        content = (
            "1\n00:00:05,000 --> 00:00:06,000\nlater\n\n"
            "2\n00:00:01,000 --> 00:00:02,000\nearlier\n"
        )
        assert [c.text for c in parse_srt(content)] == ["later", "earlier"]


class TestMalformedBlocks:
    """One bad block among N good ones yields N-1 cues."""

    @pytest.mark.parametrize("bad_block", [
        "garbage",
        "2\nno arrow here\ntext",
        "2\n00:00:01,000 --> 00:00:02,000 --> 00:00:03,000\ntext",
        "2\n00:00:xx,000 --> 00:00:04,000\ntext",
        "2\n00:00:03,000 --> nonsense\ntext",
    ])
    def test_bad_block_dropped(self, bad_block):
        content = (
            "1\n00:00:00,320 --> 00:00:03,120\nHello world\n\n"
            + bad_block + "\n\n"
            "3\n00:00:06,540 --> 00:00:09,880\nGoodbye\n"
        )
        cues = parse_srt(content)
        assert cues == [
            Cue(index=1, start_ms=320, end_ms=3120, text="Hello world"),
            Cue(index=3, start_ms=6540, end_ms=9880, text="Goodbye"),
        ]

    def test_unreadable_timestamp_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="subtitle_converter.core.parser"):
            parse_srt("1\n00:00:xx,000 --> 00:00:04,000\ntext\n")
        assert "unreadable timestamp" in caplog.text

    def test_missing_index_line_drops_block(self):
        # The time line is read as the index and the text as the time line.
        cues = parse_srt("00:00:01,000 --> 00:00:02,000\nHello\n")
        assert cues == []

    def test_end_before_start_is_clamped(self):
        cues = parse_srt("1\n00:00:05,000 --> 00:00:04,000\nbackwards\n")
        assert cues[0].start_ms == 5000
        assert cues[0].end_ms == 5000


class TestIndexRecovery:

    def test_corrupt_indices_renumbered(self):
        content = (
            "abc\n00:00:01,000 --> 00:00:02,000\nA\n\n"
            "-5\n00:00:02,000 --> 00:00:03,000\nB\n\n"
            "0\n00:00:03,000 --> 00:00:04,000\nC\n\n"
            "1.5\n00:00:04,000 --> 00:00:05,000\nD\n"
        )
        assert [c.index for c in parse_srt(content)] == [1, 2, 3, 4]

    def test_only_plain_digits_are_indices(self):
        content = (
            "1_0\n00:00:01,000 --> 00:00:02,000\nA\n\n"
            "+3\n00:00:02,000 --> 00:00:03,000\nB\n\n"
            "1e2\n00:00:03,000 --> 00:00:04,000\nC\n"
        )
        assert [c.index for c in parse_srt(content)] == [1, 3, 3]

    def test_synthetic_index_counts_accepted_cues(self):
        content = (
            "7\n00:00:01,000 --> 00:00:02,000\nA\n\n"
            "dropped\n\n"
            "??\n00:00:02,000 --> 00:00:03,000\nB\n"
        )
        assert [c.index for c in parse_srt(content)] == [7, 2]

    def test_index_whitespace_tolerated(self):
        cues = parse_srt("  12  \n00:00:01,000 --> 00:00:02,000\nA\n")
        assert cues[0].index == 12


class TestParseFile:

    def test_reads_utf8_file(self, sample_srt_file, sample_cues):
        assert parse_srt_file(sample_srt_file) == sample_cues

    def test_reads_bom_file(self, tmp_path, sample_srt, sample_cues):
        path = tmp_path / "bom.srt"
        path.write_bytes(b"\xef\xbb\xbf" + sample_srt.encode("utf-8"))
        assert parse_srt_file(path) == sample_cues

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConversionError) as exc_info:
            parse_srt_file(tmp_path / "nope.srt")
        assert exc_info.value.code is ErrorCode.FILE_NOT_FOUND

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.srt"
        path.write_bytes(b"1\n00:00:01,000 --> 00:00:02,000\nol\xe1\n")
        with pytest.raises(ConversionError) as exc_info:
            parse_srt_file(path)
        assert exc_info.value.code is ErrorCode.READ_FAILED
