"""Tests for the conversion pipeline, atomic output and preview.

WHY: convert_file() is what the CLI and the desktop shell call after the
engine finishes. It must either write a complete file or leave nothing
behind, and it must report cue counts and previews accurately.

HOW: Uses pytest's tmp_path for real file I/O and monkeypatch to simulate
write failures.
"""

import os
import stat

import pytest

from subtitle_converter import config
from subtitle_converter import output as output_module
from subtitle_converter.converter import (
    ConversionRequest,
    convert_file,
    convert_text,
    default_output_path,
)
from subtitle_converter.core.granularity import GranularityPreset
from subtitle_converter.core.ir import SubtitleFormat
from subtitle_converter.core.preview import PreviewItem, build_preview
from subtitle_converter.errors import ConversionError, ErrorCode
from subtitle_converter.output import resolve_output_path, sanitize_base_name, write_atomic


class TestConvertText:

    def test_srt(self, sample_srt):
        document, content = convert_text(sample_srt, "srt")
        assert len(document.cues) == 3
        assert content == sample_srt

    def test_ass_karaoke(self, sample_srt):
        document, content = convert_text(sample_srt, SubtitleFormat.ass, karaoke=True)
        assert document.karaoke is True
        assert "{\\k" in content

    def test_karaoke_dropped_for_srt(self, sample_srt):
        document, _ = convert_text(sample_srt, "srt", karaoke=True)
        assert document.karaoke is False

    def test_unknown_format(self, sample_srt):
        with pytest.raises(ValueError):
            convert_text(sample_srt, "vtt")


class TestConvertFile:

    def test_writes_ass_next_to_source(self, sample_srt_file):
        result = convert_file(ConversionRequest(srt_path=sample_srt_file, format=SubtitleFormat.ass))
        assert result.output_path == sample_srt_file.with_suffix(".ass")
        content = result.output_path.read_text(encoding="utf-8")
        assert content.startswith("[Script Info]")
        assert result.cue_count == 3
        assert result.karaoke is False

    def test_srt_output_does_not_overwrite_source(self, sample_srt_file):
        result = convert_file(ConversionRequest(srt_path=sample_srt_file, format=SubtitleFormat.srt))
        assert result.output_path.name == "episode-2.srt"
        assert sample_srt_file.exists()

    def test_explicit_output_path(self, sample_srt_file, tmp_path):
        target = tmp_path / "custom.ass"
        result = convert_file(ConversionRequest(
            srt_path=sample_srt_file,
            output_path=target,
            format=SubtitleFormat.ass,
            karaoke=True,
        ))
        assert result.output_path == target
        assert result.karaoke is True
        assert "{\\k" in target.read_text(encoding="utf-8")

    def test_output_dir_and_base_name(self, sample_srt_file, tmp_path):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        result = convert_file(ConversionRequest(
            srt_path=sample_srt_file,
            format=SubtitleFormat.ass,
            output_dir=out_dir,
            base_name='Ep: "01"',
        ))
        assert result.output_path == out_dir / "Ep 01.ass"

    def test_preview_and_granularity(self, sample_srt_file):
        result = convert_file(
            ConversionRequest(srt_path=sample_srt_file, granularity="ultra"),
            preview_limit=2,
        )
        assert [p.index for p in result.preview] == [1, 2]
        assert result.granularity is GranularityPreset.ULTRA
        assert result.overlong_cues == [2, 3]

    def test_unknown_granularity_falls_back(self, sample_srt_file):
        result = convert_file(ConversionRequest(srt_path=sample_srt_file, granularity="bogus"))
        assert result.granularity is GranularityPreset.MEDIUM

    def test_rejects_non_srt_input(self, tmp_path):
        path = tmp_path / "audio.mp3"
        path.write_bytes(b"\x00")
        with pytest.raises(ConversionError) as exc_info:
            convert_file(ConversionRequest(srt_path=path))
        assert exc_info.value.code is ErrorCode.VALIDATION_ERROR

    def test_rejects_unknown_format(self, sample_srt_file):
        with pytest.raises(ConversionError) as exc_info:
            convert_file(ConversionRequest(srt_path=sample_srt_file, format="vtt"))
        assert exc_info.value.code is ErrorCode.VALIDATION_ERROR

    def test_missing_source(self, tmp_path):
        with pytest.raises(ConversionError) as exc_info:
            convert_file(ConversionRequest(srt_path=tmp_path / "gone.srt"))
        assert exc_info.value.code is ErrorCode.FILE_NOT_FOUND

    def test_failed_write_leaves_nothing(self, sample_srt_file, tmp_path, monkeypatch):
        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(output_module.os, "replace", fail_replace)
        target = tmp_path / "out.ass"
        with pytest.raises(ConversionError) as exc_info:
            convert_file(ConversionRequest(
                srt_path=sample_srt_file, output_path=target, format=SubtitleFormat.ass
            ))
        assert exc_info.value.code is ErrorCode.OUTPUT_WRITE_FAILED
        assert sorted(os.listdir(tmp_path)) == ["episode.srt"]


class TestOutput:

    def test_write_atomic(self, tmp_path):
        path = write_atomic(tmp_path / "a.srt", "line one\nline two\n")
        assert path.read_bytes() == b"line one\nline two\n"

    def test_write_atomic_replaces_existing(self, tmp_path):
        target = tmp_path / "a.srt"
        target.write_text("old", encoding="utf-8")
        write_atomic(target, "new")
        assert target.read_text(encoding="utf-8") == "new"

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_new_file_uses_umask_mode(self, tmp_path):
        old_umask = os.umask(0o022)
        try:
            path = write_atomic(tmp_path / "a.srt", "x")
        finally:
            os.umask(old_umask)
        assert stat.S_IMODE(path.stat().st_mode) == 0o644

    @pytest.mark.skipif(os.name != "posix", reason="POSIX file modes")
    def test_replaced_file_keeps_mode(self, tmp_path):
        target = tmp_path / "a.srt"
        target.write_text("old", encoding="utf-8")
        os.chmod(target, 0o640)
        write_atomic(target, "new")
        assert stat.S_IMODE(target.stat().st_mode) == 0o640

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConversionError) as exc_info:
            write_atomic(tmp_path / "missing" / "a.srt", "x")
        assert exc_info.value.code is ErrorCode.OUTPUT_WRITE_FAILED

    def test_permission_denied(self, tmp_path, monkeypatch):
        def deny(src, dst):
            raise PermissionError("read-only")

        monkeypatch.setattr(output_module.os, "replace", deny)
        with pytest.raises(ConversionError) as exc_info:
            write_atomic(tmp_path / "a.srt", "x")
        assert exc_info.value.code is ErrorCode.PERMISSION_DENIED
        assert os.listdir(tmp_path) == []

    def test_resolve_output_path_conflicts(self, tmp_path):
        (tmp_path / "talk.srt").write_text("x")
        (tmp_path / "talk-2.srt").write_text("x")
        assert resolve_output_path("talk", ".srt", tmp_path) == tmp_path / "talk-3.srt"

    @pytest.mark.parametrize("raw,expected", [
        ("  my: \"episode\"  01 ", "my episode 01"),
        ("a/b\\c|d?e*f<g>h", "abcdefgh"),
        ("tab\there", "tabhere"),
        ("\x00\x01", ""),
    ])
    def test_sanitize_base_name(self, raw, expected):
        assert sanitize_base_name(raw) == expected

    def test_default_output_path_blank_name_uses_stem(self, sample_srt_file):
        path = default_output_path(sample_srt_file, "ass", base_name="???")
        assert path.name == "episode.ass"


class TestPreview:

    def test_limit(self, sample_cues):
        preview = build_preview(sample_cues, 2)
        assert preview == [
            PreviewItem(1, 320, 3120, "Hello world"),
            PreviewItem(2, 3120, 6540, "but a few hours later\nyou could not even start?"),
        ]

    def test_limit_larger_than_document(self, sample_cues):
        assert len(build_preview(sample_cues, 100)) == 3

    def test_non_positive_limit(self, sample_cues):
        assert build_preview(sample_cues, 0) == []
        assert build_preview(sample_cues, -1) == []

    def test_default_limit(self, sample_cues):
        assert len(build_preview(sample_cues * 10)) == min(30, config.PREVIEW_LIMIT)

    def test_source_not_mutated(self, sample_cues):
        before = list(sample_cues)
        build_preview(sample_cues, 1)
        assert sample_cues == before

    def test_to_dict(self):
        item = PreviewItem(1, 320, 3120, "Hello world")
        assert item.to_dict() == {"index": 1, "start_ms": 320, "end_ms": 3120, "text": "Hello world"}
        assert item.to_dict(include_timing=False) == {"index": 1, "text": "Hello world"}
