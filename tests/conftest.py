"""Shared test fixtures for the subtitle_converter test suite.

WHY: Parser, formatter, converter, CLI and API tests all need the same
engine-style SRT transcript and the cue list it parses into. Centralizing
them here keeps every module testing against one authoritative sample.

RULES:
- SAMPLE_SRT mirrors whisper.cpp output: CRLF-free, one blank line between blocks
- SAMPLE_CUES is the exact parse of SAMPLE_SRT
"""

from typing import List

import pytest

from subtitle_converter.core.ir import Cue

SAMPLE_SRT = (
    "1\n"
    "00:00:00,320 --> 00:00:03,120\n"
    "Hello world\n"
    "\n"
    "2\n"
    "00:00:03,120 --> 00:00:06,540\n"
    "but a few hours later\n"
    "you could not even start?\n"
    "\n"
    "3\n"
    "00:00:06,540 --> 00:00:09,880\n"
    "Motivation comes, but it leaves fast.\n"
)

SAMPLE_CUES: List[Cue] = [
    Cue(index=1, start_ms=320, end_ms=3120, text="Hello world"),
    Cue(index=2, start_ms=3120, end_ms=6540, text="but a few hours later\nyou could not even start?"),
    Cue(index=3, start_ms=6540, end_ms=9880, text="Motivation comes, but it leaves fast."),
]


@pytest.fixture
def sample_srt() -> str:
    return SAMPLE_SRT


@pytest.fixture
def sample_cues() -> List[Cue]:
    return list(SAMPLE_CUES)


@pytest.fixture
def sample_srt_file(tmp_path):
    """SAMPLE_SRT written to ``episode.srt`` in a temporary directory."""
    path = tmp_path / "episode.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path
