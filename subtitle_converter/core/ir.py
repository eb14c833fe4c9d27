"""Intermediate representation dataclasses for parsed subtitle documents.

WHY: The transcription engine writes a flat SRT file. Every output
format (SRT, plain ASS, karaoke ASS) and the preview need the same
typed cue list, so the IR decouples parsing from serialization.

HOW: Small dataclasses form the model:
  Cue               one timed caption (index, start/end ms, text)
  KaraokeWord       one word with its karaoke duration in centiseconds
  SubtitleFormat    closed set of output formats (srt, ass)
  SubtitleDocument  an ordered cue list plus the chosen output format

RULES:
- All times are integer milliseconds; never floats
- Cue and KaraokeWord are frozen value objects; transformations derive
  new values instead of mutating cues in place
- Cue.text keeps embedded "\\n" for multi-line captions
- end_ms >= start_ms always holds for cues built by the parser
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass(frozen=True)
class Cue:
    """A single timed caption from a sequential-cue transcript.

    RULES:
    - index: 1-based, monotonic within a document
    - start_ms / end_ms: integer milliseconds, end_ms >= start_ms
    - text: caption text, lines separated by "\\n"
    """

    index: int
    start_ms: int
    end_ms: int
    text: str

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms

    @property
    def lines(self) -> List[str]:
        """Caption text split into display lines."""
        return self.text.split("\n") if self.text else []


@dataclass(frozen=True)
class KaraokeWord:
    """One word of a karaoke line with its highlight duration."""

    word: str
    duration_cs: int


class SubtitleFormat(str, Enum):
    """Output subtitle formats.

    srt is the sequential numbered-cue format; ass is the style-sheet
    event format (plain or karaoke-tagged).
    """

    srt = "srt"
    ass = "ass"


@dataclass
class SubtitleDocument:
    """The unit a formatter serializes: cues plus the chosen output format.

    RULES:
    - cues: in encounter order (the parser never re-sorts)
    - karaoke: only meaningful for SubtitleFormat.ass
    """

    cues: List[Cue] = field(default_factory=list)
    format: SubtitleFormat = SubtitleFormat.srt
    karaoke: bool = False
