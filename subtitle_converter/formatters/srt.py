"""SRT formatter: sequential numbered cues with millisecond timestamps.

WHY: SRT is the interchange format every player and editor accepts. The
engine already writes SRT, but re-serializing the parsed cues normalizes
line endings, indices and spacing after lenient parsing.

HOW: Each cue becomes ``index\\nSTART --> END\\ntext\\n``; blocks are joined
with a single ``\\n`` so exactly one blank line separates them.

RULES:
- Registered as "srt" in the FORMATTERS dict
- Media type: "application/x-subrip"
- Multi-line cue text is written with literal newlines
- An empty cue list produces an empty string
"""

from __future__ import annotations

from typing import Sequence

from subtitle_converter.core.ir import Cue
from subtitle_converter.core.timecodes import ms_to_srt_time
from subtitle_converter.formatters.base import BaseFormatter


def format_srt_block(cue: Cue) -> str:
    """Render one cue as an SRT block (without the separating blank line)."""
    return "{}\n{} --> {}\n{}\n".format(
        cue.index,
        ms_to_srt_time(cue.start_ms),
        ms_to_srt_time(cue.end_ms),
        cue.text,
    )


class SRTFormatter(BaseFormatter):
    """Formatter producing a SubRip (.srt) file."""

    media_type = "application/x-subrip"

    @property
    def name(self) -> str:
        return "SubRip (SRT)"

    @property
    def extension(self) -> str:
        return "srt"

    def render(self, cues: Sequence[Cue]) -> str:
        return "\n".join(format_srt_block(cue) for cue in cues)
