"""ASS formatter: style-sheet event format, plain or karaoke-tagged.

WHY: Video editors and burn-in tools (ffmpeg, Aegisub) need Advanced
SubStation Alpha files, and karaoke-style progressive highlighting is only
expressible there through inline ``\\k`` tags.

HOW: A fixed header (``[Script Info]``, one ``Default`` style under
``[V4+ Styles]``, and the ``[Events]`` format line) is followed by one
``Dialogue:`` line per cue, timed with the centisecond clock. The plain
and karaoke variants differ only in how the event text is derived.

RULES:
- Registered as "ass" (plain) and "ass_karaoke" in the FORMATTERS dict
- Media type: "text/x-ssa"
- Plain text: cue line breaks become the ``\\N`` escape
- Karaoke text: words from the karaoke segmenter, ``{\\kNN}word`` joined
  by single spaces (line breaks collapse into word gaps)
- Every line of the file, including the last, ends with "\\n"
"""

from __future__ import annotations

from typing import List, Sequence

from subtitle_converter import config
from subtitle_converter.core.ir import Cue
from subtitle_converter.core.karaoke import karaoke_text
from subtitle_converter.core.timecodes import ms_to_ass_time
from subtitle_converter.formatters.base import BaseFormatter

ASS_LINE_BREAK = "\\N"

STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, "
    "BackColour, Bold, Italic, Underline, StrikeOut, ScaleX, ScaleY, Spacing, Angle, "
    "BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, MarginV, Encoding"
)
EVENT_FORMAT = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"


def default_style_line() -> str:
    """The single hardcoded ``Default`` style, built from config values."""
    return (
        "Style: Default, {font}, {size}, {primary}, {secondary}, {outline}, {back}, "
        "0, 0, 0, 0, 100, 100, 0, 0, 1, 2, 0, 2, {ml}, {mr}, {mv}, 1"
    ).format(
        font=config.ASS_FONT_NAME,
        size=config.ASS_FONT_SIZE,
        primary=config.ASS_PRIMARY_COLOUR,
        secondary=config.ASS_SECONDARY_COLOUR,
        outline=config.ASS_OUTLINE_COLOUR,
        back=config.ASS_BACK_COLOUR,
        ml=config.ASS_MARGIN_L,
        mr=config.ASS_MARGIN_R,
        mv=config.ASS_MARGIN_V,
    )


def build_header() -> List[str]:
    return [
        "[Script Info]",
        "ScriptType: v4.00+",
        "WrapStyle: 2",
        "ScaledBorderAndShadow: yes",
        "YCbCr Matrix: TV.601",
        "",
        "[V4+ Styles]",
        STYLE_FORMAT,
        default_style_line(),
        "",
        "[Events]",
        EVENT_FORMAT,
    ]


def escape_ass_text(text: str) -> str:
    """Replace line breaks with the ASS ``\\N`` escape."""
    return text.replace("\r\n", "\n").replace("\n", ASS_LINE_BREAK)


def format_dialogue(cue: Cue, text: str) -> str:
    return "Dialogue: 0,{},{},Default,,0,0,0,,{}".format(
        ms_to_ass_time(cue.start_ms),
        ms_to_ass_time(cue.end_ms),
        text,
    )


class ASSFormatter(BaseFormatter):
    """Formatter producing an Advanced SubStation Alpha (.ass) file.

    Args:
        karaoke: When True, event text carries per-word ``\\k`` timing tags
                 instead of the plain escaped cue text.
    """

    media_type = "text/x-ssa"

    def __init__(self, karaoke: bool = False) -> None:
        self.karaoke = karaoke

    @property
    def name(self) -> str:
        return "Advanced SubStation Alpha (karaoke)" if self.karaoke else "Advanced SubStation Alpha"

    @property
    def extension(self) -> str:
        return "ass"

    def event_text(self, cue: Cue) -> str:
        if self.karaoke:
            return karaoke_text(cue)
        return escape_ass_text(cue.text)

    def render(self, cues: Sequence[Cue]) -> str:
        lines = build_header()
        lines.extend(format_dialogue(cue, self.event_text(cue)) for cue in cues)
        return "\n".join(lines) + "\n"


class KaraokeASSFormatter(ASSFormatter):
    """ASS formatter with karaoke tags always enabled (registry entry)."""

    def __init__(self) -> None:
        super().__init__(karaoke=True)
