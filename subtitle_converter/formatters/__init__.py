"""Output formatter registry, the pluggable format hub.

WHY: The CLI, converter and API layers need a single lookup to find the
right formatter by name. A central dict makes it trivial to add new
formats: create the formatter class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
get_formatter() picks the class for a SubtitleFormat plus karaoke flag,
and serialize() renders a whole SubtitleDocument.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API responses)
- Values are BaseFormatter subclasses (not instances)
- The karaoke flag only changes the ASS formatter; SRT ignores it
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from subtitle_converter.core.ir import SubtitleDocument, SubtitleFormat
from subtitle_converter.formatters.ass import ASSFormatter, KaraokeASSFormatter
from subtitle_converter.formatters.srt import SRTFormatter

if TYPE_CHECKING:
    from subtitle_converter.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "srt": SRTFormatter,
    "ass": ASSFormatter,
    "ass_karaoke": KaraokeASSFormatter,
}


def get_formatter(
    subtitle_format: Union[SubtitleFormat, str],
    karaoke: bool = False,
) -> BaseFormatter:
    """Instantiate the formatter for an output format.

    Raises:
        ValueError: If the format is not a known SubtitleFormat value.
    """
    fmt = SubtitleFormat(subtitle_format)
    if fmt is SubtitleFormat.ass and karaoke:
        return FORMATTERS["ass_karaoke"]()
    return FORMATTERS[fmt.value]()


def serialize(document: SubtitleDocument) -> str:
    """Render a SubtitleDocument to the complete file text."""
    formatter = get_formatter(document.format, document.karaoke)
    return formatter.format(document.cues).content
