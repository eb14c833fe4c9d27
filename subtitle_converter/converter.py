"""Conversion pipeline, the boundary used by the CLI and the HTTP API.

WHY: After the transcription engine reports success, its SRT output has
to become the subtitle file the user asked for, plus a short preview and
a granularity consistency report. This module wires the pure core pieces
to file I/O behind one call.

HOW: convert_text() is the pure path: parse → SubtitleDocument → serialize.
convert_file() adds reading the engine's SRT, resolving the output path,
the atomic write, the preview projection and the overlong-cue check.

RULES:
- Only ConversionError escapes convert_file()
- Output is written all-or-nothing (output.write_atomic)
- Overlong cues for the chosen granularity are reported, not fatal
- The karaoke flag is ignored for SRT output
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from subtitle_converter.config import SUPPORTED_INPUT_SUFFIXES
from subtitle_converter.core.granularity import (
    GranularityPreset,
    check_caption_lengths,
    resolve_granularity,
)
from subtitle_converter.core.ir import Cue, SubtitleDocument, SubtitleFormat
from subtitle_converter.core.parser import parse_srt, parse_srt_file
from subtitle_converter.core.preview import PreviewItem, build_preview
from subtitle_converter.errors import ConversionError, ErrorCode
from subtitle_converter.formatters import get_formatter, serialize
from subtitle_converter.output import resolve_output_path, sanitize_base_name, write_atomic

logger = logging.getLogger(__name__)


@dataclass
class ConversionRequest:
    """Everything needed to convert one engine transcript.

    Attributes:
        srt_path: The engine's SRT output.
        output_path: Explicit destination; when None a free name next to
                     ``output_dir`` (or the source) is chosen.
        format: Target subtitle format.
        karaoke: Emit per-word ``\\k`` tags (ASS only).
        granularity: Preset the engine was run with (for the consistency check).
        output_dir: Directory for an automatically named output file.
        base_name: Stem for an automatically named output file; sanitized.
    """

    srt_path: Path
    output_path: Optional[Path] = None
    format: SubtitleFormat = SubtitleFormat.srt
    karaoke: bool = False
    granularity: Union[GranularityPreset, str, None] = None
    output_dir: Optional[Path] = None
    base_name: Optional[str] = None


@dataclass
class ConversionResult:
    """Outcome of a successful conversion."""

    output_path: Path
    format: SubtitleFormat
    karaoke: bool
    granularity: GranularityPreset
    cue_count: int
    preview: List[PreviewItem] = field(default_factory=list)
    overlong_cues: List[int] = field(default_factory=list)


def convert_text(
    content: str,
    subtitle_format: Union[SubtitleFormat, str] = SubtitleFormat.srt,
    karaoke: bool = False,
) -> Tuple[SubtitleDocument, str]:
    """Parse SRT text and serialize it to the requested format.

    Returns:
        The parsed document and the serialized file text.

    Raises:
        ValueError: If ``subtitle_format`` is not a known format.
    """
    fmt = SubtitleFormat(subtitle_format)
    document = SubtitleDocument(
        cues=parse_srt(content),
        format=fmt,
        karaoke=karaoke and fmt is SubtitleFormat.ass,
    )
    return document, serialize(document)


def default_output_path(
    srt_path: Path,
    subtitle_format: Union[SubtitleFormat, str],
    output_dir: Optional[Path] = None,
    base_name: Optional[str] = None,
) -> Path:
    """Pick a free ``{stem}.{ext}`` path for the converted file."""
    formatter = get_formatter(subtitle_format)
    stem = sanitize_base_name(base_name) if base_name else ""
    if not stem:
        stem = srt_path.stem
    directory = output_dir if output_dir is not None else srt_path.parent
    return resolve_output_path(stem, formatter.suffix, directory)


def _overlong_indices(cues: List[Cue], preset: GranularityPreset) -> List[int]:
    overlong = check_caption_lengths(cues, preset)
    if overlong:
        logger.warning(
            "%d cue(s) exceed the %s caption length: %s",
            len(overlong),
            preset.value,
            ", ".join(str(c.index) for c in overlong[:10]),
        )
    return [c.index for c in overlong]


def convert_file(
    request: ConversionRequest,
    preview_limit: Optional[int] = None,
) -> ConversionResult:
    """Convert the engine's SRT file into the requested subtitle file.

    Args:
        request: Source, destination and format options.
        preview_limit: Preview size (default: config.PREVIEW_LIMIT).

    Returns:
        ConversionResult with the written path, cue count and preview.

    Raises:
        ConversionError: On validation, read or write failure. Nothing is
            left at the destination when a write fails.
    """
    srt_path = Path(request.srt_path)
    if srt_path.suffix.lower() not in SUPPORTED_INPUT_SUFFIXES:
        raise ConversionError(
            ErrorCode.VALIDATION_ERROR,
            "Unsupported transcript type '{}'. Supported: {}".format(
                srt_path.suffix, ", ".join(sorted(SUPPORTED_INPUT_SUFFIXES))
            ),
        )

    try:
        fmt = SubtitleFormat(request.format)
    except ValueError:
        raise ConversionError(
            ErrorCode.VALIDATION_ERROR,
            "Unknown subtitle format '{}'. Available: {}".format(
                request.format, ", ".join(f.value for f in SubtitleFormat)
            ),
        )
    karaoke = bool(request.karaoke) and fmt is SubtitleFormat.ass
    preset = resolve_granularity(request.granularity)

    logger.info("Converting %s to %s (karaoke=%s)", srt_path.name, fmt.value, karaoke)
    cues = parse_srt_file(srt_path)
    logger.info("Parsed %d cues from %s", len(cues), srt_path.name)

    content = serialize(SubtitleDocument(cues=cues, format=fmt, karaoke=karaoke))

    if request.output_path is not None:
        output_path = Path(request.output_path)
    else:
        output_path = default_output_path(
            srt_path, fmt, request.output_dir, request.base_name
        )
    write_atomic(output_path, content)
    logger.info("Saved %s", output_path)

    return ConversionResult(
        output_path=output_path,
        format=fmt,
        karaoke=karaoke,
        granularity=preset,
        cue_count=len(cues),
        preview=build_preview(cues, preview_limit),
        overlong_cues=_overlong_indices(cues, preset),
    )
