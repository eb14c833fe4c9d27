"""Granularity presets controlling how densely speech is split into cues.

WHY: The transcription engine (whisper.cpp) is run with a maximum caption
length and a split-on-word flag chosen from a small preset list. The
converter reproduces that table so callers can display which engine
arguments a preset maps to, and can check that the produced cues respect it.

HOW: GRANULARITY_PRESETS is a read-only mapping from GranularityPreset to
a frozen GranularitySettings. resolve_granularity() turns user input into
a preset with a MEDIUM fallback.

RULES:
- Presets are frozen constants; the mapping is a MappingProxyType
- max_caption_chars of None means unbounded (engine gets no -ml flag)
- Unknown or missing preset names fall back to MEDIUM, never raise
- check_caption_lengths() reports, it never rejects a document
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from subtitle_converter.core.ir import Cue

logger = logging.getLogger(__name__)


class GranularityPreset(str, Enum):
    """Segmentation density, from dense captions (LOW) to very short ones (ULTRA)."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    ULTRA = "ULTRA"


@dataclass(frozen=True)
class GranularitySettings:
    """Engine segmentation parameters for one preset.

    Attributes:
        max_caption_chars: Maximum characters per caption, or None for unbounded.
        split_on_word: True if the engine may only split on word boundaries.
    """

    max_caption_chars: Optional[int]
    split_on_word: bool


GRANULARITY_PRESETS: Mapping[GranularityPreset, GranularitySettings] = MappingProxyType({
    GranularityPreset.LOW: GranularitySettings(max_caption_chars=None, split_on_word=False),
    GranularityPreset.MEDIUM: GranularitySettings(max_caption_chars=42, split_on_word=True),
    GranularityPreset.HIGH: GranularitySettings(max_caption_chars=28, split_on_word=True),
    GranularityPreset.ULTRA: GranularitySettings(max_caption_chars=18, split_on_word=True),
})

DEFAULT_PRESET = GranularityPreset.MEDIUM


def resolve_granularity(
    value: Union[GranularityPreset, str, None],
) -> GranularityPreset:
    """Resolve a preset or preset name, falling back to MEDIUM.

    Names are matched case-insensitively, so ``"high"`` resolves to HIGH.
    """
    if isinstance(value, GranularityPreset):
        return value
    if isinstance(value, str):
        try:
            return GranularityPreset(value.strip().upper())
        except ValueError:
            logger.debug("Unknown granularity preset %r; using %s", value, DEFAULT_PRESET.value)
    return DEFAULT_PRESET


def get_settings(value: Union[GranularityPreset, str, None]) -> GranularitySettings:
    return GRANULARITY_PRESETS[resolve_granularity(value)]


def engine_arguments(value: Union[GranularityPreset, str, None]) -> List[str]:
    """Return the whisper.cpp CLI flags the engine is run with for a preset.

    HOW: ``-ml N`` is added only for bounded presets and ``--split-on-word``
    only when the preset splits on word boundaries.

    Example:
        >>> engine_arguments("HIGH")
        ['-ml', '28', '--split-on-word']
    """
    settings = get_settings(value)
    args: List[str] = []
    if settings.max_caption_chars:
        args.extend(["-ml", str(settings.max_caption_chars)])
    if settings.split_on_word:
        args.append("--split-on-word")
    return args


def check_caption_lengths(
    cues: List[Cue],
    value: Union[GranularityPreset, str, None],
) -> List[Cue]:
    """Return the cues whose longest line exceeds the preset's caption limit.

    WHY: The engine's ``-ml`` limit is a soft target (a single long word can
    exceed it). Surfacing overlong cues lets the caller show that the output
    is not consistent with the chosen preset without failing the conversion.

    RULES:
    - Unbounded presets (LOW) always return an empty list
    - Length is measured per display line, after stripping whitespace
    """
    limit = get_settings(value).max_caption_chars
    if not limit:
        return []
    return [
        cue for cue in cues
        if any(len(line.strip()) > limit for line in cue.lines)
    ]
