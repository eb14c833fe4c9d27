"""Karaoke segmentation: even distribution of a cue's duration across words.

WHY: Progressive per-word highlighting in ASS needs a ``\\k`` duration for
every word. The engine only gives cue-level timing, so the cue's display
time is split evenly across its words.

HOW: ``total_cs = max(1, duration_ms // 10)``. Each word gets
``base = max(1, total_cs // n)`` centiseconds and the first
``total_cs - base * n`` words get one extra, so the earliest words absorb
the remainder deterministically.

RULES:
- Words are whitespace-separated tokens across all lines of the cue
- A cue with no words produces no karaoke words (empty text)
- Durations sum to total_cs exactly whenever total_cs >= word count
- Every word gets at least 1 cs, so no zero or negative tags are emitted
- Cue timing is never modified
"""

from __future__ import annotations

from typing import List

from subtitle_converter.core.ir import Cue, KaraokeWord

KARAOKE_TAG = "{{\\k{}}}{}"


def total_centiseconds(duration_ms: int) -> int:
    """Display time of a cue in centiseconds, never less than 1."""
    return max(1, duration_ms // 10)


def _distribute(words: List[str], duration_ms: int) -> List[KaraokeWord]:
    if not words:
        return []

    total_cs = total_centiseconds(duration_ms)
    count = len(words)
    base = max(1, total_cs // count)
    remainder = total_cs - base * count

    result: List[KaraokeWord] = []
    for i, word in enumerate(words):
        duration = base + 1 if i < remainder else base
        result.append(KaraokeWord(word=word, duration_cs=duration))
    return result


def split_karaoke_words(text: str, start_ms: int, end_ms: int) -> List[KaraokeWord]:
    """Split cue text into words and assign each a karaoke duration.

    Args:
        text: Cue text, possibly multi-line.
        start_ms: Cue start in milliseconds.
        end_ms: Cue end in milliseconds.

    Returns:
        One KaraokeWord per word, in text order.
    """
    return _distribute(text.split(), end_ms - start_ms)


def render_karaoke(words: List[KaraokeWord]) -> str:
    return " ".join(KARAOKE_TAG.format(w.duration_cs, w.word) for w in words)


def karaoke_text(cue: Cue) -> str:
    """Render a cue's text as ``{\\kNN}word`` tokens joined by single spaces."""
    return render_karaoke(_distribute(cue.text.split(), cue.duration_ms))
