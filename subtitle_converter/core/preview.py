"""Bounded, read-only preview of a parsed cue list.

WHY: The presentation layer shows a short sample of the generated
subtitles after a conversion. It needs a small, serializable view rather
than the whole document.

RULES:
- Returns at most ``limit`` items, in document order
- A limit of zero or less returns an empty preview
- Never mutates the source list
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from subtitle_converter.config import PREVIEW_LIMIT
from subtitle_converter.core.ir import Cue


@dataclass(frozen=True)
class PreviewItem:
    """One cue as shown in a preview."""

    index: int
    start_ms: int
    end_ms: int
    text: str

    def to_dict(self, include_timing: bool = True) -> Dict[str, Any]:
        """Serialize to ``{index, text}`` or ``{index, start_ms, end_ms, text}``."""
        if not include_timing:
            return {"index": self.index, "text": self.text}
        return {
            "index": self.index,
            "start_ms": self.start_ms,
            "end_ms": self.end_ms,
            "text": self.text,
        }


def build_preview(cues: Sequence[Cue], limit: Optional[int] = None) -> List[PreviewItem]:
    """Project the first ``limit`` cues (default: PREVIEW_LIMIT) into preview items."""
    if limit is None:
        limit = PREVIEW_LIMIT
    if limit <= 0:
        return []
    return [
        PreviewItem(index=c.index, start_ms=c.start_ms, end_ms=c.end_ms, text=c.text)
        for c in cues[:limit]
    ]
