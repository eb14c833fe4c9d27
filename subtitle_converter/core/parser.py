"""Lenient SRT parser producing the Cue IR.

WHY: The SRT comes from an external, non-deterministic speech recognition
process. A single bad block must not fail the whole document, so the parser
recovers locally: malformed blocks are dropped and unreadable indices are
replaced with synthetic ones.

HOW: Normalize line endings, split on runs of blank lines, then decode each
block as index line + time-range line + text lines. Timestamps go through
the shared time codec.

RULES:
- Blocks with fewer than 2 lines are dropped silently
- An index that is not a positive integer becomes ``len(accepted) + 1``
- The time line must split into exactly two tokens on ``-->``
- A timestamp the codec rejects drops the block (logged, never raised)
- An end time before the start time is clamped to the start time
- Text is lines 3+ joined with "\\n" and trimmed; may be empty
- Output keeps block-encounter order; nothing is re-sorted
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

from subtitle_converter.core.ir import Cue
from subtitle_converter.core.timecodes import srt_time_to_ms
from subtitle_converter.errors import ConversionError, ErrorCode, InvalidTimestamp

logger = logging.getLogger(__name__)

BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
TIME_ARROW = "-->"
INDEX_RE = re.compile(r"^\+?[0-9]+$")


def _normalize(content: str) -> str:
    """Strip a leading BOM and convert CRLF / CR line endings to LF."""
    if content.startswith("\ufeff"):
        content = content[1:]
    return content.replace("\r\n", "\n").replace("\r", "\n")


def _parse_index(line: str) -> Optional[int]:
    # Plain decimal digits only; int() alone also accepts "1_0".
    line = line.strip()
    if not INDEX_RE.match(line):
        return None
    value = int(line)
    return value if value > 0 else None


def _parse_block(block: str, accepted: int) -> Optional[Cue]:
    """Decode one trimmed block, or return None when it must be dropped.

    Args:
        block: Block text with surrounding blank lines removed.
        accepted: Number of cues accepted so far (for synthetic indices).
    """
    lines = block.split("\n")
    if len(lines) < 2:
        logger.debug("Dropping block with fewer than 2 lines: %r", block)
        return None

    index = _parse_index(lines[0])
    if index is None:
        index = accepted + 1

    times = [part.strip() for part in lines[1].split(TIME_ARROW)]
    if len(times) != 2:
        logger.debug("Dropping block without a valid time range: %r", lines[1])
        return None

    try:
        start_ms = srt_time_to_ms(times[0])
        end_ms = srt_time_to_ms(times[1])
    except InvalidTimestamp as exc:
        logger.warning("Dropping cue %d with unreadable timestamp (%s)", index, exc)
        return None

    if end_ms < start_ms:
        logger.warning(
            "Cue %d ends before it starts (%d < %d ms); clamping end", index, end_ms, start_ms
        )
        end_ms = start_ms

    text = "\n".join(lines[2:]).strip()
    return Cue(index=index, start_ms=start_ms, end_ms=end_ms, text=text)


def parse_srt(content: str) -> List[Cue]:
    """Parse SRT text into an ordered list of cues.

    Args:
        content: Raw SRT text. CRLF, lone CR and a UTF-8 BOM are accepted.

    Returns:
        Cues in block-encounter order. Never raises for malformed blocks.
    """
    blocks = [b.strip() for b in BLOCK_SPLIT_RE.split(_normalize(content))]

    cues: List[Cue] = []
    dropped = 0
    for block in blocks:
        if not block:
            continue
        cue = _parse_block(block, len(cues))
        if cue is None:
            dropped += 1
            continue
        cues.append(cue)

    if dropped:
        logger.info("Parsed %d cues (%d malformed blocks dropped)", len(cues), dropped)
    return cues


def parse_srt_file(path: Union[str, Path]) -> List[Cue]:
    """Read an SRT file from disk and parse it.

    Raises:
        ConversionError: FILE_NOT_FOUND if the file is missing, READ_FAILED
            if it cannot be read or is not valid UTF-8.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        raise ConversionError(
            ErrorCode.FILE_NOT_FOUND,
            "Transcript file not found: {}".format(path),
        )
    except (OSError, UnicodeDecodeError) as exc:
        raise ConversionError(
            ErrorCode.READ_FAILED,
            "Could not read transcript file: {}".format(path),
            details=str(exc),
        )
    return parse_srt(content)
