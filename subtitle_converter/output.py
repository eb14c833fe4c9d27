"""Output path resolution and all-or-nothing file writes.

WHY: A conversion must either produce a complete subtitle file or leave
nothing behind. Writing straight to the destination could leave a truncated
file if the process dies or the disk fills up halfway.

HOW: write_atomic() writes to a temporary file in the destination directory
and moves it into place with os.replace(), which is atomic on the same
filesystem. resolve_output_path() picks a free ``{stem}{suffix}`` name,
adding ``-2``, ``-3``… on conflicts.

RULES:
- The temporary file lives next to the target (same filesystem)
- On any failure the temporary file is removed and ConversionError raised
- Text is written as UTF-8 with "\\n" line endings, no translation
- The file gets the replaced target's mode, or the usual umask-based mode
"""

from __future__ import annotations

import logging
import os
import re
import stat
import tempfile
from pathlib import Path
from typing import Union

from subtitle_converter.errors import ConversionError, ErrorCode

logger = logging.getLogger(__name__)

_UNSAFE_NAME_RE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_base_name(name: str) -> str:
    """Strip characters that are invalid in file names and collapse whitespace.

    Example:
        >>> sanitize_base_name('  my: "episode"  01 ')
        'my episode 01'
    """
    cleaned = _UNSAFE_NAME_RE.sub("", name.strip())
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def resolve_output_path(stem: str, suffix: str, output_dir: Path) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. interview.srt)
    - Conflict: counter inserted before the extension (interview-2.srt)
    - Counter starts at 2 and increments
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    counter = 2
    while True:
        candidate = output_dir / "{}-{}{}".format(stem, counter, suffix)
        if not candidate.exists():
            return candidate
        counter += 1


def _target_mode(path: Path) -> int:
    """Mode for the written file: the existing target's, else 0o666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomic(path: Union[str, Path], content: str) -> Path:
    """Write text to ``path`` via a temporary file and an atomic rename.

    Args:
        path: Destination file path. Its directory must already exist.
        content: Complete file content.

    Returns:
        The destination path.

    Raises:
        ConversionError: PERMISSION_DENIED or OUTPUT_WRITE_FAILED. No
            partial file is left at ``path`` or in its directory.
    """
    path = Path(path)

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=".{}.".format(path.name), suffix=".tmp", dir=str(path.parent)
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
        tmp_name = None
    except PermissionError as exc:
        raise ConversionError(
            ErrorCode.PERMISSION_DENIED,
            "Permission denied writing {}".format(path),
            details=str(exc),
        )
    except OSError as exc:
        raise ConversionError(
            ErrorCode.OUTPUT_WRITE_FAILED,
            "Could not write output file {}".format(path),
            details=str(exc),
        )
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                logger.warning("Failed to remove temporary file: %s", tmp_name)

    logger.debug("Wrote %d characters to %s", len(content), path)
    return path
