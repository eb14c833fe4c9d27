"""Configuration constants, ASS style profile, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The preview size, default output format, default
granularity and the hardcoded ASS style profile are plain data, not
buried in logic, so both humans and coding agents can modify them
confidently.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values read from the environment with sensible defaults.
load_int_setting() gives a clear error when an integer setting is invalid.

RULES:
- All defaults can be overridden via SUBTITLE_* environment variables
- SUPPORTED_INPUT_SUFFIXES lists accepted transcript file extensions
- ASS style values are emitted verbatim into the [V4+ Styles] section
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()


def load_int_setting(name: str, default: int) -> int:
    """Read an integer setting from the environment.

    RULES:
    - Missing or blank values return ``default``
    - Non-integer values raise ValueError naming the variable
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer, got '{}'. Fix the value in the .env file.".format(name, raw)
        )


# ---------------------------------------------------------------------------
# Conversion defaults
# ---------------------------------------------------------------------------

PREVIEW_LIMIT = load_int_setting("SUBTITLE_PREVIEW_LIMIT", 20)
"""Number of cues included in a preview projection."""

DEFAULT_GRANULARITY = os.getenv("SUBTITLE_DEFAULT_GRANULARITY", "MEDIUM").strip().upper()
DEFAULT_OUTPUT_FORMAT = os.getenv("SUBTITLE_DEFAULT_FORMAT", "srt").strip().lower()
LOG_LEVEL = os.getenv("SUBTITLE_LOG_LEVEL", "INFO").strip().upper()

SUPPORTED_INPUT_SUFFIXES: set[str] = {".srt"}
"""Transcript file extensions accepted as conversion input (lowercase, with dot)."""

# ---------------------------------------------------------------------------
# ASS style profile (single "Default" style)
# ---------------------------------------------------------------------------

ASS_FONT_NAME = os.getenv("SUBTITLE_ASS_FONT", "Arial")
ASS_FONT_SIZE = load_int_setting("SUBTITLE_ASS_FONT_SIZE", 44)
ASS_PRIMARY_COLOUR = "&H00FFFFFF"
ASS_SECONDARY_COLOUR = "&H000000FF"
ASS_OUTLINE_COLOUR = "&H00101010"
ASS_BACK_COLOUR = "&H64000000"
ASS_MARGIN_L = 40
ASS_MARGIN_R = 40
ASS_MARGIN_V = 30
