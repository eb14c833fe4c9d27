"""Error types shared by the parser, codec, converter and HTTP layer.

WHY: The conversion pipeline recovers from most bad input locally (dropped
blocks, synthetic indices), but a few failures must reach the caller:
malformed timestamps inside the codec and I/O failures at the file boundary.
Giving them explicit types keeps garbage values from leaking downstream.

HOW: InvalidTimestamp is a ValueError subclass raised by the time codec.
ConversionError is the single exception that crosses the converter boundary;
it carries an ErrorCode so the CLI and API can report failures uniformly.

RULES:
- The codec raises InvalidTimestamp, never returns a partial number
- The parser catches InvalidTimestamp and drops the offending block
- Only ConversionError is raised out of converter.convert_file()
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class InvalidTimestamp(ValueError):
    """A clock string (or millisecond value) the time codec cannot handle."""

    def __init__(self, value: Any, reason: str = "malformed timestamp") -> None:
        self.value = value
        self.reason = reason
        super().__init__("{}: {!r}".format(reason, value))


class ErrorCode(str, Enum):
    """Failure categories reported to the presentation layer."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    READ_FAILED = "READ_FAILED"
    OUTPUT_WRITE_FAILED = "OUTPUT_WRITE_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"


class ConversionError(Exception):
    """A conversion that failed as a whole.

    Attributes:
        code: ErrorCode describing the failure category.
        message: Human-readable summary.
        details: Optional low-level detail (OS error text, path, etc.).
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[str] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details:
            data["details"] = self.details
        return data
