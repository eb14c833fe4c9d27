"""Time codec between integer milliseconds and subtitle clock strings.

WHY: Both the parser and the serializers need to move between millisecond
offsets and two textual clocks: SRT's ``HH:MM:SS,mmm`` and ASS's
``H:MM:SS.cc``. Repeated decode/encode cycles must be idempotent to the
millisecond, so everything here is exact integer arithmetic.

HOW: Decoders match a strict regular expression and combine the fields
with integer math. Encoders use floor division and modulo only.

RULES:
- No floats anywhere: ``//`` and ``%`` only
- SRT clock: hours/minutes/seconds zero-padded to 2 digits, 3-digit ms;
  hours widen past 2 digits rather than wrapping
- ASS clock: hour never padded, minutes/seconds/centiseconds 2 digits;
  encoding floors to the centisecond
- Malformed strings and negative values raise InvalidTimestamp
"""

from __future__ import annotations

import re

from subtitle_converter.errors import InvalidTimestamp

SRT_TIME_RE = re.compile(r"^(\d+):(\d{1,2}):(\d{1,2}),(\d{3})$")
ASS_TIME_RE = re.compile(r"^(\d+):(\d{2}):(\d{2})\.(\d{2})$")


def _check_clock_fields(value: str, minutes: int, seconds: int) -> None:
    if minutes >= 60 or seconds >= 60:
        raise InvalidTimestamp(value, "minutes/seconds out of range")


def srt_time_to_ms(value: str) -> int:
    """Decode an SRT ``HH:MM:SS,mmm`` clock into milliseconds.

    Args:
        value: Clock string, e.g. ``"00:00:03,120"``. Surrounding
               whitespace is ignored.

    Returns:
        ``((HH*3600 + MM*60 + SS) * 1000) + mmm``.

    Raises:
        InvalidTimestamp: If the string does not match the clock format.
    """
    if not isinstance(value, str):
        raise InvalidTimestamp(value, "timestamp must be a string")
    match = SRT_TIME_RE.match(value.strip())
    if match is None:
        raise InvalidTimestamp(value)
    hours, minutes, seconds, millis = (int(g) for g in match.groups())
    _check_clock_fields(value, minutes, seconds)
    return ((hours * 3600 + minutes * 60 + seconds) * 1000) + millis


def ms_to_srt_time(ms: int) -> str:
    """Encode milliseconds as an SRT ``HH:MM:SS,mmm`` clock."""
    if ms < 0:
        raise InvalidTimestamp(ms, "negative time")
    total_sec, millis = divmod(ms, 1000)
    total_min, secs = divmod(total_sec, 60)
    hours, minutes = divmod(total_min, 60)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


def ms_to_ass_time(ms: int) -> str:
    """Encode milliseconds as an ASS ``H:MM:SS.cc`` clock.

    HOW: ``cs = ms // 10`` first, then every field is derived from the
    centisecond total, so sub-centisecond remainders are floored away.
    """
    if ms < 0:
        raise InvalidTimestamp(ms, "negative time")
    cs = ms // 10
    cc = cs % 100
    total_sec = cs // 100
    ss = total_sec % 60
    total_min = total_sec // 60
    mm = total_min % 60
    hh = total_min // 60
    return "{}:{:02d}:{:02d}.{:02d}".format(hh, mm, ss, cc)


def ass_time_to_ms(value: str) -> int:
    """Decode an ASS ``H:MM:SS.cc`` clock into milliseconds (10 ms steps)."""
    if not isinstance(value, str):
        raise InvalidTimestamp(value, "timestamp must be a string")
    match = ASS_TIME_RE.match(value.strip())
    if match is None:
        raise InvalidTimestamp(value)
    hours, minutes, seconds, centis = (int(g) for g in match.groups())
    _check_clock_fields(value, minutes, seconds)
    return ((hours * 3600 + minutes * 60 + seconds) * 100 + centis) * 10
