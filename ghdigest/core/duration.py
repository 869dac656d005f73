"""Human-readable durations: ``"1 week"``, ``"3d"``, ``"12h 30min"``."""

from __future__ import annotations

import re
from datetime import timedelta

# "<number><unit>" pairs, whitespace optional between and around them.
_PART_RE = re.compile(r"\s*(\d+)\s*([a-zA-Z]+)\s*")

_SECOND = 1
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = int(30.44 * _DAY)
_YEAR = int(365.25 * _DAY)

_UNITS: dict[str, int] = {
    "s": _SECOND,
    "sec": _SECOND,
    "secs": _SECOND,
    "second": _SECOND,
    "seconds": _SECOND,
    "m": _MINUTE,
    "min": _MINUTE,
    "mins": _MINUTE,
    "minute": _MINUTE,
    "minutes": _MINUTE,
    "h": _HOUR,
    "hr": _HOUR,
    "hrs": _HOUR,
    "hour": _HOUR,
    "hours": _HOUR,
    "d": _DAY,
    "day": _DAY,
    "days": _DAY,
    "w": _WEEK,
    "week": _WEEK,
    "weeks": _WEEK,
    "M": _MONTH,
    "month": _MONTH,
    "months": _MONTH,
    "y": _YEAR,
    "year": _YEAR,
    "years": _YEAR,
}

# Largest unit first; used by format_duration.
_FORMAT_UNITS: list[tuple[int, str, str]] = [
    (_DAY, "day", "days"),
    (_HOUR, "h", "h"),
    (_MINUTE, "m", "m"),
    (_SECOND, "s", "s"),
]


def parse_duration(value: str) -> timedelta:
    """Parse a human duration such as ``"1 week"`` or ``"2d 4h"``.

    Units are case-sensitive only for ``m`` (minute) vs ``M`` (month);
    every other unit is matched case-insensitively.

    Raises ValueError on empty, malformed or zero-length input.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")

    total = 0
    pos = 0
    for match in _PART_RE.finditer(text):
        if match.start() != pos:
            break
        amount, unit = int(match.group(1)), match.group(2)
        seconds = _UNITS.get(unit)
        if seconds is None:
            seconds = _UNITS.get(unit.lower())
        if seconds is None:
            raise ValueError(f"unknown time unit {unit!r} in duration {value!r}")
        total += amount * seconds
        pos = match.end()

    if pos != len(text):
        raise ValueError(f"cannot parse duration {value!r}")
    if total == 0:
        raise ValueError(f"duration must be positive: {value!r}")
    return timedelta(seconds=total)


def format_duration(value: timedelta) -> str:
    """Render *value* compactly, e.g. ``7days`` or ``1day 2h 30m``."""
    remaining = int(value.total_seconds())
    if remaining <= 0:
        return "0s"
    parts: list[str] = []
    for size, singular, plural in _FORMAT_UNITS:
        count, remaining = divmod(remaining, size)
        if count:
            parts.append(f"{count}{singular if count == 1 else plural}")
    return " ".join(parts)
