"""Millisecond timestamps and durations with their text and JSON forms."""

from __future__ import annotations

import json
import re
import time as _time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Union

SECOND = 1000
"""Number of timestamp ticks (milliseconds) in one second."""

NANOS_PER_TICK = 1_000_000
"""Number of nanoseconds in one timestamp tick."""

_DOT_PRECISION = 3
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_INT_RE = re.compile(r"[+-]?[0-9]+")
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_NANOSECOND = 1
_MICROSECOND = 1000 * _NANOSECOND
_MILLISECOND = 1000 * _MICROSECOND
_SECOND_NS = 1000 * _MILLISECOND
_MINUTE_NS = 60 * _SECOND_NS
_HOUR_NS = 60 * _MINUTE_NS
_DAY_NS = 24 * _HOUR_NS

# Units must appear from biggest to smallest, so each has a position.
_UNITS = {
    "ms": (7, _MILLISECOND),
    "s": (6, _SECOND_NS),
    "m": (5, _MINUTE_NS),
    "h": (4, _HOUR_NS),
    "d": (3, _DAY_NS),
    "w": (2, 7 * _DAY_NS),
    "y": (1, 365 * _DAY_NS),
}

DurationLike = Union[timedelta, int]


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _timedelta_nanos(td: timedelta) -> int:
    return (td.days * 86400 + td.seconds) * _SECOND_NS + td.microseconds * _MICROSECOND


def _to_nanos(d: DurationLike) -> int:
    if isinstance(d, timedelta):
        return _timedelta_nanos(d)
    if isinstance(d, bool) or not isinstance(d, int):
        raise TypeError(f"expected a timedelta or nanoseconds, got {type(d).__name__}")
    return int(d)


def _format_float_f(x: float) -> str:
    """Shortest decimal text of ``x`` without an exponent."""
    text = format(Decimal(repr(float(x))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {_quote(text)}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {_quote(text)}")
    return value


class Time(int):
    """Milliseconds since the Unix epoch, excluding leap seconds."""

    @classmethod
    def now(cls) -> "Time":
        """Return the current time."""
        return cls.from_unix_nano(_time.time_ns())

    @classmethod
    def from_unix(cls, t: int) -> "Time":
        """Return the Time for a Unix time in seconds."""
        return cls(int(t) * SECOND)

    @classmethod
    def from_unix_nano(cls, t: int) -> "Time":
        """Return the Time for a Unix time in nanoseconds."""
        return cls(_trunc_div(int(t), NANOS_PER_TICK))

    def equal(self, o: int) -> bool:
        """Return True if both times are the same instant."""
        return int(self) == int(o)

    def before(self, o: int) -> bool:
        """Return True if this time is before ``o``."""
        return int(self) < int(o)

    def after(self, o: int) -> bool:
        """Return True if this time is after ``o``."""
        return int(self) > int(o)

    def add(self, d: DurationLike) -> "Time":
        """Return this time plus a timedelta or a number of nanoseconds."""
        return Time(int(self) + _trunc_div(_to_nanos(d), NANOS_PER_TICK))

    def sub(self, o: int) -> timedelta:
        """Return the time elapsed from ``o`` to this time."""
        return timedelta(milliseconds=int(self) - int(o))

    def to_datetime(self) -> datetime:
        """Return the time as an aware datetime in UTC."""
        return _EPOCH + timedelta(milliseconds=int(self))

    def unix(self) -> int:
        """Return the time in whole seconds since the epoch."""
        return _trunc_div(int(self), SECOND)

    def unix_nano(self) -> int:
        """Return the time in nanoseconds since the epoch."""
        return int(self) * NANOS_PER_TICK

    def __str__(self) -> str:
        return _format_float_f(float(int(self)) / float(SECOND))

    def __repr__(self) -> str:
        return f"Time({int(self)})"

    def to_json(self) -> str:
        """Return the JSON number text of the time, in seconds."""
        return str(self)

    @classmethod
    def from_json(cls, data: Union[str, bytes, bytearray, int, float, Decimal]) -> "Time":
        """Parse a JSON number of seconds with up to millisecond precision."""
        if isinstance(data, (bytes, bytearray)):
            text = bytes(data).decode("utf-8")
        elif isinstance(data, bool):
            raise TypeError("a boolean is not a time")
        elif isinstance(data, int):
            text = str(data)
        elif isinstance(data, Decimal):
            text = format(data, "f")
        elif isinstance(data, float):
            text = _format_float_f(data)
        else:
            text = data

        parts = text.split(".")
        if len(parts) == 1:
            return cls(_parse_int64(parts[0]) * SECOND)
        if len(parts) == 2:
            whole = _parse_int64(parts[0]) * SECOND
            frac = parts[1]
            missing = _DOT_PRECISION - len(frac)
            if missing < 0:
                frac = frac[:_DOT_PRECISION]
            elif missing > 0:
                frac += "0" * missing
            total = whole + _parse_int64(frac)
            # A leading "-0" loses its sign when parsed; restore it.
            if parts[0].startswith("-") and total > 0:
                return cls(-total)
            return cls(total)
        raise ValueError(f"invalid time {_quote(text)}")


EARLIEST = Time(_INT64_MIN)
"""The earliest representable time."""

LATEST = Time(_INT64_MAX)
"""The latest representable time."""


@dataclass(frozen=True)
class Interval:
    """An interval between two timestamps."""

    start: Time
    end: Time


class Duration(int):
    """A span of time in nanoseconds, written as e.g. ``1d2h``."""

    def to_timedelta(self) -> timedelta:
        """Return the duration as a timedelta, truncated to microseconds."""
        return timedelta(microseconds=_trunc_div(int(self), _MICROSECOND))

    def __str__(self) -> str:
        ms = _trunc_div(int(self), _MILLISECOND)
        if ms == 0:
            return "0s"
        pieces = []

        def take(unit: str, mult: int, exact: bool) -> None:
            nonlocal ms
            if exact and ms % mult != 0:
                return
            count = _trunc_div(ms, mult)
            if count > 0:
                pieces.append(f"{count}{unit}")
                ms -= count * mult

        # Years and weeks only when exact: 90d reads better than 12w6d.
        take("y", 1000 * 60 * 60 * 24 * 365, True)
        take("w", 1000 * 60 * 60 * 24 * 7, True)
        take("d", 1000 * 60 * 60 * 24, False)
        take("h", 1000 * 60 * 60, False)
        take("m", 1000 * 60, False)
        take("s", 1000, False)
        take("ms", 1, False)
        return "".join(pieces)

    def __repr__(self) -> str:
        return f"Duration({str(self)!r})"

    def to_json(self) -> str:
        """Return the duration as a JSON string."""
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data: Union[str, bytes, bytearray]) -> "Duration":
        """Parse a duration from JSON string text."""
        decoded = json.loads(data)
        if not isinstance(decoded, str):
            raise ValueError("duration must be a JSON string")
        return cls(parse_duration(decoded))


def parse_duration(s: str) -> Duration:
    """Parse a duration such as ``1w2d``; a year is 365d, a week 7d, a day 24h."""
    if s == "0":
        return Duration(0)
    if s == "":
        raise ValueError("empty duration string")

    original = s
    total = 0
    last_pos = 0
    digits = "0123456789"
    while s:
        if s[0] not in digits:
            raise ValueError(f"not a valid duration string: {_quote(original)}")
        i = 0
        while i < len(s) and s[i] in digits:
            i += 1
        value = int(s[:i])
        if value > (1 << 64) - 1:
            raise ValueError(f"not a valid duration string: {_quote(original)}")
        s = s[i:]

        i = 0
        while i < len(s) and s[i] not in digits:
            i += 1
        if i == 0:
            raise ValueError(f"not a valid duration string: {_quote(original)}")
        unit_text, s = s[:i], s[i:]
        unit = _UNITS.get(unit_text)
        if unit is None:
            raise ValueError(f"unknown unit {_quote(unit_text)} in duration {_quote(original)}")
        pos, mult = unit
        if pos <= last_pos:
            raise ValueError(f"not a valid duration string: {_quote(original)}")
        last_pos = pos
        if value > (1 << 63) // mult:
            raise ValueError("duration out of range")
        total += value * mult
        if total > _INT64_MAX:
            raise ValueError("duration out of range")
    return Duration(total)