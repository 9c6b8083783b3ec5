"""Float sample values and timestamp/value pairs."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Tuple, Union

from prommodel.timestamps import EARLIEST, Time

JSONText = Union[str, bytes, bytearray]

_DEC_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_RE = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIALS = {
    "inf": math.inf,
    "+inf": math.inf,
    "-inf": -math.inf,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
    "nan": math.nan,
}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name}")


def _loads(data: JSONText) -> Any:
    """Decode JSON text, keeping non-integral numbers exact as Decimal."""
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    return json.loads(data, parse_float=Decimal, parse_constant=_reject_constant)


def _text(data: JSONText) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8")
    return data


def _parse_float(text: str) -> float:
    """Parse a float the way the exposition formats write it.

    Accepts decimal and hexadecimal (with ``p`` exponent) notation and the
    words Inf, Infinity and NaN in any case; out-of-range values are errors.
    """
    special = _SPECIALS.get(text.lower())
    if special is not None:
        return special
    if _DEC_RE.fullmatch(text):
        value = float(text)
    elif _HEX_RE.fullmatch(text):
        try:
            value = float.fromhex(text)
        except OverflowError:
            raise ValueError(f"parsing {text!r}: value out of range") from None
    else:
        raise ValueError(f"parsing {text!r}: invalid syntax")
    if math.isinf(value):
        raise ValueError(f"parsing {text!r}: value out of range")
    return value


def _parse_quoted_float(data: JSONText, what: str) -> float:
    text = _text(data)
    if len(text) < 2 or text[0] != '"' or text[-1] != '"':
        raise ValueError(f"{what} must be a quoted string")
    return _parse_float(text[1:-1])


def _decoded_float(obj: Any, what: str) -> float:
    if not isinstance(obj, str):
        raise ValueError(f"{what} must be a quoted string")
    return _parse_float(obj)


def _shortest_digits(x: float) -> Tuple[bool, str, int]:
    """Return sign, shortest significant digits and decimal point position of ``x``."""
    sign, digit_tuple, exponent = Decimal(repr(float(x))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    return bool(sign), stripped, len(stripped) + exponent


def _special_text(x: float) -> Union[str, None]:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    return None


def _plain_digits(digits: str, dp: int) -> str:
    if dp <= 0:
        return "0." + "0" * (-dp) + digits
    if dp >= len(digits):
        return digits + "0" * (dp - len(digits))
    return digits[:dp] + "." + digits[dp:]


def format_float(v: float) -> str:
    """Shortest decimal text of ``v`` without exponent; ``+Inf``, ``-Inf``, ``NaN``."""
    special = _special_text(v)
    if special is not None:
        return special
    negative, digits, dp = _shortest_digits(v)
    body = "0" if not digits else _plain_digits(digits, dp)
    return ("-" if negative else "") + body


def _format_g(v: float) -> str:
    """Shortest text of ``v``, switching to exponent form for large or tiny values."""
    special = _special_text(v)
    if special is not None:
        return special
    negative, digits, dp = _shortest_digits(v)
    prefix = "-" if negative else ""
    if not digits:
        return prefix + "0"
    exp = dp - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    return prefix + _plain_digits(digits, dp)


def _format_fixed6(v: float) -> str:
    special = _special_text(v)
    if special is not None:
        return special
    return f"{v:.6f}"


def _decoded_time(obj: Any) -> Time:
    if obj is None:
        return Time(0)
    if isinstance(obj, bool) or not isinstance(obj, (int, float, Decimal)):
        raise ValueError("timestamp must be a JSON number")
    return Time.from_json(obj)


class SampleValue(float):
    """The value of a sample at a given time."""

    def equal(self, o: float) -> bool:
        """Return True if both values are equal or both are NaN."""
        if float(self) == float(o):
            return True
        return math.isnan(self) and math.isnan(o)

    def __str__(self) -> str:
        return format_float(self)

    def to_json(self) -> str:
        """Return the value as a quoted JSON string."""
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data: JSONText) -> "SampleValue":
        """Parse a value from JSON text holding a quoted number."""
        return cls(_parse_quoted_float(data, "sample value"))

    @classmethod
    def _from_decoded(cls, obj: Any) -> "SampleValue":
        return cls(_decoded_float(obj, "sample value"))


@dataclass(frozen=True)
class SamplePair:
    """A sample value paired with a timestamp."""

    timestamp: Time = Time(0)
    value: SampleValue = SampleValue(0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", Time(self.timestamp))
        object.__setattr__(self, "value", SampleValue(self.value))

    def equal(self, o: "SamplePair") -> bool:
        """Return True if timestamps are equal and values equal as by SampleValue.equal."""
        return self is o or (self.value.equal(o.value) and self.timestamp.equal(o.timestamp))

    def __str__(self) -> str:
        return f"{self.value} @[{self.timestamp}]"

    def to_json(self) -> str:
        """Return the pair as a JSON array ``[timestamp,"value"]``."""
        return f"[{self.timestamp.to_json()},{self.value.to_json()}]"

    @classmethod
    def from_json(cls, data: Union[JSONText, list]) -> "SamplePair":
        """Parse a pair from JSON text or an already decoded list."""
        decoded = _loads(data) if isinstance(data, (str, bytes, bytearray)) else data
        if not isinstance(decoded, list):
            raise ValueError("sample pair must be a JSON array")
        timestamp = _decoded_time(decoded[0]) if decoded else Time(0)
        value = SampleValue(0.0)
        if len(decoded) > 1 and decoded[1] is not None:
            value = SampleValue._from_decoded(decoded[1])
        return cls(timestamp, value)


ZERO_SAMPLE_PAIR = SamplePair(EARLIEST, SampleValue(0.0))
"""Marks a non-existing sample pair: timestamp EARLIEST, value 0."""