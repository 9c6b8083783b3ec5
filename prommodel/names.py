"""Validation and escaping of metric and label names."""

from __future__ import annotations

import contextlib
import enum
import re
from dataclasses import dataclass
from typing import Iterator, Union

NameLike = Union[str, bytes, bytearray]

ESCAPING_KEY = "escaping"

ALLOW_UTF8 = "allow-utf-8"
ESCAPE_UNDERSCORES = "underscores"
ESCAPE_DOTS = "dots"
ESCAPE_VALUES = "values"

METRIC_NAME_RE = re.compile(r"[a-zA-Z_:][a-zA-Z0-9_:]*")
"""Pattern of legacy-valid metric names; use with ``fullmatch``."""

_RUNE_ERROR = 0xFFFD


class ValidationScheme(enum.Enum):
    """How metric and label names are validated."""

    LEGACY = "legacy"
    UTF8 = "utf8"


class EscapingScheme(enum.Enum):
    """How names that are not legacy-valid are escaped."""

    NO_ESCAPING = ALLOW_UTF8
    UNDERSCORES = ESCAPE_UNDERSCORES
    DOTS = ESCAPE_DOTS
    VALUES = ESCAPE_VALUES

    def __str__(self) -> str:
        return self.value


@dataclass
class NameSettings:
    """Process-wide defaults for name validation and escaping."""

    validation_scheme: ValidationScheme = ValidationScheme.UTF8
    escaping_scheme: EscapingScheme = EscapingScheme.UNDERSCORES


settings = NameSettings()


@contextlib.contextmanager
def use_validation_scheme(scheme: ValidationScheme) -> Iterator[NameSettings]:
    """Temporarily switch the global name validation scheme."""
    previous = settings.validation_scheme
    settings.validation_scheme = scheme
    try:
        yield settings
    finally:
        settings.validation_scheme = previous


def _as_bytes(name: NameLike) -> bytes:
    if isinstance(name, (bytes, bytearray)):
        return bytes(name)
    try:
        return name.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return name.encode("utf-8", "surrogatepass")


def _runes(name: NameLike) -> Iterator[int]:
    """Yield code points, one replacement character per undecodable byte."""
    for char in _as_bytes(name).decode("utf-8", "surrogateescape"):
        code = ord(char)
        yield _RUNE_ERROR if 0xDC80 <= code <= 0xDCFF else code


def _is_valid_legacy_rune(code: int, index: int) -> bool:
    return (
        ord("a") <= code <= ord("z")
        or ord("A") <= code <= ord("Z")
        or code in (ord("_"), ord(":"))
        or (ord("0") <= code <= ord("9") and index > 0)
    )


def is_valid_utf8(s: NameLike) -> bool:
    """Return True if ``s`` is valid UTF-8 (strings must hold no lone surrogates)."""
    try:
        if isinstance(s, (bytes, bytearray)):
            bytes(s).decode("utf-8")
        else:
            s.encode("utf-8")
    except UnicodeError:
        return False
    return True


def is_valid_legacy_metric_name(n: NameLike) -> bool:
    """Return True if ``n`` matches the legacy metric name pattern."""
    if len(n) == 0:
        return False
    return all(_is_valid_legacy_rune(code, i) for i, code in enumerate(_runes(n)))


def is_valid_metric_name(n: NameLike) -> bool:
    """Validate a metric name according to the global validation scheme."""
    scheme = settings.validation_scheme
    if scheme is ValidationScheme.LEGACY:
        return is_valid_legacy_metric_name(n)
    if scheme is ValidationScheme.UTF8:
        return len(n) > 0 and is_valid_utf8(n)
    raise ValueError(f"invalid name validation scheme requested: {scheme!r}")


def escape_name(name: str, scheme: EscapingScheme) -> str:
    """Escape ``name`` according to ``scheme``; no validation is performed."""
    if not isinstance(scheme, EscapingScheme):
        raise ValueError(f"invalid escaping scheme {scheme!r}")
    if len(name) == 0 or scheme is EscapingScheme.NO_ESCAPING:
        return name

    if scheme is EscapingScheme.UNDERSCORES:
        if is_valid_legacy_metric_name(name):
            return name
        return "".join(
            chr(code) if _is_valid_legacy_rune(code, i) else "_"
            for i, code in enumerate(_runes(name))
        )

    if scheme is EscapingScheme.DOTS:
        parts = []
        for i, code in enumerate(_runes(name)):
            if code == ord("_"):
                parts.append("__")
            elif code == ord("."):
                parts.append("_dot_")
            elif _is_valid_legacy_rune(code, i):
                parts.append(chr(code))
            else:
                parts.append("__")
        return "".join(parts)

    if is_valid_legacy_metric_name(name):
        return name
    parts = ["U__"]
    for i, code in enumerate(_runes(name)):
        if code == ord("_"):
            parts.append("__")
        elif _is_valid_legacy_rune(code, i):
            parts.append(chr(code))
        else:
            parts.append(f"_{code:x}_")
    return "".join(parts)


def _hex_digit(char: str) -> int | None:
    lowered = chr(ord(char) | 0x20)
    if "0" <= lowered <= "9":
        return ord(lowered) - ord("0")
    if "a" <= lowered <= "f":
        return ord(lowered) - ord("a") + 10
    return None


def _unescape_values(name: str) -> str:
    if not name.startswith("U__"):
        return name
    body = name[3:]
    length = len(body)
    out = []
    i = 0
    while i < length:
        if body[i] != "_":
            out.append(body[i])
            i += 1
            continue
        i += 1
        if i >= length:
            return name
        if body[i] == "_":
            out.append("_")
            i += 1
            continue
        value = 0
        digits = 0
        while True:
            if i >= length or digits >= 6:
                return name
            if body[i] == "_":
                break
            digit = _hex_digit(body[i])
            if digit is None:
                return name
            value = value * 16 + digit
            digits += 1
            i += 1
        if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
            return name
        out.append(chr(value))
        i += 1
    return "".join(out)


def unescape_name(name: str, scheme: EscapingScheme) -> str:
    """Reverse ``escape_name`` where possible; on any error return ``name`` unchanged."""
    if not isinstance(scheme, EscapingScheme):
        raise ValueError(f"invalid escaping scheme {scheme!r}")
    if len(name) == 0:
        return name
    if scheme in (EscapingScheme.NO_ESCAPING, EscapingScheme.UNDERSCORES):
        return name
    if scheme is EscapingScheme.DOTS:
        return name.replace("_dot_", ".").replace("__", "_")
    return _unescape_values(name)


def to_escaping_scheme(s: str) -> EscapingScheme:
    """Return the escaping scheme named by ``s``."""
    if s == "":
        raise ValueError("got empty string instead of escaping scheme")
    try:
        return EscapingScheme(s)
    except ValueError:
        raise ValueError(f"unknown format scheme {s}") from None