"""Fingerprints: 64-bit hashes identifying label sets."""

from __future__ import annotations

import re
from typing import Iterable

_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_MAX_UINT64 = (1 << 64) - 1


class Fingerprint(int):
    """A hash-capable representation of a metric (FNV-1a 64-bit)."""

    def __new__(cls, value: int = 0) -> "Fingerprint":
        value = int(value)
        if not 0 <= value <= _MAX_UINT64:
            raise ValueError(f"fingerprint out of range: {value}")
        return super().__new__(cls, value)

    def __str__(self) -> str:
        return f"{int(self):016x}"

    def __repr__(self) -> str:
        return f"Fingerprint(0x{int(self):016x})"


def _parse_hex_uint64(s: str) -> int:
    if not _HEX_RE.fullmatch(s):
        raise ValueError(f"invalid syntax for fingerprint: {s!r}")
    value = int(s, 16)
    if value > _MAX_UINT64:
        raise ValueError(f"value out of range for fingerprint: {s!r}")
    return value


def fingerprint_from_string(s: str) -> Fingerprint:
    """Convert a hexadecimal string representation into a Fingerprint."""
    return Fingerprint(_parse_hex_uint64(s))


def parse_fingerprint(s: str) -> Fingerprint:
    """Parse a hexadecimal string into a Fingerprint, raising ValueError on failure."""
    return Fingerprint(_parse_hex_uint64(s))


class FingerprintSet(set):
    """A set of fingerprints."""

    def __init__(self, items: Iterable[int] = ()) -> None:
        super().__init__(Fingerprint(item) for item in items)

    def equal(self, o: "FingerprintSet") -> bool:
        """Return True if both sets contain exactly the same elements."""
        return len(self) == len(o) and all(k in o for k in self)

    def intersection(self, o: "FingerprintSet") -> "FingerprintSet":  # type: ignore[override]
        """Return the fingerprints contained in both sets."""
        if not self or not o:
            return FingerprintSet()
        smaller, larger = (o, self) if len(o) < len(self) else (self, o)
        return FingerprintSet(k for k in smaller if k in larger)