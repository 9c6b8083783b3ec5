"""Inline FNV-1a 64-bit hashing over strings and bytes."""

from __future__ import annotations

from typing import Union

OFFSET64 = 14695981039346656037
PRIME64 = 1099511628211
_MASK64 = (1 << 64) - 1

Hashable = Union[str, bytes, bytearray, memoryview]


def _to_bytes(data: Hashable) -> bytes:
    """Return the raw bytes of ``data``.

    Strings are encoded as UTF-8; lone surrogates produced by the
    ``surrogateescape`` handler are turned back into the bytes they stand for.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    try:
        return data.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return data.encode("utf-8", "surrogatepass")


def hash_new() -> int:
    """Return the initial FNV-1a 64-bit hash value."""
    return OFFSET64


def hash_add(h: int, data: Hashable) -> int:
    """Add the bytes of a string to an FNV-1a hash value and return the result."""
    for byte in _to_bytes(data):
        h = ((h ^ byte) * PRIME64) & _MASK64
    return h


def hash_add_byte(h: int, b: int) -> int:
    """Add a single byte to an FNV-1a hash value and return the result."""
    if not 0 <= b <= 0xFF:
        raise ValueError(f"byte value out of range: {b}")
    return ((h ^ b) * PRIME64) & _MASK64