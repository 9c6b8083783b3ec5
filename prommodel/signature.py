"""Signatures and fingerprints of label sets via FNV-1a."""

from __future__ import annotations

from typing import Collection, Mapping, Optional

from prommodel.fingerprinting import Fingerprint
from prommodel.fnv import hash_add, hash_add_byte, hash_new

SEPARATOR_BYTE = 255
"""A byte that never occurs in valid UTF-8, used between hashed strings."""

EMPTY_LABEL_SIGNATURE = hash_new()


def _byte_key(s: str) -> bytes:
    try:
        return s.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return s.encode("utf-8", "surrogatepass")


def _sorted_names(names) -> list:
    return sorted(names, key=_byte_key)


def _hash_pairs(names, labels: Mapping[str, str]) -> int:
    total = hash_new()
    for name in names:
        total = hash_add(total, name)
        total = hash_add_byte(total, SEPARATOR_BYTE)
        total = hash_add(total, labels.get(name, ""))
        total = hash_add_byte(total, SEPARATOR_BYTE)
    return total


def labels_to_signature(labels: Optional[Mapping[str, str]]) -> int:
    """Return a quasi-unique signature for a label mapping."""
    if not labels:
        return EMPTY_LABEL_SIGNATURE
    return _hash_pairs(_sorted_names(labels), labels)


def label_set_to_fingerprint(ls: Optional[Mapping[str, str]]) -> Fingerprint:
    """Return the fingerprint of a label set; same hash as ``labels_to_signature``."""
    return Fingerprint(labels_to_signature(ls))


def label_set_to_fast_fingerprint(ls: Optional[Mapping[str, str]]) -> Fingerprint:
    """Return an order-independent, collision-prone fingerprint of a label set."""
    if not ls:
        return Fingerprint(EMPTY_LABEL_SIGNATURE)
    result = 0
    for name, value in ls.items():
        pair_hash = hash_add(hash_new(), name)
        pair_hash = hash_add_byte(pair_hash, SEPARATOR_BYTE)
        result ^= hash_add(pair_hash, value)
    return Fingerprint(result)


def signature_for_labels(m: Mapping[str, str], *args: str) -> int:
    """Return the signature of ``m`` restricted to the given label names.

    Names missing from ``m`` are hashed with an empty value.
    """
    if not args:
        return EMPTY_LABEL_SIGNATURE
    return _hash_pairs(_sorted_names(args), m)


def signature_without_labels(
    m: Mapping[str, str], labels: Optional[Collection[str]]
) -> int:
    """Return the signature of ``m`` excluding the given label names."""
    if not m:
        return EMPTY_LABEL_SIGNATURE
    excluded = labels or ()
    names = [name for name in m if name not in excluded]
    if not names:
        return EMPTY_LABEL_SIGNATURE
    return _hash_pairs(_sorted_names(names), m)