"""Label sets: collections of label name/value pairs."""

from __future__ import annotations

import json
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from prommodel.fingerprinting import Fingerprint
from prommodel.labels import LabelName, LabelValue
from prommodel.signature import label_set_to_fast_fingerprint, label_set_to_fingerprint

LabelsInput = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


def _quote(s: str) -> str:
    """Return ``s`` double-quoted with escapes, as used in error messages."""
    return json.dumps(s, ensure_ascii=False)


class LabelSet(dict):
    """A mapping of label names to label values."""

    def __init__(self, labels: Optional[LabelsInput] = None, /) -> None:
        super().__init__()
        if labels:
            self.update(labels)

    def __setitem__(self, key: str, value: str) -> None:
        super().__setitem__(LabelName(key), LabelValue(value))

    def update(self, *args: Any, **kwargs: str) -> None:  # type: ignore[override]
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def setdefault(self, key: str, default: str = "") -> LabelValue:  # type: ignore[override]
        if key not in self:
            self[key] = default
        return self[key]

    def validate(self) -> None:
        """Raise ValueError if any name or value in the set is invalid."""
        for name, value in self.items():
            if not LabelName(name).is_valid():
                raise ValueError(f"invalid name {_quote(name)}")
            if not LabelValue(value).is_valid():
                raise ValueError(f"invalid value {_quote(value)}")

    def equal(self, o: Mapping[str, str]) -> bool:
        """Return True if both sets hold exactly the same pairs."""
        if len(self) != len(o):
            return False
        return all(name in o and o[name] == value for name, value in self.items())

    def before(self, o: Mapping[str, str]) -> bool:
        """Return True if this set sorts before ``o``.

        Fewer labels sort first. With equal counts, the union of names is
        walked in sorted order and the first differing pair decides: a missing
        label sorts first, otherwise values are compared.
        """
        if len(self) != len(o):
            return len(self) < len(o)
        for name in sorted([*self, *o]):
            if name not in self:
                return True
            if name not in o:
                return False
            mine, other = self[name], o[name]
            if mine != other:
                return mine < other
        return False

    def clone(self) -> "LabelSet":
        """Return a copy of the label set."""
        return type(self)(self)

    def merge(self, other: Mapping[str, str]) -> "LabelSet":
        """Return a new set with ``other``'s pairs overriding this set's."""
        result = type(self)(self)
        result.update(other)
        return result

    def fingerprint(self) -> Fingerprint:
        """Return the fingerprint of the label set."""
        return label_set_to_fingerprint(self)

    def fast_fingerprint(self) -> Fingerprint:
        """Return a faster, more collision-prone fingerprint of the label set."""
        return label_set_to_fast_fingerprint(self)

    @classmethod
    def from_json(cls, data: Union[str, bytes, Mapping[str, Any]]) -> "LabelSet":
        """Build a label set from a JSON object, validating every label name."""
        decoded = json.loads(data) if isinstance(data, (str, bytes, bytearray)) else data
        if not isinstance(decoded, Mapping):
            raise ValueError("label set must be a JSON object")
        for name, value in decoded.items():
            if not isinstance(value, str):
                raise ValueError(f"value of label {_quote(name)} must be a string")
            if not LabelName(name).is_valid():
                raise ValueError(f"{_quote(name)} is not a valid label name")
        return cls(decoded)