"""Silences and the label matchers they are built from."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from prommodel.labels import LabelName, LabelValue, validate_label_name


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


@dataclass
class Matcher:
    """Matches the value of a given label, literally or by regular expression."""

    name: str
    value: str
    is_regex: bool = False

    def __post_init__(self) -> None:
        self.name = LabelName(self.name)

    def validate(self) -> None:
        """Raise ValueError if any field of the matcher is invalid."""
        if not LabelName(self.name).is_valid():
            raise ValueError(f"invalid name {_quote(self.name)}")
        if self.is_regex:
            try:
                re.compile(self.value)
            except re.error:
                raise ValueError(f"invalid regular expression {_quote(self.value)}") from None
        elif not LabelValue(self.value).is_valid() or len(self.value) == 0:
            raise ValueError(f"invalid value {_quote(self.value)}")

    @classmethod
    def from_json(cls, data: Union[str, bytes, bytearray, Mapping[str, Any]]) -> "Matcher":
        """Build a matcher from a JSON object with name, value and isRegex."""
        decoded = json.loads(data) if isinstance(data, (str, bytes, bytearray)) else data
        if not isinstance(decoded, Mapping):
            raise ValueError("matcher must be a JSON object")
        name = decoded.get("name", "")
        value = decoded.get("value", "")
        is_regex = decoded.get("isRegex", False)
        if not isinstance(name, str) or not isinstance(value, str):
            raise ValueError("matcher name and value must be strings")
        if not isinstance(is_regex, bool):
            raise ValueError("matcher isRegex must be a boolean")
        if "name" in decoded:
            validate_label_name(name)
        if not name:
            raise ValueError("label name in matcher must not be empty")
        if is_regex:
            try:
                re.compile(value)
            except re.error as err:
                raise ValueError(f"invalid regular expression {_quote(value)}: {err}") from err
        return cls(name=name, value=value, is_regex=is_regex)


@dataclass
class Silence:
    """A silence definition."""

    id: int = 0
    matchers: List[Matcher] = field(default_factory=list)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    created_by: str = ""
    comment: str = ""

    def validate(self) -> None:
        """Raise ValueError if any field of the silence is invalid."""
        if not self.matchers:
            raise ValueError("at least one matcher required")
        for matcher in self.matchers:
            try:
                matcher.validate()
            except ValueError as err:
                raise ValueError(f"invalid matcher: {err}") from err
        if self.starts_at is None:
            raise ValueError("start time missing")
        if self.ends_at is None:
            raise ValueError("end time missing")
        if self.ends_at < self.starts_at:
            raise ValueError("start time must be before end time")
        if self.created_by == "":
            raise ValueError("creator information missing")
        if self.comment == "":
            raise ValueError("comment missing")
        if self.created_at is None:
            raise ValueError("creation timestamp missing")