"""Native histogram samples and their JSON form."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from prommodel.timestamps import Time
from prommodel.value_float import (
    JSONText,
    _decoded_float,
    _decoded_time,
    _format_fixed6,
    _format_g,
    _loads,
    _parse_quoted_float,
    format_float,
)

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1


def _decode(data: Any) -> Any:
    return _loads(data) if isinstance(data, (str, bytes, bytearray)) else data


class FloatString(float):
    """A float written in JSON as a quoted string."""

    def __str__(self) -> str:
        return format_float(self)

    def to_json(self) -> str:
        """Return the value as a quoted JSON string."""
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data: JSONText) -> "FloatString":
        """Parse a value from JSON text holding a quoted number."""
        return cls(_parse_quoted_float(data, "float value"))

    @classmethod
    def _from_decoded(cls, obj: Any) -> "FloatString":
        return cls(_decoded_float(obj, "float value"))


@dataclass
class HistogramBucket:
    """One histogram bucket.

    ``boundaries`` encodes inclusiveness: 0 upper-inclusive, 1 lower-inclusive,
    2 exclusive on both ends, 3 inclusive on both ends.
    """

    boundaries: int = 0
    lower: FloatString = FloatString(0.0)
    upper: FloatString = FloatString(0.0)
    count: FloatString = FloatString(0.0)

    def __post_init__(self) -> None:
        self.boundaries = int(self.boundaries)
        self.lower = FloatString(self.lower)
        self.upper = FloatString(self.upper)
        self.count = FloatString(self.count)

    def equal(self, o: "HistogramBucket") -> bool:
        """Return True if all fields are equal."""
        return self is o or (
            self.boundaries == o.boundaries
            and self.lower == o.lower
            and self.upper == o.upper
            and self.count == o.count
        )

    def __str__(self) -> str:
        opening = "[" if self.boundaries in (1, 3) else "("
        closing = "]" if self.boundaries in (0, 3) else ")"
        return f"{opening}{_format_g(self.lower)},{_format_g(self.upper)}{closing}:{self.count}"

    def to_json(self) -> str:
        """Return the bucket as ``[boundaries,"lower","upper","count"]``."""
        return (
            f"[{self.boundaries},{self.lower.to_json()},"
            f"{self.upper.to_json()},{self.count.to_json()}]"
        )

    @classmethod
    def from_json(cls, data: Union[JSONText, list]) -> "HistogramBucket":
        """Parse a bucket from JSON text or an already decoded list."""
        decoded = _decode(data)
        if not isinstance(decoded, list):
            raise ValueError("histogram bucket must be a JSON array")
        if len(decoded) != 4:
            raise ValueError(f"wrong number of fields: {len(decoded)} != 4")
        raw_boundaries, raw_lower, raw_upper, raw_count = decoded
        boundaries = 0
        if raw_boundaries is not None:
            if isinstance(raw_boundaries, bool) or not isinstance(raw_boundaries, int):
                raise ValueError("bucket boundaries must be an integer")
            if not _INT32_MIN <= raw_boundaries <= _INT32_MAX:
                raise ValueError(f"bucket boundaries out of range: {raw_boundaries}")
            boundaries = raw_boundaries

        def floats(obj: Any) -> FloatString:
            return FloatString(0.0) if obj is None else FloatString._from_decoded(obj)

        return cls(boundaries, floats(raw_lower), floats(raw_upper), floats(raw_count))


def _buckets_equal(a: List[HistogramBucket], b: List[HistogramBucket]) -> bool:
    return len(a) == len(b) and all(x.equal(y) for x, y in zip(a, b))


@dataclass
class SampleHistogram:
    """A native histogram: total count, sum and buckets."""

    count: FloatString = FloatString(0.0)
    sum: FloatString = FloatString(0.0)
    buckets: List[HistogramBucket] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.count = FloatString(self.count)
        self.sum = FloatString(self.sum)
        self.buckets = list(self.buckets)

    def __str__(self) -> str:
        buckets = " ".join(str(bucket) for bucket in self.buckets)
        return (
            f"Count: {_format_fixed6(self.count)}, Sum: {_format_fixed6(self.sum)}, "
            f"Buckets: [{buckets}]"
        )

    def equal(self, o: Optional["SampleHistogram"]) -> bool:
        """Return True if count, sum and all buckets are equal."""
        if self is o:
            return True
        if o is None:
            return False
        return self.count == o.count and self.sum == o.sum and _buckets_equal(self.buckets, o.buckets)

    def to_json(self) -> str:
        """Return the histogram as a JSON object."""
        buckets = ",".join(bucket.to_json() for bucket in self.buckets)
        return (
            f'{{"count":{self.count.to_json()},"sum":{self.sum.to_json()},'
            f'"buckets":[{buckets}]}}'
        )

    @classmethod
    def from_json(cls, data: Union[JSONText, dict]) -> "SampleHistogram":
        """Parse a histogram from JSON text or an already decoded object."""
        decoded = _decode(data)
        if not isinstance(decoded, dict):
            raise ValueError("histogram must be a JSON object")
        result = cls()
        for key, value in decoded.items():
            lowered = key.lower()
            if lowered == "count":
                result.count = FloatString._from_decoded(value)
            elif lowered == "sum":
                result.sum = FloatString._from_decoded(value)
            elif lowered == "buckets":
                if value is None:
                    result.buckets = []
                elif isinstance(value, list):
                    result.buckets = [HistogramBucket.from_json(item) for item in value]
                else:
                    raise ValueError("histogram buckets must be a JSON array")
        return result


@dataclass
class SampleHistogramPair:
    """A histogram paired with a timestamp; the histogram must not be None."""

    timestamp: Time = Time(0)
    histogram: Optional[SampleHistogram] = None

    def __post_init__(self) -> None:
        self.timestamp = Time(self.timestamp)

    def __str__(self) -> str:
        return f"{self.histogram} @[{self.timestamp}]"

    def equal(self, o: "SampleHistogramPair") -> bool:
        """Return True if histograms and timestamps are equal."""
        if self is o:
            return True
        if self.histogram is None:
            same_histogram = o.histogram is None
        else:
            same_histogram = self.histogram.equal(o.histogram)
        return same_histogram and self.timestamp.equal(o.timestamp)

    def to_json(self) -> str:
        """Return the pair as ``[timestamp,{histogram}]``."""
        if self.histogram is None:
            raise ValueError("histogram is nil")
        return f"[{self.timestamp.to_json()},{self.histogram.to_json()}]"

    @classmethod
    def from_json(cls, data: Union[JSONText, list]) -> "SampleHistogramPair":
        """Parse a pair from JSON text or an already decoded list."""
        decoded = _decode(data)
        if not isinstance(decoded, list):
            raise ValueError("histogram pair must be a JSON array")
        if len(decoded) != 2:
            raise ValueError(f"wrong number of fields: {len(decoded)} != 2")
        raw_time, raw_histogram = decoded
        timestamp = _decoded_time(raw_time)
        if raw_histogram is None:
            raise ValueError("histogram is null")
        return cls(timestamp, SampleHistogram.from_json(raw_histogram))