"""Metrics: label sets that identify exactly one time series."""

from __future__ import annotations

import json

from prommodel.labels import METRIC_NAME_LABEL
from prommodel.labelset import LabelSet


def _quote(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def _byte_key(s: str) -> bytes:
    try:
        return s.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        return s.encode("utf-8", "surrogatepass")


class Metric(LabelSet):
    """A label set referring to a single stream of samples."""

    def clone(self) -> "Metric":
        """Return a copy of the metric."""
        return Metric(self)

    def __str__(self) -> str:
        name = self.get(METRIC_NAME_LABEL)
        pairs = sorted(
            (
                f"{label}={_quote(value)}"
                for label, value in self.items()
                if label != METRIC_NAME_LABEL
            ),
            key=_byte_key,
        )
        if not pairs:
            return str(name) if name is not None else "{}"
        return f"{name or ''}{{{', '.join(pairs)}}}"