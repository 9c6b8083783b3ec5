"""Label names, label values, label pairs and metric types."""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from typing import Iterable

from prommodel.names import ValidationScheme, is_valid_utf8, settings

ALERT_NAME_LABEL = "alertname"
EXPORTED_LABEL_PREFIX = "exported_"
METRIC_NAME_LABEL = "__name__"
SCHEME_LABEL = "__scheme__"
ADDRESS_LABEL = "__address__"
METRICS_PATH_LABEL = "__metrics_path__"
SCRAPE_INTERVAL_LABEL = "__scrape_interval__"
SCRAPE_TIMEOUT_LABEL = "__scrape_timeout__"
RESERVED_LABEL_PREFIX = "__"
META_LABEL_PREFIX = "__meta_"
TMP_LABEL_PREFIX = "__tmp_"
PARAM_LABEL_PREFIX = "__param_"
JOB_LABEL = "job"
INSTANCE_LABEL = "instance"
BUCKET_LABEL = "le"
QUANTILE_LABEL = "quantile"

LABEL_NAME_RE = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
"""Pattern of legacy-valid label names; use with ``fullmatch``."""


def _quote(s: str) -> str:
    """Return ``s`` in double quotes with escapes, as for an error message."""
    return json.dumps(s, ensure_ascii=False)


def _is_legacy_label_char(char: str, index: int) -> bool:
    return (
        "a" <= char <= "z"
        or "A" <= char <= "Z"
        or char == "_"
        or ("0" <= char <= "9" and index > 0)
    )


class LabelName(str):
    """A key of a label set or metric."""

    def is_valid(self) -> bool:
        """Validate the name according to the global validation scheme."""
        if len(self) == 0:
            return False
        scheme = settings.validation_scheme
        if scheme is ValidationScheme.LEGACY:
            return self.is_valid_legacy()
        if scheme is ValidationScheme.UTF8:
            return is_valid_utf8(str(self))
        raise ValueError(f"invalid name validation scheme requested: {scheme!r}")

    def is_valid_legacy(self) -> bool:
        """Return True if the name matches the legacy label name pattern."""
        if len(self) == 0:
            return False
        return all(_is_legacy_label_char(char, i) for i, char in enumerate(self))


class LabelValue(str):
    """A value associated with a label name."""

    def is_valid(self) -> bool:
        """Return True if the value is valid UTF-8."""
        return is_valid_utf8(str(self))


@dataclass(frozen=True, order=True)
class LabelPair:
    """A label name paired with a value; orders by name, then value."""

    name: LabelName
    value: LabelValue


class MetricType(str, enum.Enum):
    """The type of a metric family."""

    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    GAUGE_HISTOGRAM = "gaugehistogram"
    SUMMARY = "summary"
    INFO = "info"
    STATESET = "stateset"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


def validate_label_name(s: str) -> LabelName:
    """Return ``s`` as a LabelName, raising ValueError if it is not valid."""
    name = LabelName(s)
    if not name.is_valid():
        raise ValueError(f"{_quote(s)} is not a valid label name")
    return name


def format_label_names(names: Iterable[str]) -> str:
    """Join label names with a comma and a space."""
    return ", ".join(str(name) for name in names)