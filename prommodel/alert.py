"""Alerts and lists of alerts."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from prommodel.fingerprinting import Fingerprint
from prommodel.labels import ALERT_NAME_LABEL
from prommodel.labelset import LabelSet


class AlertStatus(str, enum.Enum):
    """Whether an alert is firing or resolved."""

    FIRING = "firing"
    RESOLVED = "resolved"

    def __str__(self) -> str:
        return self.value


def _now_like(reference: Optional[datetime]) -> datetime:
    """Return the current time, timezone-aware if ``reference`` is."""
    if reference is not None and reference.tzinfo is not None:
        return datetime.now(reference.tzinfo)
    return datetime.now()


def _time_before(a: Optional[datetime], b: Optional[datetime]) -> bool:
    """Compare times where None is the earliest possible time."""
    if a is None:
        return b is not None
    if b is None:
        return False
    return a < b


@dataclass
class Alert:
    """A generic alert; the time range ends are optional."""

    labels: LabelSet = field(default_factory=LabelSet)
    annotations: LabelSet = field(default_factory=LabelSet)
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    generator_url: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.labels, LabelSet):
            self.labels = LabelSet(self.labels)
        if not isinstance(self.annotations, LabelSet):
            self.annotations = LabelSet(self.annotations)

    @property
    def name(self) -> str:
        """The value of the ``alertname`` label."""
        return str(self.labels.get(ALERT_NAME_LABEL, ""))

    def fingerprint(self) -> Fingerprint:
        """Return the fingerprint of the alert's label set."""
        return self.labels.fingerprint()

    def __str__(self) -> str:
        state = "resolved" if self.resolved() else "active"
        return f"{self.name}[{str(self.fingerprint())[:7]}][{state}]"

    def resolved(self) -> bool:
        """Return True if the alert ended in the past."""
        return self.resolved_at(_now_like(self.ends_at))

    def resolved_at(self, ts: datetime) -> bool:
        """Return True if the alert ended at or before ``ts``."""
        if self.ends_at is None:
            return False
        return not self.ends_at > ts

    def status(self) -> AlertStatus:
        """Return the current status of the alert."""
        return self.status_at(_now_like(self.ends_at))

    def status_at(self, ts: datetime) -> AlertStatus:
        """Return the status of the alert at ``ts``."""
        return AlertStatus.RESOLVED if self.resolved_at(ts) else AlertStatus.FIRING

    def validate(self) -> None:
        """Raise ValueError if the alert data is inconsistent."""
        if self.starts_at is None:
            raise ValueError("start time missing")
        if self.ends_at is not None and self.ends_at < self.starts_at:
            raise ValueError("start time must be before end time")
        try:
            self.labels.validate()
        except ValueError as err:
            raise ValueError(f"invalid label set: {err}") from err
        if not self.labels:
            raise ValueError("at least one label pair required")
        try:
            self.annotations.validate()
        except ValueError as err:
            raise ValueError(f"invalid annotations: {err}") from err


def _alert_less(a: Alert, b: Alert) -> bool:
    if _time_before(a.starts_at, b.starts_at):
        return True
    if _time_before(a.ends_at, b.ends_at):
        return True
    return a.fingerprint() < b.fingerprint()


def _alert_cmp(a: Alert, b: Alert) -> int:
    if _alert_less(a, b):
        return -1
    return 1 if _alert_less(b, a) else 0


class Alerts(list):
    """A list of alerts."""

    def sort_chronologically(self) -> None:
        """Sort in place by start time, then end time, then fingerprint."""
        self.sort(key=functools.cmp_to_key(_alert_cmp))

    def has_firing(self) -> bool:
        """Return True if any alert is not resolved now."""
        return any(not alert.resolved() for alert in self)

    def has_firing_at(self, ts: datetime) -> bool:
        """Return True if any alert is not resolved at ``ts``."""
        return any(not alert.resolved_at(ts) for alert in self)

    def status(self) -> AlertStatus:
        """Return FIRING if at least one alert is firing now."""
        return AlertStatus.FIRING if self.has_firing() else AlertStatus.RESOLVED

    def status_at(self, ts: datetime) -> AlertStatus:
        """Return FIRING if at least one alert is firing at ``ts``."""
        return AlertStatus.FIRING if self.has_firing_at(ts) else AlertStatus.RESOLVED