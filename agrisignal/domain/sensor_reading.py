"""
Sensor Reading Domain Object
=============================
One timestamped snapshot of the nine agronomic signals.

Any metric may be absent. Absence is stored as ``None`` and is distinct
from every numeric value, including zero.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from agrisignal.domain.exceptions import ValidationError
from agrisignal.domain.metric_profile import metric_key
from agrisignal.enums import MetricId
from agrisignal.utils.time import coerce_datetime, utc_now

# Markers the dashboard uses for "not available"
ABSENT_MARKERS = frozenset({"NA", "N/A", "na", "n/a", ""})


def is_present(value: float | None) -> bool:
    """True when ``value`` is an actual reading (not None and not NaN)."""
    return value is not None and not (isinstance(value, numbers.Real) and math.isnan(value))


def coerce_metric_value(name: str, value: Any) -> float | None:
    """
    Convert a raw payload value into a metric value.

    ``None`` and the "NA" markers map to absent. Booleans, non-numeric
    strings and non-finite numbers are rejected.
    """
    if value is None:
        return None
    if isinstance(value, str):
        if value.strip() in ABSENT_MARKERS:
            return None
        try:
            value = float(value)
        except ValueError:
            raise ValidationError(f"{name} must be numeric, got {value!r}", detail={"metric": name}) from None
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{name} must be numeric, got {value!r}", detail={"metric": name})
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError(f"{name} must be finite, got {value!r}", detail={"metric": name})
    return number


@dataclass
class SensorReading:
    """Sensor reading for one evaluation cycle."""

    timestamp: datetime = field(default_factory=utc_now)
    soil_moisture: float | None = None  # %
    temperature: float | None = None  # °C
    humidity: float | None = None  # %
    ph_level: float | None = None  # pH
    light_intensity: float | None = None  # lux
    rainfall: float | None = None  # mm
    nitrogen: float | None = None  # mg/kg
    phosphorous: float | None = None  # mg/kg
    potassium: float | None = None  # mg/kg

    # Readings for metric ids outside the nine known signals
    extra_metrics: dict[str, float] = field(default_factory=dict)

    def get(self, metric: MetricId | str) -> float | None:
        """Return the value for ``metric`` or None when absent."""
        key = metric_key(metric)
        if key in _KNOWN_KEYS:
            return getattr(self, key)
        return self.extra_metrics.get(key)

    def values(self) -> dict[str, float | None]:
        """All nine known metrics (absent ones as None) followed by extra metrics."""
        data = {key: getattr(self, key) for key in _KNOWN_KEYS}
        data.update(self.extra_metrics)
        return data

    def present_metrics(self) -> list[str]:
        return [key for key, value in self.values().items() if is_present(value)]

    def is_empty(self) -> bool:
        return not self.present_metrics()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"timestamp": self.timestamp.isoformat(), **self.values()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SensorReading:
        """
        Create from a flat mapping of metric names to values.

        Unknown numeric keys are kept in ``extra_metrics``.

        Args:
            data: Mapping with optional ``timestamp`` and metric values

        Returns:
            SensorReading instance
        """
        raw_ts = data.get("timestamp")
        timestamp = coerce_datetime(raw_ts)
        if raw_ts is not None and timestamp is None:
            raise ValidationError(f"Invalid timestamp {raw_ts!r}", detail={"field": "timestamp"})

        known: dict[str, float | None] = {}
        extra: dict[str, float] = {}
        for name, raw in data.items():
            if name == "timestamp":
                continue
            value = coerce_metric_value(name, raw)
            if name in _KNOWN_KEYS:
                known[name] = value
            elif value is not None:
                extra[name] = value

        return cls(timestamp=timestamp or utc_now(), extra_metrics=extra, **known)


_KNOWN_KEYS = tuple(m.value for m in MetricId)
