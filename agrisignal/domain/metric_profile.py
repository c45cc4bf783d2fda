"""
Metric Profile Value Objects
=============================
Immutable configuration shared by the threshold classifier, the metric
normalizer and the composite scorer.

One ``MetricProfile`` holds, per metric id:
- a ``MetricRange`` (absolute bounds plus the optimal window) used for normalization
- a ``StatusBand`` (good interval plus warning intervals) used for display status
- a weight used by the composite index

Keeping the three tables in one object guarantees classification and
normalization read the same configuration for the same metric.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from agrisignal.domain.exceptions import ConfigurationError
from agrisignal.enums import MetricId

logger = logging.getLogger(__name__)


def metric_key(metric: MetricId | str) -> str:
    """Return the canonical string key for a metric id."""
    if isinstance(metric, MetricId):
        return metric.value
    return str(metric)


def _as_float(value: Any, what: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{what} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ConfigurationError(f"{what} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class Interval:
    """Closed numeric interval ``[low, high]``."""

    low: float
    high: float

    def __post_init__(self):
        object.__setattr__(self, "low", _as_float(self.low, "Interval low"))
        object.__setattr__(self, "high", _as_float(self.high, "Interval high"))
        if self.low > self.high:
            raise ConfigurationError(f"Interval low ({self.low}) exceeds high ({self.high})")

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high

    def overlaps(self, other: Interval) -> bool:
        return self.low <= other.high and other.low <= self.high

    def to_list(self) -> list[float]:
        return [self.low, self.high]

    @staticmethod
    def from_value(value: Any) -> Interval:
        """Build from a ``[low, high]`` pair."""
        if isinstance(value, Interval):
            return value
        try:
            low, high = value
        except (TypeError, ValueError):
            raise ConfigurationError(f"Interval must be a [low, high] pair, got {value!r}") from None
        return Interval(low, high)


@dataclass(frozen=True)
class MetricRange:
    """
    Absolute bounds and optimal window for one metric.

    Invariant: ``minimum <= optimal_min <= optimal_max <= maximum``.

    Attributes:
        minimum: Absolute minimum of the scale
        optimal_min: Lower edge of the optimal window
        optimal_max: Upper edge of the optimal window
        maximum: Absolute maximum of the scale
    """

    minimum: float
    optimal_min: float
    optimal_max: float
    maximum: float

    def __post_init__(self):
        for name in ("minimum", "optimal_min", "optimal_max", "maximum"):
            object.__setattr__(self, name, _as_float(getattr(self, name), f"MetricRange {name}"))
        if not (self.minimum <= self.optimal_min <= self.optimal_max <= self.maximum):
            raise ConfigurationError(
                "MetricRange must satisfy min <= optimal_min <= optimal_max <= max, got "
                f"{self.minimum}, {self.optimal_min}, {self.optimal_max}, {self.maximum}"
            )

    @property
    def is_degenerate(self) -> bool:
        """True when an optimal edge touches an absolute bound (zero-width decay slope)."""
        return self.optimal_min == self.minimum or self.optimal_max == self.maximum

    def in_optimal(self, value: float) -> bool:
        return self.optimal_min <= value <= self.optimal_max

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.minimum,
            "max": self.maximum,
            "optimal": [self.optimal_min, self.optimal_max],
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> MetricRange:
        """
        Create from dictionary.

        Examples:
            >>> MetricRange.from_dict({"min": 0, "max": 60, "optimal": [20, 40]})
        """
        try:
            optimal = Interval.from_value(data["optimal"])
            return MetricRange(
                minimum=data["min"],
                optimal_min=optimal.low,
                optimal_max=optimal.high,
                maximum=data["max"],
            )
        except KeyError as e:
            raise ConfigurationError(f"MetricRange is missing key {e}") from None


@dataclass(frozen=True)
class StatusBand:
    """Good interval plus zero or more pairwise-disjoint warning intervals."""

    good: Interval
    warnings: tuple[Interval, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "good", Interval.from_value(self.good))
        object.__setattr__(self, "warnings", tuple(Interval.from_value(w) for w in self.warnings))
        for i, first in enumerate(self.warnings):
            for second in self.warnings[i + 1 :]:
                if first.overlaps(second):
                    raise ConfigurationError(
                        f"Warning intervals {first.to_list()} and {second.to_list()} overlap"
                    )

    def to_dict(self) -> dict[str, Any]:
        return {"good": self.good.to_list(), "warning": [w.to_list() for w in self.warnings]}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> StatusBand:
        if "good" not in data:
            raise ConfigurationError("StatusBand is missing key 'good'")
        return StatusBand(good=data["good"], warnings=tuple(data.get("warning", ())))


@dataclass(frozen=True)
class MetricProfile:
    """
    Range, status band and weight tables keyed by metric id.

    A metric may appear in any subset of the three tables. Lookups for a
    metric that is not configured return ``None``; the scoring components
    map that to their permissive defaults.
    """

    ranges: Mapping[str, MetricRange] = field(default_factory=dict)
    bands: Mapping[str, StatusBand] = field(default_factory=dict)
    weights: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        # Frozen dataclass: normalize keys and freeze the mappings in place
        ranges = {metric_key(k): v for k, v in self.ranges.items()}
        bands = {metric_key(k): v for k, v in self.bands.items()}
        weights = {}
        for key, weight in self.weights.items():
            value = _as_float(weight, f"Weight for {metric_key(key)}")
            if value < 0:
                raise ConfigurationError(f"Weight for {metric_key(key)} must be non-negative, got {value}")
            weights[metric_key(key)] = value
        object.__setattr__(self, "ranges", MappingProxyType(ranges))
        object.__setattr__(self, "bands", MappingProxyType(bands))
        object.__setattr__(self, "weights", MappingProxyType(weights))

    @property
    def metrics(self) -> list[str]:
        """All metric ids mentioned by any table, in first-seen order."""
        seen: dict[str, None] = {}
        for table in (self.weights, self.ranges, self.bands):
            for key in table:
                seen.setdefault(key, None)
        return list(seen)

    def range_for(self, metric: MetricId | str) -> MetricRange | None:
        return self.ranges.get(metric_key(metric))

    def band_for(self, metric: MetricId | str) -> StatusBand | None:
        return self.bands.get(metric_key(metric))

    def weight_for(self, metric: MetricId | str) -> float | None:
        return self.weights.get(metric_key(metric))

    def validate(self, strict: bool = True) -> list[str]:
        """
        Check configuration faults that cannot be caught per value object.

        Ordering, overlap and negative weights are already rejected on
        construction; this checks for degenerate ranges.

        Args:
            strict: Raise ``ConfigurationError`` instead of logging a warning

        Returns:
            List of warning messages (empty if all valid)
        """
        degenerate = [key for key, rng in self.ranges.items() if rng.is_degenerate]
        problems = [
            f"Metric '{key}' has a degenerate range {self.ranges[key].to_dict()} "
            "(optimal edge equals absolute bound)"
            for key in degenerate
        ]

        if problems and strict:
            raise ConfigurationError("; ".join(problems), detail={"metrics": degenerate})

        for problem in problems:
            logger.warning(problem)

        total = sum(self.weights.values())
        if self.weights and not math.isclose(total, 1.0, abs_tol=1e-6):
            logger.debug("Metric weights sum to %.4f, composite index renormalizes over present metrics", total)

        return problems

    def merge(self, other: MetricProfile) -> MetricProfile:
        """Create new profile where ``other`` overrides this one per metric and table."""
        return MetricProfile(
            ranges={**self.ranges, **other.ranges},
            bands={**self.bands, **other.bands},
            weights={**self.weights, **other.weights},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON profile format."""
        metrics: dict[str, dict[str, Any]] = {}
        for key in self.metrics:
            entry: dict[str, Any] = {}
            if key in self.ranges:
                entry["range"] = self.ranges[key].to_dict()
            if key in self.bands:
                entry["status"] = self.bands[key].to_dict()
            if key in self.weights:
                entry["weight"] = self.weights[key]
            metrics[key] = entry
        return {"metrics": metrics}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> MetricProfile:
        """
        Create from the JSON profile format.

        Examples:
            >>> MetricProfile.from_dict({"metrics": {"soil_moisture": {"weight": 0.3}}})
        """
        metrics = data.get("metrics")
        if not isinstance(metrics, Mapping):
            raise ConfigurationError("Metric profile must contain a 'metrics' object")

        ranges: dict[str, MetricRange] = {}
        bands: dict[str, StatusBand] = {}
        weights: dict[str, float] = {}
        for key, entry in metrics.items():
            if not isinstance(entry, Mapping):
                raise ConfigurationError(f"Metric '{key}' entry must be an object")
            if "range" in entry:
                ranges[key] = MetricRange.from_dict(entry["range"])
            if "status" in entry:
                bands[key] = StatusBand.from_dict(entry["status"])
            if "weight" in entry:
                weights[key] = entry["weight"]
        return MetricProfile(ranges=ranges, bands=bands, weights=weights)


def _band(good: Iterable[float], *warnings: Iterable[float]) -> StatusBand:
    return StatusBand(good=Interval.from_value(good), warnings=tuple(Interval.from_value(w) for w in warnings))


DEFAULT_METRIC_PROFILE = MetricProfile(
    ranges={
        MetricId.SOIL_MOISTURE: MetricRange(0, 20, 40, 60),
        MetricId.TEMPERATURE: MetricRange(0, 18, 32, 50),
        MetricId.HUMIDITY: MetricRange(0, 40, 70, 100),
        MetricId.PH_LEVEL: MetricRange(4, 6.0, 7.5, 9),
        MetricId.LIGHT_INTENSITY: MetricRange(0, 10000, 60000, 120000),
        MetricId.RAINFALL: MetricRange(0, 1, 10, 50),
        MetricId.NITROGEN: MetricRange(0, 40, 70, 100),
        MetricId.PHOSPHOROUS: MetricRange(0, 40, 70, 100),
        MetricId.POTASSIUM: MetricRange(0, 40, 70, 100),
    },
    bands={
        MetricId.SOIL_MOISTURE: _band((20, 40), (10, 20), (40, 55)),
        MetricId.TEMPERATURE: _band((18, 32), (10, 18), (32, 40)),
        MetricId.HUMIDITY: _band((40, 70), (25, 40), (70, 85)),
        MetricId.PH_LEVEL: _band((6.0, 7.5), (5.5, 6.0), (7.5, 8.0)),
        MetricId.LIGHT_INTENSITY: _band((10000, 60000), (5000, 10000), (60000, 90000)),
        MetricId.RAINFALL: _band((1, 10), (0, 1), (10, 25)),
        MetricId.NITROGEN: _band((40, 70), (20, 40), (70, 85)),
        MetricId.PHOSPHOROUS: _band((40, 70), (20, 40), (70, 85)),
        MetricId.POTASSIUM: _band((40, 70), (20, 40), (70, 85)),
    },
    weights={
        MetricId.SOIL_MOISTURE: 0.20,
        MetricId.TEMPERATURE: 0.15,
        MetricId.HUMIDITY: 0.10,
        MetricId.PH_LEVEL: 0.15,
        MetricId.LIGHT_INTENSITY: 0.10,
        MetricId.RAINFALL: 0.10,
        MetricId.NITROGEN: 0.10,
        MetricId.PHOSPHOROUS: 0.05,
        MetricId.POTASSIUM: 0.05,
    },
)


def load_metric_profile(
    path: str | Path,
    base: MetricProfile | None = DEFAULT_METRIC_PROFILE,
    strict: bool = True,
) -> MetricProfile:
    """
    Load a metric profile from a JSON file.

    Args:
        path: JSON file in the ``{"metrics": {...}}`` format
        base: Profile the file overrides per metric and table (``None`` for none)
        strict: Reject degenerate ranges instead of only warning

    Returns:
        Validated MetricProfile
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read metric profile {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Metric profile {path} is not valid JSON: {e}") from e

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Metric profile {path} must contain a JSON object")

    profile = MetricProfile.from_dict(data)
    if base is not None:
        profile = base.merge(profile)

    profile.validate(strict=strict)
    logger.info("Loaded metric profile from %s (%d metrics)", path, len(profile.metrics))
    return profile
