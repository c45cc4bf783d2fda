"""
Threshold Classifier
=====================
Maps a raw metric value to a display status (NA / good / warning / critical).

Rules, in order:
1. Absent value -> NA
2. Metric without a configured status band -> good
3. Inside the good interval (inclusive) -> good
4. Inside any warning interval (inclusive) -> warning
5. Anything else -> critical
"""

from __future__ import annotations

import logging

from agrisignal.domain.metric_profile import DEFAULT_METRIC_PROFILE, MetricProfile, metric_key
from agrisignal.domain.sensor_reading import SensorReading, is_present
from agrisignal.enums import MetricId, MetricStatus

logger = logging.getLogger(__name__)


class ThresholdClassifier:
    """Classify metric values against the status bands of a profile."""

    def __init__(self, profile: MetricProfile | None = None):
        self.profile = profile or DEFAULT_METRIC_PROFILE

    def classify(self, metric: MetricId | str, value: float | None) -> MetricStatus:
        """
        Classify a single value.

        Args:
            metric: Metric id (enum or plain string)
            value: Raw value in the metric's unit, or None when absent

        Returns:
            MetricStatus for display
        """
        if not is_present(value):
            return MetricStatus.NA

        band = self.profile.band_for(metric)
        if band is None:
            return MetricStatus.GOOD

        if band.good.contains(value):
            return MetricStatus.GOOD
        if any(interval.contains(value) for interval in band.warnings):
            return MetricStatus.WARNING
        return MetricStatus.CRITICAL

    def classify_reading(self, reading: SensorReading) -> dict[str, MetricStatus]:
        """Classify every metric of a reading, including extra metrics."""
        statuses = {key: self.classify(key, value) for key, value in reading.values().items()}
        critical = [key for key, status in statuses.items() if status == MetricStatus.CRITICAL]
        if critical:
            logger.debug("Critical metrics in reading at %s: %s", reading.timestamp.isoformat(), critical)
        return statuses

    def __repr__(self) -> str:
        return f"ThresholdClassifier(metrics={sorted(metric_key(m) for m in self.profile.bands)})"
