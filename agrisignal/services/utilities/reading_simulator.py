"""
Reading Simulator
==================
Random sensor readings for demo mode and manual testing.

Values are drawn uniformly from the demo ranges, which deliberately
reach outside the optimal windows so every status band shows up.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta

from agrisignal.domain.sensor_reading import SensorReading
from agrisignal.enums import MetricId
from agrisignal.utils.time import utc_now

# (low, high) per metric
SIMULATION_RANGES: dict[MetricId, tuple[float, float]] = {
    MetricId.SOIL_MOISTURE: (5.0, 60.0),
    MetricId.TEMPERATURE: (10.0, 45.0),
    MetricId.HUMIDITY: (20.0, 95.0),
    MetricId.PH_LEVEL: (4.5, 8.5),
    MetricId.LIGHT_INTENSITY: (500.0, 120000.0),
    MetricId.RAINFALL: (0.0, 50.0),
    MetricId.NITROGEN: (0.0, 100.0),
    MetricId.PHOSPHOROUS: (0.0, 100.0),
    MetricId.POTASSIUM: (0.0, 100.0),
}


class ReadingSimulator:
    """Generate simulated readings; pass ``seed`` for reproducible sequences."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def generate(self, timestamp: datetime | None = None) -> SensorReading:
        values = {metric.value: self._rng.uniform(low, high) for metric, (low, high) in SIMULATION_RANGES.items()}
        return SensorReading(timestamp=timestamp or utc_now(), **values)

    def backfill(self, count: int = 24, end: datetime | None = None) -> list[SensorReading]:
        """Return ``count`` hourly readings ending at ``end``, oldest first."""
        end = end or utc_now()
        return [self.generate(end - timedelta(hours=count - 1 - i)) for i in range(count)]
