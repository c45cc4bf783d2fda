"""
Reading History
================
Rolling window of recent readings for trend display and CSV export.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator

from agrisignal.domain.sensor_reading import SensorReading
from agrisignal.enums import MetricId

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["timestamp", *(m.value for m in MetricId)]


class ReadingHistory:
    """Keep the last ``maxlen`` readings, oldest first."""

    def __init__(self, maxlen: int = 24, readings: Iterable[SensorReading] = ()):
        if maxlen <= 0:
            raise ValueError(f"maxlen must be positive, got {maxlen}")
        self._readings: deque[SensorReading] = deque(readings, maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._readings.maxlen

    def append(self, reading: SensorReading) -> None:
        self._readings.append(reading)

    def extend(self, readings: Iterable[SensorReading]) -> None:
        self._readings.extend(readings)

    def clear(self) -> None:
        self._readings.clear()

    def latest(self) -> SensorReading | None:
        return self._readings[-1] if self._readings else None

    def has_valid_data(self) -> bool:
        """True when any reading carries at least one metric value."""
        return any(not reading.is_empty() for reading in self._readings)

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[SensorReading]:
        return iter(self._readings)

    def to_frame(self):
        """
        Return the history as a DataFrame indexed by timestamp.

        Columns are the nine metric ids; absent values are NaN.
        """
        import pandas as pd  # Lazy load

        rows = [{"timestamp": r.timestamp, **{m.value: r.get(m) for m in MetricId}} for r in self._readings]
        frame = pd.DataFrame(rows, columns=CSV_COLUMNS)
        frame["timestamp"] = pd.to_datetime(frame["timestamp"], utc=True)
        return frame.set_index("timestamp").astype(float)

    def to_csv(self) -> str:
        """Export as CSV: ``timestamp`` plus the nine metrics, ``NA`` for absent values."""
        frame = self.to_frame().reset_index()
        frame["timestamp"] = frame["timestamp"].map(lambda ts: ts.isoformat())
        logger.debug("Exporting %d readings to CSV", len(frame))
        return frame.to_csv(index=False, na_rep="NA", lineterminator="\n")
