"""
Domain Layer
============
Value objects and dataclasses shared by the scoring and image paths.
"""

from agrisignal.domain.exceptions import (
    AgriSignalError,
    ConfigurationError,
    ImageDecodeError,
    ValidationError,
)
from agrisignal.domain.metric_profile import (
    DEFAULT_METRIC_PROFILE,
    Interval,
    MetricProfile,
    MetricRange,
    StatusBand,
    load_metric_profile,
    metric_key,
)
from agrisignal.domain.plant_health import PixelColorStats, PixelSample, PlantHealthAssessment
from agrisignal.domain.sensor_reading import SensorReading, is_present

__all__ = [
    "AgriSignalError",
    "ConfigurationError",
    "ImageDecodeError",
    "ValidationError",
    "DEFAULT_METRIC_PROFILE",
    "Interval",
    "MetricProfile",
    "MetricRange",
    "StatusBand",
    "load_metric_profile",
    "metric_key",
    "PixelColorStats",
    "PixelSample",
    "PlantHealthAssessment",
    "SensorReading",
    "is_present",
]
