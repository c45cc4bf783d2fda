"""
agrisignal
==========
Agronomic signal evaluation engine: per-metric threshold classification,
composite health scoring and an image-based plant-health heuristic.
"""

from agrisignal.domain import MetricProfile, PlantHealthAssessment, SensorReading
from agrisignal.enums import DiseaseStatus, HealthBand, MetricId, MetricStatus
from agrisignal.services.ai import AgronomicSignalEngine, HealthScoreResult

__version__ = "1.0.0"

__all__ = [
    "AgronomicSignalEngine",
    "DiseaseStatus",
    "HealthBand",
    "HealthScoreResult",
    "MetricId",
    "MetricProfile",
    "MetricStatus",
    "PlantHealthAssessment",
    "SensorReading",
]
