"""
Schemas
=======

Pydantic models at the boundary of the engine.
"""

from agrisignal.schemas.health import (
    HealthScoreResponse,
    MetricStatusResponse,
    PlantAnalysisResponse,
    ReadingEvaluationResponse,
    SensorReadingPayload,
)

__all__ = [
    "HealthScoreResponse",
    "MetricStatusResponse",
    "PlantAnalysisResponse",
    "ReadingEvaluationResponse",
    "SensorReadingPayload",
]
