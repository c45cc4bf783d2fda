"""
Health Schemas
==============

Pydantic models for reading validation and evaluation responses.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agrisignal.domain.sensor_reading import ABSENT_MARKERS, SensorReading
from agrisignal.enums import DiseaseStatus, HealthBand, MetricStatus


class SensorReadingPayload(BaseModel):
    """Incoming sensor reading. Every metric is optional; "NA" means absent."""

    timestamp: datetime | None = Field(default=None, description="ISO 8601 timestamp (defaults to now)")
    soil_moisture: float | None = Field(default=None, description="Soil moisture in %")
    temperature: float | None = Field(default=None, description="Air temperature in °C")
    humidity: float | None = Field(default=None, description="Relative humidity in %")
    ph_level: float | None = Field(default=None, description="Soil pH")
    light_intensity: float | None = Field(default=None, description="Light intensity in lux")
    rainfall: float | None = Field(default=None, description="Rainfall in mm")
    nitrogen: float | None = Field(default=None, description="Nitrogen in mg/kg")
    phosphorous: float | None = Field(default=None, description="Phosphorous in mg/kg")
    potassium: float | None = Field(default=None, description="Potassium in mg/kg")

    model_config = ConfigDict(
        extra="allow",
        allow_inf_nan=False,
        json_schema_extra={
            "example": {
                "timestamp": "2024-06-01T12:00:00+00:00",
                "soil_moisture": 30.0,
                "temperature": 25.0,
                "humidity": 55.0,
                "ph_level": 6.8,
            }
        },
    )

    @field_validator(
        "soil_moisture",
        "temperature",
        "humidity",
        "ph_level",
        "light_intensity",
        "rainfall",
        "nitrogen",
        "phosphorous",
        "potassium",
        mode="before",
    )
    @classmethod
    def _absent_marker(cls, value: Any) -> Any:
        if isinstance(value, str) and value.strip() in ABSENT_MARKERS:
            return None
        return value

    def to_reading(self) -> SensorReading:
        """Convert to the domain SensorReading (extra metrics included)."""
        return SensorReading.from_dict(self.model_dump())


class MetricStatusResponse(BaseModel):
    """Display status of one metric."""

    metric: str = Field(..., description="Metric id")
    label: str = Field(..., description="Display label")
    unit: str | None = Field(default=None, description="Display unit")
    value: float | None = Field(default=None, description="Raw value, null when not available")
    status: MetricStatus = Field(..., description="NA, good, warning or critical")


class HealthScoreResponse(BaseModel):
    """Composite health index response."""

    score: int = Field(..., ge=0, le=100, description="Composite health index (0-100)")
    band: HealthBand = Field(..., description="excellent, good, fair or poor")
    component_scores: dict[str, float | None] = Field(
        default_factory=dict, description="Normalized score per weighted metric (null when absent)"
    )
    weights_used: dict[str, float] = Field(default_factory=dict, description="Weights of present metrics")
    metrics_used: int = Field(..., ge=0, description="Number of metrics that entered the index")
    timestamp: str | None = Field(default=None, description="Timestamp of the scored reading")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "score": 100,
                "band": "excellent",
                "component_scores": {"soil_moisture": 100.0, "rainfall": None},
                "weights_used": {"soil_moisture": 0.2},
                "metrics_used": 1,
                "timestamp": "2024-06-01T12:00:00+00:00",
            }
        }
    )


class ReadingEvaluationResponse(BaseModel):
    """Per-metric statuses plus the composite index for one reading."""

    timestamp: str = Field(..., description="Timestamp of the evaluated reading")
    statuses: list[MetricStatusResponse] = Field(default_factory=list)
    health: HealthScoreResponse


class PlantAnalysisResponse(BaseModel):
    """Image-based plant health assessment."""

    disease_status: DiseaseStatus = Field(..., description="healthy, suspected or unknown")
    growth_prediction: str = Field(..., description="Growth prediction text")
    recommendations: list[str] = Field(default_factory=list, description="Ordered recommendations")
    confidence: int = Field(..., ge=0, le=100, description="Confidence (60-95, 0 on failure)")
    color_stats: dict[str, Any] | None = Field(default=None, description="Pixel bucket counts and percentages")
    error: str | None = Field(default=None, description="Failure reason when analysis failed")
    analysis_method: str = Field(default="rgb_heuristic", description="Analyzer that produced the result")
