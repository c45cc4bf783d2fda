"""
Plant Health Domain Objects
=============================
Dataclasses produced by the image heuristic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple

from agrisignal.enums import DiseaseStatus


class PixelSample(NamedTuple):
    """One RGB sample (each channel 0-255) from the 100x100 downsample."""

    r: int
    g: int
    b: int


@dataclass(frozen=True)
class PixelColorStats:
    """Bucket counts from one pass over the pixel grid.

    Buckets overlap: a pixel can count as both green-dominant and yellow.
    """

    green_count: int
    yellow_count: int
    brown_count: int
    total_pixels: int

    @property
    def health_score(self) -> float:
        """Green-dominant pixels as a percentage of all pixels."""
        if self.total_pixels == 0:
            return 0.0
        return 100.0 * self.green_count / self.total_pixels

    @property
    def disease_indicator(self) -> float:
        """Yellow plus brown pixels as a percentage of all pixels."""
        if self.total_pixels == 0:
            return 0.0
        return 100.0 * (self.yellow_count + self.brown_count) / self.total_pixels

    def to_dict(self) -> dict[str, Any]:
        return {
            "counts": {
                "green": self.green_count,
                "yellow": self.yellow_count,
                "brown": self.brown_count,
                "total": self.total_pixels,
            },
            "health_score": round(self.health_score, 2),
            "disease_indicator": round(self.disease_indicator, 2),
        }


@dataclass
class PlantHealthAssessment:
    """Plant health assessment returned by the image path."""

    disease_status: DiseaseStatus
    growth_prediction: str
    recommendations: list[str]
    confidence: int  # 60-95, or 0 on failure
    color_stats: PixelColorStats | None = None
    error: str | None = None

    # Analysis metadata
    analysis_method: str = "rgb_heuristic"
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.disease_status == DiseaseStatus.UNKNOWN and self.confidence == 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary"""
        return {
            "disease_status": self.disease_status.value,
            "growth_prediction": self.growth_prediction,
            "recommendations": list(self.recommendations),
            "confidence": self.confidence,
            "color_stats": self.color_stats.to_dict() if self.color_stats else None,
            "error": self.error,
            "analysis_method": self.analysis_method,
        }

    def to_response(self):
        """Render as the pydantic response schema."""
        from agrisignal.schemas.health import PlantAnalysisResponse

        return PlantAnalysisResponse.model_validate(self.to_dict())

    def get_summary(self) -> str:
        """Get human-readable summary"""
        if self.disease_status == DiseaseStatus.HEALTHY:
            return f"Plant looks healthy (confidence: {self.confidence}%)"
        if self.disease_status == DiseaseStatus.UNKNOWN:
            return "Analysis failed"
        return f"Suspected issue: {self.recommendations[0] if self.recommendations else 'unknown cause'}"
