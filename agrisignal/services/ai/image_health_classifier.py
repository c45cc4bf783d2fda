"""
Image Heuristic Classifier
===========================
Coarse, explainable plant-health check over a 100x100 RGB sample grid.

Every pixel is tested against three colour buckets:
- green-dominant: G > R and G > B
- yellow: R > 150, G > 150, B < 100
- brown: R > 100, G < 80, B < 80

The buckets are not mutually exclusive; a bright yellow-green pixel counts
as both green-dominant and yellow. The 15% disease and 30% vegetation
thresholds are calibrated against this overlapping count.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from agrisignal.domain.exceptions import ValidationError
from agrisignal.domain.plant_health import PixelColorStats, PlantHealthAssessment
from agrisignal.enums import DiseaseStatus
from agrisignal.services.ai.composite_health_scorer import round_half_up

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 100

FUNGAL_RECOMMENDATIONS = (
    "Investigate potential fungal infection",
    "Reduce watering frequency",
    "Improve air circulation",
    "Consider organic fungicide treatment",
)

NUTRIENT_RECOMMENDATIONS = (
    "Check soil nutrient levels",
    "Ensure adequate lighting",
    "Monitor for pest damage",
    "Consider fertilizer application",
)

HEALTHY_RECOMMENDATIONS = ("Continue current care routine",)

FAILURE_RECOMMENDATIONS = ("Ensure good lighting", "Position camera closer to plant")

FAILURE_GROWTH_PREDICTION = "Analysis failed. Please try again."


def failed_assessment(error: str | None = None) -> PlantHealthAssessment:
    """Assessment returned when an image cannot be decoded or analyzed."""
    return PlantHealthAssessment(
        disease_status=DiseaseStatus.UNKNOWN,
        growth_prediction=FAILURE_GROWTH_PREDICTION,
        recommendations=list(FAILURE_RECOMMENDATIONS),
        confidence=0,
        error=error,
    )


class ImageHeuristicClassifier:
    """
    Pixel-colour heuristic for plant health.

    Stateless: one instance can assess independent images concurrently.
    """

    DISEASE_THRESHOLD = 15.0  # % yellow + brown
    VEGETATION_THRESHOLD = 30.0  # % green-dominant
    HEALTHY_GROWTH_THRESHOLD = 60.0

    MIN_CONFIDENCE = 60
    MAX_CONFIDENCE = 95

    def __init__(self, sample_size: int = SAMPLE_SIZE):
        self.sample_size = sample_size

    def count_colors(self, pixels: Any) -> PixelColorStats:
        """
        Count green-dominant, yellow and brown pixels.

        Args:
            pixels: ``(size, size, 3)`` RGB array or nested sequence of RGB triples

        Returns:
            PixelColorStats with overlapping bucket counts
        """
        grid = self._as_grid(pixels)
        # float64: no uint8 wraparound and no truncation of float buffers
        r = grid[..., 0].astype(np.float64)
        g = grid[..., 1].astype(np.float64)
        b = grid[..., 2].astype(np.float64)

        green = (g > r) & (g > b)
        yellow = (r > 150) & (g > 150) & (b < 100)
        brown = (r > 100) & (g < 80) & (b < 80)

        return PixelColorStats(
            green_count=int(np.count_nonzero(green)),
            yellow_count=int(np.count_nonzero(yellow)),
            brown_count=int(np.count_nonzero(brown)),
            total_pixels=int(r.size),
        )

    def assess(self, pixels: Any) -> PlantHealthAssessment:
        """
        Assess plant health from a sample grid.

        Args:
            pixels: ``(100, 100, 3)`` RGB grid

        Returns:
            PlantHealthAssessment

        Raises:
            ValidationError: If the grid is empty or has the wrong shape
        """
        stats = self.count_colors(pixels)
        health_score = stats.health_score
        disease_indicator = stats.disease_indicator

        if disease_indicator > self.DISEASE_THRESHOLD:
            status = DiseaseStatus.SUSPECTED
            recommendations = list(FUNGAL_RECOMMENDATIONS)
        elif health_score < self.VEGETATION_THRESHOLD:
            status = DiseaseStatus.SUSPECTED
            recommendations = list(NUTRIENT_RECOMMENDATIONS)
        else:
            status = DiseaseStatus.HEALTHY
            recommendations = list(HEALTHY_RECOMMENDATIONS)

        raw_confidence = health_score + (100.0 - disease_indicator)
        confidence = round_half_up(min(self.MAX_CONFIDENCE, max(self.MIN_CONFIDENCE, raw_confidence)))

        if health_score > self.HEALTHY_GROWTH_THRESHOLD:
            growth_prediction = (
                "Healthy plant detected. Growth rate appears optimal with "
                f"{round_half_up(health_score)}% vegetation coverage."
            )
        else:
            growth_prediction = (
                f"Plant shows signs of stress. Estimated growth reduction of {round_half_up(100 - health_score)}%."
            )

        logger.debug(
            "Image heuristic: status=%s health=%.1f disease=%.1f confidence=%d",
            status.value,
            health_score,
            disease_indicator,
            confidence,
        )

        return PlantHealthAssessment(
            disease_status=status,
            growth_prediction=growth_prediction,
            recommendations=recommendations,
            confidence=confidence,
            color_stats=stats,
        )

    def _as_grid(self, pixels: Any) -> np.ndarray:
        try:
            grid = np.asarray(pixels)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Pixel buffer is not array-like: {e}") from e

        expected = (self.sample_size, self.sample_size, 3)
        if grid.size == 0:
            raise ValidationError("Pixel buffer is empty", detail={"expected_shape": expected})
        if grid.shape != expected:
            raise ValidationError(
                f"Pixel buffer must have shape {expected}, got {grid.shape}",
                detail={"expected_shape": expected, "shape": grid.shape},
            )
        if not np.issubdtype(grid.dtype, np.number):
            raise ValidationError(f"Pixel buffer must be numeric, got dtype {grid.dtype}")
        return grid
