"""
Composite Health Scorer
========================
Combines normalized metric scores into one 0-100 health index.

Only metrics present in the reading take part: the weights of absent
metrics are left out of both the weighted sum and the weight total, so a
partial reading is averaged over what it actually measured instead of
being penalized for missing sensors.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from agrisignal.domain.metric_profile import DEFAULT_METRIC_PROFILE, MetricProfile
from agrisignal.domain.sensor_reading import SensorReading, is_present
from agrisignal.enums import HealthBand
from agrisignal.services.ai.metric_normalizer import MetricNormalizer

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


@dataclass
class HealthScoreResult:
    """Composite health index with its per-metric breakdown."""

    score: int  # 0-100

    # Normalized score per weighted metric, None when the metric was absent
    component_scores: dict[str, float | None] = field(default_factory=dict)

    # Weights that actually entered the average
    weights_used: dict[str, float] = field(default_factory=dict)

    timestamp: datetime | None = None

    @property
    def band(self) -> HealthBand:
        return HealthBand.from_score(self.score)

    @property
    def metrics_used(self) -> list[str]:
        return list(self.weights_used)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API/display"""
        return {
            "score": self.score,
            "band": self.band.value,
            "component_scores": {
                key: round(value, 1) if value is not None else None for key, value in self.component_scores.items()
            },
            "weights_used": dict(self.weights_used),
            "metrics_used": len(self.weights_used),
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }

    def to_response(self):
        """Render as the pydantic response schema."""
        from agrisignal.schemas.health import HealthScoreResponse

        return HealthScoreResponse.model_validate(self.to_dict())


class CompositeHealthScorer:
    """
    Weighted average of normalized metric scores.

    Default weights:
    - Soil Moisture: 20%
    - Temperature: 15%
    - pH: 15%
    - Humidity, Light, Rainfall, Nitrogen: 10% each
    - Phosphorous, Potassium: 5% each

    The weights are not assumed to sum to 1.0.
    """

    def __init__(
        self,
        profile: MetricProfile | None = None,
        normalizer: MetricNormalizer | None = None,
    ):
        """
        Initialize the composite scorer.

        Args:
            profile: Weight table (and ranges for the default normalizer)
            normalizer: Normalizer sharing the same profile
        """
        self.profile = profile or DEFAULT_METRIC_PROFILE
        self.normalizer = normalizer or MetricNormalizer(self.profile)

    def score(self, reading: SensorReading) -> HealthScoreResult:
        """
        Score a (possibly partial) reading.

        Args:
            reading: Sensor reading to score

        Returns:
            HealthScoreResult with the rounded index and breakdown
        """
        weighted_sum = 0.0
        weight_total = 0.0
        component_scores: dict[str, float | None] = {}
        weights_used: dict[str, float] = {}

        for metric, weight in self.profile.weights.items():
            value = reading.get(metric)
            if not is_present(value):
                component_scores[metric] = None
                continue

            normalized = self.normalizer.normalize(metric, value)
            component_scores[metric] = normalized
            weighted_sum += normalized * weight
            weight_total += weight
            weights_used[metric] = weight

        if weight_total > 0:
            index = round_half_up(weighted_sum / weight_total)
        else:
            index = 0

        # Guard against out-of-range normalizers supplied by callers
        index = max(0, min(100, index))

        logger.debug(
            "Composite health index %d from %d/%d weighted metrics",
            index,
            len(weights_used),
            len(self.profile.weights),
        )

        return HealthScoreResult(
            score=index,
            component_scores=component_scores,
            weights_used=weights_used,
            timestamp=reading.timestamp,
        )
