"""
Agronomic Signal Engine
========================
Facade that wires one MetricProfile into the threshold classifier, the
metric normalizer and the composite scorer, so classification and scoring
always read the same table, and exposes the image analysis path next to it.

The two paths never interact:
- reading -> per-metric statuses + composite health index
- image   -> PlantHealthAssessment
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from agrisignal.domain.exceptions import ValidationError
from agrisignal.domain.metric_profile import DEFAULT_METRIC_PROFILE, MetricProfile
from agrisignal.domain.plant_health import PlantHealthAssessment
from agrisignal.domain.sensor_reading import SensorReading
from agrisignal.enums import MetricId, MetricStatus
from agrisignal.schemas.health import (
    MetricStatusResponse,
    ReadingEvaluationResponse,
    SensorReadingPayload,
)
from agrisignal.services.ai.composite_health_scorer import CompositeHealthScorer, HealthScoreResult
from agrisignal.services.ai.metric_normalizer import MetricNormalizer
from agrisignal.services.ai.plant_analysis_service import Analyzer, PlantAnalysisService
from agrisignal.services.ai.threshold_classifier import ThresholdClassifier
from agrisignal.services.utilities.reading_history import ReadingHistory
from agrisignal.services.utilities.reading_simulator import ReadingSimulator

if TYPE_CHECKING:
    from agrisignal.config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass
class ReadingEvaluation:
    """Display statuses and composite index for one reading."""

    reading: SensorReading
    statuses: dict[str, MetricStatus]
    health: HealthScoreResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.reading.timestamp.isoformat(),
            "statuses": {key: status.value for key, status in self.statuses.items()},
            "values": self.reading.values(),
            "health": self.health.to_dict(),
        }

    def to_response(self) -> ReadingEvaluationResponse:
        """Render as the pydantic response schema."""
        statuses = []
        for key, status in self.statuses.items():
            try:
                metric = MetricId(key)
            except ValueError:
                metric = None
            statuses.append(
                MetricStatusResponse(
                    metric=key,
                    label=metric.label if metric else key.replace("_", " ").title(),
                    unit=metric.unit if metric else None,
                    value=self.reading.get(key),
                    status=status,
                )
            )
        return ReadingEvaluationResponse(
            timestamp=self.reading.timestamp.isoformat(),
            statuses=statuses,
            health=self.health.to_response(),
        )


class AgronomicSignalEngine:
    """Single entry point for reading evaluation and plant image analysis."""

    def __init__(
        self,
        profile: MetricProfile | None = None,
        analyzer: Analyzer | None = None,
        image_sample_size: int = 100,
        history: ReadingHistory | None = None,
        simulator: ReadingSimulator | None = None,
    ):
        """
        Initialize the engine.

        Args:
            profile: Metric profile shared by all scoring components
            analyzer: Optional custom image analyzer
            image_sample_size: Edge length of the image sample grid
            history: Rolling window filled by ``record``
            simulator: Source of demo readings for ``simulate``
        """
        self.profile = profile or DEFAULT_METRIC_PROFILE
        self.classifier = ThresholdClassifier(self.profile)
        self.normalizer = MetricNormalizer(self.profile)
        self.scorer = CompositeHealthScorer(self.profile, self.normalizer)
        self.plant_analysis = PlantAnalysisService(analyzer=analyzer, sample_size=image_sample_size)
        self.history = history if history is not None else ReadingHistory()
        self.simulator = simulator if simulator is not None else ReadingSimulator()

    @classmethod
    def from_config(cls, config: EngineConfig, analyzer: Analyzer | None = None) -> AgronomicSignalEngine:
        """Build an engine from runtime configuration."""
        from agrisignal.config import load_profile

        profile = load_profile(config)
        logger.info(
            "Signal engine ready: %d metrics, strict profile=%s, sample size=%d, history=%d",
            len(profile.metrics),
            config.strict_profile,
            config.image_sample_size,
            config.history_size,
        )
        return cls(
            profile=profile,
            analyzer=analyzer,
            image_sample_size=config.image_sample_size,
            history=ReadingHistory(maxlen=config.history_size),
            simulator=ReadingSimulator(seed=config.simulator_seed),
        )

    @staticmethod
    def parse_reading(data: SensorReading | Mapping[str, Any]) -> SensorReading:
        """
        Validate an incoming payload into a SensorReading.

        Raises:
            ValidationError: If a value is non-numeric or non-finite
        """
        if isinstance(data, SensorReading):
            return data
        try:
            payload = SensorReadingPayload.model_validate(dict(data))
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid sensor reading: {e.error_count()} error(s)",
                detail={"errors": e.errors(include_url=False)},
            ) from e
        return payload.to_reading()

    def classify(self, metric: MetricId | str, value: float | None) -> MetricStatus:
        return self.classifier.classify(metric, value)

    def normalize(self, metric: MetricId | str, value: float | None) -> float:
        return self.normalizer.normalize(metric, value)

    def score(self, data: SensorReading | Mapping[str, Any]) -> HealthScoreResult:
        return self.scorer.score(self.parse_reading(data))

    def evaluate(self, data: SensorReading | Mapping[str, Any]) -> ReadingEvaluation:
        """
        Classify every metric and compute the composite index.

        Args:
            data: SensorReading or a flat payload mapping

        Returns:
            ReadingEvaluation
        """
        reading = self.parse_reading(data)
        return ReadingEvaluation(
            reading=reading,
            statuses=self.classifier.classify_reading(reading),
            health=self.scorer.score(reading),
        )

    def analyze_image(self, image: Any) -> PlantHealthAssessment:
        return self.plant_analysis.analyze_image(image)

    def record(self, data: SensorReading | Mapping[str, Any]) -> ReadingEvaluation:
        """Evaluate a reading and append it to the rolling history."""
        evaluation = self.evaluate(data)
        self.history.append(evaluation.reading)
        return evaluation

    def simulate(self, count: int = 1) -> list[ReadingEvaluation]:
        """Record ``count`` simulated readings, spaced one hour apart."""
        return [self.record(reading) for reading in self.simulator.backfill(count)]
