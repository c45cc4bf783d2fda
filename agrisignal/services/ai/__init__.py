"""
AI Services
===========
Scoring and classification services of the signal evaluation engine.

Services:
- ThresholdClassifier: per-metric display status
- MetricNormalizer: per-metric 0-100 fitness score
- CompositeHealthScorer: weighted composite health index
- ImageHeuristicClassifier: pixel-colour plant health heuristic
- PlantAnalysisService: image decoding + analyzer boundary
- AgronomicSignalEngine: facade sharing one metric profile
"""

from agrisignal.services.ai.composite_health_scorer import CompositeHealthScorer, HealthScoreResult
from agrisignal.services.ai.engine import AgronomicSignalEngine, ReadingEvaluation
from agrisignal.services.ai.image_health_classifier import ImageHeuristicClassifier, failed_assessment
from agrisignal.services.ai.metric_normalizer import MetricNormalizer, normalize_value
from agrisignal.services.ai.plant_analysis_service import PlantAnalysisService
from agrisignal.services.ai.threshold_classifier import ThresholdClassifier

__all__ = [
    "AgronomicSignalEngine",
    "CompositeHealthScorer",
    "HealthScoreResult",
    "ImageHeuristicClassifier",
    "MetricNormalizer",
    "PlantAnalysisService",
    "ReadingEvaluation",
    "ThresholdClassifier",
    "failed_assessment",
    "normalize_value",
]
