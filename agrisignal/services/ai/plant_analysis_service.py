"""
Plant Analysis Service
=======================
Entry point for camera-based plant-health checks.

Decodes a captured image, downsamples it to the 100x100 sample grid and
runs an analyzer over it. The analyzer is the built-in colour heuristic
unless a custom callable (for example a trained model) is supplied.

Callers always receive a well-formed PlantHealthAssessment: decode,
sampling and analyzer failures come back as the "unknown" outcome with
the error message attached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import numpy as np

from agrisignal.domain.plant_health import PlantHealthAssessment
from agrisignal.services.ai.image_health_classifier import (
    SAMPLE_SIZE,
    ImageHeuristicClassifier,
    failed_assessment,
)
from agrisignal.utils.image import to_sample_grid

logger = logging.getLogger(__name__)

Analyzer = Callable[[np.ndarray], PlantHealthAssessment]


class PlantAnalysisService:
    """
    Image acquisition boundary for the plant-health heuristic.

    Holds no per-call state; safe to share across threads.
    """

    def __init__(
        self,
        analyzer: Analyzer | None = None,
        classifier: ImageHeuristicClassifier | None = None,
        sample_size: int = SAMPLE_SIZE,
    ):
        """
        Initialize plant analysis service.

        Args:
            analyzer: Custom analyzer called with the RGB sample grid
            classifier: Heuristic used when no custom analyzer is given
            sample_size: Edge length of the sample grid
        """
        self.classifier = classifier or ImageHeuristicClassifier(sample_size=sample_size)
        self.analyzer = analyzer
        self.sample_size = sample_size

    @property
    def uses_custom_analyzer(self) -> bool:
        return self.analyzer is not None

    def analyze_image(self, image: Any) -> PlantHealthAssessment:
        """
        Analyze a captured image.

        Args:
            image: Encoded bytes, data URL, base64 string, path or RGB array

        Returns:
            PlantHealthAssessment (never raises)
        """
        try:
            grid = to_sample_grid(image, self.sample_size)
            return self.analyze_pixels(grid)
        except Exception as e:
            logger.error("Plant image analysis failed: %s", e, exc_info=True)
            return failed_assessment(str(e) or type(e).__name__)

    def analyze_pixels(self, pixels: Any) -> PlantHealthAssessment:
        """
        Run the analyzer over a ready sample grid.

        Unlike ``analyze_image`` this propagates analyzer errors.
        """
        if self.analyzer is None:
            return self.classifier.assess(pixels)

        result = self.analyzer(np.asarray(pixels))
        if not isinstance(result, PlantHealthAssessment):
            raise TypeError(f"Custom analyzer returned {type(result).__name__}, expected PlantHealthAssessment")
        if result.analysis_method == "rgb_heuristic":
            result.analysis_method = "custom"
        return result
