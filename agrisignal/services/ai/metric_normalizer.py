"""
Metric Normalizer
==================
Maps a raw metric value to a 0-100 fitness score.

- Inside the optimal window the score is a flat 100.
- Outside it the score decays by 80 points over the distance between the
  optimal edge and the absolute bound, continuing linearly past the bound
  until it is floored at 0.
- Absent values score 0 and unconfigured metrics score a neutral 50.
"""

from __future__ import annotations

import logging

from agrisignal.domain.metric_profile import DEFAULT_METRIC_PROFILE, MetricProfile, MetricRange
from agrisignal.domain.sensor_reading import is_present
from agrisignal.enums import MetricId

logger = logging.getLogger(__name__)

PERFECT_SCORE = 100.0
NEUTRAL_SCORE = 50.0
ABSENT_SCORE = 0.0

# Points lost between the optimal edge and the absolute bound
DECAY_SPAN = 80.0


def normalize_value(metric_range: MetricRange, value: float) -> float:
    """
    Score ``value`` against ``metric_range``.

    A zero-width decay slope (optimal edge equal to the absolute bound)
    scores 100 exactly at the edge and 0 beyond it, never NaN or Infinity.

    Args:
        metric_range: Bounds and optimal window
        value: Raw value (must be present)

    Returns:
        Score in [0, 100]
    """
    if metric_range.in_optimal(value):
        return PERFECT_SCORE

    if value < metric_range.optimal_min:
        span = metric_range.optimal_min - metric_range.minimum
        gap = metric_range.optimal_min - value
    else:
        span = metric_range.maximum - metric_range.optimal_max
        gap = value - metric_range.optimal_max

    if span <= 0:
        return ABSENT_SCORE

    distance = gap / span
    return max(0.0, PERFECT_SCORE - distance * DECAY_SPAN)


class MetricNormalizer:
    """Normalize metric values against the ranges of a profile."""

    def __init__(self, profile: MetricProfile | None = None):
        self.profile = profile or DEFAULT_METRIC_PROFILE

    def normalize(self, metric: MetricId | str, value: float | None) -> float:
        """
        Normalize a single value.

        Args:
            metric: Metric id (enum or plain string)
            value: Raw value, or None when absent

        Returns:
            Score in [0, 100]
        """
        if not is_present(value):
            return ABSENT_SCORE

        metric_range = self.profile.range_for(metric)
        if metric_range is None:
            return NEUTRAL_SCORE

        return normalize_value(metric_range, value)
