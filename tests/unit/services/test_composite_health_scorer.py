"""
Tests for CompositeHealthScorer.

The index is the weighted average of normalized scores over the metrics
present in the reading, rounded half-up.
"""

import numpy as np
import pytest

from agrisignal.domain.metric_profile import MetricProfile, MetricRange
from agrisignal.domain.sensor_reading import SensorReading
from agrisignal.enums import HealthBand, MetricId
from agrisignal.services.ai.composite_health_scorer import CompositeHealthScorer, round_half_up
from agrisignal.services.ai.metric_normalizer import MetricNormalizer
from agrisignal.services.utilities.reading_simulator import ReadingSimulator


@pytest.fixture()
def scorer(profile):
    return CompositeHealthScorer(profile)


class TestScore:
    def test_empty_reading_scores_zero(self, scorer):
        result = scorer.score(SensorReading())
        assert result.score == 0
        assert result.weights_used == {}
        assert result.band == HealthBand.POOR

    def test_partial_optimal_reading_scores_100(self, scorer):
        reading = SensorReading(soil_moisture=30, temperature=25, humidity=55, ph_level=6.8)
        result = scorer.score(reading)

        assert result.score == 100
        assert result.band == HealthBand.EXCELLENT
        assert set(result.metrics_used) == {"soil_moisture", "temperature", "humidity", "ph_level"}

    def test_absent_weights_are_excluded(self, scorer):
        # (40 * 0.20 + 100 * 0.15) / 0.35 = 65.71
        result = scorer.score(SensorReading(soil_moisture=5, temperature=25))
        assert result.score == 66
        assert result.band == HealthBand.GOOD

    def test_breakdown_marks_absent_metrics(self, scorer):
        result = scorer.score(SensorReading(soil_moisture=5, temperature=25))

        assert result.component_scores["soil_moisture"] == pytest.approx(40.0)
        assert result.component_scores["temperature"] == 100.0
        assert result.component_scores["rainfall"] is None
        assert result.weights_used == {"soil_moisture": 0.20, "temperature": 0.15}

    def test_numpy_nan_is_absent(self, scorer):
        result = scorer.score(SensorReading(humidity=np.float32("nan"), temperature=25))
        assert result.score == 100
        assert result.component_scores["humidity"] is None
        assert "humidity" not in result.weights_used

    def test_zero_rainfall_is_present(self, scorer):
        result = scorer.score(SensorReading(rainfall=0))
        assert "rainfall" in result.weights_used
        assert result.score == 20

    def test_timestamp_is_carried(self, scorer):
        reading = SensorReading(temperature=25)
        assert scorer.score(reading).timestamp == reading.timestamp


class TestWeights:
    def test_weights_need_not_sum_to_one(self):
        profile = MetricProfile(
            ranges={"soil_moisture": MetricRange(0, 20, 40, 60), "temperature": MetricRange(0, 18, 32, 50)},
            weights={"soil_moisture": 2, "temperature": 2},
        )
        result = CompositeHealthScorer(profile).score(SensorReading(soil_moisture=5, temperature=25))
        assert result.score == 70

    def test_half_rounds_up(self):
        # a: gap 11 / span 16 -> 45, b: optimal -> 100; mean 72.5
        profile = MetricProfile(
            ranges={"a": MetricRange(0, 16, 32, 64), "b": MetricRange(0, 16, 32, 64)},
            weights={"a": 1, "b": 1},
        )
        reading = SensorReading(extra_metrics={"a": 5.0, "b": 20.0})
        assert CompositeHealthScorer(profile).score(reading).score == 73

    def test_configured_extra_metric_is_weighted(self):
        profile = MetricProfile(weights={"leaf_wetness": 1.0})
        result = CompositeHealthScorer(profile).score(SensorReading(extra_metrics={"leaf_wetness": 4.0}))
        # no range configured -> neutral score
        assert result.score == 50

    def test_unweighted_extra_metric_is_ignored(self, scorer):
        reading = SensorReading(temperature=25, extra_metrics={"leaf_wetness": 4.0})
        assert scorer.score(reading).score == 100


@pytest.mark.parametrize("seed", range(5))
def test_matches_weighted_average_of_present_metrics(profile, scorer, seed):
    normalizer = MetricNormalizer(profile)
    reading = ReadingSimulator(seed=seed).generate()
    # drop every other metric to exercise renormalization
    for index, metric in enumerate(MetricId):
        if (index + seed) % 2:
            setattr(reading, metric.value, None)

    present = [m for m in profile.weights if reading.get(m) is not None]
    expected = sum(normalizer.normalize(m, reading.get(m)) * profile.weights[m] for m in present) / sum(
        profile.weights[m] for m in present
    )

    result = scorer.score(reading)
    assert result.score == round_half_up(expected)
    assert 0 <= result.score <= 100


@pytest.mark.parametrize("value, expected", [(0.5, 1), (1.5, 2), (2.5, 3), (65.49, 65), (99.5, 100)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_to_dict_and_response(scorer):
    result = scorer.score(SensorReading(soil_moisture=5, temperature=25))
    data = result.to_dict()
    assert data["score"] == 66
    assert data["band"] == "good"
    assert data["metrics_used"] == 2

    response = result.to_response()
    assert response.score == 66
    assert response.band == HealthBand.GOOD
    assert response.component_scores["rainfall"] is None


@pytest.mark.parametrize(
    "score, band",
    [(100, HealthBand.EXCELLENT), (80, HealthBand.EXCELLENT), (79, HealthBand.GOOD), (60, HealthBand.GOOD),
     (59, HealthBand.FAIR), (40, HealthBand.FAIR), (39, HealthBand.POOR), (0, HealthBand.POOR)],
)
def test_health_band_thresholds(score, band):
    assert HealthBand.from_score(score) == band
