"""
Tests for AgronomicSignalEngine.

The engine shares one metric profile between classification and scoring
and validates raw payloads through the pydantic schema.
"""

import json
from datetime import datetime, timezone

import pytest

from agrisignal.config import EngineConfig
from agrisignal.domain.exceptions import ConfigurationError, ValidationError
from agrisignal.domain.metric_profile import DEFAULT_METRIC_PROFILE
from agrisignal.domain.sensor_reading import SensorReading
from agrisignal.enums import DiseaseStatus, HealthBand, MetricId, MetricStatus
from agrisignal.services.ai.engine import AgronomicSignalEngine
from agrisignal.services.utilities import ReadingSimulator


class TestParseReading:
    def test_payload_with_na_markers(self, engine):
        reading = engine.parse_reading({"soil_moisture": "NA", "temperature": "25", "humidity": None})
        assert reading.soil_moisture is None
        assert reading.temperature == 25.0
        assert reading.humidity is None

    def test_extra_metrics_are_kept(self, engine):
        reading = engine.parse_reading({"leaf_wetness": 7})
        assert reading.extra_metrics == {"leaf_wetness": 7.0}

    def test_reading_passes_through(self, engine):
        reading = SensorReading(temperature=20)
        assert engine.parse_reading(reading) is reading

    @pytest.mark.parametrize(
        "payload",
        [
            {"temperature": "hot"},
            {"temperature": float("nan")},
            {"humidity": float("inf")},
            {"timestamp": "not a date"},
        ],
    )
    def test_invalid_payload_raises(self, engine, payload):
        with pytest.raises(ValidationError) as exc_info:
            engine.parse_reading(payload)
        assert exc_info.value.detail["errors"]

    def test_invalid_extra_metric_raises(self, engine):
        with pytest.raises(ValidationError):
            engine.parse_reading({"leaf_wetness": "soaked"})


class TestEvaluate:
    def test_statuses_and_index(self, engine):
        evaluation = engine.evaluate(
            {"soil_moisture": 30, "temperature": 25, "humidity": 55, "ph_level": 6.8, "rainfall": "NA"}
        )

        assert evaluation.statuses["soil_moisture"] == MetricStatus.GOOD
        assert evaluation.statuses["rainfall"] == MetricStatus.NA
        assert evaluation.health.score == 100
        assert evaluation.health.band == HealthBand.EXCELLENT

    def test_partial_reading(self, engine):
        evaluation = engine.evaluate({"soil_moisture": 5, "temperature": 25})
        assert evaluation.statuses["soil_moisture"] == MetricStatus.CRITICAL
        assert evaluation.health.score == 66

    def test_to_dict(self, engine):
        data = engine.evaluate({"temperature": 35}).to_dict()
        assert data["statuses"]["temperature"] == "warning"
        assert data["values"]["temperature"] == 35.0
        assert data["health"]["metrics_used"] == 1

    def test_to_response(self, engine):
        response = engine.evaluate({"soil_moisture": 30, "leaf_wetness": 2}).to_response()
        by_metric = {s.metric: s for s in response.statuses}

        assert by_metric["soil_moisture"].label == MetricId.SOIL_MOISTURE.label
        assert by_metric["soil_moisture"].unit == MetricId.SOIL_MOISTURE.unit
        assert by_metric["leaf_wetness"].label == "Leaf Wetness"
        assert by_metric["leaf_wetness"].unit is None
        assert by_metric["nitrogen"].status == MetricStatus.NA
        assert response.health.score == 100

    def test_classification_and_scoring_share_profile(self, engine):
        assert engine.classifier.profile is engine.scorer.profile is engine.normalizer.profile


def test_single_metric_helpers(engine):
    assert engine.classify(MetricId.PH_LEVEL, 5.7) == MetricStatus.WARNING
    assert engine.normalize(MetricId.SOIL_MOISTURE, 5) == pytest.approx(40.0)
    assert engine.score({"temperature": 25}).score == 100


def test_analyze_image(engine, green_png):
    assessment = engine.analyze_image(green_png)
    assert assessment.disease_status == DiseaseStatus.HEALTHY
    assert engine.analyze_image(b"junk").disease_status == DiseaseStatus.UNKNOWN


class TestFromConfig:
    def test_defaults(self):
        engine = AgronomicSignalEngine.from_config(EngineConfig(metric_profile_path=""))
        assert engine.profile is DEFAULT_METRIC_PROFILE

    def test_profile_file(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(json.dumps({"metrics": {"temperature": {"weight": 0.9}}}), encoding="utf-8")

        engine = AgronomicSignalEngine.from_config(EngineConfig(metric_profile_path=str(path)))
        assert engine.profile.weight_for("temperature") == 0.9
        assert engine.classifier.profile is engine.profile

    def test_degenerate_profile_rejected(self, tmp_path):
        path = tmp_path / "profile.json"
        path.write_text(
            json.dumps({"metrics": {"rainfall": {"range": {"min": 0, "max": 50, "optimal": [1, 50]}}}}),
            encoding="utf-8",
        )
        with pytest.raises(ConfigurationError):
            AgronomicSignalEngine.from_config(EngineConfig(metric_profile_path=str(path)))

        lenient = AgronomicSignalEngine.from_config(
            EngineConfig(metric_profile_path=str(path), strict_profile=False)
        )
        assert lenient.normalize("rainfall", 60) == 0.0

    def test_history_and_simulator_follow_config(self):
        config = EngineConfig(history_size=48, simulator_seed=5)
        engine = AgronomicSignalEngine.from_config(config)
        end = datetime(2024, 6, 1, tzinfo=timezone.utc)

        assert engine.history.maxlen == 48
        assert engine.simulator.generate(end).values() == ReadingSimulator(seed=5).generate(end).values()


class TestHistory:
    def test_record_appends_reading(self, engine):
        evaluation = engine.record({"temperature": 25})

        assert len(engine.history) == 1
        assert engine.history.latest() is evaluation.reading
        assert evaluation.health.score == 100

    def test_simulate_fills_history_window(self):
        engine = AgronomicSignalEngine.from_config(EngineConfig(history_size=6, simulator_seed=1))
        evaluations = engine.simulate(10)

        assert len(evaluations) == 10
        assert len(engine.history) == 6
        assert engine.history.latest() is evaluations[-1].reading
        assert all(0 <= e.health.score <= 100 for e in evaluations)
