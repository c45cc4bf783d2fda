"""Unit tests for agrisignal.domain.sensor_reading."""

from datetime import datetime, timezone

import numpy as np
import pytest

from agrisignal.domain.exceptions import ValidationError
from agrisignal.domain.sensor_reading import SensorReading, is_present
from agrisignal.enums import MetricId


def test_absent_is_distinct_from_zero():
    reading = SensorReading(rainfall=0.0)
    assert reading.get(MetricId.RAINFALL) == 0.0
    assert reading.get(MetricId.NITROGEN) is None
    assert reading.present_metrics() == ["rainfall"]


def test_empty_reading():
    reading = SensorReading()
    assert reading.is_empty()
    assert set(reading.values()) == {m.value for m in MetricId}


def test_is_present_treats_nan_as_absent():
    assert is_present(0)
    assert not is_present(None)
    assert not is_present(float("nan"))
    assert not is_present(np.float32("nan"))
    assert not is_present(np.float64("nan"))
    assert is_present(np.float32(0.0))


def test_from_dict_accepts_numpy_scalars():
    reading = SensorReading.from_dict({"temperature": np.float32(25.5), "nitrogen": np.int64(40)})
    assert reading.temperature == 25.5
    assert reading.nitrogen == 40.0


def test_from_dict_maps_na_markers_to_absent():
    reading = SensorReading.from_dict(
        {"soil_moisture": "NA", "temperature": None, "humidity": "55.5", "ph_level": 6.8}
    )
    assert reading.soil_moisture is None
    assert reading.temperature is None
    assert reading.humidity == 55.5
    assert reading.ph_level == 6.8
    assert reading.light_intensity is None


def test_from_dict_parses_timestamp():
    reading = SensorReading.from_dict({"timestamp": "2024-06-01T12:00:00Z", "temperature": 25})
    assert reading.timestamp == datetime(2024, 6, 1, 12, tzinfo=timezone.utc)


def test_from_dict_defaults_timestamp_to_now():
    reading = SensorReading.from_dict({"temperature": 25})
    assert reading.timestamp.tzinfo is not None


def test_from_dict_keeps_unknown_metrics_as_extra():
    reading = SensorReading.from_dict({"leaf_wetness": 12, "co2": "NA"})
    assert reading.extra_metrics == {"leaf_wetness": 12.0}
    assert reading.get("leaf_wetness") == 12.0
    assert "leaf_wetness" in reading.present_metrics()


@pytest.mark.parametrize("value", ["wet", float("nan"), float("inf"), True, [1]])
def test_from_dict_rejects_bad_values(value):
    with pytest.raises(ValidationError) as exc_info:
        SensorReading.from_dict({"soil_moisture": value})
    assert exc_info.value.detail["metric"] == "soil_moisture"


def test_from_dict_rejects_bad_timestamp():
    with pytest.raises(ValidationError):
        SensorReading.from_dict({"timestamp": "yesterday"})


def test_to_dict_contains_all_metrics():
    reading = SensorReading(timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc), ph_level=7.0)
    data = reading.to_dict()
    assert data["timestamp"] == "2024-01-01T00:00:00+00:00"
    assert data["ph_level"] == 7.0
    assert data["potassium"] is None
