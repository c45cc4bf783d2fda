"""
Common Enumerations
====================

Enums shared by the scoring path and the image path.
"""

from enum import Enum


class MetricId(str, Enum):
    """
    The nine agronomic signals a sensor reading can carry.
    Used by: sensor_reading, metric_profile, threshold_classifier, composite_health_scorer
    """

    SOIL_MOISTURE = "soil_moisture"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    PH_LEVEL = "ph_level"
    LIGHT_INTENSITY = "light_intensity"
    RAINFALL = "rainfall"
    NITROGEN = "nitrogen"
    PHOSPHOROUS = "phosphorous"
    POTASSIUM = "potassium"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _METRIC_LABELS[self]

    @property
    def unit(self) -> str:
        return _METRIC_UNITS[self]


_METRIC_LABELS = {
    MetricId.SOIL_MOISTURE: "Soil Moisture",
    MetricId.TEMPERATURE: "Temperature",
    MetricId.HUMIDITY: "Humidity",
    MetricId.PH_LEVEL: "pH Level",
    MetricId.LIGHT_INTENSITY: "Light Intensity",
    MetricId.RAINFALL: "Rainfall",
    MetricId.NITROGEN: "Nitrogen (N)",
    MetricId.PHOSPHOROUS: "Phosphorous (P)",
    MetricId.POTASSIUM: "Potassium (K)",
}

_METRIC_UNITS = {
    MetricId.SOIL_MOISTURE: "%",
    MetricId.TEMPERATURE: "°C",
    MetricId.HUMIDITY: "%",
    MetricId.PH_LEVEL: "pH",
    MetricId.LIGHT_INTENSITY: "lux",
    MetricId.RAINFALL: "mm",
    MetricId.NITROGEN: "mg/kg",
    MetricId.PHOSPHOROUS: "mg/kg",
    MetricId.POTASSIUM: "mg/kg",
}


class MetricStatus(str, Enum):
    """
    Display status of a single metric value.
    Used by: threshold_classifier
    """

    NA = "NA"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    def __str__(self) -> str:
        return self.value


class DiseaseStatus(str, Enum):
    """
    Outcome of the image heuristic.
    Used by: image_health_classifier, plant_analysis_service
    """

    HEALTHY = "healthy"
    SUSPECTED = "suspected"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class HealthBand(str, Enum):
    """
    Qualitative band for a composite health index.
    Used by: composite_health_scorer
    """

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_score(cls, score: float) -> "HealthBand":
        if score >= 80:
            return cls.EXCELLENT
        if score >= 60:
            return cls.GOOD
        if score >= 40:
            return cls.FAIR
        return cls.POOR
