"""
Enums Module
============

Enumeration types for the agrisignal engine.
"""

from agrisignal.enums.common import DiseaseStatus, HealthBand, MetricId, MetricStatus

__all__ = [
    "MetricId",
    "MetricStatus",
    "DiseaseStatus",
    "HealthBand",
]
