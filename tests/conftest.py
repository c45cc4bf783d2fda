"""
Shared test fixtures for the agrisignal test suite.

Provides:
- The default metric profile and an engine wired to it
- Synthetic 100x100 RGB pixel grids (green, brown, yellow, mixed)
- PNG-encoded bytes for the image decoding path

Usage:
    def test_example(engine, green_grid):
        assessment = engine.plant_analysis.analyze_pixels(green_grid)
        assert assessment.confidence == 95
"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from agrisignal.domain.metric_profile import DEFAULT_METRIC_PROFILE
from agrisignal.services.ai.engine import AgronomicSignalEngine
from agrisignal.utils.image import encode_png

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("agrisignal").setLevel(logging.WARNING)


GREEN = (30, 160, 40)
BROWN = (140, 60, 40)
YELLOW = (200, 190, 50)
GREY = (120, 120, 120)


def solid_grid(rgb: tuple[int, int, int], size: int = 100) -> np.ndarray:
    """A ``size`` x ``size`` RGB grid filled with one colour."""
    grid = np.empty((size, size, 3), dtype=np.uint8)
    grid[...] = rgb
    return grid


def mixed_grid(fractions: dict[tuple[int, int, int], float], fill=GREY, size: int = 100) -> np.ndarray:
    """Grid whose first rows are painted with the given colours in order."""
    grid = solid_grid(fill, size)
    flat = grid.reshape(-1, 3)
    start = 0
    for rgb, fraction in fractions.items():
        count = int(round(fraction * flat.shape[0]))
        flat[start : start + count] = rgb
        start += count
    return grid


# ========================== Profile / Engine ===============================


@pytest.fixture()
def profile():
    """Built-in metric profile."""
    return DEFAULT_METRIC_PROFILE


@pytest.fixture()
def engine(profile):
    """Engine wired to the built-in profile."""
    return AgronomicSignalEngine(profile=profile)


# ========================== Pixel Grids ====================================


@pytest.fixture()
def green_grid():
    return solid_grid(GREEN)


@pytest.fixture()
def brown_grid():
    return solid_grid(BROWN)


@pytest.fixture()
def yellow_grid():
    return solid_grid(YELLOW)


@pytest.fixture()
def grey_grid():
    return solid_grid(GREY)


@pytest.fixture()
def green_png():
    """PNG bytes of a 640x480 uniformly green frame."""
    return encode_png(np.full((480, 640, 3), GREEN, dtype=np.uint8))


@pytest.fixture()
def make_grid():
    """Factory for solid-colour grids: ``make_grid(rgb, size=100)``."""
    return solid_grid


@pytest.fixture()
def make_mixed_grid():
    """Factory for mixed-colour grids: ``make_mixed_grid({rgb: fraction}, fill=GREY)``."""
    return mixed_grid
