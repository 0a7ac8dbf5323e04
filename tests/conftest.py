"""Pytest configuration and shared fixtures."""

import math
import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from Color import Color  # noqa: E402
from Objects import create_glass_sphere  # noqa: E402
from World import World  # noqa: E402

SQRT2_2 = math.sqrt(2.0) / 2.0


def assert_color(actual, expected, abs_tol=1e-4):
    assert actual.r == pytest.approx(expected.r, abs=abs_tol)
    assert actual.g == pytest.approx(expected.g, abs=abs_tol)
    assert actual.b == pytest.approx(expected.b, abs=abs_tol)


@pytest.fixture
def default_world():
    """Provide the two-sphere test world."""
    return World.default_world()


@pytest.fixture
def outside_color():
    """Color of the default world seen head-on from (0, 0, -5)."""
    return Color(0.38066, 0.47583, 0.2855)


@pytest.fixture
def glass_sphere():
    """Factory for clear glass spheres with a given transform and index."""

    def make(transform=None, refractive_index=1.5):
        return create_glass_sphere(transform, refractive_index)

    return make
