"""Shared test fixtures for pyinterp tests."""

import math

import numpy as np
import pytest

from pyinterp import CubicSpline, chebyshev_grid, uniform_grid


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------

def x_log10(x):
    """x * log10(x + 1) - 1"""
    return x * math.log10(x + 1) - 1


def abs_x(x):
    """|x|"""
    return abs(x)


def runge(x):
    """1 / (1 + 25 x^2)"""
    return 1.0 / (1.0 + 25.0 * x * x)


def diag_dominant_system(n, seed=42):
    """Random strictly diagonally dominant A and random b."""
    rng = np.random.default_rng(seed)
    A = rng.uniform(-1.0, 1.0, (n, n))
    A[np.diag_indices(n)] = np.abs(A).sum(axis=1) + 1.0
    b = rng.uniform(-10.0, 10.0, n)
    return A, b


# ---------------------------------------------------------------------------
# Grid fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module")
def smooth_data():
    """x*log10(x+1)-1 on [1, 6], n=5 (6 uniform nodes)."""
    return uniform_grid(1.0, 6.0, 5, x_log10)


@pytest.fixture(scope="module")
def abs_uniform():
    """|x| on [-3, 3], n=9 (10 uniform nodes)."""
    return uniform_grid(-3.0, 3.0, 9, abs_x)


@pytest.fixture(scope="module")
def abs_chebyshev():
    """|x| on [-3, 3], n=9 (10 Chebyshev nodes)."""
    return chebyshev_grid(-3.0, 3.0, 9, abs_x)


@pytest.fixture(scope="module")
def nonuniform_data():
    """sin(x) on irregular nodes in [0, 4]."""
    from pyinterp import SampleSet

    x = np.array([0.0, 0.3, 0.9, 1.0, 1.8, 2.6, 3.1, 4.0])
    return SampleSet(x, np.sin(x))


# ---------------------------------------------------------------------------
# Spline fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module")
def smooth_spline(smooth_data):
    return CubicSpline(smooth_data)


@pytest.fixture(scope="module")
def abs_spline(abs_uniform):
    return CubicSpline(abs_uniform)


@pytest.fixture(scope="module")
def nonuniform_spline(nonuniform_data):
    return CubicSpline(nonuniform_data)
