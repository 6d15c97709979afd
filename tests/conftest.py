"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pytrendline.trendline import Series


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def exact_line():
    """Samples of y = 2x + 1."""
    x = np.arange(10, dtype=np.float64)
    return Series.from_arrays(x, 2.0 * x + 1.0, title='Line')


@pytest.fixture
def noisy_line(rng):
    """Noisy samples of y = 0.5x - 3 with their true slope and intercept."""
    x = np.linspace(0.0, 20.0, 60)
    y = 0.5 * x - 3.0 + rng.standard_normal(60) * 0.2
    return Series.from_arrays(x, y, title='Noisy'), 0.5, -3.0


@pytest.fixture
def exponential_series():
    """Samples of y = 3 e^x at x = 0..3."""
    x = np.arange(4, dtype=np.float64)
    return Series.from_arrays(x, 3.0 * np.exp(x), title='Growth')


@pytest.fixture
def collinear_data(rng):
    """Design with two identical columns (should fail)."""
    n = 50
    x = rng.standard_normal(n)
    X = np.column_stack([np.ones(n), x, x])
    y = rng.standard_normal(n)
    return X, y
