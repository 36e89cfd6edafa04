"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def uniform_prior(rng):
    """10,000 draws from a flat Beta(1, 1) prior."""
    return rng.uniform(0.0, 1.0, 10_000)


@pytest.fixture
def worked_values():
    """Candidate proportions from the foreign-defeat example."""
    return np.array([0.125, 0.127, 0.8])
