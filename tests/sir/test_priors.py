"""
Tests for sample_prior().
"""

import numpy as np
import pytest

from pysir.core.exceptions import ValidationError
from pysir.sir import sample_prior


class TestFamilies:

    def test_beta(self):
        draws = sample_prior('beta', 2, 5, 20_000, seed=1)
        assert draws.shape == (20_000,)
        assert draws.dtype == np.float64
        assert np.all((draws >= 0.0) & (draws <= 1.0))
        assert draws.mean() == pytest.approx(2 / 7, abs=0.01)

    def test_gamma_shape_rate(self):
        draws = sample_prior('gamma', 2.0, 10.0, 20_000, seed=1)
        assert np.all(draws > 0.0)
        assert draws.mean() == pytest.approx(0.2, abs=0.01)

    def test_uniform(self):
        draws = sample_prior('uniform', 0.2, 0.4, 5_000, seed=1)
        assert draws.min() >= 0.2
        assert draws.max() <= 0.4

    def test_zero_size(self):
        assert sample_prior('beta', 1, 1, 0, seed=1).shape == (0,)


class TestReproducibility:

    def test_same_seed(self):
        np.testing.assert_array_equal(
            sample_prior('beta', 1, 1, 100, seed=9),
            sample_prior('beta', 1, 1, 100, seed=9),
        )

    def test_different_seed(self):
        assert not np.array_equal(
            sample_prior('beta', 1, 1, 100, seed=9),
            sample_prior('beta', 1, 1, 100, seed=10),
        )

    def test_injected_generator(self):
        rng = np.random.default_rng(4)
        first = sample_prior('beta', 1, 1, 10, seed=rng)
        second = sample_prior('beta', 1, 1, 10, seed=rng)
        assert not np.array_equal(first, second)


class TestValidation:

    def test_unknown_family(self):
        with pytest.raises(ValidationError, match="family"):
            sample_prior('lognormal', 1, 1, 10)

    @pytest.mark.parametrize("family, a, b", [
        ('beta', 0, 1),
        ('beta', 1, -1),
        ('gamma', -2, 1),
        ('gamma', 2, 0),
        ('uniform', 0.5, 0.5),
    ])
    def test_bad_parameters(self, family, a, b):
        with pytest.raises(ValidationError):
            sample_prior(family, a, b, 10)

    @pytest.mark.parametrize("a", [float('nan'), float('inf'), "1", True])
    def test_non_numeric_parameter(self, a):
        with pytest.raises(ValidationError, match="a"):
            sample_prior('beta', a, 1, 10)

    def test_bad_size(self):
        with pytest.raises(ValidationError, match="size"):
            sample_prior('beta', 1, 1, -5)
