"""
Tests for sir(), the composed weight-then-resample operation.

Includes the foreign-defeat worked scenario and a conjugate check:
with a Beta(1, 1) prior the SIR posterior must match Beta(1 + s, 1 + f).
"""

import numpy as np
import pytest
from scipy import stats

from pysir.core.exceptions import DegenerateWeightError, InvalidDomainError
from pysir.sir import sir, compute_weights, resample


class TestWorkedScenario:
    """values = [.125, .127, .8], 1 success, 7 failures."""

    def test_resample_of_thirty(self, worked_values):
        w = compute_weights(worked_values, 1, 7, backend='cpu')
        result = resample(worked_values, w, 30, seed=42, backend='cpu')

        assert result.draws.shape == (30,)
        assert np.count_nonzero(result.draws == 0.8) == 0
        assert np.count_nonzero(result.draws == 0.125) > 0
        assert np.count_nonzero(result.draws == 0.127) > 0

    def test_sir_matches_two_step(self, worked_values):
        composed = sir(worked_values, 1, 7, 30, seed=42, backend='cpu')
        w = compute_weights(worked_values, 1, 7, backend='cpu')
        two_step = resample(worked_values, w, 30, seed=42, backend='cpu')
        np.testing.assert_array_equal(composed.draws, two_step.draws)
        np.testing.assert_array_equal(composed.weights, w.weights)


class TestConjugateCheck:

    def test_beta_binomial_posterior(self, uniform_prior):
        result = sir(uniform_prior, 1, 7, 10_000, seed=1, backend='cpu')
        exact = stats.beta(2, 8)

        assert result.mean == pytest.approx(exact.mean(), abs=0.015)
        assert result.sd == pytest.approx(exact.std(), abs=0.015)
        assert result.quantile(0.5) == pytest.approx(exact.median(), abs=0.02)

    def test_interval_brackets_mean(self, uniform_prior):
        result = sir(uniform_prior, 3, 3, 5_000, seed=1, backend='cpu')
        lo, hi = result.interval(0.9)
        assert lo < result.mean < hi
        assert 0.0 <= lo and hi <= 1.0


class TestPosteriorSolution:

    def test_accessors(self, uniform_prior):
        result = sir(uniform_prior, 2, 5, 1_000, seed=3, backend='cpu')
        assert result.size == 1_000
        assert len(result) == 1_000
        assert result.method == 'direct'
        assert result.ess > 1.0
        assert result.weighting.n_candidates == uniform_prior.shape[0]
        assert result.resampling.backend_name == 'cpu_resample'

    def test_quantile_vector(self, uniform_prior):
        result = sir(uniform_prior, 2, 5, 1_000, seed=3, backend='cpu')
        q = result.quantile([0.25, 0.75])
        assert q.shape == (2,)
        assert q[0] <= q[1]

    def test_empty_posterior(self, uniform_prior):
        result = sir(uniform_prior, 2, 5, 0, seed=3, backend='cpu')
        assert result.draws.size == 0
        assert np.isnan(result.mean)
        assert np.isnan(result.sd)
        with pytest.raises(ValueError):
            result.quantile(0.5)
        assert "Posterior draws: 0" in result.summary()

    def test_invalid_interval_level(self, uniform_prior):
        result = sir(uniform_prior, 2, 5, 100, seed=3, backend='cpu')
        with pytest.raises(ValueError, match="level"):
            result.interval(1.5)

    def test_summary(self, uniform_prior):
        text = sir(uniform_prior, 1, 7, 2_000, seed=3, backend='cpu').summary()
        assert "SAMPLING IMPORTANCE RESAMPLING POSTERIOR" in text
        assert "1 successes, 7 failures" in text
        assert "97.5%" in text
        assert "theta" in text

    def test_repr(self, worked_values):
        r = repr(sir(worked_values, 1, 7, 10, seed=0, backend='cpu'))
        assert r.startswith("PosteriorSolution(n=3, size=10")


class TestErrors:

    def test_degenerate_propagates(self):
        with pytest.raises(DegenerateWeightError):
            sir([0.0, 0.0], 1, 0, 10, seed=0, backend='cpu')

    def test_domain_propagates(self):
        with pytest.raises(InvalidDomainError):
            sir([0.5, 2.0], 1, 0, 10, seed=0, backend='cpu')

    def test_generator_untouched_on_weight_error(self):
        rng = np.random.default_rng(0)
        state = rng.bit_generator.state
        with pytest.raises(DegenerateWeightError):
            sir([0.0], 1, 0, 10, seed=rng, backend='cpu')
        assert rng.bit_generator.state == state


class TestDefaultBackend:

    def test_matches_cpu_reference(self):
        values = np.array([0.0, 1e-50, 0.5, 0.99999999, 1.0])
        default = sir(values, 30, 1, 500, seed=7)
        cpu = sir(values, 30, 1, 500, seed=7, backend='cpu')
        assert default.weighting.backend_name == 'cpu_weights'
        assert default.resampling.backend_name == 'cpu_resample'
        np.testing.assert_array_equal(default.weights, cpu.weights)
        np.testing.assert_array_equal(default.draws, cpu.draws)
        # v = 0 and v = 1 have zero likelihood with s, f > 0
        assert not np.any((default.draws == 0.0) | (default.draws == 1.0))
