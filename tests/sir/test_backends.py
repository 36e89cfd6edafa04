"""
Tests for the CPU backends used directly with designs.
"""

import numpy as np

from pysir.core.protocols import Backend
from pysir.sir.backends import CPUWeightBackend, CPUResampleBackend
from pysir.sir.design import WeightDesign, ResampleDesign


class TestProtocol:

    def test_backends_satisfy_protocol(self):
        assert isinstance(CPUWeightBackend(), Backend)
        assert isinstance(CPUResampleBackend(), Backend)

    def test_names(self):
        assert CPUWeightBackend().name == 'cpu_weights'
        assert CPUResampleBackend().name == 'cpu_resample'


class TestDirectSolve:

    def test_weight_backend(self):
        design = WeightDesign.for_weights([0.25, 0.5], 1, 1)
        result = CPUWeightBackend().solve(design)
        np.testing.assert_allclose(result.params.weights, [0.1875 / 0.4375, 0.25 / 0.4375])
        assert result.info['method'] == 'direct'
        assert result.info['successes'] == 1

    def test_resample_backend_inverse_cdf(self):
        """u in [0, 0.25) selects index 0, [0.25, 1) selects index 1."""
        rng = np.random.default_rng(17)
        expected_u = np.random.default_rng(17).random(1000)
        design = ResampleDesign.for_resample([0.0, 1.0], [0.25, 0.75], 1000, seed=rng)
        result = CPUResampleBackend().solve(design)
        np.testing.assert_array_equal(result.params.indices, (expected_u >= 0.25).astype(int))

    def test_trailing_zero_weight_never_selected(self):
        """The largest u below 1 still lands on the last positive weight."""
        u_max = np.nextafter(1.0, 0.0)
        design = _with_uniforms(np.arange(11), [0.1] * 10 + [0.0], [0.0, 0.55, u_max])
        result = CPUResampleBackend().solve(design)
        np.testing.assert_array_equal(result.params.indices, [0, 5, 9])
        assert result.params.counts[10] == 0

    def test_leading_zero_weight_skipped_at_u_zero(self):
        design = _with_uniforms([1.0, 2.0], [0.0, 1.0], [0.0, 0.0])
        result = CPUResampleBackend().solve(design)
        np.testing.assert_array_equal(result.params.indices, [1, 1])


class _FixedUniforms:
    """Stand-in Generator returning preset uniforms."""

    def __init__(self, u):
        self._u = np.asarray(u, dtype=np.float64)

    def random(self, size):
        return np.resize(self._u, size)


def _with_uniforms(values, weights, u):
    design = ResampleDesign.for_resample(values, weights, len(u))
    return ResampleDesign(
        values=design.values,
        weights=design.weights,
        size=design.size,
        rng=_FixedUniforms(u),
    )
