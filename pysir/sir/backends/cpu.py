"""
CPU backends for SIR.

CPUWeightBackend: Binomial importance weights with log-space fallback.
CPUResampleBackend: Inverse-CDF multinomial resampling with replacement.
"""

from __future__ import annotations

import numpy as np

from pysir.core.result import Result
from pysir.core.compute.timing import Timer
from pysir.core.compute.tolerances import ESS_WARN_FRACTION
from pysir.sir._common import WeightParams, ResampleParams
from pysir.sir._kernel import (
    binomial_kernel,
    binomial_log_kernel,
    effective_sample_size,
    fix_prob,
    needs_log_space,
    normalize_log_weights,
)
from pysir.sir.design import WeightDesign, ResampleDesign


def ess_warnings(ess: float, n: int) -> list[str]:
    """Warning messages for a collapsed weight vector."""
    if ess < ESS_WARN_FRACTION * n:
        return [
            f"Effective sample size {ess:.3g} is below "
            f"{ESS_WARN_FRACTION:.0%} of {n} candidates; the posterior "
            f"sample will be dominated by few prior draws"
        ]
    return []


class CPUWeightBackend:
    """
    CPU reference backend for importance weights.

    Tries the direct power kernel first. If it underflows for every
    candidate at once, recomputes in log space and normalizes with the
    log-sum-exp shift.
    """

    @property
    def name(self) -> str:
        return 'cpu_weights'

    def solve(self, design: WeightDesign) -> Result[WeightParams]:
        """Compute normalized weights and return Result[WeightParams]."""
        timer = Timer()
        timer.start()

        values = design.values
        s, f = design.successes, design.failures
        n = design.n_candidates

        with timer.section('kernel'):
            direct = binomial_kernel(values, s, f)
            log_w = binomial_log_kernel(values, s, f)

        with timer.section('normalize'):
            if needs_log_space(direct):
                method = 'log'
                weights = normalize_log_weights(log_w, successes=s, failures=f)
            else:
                method = 'direct'
                weights = fix_prob(direct, successes=s, failures=f)
            ess = effective_sample_size(weights)

        timer.stop()

        return Result(
            params=WeightParams(
                weights=weights,
                log_weights=log_w,
                ess=ess,
                method=method,
            ),
            info={
                'method': method,
                'n': n,
                'successes': s,
                'failures': f,
                'ess': ess,
                'n_zero_weight': int(np.sum(weights == 0.0)),
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(ess_warnings(ess, n)),
        )


class CPUResampleBackend:
    """
    CPU backend for weighted resampling with replacement.

    Each draw takes one uniform u in [0, 1) and selects the smallest index
    i with cdf[i] > u, located by binary search. Zero-weight candidates
    occupy an empty interval of the CDF and are never selected.
    """

    @property
    def name(self) -> str:
        return 'cpu_resample'

    def solve(self, design: ResampleDesign) -> Result[ResampleParams]:
        """Draw design.size values and return Result[ResampleParams]."""
        timer = Timer()
        timer.start()

        n = design.n_candidates

        with timer.section('cdf'):
            # cdf[-1] == 1.0 exactly; u < 1 never lands past a trailing zero weight
            cdf = np.cumsum(design.weights)
            cdf /= cdf[-1]

        with timer.section('draws'):
            u = design.rng.random(design.size)
            indices = np.searchsorted(cdf, u, side='right')
            draws = design.values[indices]

        with timer.section('counts'):
            counts = np.bincount(indices, minlength=n).astype(np.int64)

        timer.stop()

        return Result(
            params=ResampleParams(
                indices=indices,
                draws=draws,
                counts=counts,
            ),
            info={
                'n': n,
                'size': design.size,
                'n_unique': int(np.count_nonzero(counts)),
            },
            timing=timer.result(),
            backend_name=self.name,
        )
