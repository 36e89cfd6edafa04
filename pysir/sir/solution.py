"""
Solution wrappers for SIR results.

WeightSolution, ResampleSolution and PosteriorSolution wrap Result[P]
and provide convenient accessors and text summaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from pysir.core.result import Result
from pysir.sir._common import WeightParams, ResampleParams

if TYPE_CHECKING:
    from pysir.sir.design import WeightDesign, ResampleDesign


@dataclass
class WeightSolution:
    """
    User-facing importance weights.

    weights is the normalized WeightVector; log_weights keeps the
    unnormalized log kernel for diagnostics.
    """
    _result: Result[WeightParams]
    _design: 'WeightDesign'

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        """Normalized importance weights, shape (n,), sum to 1."""
        return self._result.params.weights

    @property
    def log_weights(self) -> NDArray[np.floating[Any]]:
        """Unnormalized log likelihood kernel, shape (n,)."""
        return self._result.params.log_weights

    @property
    def ess(self) -> float:
        """Kish effective sample size."""
        return self._result.params.ess

    @property
    def method(self) -> str:
        """'direct' or 'log'."""
        return self._result.params.method

    @property
    def values(self) -> NDArray[np.floating[Any]]:
        """Candidate values that were scored."""
        return self._design.values

    @property
    def successes(self) -> int:
        return self._design.successes

    @property
    def failures(self) -> int:
        return self._design.failures

    @property
    def n_candidates(self) -> int:
        return self._design.n_candidates

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __len__(self) -> int:
        return self.n_candidates

    def summary(self) -> str:
        """Importance weight summary."""
        w = self.weights
        top = int(np.argmax(w))
        lines = [
            "\nBINOMIAL IMPORTANCE WEIGHTS",
            "",
            f"Data: {self.successes} successes, {self.failures} failures",
            f"Candidates: {self.n_candidates}",
            f"Method: {self.method}",
            f"Effective sample size: {self.ess:.2f}",
            f"Zero-weight candidates: {self.info.get('n_zero_weight', 0)}",
            f"Largest weight: {w[top]:.4g} at value {self.values[top]:.6g}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"WeightSolution(n={self.n_candidates}, method={self.method!r}, "
            f"ess={self.ess:.4g}, backend={self.backend_name!r})"
        )


@dataclass
class ResampleSolution:
    """
    User-facing weighted resample.

    draws holds the resampled values in draw order.
    """
    _result: Result[ResampleParams]
    _design: 'ResampleDesign'

    @property
    def draws(self) -> NDArray:
        """Resampled values, shape (size,)."""
        return self._result.params.draws

    @property
    def indices(self) -> NDArray[np.intp]:
        """Candidate index of each draw, shape (size,)."""
        return self._result.params.indices

    @property
    def counts(self) -> NDArray[np.int64]:
        """Number of times each candidate was drawn, shape (n,)."""
        return self._result.params.counts

    @property
    def frequencies(self) -> NDArray[np.floating[Any]]:
        """counts / size; all zeros for an empty resample."""
        if self.size == 0:
            return np.zeros(self.counts.shape[0], dtype=np.float64)
        return self.counts / self.size

    @property
    def size(self) -> int:
        return self._design.size

    @property
    def n_unique(self) -> int:
        """Number of distinct candidates that were drawn."""
        return self._result.info['n_unique']

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        """Normalized weights the draws were taken with."""
        return self._design.weights

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __len__(self) -> int:
        return self.size

    def summary(self) -> str:
        lines = [
            "\nWEIGHTED RESAMPLE (WITH REPLACEMENT)",
            "",
            f"Candidates: {self._design.n_candidates}",
            f"Draws: {self.size}",
            f"Distinct candidates drawn: {self.n_unique}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ResampleSolution(size={self.size}, n_unique={self.n_unique}, "
            f"backend={self.backend_name!r})"
        )


@dataclass
class PosteriorSolution:
    """
    SIR posterior sample: the weighting step and the resampling step.

    Posterior summaries are computed from the draws, so they carry
    Monte Carlo error of order sd / sqrt(size).
    """
    weighting: WeightSolution
    resampling: ResampleSolution

    @property
    def draws(self) -> NDArray[np.floating[Any]]:
        """Posterior draws, shape (size,)."""
        return self.resampling.draws

    @property
    def weights(self) -> NDArray[np.floating[Any]]:
        return self.weighting.weights

    @property
    def ess(self) -> float:
        return self.weighting.ess

    @property
    def method(self) -> str:
        return self.weighting.method

    @property
    def size(self) -> int:
        return self.resampling.size

    @property
    def warnings(self) -> tuple[str, ...]:
        return self.weighting.warnings + self.resampling.warnings

    @property
    def mean(self) -> float:
        """Posterior mean estimate (NaN for an empty sample)."""
        if self.size == 0:
            return float('nan')
        return float(np.mean(self.draws))

    @property
    def sd(self) -> float:
        """Posterior standard deviation estimate (NaN below 2 draws)."""
        if self.size < 2:
            return float('nan')
        return float(np.std(self.draws, ddof=1))

    def quantile(self, q) -> NDArray[np.floating[Any]] | float:
        """
        Posterior quantile(s) of the draws.

        Raises:
            ValueError: If the sample is empty
        """
        if self.size == 0:
            raise ValueError("quantile of an empty posterior sample")
        result = np.quantile(self.draws, q)
        return float(result) if np.ndim(result) == 0 else result

    def interval(self, level: float = 0.95) -> tuple[float, float]:
        """Equal-tailed credible interval."""
        if not 0.0 < level < 1.0:
            raise ValueError(f"level must be in (0, 1), got {level}")
        alpha = (1.0 - level) / 2.0
        lo, hi = self.quantile([alpha, 1.0 - alpha])
        return float(lo), float(hi)

    def __len__(self) -> int:
        return self.size

    def summary(self) -> str:
        """
        SIR posterior report.

        Produces:
            SAMPLING IMPORTANCE RESAMPLING POSTERIOR

            Data: 1 successes, 7 failures
            Prior draws: 10000    Posterior draws: 10000
            Weighting: direct    ESS: 4567.89

                  mean        sd      2.5%       50%     97.5%
            theta  0.16512   0.10234   0.02871   0.14712   0.39912
        """
        w = self.weighting
        lines = [
            "\nSAMPLING IMPORTANCE RESAMPLING POSTERIOR",
            "",
            f"Data: {w.successes} successes, {w.failures} failures",
            f"Prior draws: {w.n_candidates}    Posterior draws: {self.size}",
            f"Weighting: {self.method}    ESS: {self.ess:.2f}",
            "",
        ]
        if self.size > 0:
            q = self.quantile([0.025, 0.5, 0.975])
            header = (
                f"{'':>6s} {'mean':>9s} {'sd':>9s} "
                f"{'2.5%':>9s} {'50%':>9s} {'97.5%':>9s}"
            )
            lines.append(header)
            lines.append(
                f"{'theta':>6s} {self.mean:9.5f} {self.sd:9.5f} "
                f"{q[0]:9.5f} {q[1]:9.5f} {q[2]:9.5f}"
            )
        for msg in self.warnings:
            lines.append(f"Warning: {msg}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PosteriorSolution(n={self.weighting.n_candidates}, size={self.size}, "
            f"method={self.method!r}, ess={self.ess:.4g})"
        )
