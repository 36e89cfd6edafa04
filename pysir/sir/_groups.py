"""
Grouped SIR and posterior comparisons.

sir_by_group() runs the core once per (prior, dataset) pair, each with
its own random stream, and collects the posteriors keyed by pair.
prob_greater() is the usual comparison of two posterior samples,
e.g. P(theta1 > theta2).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pysir.core.exceptions import PySIRError, ValidationError
from pysir.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_nonempty,
)
from pysir.sir.design import SeedLike
from pysir.sir.solution import PosteriorSolution
from pysir.sir.solvers import BackendChoice, sir


def _spawn(seed: SeedLike, n: int) -> list[Any]:
    """n independent child streams derived from seed."""
    if isinstance(seed, np.random.Generator):
        return seed.spawn(n)
    if isinstance(seed, np.random.SeedSequence):
        return seed.spawn(n)
    return np.random.SeedSequence(seed).spawn(n)


def _check_dataset(key, data) -> tuple[Any, Any]:
    try:
        successes, failures = data
    except (TypeError, ValueError) as e:
        raise ValidationError(
            f"datasets[{key!r}]: expected a (successes, failures) pair, got {data!r}"
        ) from e
    return successes, failures


def sir_by_group(
    priors: Mapping[str, ArrayLike],
    datasets: Mapping[str, tuple[int, int]],
    size: int,
    *,
    seed: SeedLike = None,
    backend: BackendChoice = 'auto',
) -> dict[tuple[str, str], PosteriorSolution]:
    """
    Run SIR for every (prior, dataset) pair.

    Parameters
    ----------
    priors : mapping
        Prior id -> 1D prior sample.
    datasets : mapping
        Dataset id -> (successes, failures).
    size : int
        Posterior draws per pair.
    seed : int, SeedSequence, Generator or None
        Root entropy. Pairs are visited in sorted key order and each gets
        a spawned child stream, so a pair's result does not depend on
        mapping order.
    backend : str
        'auto', 'cpu', 'gpu'.

    Returns
    -------
    dict mapping (prior_id, dataset_id) to PosteriorSolution.

    Raises
    ------
    PySIRError
        The first failing pair aborts the batch; the exception carries a
        note naming the pair.
    """
    if not priors:
        raise ValidationError("priors: at least one prior sample required")
    if not datasets:
        raise ValidationError("datasets: at least one dataset required")

    pairs = [(p, d) for p in sorted(priors) for d in sorted(datasets)]
    streams = _spawn(seed, len(pairs))

    results: dict[tuple[str, str], PosteriorSolution] = {}
    for (prior_id, data_id), stream in zip(pairs, streams):
        successes, failures = _check_dataset(data_id, datasets[data_id])
        try:
            results[(prior_id, data_id)] = sir(
                priors[prior_id], successes, failures, size,
                seed=stream, backend=backend,
            )
        except PySIRError as e:
            e.add_note(f"while resampling prior={prior_id!r}, dataset={data_id!r}")
            raise
    return results


def prob_greater(a: ArrayLike, b: ArrayLike) -> float:
    """
    Monte Carlo estimate of P(a > b) from paired posterior draws.

    Computes mean(a - b > 0). Ties count as not greater.

    Raises
    ------
    EmptyInputError
        Empty samples.
    LengthMismatchError
        Samples of different length.
    """
    a_arr = check_array(a, "a")
    b_arr = check_array(b, "b")
    check_1d(a_arr, "a")
    check_1d(b_arr, "b")
    check_consistent_length(a_arr, b_arr, names=("a", "b"))
    check_nonempty(a_arr, "a")
    return float(np.mean(a_arr - b_arr > 0))
