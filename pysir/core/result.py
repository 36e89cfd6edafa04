"""
Generic result container for all PySIR computations.

The Result class provides a standardized envelope for every backend
output: weights, resamples and anything built on top of them. Domains
define their own parameter payloads; the envelope carries timing,
diagnostics and non-fatal warnings.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (weighting method, ESS, sizes)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for SIR computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (weights, draws, ...)
        info: Structured metadata (method, ess, n, size)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=WeightParams(weights=w, log_weights=lw, ess=2.0),
        ...     info={'method': 'direct', 'n': 3},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_weights'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
