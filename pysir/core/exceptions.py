"""
Exception hierarchy for PySIR.

All exceptions inherit from PySIRError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PySIRError(Exception):
    """Base exception for all PySIR errors."""
    pass


class ValidationError(PySIRError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class LengthMismatchError(DimensionError):
    """
    Paired sequences have different lengths.

    Raised when candidate values and their weights (or two posterior
    samples being compared) do not line up one-to-one.

    Attributes:
        lengths: Mapping of parameter name to observed length
    """

    def __init__(self, message: str, lengths: dict[str, int] | None = None):
        super().__init__(message)
        self.lengths = lengths


class EmptyInputError(ValidationError):
    """
    A sequence that must hold at least one element is empty.

    Attributes:
        name: Parameter name of the empty input
    """

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class InvalidCountError(ValidationError):
    """
    A success or failure count is negative or not an integer.

    Attributes:
        name: Parameter name ('successes' or 'failures')
        value: The rejected value as supplied
    """

    def __init__(self, message: str, name: str | None = None, value=None):
        super().__init__(message)
        self.name = name
        self.value = value


class InvalidDomainError(ValidationError):
    """
    Candidate values lie outside the domain of the likelihood.

    For the Binomial proportion the admissible domain is [0, 1].

    Attributes:
        n_invalid: Number of offending candidates
        observed_min: Smallest candidate value
        observed_max: Largest candidate value
    """

    def __init__(
        self,
        message: str,
        n_invalid: int | None = None,
        observed_min: float | None = None,
        observed_max: float | None = None,
    ):
        super().__init__(message)
        self.n_invalid = n_invalid
        self.observed_min = observed_min
        self.observed_max = observed_max


class NumericalError(PySIRError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class DegenerateWeightError(NumericalError):
    """
    Every importance weight is zero.

    Raised when no candidate has positive likelihood, even after the
    log-space rescaling. Resampling is undefined in that case and a
    uniform distribution is never substituted.

    Attributes:
        n_candidates: Number of candidate values scored
        successes: Observed successes, if known
        failures: Observed failures, if known
    """

    def __init__(
        self,
        message: str,
        n_candidates: int | None = None,
        successes: int | None = None,
        failures: int | None = None,
    ):
        super().__init__(message)
        self.n_candidates = n_candidates
        self.successes = successes
        self.failures = failures
