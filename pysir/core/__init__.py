"""
Core infrastructure for PySIR.

Shared abstractions used by the SIR domain package.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Device detection, timing, tolerances
"""

from pysir.core.protocols import Backend
from pysir.core.result import Result
from pysir.core.exceptions import (
    PySIRError,
    ValidationError,
    DimensionError,
    LengthMismatchError,
    EmptyInputError,
    InvalidCountError,
    InvalidDomainError,
    NumericalError,
    DegenerateWeightError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PySIRError",
    "ValidationError",
    "DimensionError",
    "LengthMismatchError",
    "EmptyInputError",
    "InvalidCountError",
    "InvalidDomainError",
    "NumericalError",
    "DegenerateWeightError",
]
