"""
Core protocols for PySIR.

Backends are described structurally (Protocol) rather than nominally
(ABC) so that CPU and GPU implementations need not share a base class.
"""

from typing import Protocol, TypeVar, runtime_checkable

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated, frozen design and produces a
    Result envelope around a domain-specific payload.

    Backends are stateless: all configuration is passed via the design
    or at construction time. The only mutable thing a backend may touch
    is a random Generator carried by the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_weights', 'cpu_resample', 'gpu_cuda_weights_fp64'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            NumericalError: If numerical issues prevent a solution
            ValidationError: If design is invalid for this backend
        """
        ...
