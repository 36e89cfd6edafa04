"""
SIR backends.

Available backends:
    CPUWeightBackend: CPU reference implementation of importance weighting
    CPUResampleBackend: CPU reference implementation of weighted resampling
    GPUWeightBackend, GPUResampleBackend: PyTorch implementations
        (pysir.sir.backends.gpu, imported lazily)
"""

from pysir.sir.backends.cpu import CPUWeightBackend, CPUResampleBackend

__all__ = [
    "CPUWeightBackend",
    "CPUResampleBackend",
]
