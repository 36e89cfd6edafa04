"""
Shared compute infrastructure for PySIR.

Hardware detection, timing utilities and numeric thresholds used by the
domain backends. Domain backends themselves live in pysir/sir/backends/.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    tolerances: Numeric thresholds
"""

from pysir.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pysir.core.compute.timing import Timer

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
]
