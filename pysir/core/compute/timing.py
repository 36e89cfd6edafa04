"""
Execution timing utilities.

Every backend attaches a per-section timing breakdown to its Result.
GPU backends ask for CUDA synchronization so that asynchronous kernels
are included in the measured section.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Accumulating section timer.

    Usage:
        timer = Timer()
        timer.start()

        with timer.section('kernel'):
            log_w = binomial_log_kernel(values, s, f)

        with timer.section('normalize'):
            w = normalize_log_weights(log_w)

        timer.stop()
        timer.result()
        # {'total_seconds': 0.002, 'kernel': 0.001, 'normalize': 0.0005}
    """

    def __init__(self, sync_cuda: bool = False):
        """
        Args:
            sync_cuda: If True, synchronize CUDA before each measurement.
        """
        self._sync_cuda = sync_cuda
        self._sections: dict[str, float] = {}
        self._start_time: float | None = None
        self._total: float | None = None

    def _sync(self) -> None:
        if self._sync_cuda:
            import torch
            if torch.cuda.is_available():
                torch.cuda.synchronize()

    def start(self) -> None:
        """Start the overall timer."""
        self._sync()
        self._start_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the overall timer."""
        self._sync()
        if self._start_time is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._start_time

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Time a named section. Repeated sections accumulate.
        """
        self._sync()
        start = time.perf_counter()
        try:
            yield
        finally:
            self._sync()
            elapsed = time.perf_counter() - start
            self._sections[name] = self._sections.get(name, 0.0) + elapsed

    def result(self) -> dict[str, float]:
        """
        Timing results: 'total_seconds' plus every section.

        Raises:
            RuntimeError: If called before stop()
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")

        result = {'total_seconds': self._total}
        result.update(self._sections)
        return result
