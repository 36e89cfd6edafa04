"""
GPU backends for SIR using PyTorch.

Performance path for very large prior samples. Validated against the
CPU reference in the test suite. Supports CUDA and MPS.

GPUWeightBackend always works in log space (FP64 by default), which
also covers the cases where the CPU backend would use the direct
kernel. GPUResampleBackend seeds a torch.Generator from the design's
numpy Generator: results are reproducible for a fixed seed but are a
different stream from the CPU backend.
"""

from __future__ import annotations

import numpy as np

from pysir.core.result import Result
from pysir.core.compute.timing import Timer
from pysir.core.compute.device import DeviceInfo
from pysir.core.exceptions import DegenerateWeightError
from pysir.sir._common import WeightParams, ResampleParams
from pysir.sir._kernel import effective_sample_size, fix_prob
from pysir.sir.backends.cpu import ess_warnings
from pysir.sir.design import WeightDesign, ResampleDesign


def _torch_device(torch, device: DeviceInfo | None):
    """Map DeviceInfo (or auto-detection) to a torch.device and display name."""
    if device is not None:
        if device.device_type == 'cuda':
            return torch.device(f'cuda:{device.device_index or 0}'), device.name
        if device.device_type == 'mps':
            return torch.device('mps'), 'Apple Silicon GPU (MPS)'
        raise ValueError(f"GPU backend requires GPU device, got {device.device_type}")

    if torch.cuda.is_available():
        return torch.device('cuda'), torch.cuda.get_device_properties(0).name
    if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return torch.device('mps'), 'Apple Silicon GPU (MPS)'
    raise RuntimeError("No GPU available. Use backend='cpu' instead.")


class _GPUBackendBase:

    def __init__(self, device: DeviceInfo | None = None, use_fp64: bool = True):
        """
        Parameters
        ----------
        device : DeviceInfo, optional
            Device info from select_device(). If None, auto-selects.
        use_fp64 : bool
            Compute in double precision. Not available on MPS. In FP32,
            values within ~6e-8 of 1 round to 1 and values below ~1e-45
            round to 0, which changes their weights.
        """
        import torch

        self._torch = torch
        self.device, self.device_name = _torch_device(torch, device)
        if use_fp64 and self.device.type == 'mps':
            raise ValueError("MPS does not support float64; pass use_fp64=False")
        self.dtype = torch.float64 if use_fp64 else torch.float32

    @property
    def _precision(self) -> str:
        return 'fp64' if self.dtype == self._torch.float64 else 'fp32'


class GPUWeightBackend(_GPUBackendBase):
    """
    GPU backend for importance weights.

    Log kernel and log-sum-exp normalization run on the device; the
    normalized vector is brought back as FP64 and passed through
    fix_prob so the sum-to-one invariant holds at CPU precision.
    """

    @property
    def name(self) -> str:
        return f'gpu_{self.device.type}_weights_{self._precision}'

    def solve(self, design: WeightDesign) -> Result[WeightParams]:
        torch = self._torch
        timer = Timer(sync_cuda=self.device.type == 'cuda')
        timer.start()

        s, f = design.successes, design.failures
        n = design.n_candidates

        with timer.section('transfer'):
            v = torch.as_tensor(design.values, device=self.device, dtype=self.dtype)

        with timer.section('kernel'):
            log_w = torch.zeros_like(v)
            if s > 0:
                log_w = log_w + s * torch.log(v)
            if f > 0:
                log_w = log_w + f * torch.log1p(-v)

        with timer.section('normalize'):
            max_log = torch.max(log_w)
            if torch.isneginf(max_log).item():
                raise DegenerateWeightError(
                    f"All {n} weights are zero: every candidate has zero likelihood",
                    n_candidates=n,
                    successes=s,
                    failures=f,
                )
            shifted = torch.exp(log_w - max_log)
            weights = fix_prob(
                shifted.cpu().numpy().astype(np.float64),
                successes=s,
                failures=f,
            )
            ess = effective_sample_size(weights)

        log_w_np = log_w.cpu().numpy().astype(np.float64)
        timer.stop()

        return Result(
            params=WeightParams(
                weights=weights,
                log_weights=log_w_np,
                ess=ess,
                method='log',
            ),
            info={
                'method': 'log',
                'n': n,
                'successes': s,
                'failures': f,
                'ess': ess,
                'n_zero_weight': int(np.sum(weights == 0.0)),
                'device': self.device_name,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(ess_warnings(ess, n)),
        )


class GPUResampleBackend(_GPUBackendBase):
    """
    GPU backend for weighted resampling with replacement.

    Same inverse-CDF rule as the CPU backend, using torch.searchsorted
    with right=True.
    """

    @property
    def name(self) -> str:
        return f'gpu_{self.device.type}_resample_{self._precision}'

    def solve(self, design: ResampleDesign) -> Result[ResampleParams]:
        torch = self._torch
        timer = Timer(sync_cuda=self.device.type == 'cuda')
        timer.start()

        n = design.n_candidates
        torch_seed = int(design.rng.integers(0, 2**63 - 1))

        with timer.section('cdf'):
            w = torch.as_tensor(design.weights, device=self.device, dtype=self.dtype)
            cdf = torch.cumsum(w, dim=0)
            cdf = cdf / cdf[-1]

        with timer.section('draws'):
            gen = torch.Generator(device=self.device)
            gen.manual_seed(torch_seed)
            u = torch.rand(design.size, generator=gen, device=self.device, dtype=self.dtype)
            indices = torch.searchsorted(cdf, u, right=True).cpu().numpy().astype(np.intp)
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
                'device': self.device_name,
                'torch_seed': torch_seed,
            },
            timing=timer.result(),
            backend_name=self.name,
        )
