"""
GPU backend using PyTorch.

Runs on NVIDIA CUDA in FP32 or FP64, or on Apple MPS (Metal) in FP32 only.
"""

import numpy as np
from typing import Optional, Any

from .base import GPUBackendBase


class PyTorchBackend(GPUBackendBase):
    """
    PyTorch GPU backend.

    Keeps computation on the GPU using torch tensors.
    Only converts at entry (numpy → torch) and exit (torch → numpy); results
    are cast back to the operands' NumPy dtype, so a float64 vector stays a
    float64 vector even when the kernel ran in FP32.

    Requirements:
    - NVIDIA GPU with CUDA support, or Apple Silicon with MPS
    - PyTorch built with the matching support
    """

    def __init__(self, device: Optional[str] = None, use_fp64: bool = False):
        """Initialize PyTorch backend."""
        try:
            import torch
            self.torch = torch
        except ImportError:
            raise ImportError(
                "PyTorch required for GPU backend. "
                "Install: pip install torch"
            )

        self.device = self._select_device(device)

        if use_fp64 and self.device.type == 'mps':
            raise ValueError(
                "PyTorch MPS backend does not support FP64. "
                "Use FP32 (use_fp64=False) or get_backend('cpu')."
            )

        self.use_fp64 = use_fp64
        self.precision = "fp64" if use_fp64 else "fp32"
        self.tensor_dtype = torch.float64 if use_fp64 else torch.float32
        if self.device.type == 'mps':
            self.name = "pytorch_mps_fp32"
        else:
            self.name = f"pytorch_{self.precision}"

    def _select_device(self, requested: Optional[str]) -> Any:
        """Select GPU device. Fails if neither CUDA nor MPS is available."""
        torch = self.torch

        if requested:
            device = torch.device(requested)
            if device.type not in ('cuda', 'mps'):
                raise ValueError(
                    f"PyTorch backend requires a GPU device, got '{requested}'. "
                    f"For CPU use get_backend('cpu')."
                )
            return device

        if torch.cuda.is_available():
            return torch.device('cuda')
        if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
            return torch.device('mps')

        raise RuntimeError(
            "PyTorch backend requires a CUDA or MPS GPU.\n"
            "Options:\n"
            "  1. Use get_backend('cpu')\n"
            "  2. Install CUDA-enabled PyTorch"
        )

    def _to_device(self, a: np.ndarray):
        # Cast on the host first: MPS cannot hold float64 tensors
        t = self.torch.from_numpy(np.ascontiguousarray(a)).to(self.tensor_dtype)
        return t.to(self.device)

    def _to_numpy(self, t, dtype) -> np.ndarray:
        return t.cpu().numpy().astype(dtype, copy=False)

    def add(self, a, b):
        dtype = self.result_dtype(a, b)
        return self._to_numpy(self._to_device(a) + self._to_device(b), dtype)

    def subtract(self, a, b):
        dtype = self.result_dtype(a, b)
        return self._to_numpy(self._to_device(a) - self._to_device(b), dtype)

    def scale(self, k, a):
        return self._to_numpy(self._to_device(a) * float(k), a.dtype)

    def matmul(self, a, b):
        dtype = self.result_dtype(a, b)
        return self._to_numpy(self._to_device(a) @ self._to_device(b), dtype)

    def dot(self, a, b):
        return float(self.torch.dot(self._to_device(a), self._to_device(b)).item())

    def cross(self, a, b):
        dtype = self.result_dtype(a, b)
        result = self.torch.linalg.cross(self._to_device(a), self._to_device(b))
        return self._to_numpy(result, dtype)

    def norm(self, a):
        # Scale by the largest magnitude so FP32 squares stay in range
        t = self._to_device(a)
        peak = t.abs().max()
        if peak.item() == 0:
            return 0.0
        return float((peak * self.torch.linalg.vector_norm(t / peak)).item())

    def transpose(self, a):
        # Pure data movement, stays on the host
        return np.ascontiguousarray(a.T)

    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'gpu',
            'precision': self.precision,
            'device': str(self.device),
            'library': f'PyTorch {self.torch.__version__}',
        }
