"""
CPU backend using NumPy.

This is the reference implementation; every other backend is checked
against it.
"""

import numpy as np

from .base import CPUBackendBase


class CPUBackend(CPUBackendBase):
    """
    CPU backend using NumPy.

    Computes in the operands' own precision (float32 stays float32).
    """

    def __init__(self):
        self.name = "cpu"
        self.precision = "native"

    def add(self, a, b):
        dtype = self.result_dtype(a, b)
        return np.add(a, b, dtype=dtype)

    def subtract(self, a, b):
        dtype = self.result_dtype(a, b)
        return np.subtract(a, b, dtype=dtype)

    def scale(self, k, a):
        # Python scalars must not promote float32 storage
        return (a * a.dtype.type(k)).astype(a.dtype, copy=False)

    def matmul(self, a, b):
        dtype = self.result_dtype(a, b)
        return np.matmul(a.astype(dtype, copy=False), b.astype(dtype, copy=False))

    def dot(self, a, b):
        dtype = self.result_dtype(a, b)
        return float(np.dot(a.astype(dtype, copy=False), b.astype(dtype, copy=False)))

    def cross(self, a, b):
        dtype = self.result_dtype(a, b)
        return np.cross(a.astype(dtype, copy=False), b.astype(dtype, copy=False))

    def norm(self, a):
        # Squares of float32 values leave float32 range quickly
        return float(np.linalg.norm(a.astype(np.float64, copy=False)))

    def transpose(self, a):
        return np.ascontiguousarray(a.T)

    def get_device_info(self) -> dict:
        """Get backend information."""
        return {
            'backend': 'cpu',
            'precision': self.precision,
            'library': f'NumPy {np.__version__}',
        }
