"""
Abstract base classes for backends.

Defines the interface all backends must implement.
"""

from abc import ABC, abstractmethod
import numpy as np


class BackendBase(ABC):
    """
    Abstract base class for all backends.

    Backends receive NumPy arrays whose shapes have already been validated
    by ``densela.ops`` and return NumPy arrays (or Python floats for
    reductions) in the operands' result dtype.
    """

    name = "base"
    precision = None

    @abstractmethod
    def add(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Elementwise sum."""
        pass

    @abstractmethod
    def subtract(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Elementwise difference."""
        pass

    @abstractmethod
    def scale(self, k: float, a: np.ndarray) -> np.ndarray:
        """Multiply every element by a scalar."""
        pass

    @abstractmethod
    def matmul(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """
        Standard matrix product.

        Parameters
        ----------
        a : ndarray, shape (r, c)
        b : ndarray, shape (c, k) or (c,)

        Returns
        -------
        ndarray, shape (r, k) or (r,)
        """
        pass

    @abstractmethod
    def dot(self, a: np.ndarray, b: np.ndarray) -> float:
        """Sum of elementwise products of two vectors."""
        pass

    @abstractmethod
    def cross(self, a: np.ndarray, b: np.ndarray) -> np.ndarray:
        """Cross product of two length-3 vectors."""
        pass

    @abstractmethod
    def norm(self, a: np.ndarray) -> float:
        """Euclidean norm of a vector."""
        pass

    @abstractmethod
    def transpose(self, a: np.ndarray) -> np.ndarray:
        """Matrix transpose."""
        pass

    @abstractmethod
    def get_device_info(self) -> dict:
        """Get backend information."""
        pass

    @staticmethod
    def result_dtype(*arrays) -> np.dtype:
        """Common floating dtype of the operands (float32 unless any is float64)."""
        return np.result_type(np.float32, *[a.dtype for a in arrays])


class CPUBackendBase(BackendBase):
    """CPU backend base class."""
    pass


class GPUBackendBase(BackendBase):
    """GPU backend base class."""
    pass
