"""
Utility functions.
"""

import numbers

import numpy as np

from .errors import DimensionError, IndexOutOfRange


PRECISIONS = {
    'f': np.float32,
    'd': np.float64,
}


def resolve_dtype(precision):
    """Map a precision code ('f' or 'd') to a NumPy dtype."""
    try:
        return np.dtype(PRECISIONS[precision])
    except KeyError:
        raise ValueError(
            f"Unknown precision: '{precision}'\n"
            f"Valid options: 'f' (float32), 'd' (float64)"
        ) from None


def precision_of(dtype) -> str:
    """Inverse of resolve_dtype."""
    return 'd' if np.dtype(dtype) == np.float64 else 'f'


def check_dimension(n, name='length'):
    """Validate a requested container dimension."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise DimensionError(f"{name} must be an integer, got {n!r}")
    if n <= 0:
        raise DimensionError(f"{name} must be positive, got {n}")
    return int(n)


def check_index(i, bound, name='index'):
    """Validate an element index against [0, bound)."""
    if isinstance(i, bool) or not isinstance(i, numbers.Integral):
        raise TypeError(f"{name} must be an integer, got {type(i).__name__}")
    if not 0 <= i < bound:
        raise IndexOutOfRange(f"{name} {i} out of range for size {bound}")
    return int(i)


def _as_array(values, name, dtype):
    try:
        return np.array(values, dtype=dtype)
    except ValueError as e:
        # Ragged nesting has no shape at all
        raise DimensionError(f"{name} is not a regular array: {e}") from e


def check_vector(y, name='y', dtype=np.float64, length=None):
    """Validate vector input."""
    y = _as_array(y, name, dtype)
    if y.ndim != 1:
        raise DimensionError(f"{name} must be 1-dimensional")
    if length is not None and y.shape[0] != length:
        raise DimensionError(
            f"{name} must have length {length}, got {y.shape[0]}"
        )
    if y.shape[0] == 0:
        raise DimensionError(f"{name} must not be empty")
    return y


def check_array(X, name='X', dtype=np.float64, shape=None):
    """Validate matrix input."""
    X = _as_array(X, name, dtype)
    if X.ndim != 2:
        raise DimensionError(f"{name} must be 2-dimensional")
    if shape is not None and X.shape != tuple(shape):
        raise DimensionError(
            f"{name} must have shape {tuple(shape)}, got {X.shape}"
        )
    if X.size == 0:
        raise DimensionError(f"{name} must not be empty")
    return X
