"""
Named operations on dense containers.

These functions are the portable contract; the operators on ``Vector`` and
``Matrix`` call straight into them. Shapes are validated here, before any
backend kernel runs, and every function except ``normalize`` returns a new
container.

Every operation takes an optional ``backend`` (a ``BackendBase`` instance);
when omitted the process-wide default from
``densela._backends.get_default_backend()`` is used.
"""

import numpy as np

from ._backends import get_default_backend
from .containers import Matrix, Vector, wrap_result, _Dense, _is_scalar
from .errors import DegenerateVectorError, DimensionError


def _resolve(backend):
    return get_default_backend() if backend is None else backend


def _describe(a) -> str:
    if isinstance(a, Vector):
        return f"vector of length {len(a)}"
    return f"{a.rows}x{a.cols} matrix"


def _require_container(a, name):
    if not isinstance(a, _Dense):
        raise TypeError(f"{name} must be a Vector or Matrix, got {type(a).__name__}")


def _require_vector(a, name):
    if not isinstance(a, Vector):
        raise TypeError(f"{name} must be a Vector, got {type(a).__name__}")


def _require_same_shape(a, b, op):
    _require_container(a, 'a')
    _require_container(b, 'b')
    if isinstance(a, Vector) != isinstance(b, Vector) or a.shape != b.shape:
        raise DimensionError(
            f"{op}: shape mismatch ({_describe(a)} vs {_describe(b)})"
        )


def make_vector(length, precision='f') -> Vector:
    """Zero-initialized vector of the given length."""
    return Vector(length, precision)


def make_matrix(rows, cols, precision='f') -> Matrix:
    """Zero-initialized rows x cols matrix."""
    return Matrix(rows, cols, precision)


def identity(n, precision='f') -> Matrix:
    """n x n identity matrix."""
    return Matrix.identity(n, precision=precision)


def add(a, b, backend=None):
    """Elementwise sum. Raises DimensionError on shape mismatch."""
    _require_same_shape(a, b, 'add')
    return wrap_result(_resolve(backend).add(a._data, b._data), a, b)


def subtract(a, b, backend=None):
    """Elementwise difference ``a - b``. Raises DimensionError on shape mismatch."""
    _require_same_shape(a, b, 'subtract')
    return wrap_result(_resolve(backend).subtract(a._data, b._data), a, b)


def scale(k, a, backend=None):
    """Multiply every element of ``a`` by the scalar ``k``."""
    if not _is_scalar(k):
        raise TypeError(f"scale factor must be a real number, got {type(k).__name__}")
    _require_container(a, 'a')
    return wrap_result(_resolve(backend).scale(k, a._data), a)


def multiply(a, b, backend=None):
    """
    Standard matrix product.

    Parameters
    ----------
    a : Matrix
        Left operand, shape (r, c)
    b : Matrix or Vector
        Right operand with c rows (or length c)

    Returns
    -------
    Matrix of shape (r, k), or Vector of length r when ``b`` is a vector

    Raises
    ------
    DimensionError
        When ``a.cols`` does not match the rows of ``b``
    """
    if not isinstance(a, Matrix):
        raise TypeError(f"a must be a Matrix, got {type(a).__name__}")
    _require_container(b, 'b')
    if a.cols != b.rows:
        raise DimensionError(
            f"multiply: {_describe(a)} is incompatible with {_describe(b)}"
        )
    return wrap_result(_resolve(backend).matmul(a._data, b._data), a, b)


def dot(a, b, backend=None) -> float:
    """Sum of elementwise products. Raises DimensionError if lengths differ."""
    _require_vector(a, 'a')
    _require_vector(b, 'b')
    if len(a) != len(b):
        raise DimensionError(f"dot: lengths differ ({len(a)} vs {len(b)})")
    return _resolve(backend).dot(a._data, b._data)


def cross(a, b, backend=None):
    """
    Cross product of two length-3 vectors.

    ``(a.y*b.z - a.z*b.y, a.z*b.x - a.x*b.z, a.x*b.y - a.y*b.x)``
    """
    _require_vector(a, 'a')
    _require_vector(b, 'b')
    if len(a) != 3 or len(b) != 3:
        raise DimensionError(
            f"cross: defined for length-3 vectors only, got {len(a)} and {len(b)}"
        )
    return wrap_result(_resolve(backend).cross(a._data, b._data), a, b)


def norm(a, backend=None) -> float:
    """Euclidean norm."""
    _require_vector(a, 'a')
    return _resolve(backend).norm(a._data)


def normalized(a, backend=None):
    """
    Unit vector in the direction of ``a``.

    Raises
    ------
    DegenerateVectorError
        If ``a`` has zero norm
    """
    n = norm(a, backend=backend)
    if n == 0.0:
        raise DegenerateVectorError(f"cannot normalize a zero {_describe(a)}")
    return scale(1.0 / n, a, backend=backend)


def normalize(a, backend=None) -> None:
    """In-place variant of ``normalized``; ``a`` is unchanged on error."""
    result = normalized(a, backend=backend)
    a._data[...] = result._data


def transpose(a, backend=None):
    """Matrix with rows and columns swapped."""
    if not isinstance(a, Matrix):
        raise TypeError(f"transpose expects a Matrix, got {type(a).__name__}")
    return wrap_result(_resolve(backend).transpose(a._data), a)


def allclose(a, b, rtol=1e-5, atol=1e-6) -> bool:
    """True when ``a`` and ``b`` have the same shape and close values."""
    _require_container(a, 'a')
    _require_container(b, 'b')
    if isinstance(a, Vector) != isinstance(b, Vector) or a.shape != b.shape:
        return False
    return bool(np.allclose(a._data, b._data, rtol=rtol, atol=atol))
