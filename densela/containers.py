"""
Dense vector and matrix value types.

``Vector`` and ``Matrix`` are dynamically sized; ``Vector3``, ``Vector4``,
``Matrix3`` and ``Matrix4`` bind their size in the class. Storage is a
NumPy array owned exclusively by the container. Arithmetic is delegated to
``densela.ops``; operators are sugar over those functions.
"""

import numbers

import numpy as np

from ._utils import (
    check_array,
    check_dimension,
    check_index,
    check_vector,
    precision_of,
    resolve_dtype,
)
from .errors import DimensionError, IndexOutOfRange


# Process-wide random source for set_random(); callers may pass their own
_RNG = np.random.default_rng()


def _format_block(data: np.ndarray) -> str:
    """Right-aligned rows of values, one row per line."""
    cells = [[f"{v:.6g}" for v in row] for row in data]
    width = max(len(c) for row in cells for c in row)
    return "\n".join(" ".join(c.rjust(width) for c in row) for row in cells)


def _is_scalar(k) -> bool:
    return isinstance(k, numbers.Real) and not isinstance(k, bool)


class _Dense:
    """Behaviour shared by vectors and matrices."""

    fixed_dim = None
    # NumPy defers to our reflected operators instead of broadcasting
    __array_ufunc__ = None
    _data: np.ndarray

    @classmethod
    def _wrap(cls, data: np.ndarray):
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @property
    def shape(self) -> tuple:
        return self._data.shape

    @property
    def size(self) -> int:
        """Number of stored elements."""
        return int(self._data.size)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def precision(self) -> str:
        """'f' for float32 storage, 'd' for float64."""
        return precision_of(self._data.dtype)

    def set_zero(self):
        """Set every element to 0."""
        self._data[...] = 0
        return self

    def set_random(self, rng=None):
        """
        Fill with independent uniform draws in [-1, 1].

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Random source. Defaults to the process-wide generator.
        """
        gen = _RNG if rng is None else rng
        self._data[...] = gen.uniform(-1.0, 1.0, size=self._data.shape)
        return self

    def copy(self):
        """Independent copy of the same class and precision."""
        return type(self)._wrap(self._data.copy())

    def to_numpy(self) -> np.ndarray:
        """Copy of the storage as a NumPy array."""
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype)

    # Operator sugar; the named functions in densela.ops are the contract

    def __add__(self, other):
        from . import ops
        if not isinstance(other, _Dense):
            return NotImplemented
        return ops.add(self, other)

    def __sub__(self, other):
        from . import ops
        if not isinstance(other, _Dense):
            return NotImplemented
        return ops.subtract(self, other)

    def __neg__(self):
        from . import ops
        return ops.scale(-1.0, self)

    def __rmul__(self, k):
        from . import ops
        if not _is_scalar(k):
            return NotImplemented
        return ops.scale(k, self)

    def __truediv__(self, k):
        from . import ops
        if not _is_scalar(k):
            return NotImplemented
        return ops.scale(1.0 / k, self)

    def __eq__(self, other):
        if not isinstance(other, _Dense):
            return NotImplemented
        return (
            isinstance(other, Vector) == isinstance(self, Vector)
            and self.shape == other.shape
            and bool(np.array_equal(self._data, other._data))
        )

    __hash__ = None


class Vector(_Dense):
    """
    Dynamically sized dense vector.

    Parameters
    ----------
    length : int
        Number of components. Fixed for the lifetime of the vector.
    precision : str
        'f' (float32, default) or 'd' (float64).

    Examples
    --------
    >>> v = Vector(3)
    >>> v.set(0, 1.0)
    >>> v.x
    1.0
    """

    def __init__(self, length, precision='f'):
        length = check_dimension(length)
        self._data = np.zeros(length, dtype=resolve_dtype(precision))

    @classmethod
    def _check_length(cls, length):
        if cls.fixed_dim is None:
            if length is None:
                raise DimensionError(f"{cls.__name__} requires an explicit length")
            return check_dimension(length)
        if length is not None and length != cls.fixed_dim:
            raise DimensionError(
                f"{cls.__name__} has length {cls.fixed_dim}, got {length}"
            )
        return cls.fixed_dim

    @classmethod
    def from_values(cls, values, precision=None):
        """
        Build a vector from a sequence of numbers.

        Precision defaults to 'd' for float64 NumPy input and 'f' otherwise.
        Fixed-size classes raise DimensionError on a length mismatch.
        """
        if precision is None:
            precision = 'd' if getattr(values, 'dtype', None) == np.float64 else 'f'
        data = check_vector(values, name='values', dtype=resolve_dtype(precision),
                            length=cls.fixed_dim)
        return cls._wrap(data)

    @classmethod
    def zeros(cls, length=None, precision='f'):
        length = cls._check_length(length)
        return cls._wrap(np.zeros(length, dtype=resolve_dtype(precision)))

    @classmethod
    def random(cls, length=None, precision='f', rng=None):
        length = cls._check_length(length)
        return cls.zeros(length, precision).set_random(rng)

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return 1

    def __len__(self):
        return int(self._data.shape[0])

    def __iter__(self):
        return (float(v) for v in self._data)

    def get(self, i) -> float:
        i = check_index(i, len(self))
        return float(self._data[i])

    def set(self, i, value):
        i = check_index(i, len(self))
        self._data[i] = value

    def __getitem__(self, i):
        return self.get(i)

    def __setitem__(self, i, value):
        self.set(i, value)

    def _component(i, name):
        def fget(self):
            if i >= len(self):
                raise IndexOutOfRange(
                    f"{name} needs at least {i + 1} components, vector has {len(self)}"
                )
            return self.get(i)

        def fset(self, value):
            if i >= len(self):
                raise IndexOutOfRange(
                    f"{name} needs at least {i + 1} components, vector has {len(self)}"
                )
            self.set(i, value)

        return property(fget, fset, doc=f"Component {i}.")

    x = _component(0, 'x')
    y = _component(1, 'y')
    z = _component(2, 'z')
    w = _component(3, 'w')
    del _component

    def assign(self, values):
        """Overwrite every component; the length must match."""
        data = values._data if isinstance(values, _Dense) else values
        data = check_vector(data, name='values', dtype=self.dtype, length=len(self))
        self._data[...] = data
        return self

    def set_identity(self):
        raise DimensionError("set_identity is defined for square matrices only")

    def transpose(self):
        """1 x N row matrix holding the same values."""
        return Matrix._wrap(self._data.reshape(1, -1).copy())

    def dot(self, other) -> float:
        from . import ops
        return ops.dot(self, other)

    def cross(self, other):
        from . import ops
        return ops.cross(self, other)

    def norm(self) -> float:
        from . import ops
        return ops.norm(self)

    def normalized(self):
        from . import ops
        return ops.normalized(self)

    def normalize(self):
        from . import ops
        ops.normalize(self)

    def __mul__(self, k):
        from . import ops
        if not _is_scalar(k):
            return NotImplemented
        return ops.scale(k, self)

    def __repr__(self):
        values = ", ".join(f"{v:.6g}" for v in self._data)
        return f"{type(self).__name__}([{values}], precision='{self.precision}')"

    def __str__(self):
        return _format_block(self._data.reshape(-1, 1))


class Vector3(Vector):
    """Vector with exactly three components."""

    fixed_dim = 3

    def __init__(self, values=None, precision='f'):
        dtype = resolve_dtype(precision)
        if values is None:
            self._data = np.zeros(3, dtype=dtype)
        else:
            self._data = check_vector(values, name='values', dtype=dtype, length=3)


class Vector4(Vector):
    """Vector with exactly four components."""

    fixed_dim = 4

    def __init__(self, values=None, precision='f'):
        dtype = resolve_dtype(precision)
        if values is None:
            self._data = np.zeros(4, dtype=dtype)
        else:
            self._data = check_vector(values, name='values', dtype=dtype, length=4)


class Matrix(_Dense):
    """
    Dynamically sized dense matrix addressed by (row, column).

    Parameters
    ----------
    rows, cols : int
        Dimensions. Fixed for the lifetime of the matrix.
    precision : str
        'f' (float32, default) or 'd' (float64).
    """

    def __init__(self, rows, cols, precision='f'):
        rows = check_dimension(rows, 'rows')
        cols = check_dimension(cols, 'cols')
        self._data = np.zeros((rows, cols), dtype=resolve_dtype(precision))

    @classmethod
    def _check_shape(cls, rows, cols):
        if cls.fixed_dim is None:
            if rows is None:
                raise DimensionError(f"{cls.__name__} requires explicit dimensions")
            rows = check_dimension(rows, 'rows')
            cols = rows if cols is None else check_dimension(cols, 'cols')
            return rows, cols
        n = cls.fixed_dim
        if (rows is not None and rows != n) or (cols is not None and cols != n):
            raise DimensionError(f"{cls.__name__} is {n}x{n}, got {rows}x{cols}")
        return n, n

    @classmethod
    def from_rows(cls, rows, precision=None):
        """Build a matrix from a nested sequence, one inner sequence per row."""
        if precision is None:
            precision = 'd' if getattr(rows, 'dtype', None) == np.float64 else 'f'
        shape = None if cls.fixed_dim is None else (cls.fixed_dim, cls.fixed_dim)
        data = check_array(rows, name='rows', dtype=resolve_dtype(precision), shape=shape)
        return cls._wrap(data)

    @classmethod
    def zeros(cls, rows=None, cols=None, precision='f'):
        shape = cls._check_shape(rows, cols)
        return cls._wrap(np.zeros(shape, dtype=resolve_dtype(precision)))

    @classmethod
    def identity(cls, n=None, precision='f'):
        """Square identity matrix."""
        return cls.zeros(n, n, precision).set_identity()

    @classmethod
    def random(cls, rows=None, cols=None, precision='f', rng=None):
        return cls.zeros(rows, cols, precision).set_random(rng)

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    def get(self, i, j) -> float:
        i = check_index(i, self.rows, 'row')
        j = check_index(j, self.cols, 'column')
        return float(self._data[i, j])

    def set(self, i, j, value):
        i = check_index(i, self.rows, 'row')
        j = check_index(j, self.cols, 'column')
        self._data[i, j] = value

    def __getitem__(self, key):
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("Matrix indices must be a (row, column) pair")
        return self.get(*key)

    def __setitem__(self, key, value):
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("Matrix indices must be a (row, column) pair")
        self.set(key[0], key[1], value)

    def set_identity(self):
        """Ones on the diagonal, zeros elsewhere. Square matrices only."""
        if self.rows != self.cols:
            raise DimensionError(
                f"set_identity requires a square matrix, got {self.rows}x{self.cols}"
            )
        self._data[...] = np.eye(self.rows, dtype=self.dtype)
        return self

    def assign(self, values):
        """Overwrite every element; the shape must match."""
        data = values._data if isinstance(values, _Dense) else values
        data = check_array(data, name='values', dtype=self.dtype, shape=self.shape)
        self._data[...] = data
        return self

    def transpose(self):
        from . import ops
        return ops.transpose(self)

    @property
    def T(self):
        return self.transpose()

    def __mul__(self, other):
        from . import ops
        if isinstance(other, _Dense):
            return ops.multiply(self, other)
        if not _is_scalar(other):
            return NotImplemented
        return ops.scale(other, self)

    def __matmul__(self, other):
        from . import ops
        if not isinstance(other, _Dense):
            return NotImplemented
        return ops.multiply(self, other)

    def __repr__(self):
        rows = ", ".join(
            "[" + ", ".join(f"{v:.6g}" for v in row) + "]" for row in self._data
        )
        return f"{type(self).__name__}([{rows}], precision='{self.precision}')"

    def __str__(self):
        return _format_block(self._data)


class Matrix3(Matrix):
    """3x3 matrix."""

    fixed_dim = 3

    def __init__(self, values=None, precision='f'):
        dtype = resolve_dtype(precision)
        if values is None:
            self._data = np.zeros((3, 3), dtype=dtype)
        else:
            self._data = check_array(values, name='values', dtype=dtype, shape=(3, 3))


class Matrix4(Matrix):
    """4x4 matrix."""

    fixed_dim = 4

    def __init__(self, values=None, precision='f'):
        dtype = resolve_dtype(precision)
        if values is None:
            self._data = np.zeros((4, 4), dtype=dtype)
        else:
            self._data = check_array(values, name='values', dtype=dtype, shape=(4, 4))


FIXED_VECTORS = {3: Vector3, 4: Vector4}
FIXED_MATRICES = {3: Matrix3, 4: Matrix4}


def wrap_result(data: np.ndarray, *operands):
    """
    Wrap a result array in a container class.

    The fixed-size class is kept when every operand has the same fixed size
    and the result has that size too; otherwise the dynamic class is used.
    """
    dims = {o.fixed_dim for o in operands}
    fixed = dims.pop() if len(dims) == 1 else None
    if data.ndim == 1:
        if fixed is not None and data.shape[0] == fixed:
            return FIXED_VECTORS[fixed]._wrap(data)
        return Vector._wrap(data)
    if fixed is not None and data.shape == (fixed, fixed):
        return FIXED_MATRICES[fixed]._wrap(data)
    return Matrix._wrap(data)
