"""
densela: dense vectors and matrices for teaching linear algebra.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

# Containers
from .containers import (
    Vector,
    Vector3,
    Vector4,
    Matrix,
    Matrix3,
    Matrix4,
)

# Named operations
from .ops import (
    make_vector,
    make_matrix,
    identity,
    add,
    subtract,
    scale,
    multiply,
    dot,
    cross,
    norm,
    normalized,
    normalize,
    transpose,
    allclose,
)

from .errors import (
    DenseError,
    DimensionError,
    IndexOutOfRange,
    DegenerateVectorError,
)

# Backend utilities (for advanced users)
from ._backends import (
    get_backend,
    set_default_backend,
    get_default_backend,
    list_available_backends,
)

__all__ = [
    'Vector',
    'Vector3',
    'Vector4',
    'Matrix',
    'Matrix3',
    'Matrix4',
    'make_vector',
    'make_matrix',
    'identity',
    'add',
    'subtract',
    'scale',
    'multiply',
    'dot',
    'cross',
    'norm',
    'normalized',
    'normalize',
    'transpose',
    'allclose',
    'DenseError',
    'DimensionError',
    'IndexOutOfRange',
    'DegenerateVectorError',
    'get_backend',
    'set_default_backend',
    'get_default_backend',
    'list_available_backends',
]
