"""
Error taxonomy for dense containers.

All errors are contract violations raised synchronously by the offending
call, before any operand is modified.
"""


class DenseError(Exception):
    """Base class for all densela errors."""
    pass


class DimensionError(DenseError, ValueError):
    """Operands do not have the shape relationship the operation requires."""
    pass


class IndexOutOfRange(DenseError, IndexError):
    """Element access beyond the bounds of a container."""
    pass


class DegenerateVectorError(DenseError, ValueError):
    """Normalization of a vector whose norm is zero."""
    pass
