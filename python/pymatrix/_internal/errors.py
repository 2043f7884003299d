"""pymatrix exception types.

Both error types subclass ValueError so callers that only care about "bad
argument" can keep catching the builtin.
"""


class PyMatrixError(Exception):
    """Base class for all pymatrix errors."""


class ShapeError(PyMatrixError, ValueError):
    """Operand shape does not match the shape an operation requires."""


class DimensionError(PyMatrixError, ValueError):
    """Inner dimensions are incompatible (dot product or concatenation)."""
