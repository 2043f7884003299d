"""Pure (allocating) form of the arithmetic API.

Each function takes its primary operand explicitly as the first positional
argument, returns a brand-new Matrix and leaves every argument untouched.
Where the result has the primary's shape the function is a thin wrapper that
builds a fresh receiver and delegates to the mutating method; `dot` and
`product` may change shape, so they return the engine result directly.
"""

from __future__ import annotations

import numbers
from typing import Any

from . import coercion as _coercion
from . import engine as _engine
from .dense import Matrix


def _require_matrix(value: Any, op: str) -> Matrix:
    if not isinstance(value, Matrix):
        raise TypeError(
            f"{op}() expects a Matrix as its first argument, got {type(value).__name__}"
        )
    return value


# `stacklevel` is relative to the helper, as in warnings.warn; operators and
# the ufunc hook call these directly so slow-dot warnings name their caller.


def _dot(operands: tuple[Any, ...], stacklevel: int) -> Matrix:
    for operand in operands:
        _require_matrix(operand, "dot")
    return Matrix._from_grid(_engine.dot_chain([m._data for m in operands], stacklevel=stacklevel + 1))


def _pow(matrix: Any, exponent: Any, stacklevel: int) -> Matrix:
    first = _require_matrix(matrix, "pow")
    return first.clone()._pow_into(exponent, stacklevel=stacklevel + 1)


def add(matrix: Matrix, *operands: Any) -> Matrix:
    """``matrix + operands[0] + ...``; scalars broadcast.

    Example: ``add(Matrix([[1, 2], [3, 4]]), 4)`` gives ``[[5, 6], [7, 8]]``.
    """

    first = _require_matrix(matrix, "add")
    return Matrix.filled(first.shape, 0).add(first, *operands)


def sub(matrix: Matrix, *operands: Any) -> Matrix:
    """Left-associative subtraction: ``sub(A, B, C, 3)`` is ``A - B - C - 3``."""

    first = _require_matrix(matrix, "sub")
    return first.clone().sub(*operands)


def mult(matrix: Matrix, *operands: Any) -> Matrix:
    """Hadamard (element-wise) product; scalars broadcast."""

    first = _require_matrix(matrix, "mult")
    return Matrix.filled(first.shape, 1).mult(first, *operands)


def dot(a: Matrix, b: Matrix, *more: Matrix) -> Matrix:
    """Chained matrix multiplication, left to right.

    Operands only need to be pairwise compatible (``left.cols == right.rows``);
    an (n, m) x (m, p) step produces an (n, p) intermediate.
    """

    return _dot((a, b) + more, stacklevel=3)


def product(matrix: Matrix, *operands: Any) -> Matrix:
    """Scalar operands scale, Matrix operands apply a dot step, starting from `matrix`."""

    first = _require_matrix(matrix, "product")
    tagged = [_coercion.as_operand(x) for x in operands]
    return Matrix._from_grid(_engine.product_chain(first._data, tagged, stacklevel=3))


def pow(matrix: Matrix, exponent: int) -> Matrix:
    return _pow(matrix, exponent, stacklevel=3)


def transpose(matrix: Matrix) -> Matrix:
    return _require_matrix(matrix, "transpose").T


def identity(x: Any) -> Matrix:
    """Create an identity-pattern matrix.

    Accepted inputs:
    - int N: an N x N identity.
    - sequence [rows, cols]: ones on the shorter diagonal, zeros elsewhere.
    - Matrix: same shape as the input, independent of its values.
    """

    if isinstance(x, Matrix):
        return x.I
    if isinstance(x, numbers.Integral) and not isinstance(x, bool):
        return Matrix([int(x), int(x)])
    return Matrix(_coercion.coerce_shape(x))


def matrix(source: Any) -> Matrix:
    return Matrix(source)


def zeros(shape: Any) -> Matrix:
    return Matrix.filled(shape, 0)


def ones(shape: Any) -> Matrix:
    return Matrix.filled(shape, 1)
