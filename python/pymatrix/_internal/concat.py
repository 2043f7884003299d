from __future__ import annotations

from typing import Any

from .dense import Matrix
from .errors import DimensionError


def _require_pair(a: Any, b: Any, op: str) -> None:
    for value in (a, b):
        if not isinstance(value, Matrix):
            raise TypeError(f"{op}() expects Matrix operands, got {type(value).__name__}")


def join(a: Matrix, b: Matrix) -> Matrix:
    """Place `b` to the right of `a`; both must have the same number of rows."""

    _require_pair(a, b, "join")
    if a.rows != b.rows:
        raise DimensionError(f"Must supply matrices with equal rows: {a.rows} != {b.rows}")
    return Matrix._from_grid([left + right for left, right in zip(a.tolist(), b.tolist())])


def stack(a: Matrix, b: Matrix) -> Matrix:
    """Place `b` below `a`; both must have the same number of columns."""

    _require_pair(a, b, "stack")
    if a.cols != b.cols:
        raise DimensionError(f"Must supply matrices with equal columns: {a.cols} != {b.cols}")
    return Matrix._from_grid(a.tolist() + b.tolist())


def concat(a: Matrix, b: Matrix) -> Matrix:
    """Join horizontally when row counts match, otherwise stack vertically when column counts match."""

    _require_pair(a, b, "concat")
    if a.rows == b.rows:
        return join(a, b)
    if a.cols == b.cols:
        return stack(a, b)
    raise DimensionError(
        f"Must supply matrices with compatible dimensions: {a.shape} and {b.shape}"
    )
