"""Grid-level kernels shared by the pure and mutating forms.

Every function here takes plain row lists (``list[list[Any]]``) and either
mutates the target grid it is handed or returns a brand-new grid. Shape
validation that depends on the receiver lives in the callers.
"""

from __future__ import annotations

import operator
import warnings
from typing import Any, Callable, Iterable, Sequence

from .coercion import MatrixOperand, Operand, ScalarOperand
from .errors import DimensionError
from .runtime import runtime
from .warnings import PyMatrixPerformanceWarning


Grid = list[list[Any]]

ADD: Callable[[Any, Any], Any] = operator.add
SUB: Callable[[Any, Any], Any] = operator.sub
MUL: Callable[[Any, Any], Any] = operator.mul


def identity_grid(rows: int, cols: int) -> Grid:
    # Rectangular shapes get ones along the shorter diagonal.
    return [[1 if i == j else 0 for j in range(cols)] for i in range(rows)]


def filled_grid(rows: int, cols: int, value: Any) -> Grid:
    return [[value for _ in range(cols)] for _ in range(rows)]


def copy_grid(grid: Sequence[Sequence[Any]]) -> Grid:
    return [list(row) for row in grid]


def transpose_grid(grid: Sequence[Sequence[Any]]) -> Grid:
    return [list(col) for col in zip(*grid)]


def fold_elementwise(target: Grid, operands: Iterable[Grid], combine: Callable[[Any, Any], Any]) -> None:
    """Fold each operand into `target` cell by cell, left to right."""

    for src in operands:
        for i, row in enumerate(target):
            src_row = src[i]
            for j in range(len(row)):
                row[j] = combine(row[j], src_row[j])


def scale(grid: Grid, factor: Any) -> Grid:
    return [[value * factor for value in row] for row in grid]


def _warn_if_slow(rows: int, inner: int, cols: int, stacklevel: int) -> None:
    threshold = runtime.slow_dot_threshold
    work = rows * inner * cols
    if threshold and work > threshold:
        warnings.warn(
            f"dot product of ({rows}, {inner}) x ({inner}, {cols}) runs {work} multiply-adds "
            "in pure Python; this may be slow.",
            PyMatrixPerformanceWarning,
            stacklevel=stacklevel,
        )


def dot_pair(left: Grid, right: Grid, *, stacklevel: int = 2) -> Grid:
    """Standard row-by-column product of two grids.

    `stacklevel` follows `warnings.warn`: 2 attributes a slow-dot warning to
    the caller of this function. Each wrapper passes its own value plus one.
    """

    rows, inner = len(left), len(left[0])
    right_rows, cols = len(right), len(right[0])
    if inner != right_rows:
        raise DimensionError(
            "Cannot compute the dot product of matrices of incompatible dimensions: "
            f"({rows}, {inner}) x ({right_rows}, {cols}), {inner} != {right_rows}"
        )
    _warn_if_slow(rows, inner, cols, stacklevel + 1)

    columns = transpose_grid(right)
    out: Grid = []
    for row in left:
        out_row: list[Any] = []
        for col in columns:
            acc: Any = 0
            for a, b in zip(row, col):
                acc += a * b
            out_row.append(acc)
        out.append(out_row)
    return out


def dot_chain(grids: Sequence[Grid], *, stacklevel: int = 2) -> Grid:
    """Multiply `grids` left to right; intermediate shapes may change."""

    if len(grids) < 2:
        raise TypeError("dot requires at least two operands")
    result = grids[0]
    for right in grids[1:]:
        result = dot_pair(result, right, stacklevel=stacklevel + 1)
    return result


def product_chain(start: Grid, operands: Iterable[Operand], *, stacklevel: int = 2) -> Grid:
    """Apply scalar scaling and dot steps in argument order, starting from `start`.

    Always returns a new grid; `start` is not modified.
    """

    result = copy_grid(start)
    for op in operands:
        if isinstance(op, ScalarOperand):
            result = scale(result, op.value)
        elif isinstance(op, MatrixOperand):
            result = dot_pair(result, op.matrix._data, stacklevel=stacklevel + 1)
        else:  # pragma: no cover - as_operand guards this
            raise TypeError(f"unsupported operand {op!r}")
    return result


def power(grid: Grid, exponent: int, *, stacklevel: int = 2) -> Grid:
    """`grid` dotted with itself `exponent - 1` times (exponent 0 gives the identity pattern).

    Linear in `exponent`; no repeated squaring.
    """

    if exponent == 0:
        return identity_grid(len(grid), len(grid[0]))
    base = copy_grid(grid)
    result = copy_grid(grid)
    for _ in range(exponent - 1):
        result = dot_pair(result, base, stacklevel=stacklevel + 1)
    return result
