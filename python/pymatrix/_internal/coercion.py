from __future__ import annotations

import numbers
from collections.abc import Sequence as _SequenceABC
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from .errors import ShapeError


_Matrix: Any | None = None

DEFAULT_DIMENSIONS = (2, 2)


def configure(*, Matrix: Any) -> None:
    global _Matrix
    _Matrix = Matrix


def _matrix_cls() -> Any:
    if _Matrix is None:
        raise RuntimeError("pymatrix coercion not configured")
    return _Matrix


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def _is_row_like(value: Any) -> bool:
    return is_sequence_like(value) or isinstance(value, np.ndarray)


def is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Number)


def _coerce_extent(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"Matrix {name} must be an integer, got bool")
    if isinstance(value, numbers.Integral):
        n = int(value)
    elif isinstance(value, float) and value.is_integer():
        n = int(value)
    else:
        raise TypeError(f"Matrix {name} must be an integer, got {type(value).__name__}")
    if n < 1:
        raise ValueError(f"Matrix {name} must be at least 1, got {n}")
    return n


def coerce_shape(shape: Any) -> tuple[int, int]:
    """Validate a `[rows, cols]` pair (list or tuple)."""

    if not _is_row_like(shape) or len(shape) != 2:
        raise TypeError("Matrix dimensions must be given as a [rows, cols] pair.")
    return _coerce_extent(shape[0], "rows"), _coerce_extent(shape[1], "cols")


def coerce_cell(value: Any) -> Any:
    if value is None:
        return 0
    if isinstance(value, np.generic):
        value = value.item()
    if not is_scalar(value):
        raise TypeError(f"Matrix entries must be numeric scalars, got {type(value).__name__}")
    return value


def coerce_grid(candidate: Any) -> tuple[int, int, list[list[Any]]]:
    """Copy a nested grid into fresh row lists.

    Shape comes from the grid length and the length of its first row. Short rows
    are padded with 0, extra entries are ignored, `None` cells become 0.
    """

    if isinstance(candidate, np.ndarray):
        if candidate.ndim != 2:
            raise ValueError("Matrix input must be a 2D structure.")
        candidate = candidate.tolist()

    if not is_sequence_like(candidate):
        raise TypeError("Matrix data must be provided as a nested sequence or a 2D NumPy array.")
    if len(candidate) == 0 or not _is_row_like(candidate[0]) or len(candidate[0]) == 0:
        raise ValueError("Matrix data must not be empty.")

    rows = len(candidate)
    cols = len(candidate[0])
    data: list[list[Any]] = []
    for source_row in candidate:
        if not _is_row_like(source_row):
            raise TypeError("Each matrix row must be a sequence of entries.")
        width = len(source_row)
        data.append([coerce_cell(source_row[j]) if j < width else 0 for j in range(cols)])
    return rows, cols, data


def _matrix_like_shape(obj: Any) -> tuple[int, int] | None:
    # Matrix-like means the pymatrix surface: integer `rows`/`cols` agreeing
    # with a 2-tuple `shape`, plus `get(i, j)`. Tables with only shape/get
    # (e.g. DataFrames) do not qualify.
    if isinstance(obj, _matrix_cls()):
        return obj.rows, obj.cols
    shape = getattr(obj, "shape", None)
    if not (isinstance(shape, tuple) and len(shape) == 2 and callable(getattr(obj, "get", None))):
        return None
    rows, cols = getattr(obj, "rows", None), getattr(obj, "cols", None)
    if isinstance(rows, bool) or isinstance(cols, bool):
        return None
    if not (isinstance(rows, numbers.Integral) and isinstance(cols, numbers.Integral)):
        return None
    if (rows, cols) != shape:
        return None
    return int(rows), int(cols)


def coerce_source(source: Any) -> tuple[int, int, list[list[Any]] | None]:
    """Resolve constructor input into `(rows, cols, data)`.

    `data` is None when the caller asked for a shape only, in which case the
    matrix starts as the identity pattern.
    """

    if source is None:
        return DEFAULT_DIMENSIONS[0], DEFAULT_DIMENSIONS[1], None

    if not isinstance(source, np.ndarray):
        shape = _matrix_like_shape(source)
        if shape is not None:
            r, c = shape
            return r, c, [[coerce_cell(source.get(i, j)) for j in range(c)] for i in range(r)]

    if isinstance(source, np.ndarray) or (is_sequence_like(source) and source and _is_row_like(source[0])):
        return coerce_grid(source)

    rows, cols = coerce_shape(source)
    return rows, cols, None


# --- operand normalization ---


@dataclass(frozen=True)
class ScalarOperand:
    value: Any


@dataclass(frozen=True)
class MatrixOperand:
    matrix: Any

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape


Operand = Union[ScalarOperand, MatrixOperand]


def as_operand(value: Any) -> Operand:
    if isinstance(value, (ScalarOperand, MatrixOperand)):
        return value
    if isinstance(value, _matrix_cls()):
        return MatrixOperand(value)
    if is_scalar(value):
        return ScalarOperand(value)
    raise TypeError(
        f"operands must be numeric scalars or Matrix instances, got {type(value).__name__}"
    )


def broadcast(value: Any, shape: tuple[int, int]) -> Any:
    """A new Matrix of `shape` filled uniformly with `value`."""
    return _matrix_cls().filled(shape, value)


def normalize_operands(shape: tuple[int, int], operands: Any, *, verb: str) -> list[Any]:
    """Promote every operand to a Matrix of exactly `shape`.

    All operands are checked before anything is returned so callers can
    validate first and mutate afterwards.
    """

    tagged = [as_operand(x) for x in operands]
    for op in tagged:
        if isinstance(op, MatrixOperand) and op.shape != shape:
            raise ShapeError(
                f"Cannot {verb} matrices of different dimensions: {shape} vs {op.shape}"
            )

    out: list[Any] = []
    for op in tagged:
        if isinstance(op, ScalarOperand):
            out.append(broadcast(op.value, shape))
        else:
            out.append(op.matrix)
    return out
