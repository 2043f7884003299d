from __future__ import annotations

import numbers
from typing import Any, Callable

from . import coercion as _coercion
from . import engine as _engine
from .errors import ShapeError
from .formatting import MatrixMixin


_OPS_MODULE: Any | None = None


def _get_ops() -> Any:
    global _OPS_MODULE
    if _OPS_MODULE is None:
        from . import ops as _ops

        _OPS_MODULE = _ops
    return _OPS_MODULE


def _require_callable(fn: Any, name: str) -> None:
    if not callable(fn):
        raise TypeError(f"Must pass a function to {name}().")


class Matrix(MatrixMixin):
    """Dense, fixed-size 2D matrix of numeric scalars.

    ``Matrix([rows, cols])`` starts as the identity pattern (ones along the
    shorter diagonal for rectangular shapes). ``Matrix(grid)`` copies a nested
    sequence or 2D NumPy array. ``Matrix()`` is a 2x2 identity.

    Arithmetic methods (`add`, `sub`, `mult`, `dot`, `product`, `pow`) mutate
    the receiver and return it, so calls chain::

        A.product(3, B).add(4)

    The module-level functions of the same names leave their inputs alone and
    return a new Matrix.
    """

    def __init__(self, dimensions: Any = None):
        rows, cols, data = _coercion.coerce_source(dimensions)
        self._rows = rows
        self._cols = cols
        self._data: list[list[Any]] = data if data is not None else _engine.identity_grid(rows, cols)

    @classmethod
    def _from_grid(cls, grid: list[list[Any]]) -> "Matrix":
        # Takes ownership of `grid`; callers must pass fresh row lists.
        out = cls.__new__(cls)
        out._rows = len(grid)
        out._cols = len(grid[0])
        out._data = grid
        return out

    @classmethod
    def filled(cls, shape: Any, value: Any) -> "Matrix":
        rows, cols = _coercion.coerce_shape(shape)
        return cls._from_grid(_engine.filled_grid(rows, cols, _coercion.coerce_cell(value)))

    # --- shape ---

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def dimensions(self) -> list[int]:
        return [self._rows, self._cols]

    # --- element access ---

    def _check_index(self, row: Any, col: Any) -> None:
        if not (isinstance(row, numbers.Integral) and isinstance(col, numbers.Integral)):
            raise TypeError("indices must be integers")
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(f"index ({row}, {col}) out of range for shape {self.shape}")

    def get(self, row: int, col: int) -> Any:
        self._check_index(row, col)
        return self._data[row][col]

    def set(self, row: int, col: int, value: Any) -> None:
        self._check_index(row, col)
        self._data[row][col] = _coercion.coerce_cell(value)

    def __getitem__(self, key: Any) -> Any:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col]")
        return self.get(key[0], key[1])

    def __setitem__(self, key: Any, value: Any) -> None:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, col]")
        self.set(key[0], key[1], value)

    def tolist(self) -> list[list[Any]]:
        return _engine.copy_grid(self._data)

    # --- whole-matrix state ---

    def copy(self, source: Any) -> "Matrix":
        """Overwrite every cell with the values of a same-shaped source."""

        if not isinstance(source, Matrix):
            source = Matrix(source)
        if source.shape != self.shape:
            raise ShapeError(
                f"Cannot copy a matrix of shape {source.shape} into shape {self.shape}"
            )
        for row, src_row in zip(self._data, source._data):
            row[:] = src_row
        return self

    def clone(self) -> "Matrix":
        return type(self)._from_grid(self.tolist())

    def zero(self, fill: Any = 0) -> "Matrix":
        """Set every cell to `fill`, or to `fill()` per cell when it is callable."""

        if fill is None:
            fill = 0
        if callable(fill):
            for row in self._data:
                for j in range(self._cols):
                    row[j] = fill()
        else:
            value = _coercion.coerce_cell(fill)
            for row in self._data:
                row[:] = [value] * self._cols
        return self

    def reset(self) -> "Matrix":
        self._data = _engine.identity_grid(self._rows, self._cols)
        return self

    # --- derived views ---

    @property
    def T(self) -> "Matrix":
        return type(self)._from_grid(_engine.transpose_grid(self._data))

    @property
    def I(self) -> "Matrix":
        return type(self)._from_grid(_engine.identity_grid(self._rows, self._cols))

    # --- iteration ---

    def map(self, fn: Callable[[Any, int, int, "Matrix"], Any]) -> "Matrix":
        """Replace each cell with ``fn(value, row, col, self)`` unless it returns None."""

        _require_callable(fn, "map")
        for i, row in enumerate(self._data):
            for j in range(self._cols):
                result = fn(row[j], i, j, self)
                if result is not None:
                    row[j] = result
        return self

    def for_each(self, fn: Callable[[Any, int, int, "Matrix"], Any]) -> None:
        _require_callable(fn, "for_each")
        for i, row in enumerate(self._data):
            for j in range(self._cols):
                fn(row[j], i, j, self)

    def for_each_row(self, fn: Callable[[list[Any], int, "Matrix"], Any]) -> None:
        _require_callable(fn, "for_each_row")
        for i, row in enumerate(self._data):
            fn(list(row), i, self)

    def sum(self) -> "Matrix":
        """Row sums as a new (rows, 1) matrix."""
        return type(self)._from_grid([[sum(row)] for row in self._data])

    # --- mutating arithmetic ---

    def _fold(self, operands: tuple[Any, ...], combine: Callable[[Any, Any], Any], verb: str) -> "Matrix":
        normalized = _coercion.normalize_operands(self.shape, operands, verb=verb)
        # Fold into a scratch copy; self._data keeps the original values (also
        # when self is one of the operands) until every cell has combined.
        target = _engine.copy_grid(self._data)
        _engine.fold_elementwise(target, [m._data for m in normalized], combine)
        self._data = target
        return self

    def _assign(self, grid: list[list[Any]], verb: str) -> "Matrix":
        shape = (len(grid), len(grid[0]))
        if shape != self.shape:
            raise ShapeError(
                f"Cannot {verb} in place: result shape {shape} differs from receiver shape "
                f"{self.shape}. Use the module-level {verb}() to get a reshaped result."
            )
        self._data = grid
        return self

    def add(self, *operands: Any) -> "Matrix":
        return self._fold(operands, _engine.ADD, "add")

    def sub(self, *operands: Any) -> "Matrix":
        """Subtract operands left to right: ``A.sub(B, C)`` leaves ``A - B - C`` in A."""
        return self._fold(operands, _engine.SUB, "subtract")

    def mult(self, *operands: Any) -> "Matrix":
        """Hadamard (element-wise) product; scalars broadcast."""
        return self._fold(operands, _engine.MUL, "compute the hadamard (element-wise) product of")

    # `stacklevel` on the private helpers points slow-dot warnings at the
    # frame that called into the public API, as it does for warnings.warn.

    def _dot_into(self, operands: tuple[Any, ...], stacklevel: int) -> "Matrix":
        if not operands:
            raise TypeError("dot() requires at least one operand")
        for operand in operands:
            if not isinstance(operand, Matrix):
                raise TypeError(f"dot() operands must be Matrix instances, got {type(operand).__name__}")
        grid = _engine.dot_chain([self._data] + [m._data for m in operands], stacklevel=stacklevel + 1)
        return self._assign(grid, "dot")

    def _pow_into(self, exponent: Any, stacklevel: int) -> "Matrix":
        if isinstance(exponent, bool) or not isinstance(exponent, numbers.Integral):
            raise TypeError(f"exponent must be a non-negative integer, got {type(exponent).__name__}")
        if exponent < 0:
            raise ValueError("negative powers are not supported")
        grid = _engine.power(self._data, int(exponent), stacklevel=stacklevel + 1)
        return self._assign(grid, "pow")

    def dot(self, *operands: "Matrix") -> "Matrix":
        return self._dot_into(operands, stacklevel=3)

    def product(self, *operands: Any) -> "Matrix":
        """Scalar operands scale, Matrix operands apply a dot step, in argument order."""

        tagged = [_coercion.as_operand(x) for x in operands]
        grid = _engine.product_chain(self._data, tagged, stacklevel=3)
        return self._assign(grid, "product")

    def pow(self, exponent: int) -> "Matrix":
        return self._pow_into(exponent, stacklevel=3)

    # --- operators ---

    @staticmethod
    def _is_operand(other: Any) -> bool:
        return isinstance(other, Matrix) or _coercion.is_scalar(other)

    def __eq__(self, other: Any) -> Any:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __neg__(self) -> "Matrix":
        return _get_ops().mult(self, -1)

    def __add__(self, other: Any) -> Any:
        if not self._is_operand(other):
            return NotImplemented
        return _get_ops().add(self, other)

    def __radd__(self, other: Any) -> Any:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Any:
        if not self._is_operand(other):
            return NotImplemented
        return _get_ops().sub(self, other)

    def __rsub__(self, other: Any) -> Any:
        if not _coercion.is_scalar(other):
            return NotImplemented
        return _get_ops().sub(type(self).filled(self.shape, other), self)

    def __mul__(self, other: Any) -> Any:
        if not self._is_operand(other):
            return NotImplemented
        return _get_ops().mult(self, other)

    def __rmul__(self, other: Any) -> Any:
        return self.__mul__(other)

    def __matmul__(self, other: Any) -> Any:
        if not isinstance(other, Matrix):
            return NotImplemented
        return _get_ops()._dot((self, other), stacklevel=3)

    def __pow__(self, exponent: Any) -> "Matrix":
        return _get_ops()._pow(self, exponent, stacklevel=3)

    def __iadd__(self, other: Any) -> "Matrix":
        return self.add(other)

    def __isub__(self, other: Any) -> "Matrix":
        return self.sub(other)

    def __imul__(self, other: Any) -> "Matrix":
        return self.mult(other)

    def __imatmul__(self, other: Any) -> "Matrix":
        return self._dot_into((other,), stacklevel=3)
