from __future__ import annotations

from typing import Any

import numpy as np


def to_numpy(self: Any, dtype: Any = None) -> np.ndarray:
    """Return an ndarray copy of the matrix values."""
    return np.array(self.tolist(), dtype=dtype)


def _array(self: Any, dtype: Any = None, copy: Any = None) -> np.ndarray:
    # Values live in Python lists, so every conversion is a copy.
    if copy is False:
        raise ValueError("pymatrix matrices cannot be converted to NumPy without a copy")
    return to_numpy(self, dtype=dtype)


def _is_operand(value: Any) -> bool:
    from .coercion import is_scalar
    from .dense import Matrix

    return isinstance(value, Matrix) or is_scalar(value)


def _array_ufunc(self: Any, ufunc: Any, method: str, *inputs: Any, **kwargs: Any) -> Any:
    """
    NumPy ufunc protocol implementation for pymatrix matrices.

    Matrix/scalar mixes are routed through the pure form so results stay Matrix
    instances; anything involving an ndarray is evaluated by NumPy on a converted copy.
    """
    if method != "__call__":
        return NotImplemented

    from .dense import Matrix

    if any(isinstance(x, np.ndarray) for x in inputs):
        converted = [to_numpy(x) if isinstance(x, Matrix) else x for x in inputs]
        return ufunc(*converted, **kwargs)

    if kwargs or not all(_is_operand(x) for x in inputs):
        return NotImplemented

    # Lazy import to avoid circular dependency
    from . import ops

    if len(inputs) == 1 and ufunc == np.negative:
        return ops.mult(inputs[0], -1)

    if len(inputs) == 2:
        a, b = inputs
        if ufunc == np.matmul:
            if isinstance(a, Matrix) and isinstance(b, Matrix):
                return ops._dot((a, b), stacklevel=3)
            return NotImplemented
        if ufunc == np.add:
            return ops.add(a, b) if isinstance(a, Matrix) else ops.add(b, a)
        if ufunc == np.multiply:
            return ops.mult(a, b) if isinstance(a, Matrix) else ops.mult(b, a)
        if ufunc == np.subtract:
            if isinstance(a, Matrix):
                return ops.sub(a, b)
            return ops.sub(Matrix.filled(b.shape, a), b)

    return NotImplemented


def patch_interop(cls: Any) -> None:
    """Attach the NumPy conversion hooks to the given class."""
    cls.to_numpy = to_numpy
    cls.__array__ = _array
    cls.__array_ufunc__ = _array_ufunc
