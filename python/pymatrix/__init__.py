"""Dense 2D matrices with a pure and a mutating (chaining) arithmetic API."""
from __future__ import annotations

__version__ = "0.1.0"

from typing import Any

from ._internal import coercion as _coercion
from ._internal import interop as _interop
from ._internal.runtime import runtime as _runtime
from ._internal.dense import Matrix
from ._internal.concat import concat, join, stack
from ._internal.ops import (
    add,
    dot,
    identity,
    matrix,
    mult,
    ones,
    pow,
    product,
    sub,
    transpose,
    zeros,
)
from ._internal.errors import DimensionError, PyMatrixError, ShapeError
from ._internal.warnings import PyMatrixPerformanceWarning, PyMatrixWarning

_coercion.configure(Matrix=Matrix)
_interop.patch_interop(Matrix)

# Alias matching the `@` operator.
matmul = dot


def configure(*, edge_items: int | None = None, slow_dot_threshold: int | None = None) -> None:
    """Override process-wide settings.

    - edge_items: rows/cols shown at each edge of ``str(matrix)`` before ``...``
      (env: PYMATRIX_EDGE_ITEMS, default 4).
    - slow_dot_threshold: multiply-adds per dot step above which a
      PyMatrixPerformanceWarning is emitted; 0 disables
      (env: PYMATRIX_SLOW_DOT_THRESHOLD, default 5_000_000).
    """
    _runtime.configure(edge_items=edge_items, slow_dot_threshold=slow_dot_threshold)


def get_config() -> dict[str, Any]:
    return _runtime.as_dict()


def reset_config() -> None:
    """Forget configure() overrides and re-read the environment on next use."""
    _runtime.reset()


__all__ = [
    "Matrix",
    "add",
    "sub",
    "mult",
    "dot",
    "matmul",
    "product",
    "pow",
    "transpose",
    "identity",
    "matrix",
    "zeros",
    "ones",
    "join",
    "stack",
    "concat",
    "configure",
    "get_config",
    "reset_config",
    "PyMatrixError",
    "ShapeError",
    "DimensionError",
    "PyMatrixWarning",
    "PyMatrixPerformanceWarning",
]
