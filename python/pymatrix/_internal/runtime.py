from __future__ import annotations

import os
from typing import Any


DEFAULT_EDGE_ITEMS = 4
DEFAULT_SLOW_DOT_THRESHOLD = 5_000_000


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


class Runtime:
    """Process-wide settings for printing and performance diagnostics.

    Values are read lazily from the environment on first access and can be
    overridden with `configure()`.
    """

    def __init__(
        self,
        *,
        edge_items_env: str = "PYMATRIX_EDGE_ITEMS",
        slow_dot_env: str = "PYMATRIX_SLOW_DOT_THRESHOLD",
    ) -> None:
        self._edge_items_env = edge_items_env
        self._slow_dot_env = slow_dot_env
        self._edge_items: int | None = None
        self._slow_dot_threshold: int | None = None

    @property
    def edge_items(self) -> int:
        if self._edge_items is None:
            self._edge_items = _env_int(self._edge_items_env, DEFAULT_EDGE_ITEMS) or DEFAULT_EDGE_ITEMS
        return self._edge_items

    @property
    def slow_dot_threshold(self) -> int:
        # 0 disables the warning.
        if self._slow_dot_threshold is None:
            self._slow_dot_threshold = _env_int(self._slow_dot_env, DEFAULT_SLOW_DOT_THRESHOLD)
        return self._slow_dot_threshold

    def configure(
        self,
        *,
        edge_items: int | None = None,
        slow_dot_threshold: int | None = None,
    ) -> None:
        if edge_items is not None:
            if not isinstance(edge_items, int) or isinstance(edge_items, bool) or edge_items < 1:
                raise ValueError("edge_items must be a positive integer")
            self._edge_items = edge_items
        if slow_dot_threshold is not None:
            if (
                not isinstance(slow_dot_threshold, int)
                or isinstance(slow_dot_threshold, bool)
                or slow_dot_threshold < 0
            ):
                raise ValueError("slow_dot_threshold must be a non-negative integer")
            self._slow_dot_threshold = slow_dot_threshold

    def reset(self) -> None:
        """Drop overrides so the next access re-reads the environment."""
        self._edge_items = None
        self._slow_dot_threshold = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "edge_items": self.edge_items,
            "slow_dot_threshold": self.slow_dot_threshold,
        }


runtime = Runtime()
