"""pymatrix warning categories.

These exist so users can filter/suppress pymatrix warnings without
catching all UserWarning.

Keep this module dependency-free to avoid import cycles.
"""


class PyMatrixWarning(UserWarning):
    """Base warning category for all pymatrix user-facing warnings."""


class PyMatrixPerformanceWarning(PyMatrixWarning):
    """Warnings about likely performance pitfalls (e.g., large pure-Python dot steps)."""
