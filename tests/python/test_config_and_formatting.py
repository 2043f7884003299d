import warnings

import numpy as np
import pytest

import pymatrix
from pymatrix import Matrix, PyMatrixPerformanceWarning, PyMatrixWarning


@pytest.fixture(autouse=True)
def _restore_config(monkeypatch):
    monkeypatch.delenv("PYMATRIX_EDGE_ITEMS", raising=False)
    monkeypatch.delenv("PYMATRIX_SLOW_DOT_THRESHOLD", raising=False)
    pymatrix.reset_config()
    yield
    pymatrix.reset_config()


def test_defaults():
    assert pymatrix.get_config() == {"edge_items": 4, "slow_dot_threshold": 5_000_000}


def test_env_vars_are_read(monkeypatch):
    monkeypatch.setenv("PYMATRIX_EDGE_ITEMS", "2")
    monkeypatch.setenv("PYMATRIX_SLOW_DOT_THRESHOLD", "0")
    pymatrix.reset_config()
    assert pymatrix.get_config() == {"edge_items": 2, "slow_dot_threshold": 0}


def test_invalid_env_falls_back(monkeypatch):
    monkeypatch.setenv("PYMATRIX_EDGE_ITEMS", "lots")
    monkeypatch.setenv("PYMATRIX_SLOW_DOT_THRESHOLD", "-3")
    pymatrix.reset_config()
    assert pymatrix.get_config() == {"edge_items": 4, "slow_dot_threshold": 5_000_000}


def test_configure_validates():
    with pytest.raises(ValueError):
        pymatrix.configure(edge_items=0)
    with pytest.raises(ValueError):
        pymatrix.configure(slow_dot_threshold=-1)


def test_str_small_matrix():
    m = Matrix([[1, 2.5], [3, 4]])
    assert str(m) == "Matrix(shape=(2, 2))\n[\n [1 2.5]\n [3 4]\n]"


def test_repr():
    assert repr(Matrix([2, 3])) == "<Matrix shape=(2, 3)>"


def test_str_truncates_with_edge_items():
    pymatrix.configure(edge_items=1)
    m = Matrix([[r * 10 + c for c in range(4)] for r in range(3)])
    assert str(m) == "Matrix(shape=(3, 4))\n[\n [0 ... 3]\n ...\n [20 ... 23]\n]"


def test_slow_dot_emits_performance_warning():
    pymatrix.configure(slow_dot_threshold=7)
    a = Matrix([2, 2])
    with pytest.warns(PyMatrixPerformanceWarning, match="multiply-adds"):
        pymatrix.dot(a, a)


@pytest.mark.parametrize(
    "call",
    [
        lambda a: pymatrix.dot(a, a),
        lambda a: a.dot(a),
        lambda a: a @ a,
        lambda a: np.matmul(a, a),
        lambda a: pymatrix.product(a, 2, a),
        lambda a: a.product(a),
        lambda a: pymatrix.pow(a, 2),
        lambda a: a.pow(3),
        lambda a: a ** 2,
    ],
)
def test_performance_warning_points_at_calling_code(call):
    pymatrix.configure(slow_dot_threshold=7)
    with pytest.warns(PyMatrixPerformanceWarning) as record:
        call(Matrix([2, 2]))
    assert record[0].filename == __file__


def test_performance_warning_points_at_in_place_matmul():
    pymatrix.configure(slow_dot_threshold=7)
    a = Matrix([2, 2])
    with pytest.warns(PyMatrixPerformanceWarning) as record:
        a @= a
    assert record[0].filename == __file__


def test_performance_warning_is_filterable():
    assert issubclass(PyMatrixPerformanceWarning, PyMatrixWarning)
    assert issubclass(PyMatrixWarning, UserWarning)


def test_no_warning_below_threshold():
    pymatrix.configure(slow_dot_threshold=8)
    a = Matrix([2, 2])
    with warnings.catch_warnings():
        warnings.simplefilter("error", PyMatrixPerformanceWarning)
        pymatrix.dot(a, a)


def test_zero_threshold_disables_warning():
    pymatrix.configure(slow_dot_threshold=0)
    a = Matrix([3, 3])
    with warnings.catch_warnings():
        warnings.simplefilter("error", PyMatrixPerformanceWarning)
        pymatrix.pow(a, 4)
