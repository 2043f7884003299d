import pytest

import pymatrix
from pymatrix import DimensionError, Matrix, ShapeError


def test_dot_2x2():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[5, 6], [7, 8]])
    assert pymatrix.dot(a, b).tolist() == [[19, 22], [43, 50]]


def test_dot_row_by_column():
    out = pymatrix.dot(Matrix([[1, 2, 3]]), Matrix([[1], [1], [1]]))
    assert out.shape == (1, 1)
    assert out.tolist() == [[6]]


def test_dot_result_shape():
    a = Matrix([[1, 2, 3], [4, 5, 6]])
    b = Matrix([[1, 0, 2, 1], [0, 1, 0, 1], [1, 1, 1, 1]])
    out = pymatrix.dot(a, b)
    assert out.shape == (a.rows, b.cols)
    assert out.tolist() == [[4, 5, 5, 6], [10, 11, 14, 15]]


def test_dot_with_identity_is_noop():
    a = Matrix([[1, 2, 3], [4, 5, 6]])
    assert pymatrix.dot(a, pymatrix.identity(3)) == a
    assert pymatrix.dot(pymatrix.identity(2), a) == a


def test_dot_chain_changes_intermediate_shape():
    a = Matrix([[1, 2]])          # 1x2
    b = Matrix([[1, 0, 1], [0, 1, 1]])  # 2x3
    c = Matrix([[1], [2], [3]])   # 3x1
    out = pymatrix.dot(a, b, c)
    assert out.shape == (1, 1)
    assert out.tolist() == [[1 * 1 + 2 * 2 + 3 * 3]]


def test_dot_incompatible_dimensions():
    with pytest.raises(DimensionError, match="2 != 3"):
        pymatrix.dot(Matrix([2, 2]), Matrix([3, 2]))


def test_dot_leaves_operands_untouched():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[5, 6], [7, 8]])
    pymatrix.dot(a, b)
    assert a.tolist() == [[1, 2], [3, 4]]
    assert b.tolist() == [[5, 6], [7, 8]]


def test_dot_requires_matrices():
    with pytest.raises(TypeError):
        pymatrix.dot(Matrix([2, 2]), 3)


def test_matmul_operator_and_alias():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[5, 6], [7, 8]])
    assert (a @ b) == pymatrix.matmul(a, b)


def test_mutating_dot_square():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[5, 6], [7, 8]])
    assert a.dot(b) is a
    assert a.tolist() == [[19, 22], [43, 50]]


def test_mutating_dot_allows_shape_preserving_rectangular_chain():
    a = Matrix([[1, 2, 3], [4, 5, 6]])
    a.dot(Matrix([3, 3]))
    assert a.tolist() == [[1, 2, 3], [4, 5, 6]]
    a.dot(Matrix([[1], [1], [1]]), Matrix([[1, 1, 1]]))
    assert a.tolist() == [[6, 6, 6], [15, 15, 15]]


def test_mutating_dot_rejects_reshaping_result():
    a = Matrix([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(ShapeError):
        a.dot(Matrix([[1], [1], [1]]))
    assert a.tolist() == [[1, 2, 3], [4, 5, 6]]


def test_mutating_dot_incompatible_leaves_receiver_unchanged():
    a = Matrix([[1, 2], [3, 4]])
    with pytest.raises(DimensionError):
        a.dot(Matrix([2, 2]), Matrix([3, 3]))
    assert a.tolist() == [[1, 2], [3, 4]]


def test_mutating_dot_requires_operand():
    with pytest.raises(TypeError):
        Matrix().dot()


def test_product_mixes_scalars_and_dot_steps():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[0, 1], [1, 0]])
    out = pymatrix.product(a, 3, b)
    assert out.tolist() == [[6, 3], [12, 9]]
    assert a.tolist() == [[1, 2], [3, 4]]


def test_product_pure_form_may_reshape():
    out = pymatrix.product(Matrix([[1, 2, 3]]), 2, Matrix([[1], [1], [1]]))
    assert out.tolist() == [[12]]


def test_product_chaining():
    a = Matrix([[1, 2], [3, 4]])
    b = Matrix([[0, 1], [1, 0]])
    assert a.product(3, b).add(4) is a
    assert a.tolist() == [[10, 7], [16, 13]]


def test_product_rejects_bad_operand():
    with pytest.raises(TypeError):
        Matrix().product("x")


def test_pow_zero_resets_to_identity():
    a = Matrix([[5, 6], [7, 8]])
    a.pow(0)
    assert a.tolist() == [[1, 0], [0, 1]]


def test_pow_one_is_noop():
    a = Matrix([[5, 6], [7, 8]])
    a.pow(1)
    assert a.tolist() == [[5, 6], [7, 8]]


def test_pow_identity_is_fixed():
    assert pymatrix.pow(Matrix([[1, 0], [0, 1]]), 3).tolist() == [[1, 0], [0, 1]]


def test_pow_matches_repeated_dot():
    a = Matrix([[1, 1], [1, 0]])
    assert pymatrix.pow(a, 5).tolist() == [[8, 5], [5, 3]]
    assert (a ** 3) == pymatrix.dot(a, a, a)
    assert a.tolist() == [[1, 1], [1, 0]]


def test_pow_invalid_exponents():
    a = Matrix([2, 2])
    with pytest.raises(ValueError):
        a.pow(-1)
    with pytest.raises(TypeError):
        a.pow(1.5)
    with pytest.raises(TypeError):
        a.pow(True)


def test_pow_non_square():
    a = Matrix([[1, 2, 3], [4, 5, 6]])
    a.pow(1)
    with pytest.raises(DimensionError):
        a.pow(2)
    assert a.tolist() == [[1, 2, 3], [4, 5, 6]]
    assert a.pow(0).tolist() == [[1, 0, 0], [0, 1, 0]]
