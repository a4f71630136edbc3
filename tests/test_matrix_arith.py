import numpy as np
import pytest

from htkkit.matrix_arith import (
    add,
    coordwise_div,
    coordwise_mult,
    diff,
    divide_scalar,
    multiply_scalar,
    scalar_divide,
    scalar_minus,
    subtract_scalar,
    add_scalar,
)
from htkkit.matrix_products import DimensionError

A = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
B = np.array([[2.0, -1.0, 0.5], [3.0, 7.0, -2.0]])


def test_add_small_example():
    assert add([[1, 2]], [[3, 4]]).tolist() == [[4.0, 6.0]]


def test_add_then_diff_round_trip():
    assert np.allclose(diff(add(A, B), B), A)


def test_add_is_commutative():
    assert np.array_equal(add(A, B), add(B, A))


def test_diff_of_self_is_zero():
    assert not diff(A, A).any()


def test_mult_then_div_round_trip():
    assert np.allclose(coordwise_div(coordwise_mult(A, B), B), A)


def test_coordwise_div_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        coordwise_div(A, np.zeros_like(A))


@pytest.mark.parametrize("func", [add, diff, coordwise_mult, coordwise_div])
def test_shape_mismatch_raises(func):
    with pytest.raises(DimensionError):
        func(A, B.T)


def test_non_matrix_raises():
    with pytest.raises(DimensionError):
        add([1.0, 2.0], [1.0, 2.0])


def test_scalar_add_subtract_round_trip():
    assert np.allclose(subtract_scalar(add_scalar(A, 3.5), 3.5), A)


def test_scalar_minus_is_negated_subtraction():
    assert np.allclose(scalar_minus(2.0, A), -subtract_scalar(A, 2.0))


def test_multiply_divide_round_trip():
    assert np.allclose(divide_scalar(multiply_scalar(A, 4.0), 4.0), A)


def test_divide_scalar_zero_raises():
    with pytest.raises(ZeroDivisionError):
        divide_scalar(A, 0.0)


def test_scalar_divide_inverts():
    assert np.allclose(scalar_divide(1.0, A) * A, np.ones_like(A))


def test_scalar_divide_zero_entry_raises():
    with pytest.raises(ZeroDivisionError):
        scalar_divide(1.0, [[1.0, 0.0]])


def test_inputs_not_modified():
    original = A.copy()
    add_scalar(A, 1.0)
    multiply_scalar(A, 2.0)
    assert np.array_equal(A, original)