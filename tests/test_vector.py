"""Test broadcast vector arithmetic.

Tests for pixelcanvas.utils.vector:
    - Equal-arity element-wise ops for + - * /
    - Vector/scalar broadcasting in both operand orders
    - Unequal arity truncates to the shorter vector
    - Zero-arity vectors
    - Formatting "(e0, e1, ...)"
    - Vector operator syntax

Run:
    pytest tests/test_vector.py -v
"""

import operator

import numpy as np
import pytest

from pixelcanvas.utils import vector
from pixelcanvas.utils.vector import Vector


OPS = [
    (vector.add_broadcast, operator.add),
    (vector.sub_broadcast, operator.sub),
    (vector.mul_broadcast, operator.mul),
    (vector.div_broadcast, operator.truediv),
]


# ============================================================================
# CLASSIFICATION
# ============================================================================

def test_is_vector_accepts_sequences_and_1d_arrays():
    assert vector.is_vector((1, 2))
    assert vector.is_vector([1, 2, 3])
    assert vector.is_vector(np.array([1, 2]))
    assert vector.is_vector(Vector((1,)))


def test_is_vector_rejects_text_scalars_and_2d_arrays():
    assert not vector.is_vector("ab")
    assert not vector.is_vector(b"ab")
    assert not vector.is_vector(3)
    assert not vector.is_vector(np.zeros((2, 2)))


def test_is_scalar():
    assert vector.is_scalar(3)
    assert vector.is_scalar(2.5)
    assert vector.is_scalar(np.uint32(7))
    assert not vector.is_scalar((1,))
    assert not vector.is_scalar(True)


def test_vector_min_size_ignores_scalars():
    assert vector.vector_min_size((1, 2, 3), 5) == 3
    assert vector.vector_min_size(5, [1, 2]) == 2
    assert vector.vector_min_size((1, 2, 3), (1,)) == 1


def test_vector_min_size_requires_a_vector():
    with pytest.raises(TypeError):
        vector.vector_min_size(1, 2)


# ============================================================================
# BROADCASTING
# ============================================================================

@pytest.mark.parametrize("fn,op", OPS)
def test_equal_arity_elementwise(fn, op):
    a = (8, 6, 4)
    b = (2, 3, 4)
    result = fn(a, b)
    assert len(result) == 3
    for i in range(3):
        assert result[i] == op(a[i], b[i])


@pytest.mark.parametrize("fn,op", OPS)
def test_scalar_broadcast_both_orders(fn, op):
    a = [3, 6, 12]
    s = 3
    assert fn(a, s) == tuple(op(x, s) for x in a)
    assert fn(s, a) == tuple(op(s, x) for x in a)


def test_unequal_arity_truncates_to_shorter():
    result = vector.add_broadcast((1, 2), (10, 20, 30, 40))
    assert result == (11, 22)
    result = vector.mul_broadcast([1, 2, 3, 4], (2, 2, 2))
    assert result == (2, 4, 6)


def test_zero_arity_gives_empty_result():
    assert vector.add_broadcast((), 5) == ()
    assert vector.sub_broadcast((), (1, 2)) == ()


def test_result_is_independent_of_inputs():
    a = [1, 2]
    result = vector.add_broadcast(a, 1)
    a[0] = 100
    assert result == (2, 3)
    assert isinstance(result, tuple)


def test_numpy_operands():
    result = vector.mul_broadcast(np.array([1, 2, 3]), 2)
    assert tuple(int(v) for v in result) == (2, 4, 6)


def test_floordiv_broadcast():
    assert vector.floordiv_broadcast((7, 9), 2) == (3, 4)


def test_integer_division_by_zero_raises_natively():
    with pytest.raises(ZeroDivisionError):
        vector.div_broadcast((1, 2), 0)


def test_numpy_float_division_by_zero_gives_inf():
    with np.errstate(divide='ignore'):
        result = vector.div_broadcast(np.array([1.0, -1.0]), np.float64(0.0))
    assert np.isinf(result[0]) and result[0] > 0
    assert np.isinf(result[1]) and result[1] < 0


def test_scalar_scalar_is_rejected():
    with pytest.raises(TypeError):
        vector.add_broadcast(1, 2)


def test_non_numeric_operand_is_rejected():
    with pytest.raises(TypeError):
        vector.add_broadcast((1, 2), "x")


def test_custom_operator_through_reduce():
    assert vector.reduce(max, (1, 5, 3), (4, 2, 6)) == (4, 5, 6)


# ============================================================================
# FORMATTING
# ============================================================================

def test_format_vector():
    assert vector.format_vector((1, 2, 3)) == "(1, 2, 3)"
    assert vector.format_vector([1.5]) == "(1.5)"
    assert vector.format_vector(()) == "()"


# ============================================================================
# VECTOR TYPE
# ============================================================================

def test_vector_operators_match_named_functions():
    v = Vector((2, 3))
    assert v + 1 == Vector((3, 4))
    assert 1 + v == Vector((3, 4))
    assert v * 40 == (80, 120)
    assert 10 - v == (8, 7)
    assert v - (1, 1, 1) == (1, 2)
    assert (v + 1) * 40 == (120, 160)
    assert Vector((8, 6)) / 2 == (4.0, 3.0)
    assert Vector((7, 9)) // 2 == (3, 4)


def test_vector_plus_tuple_broadcasts_instead_of_concatenating():
    assert Vector((1, 2)) + (10, 20) == (11, 22)
    assert (10, 20) + Vector((1, 2)) == (11, 22)


def test_vector_results_are_vectors():
    assert isinstance(Vector((1, 2)) * 2, Vector)
    assert isinstance(3 * Vector((1, 2)), Vector)


def test_vector_str_and_repr():
    v = Vector((1, 2))
    assert str(v) == "(1, 2)"
    assert repr(v) == "Vector((1, 2))"
