"""Element-wise broadcast arithmetic for small coordinate tuples.

Provides:
    - reduce(): apply a binary operator position by position
    - add/sub/mul/div/floordiv_broadcast(): named wrappers per operator
    - format_vector(): "(e0, e1, ...)" text form
    - Vector: tuple subclass with operator syntax wired to the above

A "vector" is any fixed-arity, positionally indexable container of numbers:
tuple, list, 1-D numpy array, named tuple. There is no dedicated vector
type; Vector exists only for callers that prefer ``p * 40`` over
``mul_broadcast(p, 40)``.

Broadcasting rules:
    - Result arity N is the minimum arity among the vector operands
    - A scalar never constrains N and contributes its value at every position
    - At least one operand must be a vector

Division by zero is not guarded: Python numbers raise ZeroDivisionError,
numpy floats produce inf/nan.

Usage:
    from pixelcanvas.utils import vector
    p2 = vector.mul_broadcast(vector.add_broadcast((i, j), 1), cell)
    print(vector.format_vector(p2))  # "(80, 40)"
"""

import numbers
import operator
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Tuple

import numpy as np


def is_scalar(obj: Any) -> bool:
    """True for a single arithmetic value (Python or numpy number)."""
    if isinstance(obj, (bool, np.bool_)):
        return False
    return isinstance(obj, (numbers.Number, np.number))


def is_vector(obj: Any) -> bool:
    """True for a fixed-arity positionally indexable container.

    Strings, bytes, mappings and multi-dimensional numpy arrays are not vectors.
    """
    if isinstance(obj, (str, bytes, bytearray, Mapping)):
        return False
    if isinstance(obj, np.ndarray):
        return obj.ndim == 1
    return isinstance(obj, Sequence) or (
        hasattr(obj, '__getitem__') and hasattr(obj, '__len__')
    )


def vector_min_size(*operands: Any) -> int:
    """Minimum arity among the vector operands.

    Parameters
    ----------
    *operands : Any
        Vectors and/or scalars

    Returns
    -------
    int
        Smallest ``len()`` among vector operands

    Raises
    ------
    TypeError
        If no operand is a vector
    """
    sizes = [len(op) for op in operands if is_vector(op)]
    if not sizes:
        raise TypeError(
            "Broadcast arithmetic needs at least one vector operand, got "
            + ", ".join(type(op).__name__ for op in operands)
        )
    return min(sizes)


def _element(operand: Any, i: int) -> Any:
    if is_vector(operand):
        return operand[i]
    return operand


def reduce(op: Callable[[Any, Any], Any], lhs: Any, rhs: Any) -> Tuple:
    """Apply ``op`` element-wise between two operands with broadcasting.

    Parameters
    ----------
    op : Callable[[Any, Any], Any]
        Binary operator (e.g. operator.add)
    lhs, rhs : Any
        Each a vector or a scalar; at least one must be a vector

    Returns
    -------
    tuple
        New tuple of arity ``vector_min_size(lhs, rhs)``; result[i] is
        ``op(lhs[i], rhs[i])`` with scalars substituted as themselves

    Raises
    ------
    TypeError
        If neither operand is a vector, or an operand is neither a vector
        nor a scalar

    Examples
    --------
    >>> reduce(operator.add, (1, 2, 3), (10, 20))
    (11, 22)
    >>> reduce(operator.sub, 10, (1, 2))
    (9, 8)
    """
    for operand in (lhs, rhs):
        if not (is_vector(operand) or is_scalar(operand)):
            raise TypeError(
                f"Operand must be a vector or a scalar, got {type(operand).__name__}"
            )
    n = vector_min_size(lhs, rhs)
    return tuple(op(_element(lhs, i), _element(rhs, i)) for i in range(n))


def add_broadcast(lhs: Any, rhs: Any) -> Tuple:
    """Element-wise ``lhs + rhs``."""
    return reduce(operator.add, lhs, rhs)


def sub_broadcast(lhs: Any, rhs: Any) -> Tuple:
    """Element-wise ``lhs - rhs``."""
    return reduce(operator.sub, lhs, rhs)


def mul_broadcast(lhs: Any, rhs: Any) -> Tuple:
    """Element-wise ``lhs * rhs``."""
    return reduce(operator.mul, lhs, rhs)


def div_broadcast(lhs: Any, rhs: Any) -> Tuple:
    """Element-wise true division ``lhs / rhs``."""
    return reduce(operator.truediv, lhs, rhs)


def floordiv_broadcast(lhs: Any, rhs: Any) -> Tuple:
    """Element-wise floor division ``lhs // rhs`` (integer pixel math)."""
    return reduce(operator.floordiv, lhs, rhs)


def format_vector(vec: Any) -> str:
    """Render a vector as ``(e0, e1, ..., eN-1)``.

    Zero-arity vectors render as ``()``. Elements use ``str()``.
    """
    return "(" + ", ".join(str(e) for e in vec) + ")"


class Vector(tuple):
    """Tuple with broadcast operators.

    Arithmetic with any vector or scalar returns a new Vector. Equality and
    hashing are plain tuple semantics.

    Examples
    --------
    >>> (Vector((2, 3)) + 1) * 40
    Vector((120, 160))
    >>> str(Vector((1.5, 2)))
    '(1.5, 2)'
    """

    __slots__ = ()

    def _apply(self, fn, other, reflected=False):
        if not (is_vector(other) or is_scalar(other)):
            return NotImplemented
        result = fn(other, self) if reflected else fn(self, other)
        return Vector(result)

    def __add__(self, other):
        return self._apply(add_broadcast, other)

    def __radd__(self, other):
        return self._apply(add_broadcast, other, reflected=True)

    def __sub__(self, other):
        return self._apply(sub_broadcast, other)

    def __rsub__(self, other):
        return self._apply(sub_broadcast, other, reflected=True)

    def __mul__(self, other):
        return self._apply(mul_broadcast, other)

    def __rmul__(self, other):
        return self._apply(mul_broadcast, other, reflected=True)

    def __truediv__(self, other):
        return self._apply(div_broadcast, other)

    def __rtruediv__(self, other):
        return self._apply(div_broadcast, other, reflected=True)

    def __floordiv__(self, other):
        return self._apply(floordiv_broadcast, other)

    def __rfloordiv__(self, other):
        return self._apply(floordiv_broadcast, other, reflected=True)

    def __repr__(self):
        return f"Vector({tuple.__repr__(self)})"

    def __str__(self):
        return format_vector(self)
