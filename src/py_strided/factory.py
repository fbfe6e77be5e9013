"""
Array construction.

Every constructor returns an owning array backed by freshly allocated
storage. Shapes must be positive; ``ArrayFactory`` instances are
stateless, and the module-level functions delegate to ``DEFAULT`` so it
can be replaced.
"""

from __future__ import annotations
from .array import ARRAY_CLASSES
from .array import BaseArray
from .array import BitArray
from .array import ComplexArray
from .array import DoubleArray
from .array import IntArray
from .array import LongArray
from .array import ReferenceArray
from .array import _parse_shape
from .array import array_class
from .errors import StridedTypeError
from .errors import StridedValueError
from .indexer import size_of
from .indexer import unravel
from .storage import ArrayKind
from .storage import allocate
from .storage import infer_kind


def _positive_shape(args) -> tuple:
    shape = _parse_shape(args)
    if not shape:
        raise StridedValueError("A shape needs at least one dimension")
    for d in shape:
        if d <= 0:
            raise StridedValueError(f"Dimensions must be positive, got shape {shape}")
    return shape


def _nested_shape(data) -> tuple:
    """Shape of a rectangular nested sequence; strings are scalars."""
    shape = []
    level = data
    while isinstance(level, (list, tuple)):
        shape.append(len(level))
        if not level:
            break
        level = level[0]
    return tuple(shape)


def _nested_get(data, index):
    for i in index:
        data = data[i]
    return data


def _check_rectangular(data, shape, depth=0):
    if depth == len(shape):
        if isinstance(data, (list, tuple)):
            raise StridedValueError("Nested sequence is deeper than its first element")
        return
    if not isinstance(data, (list, tuple)) or len(data) != shape[depth]:
        raise StridedValueError(f"Nested sequence is ragged at depth {depth}")
    for item in data:
        _check_rectangular(item, shape, depth + 1)


class ArrayFactory:
    """Creates owning arrays of every kind."""

    def new_array(self, kind, *shape) -> BaseArray:
        """Zero-filled (None-filled for references) array of ``kind``."""
        shape = _positive_shape(shape)
        kind = ArrayKind(kind)
        return ARRAY_CLASSES[kind](allocate(kind, size_of(shape)), shape)

    def double_array(self, *shape) -> DoubleArray:
        return self.new_array(ArrayKind.DOUBLE, *shape)

    def int_array(self, *shape) -> IntArray:
        return self.new_array(ArrayKind.INT, *shape)

    def long_array(self, *shape) -> LongArray:
        return self.new_array(ArrayKind.LONG, *shape)

    def bit_array(self, *shape) -> BitArray:
        return self.new_array(ArrayKind.BIT, *shape)

    def complex_array(self, *shape) -> ComplexArray:
        return self.new_array(ArrayKind.COMPLEX, *shape)

    def reference_array(self, *shape) -> ReferenceArray:
        return self.new_array(ArrayKind.REFERENCE, *shape)

    def array(self, data, kind=None) -> BaseArray:
        """
        Array from (nested) Python sequences, another array or a vector.

        Nesting is read the usual way round: ``data[i][j]`` becomes element
        (i, j). The kind is inferred from the values unless given.

        >>> a = array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        >>> a.shape, a.get(0, 1)
        ((2, 3), 2.0)
        """
        if isinstance(data, BaseArray):
            if kind is None or ArrayKind(kind) is data.kind:
                return data.copy()
            return array_class(kind)._from_values(list(data), data.shape)
        if hasattr(data, "to_array") and not isinstance(data, (list, tuple)):
            arr = data.to_array()
            return arr if kind is None else self.array(arr, kind)
        if not isinstance(data, (list, tuple)):
            raise StridedTypeError(
                f"Cannot build an array from {type(data).__name__}; use a list or tuple"
            )

        shape = _nested_shape(data)
        if size_of(shape) == 0:
            raise StridedValueError("Cannot build an array from an empty sequence")
        _check_rectangular(data, shape)

        n = size_of(shape)
        values = [_nested_get(data, unravel(i, shape)) for i in range(n)]
        if kind is None:
            kind = infer_kind(values)
        return array_class(kind)._from_values(values, shape)

    def zeros(self, *shape) -> DoubleArray:
        return self.double_array(*shape)

    def ones(self, *shape) -> DoubleArray:
        shape = _positive_shape(shape)
        return DoubleArray(DoubleArray.storage_class.filled(size_of(shape), 1.0), shape)

    def full(self, value, *shape) -> BaseArray:
        shape = _positive_shape(shape)
        cls = array_class(infer_kind([value]))
        return cls(cls.storage_class.filled(size_of(shape), value), shape)

    def range(self, start, end=None, step=1) -> BaseArray:
        """
        Values ``start, start + step, ...`` strictly before ``end``.

        Integer arguments give an IntArray (LongArray when a value does not
        fit in 32 bits); any float argument gives a DoubleArray.
        """
        if end is None:
            start, end = 0, start
        if step == 0:
            raise StridedValueError("range() step must not be zero")
        if any(isinstance(v, float) for v in (start, end, step)):
            n = max(0, int(-(-(end - start) // step)))
            values = [start + i * step for i in range(n)]
            kind = ArrayKind.DOUBLE
        else:
            values = list(range(start, end, step))
            kind = infer_kind(values) if values else ArrayKind.INT
        if not values:
            raise StridedValueError(f"range({start}, {end}, {step}) is empty")
        return array_class(kind)._from_values(values, (len(values),))

    def linspace(self, start: float, end: float, n: int) -> DoubleArray:
        """``n`` evenly spaced doubles from ``start`` to ``end`` inclusive."""
        if n <= 0:
            raise StridedValueError(f"linspace needs a positive number of points, got {n}")
        if n == 1:
            return DoubleArray._from_values([float(start)], (1,))
        step = (end - start) / (n - 1)
        values = [start + i * step for i in range(n - 1)]
        values.append(float(end))
        return DoubleArray._from_values(values, (n,))

    def eye(self, n: int) -> DoubleArray:
        a = self.double_array(n, n)
        a.get_diagonal().assign(1.0)
        return a

    def diag(self, x: BaseArray) -> BaseArray:
        """
        A vector becomes a square matrix with ``x`` on its diagonal; a
        matrix gives an owning copy of its diagonal.
        """
        if x.is_vector():
            n = x.size
            out = self.new_array(x.kind, n, n)
            out.get_diagonal().assign(x)
            return out
        if x.is_matrix():
            return x.get_diagonal().copy()
        raise StridedValueError(f"diag requires a 1-d or 2-d array, got shape {x.shape}")


DEFAULT = ArrayFactory()


# ============================================================
# Functional shortcuts over DEFAULT
# ============================================================

def array(data, kind=None) -> BaseArray:
    return DEFAULT.array(data, kind)


def new_array(kind, *shape) -> BaseArray:
    return DEFAULT.new_array(kind, *shape)


def double_array(*shape) -> DoubleArray:
    return DEFAULT.double_array(*shape)


def int_array(*shape) -> IntArray:
    return DEFAULT.int_array(*shape)


def long_array(*shape) -> LongArray:
    return DEFAULT.long_array(*shape)


def bit_array(*shape) -> BitArray:
    return DEFAULT.bit_array(*shape)


def complex_array(*shape) -> ComplexArray:
    return DEFAULT.complex_array(*shape)


def reference_array(*shape) -> ReferenceArray:
    return DEFAULT.reference_array(*shape)


def zeros(*shape) -> DoubleArray:
    return DEFAULT.zeros(*shape)


def ones(*shape) -> DoubleArray:
    return DEFAULT.ones(*shape)


def full(value, *shape) -> BaseArray:
    return DEFAULT.full(value, *shape)


def arange(start, end=None, step=1) -> BaseArray:
    return DEFAULT.range(start, end, step)


def linspace(start: float, end: float, n: int) -> DoubleArray:
    return DEFAULT.linspace(start, end, n)


def eye(n: int) -> DoubleArray:
    return DEFAULT.eye(n)


def diag(x: BaseArray) -> BaseArray:
    return DEFAULT.diag(x)
