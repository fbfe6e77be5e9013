"""
Numerical routines over arrays.

BLAS-style level 1/2/3 operations (``dot``, ``axpy``, ``gemm``, ...) and
reductions with an optional dimension. Decompositions are entry points
only and raise UnsupportedOperationError.

NA in any operand of a double routine makes the affected result NA.
"""

from __future__ import annotations
import math
from typing import Any

from . import na
from .array import BaseArray
from .array import DoubleArray
from .array import _IntegralArray
from .array import _wrap
from .errors import NonConformantError
from .errors import StridedTypeError
from .errors import StridedValueError
from .errors import UnsupportedOperationError
from .indexer import column_major
from .indexer import row_major


def _doubles(x: BaseArray) -> list:
    """Elements of x as floats in column-major order, NA preserved."""
    if isinstance(x, DoubleArray):
        return list(x)
    if hasattr(x, "as_double"):
        return list(x.as_double())
    raise StridedTypeError(f"{type(x).__name__} is not a numeric array")


def _require_double(x: BaseArray, op: str) -> None:
    if not isinstance(x, DoubleArray):
        raise StridedTypeError(f"{op} requires a DoubleArray, got {type(x).__name__}")


def _require_same_size(x: BaseArray, y: BaseArray) -> None:
    if x.size != y.size:
        raise NonConformantError(x.shape, y.shape)


# ============================================================
# Level 1
# ============================================================

def dot(x: BaseArray, y: BaseArray) -> float:
    """Inner product of two arrays of equal size."""
    _require_same_size(x, y)
    total = 0.0
    for a, b in zip(_doubles(x), _doubles(y)):
        if na.is_na_double(a) or na.is_na_double(b):
            return na.DOUBLE
        total += a * b
    return total


def axpy(alpha: float, x: BaseArray, y: DoubleArray) -> DoubleArray:
    """``y += alpha * x``, in place. Returns y."""
    _require_double(y, "axpy")
    _require_same_size(x, y)
    if alpha == 0:
        return y
    xs = _doubles(x)
    for i, a in enumerate(xs):
        b = y.get(i)
        if na.is_na_double(a) or na.is_na_double(b):
            y.set(i, na.DOUBLE)
        else:
            y.set(i, b + alpha * a)
    return y


def scal(alpha: float, x: DoubleArray) -> DoubleArray:
    """``x *= alpha``, in place. Returns x."""
    _require_double(x, "scal")
    for i in range(x.size):
        v = x.get(i)
        if not na.is_na_double(v):
            x.set(i, alpha * v)
    return x


def norm2(x: BaseArray) -> float:
    """Euclidean norm."""
    total = 0.0
    for v in _doubles(x):
        if na.is_na_double(v):
            return na.DOUBLE
        total += v * v
    return math.sqrt(total)


def asum(x: BaseArray) -> float:
    """Sum of absolute values."""
    total = 0.0
    for v in _doubles(x):
        if na.is_na_double(v):
            return na.DOUBLE
        total += abs(v)
    return total


def iamax(x: BaseArray) -> int:
    """Flat index of the first element with the largest absolute value; NA is skipped."""
    best = -1
    best_value = -1.0
    for i, v in enumerate(_doubles(x)):
        if na.is_na_double(v):
            continue
        if abs(v) > best_value:
            best, best_value = i, abs(v)
    if best < 0:
        raise StridedValueError("iamax of an array without non-NA elements")
    return best


def trace(x: BaseArray) -> Any:
    """Sum of the main diagonal of a matrix."""
    if not x.is_matrix():
        raise StridedValueError(f"trace requires a 2-d array, got shape {x.shape}")
    return x.get_diagonal().sum()


def cumsum(x: BaseArray) -> BaseArray:
    """
    Running sum in column-major order, same shape and kind as ``x``.
    Once an NA is met every following element is NA. Integer sums wrap
    around like elementwise addition.
    """
    if not isinstance(x, (DoubleArray, _IntegralArray)):
        raise StridedTypeError(f"cumsum requires a numeric array, got {type(x).__name__}")
    out = x.copy()
    sentinel = x.na_value
    integral = isinstance(x, _IntegralArray)
    total = 0
    seen_na = False
    for i in range(out.size):
        v = out.get(i)
        if seen_na or x.na_test(v):
            seen_na = True
            out.set(i, sentinel)
            continue
        total += v
        if integral:
            total = x._check_collision(_wrap(total, x.bits))
        out.set(i, total)
    return out


# ============================================================
# Level 2 / 3
# ============================================================

def ger(alpha: float, x: BaseArray, y: BaseArray, a: DoubleArray) -> DoubleArray:
    """Rank-1 update ``a += alpha * x * y^T``, in place. Returns a."""
    _require_double(a, "ger")
    if not a.is_matrix() or a.shape != (x.size, y.size):
        raise NonConformantError(a.shape, (x.size, y.size))
    xs = _doubles(x)
    ys = _doubles(y)
    for j, yj in enumerate(ys):
        for i, xi in enumerate(xs):
            v = a.get(i, j)
            if na.is_na_double(v) or na.is_na_double(xi) or na.is_na_double(yj):
                a.set(i, j, na.DOUBLE)
            else:
                a.set(i, j, v + alpha * xi * yj)
    return a


def gemm(alpha: float, a: BaseArray, b: BaseArray, beta: float, c: DoubleArray,
         transpose_a: bool = False, transpose_b: bool = False) -> DoubleArray:
    """
    General matrix multiply, ``c = alpha * op(a) @ op(b) + beta * c``, in place.

    ``op(x)`` is ``x`` or its transpose. A transposed operand is read in
    row-major order from its column-major elements, so no transposed copy
    is made.

    Returns
    -------
    DoubleArray
        ``c``
    """
    _require_double(c, "gemm")
    for m in (a, b, c):
        if not m.is_matrix():
            raise StridedValueError(f"gemm requires 2-d arrays, got shape {m.shape}")

    a_rows, a_cols = (a.columns(), a.rows()) if transpose_a else (a.rows(), a.columns())
    b_rows, b_cols = (b.columns(), b.rows()) if transpose_b else (b.rows(), b.columns())
    if a_cols != b_rows:
        raise NonConformantError((a_rows, a_cols), (b_rows, b_cols))
    if c.shape != (a_rows, b_cols):
        raise NonConformantError(c.shape, (a_rows, b_cols))

    xs = _doubles(a)
    ys = _doubles(b)
    a_index = row_major if transpose_a else column_major
    b_index = row_major if transpose_b else column_major
    is_na = na.is_na_double

    for i in range(a_rows):
        for j in range(b_cols):
            total = 0.0
            missing = False
            for k in range(a_cols):
                u = xs[a_index(i, k, a_rows, a_cols)]
                v = ys[b_index(k, j, b_rows, b_cols)]
                if is_na(u) or is_na(v):
                    missing = True
                    break
                total += u * v
            old = c.get(i, j)
            if missing or (beta != 0 and is_na(old)):
                c.set(i, j, na.DOUBLE)
            elif beta == 0:
                c.set(i, j, alpha * total)
            else:
                c.set(i, j, alpha * total + beta * old)
    return c


def mmul(a: BaseArray, b: BaseArray) -> DoubleArray:
    """Matrix product of two numeric arrays as a new DoubleArray."""
    if not isinstance(a, DoubleArray):
        a = a.as_double()
    return a.mmul(b)


# ============================================================
# Reductions
# ============================================================

def _reduce(x: BaseArray, name: str, dim, skip_na):
    if not hasattr(x, name):
        raise StridedTypeError(f"{name} is not defined for {type(x).__name__}")
    if dim is None:
        return getattr(x, name)(skip_na=skip_na)
    return x.reduce_vectors(dim, lambda v: getattr(v, name)(skip_na=skip_na))


def sum(x: BaseArray, dim=None, skip_na=False):
    """
    Sum of all elements, or of each vector along ``dim``.

    With ``dim`` the result is an array whose ``dim`` axis has length 1.
    """
    return _reduce(x, "sum", dim, skip_na)


def mean(x: BaseArray, dim=None, skip_na=False):
    return _reduce(x, "mean", dim, skip_na)


def min(x: BaseArray, dim=None, skip_na=False):
    return _reduce(x, "min", dim, skip_na)


def max(x: BaseArray, dim=None, skip_na=False):
    return _reduce(x, "max", dim, skip_na)


# ============================================================
# Linear algebra entry points
# ============================================================

def _unsupported(name):
    def routine(*args, **kwargs):
        raise UnsupportedOperationError(f"{name} is not supported")
    routine.__name__ = name
    routine.__doc__ = "Not supported; always raises UnsupportedOperationError."
    return routine


inv = _unsupported("inv")
pinv = _unsupported("pinv")
det = _unsupported("det")
solve = _unsupported("solve")
lu = _unsupported("lu")
qr = _unsupported("qr")
svd = _unsupported("svd")
eig = _unsupported("eig")
