"""
VectorType: the element type of a Vector.

Pure metadata design:
  - one immutable VectorType value per kind (frozen dataclass)
  - NA test, ordering and builder construction dispatch on the kind
  - lookup from a Python class is total: unknown classes get a generic
    object type for that class
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Type

from . import na
from .errors import StridedTypeError
from .errors import UnsupportedOperationError
from .na import Logical


class VectorKind(Enum):
    DOUBLE = "double"
    INT = "int"
    LONG = "long"
    BIT = "bit"
    COMPLEX = "complex"
    STRING = "string"
    OBJECT = "object"
    VARIABLE = "variable"


class Scale(Enum):
    NUMERICAL = "numerical"
    NOMINAL = "nominal"


_NUMERIC_KINDS = (VectorKind.DOUBLE, VectorKind.INT, VectorKind.LONG, VectorKind.COMPLEX)


def _natural_compare(a, b) -> int:
    return (a > b) - (a < b)


def _double_compare(a: float, b: float) -> int:
    # NaN (not NA) orders after +inf; all NaNs are equal
    a_nan = math.isnan(a)
    b_nan = math.isnan(b)
    if a_nan or b_nan:
        return 0 if a_nan and b_nan else (1 if a_nan else -1)
    return _natural_compare(a, b)


@dataclass(frozen=True)
class VectorType:
    """
    Describes the elements of a Vector.

    Attributes
    ----------
    kind : VectorKind
        Storage kind
    data_class : Type
        Python class of the element values (``Logical`` for bits)

    Examples
    --------
    >>> VectorType.of(float)
    <double>
    >>> VectorType.infer(2 ** 40)
    <long>
    >>> VectorType.of(bytes)
    <bytes>
    """

    kind: VectorKind
    data_class: Type[Any]

    def __repr__(self):
        return f"<{self.name}>"

    @property
    def name(self) -> str:
        if self.kind is VectorKind.OBJECT and self.data_class is not object:
            return self.data_class.__name__
        return self.kind.value

    @property
    def is_numeric(self) -> bool:
        return self.kind in _NUMERIC_KINDS

    @property
    def scale(self) -> Scale:
        return Scale.NUMERICAL if self.is_numeric else Scale.NOMINAL

    @property
    def na_value(self) -> Any:
        """The value used for NA in vectors of this type."""
        kind = self.kind
        if kind is VectorKind.DOUBLE:
            return na.DOUBLE
        if kind is VectorKind.INT:
            return na.INT
        if kind is VectorKind.LONG:
            return na.LONG
        if kind is VectorKind.BIT:
            return Logical.NA
        if kind is VectorKind.COMPLEX:
            return na.COMPLEX
        return None

    # ------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------

    @staticmethod
    def of(cls: Type[Any]) -> "VectorType":
        """The VectorType for elements of class ``cls``."""
        vtype = _REGISTRY.get(cls)
        if vtype is not None:
            return vtype
        return VectorType(VectorKind.OBJECT, cls)

    @staticmethod
    def infer(value: Any) -> "VectorType":
        """
        The VectorType able to hold ``value``. Integers outside 32 bits are
        long; None is object.
        """
        if value is None:
            return OBJECT
        if isinstance(value, int) and not isinstance(value, bool):
            return INT if na.INT_MIN <= value <= na.INT_MAX else LONG
        return VectorType.of(type(value))

    # ------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------

    def is_na(self, value: Any) -> bool:
        if value is None:
            return True
        kind = self.kind
        if kind is VectorKind.DOUBLE:
            return isinstance(value, float) and na.is_na_double(value)
        if kind is VectorKind.INT:
            return value == na.INT
        if kind is VectorKind.LONG:
            return value == na.LONG
        if kind is VectorKind.BIT:
            return value is Logical.NA
        if kind is VectorKind.COMPLEX:
            return isinstance(value, complex) and na.is_na_complex(value)
        return False

    def compare(self, a: Any, b: Any) -> int:
        """
        Three-way comparison of two values of this type.

        NA sorts before every other value and compares equal to NA. For
        doubles, NaN that is not NA sorts after positive infinity.
        Complex values have no order.
        """
        if self.kind is VectorKind.COMPLEX:
            raise UnsupportedOperationError("Complex values are not ordered")
        a_na = self.is_na(a)
        b_na = self.is_na(b)
        if a_na or b_na:
            return 0 if a_na and b_na else (-1 if a_na else 1)
        if self.kind is VectorKind.BIT:
            return _natural_compare(a.value, b.value)
        if self.kind is VectorKind.DOUBLE:
            return _double_compare(a, b)
        try:
            return _natural_compare(a, b)
        except TypeError:
            raise StridedTypeError(
                f"Cannot compare {type(a).__name__} with {type(b).__name__}"
            )

    def equals(self, a: Any, b: Any) -> bool:
        a_na = self.is_na(a)
        b_na = self.is_na(b)
        if a_na or b_na:
            return a_na and b_na
        return a == b

    # ------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------

    def new_builder(self, size: int = 0):
        """Builder for vectors of this type, holding ``size`` NA values."""
        from .builder import builder_for
        return builder_for(self, size=size)

    def new_builder_with_capacity(self, capacity: int):
        from .builder import builder_for
        return builder_for(self, capacity=capacity)

    def copy(self, vector):
        """``vector`` converted to this type."""
        return self.new_builder_with_capacity(len(vector)).add_all(vector).build()


DOUBLE = VectorType(VectorKind.DOUBLE, float)
INT = VectorType(VectorKind.INT, int)
LONG = VectorType(VectorKind.LONG, int)
BIT = VectorType(VectorKind.BIT, Logical)
COMPLEX = VectorType(VectorKind.COMPLEX, complex)
STRING = VectorType(VectorKind.STRING, str)
OBJECT = VectorType(VectorKind.OBJECT, object)
VARIABLE = VectorType(VectorKind.VARIABLE, object)

_REGISTRY = {
    float: DOUBLE,
    int: INT,
    bool: BIT,
    Logical: BIT,
    complex: COMPLEX,
    str: STRING,
    object: OBJECT,
}
