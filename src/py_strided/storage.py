"""
Storage backends for arrays and vectors.

Pure Python implementation using array.array for the primitive kinds, with
NA stored inline as a sentinel instead of a separate null mask. A Storage is
a flat, fixed-length buffer; it knows nothing about shape or stride.
"""

from __future__ import annotations
from array import array
from enum import Enum
from typing import Any, Protocol, Iterator
from collections.abc import Iterable

from . import na
from .errors import StridedTypeError
from .errors import StridedValueError


class ArrayKind(Enum):
    """The element kinds a Storage can hold."""
    DOUBLE = "double"
    INT = "int"
    LONG = "long"
    BIT = "bit"
    COMPLEX = "complex"
    REFERENCE = "reference"


class Storage(Protocol):
    """Protocol for element storage: the two primitive element hooks."""

    kind: ArrayKind

    def __len__(self) -> int:
        """Number of logical elements."""
        ...

    def get(self, i: int) -> Any:
        """Element at physical position i."""
        ...

    def set(self, i: int, value: Any) -> None:
        """Write value at physical position i (in place)."""
        ...

    def copy(self) -> Storage:
        """Independent storage with the same contents."""
        ...

    def is_na(self, i: int) -> bool:
        """Check if element at physical position i is NA."""
        ...

    def take(self, positions: Iterable[int]) -> Storage:
        """New storage with the elements at the given physical positions."""
        ...


class PrimitiveStorage:
    """
    Contiguous numeric storage using array.array.

    Subclasses fix the typecode, the NA sentinel and how an incoming Python
    value is converted before it is written.
    """

    __slots__ = ('_data',)

    kind: ArrayKind = None
    typecode: str = None
    na_value: Any = None

    def __init__(self, data: array):
        """
        Parameters
        ----------
        data : array.array
            Contiguous data; ownership passes to the storage (no copy).
        """
        if data.typecode != self.typecode:
            raise StridedTypeError(
                f"{type(self).__name__} requires typecode '{self.typecode}', got '{data.typecode}'"
            )
        self._data = data

    @classmethod
    def allocate(cls, size: int) -> PrimitiveStorage:
        """Zero-filled storage of ``size`` elements."""
        return cls(array(cls.typecode, [0]) * size)

    @classmethod
    def filled(cls, size: int, value: Any) -> PrimitiveStorage:
        return cls(array(cls.typecode, [cls.convert(value)]) * size)

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> PrimitiveStorage:
        return cls(array(cls.typecode, [cls.convert(v) for v in values]))

    @classmethod
    def convert(cls, value: Any) -> Any:
        raise NotImplementedError

    @property
    def data(self) -> array:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def get(self, i: int) -> Any:
        return self._data[i]

    def set(self, i: int, value: Any) -> None:
        self._data[i] = self.convert(value)

    def is_na(self, i: int) -> bool:
        return self._data[i] == self.na_value

    def copy(self) -> PrimitiveStorage:
        return type(self)(array(self.typecode, self._data))

    def take(self, positions: Iterable[int]) -> PrimitiveStorage:
        """New storage holding the elements at ``positions``, in order."""
        data = self._data
        return type(self)(array(self.typecode, [data[p] for p in positions]))

    def to_tuple(self) -> tuple:
        return tuple(self)

    def __repr__(self):
        return f"{type(self).__name__}(size={len(self)})"


class DoubleStorage(PrimitiveStorage):
    __slots__ = ()
    kind = ArrayKind.DOUBLE
    typecode = 'd'
    na_value = na.DOUBLE

    @classmethod
    def convert(cls, value: Any) -> float:
        if value is None:
            return na.DOUBLE
        if isinstance(value, float):
            return value
        if isinstance(value, bool):
            return 1.0 if value else 0.0
        if isinstance(value, int):
            return na.int_to_double(value)
        try:
            return float(value)
        except (TypeError, ValueError):
            raise StridedTypeError(f"Cannot store {value!r} in double storage")

    def is_na(self, i: int) -> bool:
        return na.is_na_double(self._data[i])


class _IntegerStorage(PrimitiveStorage):
    __slots__ = ()
    lower: int = None
    upper: int = None

    @classmethod
    def convert(cls, value: Any) -> int:
        if value is None:
            return cls.na_value
        if isinstance(value, float):
            raise StridedTypeError(f"Cannot store float {value!r} in {cls.kind.value} storage")
        try:
            v = int(value)
        except (TypeError, ValueError):
            raise StridedTypeError(f"Cannot store {value!r} in {cls.kind.value} storage")
        if not (cls.lower <= v <= cls.upper):
            raise StridedValueError(f"Value {v} does not fit in {cls.kind.value} storage")
        return v


class IntStorage(_IntegerStorage):
    __slots__ = ()
    kind = ArrayKind.INT
    typecode = 'i'
    na_value = na.INT
    lower, upper = na.INT_MIN, na.INT_MAX


class LongStorage(_IntegerStorage):
    __slots__ = ()
    kind = ArrayKind.LONG
    typecode = 'q'
    na_value = na.LONG
    lower, upper = na.LONG_MIN, na.LONG_MAX


class BitStorage(PrimitiveStorage):
    """Two-valued storage (0/1). Bit arrays cannot hold NA."""

    __slots__ = ()
    kind = ArrayKind.BIT
    typecode = 'B'

    @classmethod
    def convert(cls, value: Any) -> int:
        if isinstance(value, na.Logical):
            if value is na.Logical.NA:
                raise StridedValueError("Bit storage cannot hold NA")
            return value.to_int()
        if value is None:
            raise StridedValueError("Bit storage cannot hold NA")
        return 1 if value else 0

    def __iter__(self) -> Iterator[bool]:
        return (b == 1 for b in self._data)

    def get(self, i: int) -> bool:
        return self._data[i] == 1

    def is_na(self, i: int) -> bool:
        return False


class ComplexStorage(PrimitiveStorage):
    """
    Complex numbers as interleaved doubles: element i occupies
    positions 2*i (real) and 2*i + 1 (imaginary).
    """

    __slots__ = ()
    kind = ArrayKind.COMPLEX
    typecode = 'd'
    na_value = na.COMPLEX

    def __init__(self, data: array):
        super().__init__(data)
        if len(data) % 2:
            raise StridedValueError("Complex storage requires an even number of doubles")

    @classmethod
    def allocate(cls, size: int) -> ComplexStorage:
        return cls(array('d', [0.0]) * (2 * size))

    @classmethod
    def filled(cls, size: int, value: Any) -> ComplexStorage:
        c = cls.convert(value)
        return cls(array('d', [c.real, c.imag]) * size)

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> ComplexStorage:
        data = array('d')
        for v in values:
            c = cls.convert(v)
            data.append(c.real)
            data.append(c.imag)
        return cls(data)

    @classmethod
    def convert(cls, value: Any) -> complex:
        if value is None:
            return na.COMPLEX
        if isinstance(value, complex):
            return value
        if isinstance(value, float):
            return na.double_to_complex(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return na.COMPLEX if value == na.INT else complex(value, 0.0)
        try:
            return complex(value)
        except (TypeError, ValueError):
            raise StridedTypeError(f"Cannot store {value!r} in complex storage")

    def __len__(self) -> int:
        return len(self._data) // 2

    def __iter__(self) -> Iterator[complex]:
        data = self._data
        for i in range(0, len(data), 2):
            yield complex(data[i], data[i + 1])

    def get(self, i: int) -> complex:
        return complex(self._data[2 * i], self._data[2 * i + 1])

    def set(self, i: int, value: Any) -> None:
        c = self.convert(value)
        self._data[2 * i] = c.real
        self._data[2 * i + 1] = c.imag

    def is_na(self, i: int) -> bool:
        return na.is_na_double(self._data[2 * i]) or na.is_na_double(self._data[2 * i + 1])

    def take(self, positions: Iterable[int]) -> ComplexStorage:
        data = self._data
        out = array('d')
        for p in positions:
            out.append(data[2 * p])
            out.append(data[2 * p + 1])
        return ComplexStorage(out)


class ReferenceStorage:
    """
    Python object storage using a list.

    For objects with no primitive representation. NA is stored as None.
    """

    __slots__ = ('_data',)
    kind = ArrayKind.REFERENCE
    na_value = None

    def __init__(self, data: list):
        self._data = data

    @classmethod
    def allocate(cls, size: int) -> ReferenceStorage:
        return cls([None] * size)

    @classmethod
    def filled(cls, size: int, value: Any) -> ReferenceStorage:
        return cls([value] * size)

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> ReferenceStorage:
        return cls(list(values))

    @classmethod
    def convert(cls, value: Any) -> Any:
        return value

    @property
    def data(self) -> list:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def get(self, i: int) -> Any:
        return self._data[i]

    def set(self, i: int, value: Any) -> None:
        self._data[i] = value

    def is_na(self, i: int) -> bool:
        return self._data[i] is None

    def copy(self) -> ReferenceStorage:
        return ReferenceStorage(list(self._data))

    def take(self, positions: Iterable[int]) -> ReferenceStorage:
        data = self._data
        return ReferenceStorage([data[p] for p in positions])

    def to_tuple(self) -> tuple:
        return tuple(self._data)

    def __repr__(self):
        return f"ReferenceStorage(size={len(self)})"


STORAGE_FOR_KIND = {
    ArrayKind.DOUBLE: DoubleStorage,
    ArrayKind.INT: IntStorage,
    ArrayKind.LONG: LongStorage,
    ArrayKind.BIT: BitStorage,
    ArrayKind.COMPLEX: ComplexStorage,
    ArrayKind.REFERENCE: ReferenceStorage,
}


def allocate(kind: ArrayKind, size: int):
    """
    Allocate zero-filled (or None-filled) storage for ``kind``.

    The only allocation path used by the array factory.
    """
    return STORAGE_FOR_KIND[kind].allocate(size)


def infer_kind(values: Iterable[Any]) -> ArrayKind:
    """
    Infer the narrowest ArrayKind able to hold every value.

    Ladder: bit → int → long → double → complex; anything else is a
    reference kind. None and NA values do not influence the result.
    """
    kind = None
    for v in values:
        if v is None:
            continue
        if isinstance(v, (bool, na.Logical)):
            k = ArrayKind.BIT
        elif isinstance(v, int):
            k = ArrayKind.INT if na.INT_MIN <= v <= na.INT_MAX else ArrayKind.LONG
        elif isinstance(v, float):
            k = ArrayKind.DOUBLE
        elif isinstance(v, complex):
            k = ArrayKind.COMPLEX
        else:
            return ArrayKind.REFERENCE
        kind = k if kind is None else _promote(kind, k)
    return ArrayKind.REFERENCE if kind is None else kind


_LADDER = (ArrayKind.BIT, ArrayKind.INT, ArrayKind.LONG, ArrayKind.DOUBLE, ArrayKind.COMPLEX)


def _promote(a: ArrayKind, b: ArrayKind) -> ArrayKind:
    return a if _LADDER.index(a) >= _LADDER.index(b) else b
