"""
DataEntry: a forward-only cursor over raw values, used by builders to
read data produced by file and stream readers.
"""

from __future__ import annotations
from typing import Iterable, Optional, Protocol, Sequence

from . import na
from .errors import StridedIndexError
from .na import Logical
from .resolver import coerce_complex
from .resolver import coerce_double
from .resolver import coerce_int
from .resolver import coerce_logical
from .resolver import coerce_long

# Strings read as missing values by default
DEFAULT_NA_MARKERS = ("NA", "?", "")


class DataEntry(Protocol):
    """Each ``next_*`` call consumes one value; missing values come back as NA."""

    def has_next(self) -> bool:
        ...

    def next_string(self) -> Optional[str]:
        ...

    def next_double(self) -> float:
        ...

    def next_int(self) -> int:
        ...

    def next_long(self) -> int:
        ...

    def next_logical(self) -> Logical:
        ...

    def next_complex(self) -> complex:
        ...


class StringDataEntry:
    """
    DataEntry over a sequence of strings.

    Parameters
    ----------
    values : Iterable[str]
        Raw values, e.g. the fields of one CSV column.
    na_markers : Iterable[str]
        Strings treated as missing (compared after stripping whitespace).

    Examples
    --------
    >>> e = StringDataEntry(["1.5", "NA", "x"])
    >>> e.next_double(), na.is_na_double(e.next_double()), na.is_na_double(e.next_double())
    (1.5, True, True)
    """

    def __init__(self, values: Iterable[Optional[str]], na_markers: Iterable[str] = DEFAULT_NA_MARKERS):
        self._values: Sequence[Optional[str]] = tuple(values)
        self._na_markers = frozenset(na_markers)
        self._pos = 0

    def __len__(self):
        return len(self._values)

    def has_next(self) -> bool:
        return self._pos < len(self._values)

    def _next(self) -> Optional[str]:
        if self._pos >= len(self._values):
            raise StridedIndexError(f"No value left in entry (read {self._pos} of {len(self._values)})")
        value = self._values[self._pos]
        self._pos += 1
        if value is None or value.strip() in self._na_markers:
            return None
        return value

    def next_string(self) -> Optional[str]:
        return self._next()

    def next_double(self) -> float:
        return coerce_double(self._next())

    def next_int(self) -> int:
        return coerce_int(self._next())

    def next_long(self) -> int:
        return coerce_long(self._next())

    def next_logical(self) -> Logical:
        return coerce_logical(self._next())

    def next_complex(self) -> complex:
        return coerce_complex(self._next())

    def __repr__(self):
        return f"StringDataEntry(position={self._pos}, size={len(self._values)})"
