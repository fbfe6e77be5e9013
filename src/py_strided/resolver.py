"""
Conversion of values to a target class.

A Resolver holds ordered converters keyed by source class. Resolving a
value picks the converter registered for its exact class, or else the
first one whose class it is an instance of; a conversion that fails
yields ``None`` rather than raising. Resolvers live in a process-wide
registry keyed by target class.

The ``coerce_*`` functions build the total conversions used by builders
and vectors on top of the registry: they never raise, and anything that
cannot be converted becomes the target kind's NA.
"""

from __future__ import annotations
import numbers
import operator
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional, Type

from . import na
from .na import Logical


class Resolver:
    """
    Converters from source classes to ``target``.

    Examples
    --------
    >>> r = Resolver(int).put(str, int)
    >>> r.resolve("12"), r.resolve("x")
    (12, None)
    """

    def __init__(self, target: Type[Any]):
        self.target = target
        self._converters: Dict[type, Callable[[Any], Any]] = {}

    def put(self, source: type, fn: Callable[[Any], Any]) -> "Resolver":
        self._converters[source] = fn
        return self

    def converter(self, source: type) -> Optional[Callable[[Any], Any]]:
        fn = self._converters.get(source)
        if fn is not None:
            return fn
        for cls, fn in self._converters.items():
            if issubclass(source, cls):
                return fn
        return None

    def resolve(self, value: Any) -> Any:
        if value is None:
            return None
        fn = self.converter(type(value))
        if fn is None:
            return None
        try:
            return fn(value)
        except (ValueError, TypeError, ArithmeticError):
            return None

    def __repr__(self):
        sources = ", ".join(c.__name__ for c in self._converters)
        return f"Resolver({self.target.__name__} <- {sources})"


_RESOLVERS: Dict[type, Resolver] = {}


def install(resolver: Resolver) -> Resolver:
    """Register ``resolver`` for its target class, replacing any previous one."""
    _RESOLVERS[resolver.target] = resolver
    return resolver


def find(target: Type[Any]) -> Optional[Resolver]:
    return _RESOLVERS.get(target)


def to(target: Type[Any], value: Any) -> Any:
    """
    Convert ``value`` to ``target``, or ``None`` when that is not possible.

    Classes without a registered resolver accept instances of themselves
    only.
    """
    resolver = _RESOLVERS.get(target)
    if resolver is not None:
        return resolver.resolve(value)
    if isinstance(value, target):
        return value
    return None


# ============================================================
# Default resolvers
# ============================================================

_TRUE_STRINGS = frozenset(("true", "t", "yes", "y", "1"))
_FALSE_STRINGS = frozenset(("false", "f", "no", "n", "0"))


def _check_int(v: int) -> int:
    if not (na.INT_MIN < v <= na.INT_MAX):
        raise ValueError(f"{v} does not fit in 32 bits")
    return v


def _double_to_int(v: float) -> int:
    r = na.double_to_int(v)
    if r == na.INT:
        raise ValueError(f"{v!r} has no int representation")
    return r


def _parse_logical(s: str) -> Logical:
    s = s.strip().lower()
    if s in _TRUE_STRINGS:
        return Logical.TRUE
    if s in _FALSE_STRINGS:
        return Logical.FALSE
    raise ValueError(f"{s!r} is not a logical value")


def _logical_to_double(v: Logical) -> float:
    return na.DOUBLE if v is Logical.NA else float(v.value)


def _logical_to_bool(v: Logical) -> bool:
    if v is Logical.NA:
        raise ValueError("NA has no boolean value")
    return v.is_true()


def _complex_to_double(v: complex) -> float:
    return na.DOUBLE if na.is_na_complex(v) else v.real


def _int_to_complex(v: int) -> complex:
    return na.COMPLEX if v == na.INT else complex(v, 0.0)


def _to_bool(v) -> bool:
    if na.is_na(v):
        raise ValueError("NA has no boolean value")
    return bool(v)


def _parse_complex(s: str) -> complex:
    return complex(s.strip().replace(" ", ""))


def _parse_date(s: str) -> date:
    return date.fromisoformat(s.strip())


install(Resolver(float)
        .put(float, lambda v: v)
        .put(bool, float)
        .put(int, na.int_to_double)
        .put(Logical, _logical_to_double)
        .put(complex, _complex_to_double)
        .put(str, lambda s: float(s.strip()))
        .put(numbers.Number, float))

install(Resolver(int)
        .put(bool, int)
        .put(int, _check_int)
        .put(float, _double_to_int)
        .put(Logical, lambda v: _check_int(v.to_int()))
        .put(complex, lambda v: _double_to_int(_complex_to_double(v)))
        .put(str, lambda s: _check_int(int(s.strip())))
        .put(numbers.Integral, lambda v: _check_int(operator.index(v)))
        .put(numbers.Number, lambda v: _double_to_int(float(v))))

install(Resolver(Logical)
        .put(Logical, lambda v: v)
        .put(bool, Logical.of)
        .put(int, Logical.of)
        .put(float, Logical.of)
        .put(complex, lambda v: Logical.NA if na.is_na_complex(v) else Logical.of(v != 0))
        .put(str, _parse_logical)
        .put(numbers.Number, lambda v: Logical.of(v != 0)))

install(Resolver(bool)
        .put(bool, lambda v: v)
        .put(Logical, _logical_to_bool)
        .put(int, _to_bool)
        .put(float, _to_bool)
        .put(str, lambda s: _parse_logical(s).is_true())
        .put(numbers.Number, bool))

install(Resolver(complex)
        .put(complex, lambda v: v)
        .put(float, na.double_to_complex)
        .put(bool, lambda v: complex(int(v), 0.0))
        .put(int, _int_to_complex)
        .put(Logical, lambda v: na.COMPLEX if v is Logical.NA else complex(v.value, 0.0))
        .put(str, _parse_complex)
        .put(numbers.Number, complex))

install(Resolver(str)
        .put(str, lambda v: v)
        .put(object, str))

install(Resolver(date)
        .put(datetime, lambda v: v.date())
        .put(date, lambda v: v)
        .put(str, _parse_date))

install(Resolver(object)
        .put(object, lambda v: v))


# ============================================================
# Total coercions (never raise)
# ============================================================

def coerce_double(value: Any) -> float:
    r = to(float, value)
    return na.DOUBLE if r is None else r


def coerce_int(value: Any) -> int:
    r = to(int, value)
    return na.INT if r is None else r


def coerce_long(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return na.LONG if value is None else int(value)
    if isinstance(value, int):
        return value if na.LONG_MIN <= value < na.LONG_MAX else na.LONG
    if isinstance(value, float):
        return na.double_to_long(value)
    if isinstance(value, complex):
        return na.LONG if na.is_na_complex(value) else na.double_to_long(value.real)
    if isinstance(value, Logical):
        return na.LONG if value is Logical.NA else value.value
    if isinstance(value, str):
        try:
            return coerce_long(int(value.strip()))
        except ValueError:
            return na.LONG
    if isinstance(value, numbers.Integral):
        return coerce_long(operator.index(value))
    if isinstance(value, numbers.Number):
        try:
            return na.double_to_long(float(value))
        except (TypeError, ValueError, ArithmeticError):
            return na.LONG
    return na.LONG


def coerce_logical(value: Any) -> Logical:
    r = to(Logical, value)
    return Logical.NA if r is None else r


def coerce_complex(value: Any) -> complex:
    r = to(complex, value)
    return na.COMPLEX if r is None else r
