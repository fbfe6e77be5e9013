"""
Sentinel encoding of missing values (NA).

Each primitive kind stores NA inline, as a value of its own type:

  - double: the NaN with raw bits ``0x7ff0000000000009``. Ordinary NaN
    (e.g. ``inf - inf``) is *not* NA; test with ``is_na_double``, never
    with ``math.isnan`` or ``==``.
  - int (32-bit): ``-2**31``
  - long (64-bit): ``2**63 - 1``
  - complex: a complex whose real or imaginary part is the double NA
  - references: ``None``
  - logical: ``Logical.NA`` (the int sentinel when coerced)

Conversions between kinds propagate NA and never fall back to a default
such as 0.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Callable
import math
import struct


DOUBLE_NA_BITS = 0x7ff0000000000009
DOUBLE_NA_MASK = 0x000000000000000F
DOUBLE_NA_RES = 9

DOUBLE = struct.unpack('<d', struct.pack('<q', DOUBLE_NA_BITS))[0]
INT = -(2 ** 31)
LONG = 2 ** 63 - 1
COMPLEX = complex(DOUBLE, DOUBLE)

INT_MIN, INT_MAX = -(2 ** 31), 2 ** 31 - 1
LONG_MIN, LONG_MAX = -(2 ** 63), 2 ** 63 - 1


def raw_bits(value: float) -> int:
	"""The IEEE 754 bit pattern of ``value`` as a signed 64-bit integer."""
	return struct.unpack('<q', struct.pack('<d', value))[0]


class Logical(Enum):
	"""Three-valued logical used by bit vectors."""
	FALSE = 0
	TRUE = 1
	NA = INT

	@classmethod
	def of(cls, value: Any) -> "Logical":
		"""
		Coerce ``value`` to a Logical. Anything that is not a recognised
		truth value becomes ``Logical.NA``.
		"""
		if isinstance(value, Logical):
			return value
		if value is None:
			return cls.NA
		if isinstance(value, bool):
			return cls.TRUE if value else cls.FALSE
		if isinstance(value, int):
			if value == INT:
				return cls.NA
			return cls.TRUE if value != 0 else cls.FALSE
		if isinstance(value, float):
			if math.isnan(value):
				return cls.NA
			return cls.TRUE if value != 0 else cls.FALSE
		return cls.NA

	@classmethod
	def from_int(cls, value: int) -> "Logical":
		if value == INT:
			return cls.NA
		return cls.TRUE if value != 0 else cls.FALSE

	def to_int(self) -> int:
		return self.value

	def is_true(self) -> bool:
		return self is Logical.TRUE

	def __repr__(self):
		return f"Logical.{self.name}"

	def __str__(self):
		return self.name


# ============================================================
# Predicates
# ============================================================

def is_na_double(value: float) -> bool:
	return value != value and (raw_bits(value) & DOUBLE_NA_MASK) == DOUBLE_NA_RES


def is_na_int(value: int) -> bool:
	return value == INT


def is_na_long(value: int) -> bool:
	return value == LONG


def is_na_complex(value: complex) -> bool:
	if value is None:
		return True
	return is_na_double(value.real) or is_na_double(value.imag)


def is_na_logical(value: Logical) -> bool:
	return value is None or value is Logical.NA


def is_na(value: Any) -> bool:
	"""
	Generic NA test dispatching on the Python type of ``value``.

	A plain ``int`` is checked against the int sentinel; use
	``is_na_long`` for values that come from long storage.
	"""
	if value is None:
		return True
	# bool before int (bool is subclass of int)
	if isinstance(value, bool):
		return False
	if isinstance(value, int):
		return value == INT
	if isinstance(value, float):
		return is_na_double(value)
	if isinstance(value, complex):
		return is_na_complex(value)
	if isinstance(value, Logical):
		return value is Logical.NA
	return False


def na_of(cls: Any) -> Any:
	"""The NA value used for the Python class ``cls``."""
	if cls is float:
		return DOUBLE
	if cls is bool or cls is Logical:
		return Logical.NA
	if cls is int:
		return INT
	if cls is complex:
		return COMPLEX
	return None


def na_to_string(value: Any) -> str:
	return "NA" if is_na(value) else str(value)


# ============================================================
# NA-propagating conversions
# ============================================================

def double_to_int(value: float) -> int:
	if is_na_double(value) or math.isnan(value) or math.isinf(value):
		return INT
	v = int(value)
	if v <= INT_MIN or v > INT_MAX:
		return INT
	return v


def double_to_long(value: float) -> int:
	if is_na_double(value) or math.isnan(value) or math.isinf(value):
		return LONG
	v = int(value)
	if v < LONG_MIN or v >= LONG_MAX:
		return LONG
	return v


def int_to_double(value: int) -> float:
	return DOUBLE if value == INT else float(value)


def long_to_double(value: int) -> float:
	return DOUBLE if value == LONG else float(value)


def int_to_long(value: int) -> int:
	return LONG if value == INT else value


def long_to_int(value: int) -> int:
	if value == LONG or value <= INT_MIN or value > INT_MAX:
		return INT
	return value


def double_to_complex(value: float) -> complex:
	return COMPLEX if is_na_double(value) else complex(value, 0.0)


def to_logical(value: Any) -> Logical:
	return Logical.of(value)


def logical_to_int(value: Logical) -> int:
	return INT if value is None else value.to_int()


# ============================================================
# NA-ignoring function wrappers
# ============================================================

def ignore(fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
	"""
	Only apply ``fn`` to non-NA values; NA values pass through unchanged.

	>>> upper = ignore(str.upper)
	>>> upper("a"), upper(None)
	('A', None)
	"""
	def wrapper(v):
		return v if is_na(v) else fn(v)
	return wrapper


_NO_FILL = object()


def ignore2(fn: Callable[[Any, Any], Any], fill: Any = _NO_FILL) -> Callable[[Any, Any], Any]:
	"""
	Binary version of ``ignore``.

	Without ``fill`` the result is ``None`` when either side is NA. With
	``fill`` an NA operand is replaced by ``fill``; the result is ``None``
	only when both sides are NA.
	"""
	def wrapper(a, b):
		a_na = is_na(a)
		b_na = is_na(b)
		if fill is _NO_FILL:
			if a_na or b_na:
				return None
			return fn(a, b)
		if a_na and b_na:
			return None
		return fn(fill if a_na else a, fill if b_na else b)
	return wrapper
