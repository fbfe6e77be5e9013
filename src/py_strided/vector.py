import functools
import math
import operator
import warnings

from typing import Any
from typing import Callable
from typing import Iterator
from typing import List

from . import na
from .array import BitArray
from .array import ComplexArray
from .array import DoubleArray
from .array import IntArray
from .array import LongArray
from .array import ReferenceArray
from .array import _check_index
from .array import _ieee_div
from .display import _repr_vector
from .errors import NonConformantError
from .errors import StridedTypeError
from .errors import StridedValueError
from .na import Logical
from .resolver import coerce_complex
from .resolver import coerce_double
from .resolver import coerce_int
from .resolver import coerce_logical
from .resolver import coerce_long
from .resolver import to
from .storage import ReferenceStorage
from .vectortype import VectorKind
from .vectortype import VectorType
from .vectortype import BIT
from .vectortype import COMPLEX
from .vectortype import DOUBLE
from .vectortype import INT
from .vectortype import LONG
from .vectortype import OBJECT
from .vectortype import VARIABLE

# Integer-list selection on vectors longer than this emits a warning
FANCY_INDEX_WARN_SIZE = 1000

_NAN_KEY = object()


# ============================================================
# Small helpers
# ============================================================

def read_as(vtype: VectorType, vector: "Vector", i: int) -> Any:
	"""Element ``i`` of ``vector`` converted to the domain of ``vtype``."""
	kind = vtype.kind
	if kind is VectorKind.DOUBLE:
		return vector.get_as_double(i)
	if kind is VectorKind.INT:
		return vector.get_as_int(i)
	if kind is VectorKind.LONG:
		return vector.get_as_long(i)
	if kind is VectorKind.BIT:
		return vector.get_as_bit(i)
	if kind is VectorKind.COMPLEX:
		return vector.get_as_complex(i)
	if kind is VectorKind.VARIABLE:
		return vector.get(object, i)
	return vector.get(vtype.data_class, i)


def _result_type(a: VectorType, b: VectorType, op) -> VectorType:
	kinds = {a.kind, b.kind}
	if VectorKind.COMPLEX in kinds:
		return COMPLEX
	if VectorKind.DOUBLE in kinds or op is operator.truediv:
		return DOUBLE
	if VectorKind.LONG in kinds:
		return LONG
	return INT


def _divide(a, b):
	if isinstance(a, complex) or isinstance(b, complex):
		try:
			return a / b
		except ZeroDivisionError:
			return None
	return _ieee_div(float(a), float(b))


# ============================================================
# Vector
# ============================================================

class Vector:
	"""
	Immutable, homogeneous, fixed-size sequence with NA support.

	Vectors are produced by builders (``VectorType.new_builder``,
	``Vector.of``) and never change once built. Indexing returns plain
	Python values with NA as ``None``; the ``get_as_*`` accessors return
	values of a primitive kind with NA as that kind's sentinel.
	"""

	_type: VectorType = None

	def __init__(self, storage):
		self._storage = storage

	def _wrap(self, storage):
		return type(self)(storage)

	@property
	def type(self) -> VectorType:
		return self._type

	def size(self) -> int:
		return len(self._storage)

	def __len__(self):
		return len(self._storage)

	# --------------------------------------------------------
	# Construction shortcuts
	# --------------------------------------------------------

	@classmethod
	def of(cls, *values) -> "Vector":
		"""
		Vector of ``values`` with the type inferred from the first non-NA
		value.

		>>> Vector.of(1.0, None, 3.0).type
		<double>
		"""
		from .builder import TypeInferenceBuilder
		if len(values) == 1 and isinstance(values[0], (list, tuple)):
			values = values[0]
		return TypeInferenceBuilder().add_all(values).build()

	@classmethod
	def singleton(cls, value, n: int = 1) -> "Vector":
		builder = VectorType.infer(value).new_builder_with_capacity(n)
		for _ in range(n):
			builder.add(value)
		return builder.build()

	@classmethod
	def empty(cls) -> "Vector":
		return GenericVector(OBJECT, ReferenceStorage([]))

	# --------------------------------------------------------
	# Element access
	# --------------------------------------------------------

	def _value(self, i: int) -> Any:
		"""Element in the type's domain, NA as the type's NA value."""
		return self._storage.get(i)

	def _native(self, i: int) -> Any:
		v = self._value(i)
		return None if self._type.is_na(v) else v

	def _check(self, i) -> int:
		return _check_index(i, len(self._storage))

	def get(self, cls, i) -> Any:
		"""Element ``i`` converted to ``cls``; NA (or a failed conversion) gives ``cls``'s NA."""
		v = self._value(self._check(i))
		if self._type.is_na(v):
			return na.na_of(cls)
		r = to(cls, v)
		return na.na_of(cls) if r is None else r

	def get_as_double(self, i) -> float:
		v = self._value(self._check(i))
		return na.DOUBLE if self._type.is_na(v) else coerce_double(v)

	def get_as_int(self, i) -> int:
		v = self._value(self._check(i))
		return na.INT if self._type.is_na(v) else coerce_int(v)

	def get_as_long(self, i) -> int:
		v = self._value(self._check(i))
		return na.LONG if self._type.is_na(v) else coerce_long(v)

	def get_as_bit(self, i) -> Logical:
		v = self._value(self._check(i))
		return Logical.NA if self._type.is_na(v) else coerce_logical(v)

	def get_as_complex(self, i) -> complex:
		v = self._value(self._check(i))
		return na.COMPLEX if self._type.is_na(v) else coerce_complex(v)

	def is_na(self, i) -> bool:
		return self._type.is_na(self._value(self._check(i)))

	def has_na(self) -> bool:
		is_na = self._type.is_na
		return any(is_na(self._value(i)) for i in range(len(self)))

	def to_string(self, i) -> str:
		v = self._native(self._check(i))
		return "NA" if v is None else str(v)

	def __getitem__(self, key):
		""" Get item(s) from self. Behavior varies by input type:
			# Int: the element as a Python value, None for NA
			# Slice: a vector of the sliced elements
			# List of int, list of bool or BitVector: see select()
		"""
		if isinstance(key, int) and not isinstance(key, bool):
			return self._native(self._check(key))
		if isinstance(key, slice):
			return self._wrap(self._storage.take(range(*key.indices(len(self)))))
		if isinstance(key, (list, tuple, BitVector)):
			return self.select(key)
		raise StridedTypeError(f'Vector indices must be integers, slices, index lists or masks, not {type(key).__name__}')

	def __iter__(self) -> Iterator[Any]:
		return (self._native(i) for i in range(len(self)))

	def to_list(self) -> List[Any]:
		return list(self)

	# --------------------------------------------------------
	# Equality
	# --------------------------------------------------------

	def _key(self) -> tuple:
		return tuple(
			_NAN_KEY if isinstance(v, float) and v != v else v
			for v in self
		)

	def __eq__(self, other):
		if not isinstance(other, Vector):
			return NotImplemented
		return len(self) == len(other) and self._key() == other._key()

	def __ne__(self, other):
		result = self.__eq__(other)
		if result is NotImplemented:
			return result
		return not result

	def __hash__(self):
		return hash(self._key())

	def compare(self, a, b) -> int:
		"""Three-way comparison of elements ``a`` and ``b``; NA sorts first."""
		return self._type.compare(self._value(self._check(a)), self._value(self._check(b)))

	def compare_with(self, a, other: "Vector", b) -> int:
		"""Compare element ``a`` with element ``b`` of ``other``, read as this vector's type."""
		return self._type.compare(self._value(self._check(a)), read_as(self._type, other, b))

	# --------------------------------------------------------
	# Builders
	# --------------------------------------------------------

	def new_builder(self):
		return self._type.new_builder()

	def new_copy_builder(self):
		"""Builder pre-filled with this vector's elements."""
		return self._type.new_builder_with_capacity(len(self)).add_all(self)

	# --------------------------------------------------------
	# Arrays
	# --------------------------------------------------------

	def to_double_array(self) -> DoubleArray:
		return DoubleArray._from_values([self.get_as_double(i) for i in range(len(self))], (len(self),))

	def to_int_array(self) -> IntArray:
		return IntArray._from_values([self.get_as_int(i) for i in range(len(self))], (len(self),))

	def to_long_array(self) -> LongArray:
		return LongArray._from_values([self.get_as_long(i) for i in range(len(self))], (len(self),))

	def to_bit_array(self) -> BitArray:
		"""Raises StridedValueError if an element is NA, which bit arrays cannot hold."""
		return BitArray._from_values([self.get_as_bit(i) for i in range(len(self))], (len(self),))

	def to_complex_array(self) -> ComplexArray:
		return ComplexArray._from_values([self.get_as_complex(i) for i in range(len(self))], (len(self),))

	def to_matrix(self) -> DoubleArray:
		"""Column matrix of shape (n, 1)."""
		return DoubleArray._from_values([self.get_as_double(i) for i in range(len(self))], (len(self), 1))

	def to_array(self):
		"""The 1-d array of the kind matching this vector's type."""
		kind = self._type.kind
		if kind is VectorKind.DOUBLE:
			return self.to_double_array()
		if kind is VectorKind.INT:
			return self.to_int_array()
		if kind is VectorKind.LONG:
			return self.to_long_array()
		if kind is VectorKind.BIT:
			return self.to_bit_array()
		if kind is VectorKind.COMPLEX:
			return self.to_complex_array()
		return ReferenceArray._from_values(list(self), (len(self),))

	# --------------------------------------------------------
	# Selection
	# --------------------------------------------------------

	def head(self, n: int = 5) -> "Vector":
		return self[:max(n, 0)]

	def tail(self, n: int = 5) -> "Vector":
		return self[max(len(self) - max(n, 0), 0):]

	def select(self, key) -> "Vector":
		"""
		Elements picked by a list of indices, or by a boolean mask (list of
		bool or BitVector) of the same length. NA in a mask does not select.
		"""
		n = len(self)
		if isinstance(key, BitVector) or (key and all(isinstance(k, bool) for k in key)):
			if len(key) != n:
				raise StridedValueError(f"Mask length {len(key)} does not match vector length {n}")
			indices = [i for i, flag in enumerate(key) if flag]
		else:
			if n > FANCY_INDEX_WARN_SIZE:
				warnings.warn('Subscript indexing is sub-optimal for large vectors; prefer slices or boolean masks')
			indices = [_check_index(i, n) for i in key]
		return self._wrap(self._storage.take(indices))

	def sort(self, reverse: bool = False) -> "Vector":
		"""Sorted copy; NA comes first (last with ``reverse=True``)."""
		order = sorted(
			range(len(self)),
			key=functools.cmp_to_key(self.compare),
			reverse=reverse,
		)
		return self._wrap(self._storage.take(order))

	# --------------------------------------------------------
	# Transformation
	# --------------------------------------------------------

	def transform(self, fn: Callable[[Any], Any], vtype: VectorType = None) -> "Vector":
		"""
		Apply ``fn`` to every non-NA element; NA stays NA. The result type
		is ``vtype`` or inferred from the results.
		"""
		from .builder import TypeInferenceBuilder
		builder = TypeInferenceBuilder() if vtype is None else vtype.new_builder_with_capacity(len(self))
		for v in self:
			builder.add(None if v is None else fn(v))
		return builder.build()

	def combine(self, other: "Vector", fn: Callable[[Any, Any], Any], vtype: VectorType = None) -> "Vector":
		"""Pairwise ``fn`` over two vectors of equal length; NA on either side gives NA."""
		if len(other) != len(self):
			raise NonConformantError((len(self),), (len(other),))
		from .builder import TypeInferenceBuilder
		builder = TypeInferenceBuilder() if vtype is None else vtype.new_builder_with_capacity(len(self))
		for a, b in zip(self, other):
			builder.add(None if a is None or b is None else fn(a, b))
		return builder.build()

	""" Math operations """
	def _elementwise_operation(self, other, op, op_symbol: str, reflected=False):
		if not self._type.is_numeric:
			raise StridedTypeError(f"Unsupported operand type for '{op_symbol}': {self._type.name} vector")
		if isinstance(other, Vector):
			if not other.type.is_numeric:
				raise StridedTypeError(f"Unsupported operand type for '{op_symbol}': {other.type.name} vector")
			if len(other) != len(self):
				raise NonConformantError((len(self),), (len(other),))
			other_type = other.type
			rhs = list(other)
		elif other is None or isinstance(other, (int, float, complex)):
			other_type = DOUBLE if other is None else VectorType.infer(other)
			if other_type is BIT:
				other_type = INT
			rhs = [None if na.is_na(other) else other] * len(self)
		else:
			raise StridedTypeError(f"Unsupported operand type(s) for '{op_symbol}': '{self._type.name}' and '{type(other).__name__}'")

		result_type = _result_type(self._type, other_type, op)
		func = _divide if op is operator.truediv else op
		values = []
		for a, b in zip(self, rhs):
			if a is None or b is None:
				values.append(None)
			else:
				values.append(func(b, a) if reflected else func(a, b))

		if result_type is INT and any(
			v is not None and not (na.INT_MIN < v <= na.INT_MAX) for v in values
		):
			result_type = LONG
		builder = result_type.new_builder_with_capacity(len(values))
		builder.add_all(values)
		return builder.build()

	def __add__(self, other):
		return self._elementwise_operation(other, operator.add, '+')

	def __radd__(self, other):
		return self._elementwise_operation(other, operator.add, '+', reflected=True)

	def __sub__(self, other):
		return self._elementwise_operation(other, operator.sub, '-')

	def __rsub__(self, other):
		return self._elementwise_operation(other, operator.sub, '-', reflected=True)

	def __mul__(self, other):
		return self._elementwise_operation(other, operator.mul, '*')

	def __rmul__(self, other):
		return self._elementwise_operation(other, operator.mul, '*', reflected=True)

	def __truediv__(self, other):
		return self._elementwise_operation(other, operator.truediv, '/')

	def __rtruediv__(self, other):
		return self._elementwise_operation(other, operator.truediv, '/', reflected=True)

	def __neg__(self):
		return self._elementwise_operation(-1, operator.mul, '-')

	"""
	Reductions (NA is skipped)
	"""
	def _present(self, op: str) -> list:
		if not self._type.is_numeric:
			raise StridedTypeError(f"{op}() requires a numeric vector, not {self._type.name}")
		return [v for v in self if v is not None]

	def sum(self):
		vals = self._present("sum")
		if self._type is DOUBLE:
			return math.fsum(vals)
		return sum(vals, 0)

	def mean(self):
		vals = self._present("mean")
		if not vals:
			return na.COMPLEX if self._type is COMPLEX else na.DOUBLE
		if self._type is DOUBLE:
			return math.fsum(vals) / len(vals)
		return sum(vals) / len(vals)

	def __repr__(self):
		return _repr_vector(self)


class DoubleVector(Vector):
	""" 64-bit floating point values; NA is the double sentinel """
	_type = DOUBLE


class IntVector(Vector):
	""" 32-bit integers; NA is -2**31 """
	_type = INT


class LongVector(Vector):
	""" 64-bit integers; NA is 2**63 - 1 """
	_type = LONG


class BitVector(Vector):
	"""
	Three-valued logical vector, stored as int codes (0, 1, int NA).
	Indexing gives True, False or None.
	"""
	_type = BIT

	def _value(self, i: int) -> Logical:
		return Logical.from_int(self._storage.get(i))

	def _native(self, i: int) -> Any:
		v = self._value(i)
		return None if v is Logical.NA else v.is_true()


class ComplexVector(Vector):
	""" Complex values; NA is a complex with an NA part """
	_type = COMPLEX


class GenericVector(Vector):
	""" Python objects of one class (strings, dates, ...); NA is None """

	def __init__(self, vtype: VectorType, storage):
		super().__init__(storage)
		self._type = vtype

	def _wrap(self, storage):
		return type(self)(self._type, storage)


class VariableVector(GenericVector):
	""" Values of any class; NA is None """

	def __init__(self, storage, vtype: VectorType = VARIABLE):
		super().__init__(vtype, storage)

	def _wrap(self, storage):
		return VariableVector(storage)
