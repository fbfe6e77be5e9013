from array import array

from . import na
from .array import _as_index
from .array import _check_index
from .errors import BuilderStateError
from .errors import StridedIndexError
from .errors import StridedValueError
from .na import Logical
from .resolver import coerce_complex
from .resolver import coerce_double
from .resolver import coerce_int
from .resolver import coerce_logical
from .resolver import coerce_long
from .resolver import to
from .storage import ComplexStorage
from .storage import DoubleStorage
from .storage import IntStorage
from .storage import LongStorage
from .storage import ReferenceStorage
from .vector import BitVector
from .vector import ComplexVector
from .vector import DoubleVector
from .vector import GenericVector
from .vector import IntVector
from .vector import LongVector
from .vector import Vector
from .vector import VariableVector
from .vector import read_as
from .vectortype import VectorKind
from .vectortype import VectorType
from .vectortype import BIT
from .vectortype import COMPLEX
from .vectortype import DOUBLE
from .vectortype import INT
from .vectortype import LONG
from .vectortype import OBJECT
from .vectortype import VARIABLE

# Slots allocated by a new builder before the first growth
INITIAL_CAPACITY = 50


def _is_missing(value) -> bool:
	"""NA as written by callers: None, or a kind's NA that is not a plain int."""
	if value is None or value is Logical.NA:
		return True
	if isinstance(value, float):
		return na.is_na_double(value)
	if isinstance(value, complex):
		return na.is_na_complex(value)
	return False


# ============================================================
# Builder
# ============================================================

class Builder:
	"""
	Mutable, growable staging buffer that produces one Vector.

	Writing past the end pads the gap with NA. Values are coerced to the
	builder's type; anything that cannot be converted is stored as NA,
	so writes never fail on content. ``build()`` hands the buffer to the
	vector and may be called once; any later use raises BuilderStateError.
	"""

	vtype: VectorType = None
	_na = None
	_typecode = None  # None: list buffer

	def __init__(self, size: int = 0, capacity: int = None):
		if size < 0:
			raise StridedValueError(f"Builder size must not be negative, got {size}")
		capacity = INITIAL_CAPACITY if capacity is None else capacity
		if capacity < 0:
			raise StridedValueError(f"Builder capacity must not be negative, got {capacity}")
		self._buffer = self._allocate(max(capacity, size))
		self._size = size
		self._built = False

	def _allocate(self, n: int):
		if self._typecode is None:
			return [self._na] * n
		return array(self._typecode, [self._na]) * n

	def _grow(self, needed: int) -> None:
		buf = self._buffer
		if needed <= len(buf):
			return
		capacity = max(needed, len(buf) * 2)
		buf.extend(self._allocate(capacity - len(buf)))

	def _check_state(self) -> None:
		if self._built:
			raise BuilderStateError("Builder has already been built; create a new builder")

	@staticmethod
	def _check_target(i) -> int:
		i = _as_index(i)
		if i < 0:
			raise StridedIndexError(f"Builder index {i} is negative")
		return i

	# hooks
	def _coerce(self, value):
		raise NotImplementedError

	def _read_entry(self, entry):
		raise NotImplementedError

	def _make_vector(self, buffer) -> Vector:
		raise NotImplementedError

	def _domain(self, stored):
		return stored

	# --------------------------------------------------------
	# Writing
	# --------------------------------------------------------

	def set(self, i, value) -> "Builder":
		"""Store ``value`` at ``i``, padding with NA when ``i`` is past the end."""
		self._check_state()
		i = self._check_target(i)
		self._grow(i + 1)
		self._buffer[i] = self._coerce(value)
		if i >= self._size:
			self._size = i + 1
		return self

	def set_na(self, i) -> "Builder":
		return self.set(i, None)

	def add(self, value) -> "Builder":
		return self.set(self.size(), value)

	def add_na(self) -> "Builder":
		return self.add(None)

	def set_from(self, i, vector: Vector, j) -> "Builder":
		"""Store element ``j`` of ``vector``, converted to this builder's type, at ``i``."""
		self._check_state()
		i = self._check_target(i)
		value = self._coerce(read_as(self.vtype, vector, j))
		self._grow(i + 1)
		self._buffer[i] = value
		if i >= self._size:
			self._size = i + 1
		return self

	def add_from(self, vector: Vector, j) -> "Builder":
		return self.set_from(self.size(), vector, j)

	def add_all(self, values) -> "Builder":
		"""Append every element of a Vector or any iterable."""
		self._check_state()
		if isinstance(values, Vector):
			for j in range(len(values)):
				self.add_from(values, j)
		else:
			for v in values:
				self.add(v)
		return self

	def remove(self, i) -> "Builder":
		self._check_state()
		i = _check_index(i, self._size)
		del self._buffer[i]
		self._buffer.append(self._na)
		self._size -= 1
		return self

	def swap(self, a, b) -> "Builder":
		self._check_state()
		a = _check_index(a, self._size)
		b = _check_index(b, self._size)
		buf = self._buffer
		buf[a], buf[b] = buf[b], buf[a]
		return self

	def compare(self, a, b) -> int:
		"""Three-way comparison of two staged elements, as the vector type orders them."""
		self._check_state()
		a = _check_index(a, self._size)
		b = _check_index(b, self._size)
		return self.vtype.compare(self._domain(self._buffer[a]), self._domain(self._buffer[b]))

	# --------------------------------------------------------
	# Reading from entries
	# --------------------------------------------------------

	def read(self, entry) -> "Builder":
		"""Append the next value of ``entry``."""
		self._check_state()
		return self.add(self._read_entry(entry))

	def read_at(self, i, entry) -> "Builder":
		self._check_state()
		return self.set(i, self._read_entry(entry))

	def read_all(self, entry) -> "Builder":
		while entry.has_next():
			self.read(entry)
		return self

	# --------------------------------------------------------
	# Output
	# --------------------------------------------------------

	def size(self) -> int:
		return self._size

	def __len__(self):
		return self.size()

	def temporary_vector(self) -> Vector:
		"""Snapshot of the staged elements; the builder stays usable."""
		self._check_state()
		return self._make_vector(self._buffer[:self._size])

	def build(self) -> Vector:
		self._check_state()
		buf = self._buffer
		del buf[self._size:]
		vector = self._make_vector(buf)
		self._buffer = None
		self._built = True
		return vector

	def __repr__(self):
		state = "built" if self._built else f"size={self._size}"
		return f"{type(self).__name__}({state})"


class DoubleBuilder(Builder):
	vtype = DOUBLE
	_na = na.DOUBLE
	_typecode = 'd'

	def _coerce(self, value):
		return coerce_double(value)

	def _read_entry(self, entry):
		return entry.next_double()

	def _make_vector(self, buffer):
		return DoubleVector(DoubleStorage(buffer))


class IntBuilder(Builder):
	vtype = INT
	_na = na.INT
	_typecode = 'i'

	def _coerce(self, value):
		return coerce_int(value)

	def _read_entry(self, entry):
		return entry.next_int()

	def _make_vector(self, buffer):
		return IntVector(IntStorage(buffer))


class LongBuilder(Builder):
	vtype = LONG
	_na = na.LONG
	_typecode = 'q'

	def _coerce(self, value):
		return coerce_long(value)

	def _read_entry(self, entry):
		return entry.next_long()

	def _make_vector(self, buffer):
		return LongVector(LongStorage(buffer))


class BitBuilder(Builder):
	""" Stores Logical codes: 0, 1 and the int NA """
	vtype = BIT
	_na = na.INT
	_typecode = 'i'

	def _coerce(self, value):
		return coerce_logical(value).to_int()

	def _domain(self, stored):
		return Logical.from_int(stored)

	def _read_entry(self, entry):
		return entry.next_logical()

	def _make_vector(self, buffer):
		return BitVector(IntStorage(buffer))


class ComplexBuilder(Builder):
	vtype = COMPLEX
	_na = na.COMPLEX

	def _coerce(self, value):
		return coerce_complex(value)

	def _read_entry(self, entry):
		return entry.next_complex()

	def _make_vector(self, buffer):
		return ComplexVector(ComplexStorage.from_iterable(buffer))


class GenericBuilder(Builder):
	"""
	Builder for objects of one class. Values of other classes are
	converted through the resolver registry, or stored as NA.
	"""

	def __init__(self, vtype: VectorType, size: int = 0, capacity: int = None):
		self.vtype = vtype
		super().__init__(size, capacity)

	def _coerce(self, value):
		if _is_missing(value):
			return None
		cls = self.vtype.data_class
		if isinstance(value, cls):
			return value
		return to(cls, value)

	def _read_entry(self, entry):
		return entry.next_string()

	def _make_vector(self, buffer):
		return GenericVector(self.vtype, ReferenceStorage(buffer))


class VariableBuilder(GenericBuilder):
	""" Accepts values of any class """

	def __init__(self, size: int = 0, capacity: int = None):
		super().__init__(VARIABLE, size, capacity)

	def _coerce(self, value):
		return None if _is_missing(value) else value

	def _make_vector(self, buffer):
		return VariableVector(ReferenceStorage(buffer))


_BUILDERS = {
	VectorKind.DOUBLE: DoubleBuilder,
	VectorKind.INT: IntBuilder,
	VectorKind.LONG: LongBuilder,
	VectorKind.BIT: BitBuilder,
	VectorKind.COMPLEX: ComplexBuilder,
}


def builder_for(vtype: VectorType, size: int = 0, capacity: int = None) -> Builder:
	"""A new builder producing vectors of ``vtype``."""
	cls = _BUILDERS.get(vtype.kind)
	if cls is not None:
		return cls(size, capacity)
	if vtype.kind is VectorKind.VARIABLE:
		return VariableBuilder(size, capacity)
	return GenericBuilder(vtype, size, capacity)


# ============================================================
# Type inference
# ============================================================

class TypeInferenceBuilder(Builder):
	"""
	Builder that does not know its type up front.

	The first non-NA value picks the concrete builder (``VectorType.infer``);
	NA written before that is replayed into it. A builder that only ever
	saw NA builds an object vector.

	>>> b = TypeInferenceBuilder()
	>>> b.add(None).add(2 ** 40).build().type
	<long>
	"""

	def __init__(self, size: int = 0, capacity: int = None):
		if size < 0:
			raise StridedValueError(f"Builder size must not be negative, got {size}")
		self._delegate = None
		self._leading = size
		self._capacity = capacity
		self._built = False

	@property
	def vtype(self):
		return None if self._delegate is None else self._delegate.vtype

	def _adopt(self, vtype: VectorType) -> None:
		self._delegate = builder_for(vtype, size=self._leading, capacity=self._capacity)

	def set(self, i, value) -> "TypeInferenceBuilder":
		self._check_state()
		if self._delegate is None:
			if _is_missing(value):
				self._leading = max(self._leading, self._check_target(i) + 1)
				return self
			self._adopt(VectorType.infer(value))
		self._delegate.set(i, value)
		return self

	def set_from(self, i, vector: Vector, j) -> "TypeInferenceBuilder":
		self._check_state()
		if self._delegate is None:
			self._adopt(vector.type)
		self._delegate.set_from(i, vector, j)
		return self

	def remove(self, i) -> "TypeInferenceBuilder":
		self._check_state()
		if self._delegate is None:
			_check_index(i, self._leading)
			self._leading -= 1
		else:
			self._delegate.remove(i)
		return self

	def swap(self, a, b) -> "TypeInferenceBuilder":
		self._check_state()
		if self._delegate is None:
			_check_index(a, self._leading)
			_check_index(b, self._leading)
		else:
			self._delegate.swap(a, b)
		return self

	def compare(self, a, b) -> int:
		self._check_state()
		if self._delegate is None:
			_check_index(a, self._leading)
			_check_index(b, self._leading)
			return 0
		return self._delegate.compare(a, b)

	def _read_entry(self, entry):
		return entry.next_string()

	def size(self) -> int:
		return self._leading if self._delegate is None else self._delegate.size()

	def temporary_vector(self) -> Vector:
		self._check_state()
		if self._delegate is None:
			return builder_for(OBJECT, size=self._leading).build()
		return self._delegate.temporary_vector()

	def build(self) -> Vector:
		self._check_state()
		if self._delegate is None:
			vector = builder_for(OBJECT, size=self._leading).build()
		else:
			vector = self._delegate.build()
		self._delegate = None
		self._built = True
		return vector

	def __repr__(self):
		state = "built" if self._built else f"size={self.size()}, type={self.vtype}"
		return f"TypeInferenceBuilder({state})"
