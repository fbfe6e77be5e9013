import cmath
import functools
import math
import operator
import warnings

from itertools import repeat
from typing import Any
from typing import Callable
from typing import Iterator
from typing import Tuple

from . import na
from .alias_tracker import _ALIAS_TRACKER, AliasError
from .display import _repr_array
from .errors import NonConformantError
from .errors import StridedIndexError
from .errors import StridedTypeError
from .errors import StridedValueError
from .indexer import compute_stride
from .indexer import linearized
from .indexer import offset_of
from .indexer import remove
from .indexer import reverse
from .indexer import size_of
from .indexer import unravel
from .storage import ArrayKind
from .storage import BitStorage
from .storage import ComplexStorage
from .storage import DoubleStorage
from .storage import IntStorage
from .storage import LongStorage
from .storage import ReferenceStorage
from .storage import infer_kind
from .typeutils import normalize_slice

_MISSING = object()


# ============================================================
# Small helpers
# ============================================================

def _parse_shape(args) -> Tuple[int, ...]:
	"""Accept ``f(2, 3)`` as well as ``f((2, 3))``."""
	if len(args) == 1 and isinstance(args[0], (tuple, list)):
		args = args[0]
	try:
		return tuple(operator.index(a) for a in args)
	except TypeError:
		raise StridedTypeError(f"Shape must contain integers, got {args!r}")


def _as_index(i) -> int:
	if isinstance(i, bool):
		raise StridedTypeError("Booleans are not valid indices")
	try:
		return operator.index(i)
	except TypeError:
		raise StridedTypeError(f"Indices must be integers, not {type(i).__name__}")


def _check_index(i, bound: int, dim=None) -> int:
	j = _as_index(i)
	if j < 0:
		j += bound
	if not (0 <= j < bound):
		where = "" if dim is None else f" for dimension {dim}"
		raise StridedIndexError(f"Index {i} out of bounds{where} (size {bound})")
	return j


def _wrap(value: int, bits: int) -> int:
	"""Two's complement wrap-around, as fixed-width integer arithmetic does."""
	value &= (1 << bits) - 1
	if value >= 1 << (bits - 1):
		value -= 1 << bits
	return value


def _ieee_div(a: float, b: float) -> float:
	if b == 0.0:
		if a == 0.0 or math.isnan(a):
			return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)
	return a / b


# ============================================================
# View engine
# ============================================================

class BaseArray:
	"""
	N-dimensional strided array over a flat Storage.

	The logical element at multi-index ``idx`` lives at physical position
	``offset + sum(idx[d] * stride[d])``. Arrays created from fresh storage
	own it; views (``base is not None``) share the storage of their owner,
	so writes through a view are visible in the owner and vice versa.

	A single integer index is a column-major flat index: the first
	dimension varies fastest.
	"""

	kind: ArrayKind = None
	storage_class = None
	na_value: Any = None

	def __init__(self, storage, shape, stride=None, offset=0, base=None):
		shape = _parse_shape((shape,)) if not isinstance(shape, int) else (shape,)
		if not shape:
			raise StridedValueError("Arrays need at least one dimension")
		if any(d < 0 for d in shape):
			raise StridedValueError(f"Negative dimension in shape {shape}")
		stride = compute_stride(shape) if stride is None else tuple(stride)
		if len(stride) != len(shape):
			raise StridedValueError(f"Stride {stride} does not match shape {shape}")

		if size_of(shape) > 0:
			lo = hi = offset
			for n, s in zip(shape, stride):
				if s > 0:
					hi += (n - 1) * s
				else:
					lo += (n - 1) * s
			if lo < 0 or hi >= len(storage):
				raise StridedValueError(
					f"Shape {shape} with stride {stride} and offset {offset} "
					f"exceeds storage of size {len(storage)}"
				)

		self._storage = storage
		self._shape = shape
		self._stride = stride
		self._offset = offset
		self._base = base
		_ALIAS_TRACKER.register(self, id(storage))

	@classmethod
	def _from_values(cls, values, shape):
		"""Owning array of this kind holding ``values`` in column-major order."""
		storage = cls.storage_class.from_iterable(values)
		if len(storage) != size_of(shape):
			raise NonConformantError((len(storage),), shape)
		return cls(storage, shape)

	def _view(self, shape, stride, offset):
		return type(self)(self._storage, shape, stride, offset, base=self._owner())

	def _owner(self):
		return self if self._base is None else self._base

	# --------------------------------------------------------
	# Geometry
	# --------------------------------------------------------

	@property
	def shape(self) -> Tuple[int, ...]:
		return self._shape

	@property
	def stride(self) -> Tuple[int, ...]:
		return self._stride

	@property
	def offset(self) -> int:
		return self._offset

	@property
	def storage(self):
		return self._storage

	@property
	def base(self):
		"""The owning array of a view, ``None`` for an owning array."""
		return self._base

	@property
	def size(self) -> int:
		return size_of(self._shape)

	def __len__(self):
		return self.size

	def dims(self) -> int:
		return len(self._shape)

	def rows(self) -> int:
		return self._shape[0]

	def columns(self) -> int:
		return self._shape[1] if len(self._shape) > 1 else 1

	def is_vector(self) -> bool:
		return len(self._shape) == 1

	def is_matrix(self) -> bool:
		return len(self._shape) == 2

	def is_square(self) -> bool:
		return self.is_matrix() and self._shape[0] == self._shape[1]

	def is_view(self) -> bool:
		"""True when this array does not own its storage."""
		return self._base is not None

	def is_contiguous(self) -> bool:
		"""
		True when logical flat index ``i`` lives at ``offset + i``.

		Dimensions of length one are ignored since their stride is never used.
		"""
		expected = 1
		for n, s in zip(self._shape, self._stride):
			if n > 1 and s != expected:
				return False
			expected *= n
		return True

	def _require_matrix(self, op):
		if len(self._shape) != 2:
			raise StridedValueError(f"{op} requires a 2-d array, got shape {self._shape}")

	# --------------------------------------------------------
	# Element access
	# --------------------------------------------------------

	def _position(self, index) -> int:
		if len(index) == 1:
			i = _check_index(index[0], self.size)
			return linearized(i, self._offset, self._stride, self._shape)
		if len(index) != len(self._shape):
			raise StridedIndexError(
				f"Expected 1 or {len(self._shape)} indices, got {len(index)}"
			)
		idx = [_check_index(i, n, d) for d, (i, n) in enumerate(zip(index, self._shape))]
		return offset_of(idx, self._offset, self._stride)

	def _positions(self):
		"""Physical positions in column-major logical order."""
		if self.is_contiguous():
			return range(self._offset, self._offset + self.size)
		off, st, sh = self._offset, self._stride, self._shape
		return (linearized(i, off, st, sh) for i in range(self.size))

	def get(self, *index):
		"""
		Element at a flat column-major index or at a full multi-index.

		>>> a = double_array(2, 3)
		>>> a.get(1) == a.get(1, 0)
		True
		"""
		return self._storage.get(self._position(index))

	def set(self, *args):
		"""``set(i, value)`` or ``set(i, j, ..., value)``."""
		if len(args) < 2:
			raise StridedTypeError("set() requires an index and a value")
		self._storage.set(self._position(args[:-1]), args[-1])

	def __getitem__(self, key):
		"""
		Integers address elements; slices produce views.

		A bare slice slices the flat column-major sequence, which is a view
		only for contiguous arrays. Tuples mixing integers and slices index
		each dimension; integer positions drop that dimension.
		"""
		if isinstance(key, slice):
			flat = self if self.dims() == 1 else self.ravel()
			return flat._slice_view((key,))
		if isinstance(key, tuple):
			if all(not isinstance(k, slice) for k in key):
				return self.get(*key)
			return self._slice_view(key)
		return self.get(key)

	def __setitem__(self, key, value):
		if isinstance(key, tuple) and all(not isinstance(k, slice) for k in key):
			self.set(*key, value)
		elif isinstance(key, (slice, tuple)):
			if isinstance(key, slice) and self.dims() > 1 and not self.is_contiguous():
				raise StridedValueError("Flat slice assignment requires a contiguous array")
			self[key].assign(value)
		else:
			self.set(key, value)

	def _slice_view(self, key):
		if len(key) > len(self._shape):
			raise StridedIndexError(
				f"Too many indices ({len(key)}) for array with {len(self._shape)} dimensions"
			)
		key = tuple(key) + (slice(None),) * (len(self._shape) - len(key))
		offset = self._offset
		shape = []
		stride = []
		for d, (k, n, s) in enumerate(zip(key, self._shape, self._stride)):
			if isinstance(k, slice):
				start, length, step = normalize_slice(k, n)
				if length:
					offset += start * s
				shape.append(length)
				stride.append(s * step)
			else:
				offset += _check_index(k, n, d) * s
		if not shape:
			return self._storage.get(offset)
		return self._view(tuple(shape), tuple(stride), offset)

	def __iter__(self) -> Iterator[Any]:
		get = self._storage.get
		return (get(p) for p in self._positions())

	def to_list(self) -> list:
		"""Elements in column-major order."""
		return list(self)

	# --------------------------------------------------------
	# Views
	# --------------------------------------------------------

	def reshape(self, *shape):
		"""
		Array with the same elements and a new shape; ``-1`` infers one
		dimension.

		Contiguous arrays reshape to a view over the same storage; other
		arrays are copied first.
		"""
		shape = _parse_shape(shape)
		if shape.count(-1) > 1:
			raise StridedValueError("Only one dimension may be -1")
		if -1 in shape:
			known = size_of(d for d in shape if d != -1)
			if known == 0 or self.size % known:
				raise NonConformantError(self._shape, shape)
			shape = tuple(self.size // known if d == -1 else d for d in shape)
		if any(d < 0 for d in shape):
			raise StridedValueError(f"Negative dimension in shape {shape}")
		if size_of(shape) != self.size:
			raise NonConformantError(self._shape, shape)
		if not self.is_contiguous():
			return self.copy().reshape(shape)
		return self._view(shape, compute_stride(shape), self._offset)

	def ravel(self):
		return self.reshape(-1)

	def transpose(self):
		"""Reverse the axes. No data is moved."""
		return self._view(reverse(self._shape), reverse(self._stride), self._offset)

	@property
	def T(self):
		return self.transpose()

	def permute(self, *axes):
		axes = _parse_shape(axes)
		if sorted(axes) != list(range(len(self._shape))):
			raise StridedValueError(
				f"{axes} is not a permutation of the {len(self._shape)} axes"
			)
		return self._view(
			tuple(self._shape[a] for a in axes),
			tuple(self._stride[a] for a in axes),
			self._offset,
		)

	def select(self, index, dim=0):
		"""
		View of the slice at ``index`` along ``dim``, with that dimension
		removed.
		"""
		dim = _check_index(dim, len(self._shape))
		index = _check_index(index, self._shape[dim], dim)
		offset = self._offset + index * self._stride[dim]
		if len(self._shape) == 1:
			return self._view((1,), self._stride, offset)
		return self._view(remove(self._shape, dim), remove(self._stride, dim), offset)

	def get_row(self, i):
		self._require_matrix("get_row")
		return self.select(i, 0)

	def get_column(self, j):
		self._require_matrix("get_column")
		return self.select(j, 1)

	def get_diagonal(self):
		self._require_matrix("get_diagonal")
		n = min(self._shape)
		return self._view((n,), (self._stride[0] + self._stride[1],), self._offset)

	def get_view(self, row_offset, col_offset, rows, cols):
		"""Rectangular ``rows x cols`` window starting at (row_offset, col_offset)."""
		self._require_matrix("get_view")
		r, c = self._shape
		if rows <= 0 or cols <= 0:
			raise StridedValueError(f"View shape must be positive, got ({rows}, {cols})")
		if row_offset < 0 or col_offset < 0 or row_offset + rows > r or col_offset + cols > c:
			raise StridedIndexError(
				f"View ({row_offset}, {col_offset}, {rows}, {cols}) exceeds shape {self._shape}"
			)
		offset = self._offset + row_offset * self._stride[0] + col_offset * self._stride[1]
		return self._view((rows, cols), self._stride, offset)

	def vectors(self, dim) -> int:
		"""Number of 1-d vectors along ``dim``."""
		dim = _check_index(dim, len(self._shape))
		n = self._shape[dim]
		return self.size // n if n else 0

	def get_vector(self, dim, i):
		"""
		The ``i``-th 1-d view along ``dim``.

		For a matrix, ``get_vector(0, j)`` is column ``j`` and
		``get_vector(1, i)`` is row ``i``.
		"""
		dim = _check_index(dim, len(self._shape))
		i = _check_index(i, self.vectors(dim))
		other_shape = remove(self._shape, dim)
		other_stride = remove(self._stride, dim)
		offset = offset_of(unravel(i, other_shape), self._offset, other_stride)
		return self._view((self._shape[dim],), (self._stride[dim],), offset)

	def iter_vectors(self, dim):
		for i in range(self.vectors(dim)):
			yield self.get_vector(dim, i)

	# --------------------------------------------------------
	# Copy / assignment
	# --------------------------------------------------------

	def copy(self):
		"""Owning array with fresh storage, contents copied in column-major order."""
		return type(self)(self._storage.take(self._positions()), self._shape)

	def assign(self, value):
		"""
		Overwrite every element in place.

		``value`` may be an array of the same size (copied first if it
		shares storage with this array), a sequence of matching length, a
		zero-argument callable invoked once per element, or a scalar.
		"""
		n = self.size
		if isinstance(value, BaseArray):
			if value.size != n:
				raise NonConformantError(self._shape, value.shape)
			if value.shares_storage(self):
				value = value.copy()
			values = iter(value)
		elif isinstance(value, (list, tuple)):
			if len(value) != n:
				raise NonConformantError(self._shape, (len(value),))
			values = value
		elif callable(value):
			values = (value() for _ in range(n))
		else:
			values = repeat(value, n)

		storage = self._storage
		for p, v in zip(self._positions(), values):
			storage.set(p, v)
		return self

	def set_row(self, i, values):
		self.get_row(i).assign(values)

	def set_column(self, j, values):
		self.get_column(j).assign(values)

	# --------------------------------------------------------
	# Functional helpers
	# --------------------------------------------------------

	def map(self, fn: Callable[[Any], Any], kind=None):
		"""
		New owning array with ``fn`` applied to each element.

		The result has this array's kind unless ``kind`` names another.
		"""
		cls = type(self) if kind is None else array_class(kind)
		return cls._from_values([fn(x) for x in self], self._shape)

	def for_each(self, fn: Callable[[Any], Any]) -> None:
		for x in self:
			fn(x)

	def reduce(self, fn: Callable[[Any, Any], Any], initial=_MISSING):
		if initial is _MISSING:
			return functools.reduce(fn, self)
		return functools.reduce(fn, self, initial)

	def reduce_vectors(self, dim, fn: Callable[["BaseArray"], Any]):
		"""
		Apply ``fn`` to every vector along ``dim``.

		The result keeps all dimensions, with ``dim`` collapsed to 1.
		"""
		results = [fn(v) for v in self.iter_vectors(dim)]
		shape = list(self._shape)
		shape[dim] = 1
		return array_class(infer_kind(results))._from_values(results, tuple(shape))

	# --------------------------------------------------------
	# NA
	# --------------------------------------------------------

	@staticmethod
	def na_test(value) -> bool:
		return na.is_na(value)

	def is_na(self, *index):
		"""
		With an index, whether that element is NA; without one, a BitArray
		mask of NA elements.
		"""
		if index:
			return self._storage.is_na(self._position(index))
		test = self._storage.is_na
		return BitArray._from_values([test(p) for p in self._positions()], self._shape)

	def has_na(self) -> bool:
		test = self._storage.is_na
		return any(test(p) for p in self._positions())

	# --------------------------------------------------------
	# Elementwise plumbing
	# --------------------------------------------------------

	def _operand(self, other):
		"""Values of ``other`` lined up with this array's elements."""
		if isinstance(other, BaseArray):
			if other.shape != self._shape:
				raise NonConformantError(self._shape, other.shape)
			return iter(other)
		return repeat(other, self.size)

	# --------------------------------------------------------
	# Equality / aliasing / display
	# --------------------------------------------------------

	def __eq__(self, other):
		if not isinstance(other, BaseArray):
			return NotImplemented
		if self._shape != other.shape:
			return False
		return all(
			x == y or (self.na_test(x) and other.na_test(y))
			for x, y in zip(self, other)
		)

	def __ne__(self, other):
		result = self.__eq__(other)
		if result is NotImplemented:
			return result
		return not result

	__hash__ = None

	def shares_storage(self, other) -> bool:
		return isinstance(other, BaseArray) and self._storage is other.storage

	def alias_count(self) -> int:
		"""Number of live arrays (owner and views) using this storage."""
		return _ALIAS_TRACKER.count(id(self._storage))

	def check_exclusive(self) -> bool:
		"""Raise AliasError unless no other live array uses this storage."""
		return _ALIAS_TRACKER.check_exclusive(self, id(self._storage))

	def unshare(self):
		"""This array if nothing else uses its storage, otherwise a copy."""
		try:
			self.check_exclusive()
		except AliasError:
			return self.copy()
		return self

	def __repr__(self):
		return _repr_array(self)

	def __str__(self):
		return _repr_array(self)


# ============================================================
# Kinds
# ============================================================

class DoubleArray(BaseArray):
	""" 64-bit floating point array; NA is the double sentinel """
	kind = ArrayKind.DOUBLE
	storage_class = DoubleStorage
	na_value = na.DOUBLE
	na_test = staticmethod(na.is_na_double)

	def _values(self, skip_na):
		"""Non-NA values, or None as soon as an NA is met and not skipped."""
		out = []
		for x in self:
			if na.is_na_double(x):
				if skip_na:
					continue
				return None
			out.append(x)
		return out

	def sum(self, skip_na=False) -> float:
		vals = self._values(skip_na)
		return na.DOUBLE if vals is None else math.fsum(vals)

	def mean(self, skip_na=False) -> float:
		vals = self._values(skip_na)
		if not vals:
			return na.DOUBLE
		return math.fsum(vals) / len(vals)

	def min(self, skip_na=False) -> float:
		vals = self._values(skip_na)
		return min(vals) if vals else na.DOUBLE

	def max(self, skip_na=False) -> float:
		vals = self._values(skip_na)
		return max(vals) if vals else na.DOUBLE

	def prod(self, skip_na=False) -> float:
		vals = self._values(skip_na)
		return na.DOUBLE if vals is None else math.prod(vals, start=1.0)

	""" Math operations """
	def _elementwise_operation(self, other, op):
		if isinstance(other, BaseArray) and not isinstance(other, DoubleArray):
			if not hasattr(other, "as_double"):
				raise StridedTypeError(
					f"Unsupported operand: DoubleArray and {type(other).__name__}"
				)
			other = other.as_double()
		elif other is None:
			other = na.DOUBLE
		elif not isinstance(other, (BaseArray, int, float)):
			raise StridedTypeError(
				f"Unsupported operand: DoubleArray and {type(other).__name__}"
			)
		is_na = na.is_na_double
		values = [
			na.DOUBLE if is_na(x) or is_na(float(y)) else op(x, float(y))
			for x, y in zip(self, self._operand(other))
		]
		return DoubleArray._from_values(values, self._shape)

	def __add__(self, other):
		return self._elementwise_operation(other, operator.add)

	def __radd__(self, other):
		return self._elementwise_operation(other, lambda x, y: y + x)

	def __sub__(self, other):
		return self._elementwise_operation(other, operator.sub)

	def __rsub__(self, other):
		return self._elementwise_operation(other, lambda x, y: y - x)

	def __mul__(self, other):
		return self._elementwise_operation(other, operator.mul)

	def __rmul__(self, other):
		return self._elementwise_operation(other, lambda x, y: y * x)

	def __truediv__(self, other):
		return self._elementwise_operation(other, _ieee_div)

	def __rtruediv__(self, other):
		return self._elementwise_operation(other, lambda x, y: _ieee_div(y, x))

	def __neg__(self):
		return self.map(lambda x: x if na.is_na_double(x) else -x)

	def mmul(self, other):
		"""Matrix product. 1-d operands are treated as column vectors."""
		from .routines import gemm
		a = self.reshape(self.size, 1) if self.dims() == 1 else self
		b = other.reshape(other.size, 1) if other.dims() == 1 else other
		if not isinstance(b, DoubleArray):
			b = b.as_double()
		a._require_matrix("mmul")
		b._require_matrix("mmul")
		if a.columns() != b.rows():
			raise NonConformantError(a.shape, b.shape)
		c = DoubleArray(DoubleStorage.allocate(a.rows() * b.columns()), (a.rows(), b.columns()))
		return gemm(1.0, a, b, 0.0, c)

	def __matmul__(self, other):
		return self.mmul(other)

	def as_double(self):
		return self.copy()

	def as_int(self):
		return self.map(na.double_to_int, ArrayKind.INT)

	def as_long(self):
		return self.map(na.double_to_long, ArrayKind.LONG)

	def as_complex(self):
		return self.map(na.double_to_complex, ArrayKind.COMPLEX)


class _IntegralArray(BaseArray):
	"""Shared behaviour of the fixed-width integer kinds."""

	bits: int = None

	def _values(self, skip_na):
		out = []
		sentinel = self.na_value
		for x in self:
			if x == sentinel:
				if skip_na:
					continue
				return None
			out.append(x)
		return out

	def _check_collision(self, value):
		if value == self.na_value:
			warnings.warn(
				f"{self.kind.value} result {value} equals the NA sentinel and will read as NA"
			)
		return value

	def sum(self, skip_na=False) -> int:
		vals = self._values(skip_na)
		if vals is None:
			return self.na_value
		return self._check_collision(_wrap(sum(vals), self.bits))

	def mean(self, skip_na=False) -> float:
		vals = self._values(skip_na)
		if not vals:
			return na.DOUBLE
		return sum(vals) / len(vals)

	def min(self, skip_na=False) -> int:
		vals = self._values(skip_na)
		return min(vals) if vals else self.na_value

	def max(self, skip_na=False) -> int:
		vals = self._values(skip_na)
		return max(vals) if vals else self.na_value

	def _elementwise_operation(self, other, op):
		if isinstance(other, DoubleArray) or isinstance(other, float):
			return op(self.as_double(), other)
		if isinstance(self, IntArray) and isinstance(other, LongArray):
			return op(self.as_long(), other)
		if isinstance(other, BaseArray) and not isinstance(other, _IntegralArray):
			raise StridedTypeError(
				f"Unsupported operand: {type(self).__name__} and {type(other).__name__}"
			)
		if other is None:
			other = self.na_value
		elif not isinstance(other, (BaseArray, int)):
			raise StridedTypeError(
				f"Unsupported operand: {type(self).__name__} and {type(other).__name__}"
			)
		other_na = other.na_value if isinstance(other, BaseArray) else self.na_value
		sentinel = self.na_value
		values = []
		collisions = 0
		for x, y in zip(self, self._operand(other)):
			if x == sentinel or y == other_na:
				values.append(sentinel)
				continue
			v = _wrap(op(x, y), self.bits)
			if v == sentinel:
				collisions += 1
			values.append(v)
		if collisions:
			warnings.warn(
				f"{collisions} {self.kind.value} result(s) equal the NA sentinel and will read as NA"
			)
		return type(self)._from_values(values, self._shape)

	def __add__(self, other):
		return self._elementwise_operation(other, operator.add)

	def __radd__(self, other):
		return self._elementwise_operation(other, lambda x, y: y + x)

	def __sub__(self, other):
		return self._elementwise_operation(other, operator.sub)

	def __rsub__(self, other):
		return self._elementwise_operation(other, lambda x, y: y - x)

	def __mul__(self, other):
		return self._elementwise_operation(other, operator.mul)

	def __rmul__(self, other):
		return self._elementwise_operation(other, lambda x, y: y * x)


class IntArray(_IntegralArray):
	""" 32-bit integer array; NA is -2**31 """
	kind = ArrayKind.INT
	storage_class = IntStorage
	na_value = na.INT
	na_test = staticmethod(na.is_na_int)
	bits = 32

	def as_double(self):
		return self.map(na.int_to_double, ArrayKind.DOUBLE)

	def as_long(self):
		return self.map(na.int_to_long, ArrayKind.LONG)


class LongArray(_IntegralArray):
	""" 64-bit integer array; NA is 2**63 - 1 """
	kind = ArrayKind.LONG
	storage_class = LongStorage
	na_value = na.LONG
	na_test = staticmethod(na.is_na_long)
	bits = 64

	def as_double(self):
		return self.map(na.long_to_double, ArrayKind.DOUBLE)

	def as_int(self):
		return self.map(na.long_to_int, ArrayKind.INT)


class BitArray(BaseArray):
	""" Two-valued boolean array; cannot hold NA """
	kind = ArrayKind.BIT
	storage_class = BitStorage
	na_test = staticmethod(lambda value: False)

	def all(self) -> bool:
		return all(self)

	def any(self) -> bool:
		return any(self)

	def count(self) -> int:
		"""Number of true elements."""
		return sum(1 for x in self if x)

	def _logical(self, other, op):
		if not isinstance(other, (BitArray, bool)):
			raise StridedTypeError(
				f"Unsupported operand: BitArray and {type(other).__name__}"
			)
		values = [op(x, y) for x, y in zip(self, self._operand(other))]
		return BitArray._from_values(values, self._shape)

	def __and__(self, other):
		return self._logical(other, operator.and_)

	def __or__(self, other):
		return self._logical(other, operator.or_)

	def __xor__(self, other):
		return self._logical(other, operator.xor)

	__rand__ = __and__
	__ror__ = __or__
	__rxor__ = __xor__

	def __invert__(self):
		return self.map(operator.not_)

	def as_int(self):
		return self.map(int, ArrayKind.INT)

	def as_double(self):
		return self.map(float, ArrayKind.DOUBLE)


class ComplexArray(BaseArray):
	""" Complex array stored as interleaved doubles """
	kind = ArrayKind.COMPLEX
	storage_class = ComplexStorage
	na_value = na.COMPLEX
	na_test = staticmethod(na.is_na_complex)

	def _part(self, fn):
		return self.map(
			lambda z: na.DOUBLE if na.is_na_complex(z) else fn(z),
			ArrayKind.DOUBLE,
		)

	def real(self):
		return self._part(lambda z: z.real)

	def imag(self):
		return self._part(lambda z: z.imag)

	def abs(self):
		return self._part(abs)

	def arg(self):
		return self._part(cmath.phase)

	def conjugate(self):
		return self.map(lambda z: z if na.is_na_complex(z) else z.conjugate())

	def sum(self, skip_na=False) -> complex:
		total = complex(0.0, 0.0)
		for z in self:
			if na.is_na_complex(z):
				if skip_na:
					continue
				return na.COMPLEX
			total += z
		return total


class ReferenceArray(BaseArray):
	""" Array of arbitrary Python objects; NA is None """
	kind = ArrayKind.REFERENCE
	storage_class = ReferenceStorage
	na_test = staticmethod(lambda value: value is None)


ARRAY_CLASSES = {
	ArrayKind.DOUBLE: DoubleArray,
	ArrayKind.INT: IntArray,
	ArrayKind.LONG: LongArray,
	ArrayKind.BIT: BitArray,
	ArrayKind.COMPLEX: ComplexArray,
	ArrayKind.REFERENCE: ReferenceArray,
}


def array_class(kind):
	"""The array class for an ArrayKind (or its name, e.g. ``"double"``)."""
	try:
		return ARRAY_CLASSES[ArrayKind(kind)]
	except ValueError:
		raise StridedValueError(f"Unknown array kind {kind!r}")
