"""
Index arithmetic for strided, column-major arrays.

Every function here is pure and performs no bounds checking; callers
validate indices before translating them.
"""

from __future__ import annotations
from typing import Sequence, Tuple


def column_major(i: int, j: int, rows: int, cols: int) -> int:
	"""Position of element (i, j) in a column-major (rows x cols) buffer."""
	return i + j * rows


def row_major(i: int, j: int, rows: int, cols: int) -> int:
	"""Position of element (i, j) in a row-major (rows x cols) buffer."""
	return i * cols + j


def compute_stride(shape: Sequence[int], start: int = 1) -> Tuple[int, ...]:
	"""
	Column-major strides for ``shape``.

	>>> compute_stride((2, 3, 4))
	(1, 2, 6)
	"""
	stride = []
	st = start
	for dim in shape:
		stride.append(st)
		st *= dim
	return tuple(stride)


def offset_of(index: Sequence[int], offset: int, stride: Sequence[int]) -> int:
	"""offset + sum(index[d] * stride[d])"""
	for i, s in zip(index, stride):
		offset += i * s
	return offset


def linearized(index: int, offset: int, stride: Sequence[int], shape: Sequence[int]) -> int:
	"""
	Translate a column-major logical flat index into a physical position.

	The first dimension varies fastest, so the flat index is decomposed one
	dimension at a time and each coordinate is scaled by its stride.
	"""
	n = len(stride)
	if n == 1:
		return offset + index * stride[0]
	if n == 2:
		shape0 = shape[0]
		sub0 = index // shape0
		return offset + (index - shape0 * sub0) * stride[0] + sub0 * stride[1]
	for size, st in zip(shape, stride):
		sub = index // size
		offset += (index - size * sub) * st
		index = sub
	return offset


def unravel(index: int, shape: Sequence[int]) -> Tuple[int, ...]:
	"""Column-major flat index → multi-index."""
	out = []
	for size in shape:
		out.append(index % size)
		index //= size
	return tuple(out)


def sub2ind(shape: Sequence[int], index: Sequence[int]) -> int:
	"""Multi-index → column-major flat index."""
	flat = 0
	for size, i in zip(reversed(shape), reversed(index)):
		flat = flat * size + i
	return flat


def size_of(shape: Sequence[int]) -> int:
	"""Total number of elements described by ``shape``."""
	size = 1
	for dim in shape:
		size *= dim
	return size


def remove(seq: Sequence[int], index: int) -> Tuple[int, ...]:
	"""Copy of ``seq`` without position ``index``."""
	return tuple(seq[:index]) + tuple(seq[index + 1:])


def reverse(seq: Sequence[int]) -> Tuple[int, ...]:
	return tuple(reversed(seq))
