"""Display and repr logic for arrays and vectors."""

from __future__ import annotations
from typing import List

from .indexer import size_of
from .indexer import unravel


# How many rows/columns to show before inserting "..."
MAX_HEAD_ROWS = 5
MAX_HEAD_COLS = 5

# format spec for non-integral doubles
DOUBLE_FORMAT = "g"

_NUMERIC_KINDS = ("double", "int", "long", "complex")


def _format_value(v, kind: str, is_na) -> str:
	if is_na(v):
		return "NA"
	if kind == "double":
		return f"{v:.1f}" if v.is_integer() else format(v, DOUBLE_FORMAT)
	if kind == "complex":
		return format(v, DOUBLE_FORMAT)
	if isinstance(v, str):
		return repr(v)
	return str(v)


def _preview(n: int, max_preview: int) -> List[int]:
	"""Indices to show for a run of n, with -1 marking the elision."""
	if n > max_preview * 2:
		return list(range(max_preview)) + [-1] + list(range(n - max_preview, n))
	return list(range(n))


def _justify(cells: List[str], width: int, numeric: bool) -> List[str]:
	if numeric:
		return [s.rjust(width) for s in cells]
	return [s.ljust(width) for s in cells]


def _footer(arr) -> str:
	kind = arr.kind.value
	shape = arr.shape
	view = " view" if arr.is_view() else ""
	if len(shape) == 1:
		return f"# {shape[0]} element {kind} array{view}"
	shape_str = "×".join(str(s) for s in shape)
	return f"# {shape_str} {kind} array{view}"


def _format_grid(arr) -> List[str]:
	"""Rows of a 2-d array, truncated in both directions."""
	rows, cols = arr.shape
	kind = arr.kind.value
	numeric = kind in _NUMERIC_KINDS
	row_idx = _preview(rows, MAX_HEAD_ROWS)
	col_idx = _preview(cols, MAX_HEAD_COLS)

	formatted_cols = []
	for j in col_idx:
		if j < 0:
			cells = ["..." for _ in row_idx]
		else:
			cells = [
				"..." if i < 0 else _format_value(arr.get(i, j), kind, arr.na_test)
				for i in row_idx
			]
		width = max((len(s) for s in cells), default=0)
		formatted_cols.append(_justify(cells, width, numeric))

	return [
		"  ".join(col[r] for col in formatted_cols)
		for r in range(len(row_idx))
	]


def _repr_array(arr) -> str:
	"""Pretty repr for arrays of any dimension."""
	shape = arr.shape
	if size_of(shape) == 0:
		return _footer(arr) + " (empty)"

	lines = []
	if len(shape) == 1:
		kind = arr.kind.value
		cells = [
			"..." if i < 0 else _format_value(arr.get(i), kind, arr.na_test)
			for i in _preview(shape[0], MAX_HEAD_ROWS)
		]
		width = max(len(s) for s in cells)
		lines.extend(_justify(cells, width, kind in _NUMERIC_KINDS))
	elif len(shape) == 2:
		lines.extend(_format_grid(arr))
	else:
		trailing = shape[2:]
		n = size_of(trailing)
		for k in _preview(n, MAX_HEAD_ROWS):
			if k < 0:
				lines.append("...")
				lines.append("")
				continue
			coords = unravel(k, trailing)
			label = ", ".join(str(c) for c in coords)
			lines.append(f"[:, :, {label}]")
			lines.extend(_format_grid(arr[(slice(None), slice(None)) + coords]))
			lines.append("")
		lines.pop()

	lines.append("")
	lines.append(_footer(arr))
	return "\n".join(lines)


def _repr_vector(v) -> str:
	"""Pretty repr for a Vector."""
	numeric = v.type.is_numeric
	cells = [
		"..." if i < 0 else v.to_string(i)
		for i in _preview(len(v), MAX_HEAD_ROWS)
	]
	width = max((len(s) for s in cells), default=0)
	lines = _justify(cells, width, numeric)
	lines.append("")
	lines.append(f"# {len(v)} element {v.type.name} vector")
	return "\n".join(lines)
