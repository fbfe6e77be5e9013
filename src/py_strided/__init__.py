"""
py-strided: strided N-dimensional arrays and NA-aware vectors in pure Python

Two layers share one sentinel-based encoding of missing values (NA):

Arrays:
    - DoubleArray, IntArray, LongArray, BitArray, ComplexArray, ReferenceArray
    - views (transpose, reshape, slices, rows, columns, diagonals) share
      storage with the array they come from
    - ArrayFactory and the functional shortcuts (array, zeros, arange, ...)

Vectors:
    - immutable, typed columns built through one-shot builders
    - VectorType describes the element type (double, int, long, bit,
      complex, string, object, variable)

Zero external dependencies - pure Python stdlib only.
"""

from .alias_tracker import _ALIAS_TRACKER, AliasError
from .array import BaseArray, DoubleArray, IntArray, LongArray, BitArray, ComplexArray, ReferenceArray
from .builder import Builder, DoubleBuilder, IntBuilder, LongBuilder, BitBuilder, ComplexBuilder, GenericBuilder, VariableBuilder
from .builder import TypeInferenceBuilder, builder_for
from .entry import DataEntry, StringDataEntry
from .errors import (
	StridedError,
	StridedIndexError,
	StridedValueError,
	StridedTypeError,
	NonConformantError,
	UnsupportedOperationError,
	BuilderStateError,
)
from .factory import (
	ArrayFactory,
	array,
	new_array,
	double_array,
	int_array,
	long_array,
	bit_array,
	complex_array,
	reference_array,
	zeros,
	ones,
	full,
	arange,
	linspace,
	eye,
	diag,
)
from .na import Logical
from .resolver import Resolver
from . import routines
from .storage import ArrayKind
from .vector import Vector, DoubleVector, IntVector, LongVector, BitVector, ComplexVector, GenericVector, VariableVector
from .vectortype import VectorType, VectorKind, Scale

__version__ = "0.1.0"
__all__ = [
	"BaseArray",
	"DoubleArray",
	"IntArray",
	"LongArray",
	"BitArray",
	"ComplexArray",
	"ReferenceArray",
	"ArrayKind",
	"ArrayFactory",
	"array",
	"new_array",
	"double_array",
	"int_array",
	"long_array",
	"bit_array",
	"complex_array",
	"reference_array",
	"zeros",
	"ones",
	"full",
	"arange",
	"linspace",
	"eye",
	"diag",
	"Vector",
	"DoubleVector",
	"IntVector",
	"LongVector",
	"BitVector",
	"ComplexVector",
	"GenericVector",
	"VariableVector",
	"VectorType",
	"VectorKind",
	"Scale",
	"Builder",
	"DoubleBuilder",
	"IntBuilder",
	"LongBuilder",
	"BitBuilder",
	"ComplexBuilder",
	"GenericBuilder",
	"VariableBuilder",
	"TypeInferenceBuilder",
	"builder_for",
	"Logical",
	"Resolver",
	"DataEntry",
	"StringDataEntry",
	"AliasError",
	"StridedError",
	"StridedIndexError",
	"StridedValueError",
	"StridedTypeError",
	"NonConformantError",
	"UnsupportedOperationError",
	"BuilderStateError",
]
