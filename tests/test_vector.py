"""Immutable NA-aware vectors"""
import math
import warnings

import pytest

from py_strided import na
from py_strided import vectortype
from py_strided import DoubleBuilder
from py_strided.array import BitArray
from py_strided.array import DoubleArray
from py_strided.array import IntArray
from py_strided.array import ReferenceArray
from py_strided.errors import NonConformantError
from py_strided.errors import StridedIndexError
from py_strided.errors import StridedTypeError
from py_strided.errors import StridedValueError
from py_strided.errors import UnsupportedOperationError
from py_strided.na import Logical
from py_strided.vector import BitVector
from py_strided.vector import DoubleVector
from py_strided.vector import FANCY_INDEX_WARN_SIZE
from py_strided.vector import GenericVector
from py_strided.vector import IntVector
from py_strided.vector import Vector


class TestConstruction:
    """Vector.of / singleton / empty"""

    def test_of_infers_type(self):
        v = Vector.of(1.0, None, 3.0)
        assert isinstance(v, DoubleVector)
        assert v.type is vectortype.DOUBLE
        assert len(v) == 3
        assert v.size() == 3

    def test_of_list(self):
        assert Vector.of([1, 2, 3]).to_list() == [1, 2, 3]

    def test_of_mixed_numbers(self):
        v = Vector.of(1, 2.5)
        assert isinstance(v, IntVector)
        assert v[1] == 2

    def test_of_strings(self):
        v = Vector.of("a", "b")
        assert isinstance(v, GenericVector)
        assert v.type is vectortype.STRING

    def test_of_bools(self):
        v = Vector.of(True, None, False)
        assert isinstance(v, BitVector)
        assert v.to_list() == [True, None, False]

    def test_singleton(self):
        v = Vector.singleton(2.0, 3)
        assert v.to_list() == [2.0, 2.0, 2.0]

    def test_empty(self):
        v = Vector.empty()
        assert len(v) == 0
        assert v.to_list() == []


class TestAccess:
    """Indexing and the get_as_* family"""

    def test_na_reads(self):
        v = Vector.of(1.0, None, None, 4.0)
        assert v.get_as_int(0) == 1
        assert v.get_as_int(1) == na.INT
        assert na.is_na_double(v.get_as_double(2))
        assert v.get_as_long(3) == 4
        assert v.get_as_bit(1) is Logical.NA
        assert na.is_na_complex(v.get_as_complex(1))

    def test_getitem_returns_none_for_na(self):
        v = Vector.of(1.0, None)
        assert v[0] == 1.0
        assert v[1] is None
        assert v[-1] is None

    def test_nan_is_not_na(self):
        v = Vector.of(float('nan'))
        assert not v.is_na(0)
        assert not v.has_na()

    def test_out_of_range(self):
        v = Vector.of(1, 2)
        with pytest.raises(StridedIndexError):
            v[2]
        with pytest.raises(StridedIndexError):
            v.get_as_double(-3)

    def test_bad_key(self):
        with pytest.raises(StridedTypeError):
            Vector.of(1, 2)["a"]

    def test_get_with_class(self):
        v = Vector.of("12", "x", None)
        assert v.get(int, 0) == 12
        assert v.get(int, 1) == na.INT
        assert v.get(str, 2) is None
        assert na.is_na_double(v.get(float, 1))

    def test_get_as_from_strings(self):
        v = Vector.of("1.5", "true")
        assert v.get_as_double(0) == 1.5
        assert v.get_as_bit(1) is Logical.TRUE

    def test_bit_reads(self):
        v = Vector.of(True, False, None)
        assert v.get_as_int(0) == 1
        assert v.get_as_double(1) == 0.0
        assert v.get_as_bit(0) is Logical.TRUE
        assert v.is_na(2)

    def test_to_string(self):
        v = Vector.of(1, None)
        assert v.to_string(0) == "1"
        assert v.to_string(1) == "NA"

    def test_iteration(self):
        assert list(Vector.of(1, None, 3)) == [1, None, 3]


class TestSelection:
    """Slices, index lists, masks, head, tail"""

    @pytest.fixture
    def v(self):
        return Vector.of(10, 20, 30, 40, 50, 60)

    def test_slice(self, v):
        s = v[1:3]
        assert isinstance(s, IntVector)
        assert s.to_list() == [20, 30]
        assert v[::-2].to_list() == [60, 40, 20]

    def test_index_list(self, v):
        assert v[[5, 0, 0]].to_list() == [60, 10, 10]

    def test_index_list_out_of_range(self, v):
        with pytest.raises(StridedIndexError):
            v[[6]]

    def test_bool_mask(self, v):
        mask = [True, False, True, False, False, True]
        assert v[mask].to_list() == [10, 30, 60]

    def test_bit_vector_mask_skips_na(self, v):
        mask = Vector.of(True, None, True, False, False, False)
        assert v.select(mask).to_list() == [10, 30]

    def test_mask_length_mismatch(self, v):
        with pytest.raises(StridedValueError):
            v[[True, False]]

    def test_large_index_list_warns(self):
        v = Vector.of(list(range(FANCY_INDEX_WARN_SIZE + 1)))
        with pytest.warns(UserWarning):
            v[[0, 1]]

    def test_small_index_list_does_not_warn(self, v):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            v[[0, 1]]

    def test_head_tail(self, v):
        assert v.head(2).to_list() == [10, 20]
        assert v.tail(2).to_list() == [50, 60]
        assert v.head().to_list() == [10, 20, 30, 40, 50]
        assert v.tail(10).to_list() == v.to_list()
        assert v.head(0).to_list() == []


class TestSortAndCompare:
    """Ordering with NA first"""

    def test_sort(self):
        v = Vector.of(3.0, None, 1.0, 2.0)
        assert v.sort().to_list() == [None, 1.0, 2.0, 3.0]
        assert v.sort(reverse=True).to_list() == [3.0, 2.0, 1.0, None]

    def test_sort_with_nan(self):
        v = DoubleBuilder().add(3.0).add(float("nan")).add(1.0).add(2.0).build()
        out = v.sort().to_list()
        assert out[:3] == [1.0, 2.0, 3.0]
        assert math.isnan(out[3])

    def test_sort_nan_and_na(self):
        v = DoubleBuilder().add(float("nan")).add(None).add(0.5).build()
        out = v.sort().to_list()
        assert out[0] is None
        assert out[1] == 0.5
        assert math.isnan(out[2])

    def test_sort_strings(self):
        assert Vector.of("b", "a", None).sort().to_list() == [None, "a", "b"]

    def test_sort_bits(self):
        assert Vector.of(True, False, None).sort().to_list() == [None, False, True]

    def test_sort_complex_unsupported(self):
        with pytest.raises(UnsupportedOperationError):
            Vector.of(1j, 2j).sort()

    def test_compare(self):
        v = Vector.of(1, 5, None)
        assert v.compare(0, 1) == -1
        assert v.compare(2, 0) == -1
        assert v.compare(1, 1) == 0

    def test_compare_with(self):
        a = Vector.of(1.0, 2.0)
        b = Vector.of("2", "x")
        assert a.compare_with(1, b, 0) == 0
        assert a.compare_with(0, b, 1) == 1


class TestEquality:
    """Value equality and hashing"""

    def test_equal(self):
        assert Vector.of(1.0, None) == Vector.of(1.0, None)
        assert Vector.of(1.0, 2.0) != Vector.of(1.0, 3.0)
        assert Vector.of(1.0) != Vector.of(1.0, 1.0)

    def test_hash_consistent(self):
        a = Vector.of("a", None)
        b = Vector.of("a", None)
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_nan_equal_to_nan(self):
        assert Vector.of(float('nan')) == Vector.of(float('nan'))

    def test_not_equal_to_list(self):
        assert Vector.of(1) != [1]


class TestTransform:
    """transform / combine"""

    def test_transform_keeps_na(self):
        v = Vector.of(1, None, 3).transform(lambda x: x * 10)
        assert v.to_list() == [10, None, 30]

    def test_transform_infers_type(self):
        v = Vector.of(1, 2).transform(str)
        assert v.type is vectortype.STRING

    def test_transform_with_type(self):
        v = Vector.of(1, 2).transform(lambda x: x / 2, vectortype.DOUBLE)
        assert v.to_list() == [0.5, 1.0]

    def test_combine(self):
        a = Vector.of("a", "b", None)
        b = Vector.of(1, None, 3)
        v = a.combine(b, lambda x, y: x * y)
        assert v.to_list() == ["a", None, None]

    def test_combine_length_mismatch(self):
        with pytest.raises(NonConformantError):
            Vector.of(1).combine(Vector.of(1, 2), max)


class TestArithmetic:
    """Elementwise operators and reductions"""

    def test_int_plus_int(self):
        v = Vector.of(1, 2) + Vector.of(3, None)
        assert v.type is vectortype.INT
        assert v.to_list() == [4, None]

    def test_int_plus_double(self):
        v = Vector.of(1, 2) + Vector.of(0.5, 0.5)
        assert v.type is vectortype.DOUBLE
        assert v.to_list() == [1.5, 2.5]

    def test_division_is_double(self):
        v = Vector.of(1, 3) / 2
        assert v.type is vectortype.DOUBLE
        assert v.to_list() == [0.5, 1.5]

    def test_division_by_zero(self):
        v = Vector.of(1.0) / 0
        assert v[0] == float('inf')

    def test_reflected(self):
        assert (10 - Vector.of(1, 2)).to_list() == [9, 8]
        assert (2 * Vector.of(1.5)).to_list() == [3.0]
        assert (1 / Vector.of(4.0)).to_list() == [0.25]

    def test_negation(self):
        assert (-Vector.of(1, None)).to_list() == [-1, None]

    def test_overflow_promotes_to_long(self):
        v = Vector.of(2 ** 31 - 1) + 1
        assert v.type is vectortype.LONG
        assert v[0] == 2 ** 31

    def test_complex(self):
        v = Vector.of(1j) + 1
        assert v.type is vectortype.COMPLEX
        assert v[0] == 1 + 1j

    def test_na_scalar(self):
        assert (Vector.of(1.0, 2.0) + None).to_list() == [None, None]

    def test_non_numeric(self):
        with pytest.raises(StridedTypeError):
            Vector.of("a") + 1
        with pytest.raises(StridedTypeError):
            Vector.of(1) + Vector.of("a")
        with pytest.raises(StridedTypeError):
            Vector.of(1) + "a"

    def test_length_mismatch(self):
        with pytest.raises(NonConformantError):
            Vector.of(1, 2) + Vector.of(1)

    def test_sum_and_mean_skip_na(self):
        v = Vector.of(1.0, None, 2.0)
        assert v.sum() == 3.0
        assert v.mean() == 1.5
        assert Vector.of(1, 2, None).sum() == 3

    def test_mean_of_all_na(self):
        v = Vector.of(1.0, None).select([1])
        assert na.is_na_double(v.mean())

    def test_sum_non_numeric(self):
        with pytest.raises(StridedTypeError):
            Vector.of("a").sum()


class TestArrays:
    """Conversion to arrays"""

    def test_to_array_kind(self):
        assert isinstance(Vector.of(1.0, 2.0).to_array(), DoubleArray)
        assert isinstance(Vector.of(1, 2).to_array(), IntArray)
        assert isinstance(Vector.of(True).to_array(), BitArray)
        assert isinstance(Vector.of("a").to_array(), ReferenceArray)

    def test_to_double_array_keeps_na(self):
        a = Vector.of(1, None).to_double_array()
        assert a.get(0) == 1.0
        assert a.is_na(1)

    def test_to_bit_array_rejects_na(self):
        with pytest.raises(StridedValueError):
            Vector.of(True, None).to_bit_array()

    def test_to_matrix(self):
        m = Vector.of(1.0, 2.0, 3.0).to_matrix()
        assert m.shape == (3, 1)
        assert m.get(2, 0) == 3.0

    def test_array_from_vector(self):
        from py_strided import array
        a = array(Vector.of(1.0, 2.0))
        assert isinstance(a, DoubleArray)
        assert list(a) == [1.0, 2.0]


class TestBuildersFromVector:
    """new_builder / new_copy_builder"""

    def test_new_builder(self):
        v = Vector.of(1.0).new_builder().add(2.0).build()
        assert v.type is vectortype.DOUBLE
        assert v.to_list() == [2.0]

    def test_new_copy_builder(self):
        src = Vector.of(1, None)
        v = src.new_copy_builder().add(3).build()
        assert v.to_list() == [1, None, 3]
        assert src.to_list() == [1, None]
