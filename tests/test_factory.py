"""Array construction"""
import pytest

from py_strided import na
from py_strided import arange, array, diag, eye, full, linspace, new_array, ones, zeros
from py_strided import bit_array, complex_array, double_array, long_array, reference_array
from py_strided.array import BitArray
from py_strided.array import ComplexArray
from py_strided.array import DoubleArray
from py_strided.array import IntArray
from py_strided.array import LongArray
from py_strided.array import ReferenceArray
from py_strided.errors import StridedTypeError
from py_strided.errors import StridedValueError
from py_strided.factory import ArrayFactory


class TestAllocation:
    """Zero-filled arrays of each kind"""

    @pytest.mark.parametrize("make,cls,fill", [
        (double_array, DoubleArray, 0.0),
        (long_array, LongArray, 0),
        (bit_array, BitArray, False),
        (complex_array, ComplexArray, 0j),
        (reference_array, ReferenceArray, None),
    ])
    def test_kinds(self, make, cls, fill):
        a = make(2, 2)
        assert isinstance(a, cls)
        assert a.shape == (2, 2)
        assert all(x == fill for x in a)
        assert not a.is_view()

    def test_new_array_by_name(self):
        a = new_array("int", 3)
        assert isinstance(a, IntArray)
        assert a.shape == (3,)

    def test_tuple_shape(self):
        assert double_array((2, 3)).shape == (2, 3)

    @pytest.mark.parametrize("shape", [(0,), (2, 0), (-1, 3)])
    def test_shape_must_be_positive(self, shape):
        with pytest.raises(StridedValueError):
            double_array(*shape)

    def test_no_dimensions(self):
        with pytest.raises(StridedValueError):
            double_array()


class TestFromData:
    """array() from nested sequences"""

    def test_row_major_reading(self):
        a = array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        assert a.shape == (2, 3)
        assert a.get(0, 1) == 2.0
        assert a.get(1, 0) == 4.0
        # stored column-major
        assert a.to_list() == [1.0, 4.0, 2.0, 5.0, 3.0, 6.0]

    def test_three_dimensional(self):
        data = [[[1, 2], [3, 4]], [[5, 6], [7, 8]]]
        a = array(data)
        assert a.shape == (2, 2, 2)
        assert a.get(1, 0, 1) == 6

    @pytest.mark.parametrize("data,cls", [
        ([1, 2], IntArray),
        ([1, 2 ** 40], LongArray),
        ([1, 2.5], DoubleArray),
        ([True, False], BitArray),
        ([1j], ComplexArray),
        (["a", "b"], ReferenceArray),
    ])
    def test_kind_inference(self, data, cls):
        assert isinstance(array(data), cls)

    def test_explicit_kind(self):
        a = array([1, 2], "double")
        assert isinstance(a, DoubleArray)
        assert list(a) == [1.0, 2.0]

    def test_none_becomes_na(self):
        a = array([1.5, None])
        assert a.is_na(1)

    def test_strings_are_scalars(self):
        a = array(["ab", "cd"])
        assert a.shape == (2,)

    def test_ragged(self):
        with pytest.raises(StridedValueError):
            array([[1, 2], [3]])

    def test_too_deep(self):
        with pytest.raises(StridedValueError):
            array([[1, 2], [3, [4]]])

    def test_empty(self):
        with pytest.raises(StridedValueError):
            array([])

    def test_not_a_sequence(self):
        with pytest.raises(StridedTypeError):
            array(42)

    def test_copy_of_array(self):
        src = array([1.0, 2.0])
        out = array(src)
        assert out == src
        assert not out.shares_storage(src)

    def test_convert_array_kind(self):
        out = array(array([[1, 2], [3, 4]]), "double")
        assert isinstance(out, DoubleArray)
        assert out.get(0, 1) == 2.0


class TestFilled:
    """zeros / ones / full / eye / diag"""

    def test_zeros_ones(self):
        assert list(zeros(3)) == [0.0, 0.0, 0.0]
        assert list(ones(2, 2)) == [1.0] * 4

    def test_full(self):
        a = full(7, 2, 3)
        assert isinstance(a, IntArray)
        assert a.shape == (2, 3)
        assert set(a) == {7}

    def test_full_reference(self):
        a = full("x", 2)
        assert isinstance(a, ReferenceArray)
        assert list(a) == ["x", "x"]

    def test_eye(self):
        i = eye(3)
        assert i.get(0, 0) == 1.0
        assert i.get(0, 1) == 0.0
        assert i.sum() == 3.0

    def test_diag_from_vector(self):
        d = diag(array([1, 2, 3]))
        assert isinstance(d, IntArray)
        assert d.shape == (3, 3)
        assert d.get(2, 2) == 3
        assert d.get(0, 2) == 0

    def test_diag_from_matrix(self):
        m = array([[1.0, 2.0], [3.0, 4.0]])
        d = diag(m)
        assert list(d) == [1.0, 4.0]
        assert not d.is_view()

    def test_diag_rejects_higher_dimensions(self):
        with pytest.raises(StridedValueError):
            diag(double_array(2, 2, 2))


class TestRanges:
    """arange / linspace"""

    def test_arange(self):
        a = arange(5)
        assert isinstance(a, IntArray)
        assert list(a) == [0, 1, 2, 3, 4]

    def test_arange_start_step(self):
        assert list(arange(2, 10, 3)) == [2, 5, 8]
        assert list(arange(3, 0, -1)) == [3, 2, 1]

    def test_arange_float(self):
        a = arange(0.0, 1.0, 0.25)
        assert isinstance(a, DoubleArray)
        assert list(a) == [0.0, 0.25, 0.5, 0.75]

    def test_arange_wide(self):
        a = arange(2 ** 40, 2 ** 40 + 2)
        assert isinstance(a, LongArray)

    @pytest.mark.parametrize("args", [(0, 5, 0), (5, 0), (0,)])
    def test_arange_invalid(self, args):
        with pytest.raises(StridedValueError):
            arange(*args)

    def test_linspace(self):
        a = linspace(0.0, 1.0, 5)
        assert list(a) == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_linspace_single_point(self):
        assert list(linspace(2.0, 9.0, 1)) == [2.0]

    def test_linspace_endpoint_exact(self):
        assert linspace(0.0, 0.3, 4).get(3) == 0.3

    def test_linspace_invalid(self):
        with pytest.raises(StridedValueError):
            linspace(0.0, 1.0, 0)


class TestFactoryInstance:
    """ArrayFactory is usable on its own"""

    def test_instance(self):
        f = ArrayFactory()
        a = f.array([1.0, 2.0])
        assert a.sum() == 3.0
        assert na.is_na_double(f.array([None, 1.0]).get(0))
