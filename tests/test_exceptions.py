import pytest
from py_strided import array, double_array, routines
from py_strided import DoubleBuilder, Vector
from py_strided.errors import (
    BuilderStateError,
    NonConformantError,
    StridedError,
    StridedIndexError,
    StridedTypeError,
    StridedValueError,
    UnsupportedOperationError,
)


@pytest.mark.parametrize("exc,builtin", [
    (StridedIndexError, IndexError),
    (StridedTypeError, TypeError),
    (StridedValueError, ValueError),
    (NonConformantError, ValueError),
    (UnsupportedOperationError, NotImplementedError),
    (BuilderStateError, RuntimeError),
])
def test_library_errors_are_builtin_errors(exc, builtin):
    assert issubclass(exc, StridedError)
    assert issubclass(exc, builtin)


def test_out_of_range_index_is_an_index_error():
    with pytest.raises(IndexError):
        double_array(2).get(2)


def test_non_conformant_message_names_both_shapes():
    with pytest.raises(NonConformantError, match=r"\(2,\).*\(3,\)"):
        array([1.0, 2.0]) + array([1.0, 2.0, 3.0])


def test_non_conformant_custom_message():
    err = NonConformantError((1,), (2,), "lengths differ")
    assert str(err) == "lengths differ"
    assert err.a_shape == (1,)


def test_builder_reuse_is_a_runtime_error():
    b = DoubleBuilder()
    b.build()
    with pytest.raises(RuntimeError):
        b.add(1.0)


def test_unsupported_routine_is_a_strided_error():
    with pytest.raises(StridedError):
        routines.det(double_array(2, 2))


def test_vector_type_errors_are_type_errors():
    with pytest.raises(TypeError):
        Vector.of("a") * 2
