"""Value resolution and data entry cursors"""
from datetime import date, datetime
from decimal import Decimal
from fractions import Fraction

import pytest

from py_strided import na
from py_strided import resolver
from py_strided.entry import StringDataEntry
from py_strided.errors import StridedIndexError
from py_strided.na import Logical
from py_strided.resolver import Resolver


class TestResolver:
    """A single resolver"""

    def test_exact_class(self):
        r = Resolver(int).put(str, int)
        assert r.resolve("12") == 12

    def test_failed_conversion_is_none(self):
        r = Resolver(int).put(str, int)
        assert r.resolve("x") is None

    def test_none_passes_through(self):
        assert Resolver(int).put(str, int).resolve(None) is None

    def test_no_converter(self):
        assert Resolver(int).put(str, int).resolve(1.5) is None

    def test_subclass_falls_back(self):
        class Name(str):
            pass
        r = Resolver(str).put(str, str.upper)
        assert r.resolve(Name("ab")) == "AB"

    def test_put_is_chainable(self):
        r = Resolver(float).put(int, float).put(str, float)
        assert r.converter(int) is float
        assert "int" in repr(r)


class TestRegistry:
    """Process-wide resolvers keyed by target class"""

    @pytest.mark.parametrize("target,value,expected", [
        (float, "2.5", 2.5),
        (float, 3, 3.0),
        (int, "7", 7),
        (int, 7.9, 7),
        (int, True, 1),
        (str, 12, "12"),
        (bool, "yes", True),
        (bool, 0, False),
        (complex, "1+2j", 1 + 2j),
        (complex, 2, 2 + 0j),
        (Logical, "F", Logical.FALSE),
        (date, "2024-05-06", date(2024, 5, 6)),
        (date, datetime(2024, 5, 6, 12, 30), date(2024, 5, 6)),
        (float, Decimal("2.5"), 2.5),
        (float, Fraction(3, 4), 0.75),
        (int, Fraction(7, 2), 3),
        (bool, Decimal("0"), False),
        (complex, Decimal("1.5"), 1.5 + 0j),
    ])
    def test_to(self, target, value, expected):
        assert resolver.to(target, value) == expected

    @pytest.mark.parametrize("target,value", [
        (int, 2 ** 40),
        (int, "1.5"),
        (bool, Logical.NA),
        (date, "yesterday"),
    ])
    def test_to_fails(self, target, value):
        assert resolver.to(target, value) is None

    def test_unregistered_target(self):
        class Thing:
            pass
        t = Thing()
        assert resolver.to(Thing, t) is t
        assert resolver.to(Thing, 1) is None

    def test_install_replaces(self):
        class Celsius(float):
            pass
        resolver.install(Resolver(Celsius).put(str, lambda s: Celsius(s.rstrip("C"))))
        assert resolver.to(Celsius, "21.5C") == 21.5
        assert resolver.find(Celsius) is not None


class TestCoercions:
    """Total conversions used by builders"""

    @pytest.mark.parametrize("fn,value,expected", [
        (resolver.coerce_double, "1.5", 1.5),
        (resolver.coerce_int, 4.2, 4),
        (resolver.coerce_long, "12", 12),
        (resolver.coerce_long, 2 ** 40, 2 ** 40),
        (resolver.coerce_long, 3.0, 3),
        (resolver.coerce_long, Logical.TRUE, 1),
        (resolver.coerce_logical, 1, Logical.TRUE),
        (resolver.coerce_complex, 1.0, 1 + 0j),
        (resolver.coerce_long, Fraction(9, 2), 4),
    ])
    def test_converted(self, fn, value, expected):
        assert fn(value) == expected

    def test_double_na(self):
        assert na.is_na_double(resolver.coerce_double("x"))
        assert na.is_na_double(resolver.coerce_double(None))
        assert na.is_na_double(resolver.coerce_double(na.INT))

    def test_int_na(self):
        assert resolver.coerce_int(None) == na.INT
        assert resolver.coerce_int(na.DOUBLE) == na.INT
        assert resolver.coerce_int([1]) == na.INT

    def test_long_na(self):
        assert resolver.coerce_long(None) == na.LONG
        assert resolver.coerce_long("x") == na.LONG
        assert resolver.coerce_long(na.DOUBLE) == na.LONG
        assert resolver.coerce_long(Logical.NA) == na.LONG

    def test_logical_na(self):
        assert resolver.coerce_logical("maybe") is Logical.NA
        assert resolver.coerce_logical(float('nan')) is Logical.NA

    def test_complex_na(self):
        assert na.is_na_complex(resolver.coerce_complex(None))
        assert na.is_na_complex(resolver.coerce_complex(na.DOUBLE))


class TestStringDataEntry:
    """Forward-only cursor over strings"""

    def test_typed_reads(self):
        e = StringDataEntry(["1.5", "2", "3", "true", "1+1j", "x"])
        assert e.next_double() == 1.5
        assert e.next_int() == 2
        assert e.next_long() == 3
        assert e.next_logical() is Logical.TRUE
        assert e.next_complex() == 1 + 1j
        assert e.next_string() == "x"
        assert not e.has_next()

    @pytest.mark.parametrize("marker", ["NA", "?", "", "  NA  ", None])
    def test_default_markers(self, marker):
        e = StringDataEntry([marker])
        assert e.next_string() is None

    def test_missing_reads_as_kind_na(self):
        e = StringDataEntry(["NA", "NA", "NA"])
        assert na.is_na_double(e.next_double())
        assert e.next_int() == na.INT
        assert e.next_logical() is Logical.NA

    def test_custom_markers(self):
        e = StringDataEntry(["-", "NA"], na_markers=["-"])
        assert e.next_string() is None
        assert e.next_string() == "NA"

    def test_unparseable_is_na(self):
        assert StringDataEntry(["abc"]).next_int() == na.INT

    def test_exhausted(self):
        e = StringDataEntry(["1"])
        e.next_string()
        with pytest.raises(StridedIndexError):
            e.next_string()

    def test_len_and_repr(self):
        e = StringDataEntry(["a", "b"])
        e.next_string()
        assert len(e) == 2
        assert repr(e) == "StringDataEntry(position=1, size=2)"
