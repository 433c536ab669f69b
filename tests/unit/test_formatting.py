"""Tests for the three text formats."""

import pytest

from sqldecimal import Decimal
from sqldecimal.formatting import digits_to_int, format_decimal, int_to_digits
from tests.helpers import D


class TestFormatDecimal:
    """Tests for the raw formatter."""

    @pytest.mark.parametrize(
        "value,exp,trim,expected",
        [
            (-12345, -3, False, "-12.345"),
            (15, 2, False, "1500"),
            (0, 3, False, "0"),
            (5, -3, False, "0.005"),
            (-5, -3, False, "-0.005"),
            (0, -2, False, "0.00"),
            (1200, -3, False, "1.200"),
            (1200, -3, True, "1.2"),
            (1000, -3, True, "1"),
            (-1000, -3, True, "-1"),
            (0, -2, True, "0"),
            (-10, -3, True, "-0.01"),
            (15, 2, True, "1500"),
        ],
    )
    def test_format(self, value, exp, trim, expected):
        assert format_decimal(value, exp, trim) == expected


class TestCanonical:
    """Tests for str() / string()."""

    def test_canonical(self):
        d = Decimal(-12345, -3)
        assert d.string() == "-12.345"
        assert str(d) == "-12.345"

    def test_keeps_stored_digits(self):
        """Trailing zeros are not trimmed."""
        assert Decimal(12300, -3).string() == "12.300"

    def test_positive_exponent_is_integral(self):
        assert Decimal(5, 3).string() == "5000"
        assert Decimal(-5, 1).string() == "-50"

    def test_never_exponential(self):
        assert Decimal(1, -20).string() == "0.00000000000000000001"
        assert Decimal(1, 25).string() == "1" + "0" * 25

    def test_repr(self):
        assert repr(Decimal(-12345, -3)) == "Decimal(-12345, -3)"


class TestStringFixed:
    """Tests for fixed-places output."""

    @pytest.mark.parametrize(
        "text,places,expected",
        [
            ("0", 2, "0.00"),
            ("0", 0, "0"),
            ("5.45", 0, "5"),
            ("5.45", 1, "5.5"),
            ("5.45", 2, "5.45"),
            ("5.45", 3, "5.450"),
            ("545", -1, "550"),
            ("-0.001", 2, "0.00"),
            ("-1.005", 2, "-1.01"),
            ("1.50", 4, "1.5000"),
        ],
    )
    def test_string_fixed(self, text, places, expected):
        assert D(text).string_fixed(places) == expected

    def test_zero_fixed(self, zero):
        assert zero.string_fixed(2) == "0.00"

    def test_format_mysql_bytes(self):
        assert D("1.005").format_mysql(2) == b"1.01"
        assert D("7").format_mysql(3) == b"7.000"
        assert D("7.5").format_mysql(0) == b"8"


class TestStringMySQL:
    """Tests for wire-style output."""

    @pytest.mark.parametrize(
        "d,expected",
        [
            (Decimal(12300, -3), "12.3"),
            (Decimal(1000, -3), "1"),
            (Decimal(0, -4), "0"),
            (Decimal(-50, -2), "-0.5"),
            (Decimal(5, 3), "5000"),
            (Decimal(1, -20), "0.00000000000000000001"),
            (Decimal(-12345, -3), "-12.345"),
        ],
    )
    def test_string_mysql(self, d, expected):
        assert d.string_mysql() == expected


class TestLongSignificands:
    """Tests for values past the interpreter's int/str digit limit."""

    def test_int_to_digits(self):
        assert int_to_digits(0) == "0"
        assert int_to_digits(10**5000) == "1" + "0" * 5000
        # Inner zero runs survive the split
        assert int_to_digits(10**4500 + 7) == "1" + "0" * 4499 + "7"

    def test_digits_to_int(self):
        assert digits_to_int("9" * 5000) == 10**5000 - 1
        assert digits_to_int("0" * 4999 + "1") == 1

    def test_digit_string_survives_conversion(self):
        text = "1234567890" * 900
        assert int_to_digits(digits_to_int(text)) == text

    def test_large_positive_exponent(self):
        d = Decimal(1, 5000)
        assert d.string() == "1" + "0" * 5000
        assert d.string_mysql() == "1" + "0" * 5000
        assert d.string_fixed(2) == "1" + "0" * 5000 + ".00"
        assert Decimal(-3, 4400).string() == "-3" + "0" * 4400

    def test_long_fraction(self):
        d = Decimal(10**5000 + 5, -5000)
        assert d.string() == "1." + "0" * 4999 + "5"
        assert Decimal(-(10**5000), -5000).string_mysql() == "-1"

    def test_repr(self):
        assert repr(Decimal(-(10**5000), 0)) == "Decimal(-1" + "0" * 5000 + ", 0)"
