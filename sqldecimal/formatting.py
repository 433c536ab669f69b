"""Decimal to text conversion.

Works on the raw (significand, exponent) pair so the value type can delegate
here without an import cycle. Output never uses exponential notation.

Significands of any length are supported: digit strings longer than
MAX_STR_CHUNK_DIGITS are split and converted piecewise, so the interpreter's
int/str conversion limit never applies.
"""

from __future__ import annotations

from sqldecimal.constants import MAX_STR_CHUNK_DIGITS, pow10

_CHUNK_LIMIT = pow10(MAX_STR_CHUNK_DIGITS)


def int_to_digits(n: int) -> str:
    """Decimal digits of a non-negative integer of any size."""
    if n < _CHUNK_LIMIT:
        return str(n)
    # Lower bound on the digit count: bit_length * log10(2)
    half = n.bit_length() * 30103 // 100000 // 2
    hi, lo = divmod(n, pow10(half))
    return int_to_digits(hi) + int_to_digits(lo).zfill(half)


def digits_to_int(digits: str) -> int:
    """Integer value of an unsigned run of ASCII digits of any length."""
    if len(digits) <= MAX_STR_CHUNK_DIGITS:
        return int(digits)
    half = len(digits) // 2
    return digits_to_int(digits[:-half]) * pow10(half) + digits_to_int(digits[-half:])


def format_decimal(value: int, exp: int, trim_trailing_zeros: bool) -> str:
    """Render value * 10**exp in fixed-point notation.

    Args:
        value: Signed significand
        exp: Exponent
        trim_trailing_zeros: Drop trailing zeros of the fractional part
            (and the dot if nothing is left)

    Returns:
        The decimal text

    Examples:
        format_decimal(-12345, -3, False) == "-12.345"
        format_decimal(15, 2, False) == "1500"
        format_decimal(5, -3, False) == "0.005"
        format_decimal(1200, -3, True) == "1.2"
    """
    raw = int_to_digits(abs(value))
    sign = "-" if value < 0 else ""

    if exp >= 0:
        if value == 0:
            return "0"
        return f"{sign}{raw}{'0' * exp}"

    frac_len = -exp

    if len(raw) > frac_len:
        integral_part = raw[: len(raw) - frac_len]
        fractional_part = raw[len(raw) - frac_len :]
    else:
        integral_part = "0"
        fractional_part = "0" * (frac_len - len(raw)) + raw

    if trim_trailing_zeros:
        fractional_part = fractional_part.rstrip("0")

    if fractional_part:
        return f"{sign}{integral_part}.{fractional_part}"
    return f"{sign}{integral_part}"
