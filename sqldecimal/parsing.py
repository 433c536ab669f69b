"""Decimal parsing.

Two grammars:
- new_from_mysql: the wire/column format, [+|-]digits[.digits]
- new_from_string: the same plus an optional (e|E)[+|-]digits exponent

Short wire inputs are accumulated in an unsigned 64-bit range digit by digit;
anything longer, or anything that would overflow, goes through the
arbitrary-precision path.
"""

from __future__ import annotations

import math
import re

import structlog

from sqldecimal.constants import INT32_MAX, INT32_MIN, MAX_FAST_PARSE_LEN, UINT64_MAX
from sqldecimal.errors import DecimalParseError, InvalidLiteral
from sqldecimal.formatting import digits_to_int
from sqldecimal.value import Decimal

__all__ = [
    "new_from_mysql",
    "new_from_string",
    "require_from_string",
    "new_from_float",
]

logger = structlog.get_logger()

_DIGITS = re.compile(rb"[0-9]+")
_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+")
_EXPONENT_MARK = re.compile(r"[eE]")

# n * 10 overflows uint64 once n reaches this
_CUTOFF = UINT64_MAX // 10 + 1

_DOT = ord(".")
_ZERO = ord("0")
_NINE = ord("9")


def _parse_error(text: str, reason: str | None = None) -> DecimalParseError:
    """Build (and log) a parse error for text."""
    logger.debug("decimal_parse_failed", text=text, reason=reason)
    return DecimalParseError(text, reason)


def _signed_digits_to_int(text: str) -> int:
    """Integer value of [+|-]digits, already validated."""
    if text[:1] in ("+", "-"):
        magnitude = digits_to_int(text[1:])
        return -magnitude if text[0] == "-" else magnitude
    return digits_to_int(text)


def _parse_decimal64(s: bytes, original: str) -> Decimal | None:
    """Parse unsigned digits[.digits] by 64-bit accumulation.

    Returns None if the digit run does not fit in a uint64.

    Raises:
        DecimalParseError: On a stray character, a second dot or no digits
    """
    n = 0
    dot = -1
    digits = 0

    for i, c in enumerate(s):
        if c == _DOT:
            if dot > -1:
                raise _parse_error(original, "too many .s")
            dot = i
            continue
        if not _ZERO <= c <= _NINE:
            raise _parse_error(original, f"unexpected character {chr(c)!r}")

        if n >= _CUTOFF:
            return None
        n = n * 10 + (c - _ZERO)
        if n > UINT64_MAX:
            return None
        digits += 1

    if digits == 0:
        raise _parse_error(original, "no digits")

    exp = 0
    if dot != -1:
        exp = -(len(s) - dot - 1)
    return Decimal(n, exp)


def new_from_mysql(text: bytes | str) -> Decimal:
    """Parse a decimal in wire format: [+|-]digits[.digits].

    Trailing zeros are kept: "1.50" has exponent -2.

    Args:
        text: ASCII bytes (or str) as sent by the server

    Returns:
        Parsed Decimal

    Raises:
        DecimalParseError: If text does not match the grammar
    """
    if isinstance(text, str):
        original = text
        try:
            s = text.encode("ascii")
        except UnicodeEncodeError as err:
            raise _parse_error(original, "non-ASCII input") from err
    else:
        s = bytes(text)
        original = s.decode("ascii", errors="replace")

    neg = False
    if s[:1] == b"+":
        s = s[1:]
    elif s[:1] == b"-":
        neg = True
        s = s[1:]

    if not s:
        raise _parse_error(original, "too short")

    if len(s) <= MAX_FAST_PARSE_LEN:
        dec = _parse_decimal64(s, original)
        if dec is not None:
            # Freshly built, nobody else holds it
            return dec.neg_in_place() if neg else dec
        logger.debug("decimal_parse_fast_path_overflow", text=original)

    p_index = s.find(b".")
    if p_index >= 0:
        if s.find(b".", p_index + 1) != -1:
            raise _parse_error(original, "too many .s")
        int_string = s[:p_index] + s[p_index + 1 :]
        exp = -(len(s) - p_index - 1)
    else:
        int_string = s
        exp = 0

    if not _DIGITS.fullmatch(int_string):
        raise _parse_error(original)

    value = digits_to_int(int_string.decode("ascii"))
    if neg:
        value = -value
    return Decimal(value, exp)


def new_from_string(value: str) -> Decimal:
    """Parse a decimal with an optional scientific-notation exponent.

    Trailing zeros are kept.

    Examples:
        new_from_string("-123.45")  -> Decimal(-12345, -2)
        new_from_string(".0001")    -> Decimal(1, -4)
        new_from_string("1.47000")  -> Decimal(147000, -5)
        new_from_string("1.5e3")    -> Decimal(15, 2)

    Raises:
        DecimalParseError: If value is malformed or its exponent leaves the
            signed 32-bit range
    """
    original = value
    exp = 0

    mark = _EXPONENT_MARK.search(value)
    if mark is not None:
        token = value[mark.start() + 1 :]
        if not _SIGNED_DIGITS.fullmatch(token):
            raise _parse_error(original, "exponent is not numeric")
        exp = _signed_digits_to_int(token)
        if exp < INT32_MIN or exp > INT32_MAX:
            raise _parse_error(original, "exponent out of range")
        value = value[: mark.start()]

    p_index = value.find(".")
    if p_index != -1:
        if value.find(".", p_index + 1) != -1:
            raise _parse_error(original, "too many .s")
        int_string = value[:p_index] + value[p_index + 1 :]
        exp -= len(value) - p_index - 1
    else:
        int_string = value

    if not _SIGNED_DIGITS.fullmatch(int_string):
        raise _parse_error(original)

    if exp < INT32_MIN or exp > INT32_MAX:
        raise _parse_error(original, "fractional part too long")

    return Decimal(_signed_digits_to_int(int_string), exp)


def require_from_string(value: str) -> Decimal:
    """Parse a compiled-in literal; failure is a programming error.

    Never use this on user input.

    Raises:
        InvalidLiteral: If value does not parse
    """
    try:
        return new_from_string(value)
    except DecimalParseError as err:
        logger.error("decimal_invalid_literal", text=value)
        raise InvalidLiteral(str(err)) from err


def new_from_float(value: float) -> Decimal:
    """Convert a float through its shortest round-tripping text.

    Raises:
        ValueError: If value is NaN or infinite
    """
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"cannot convert {value} to Decimal")
    if value == 0:
        return Decimal.zero()

    text = repr(float(value))
    # Shortest repr never has trailing fractional zeros except "X.0"
    if text.endswith(".0"):
        text = text[:-2]
    return new_from_string(text)
