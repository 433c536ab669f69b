"""Fixed-point decimal value type with MySQL DECIMAL semantics.

A Decimal is an arbitrary-precision signed significand paired with a signed
32-bit exponent: value = significand * 10**exponent. All arithmetic is exact
integer arithmetic on aligned significands; rounding happens only where an
operation asks for it, and always half away from zero.

Values are immutable from the caller's perspective. The single exception is
neg_in_place(), which exists for call sites that own the sole reference.

Usage:
    from sqldecimal import Decimal, new_from_string

    price = new_from_string("19.99")
    total = price.mul(Decimal.from_int(3))       # 59.97
    share = total.div(Decimal.from_int(7), 4)    # MySQL-style scale
    print(share.string_fixed(2))
"""

from __future__ import annotations

import math

import structlog

from sqldecimal.constants import (
    DIGITS_PER_WORD,
    DIVISION_PRECISION,
    INT32_MAX,
    INT32_MIN,
    INT64_MAX,
    INT64_MIN,
    LIMITS_TABLE,
    MAX_CLAMP_DIGITS,
    POW_TAB_LEN,
    UINT64_MAX,
    pow10,
)
from sqldecimal.errors import ClampRangeError, DivisionByZero, ExponentOverflow
from sqldecimal.formatting import format_decimal, int_to_digits

__all__ = [
    "Decimal",
    "rescale_pair",
    "largest_form",
]

logger = structlog.get_logger()


def _check_exponent(exp: int) -> int:
    """Validate that exp fits in a signed 32-bit integer.

    Raises:
        ExponentOverflow: If exp is outside [INT32_MIN, INT32_MAX]
    """
    if exp < INT32_MIN or exp > INT32_MAX:
        logger.error("decimal_exponent_overflow", exponent=exp)
        raise ExponentOverflow(f"exponent {exp} overflows an int32")
    return exp


def _quo_rem(a: int, b: int) -> tuple[int, int]:
    """Truncated division: quotient rounds toward zero, remainder has a's sign.

    Python's divmod floors toward -inf; decimal division needs truncation so
    that the remainder keeps the dividend's sign.
    """
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return q, a - q * b


def _round_up_to_word(digits: int) -> int:
    """Round a digit count up to a whole number of 9-digit words."""
    return -(-digits // DIGITS_PER_WORD) * DIGITS_PER_WORD


class Decimal:
    """Arbitrary-precision fixed-point decimal.

    Attributes:
        value: The signed significand (read-only)
        exponent: The power of ten applied to value (read-only)
    """

    __slots__ = ("_value", "_exp")
    _value: int
    _exp: int

    def __init__(self, value: int = 0, exp: int = 0) -> None:
        """Create a Decimal equal to value * 10**exp.

        Raises:
            TypeError: If value or exp is not an int (or is a bool)
            ExponentOverflow: If exp is outside the signed 32-bit range
        """
        # bool is an int subclass but never a significand or exponent
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Decimal requires int significand, got {type(value).__name__}")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise TypeError(f"Decimal requires int exponent, got {type(exp).__name__}")
        self._value = int(value)
        self._exp = _check_exponent(int(exp))

    # --- Construction ---

    @classmethod
    def new(cls, value: int, exp: int) -> Decimal:
        """Create from an explicit (significand, exponent) pair."""
        return cls(value, exp)

    @classmethod
    def from_int(cls, value: int) -> Decimal:
        """Create from a signed integer at exponent 0."""
        return cls(value, 0)

    @classmethod
    def from_uint(cls, value: int) -> Decimal:
        """Create from an unsigned integer at exponent 0.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError(f"Decimal.from_uint requires non-negative input, got {value}")
        return cls(value, 0)

    @classmethod
    def zero(cls) -> Decimal:
        """Canonical zero (significand 0, exponent 0)."""
        return cls(0, 0)

    def copy(self) -> Decimal:
        """Return an independent Decimal with the same significand and exponent."""
        return Decimal(self._value, self._exp)

    # --- Accessors ---

    @property
    def value(self) -> int:
        """The signed significand."""
        return self._value

    @property
    def significand(self) -> int:
        """Alias of value."""
        return self._value

    @property
    def exponent(self) -> int:
        """The exponent (negated scale)."""
        return self._exp

    def sign(self) -> int:
        """Return -1, 0 or +1."""
        if self._value > 0:
            return 1
        if self._value < 0:
            return -1
        return 0

    def is_zero(self) -> bool:
        return self._value == 0

    # --- Scaling ---

    def rescale(self, exp: int) -> Decimal:
        """Return this value at another exponent.

        Raising the exponent truncates toward zero, it never rounds.
        Lowering it multiplies by the matching power of ten.

        Example:
            Decimal(12345, -4).rescale(-1)  -> 1.2
            Decimal(12, -1).rescale(-4)     -> 1.2000
        """
        value = self._value
        if value == 0:
            return Decimal(0, exp)
        if exp > self._exp:
            value, _ = _quo_rem(value, pow10(exp - self._exp))
        elif exp < self._exp:
            value = value * pow10(self._exp - exp)
        return Decimal(value, exp)

    def truncate(self, precision: int) -> Decimal:
        """Drop digits beyond precision fractional places (precision >= 0)."""
        if precision >= 0 and -precision > self._exp:
            return self.rescale(-precision)
        return self

    def abs(self) -> Decimal:
        """Absolute value."""
        if self._value >= 0:
            return self
        return Decimal(-self._value, self._exp)

    # --- Add / Sub / Neg / Mul ---

    def add(self, other: Decimal) -> Decimal:
        """Exact sum at exponent min(exp1, exp2)."""
        rd, rd2 = rescale_pair(self, other)
        return Decimal(rd._value + rd2._value, rd._exp)

    def _sub(self, other: Decimal) -> Decimal:
        rd, rd2 = rescale_pair(self, other)
        return Decimal(rd._value - rd2._value, rd._exp)

    def sub(self, other: Decimal) -> Decimal:
        """Exact difference; an exactly zero result is canonical zero."""
        result = self._sub(other)
        if result._value == 0:
            return Decimal.zero()
        return result

    def neg(self) -> Decimal:
        """Return a sign-flipped copy."""
        return Decimal(-self._value, self._exp)

    def neg_in_place(self) -> Decimal:
        """Flip the sign of this Decimal and return it.

        Unsafe unless the caller holds the only reference: every other holder
        observes the change, and the hash of the value changes with it.
        """
        self._value = -self._value
        return self

    def _mul(self, other: Decimal) -> Decimal:
        exp = self._exp + other._exp
        if exp < INT32_MIN or exp > INT32_MAX:
            # Better to abort than to produce a wrong amount
            logger.error(
                "decimal_mul_exponent_overflow",
                left_exponent=self._exp,
                right_exponent=other._exp,
            )
            raise ExponentOverflow(f"exponent {exp} overflows an int32")
        return Decimal(self._value * other._value, exp)

    def mul(self, other: Decimal) -> Decimal:
        """Exact product at exponent exp1 + exp2.

        Zero operands short-circuit to canonical zero, so the zero path never
        trips the exponent check.

        Raises:
            ExponentOverflow: If exp1 + exp2 leaves the signed 32-bit range
        """
        if self._value == 0 or other._value == 0:
            return Decimal.zero()
        return self._mul(other)

    # --- Division ---

    def quo_rem(self, other: Decimal, precision: int) -> tuple[Decimal, Decimal]:
        """Division with remainder at a chosen scale.

        Returns (q, r) such that:
            self == other * q + r
            q is an integer multiple of 10**-precision
            0 <= |r| < |other| * 10**-precision, r has the sign of self

        precision may be negative.

        Raises:
            DivisionByZero: If other is zero
            ExponentOverflow: If the aligned exponents leave the 32-bit range
        """
        if other._value == 0:
            logger.error("decimal_division_by_zero", dividend=str(self))
            raise DivisionByZero("decimal division by 0")

        scale = _check_exponent(-precision)
        e = self._exp - other._exp - scale
        if e < INT32_MIN or e > INT32_MAX:
            logger.error("decimal_quo_rem_overflow", shift=e)
            raise ExponentOverflow("overflow in decimal quo_rem")

        # self = a * 10**ea, other = b * 10**eb
        if e < 0:
            # aa = a, bb = b * 10**(scale + eb - ea)
            aa = self._value
            bb = other._value * pow10(-e)
            scale_rest = self._exp
        else:
            # aa = a * 10**(ea - eb - scale), bb = b
            aa = self._value * pow10(e)
            bb = other._value
            scale_rest = scale + other._exp

        q, r = _quo_rem(aa, bb)
        return Decimal(q, scale), Decimal(r, scale_rest)

    def div_round(self, other: Decimal, precision: int) -> Decimal:
        """Divide and round half away from zero to precision places.

        Ties never round to even: the rounding decision compares
        2 * |r| * 10**precision against |other|.
        """
        q, r = self.quo_rem(other, precision)

        doubled = Decimal(abs(r._value) * 2, r._exp + precision)
        if doubled.cmp(other.abs()) < 0:
            return q

        step = Decimal(1, -precision)
        if self.sign() * other.sign() < 0:
            return q._sub(step)
        return q.add(step)

    def div(self, other: Decimal, scale_incr: int) -> Decimal:
        """Divide using MySQL's result-scale rule.

        Each operand's scale is padded to a whole number of 9-digit words.
        The padding counts against scale_incr (never below zero), and the
        result scale is the padded scales plus what is left of scale_incr,
        padded again. The quotient is rounded to that scale.

        Raises:
            DivisionByZero: If other is zero
        """
        if other._value == 0:
            logger.error("decimal_division_by_zero", dividend=str(self))
            raise DivisionByZero("decimal division by 0")
        if self._value == 0:
            return Decimal.zero()

        scale_left = max(-self._exp, 0)
        scale_right = max(-other._exp, 0)
        frac_left = _round_up_to_word(scale_left)
        frac_right = _round_up_to_word(scale_right)

        scale_incr -= (frac_left - scale_left) + (frac_right - scale_right)
        if scale_incr < 0:
            scale_incr = 0

        scale = _round_up_to_word(frac_left + frac_right + scale_incr)
        return self.div_round(other, scale)

    def div_default(self, other: Decimal) -> Decimal:
        """Divide, rounding to DIVISION_PRECISION fractional digits."""
        return self.div_round(other, DIVISION_PRECISION)

    def mod(self, other: Decimal) -> Decimal:
        """Remainder of self / other; the sign follows the dividend.

        The quotient is rounded to a multiple of 10**(exp - 1) before
        truncation, so a dividend whose exponent is 2 or more gets a
        quotient in multiples of ten or more:
            new_from_string("1.5e3").mod(Decimal.from_int(7))  -> 30 (not 2)

        Raises:
            DivisionByZero: If other is zero
        """
        quo = self.div_round(other, -self._exp + 1).truncate(0)
        return self._sub(other._mul(quo))

    # --- Comparison ---

    def cmp(self, other: Decimal) -> int:
        """Return -1, 0 or +1 as self is less than, equal to or greater than other."""
        if self._exp == other._exp:
            a, b = self._value, other._value
        else:
            rd, rd2 = rescale_pair(self, other)
            a, b = rd._value, rd2._value
        return (a > b) - (a < b)

    def cmp_abs(self, other: Decimal) -> int:
        """Compare magnitudes, ignoring sign."""
        if self._exp == other._exp:
            a, b = abs(self._value), abs(other._value)
        else:
            rd, rd2 = rescale_pair(self, other)
            a, b = abs(rd._value), abs(rd2._value)
        return (a > b) - (a < b)

    def equal(self, other: Decimal) -> bool:
        """Numeric equality (1.50 equals 1.5)."""
        return self.cmp(other) == 0

    def is_integer(self) -> bool:
        """True when no nonzero digit follows the decimal point."""
        if self._exp >= 0:
            return True
        value = abs(self._value)
        if value == 0:
            return True
        # Strip low digits until the first nonzero one or the decimal point
        for _ in range(-self._exp):
            value, digit = divmod(value, 10)
            if digit:
                return False
        return True

    # --- Rounding & clamp ---

    def round(self, places: int) -> Decimal:
        """Round half away from zero to places fractional digits.

        Negative places round the integral part to the nearest 10**-places.

        Example:
            new_from_string("5.45").round(1)  -> 5.5
            new_from_string("545").round(-1)  -> 550
            new_from_string("-5.45").round(1) -> -5.5
        """
        if self._exp == -places:
            return self

        # Truncate to places + 1 digits, then add sign(d) * 5 at that digit
        ret = self.rescale(-places - 1)
        value = ret._value
        if value < 0:
            value -= 5
        else:
            value += 5

        # Floor division, corrected toward zero for negative quotients
        value, remainder = divmod(value, 10)
        if value < 0 and remainder != 0:
            value += 1

        return Decimal(value, ret._exp + 1)

    def clamp(self, integral: int, fractional: int) -> Decimal:
        """Saturate to the largest magnitude with the given digit budget.

        Returns the signed limit when |self| exceeds it, otherwise self.

        Raises:
            ClampRangeError: If the digit budget is unsupported
        """
        limit = largest_form(integral, fractional)
        if self.cmp_abs(limit) <= 0:
            return self
        logger.debug(
            "decimal_clamped",
            value=str(self),
            integral=integral,
            fractional=fractional,
        )
        if self._value < 0:
            return limit.neg_in_place()
        return limit

    # --- Conversion ---

    def to_int64(self) -> tuple[int, bool]:
        """Truncate to an integer; the flag tells whether it fits in int64."""
        value = self.rescale(0)._value
        return value, INT64_MIN <= value <= INT64_MAX

    def to_uint64(self) -> tuple[int, bool]:
        """Truncate to an integer; the flag tells whether it fits in uint64."""
        value = self.rescale(0)._value
        return value, 0 <= value <= UINT64_MAX

    def to_float(self) -> tuple[float, bool]:
        """Nearest float via text; the flag is False if the result is infinite."""
        f = float(self.string())
        return f, not math.isinf(f)

    # --- Formatting ---

    def string(self) -> str:
        """Canonical text: every stored digit, nothing trimmed.

        Example:
            Decimal(-12345, -3).string() == "-12.345"
        """
        return format_decimal(self._value, self._exp, False)

    def string_fixed(self, places: int) -> str:
        """Round to places, then render exactly places fractional digits.

        Example:
            Decimal.zero().string_fixed(2) == "0.00"
            new_from_string("5.45").string_fixed(0) == "5"
            new_from_string("545").string_fixed(-1) == "550"
        """
        rounded = self.round(places)
        return format_decimal(rounded._value, rounded._exp, False)

    def string_mysql(self) -> str:
        """Wire text: trailing fractional zeros trimmed, never exponential."""
        return format_decimal(self._value, self._exp, True)

    def format_mysql(self, frac: int) -> bytes:
        """Wire bytes rounded to exactly frac fractional digits."""
        return self.string_fixed(frac).encode("ascii")

    def __str__(self) -> str:
        return self.string()

    def __repr__(self) -> str:
        sign = "-" if self._value < 0 else ""
        return f"Decimal({sign}{int_to_digits(abs(self._value))}, {self._exp})"

    def __hash__(self) -> int:
        # Strip trailing zeros so that numerically equal values hash alike
        value, exp = self._value, self._exp
        if value == 0:
            return hash((0, 0))
        while value % 10 == 0:
            value //= 10
            exp += 1
        return hash((value, exp))

    # --- Operators ---

    def __add__(self, other: Decimal | int) -> Decimal:
        return self.add(_coerce(other))

    def __radd__(self, other: int) -> Decimal:
        return _coerce(other).add(self)

    def __sub__(self, other: Decimal | int) -> Decimal:
        return self.sub(_coerce(other))

    def __rsub__(self, other: int) -> Decimal:
        return _coerce(other).sub(self)

    def __mul__(self, other: Decimal | int) -> Decimal:
        return self.mul(_coerce(other))

    def __rmul__(self, other: int) -> Decimal:
        return _coerce(other).mul(self)

    def __truediv__(self, other: Decimal | int) -> Decimal:
        """Division at DIVISION_PRECISION places."""
        return self.div_default(_coerce(other))

    def __rtruediv__(self, other: int) -> Decimal:
        return _coerce(other).div_default(self)

    def __mod__(self, other: Decimal | int) -> Decimal:
        return self.mod(_coerce(other))

    def __rmod__(self, other: int) -> Decimal:
        return _coerce(other).mod(self)

    def __neg__(self) -> Decimal:
        return self.neg()

    def __pos__(self) -> Decimal:
        return self

    def __abs__(self) -> Decimal:
        return self.abs()

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) >= 0


def _coerce(x: Decimal | int) -> Decimal:
    """Promote an int operand to Decimal."""
    if isinstance(x, Decimal):
        return x
    if isinstance(x, int):
        return Decimal(x, 0)
    raise TypeError(f"unsupported operand type for Decimal: {type(x).__name__}")


def rescale_pair(d1: Decimal, d2: Decimal) -> tuple[Decimal, Decimal]:
    """Bring two decimals to their common (smallest) exponent."""
    if d1._exp == d2._exp:
        return d1, d2

    base = min(d1._exp, d2._exp)
    if base != d1._exp:
        return d1.rescale(base), d2
    return d1, d2.rescale(base)


def largest_form(integral: int, fractional: int) -> Decimal:
    """Largest Decimal with the given integral and fractional digit counts.

    Examples:
        largest_form(1, 1) -> 9.9
        largest_form(5, 0) -> 99999
        largest_form(0, 5) -> 0.99999

    Raises:
        ClampRangeError: If a digit count is negative or the total reaches
            MAX_CLAMP_DIGITS
    """
    digits = integral + fractional
    if integral < 0 or fractional < 0:
        logger.error("decimal_clamp_negative_digits", integral=integral, fractional=fractional)
        raise ClampRangeError(f"largest_form: negative digit count ({integral}, {fractional})")
    if digits < POW_TAB_LEN:
        return Decimal(LIMITS_TABLE[digits], -fractional)
    if digits < MAX_CLAMP_DIGITS:
        return Decimal(pow10(digits) - 1, -fractional)
    logger.error("decimal_clamp_too_large", integral=integral, fractional=fractional)
    raise ClampRangeError(f"largest_form: too large ({digits} digits)")
