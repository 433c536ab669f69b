"""Decimal error classes.

Two tiers:
- DecimalParseError is recoverable: malformed text, the caller decides
  whether to reject the row or statement.
- DecimalFatalError and its subclasses abort the operation. A silently wrong
  numeric result is worse than stopping, so callers must let these propagate.
"""

from __future__ import annotations


class DecimalError(Exception):
    """Base error for decimal operations."""

    pass


class DecimalParseError(DecimalError, ValueError):
    """Text could not be converted to a Decimal.

    Attributes:
        text: The original input, decoded for display
        reason: Short description of what was wrong, or None
    """

    def __init__(self, text: str, reason: str | None = None) -> None:
        self.text = text
        self.reason = reason
        if reason:
            message = f"can't convert {text!r} to decimal: {reason}"
        else:
            message = f"can't convert {text!r} to decimal"
        super().__init__(message)


class DecimalFatalError(DecimalError, ArithmeticError):
    """Unrecoverable arithmetic condition. Never catch and ignore."""

    pass


class ExponentOverflow(DecimalFatalError):
    """Exponent left the signed 32-bit range."""

    pass


class DivisionByZero(DecimalFatalError):
    """Division or modulo by a zero Decimal."""

    pass


class ClampRangeError(DecimalFatalError):
    """Clamp digit budget is negative or beyond the supported ceiling."""

    pass


class InvalidLiteral(DecimalFatalError):
    """A compiled-in decimal literal failed to parse."""

    pass
