"""Exact fixed-point decimals with MySQL DECIMAL semantics.

This package provides:
- Decimal: arbitrary-precision significand with a 32-bit exponent
- Parsers for wire text and scientific notation
- Half-away-from-zero rounding, saturating clamp, and three text formats
"""

from sqldecimal.constants import DIVISION_PRECISION
from sqldecimal.errors import (
    ClampRangeError,
    DecimalError,
    DecimalFatalError,
    DecimalParseError,
    DivisionByZero,
    ExponentOverflow,
    InvalidLiteral,
)
from sqldecimal.parsing import (
    new_from_float,
    new_from_mysql,
    new_from_string,
    require_from_string,
)
from sqldecimal.value import Decimal, largest_form, rescale_pair

__all__ = [
    # Classes
    "Decimal",
    # Parsing
    "new_from_mysql",
    "new_from_string",
    "require_from_string",
    "new_from_float",
    # Helpers
    "rescale_pair",
    "largest_form",
    # Errors
    "DecimalError",
    "DecimalParseError",
    "DecimalFatalError",
    "ExponentOverflow",
    "DivisionByZero",
    "ClampRangeError",
    "InvalidLiteral",
    # Constants
    "DIVISION_PRECISION",
]
