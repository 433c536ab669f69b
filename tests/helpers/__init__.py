"""Test helpers module for shared test utilities.

- factories: shorthand constructors for Decimal literals
"""

from tests.helpers.factories import D, assert_decimal

__all__ = [
    "D",
    "assert_decimal",
]
