"""Numeric constants for the decimal engine.

Centralizes exponent bounds, precomputed power-of-ten tables and the
MySQL-compatible precision parameters. The tables are immutable tuples built
once at import time and shared by every Decimal operation.
"""

from __future__ import annotations

__all__ = [
    # Exponent bounds
    "INT32_MIN",
    "INT32_MAX",
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    # Tables
    "POW_TAB_LEN",
    "POW10_TABLE",
    "LIMITS_TABLE",
    "pow10",
    # Precision parameters
    "DIVISION_PRECISION",
    "DIGITS_PER_WORD",
    "MAX_FAST_PARSE_LEN",
    "MAX_CLAMP_DIGITS",
    "MAX_STR_CHUNK_DIGITS",
]

# =============================================================================
# Bounds
# =============================================================================

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1

# =============================================================================
# Precomputed tables
# =============================================================================

POW_TAB_LEN = 20

# POW10_TABLE[n] == 10**n
POW10_TABLE: tuple[int, ...] = tuple(10**n for n in range(POW_TAB_LEN))

# LIMITS_TABLE[n] is the largest significand with n digits (n nines)
LIMITS_TABLE: tuple[int, ...] = tuple(10**n - 1 for n in range(POW_TAB_LEN))


def pow10(n: int) -> int:
    """Return 10**n for a non-negative n, using the table when possible."""
    if n < POW_TAB_LEN:
        return POW10_TABLE[n]
    # Start from the largest tabulated power
    return POW10_TABLE[POW_TAB_LEN - 1] * 10 ** (n - (POW_TAB_LEN - 1))


# =============================================================================
# Precision parameters (matching MySQL)
# =============================================================================

# Fractional digits kept by division when no explicit scale is requested.
# Historical constant shared with the consuming system; not a setting.
DIVISION_PRECISION = 16

# MySQL stores decimals in base-10^9 words; result scales are padded to this
DIGITS_PER_WORD = 9

# Unsigned inputs up to this length take the 64-bit accumulation path
MAX_FAST_PARSE_LEN = 18

# Clamp limits are only synthesized below this many total digits
MAX_CLAMP_DIGITS = 350

# Longest digit run converted with a single int()/str() call; the interpreter
# refuses conversions past 4300 digits by default
MAX_STR_CHUNK_DIGITS = 4000
