"""Command-line decimal calculator.

Evaluates a single binary expression with MySQL DECIMAL semantics, which is
handy when checking what the engine returns for a given column value.

Usage:
    sqldecimal 1.50 + 2.250              # 3.75
    sqldecimal 1 / 3                     # 0.333333333
    sqldecimal 10 / 4 --mode fixed --places 4
    sqldecimal 12345.678 --clamp 3 2     # 999.99

Exit codes:
    0 - Success
    1 - Invalid operand or configuration
    2 - Usage error
    3 - Fatal arithmetic error (division by zero, exponent overflow, ...)
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Callable

import structlog

from sqldecimal.config import OUTPUT_MODES, CalcConfig
from sqldecimal.errors import DecimalFatalError
from sqldecimal.parsing import new_from_string
from sqldecimal.value import Decimal

logger = structlog.get_logger()

Operator = Callable[[Decimal, Decimal, CalcConfig], Decimal]

OPERATORS: dict[str, Operator] = {
    "+": lambda a, b, _config: a.add(b),
    "-": lambda a, b, _config: a.sub(b),
    "*": lambda a, b, _config: a.mul(b),
    "/": lambda a, b, config: a.div(b, config.div_precision_increment),
    "%": lambda a, b, _config: a.mod(b),
}


def evaluate(lhs: Decimal, op: str | None, rhs: Decimal | None, config: CalcConfig) -> Decimal:
    """Apply op to the operands; a lone operand evaluates to itself.

    Raises:
        ValueError: If op is unknown or rhs is missing
        DecimalFatalError: On division by zero or exponent overflow
    """
    if op is None:
        return lhs
    if rhs is None:
        raise ValueError(f"Operator {op!r} requires a right-hand operand")
    try:
        operator = OPERATORS[op]
    except KeyError as err:
        raise ValueError(f"Unknown operator: {op!r}") from err
    return operator(lhs, rhs, config)


def render(value: Decimal, config: CalcConfig) -> str:
    """Format value in the configured output mode."""
    if config.output_mode == "canonical":
        return value.string()
    if config.output_mode == "fixed":
        return value.string_fixed(config.fixed_places)
    return value.string_mysql()


def configure_logging(verbose: bool) -> None:
    """Send structured logs to stderr; debug events only when verbose."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sqldecimal",
        description="Evaluate a decimal expression with MySQL DECIMAL semantics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sqldecimal 1.50 + 2.250
  sqldecimal 1 / 3 --scale-incr 6
  sqldecimal 5.45 --mode fixed --places 1

Environment:
  SQLDECIMAL_DIV_PRECISION_INCREMENT, SQLDECIMAL_OUTPUT_MODE,
  SQLDECIMAL_FIXED_PLACES set the defaults for the options below.
        """,
    )
    parser.add_argument("lhs", help="Left operand (accepts scientific notation)")
    parser.add_argument("op", nargs="?", choices=sorted(OPERATORS), help="Operator")
    parser.add_argument("rhs", nargs="?", help="Right operand")
    parser.add_argument(
        "--mode",
        choices=OUTPUT_MODES,
        default=None,
        help="Output mode (default: mysql)",
    )
    parser.add_argument(
        "--places",
        type=int,
        default=None,
        help="Fractional digits for --mode fixed (default: 2)",
    )
    parser.add_argument(
        "--scale-incr",
        type=int,
        default=None,
        help="Division precision increment (default: 4)",
    )
    parser.add_argument(
        "--clamp",
        nargs=2,
        type=int,
        metavar=("INTEGRAL", "FRACTIONAL"),
        default=None,
        help="Saturate the result to a DECIMAL(INTEGRAL+FRACTIONAL, FRACTIONAL) budget",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.op is not None and args.rhs is None:
        parser.error(f"operator {args.op!r} requires a right-hand operand")

    configure_logging(args.verbose)

    overrides: dict[str, object] = {}
    if args.mode is not None:
        overrides["output_mode"] = args.mode
    if args.places is not None:
        overrides["fixed_places"] = args.places
    if args.scale_incr is not None:
        overrides["div_precision_increment"] = args.scale_incr

    try:
        config = dataclasses.replace(CalcConfig.from_env(), **overrides)
        lhs = new_from_string(args.lhs)
        rhs = new_from_string(args.rhs) if args.rhs is not None else None
    except ValueError as err:
        # DecimalParseError is a ValueError
        print(f"Error: {err}", file=sys.stderr)
        return 1

    try:
        result = evaluate(lhs, args.op, rhs, config)
        if args.clamp is not None:
            result = result.clamp(*args.clamp)
        output = render(result, config)
    except DecimalFatalError as err:
        logger.error("calculation_aborted", error=str(err), error_type=type(err).__name__)
        print(f"Error: {err}", file=sys.stderr)
        return 3

    logger.debug(
        "calculation_done",
        lhs=args.lhs,
        op=args.op,
        rhs=args.rhs,
        result=output,
    )
    print(output)
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
