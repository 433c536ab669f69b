"""Calculator configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

OUTPUT_MODES = ("mysql", "canonical", "fixed")


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from err


@dataclass(frozen=True)
class CalcConfig:
    """Settings for evaluating and rendering decimal expressions.

    Attributes:
        div_precision_increment: Digits added to the dividend's scale by
            division (MySQL's div_precision_increment, default: 4)
        output_mode: "mysql" (trailing zeros trimmed), "canonical" (stored
            digits) or "fixed" (rounded to fixed_places)
        fixed_places: Fractional digits in "fixed" mode (default: 2)
    """

    div_precision_increment: int = 4
    output_mode: str = "mysql"
    fixed_places: int = 2

    def __post_init__(self) -> None:
        if self.output_mode not in OUTPUT_MODES:
            raise ValueError(
                f"Invalid output mode: {self.output_mode!r} (expected one of {', '.join(OUTPUT_MODES)})"
            )
        if not 0 <= self.div_precision_increment <= 30:
            raise ValueError(
                f"div_precision_increment must be in [0, 30], got {self.div_precision_increment}"
            )

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> CalcConfig:
        """Build a config from SQLDECIMAL_* environment variables.

        - SQLDECIMAL_DIV_PRECISION_INCREMENT (default: 4)
        - SQLDECIMAL_OUTPUT_MODE (default: mysql)
        - SQLDECIMAL_FIXED_PLACES (default: 2)

        Raises:
            ValueError: If a variable holds an invalid value
        """
        if env is None:
            env = os.environ
        return cls(
            div_precision_increment=_env_int(
                env, "SQLDECIMAL_DIV_PRECISION_INCREMENT", cls.div_precision_increment
            ),
            output_mode=env.get("SQLDECIMAL_OUTPUT_MODE") or cls.output_mode,
            fixed_places=_env_int(env, "SQLDECIMAL_FIXED_PLACES", cls.fixed_places),
        )


# Default configuration instance
DEFAULT_CALC_CONFIG = CalcConfig()
