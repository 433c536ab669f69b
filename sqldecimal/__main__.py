"""Allow running the calculator with ``python -m sqldecimal``."""

from sqldecimal.cli import run

run()
