"""Pytest configuration and fixtures."""

import pytest
import structlog

from sqldecimal import Decimal


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test (e.g. the CLI) installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def zero() -> Decimal:
    """Canonical zero."""
    return Decimal.zero()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove SQLDECIMAL_* settings inherited from the shell."""
    for name in (
        "SQLDECIMAL_DIV_PRECISION_INCREMENT",
        "SQLDECIMAL_OUTPUT_MODE",
        "SQLDECIMAL_FIXED_PLACES",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
