"""Pytest configuration and shared fixtures for DebtSummit tests.

Provides debt factories, a fixed simulation start date, and helpers for
comparing money values without touching the user's data directory.
"""

from __future__ import annotations

import logging
from datetime import date

import pytest

from debtsummit.models import Debt

# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Point DATA_DIR at a per-test temporary directory."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("DEBTSUMMIT_DATA_DIR", str(data_dir))
    return data_dir


@pytest.fixture
def reset_package_logger():
    """Detach handlers installed by setup_logging once the test finishes."""

    yield
    logger = logging.getLogger("debtsummit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def start_date() -> date:
    """Fixed 'today' so month labels are deterministic."""

    return date(2026, 1, 15)


@pytest.fixture
def debt_factory():
    """Factory for Debt records with sensible defaults.

    Usage:
        debt = debt_factory(balance=500.0, interest_rate=10.0)
    """

    counter = {"n": 0}

    def _create(**kwargs) -> Debt:
        counter["n"] += 1
        defaults = {
            "id": f"debt-{counter['n']}",
            "name": f"Debt {counter['n']}",
            "balance": 1000.0,
            "interest_rate": 12.0,
            "minimum_payment": 50.0,
        }
        defaults.update(kwargs)
        return Debt(**defaults)

    return _create


@pytest.fixture
def sample_debts() -> list[Debt]:
    """The two starter debts shown to first-time users."""

    return [
        Debt(id="1", name="Premium Credit Card", balance=5000.0, interest_rate=22.0, minimum_payment=150.0),
        Debt(id="2", name="Car Loan", balance=12000.0, interest_rate=6.5, minimum_payment=320.0),
    ]


@pytest.fixture
def example_debts() -> list[Debt]:
    """Two debts where snowball and avalanche pick different targets."""

    return [
        Debt(id="A", name="A", balance=1000.0, interest_rate=24.0, minimum_payment=50.0),
        Debt(id="B", name="B", balance=500.0, interest_rate=10.0, minimum_payment=30.0),
    ]


# =============================================================================
# Helper Functions
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Financial calculations with floats can have small rounding differences.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (difference: {abs(actual - expected)})"
