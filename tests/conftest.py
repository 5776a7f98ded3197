"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from expense_splitter.core import config as config_module
from expense_splitter.core.models import Expense, ExpenseShare


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def dinner_expense() -> Expense:
    """$90.00 dinner in group 1, paid by alice."""
    return Expense(
        id=1,
        group_id=1,
        paid_by_user_id="alice",
        description="Dinner",
        amount=Decimal("90.00"),
        category="Food",
    )


@pytest.fixture
def cab_expense() -> Expense:
    """$30.00 cab ride in group 1, paid by bob."""
    return Expense(
        id=2,
        group_id=1,
        paid_by_user_id="bob",
        description="Cab",
        amount=Decimal("30.00"),
        category="Transport",
    )


@pytest.fixture
def group_shares() -> list[ExpenseShare]:
    """Equal three-way shares of the dinner and cab expenses, all unpaid."""
    return [
        ExpenseShare(1, "alice", Decimal("30.00"), Decimal("33.33")),
        ExpenseShare(1, "bob", Decimal("30.00"), Decimal("33.33")),
        ExpenseShare(1, "carol", Decimal("30.00"), Decimal("33.34")),
        ExpenseShare(2, "alice", Decimal("10.00"), Decimal("33.33")),
        ExpenseShare(2, "bob", Decimal("10.00"), Decimal("33.33")),
        ExpenseShare(2, "carol", Decimal("10.00"), Decimal("33.34")),
    ]


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables and a fresh configuration."""
    monkeypatch.setenv("SPLITTER_ENV", "test")
    monkeypatch.delenv("SPLITTER_STRICT_SETTLEMENT", raising=False)
    monkeypatch.delenv("SPLITTER_DEFAULT_CURRENCY", raising=False)
    monkeypatch.delenv("SPLITTER_DEFAULT_CATEGORY", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    config_module._config = None
    yield
    config_module._config = None


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "splitting: Tests for split strategies")
    config.addinivalue_line("markers", "settlement: Tests for balances and settlement plans")
    config.addinivalue_line("markers", "ledger: Tests for the in-memory ledger service")
    config.addinivalue_line("markers", "cli: Tests for the command-line interface")
