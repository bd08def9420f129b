"""
Pytest fixtures for the budget kernel test suite.

Provides:
- In-memory SQLite sessions with the budget tables created
- Structured-log capture helpers
- A factory for ORM rows (engine input factories live in tests/support.py)
"""

import logging
from datetime import date, datetime
from io import StringIO
from typing import Generator
from uuid import uuid4

import pytest
from sqlalchemy.orm import Session

from budget_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from budget_kernel.domain.values import AccountRole, BudgetType, MonthToken, is_valid_month
from budget_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from budget_kernel.models import Account, Allocation, Budget, Transaction


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def log_stream() -> StringIO:
    """Route budget_kernel logs at DEBUG into a StringIO as JSON lines."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    configure_logging(level=logging.DEBUG, handler=handler)
    return stream


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Session on a fresh in-memory SQLite database."""
    init_engine_from_url("sqlite:///:memory:")
    create_tables()
    session = get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        drop_tables()
        reset_engine()


@pytest.fixture
def db(session):
    """Factory for ORM rows bound to the test session."""
    return RowFactory(session)


class RowFactory:
    """Creates and flushes ORM rows with sensible defaults."""

    def __init__(self, session: Session):
        self.session = session

    def _add(self, row):
        self.session.add(row)
        self.session.flush()
        return row

    def account(self, name=None, balance=0, role=AccountRole.OPERATIONAL,
                initial_balance=None, is_archived=False) -> Account:
        return self._add(Account(
            name=name or f"Account {uuid4().hex[:8]}",
            balance=balance,
            role=role,
            initial_balance=initial_balance,
            is_archived=is_archived,
        ))

    def budget(self, name=None, type=BudgetType.SPENDING, target_amount=0,
               is_archived=False) -> Budget:
        return self._add(Budget(
            name=name or f"Budget {uuid4().hex[:8]}",
            type=type,
            target_amount=target_amount,
            is_archived=is_archived,
        ))

    def allocation(self, budget, amount, period, notes=None) -> Allocation:
        # Malformed periods are stored as-is so the read path can reject them
        allocated_on = None
        if is_valid_month(period):
            token = MonthToken(period)
            allocated_on = date(token.year, token.month, 1)
        return self._add(Allocation(
            budget_id=budget.id,
            amount=amount,
            period=period,
            allocated_on=allocated_on,
            notes=notes,
        ))

    def transaction(self, amount, type, occurred_at, budget=None, account=None,
                    exclude_from_calculations=False) -> Transaction:
        if isinstance(occurred_at, date) and not isinstance(occurred_at, datetime):
            occurred_at = datetime(occurred_at.year, occurred_at.month, occurred_at.day, 12, 0)
        return self._add(Transaction(
            budget_id=budget.id if budget is not None else None,
            account_id=account.id if account is not None else None,
            amount=amount,
            type=type,
            occurred_at=occurred_at,
            exclude_from_calculations=exclude_from_calculations,
        ))
