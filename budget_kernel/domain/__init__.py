"""
Pure domain layer.

This module contains value objects and data transfer objects
with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from budget_kernel.domain.dtos import (
    AccountBalanceInput,
    AllocationInput,
    BudgetInput,
    BudgetSummary,
    MonthlyOverviewResult,
    TransactionInput,
)
from budget_kernel.domain.values import (
    AccountRole,
    BudgetType,
    EnvelopeKind,
    MonthToken,
    TransactionType,
    is_valid_month,
    to_major_units,
    to_minor_units,
)

__all__ = [
    # Values
    "AccountRole",
    "BudgetType",
    "EnvelopeKind",
    "MonthToken",
    "TransactionType",
    "is_valid_month",
    "to_major_units",
    "to_minor_units",
    # DTOs
    "AccountBalanceInput",
    "AllocationInput",
    "BudgetInput",
    "BudgetSummary",
    "MonthlyOverviewResult",
    "TransactionInput",
]
