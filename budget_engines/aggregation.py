"""
Module: budget_engines.aggregation
Responsibility:
    Summation helpers behind the monthly overview: capital and available
    funds, all-time inflows and allocations for Ready to Assign, and the
    month-scoped allocation, spend and income totals.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import budget_kernel.domain.

Invariants enforced:
    - Integer minor-unit sums only; ``savings_rate`` is the single float.
    - Income and inflow accounting look at operational accounts only;
      headline spend looks at every account role.
    - A transaction flagged ``exclude_from_calculations`` never adds to
      income or inflows, and its amount is subtracted from inflows when it
      sits on an operational account.

Failure modes:
    - AttributeError / TypeError propagate unchanged on malformed records;
      there is no partial-result fallback.
"""

from __future__ import annotations

from collections.abc import Iterable

from budget_kernel.domain.dtos import (
    AccountBalanceInput,
    AllocationInput,
    BudgetId,
    TransactionInput,
)
from budget_kernel.domain.values import AccountRole, MonthToken

# ---------------------------------------------------------------------------
# Account balances
# ---------------------------------------------------------------------------


def capital_balance(accounts: Iterable[AccountBalanceInput]) -> int:
    """Sum of balances held on savings-role accounts."""
    return sum(a.balance for a in accounts if a.role is AccountRole.SAVINGS)


def available_funds(accounts: Iterable[AccountBalanceInput]) -> int:
    """Sum of balances held on operational accounts."""
    return sum(a.balance for a in accounts if a.role is AccountRole.OPERATIONAL)


def sum_initial_balances(accounts: Iterable[AccountBalanceInput]) -> int:
    """Opening balances of operational accounts; a missing value counts as 0."""
    return sum(
        a.initial_balance or 0
        for a in accounts
        if a.role is AccountRole.OPERATIONAL
    )


# ---------------------------------------------------------------------------
# Inflows (all-time)
# ---------------------------------------------------------------------------


def _is_income(t: TransactionInput) -> bool:
    return t.is_credit and t.is_operational and not t.exclude_from_calculations


def sum_income(transactions: Iterable[TransactionInput]) -> int:
    """All-time credits on operational accounts that are not excluded."""
    return sum(t.amount for t in transactions if _is_income(t))


def sum_excluded(transactions: Iterable[TransactionInput]) -> int:
    """All-time excluded transactions on operational accounts, either direction."""
    return sum(
        t.amount
        for t in transactions
        if t.exclude_from_calculations and t.is_operational
    )


def total_inflows(
    accounts: Iterable[AccountBalanceInput],
    transactions: Iterable[TransactionInput],
) -> int:
    """
    Every unit of money that has ever entered operational accounts.

    Formula:
        initial balances + income credits - excluded transactions

    The figure is all-time; it is not scoped to any month.
    """
    transactions = tuple(transactions)
    return (
        sum_initial_balances(accounts)
        + sum_income(transactions)
        - sum_excluded(transactions)
    )


# ---------------------------------------------------------------------------
# Allocations
# ---------------------------------------------------------------------------


def total_allocated_ever(allocations: Iterable[AllocationInput]) -> int:
    """Sum of every allocation regardless of period."""
    return sum(a.amount for a in allocations)


def allocated_in_month(allocations: Iterable[AllocationInput], month: MonthToken) -> int:
    return sum(a.amount for a in allocations if a.period == month)


def allocated_up_to_month(allocations: Iterable[AllocationInput], month: MonthToken) -> int:
    return sum(a.amount for a in allocations if a.period <= month)


# ---------------------------------------------------------------------------
# Spend and income (month-scoped)
# ---------------------------------------------------------------------------


def spent_in_month(transactions: Iterable[TransactionInput], month: MonthToken) -> int:
    """
    Debits dated within ``month`` on any account role.

    Savings-account spending is included on purpose; compare
    ``income_in_month``, which is operational-only.
    """
    return sum(t.amount for t in transactions if t.is_debit and t.month == month)


def spent_up_to_month(transactions: Iterable[TransactionInput], month: MonthToken) -> int:
    return sum(t.amount for t in transactions if t.is_debit and t.month <= month)


def income_in_month(transactions: Iterable[TransactionInput], month: MonthToken) -> int:
    """Operational, non-excluded credits dated within ``month``."""
    return sum(t.amount for t in transactions if _is_income(t) and t.month == month)


def savings_rate(income: int, spent: int) -> float:
    """``(income - spent) / income``, or 0.0 when there is no income."""
    if income <= 0:
        return 0.0
    return (income - spent) / income


# ---------------------------------------------------------------------------
# Narrowing
# ---------------------------------------------------------------------------


def allocations_for_budget(
    allocations: Iterable[AllocationInput], budget_id: BudgetId
) -> tuple[AllocationInput, ...]:
    return tuple(a for a in allocations if a.budget_id == budget_id)


def transactions_for_budget(
    transactions: Iterable[TransactionInput], budget_id: BudgetId
) -> tuple[TransactionInput, ...]:
    return tuple(t for t in transactions if t.budget_id == budget_id)
