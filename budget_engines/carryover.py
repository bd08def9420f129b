"""
Module: budget_engines.carryover
Responsibility:
    Replay the history of a spending envelope month by month to find the
    deficit it brings into a given month.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import budget_kernel.domain and sibling engine modules.

Invariants enforced:
    - Only spending envelopes carry anything over, and only deficits:
      after each replayed month the carried amount is the month's balance
      if negative, else 0.  Surplus is discarded at every step.
    - Replay visits every prior month with any allocation or transaction
      for the envelope, once, in ascending MonthToken order.  Months with
      no activity are skipped; they cannot change a carried deficit.
    - Nothing is cached: carryover is recomputed from the full history on
      every call.

Failure modes:
    - None beyond malformed records; the inputs are already narrowed to a
      single envelope by the caller.

Usage:
    from budget_engines.carryover import spending_carryover

    carryover = spending_carryover(allocations, transactions, MonthToken("2026-03"))
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from budget_kernel.domain.dtos import AllocationInput, TransactionInput
from budget_kernel.domain.values import MonthToken
from budget_engines.aggregation import allocated_in_month, spent_in_month


@dataclass(frozen=True)
class CarryoverStep:
    """
    One replayed month of a spending envelope.

    Contract:
        ``balance = allocated - spent + carried_in`` and
        ``carried_out = min(balance, 0)``.
    """

    month: MonthToken
    allocated: int
    spent: int
    carried_in: int
    balance: int
    carried_out: int


def previous_months(
    allocations: Iterable[AllocationInput],
    transactions: Iterable[TransactionInput],
    month: MonthToken,
) -> list[MonthToken]:
    """
    Distinct months strictly before ``month`` that have any activity.

    Union of allocation periods and transaction months, sorted ascending.
    """
    months: set[MonthToken] = {a.period for a in allocations if a.period < month}
    months.update(t.month for t in transactions if t.month < month)
    return sorted(months)


def replay_spending_history(
    allocations: Sequence[AllocationInput],
    transactions: Sequence[TransactionInput],
    month: MonthToken,
) -> tuple[CarryoverStep, ...]:
    """Replay every prior active month in order and return each step."""
    steps: list[CarryoverStep] = []
    carryover = 0
    for prior in previous_months(allocations, transactions, month):
        allocated = allocated_in_month(allocations, prior)
        spent = spent_in_month(transactions, prior)
        balance = allocated - spent + carryover
        carried_out = balance if balance < 0 else 0
        steps.append(
            CarryoverStep(
                month=prior,
                allocated=allocated,
                spent=spent,
                carried_in=carryover,
                balance=balance,
                carried_out=carried_out,
            )
        )
        carryover = carried_out
    return tuple(steps)


def spending_carryover(
    allocations: Sequence[AllocationInput],
    transactions: Sequence[TransactionInput],
    month: MonthToken,
) -> int:
    """Deficit (zero or negative) a spending envelope carries into ``month``."""
    steps = replay_spending_history(allocations, transactions, month)
    if not steps:
        return 0
    return steps[-1].carried_out
