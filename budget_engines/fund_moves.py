"""
Module: budget_engines.fund_moves
Responsibility:
    Plan a move of money between two envelopes as a pair of allocations:
    negative on the source, positive on the destination, same period.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Produces AllocationInput records; persisting them belongs to the
    caller.

Invariants enforced:
    - The pair sums to zero, so a move never changes Ready to Assign.
    - The move amount is strictly positive; direction is expressed by
      which envelope is the source.
    - The period is validated exactly like any other allocation period.

Failure modes:
    - InvalidAmountError if amount <= 0.
    - InvalidPeriodError if period is not YYYY-MM.
    - SameBudgetTransferError if source and destination are the same.
      Moving money onto its own envelope would store a -amount/+amount
      pair that cancels itself, so it is refused rather than recorded.
    - BudgetNotFoundError if ``known_budget_ids`` is given and does not
      contain either id.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from budget_kernel.domain.dtos import AllocationInput, BudgetId
from budget_kernel.domain.values import MonthToken
from budget_kernel.exceptions import (
    BudgetNotFoundError,
    InvalidAmountError,
    SameBudgetTransferError,
)
from budget_kernel.logging_config import get_logger

logger = get_logger("engines.fund_moves")


@dataclass(frozen=True)
class FundMove:
    """The two allocations that make up one move of funds."""

    source: AllocationInput
    destination: AllocationInput

    @property
    def amount(self) -> int:
        return self.destination.amount

    @property
    def period(self) -> MonthToken:
        return self.destination.period

    def allocations(self) -> tuple[AllocationInput, AllocationInput]:
        return (self.source, self.destination)


def plan_fund_move(
    source_budget_id: BudgetId,
    dest_budget_id: BudgetId,
    amount: int,
    period: str | MonthToken,
    known_budget_ids: Collection[BudgetId] | None = None,
) -> FundMove:
    """
    Build the paired allocations for moving ``amount`` between envelopes.

    Args:
        source_budget_id: Envelope the money leaves.
        dest_budget_id: Envelope the money enters.
        amount: Minor units, must be positive.
        period: Month both allocations belong to.
        known_budget_ids: Optional set of existing budget ids to check
            both ends against.

    Returns:
        FundMove with ``source.amount == -amount`` and
        ``destination.amount == amount``.
    """
    if amount <= 0:
        raise InvalidAmountError(amount, "move amount must be positive")
    if source_budget_id == dest_budget_id:
        raise SameBudgetTransferError(source_budget_id)
    if known_budget_ids is not None:
        for budget_id in (source_budget_id, dest_budget_id):
            if budget_id not in known_budget_ids:
                raise BudgetNotFoundError(budget_id)

    move = FundMove(
        source=AllocationInput(budget_id=source_budget_id, amount=-amount, period=period),
        destination=AllocationInput(budget_id=dest_budget_id, amount=amount, period=period),
    )

    logger.info("fund_move_planned", extra={
        "source_budget_id": str(source_budget_id),
        "dest_budget_id": str(dest_budget_id),
        "amount": amount,
        "period": move.period.value,
    })
    return move
