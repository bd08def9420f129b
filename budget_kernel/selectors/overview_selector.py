"""
Module: budget_kernel.selectors.overview_selector
Responsibility: Load the complete, consistent input set of the monthly
    overview engine from the database in one read transaction.
Architecture position: Kernel > Selectors.  Translates ORM rows into
    budget_kernel.domain input records.  The engine never sees ORM rows.

Invariants enforced:
    - Everything is loaded, not just the target month: carryover and
      Ready to Assign depend on full history.
    - Transaction amounts are absolute values; direction comes from type.
    - A transaction without an account is treated as operational.
    - Archived accounts still contribute their balances.
    - The transaction month is the calendar month of ``occurred_at`` as
      stored, with no time-zone conversion.

Failure modes:
    - InvalidPeriodError if a stored allocation has a malformed period.
    - ValueError if a stored enum column holds an unknown value.
"""

from dataclasses import dataclass, field

from sqlalchemy import select

from budget_kernel.domain.dtos import (
    AccountBalanceInput,
    AllocationInput,
    BudgetInput,
    TransactionInput,
)
from budget_kernel.domain.values import AccountRole
from budget_kernel.logging_config import get_logger
from budget_kernel.models.account import Account
from budget_kernel.models.budget import Allocation, Budget
from budget_kernel.models.transaction import Transaction
from budget_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.overview")


@dataclass(frozen=True)
class OverviewSnapshot:
    """The four input collections of one overview computation."""

    budgets: tuple[BudgetInput, ...] = field(default_factory=tuple)
    allocations: tuple[AllocationInput, ...] = field(default_factory=tuple)
    transactions: tuple[TransactionInput, ...] = field(default_factory=tuple)
    account_balances: tuple[AccountBalanceInput, ...] = field(default_factory=tuple)


class OverviewSnapshotSelector(BaseSelector):
    """
    Builds an OverviewSnapshot from the budget tables.

    Contract:
        Read-only; runs inside the caller's session.
    Guarantees:
        - Budgets are ordered by name, so summaries come out in a stable
          order.
        - Archived budgets are included; the engine filters them.
    """

    def load(self) -> OverviewSnapshot:
        snapshot = OverviewSnapshot(
            budgets=self.budgets(),
            allocations=self.allocations(),
            transactions=self.transactions(),
            account_balances=self.account_balances(),
        )
        logger.debug("overview_snapshot_loaded", extra={
            "budget_count": len(snapshot.budgets),
            "allocation_count": len(snapshot.allocations),
            "transaction_count": len(snapshot.transactions),
            "account_count": len(snapshot.account_balances),
        })
        return snapshot

    def budgets(self) -> tuple[BudgetInput, ...]:
        rows = self.session.execute(
            select(
                Budget.id,
                Budget.name,
                Budget.type,
                Budget.target_amount,
                Budget.is_archived,
            ).order_by(Budget.name)
        ).all()
        return tuple(
            BudgetInput(
                budget_id=row.id,
                name=row.name,
                type=row.type,
                target_amount=row.target_amount,
                is_archived=row.is_archived,
            )
            for row in rows
        )

    def allocations(self) -> tuple[AllocationInput, ...]:
        rows = self.session.execute(
            select(Allocation.budget_id, Allocation.amount, Allocation.period)
            .order_by(Allocation.period, Allocation.id)
        ).all()
        return tuple(
            AllocationInput(budget_id=row.budget_id, amount=row.amount, period=row.period)
            for row in rows
        )

    def transactions(self) -> tuple[TransactionInput, ...]:
        rows = self.session.execute(
            select(
                Transaction.budget_id,
                Transaction.amount,
                Transaction.type,
                Transaction.occurred_at,
                Transaction.exclude_from_calculations,
                Account.role,
            )
            .outerjoin(Account, Transaction.account_id == Account.id)
            .order_by(Transaction.occurred_at, Transaction.id)
        ).all()
        return tuple(
            TransactionInput(
                budget_id=row.budget_id,
                amount=abs(row.amount),
                type=row.type,
                date=row.occurred_at.date(),
                account_role=row.role or AccountRole.OPERATIONAL,
                exclude_from_calculations=row.exclude_from_calculations,
            )
            for row in rows
        )

    def account_balances(self) -> tuple[AccountBalanceInput, ...]:
        rows = self.session.execute(
            select(Account.balance, Account.role, Account.initial_balance)
            .order_by(Account.name, Account.id)
        ).all()
        return tuple(
            AccountBalanceInput(
                balance=row.balance,
                role=row.role,
                initial_balance=row.initial_balance,
            )
            for row in rows
        )
