"""
DTOs -- Pure domain data transfer objects for the monthly overview.

Responsibility:
    Defines the immutable records that flow into and out of the monthly
    overview engine: BudgetInput, AllocationInput, TransactionInput and
    AccountBalanceInput (inputs), BudgetSummary and MonthlyOverviewResult
    (outputs).

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Free of ORM dependencies.  The selector layer builds these from rows;
    the engine never sees ORM entities.

Invariants enforced:
    - All monetary fields are ``int`` minor units.
    - AllocationInput.period is a validated MonthToken.  A malformed period
      is a data-integrity fault rejected here, at construction, so that the
      aggregation loop never sees it.
    - TransactionInput.amount is a non-negative magnitude; direction is
      carried by ``type``.
    - Enumerated fields accept their string values and are normalized to
      the enum on construction.

Failure modes:
    - InvalidPeriodError on AllocationInput with a malformed period.
    - InvalidAmountError on TransactionInput with a negative amount.
    - ValueError on an unknown enum value (budget type, transaction type,
      account role).

Audit relevance:
    These records are the complete, explicit input of a calculation.  The
    same records always produce the same MonthlyOverviewResult.

Data flow:
    ORM rows -> OverviewSnapshot(inputs) -> MonthlyOverviewResult -> view
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from datetime import date

from budget_kernel.domain.values import (
    AccountRole,
    BudgetType,
    MonthToken,
    TransactionType,
    is_valid_month,
)
from budget_kernel.exceptions import InvalidAmountError, InvalidPeriodError

BudgetId = Hashable


@dataclass(frozen=True)
class BudgetInput:
    """A budget envelope definition."""

    budget_id: BudgetId
    name: str
    type: BudgetType
    target_amount: int = 0  # Informational only
    is_archived: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.type, BudgetType):
            object.__setattr__(self, "type", BudgetType(self.type))


@dataclass(frozen=True)
class AllocationInput:
    """
    An assignment of money to an envelope for one month.

    Contract:
        Immutable fact.  ``amount`` is signed: negative allocations remove
        funds.  Several allocations with the same (budget_id, period) are
        valid and sum.
    Guarantees:
        - ``period`` is a MonthToken after construction.
    """

    budget_id: BudgetId
    amount: int
    period: MonthToken

    def __post_init__(self) -> None:
        if isinstance(self.period, MonthToken):
            return
        if not is_valid_month(self.period):
            raise InvalidPeriodError(self.period, budget_id=self.budget_id)
        object.__setattr__(self, "period", MonthToken(self.period))


@dataclass(frozen=True)
class TransactionInput:
    """
    Lightweight projection of a transaction for budget calculations.

    ``budget_id`` is None for unassigned transactions: they still count
    toward global totals but toward no envelope.
    """

    budget_id: BudgetId | None
    amount: int
    type: TransactionType
    date: date
    account_role: AccountRole = AccountRole.OPERATIONAL
    exclude_from_calculations: bool = False

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise InvalidAmountError(
                self.amount, "transaction amounts are magnitudes; use type for direction"
            )
        if not isinstance(self.type, TransactionType):
            object.__setattr__(self, "type", TransactionType(self.type))
        if not isinstance(self.account_role, AccountRole):
            object.__setattr__(self, "account_role", AccountRole(self.account_role))

    @property
    def month(self) -> MonthToken:
        return MonthToken.from_date(self.date)

    @property
    def is_debit(self) -> bool:
        return self.type is TransactionType.DEBIT

    @property
    def is_credit(self) -> bool:
        return self.type is TransactionType.CREDIT

    @property
    def is_operational(self) -> bool:
        return self.account_role is AccountRole.OPERATIONAL


@dataclass(frozen=True)
class AccountBalanceInput:
    """Current balance of one account plus its opening balance, if known."""

    balance: int
    role: AccountRole
    initial_balance: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.role, AccountRole):
            object.__setattr__(self, "role", AccountRole(self.role))


@dataclass(frozen=True)
class BudgetSummary:
    """Computed figures for a single envelope in a given month."""

    budget_id: BudgetId
    name: str
    type: BudgetType
    target_amount: int
    allocated: int
    spent: int
    available: int
    carryover: int


@dataclass(frozen=True)
class MonthlyOverviewResult:
    """
    Full monthly overview.

    ``savings_rate`` is the only non-integer figure: a dimensionless ratio.
    """

    month: MonthToken
    ready_to_assign: int
    total_allocated: int
    total_spent: int
    capital_balance: int
    available_funds: int
    savings_rate: float
    budget_summaries: tuple[BudgetSummary, ...] = field(default_factory=tuple)

    def summary_for(self, budget_id: BudgetId) -> BudgetSummary | None:
        """Summary of the given envelope, or None if it is not active."""
        for summary in self.budget_summaries:
            if summary.budget_id == budget_id:
                return summary
        return None
