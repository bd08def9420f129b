"""
MonthlyOverviewService -- read the monthly overview from storage.

Responsibility:
    Validate the requested month, load the overview snapshot inside the
    caller's session, run ``MonthlyOverviewCalculator`` and convert the
    integer result into display units.

Architecture position:
    Services -- imperative shell.  Imports from budget_kernel (selectors,
    domain, logging), budget_engines and budget_config.  Never commits:
    the caller owns the session and its transaction.

Invariants enforced:
    - The month is validated before any query runs.
    - Monetary view fields are ``Decimal`` major units computed as
      ``minor / 10 ** minor_unit_exponent``; no float ever touches an
      amount.  ``savings_rate`` stays a float ratio.
    - Opening balances and exclusion flags come from storage unchanged,
      so Ready to Assign follows the engine contract exactly.

Failure modes:
    - InvalidMonthError for a malformed month (no query executed).
    - InvalidPeriodError if a stored allocation has a malformed period.
    - SQLAlchemy errors propagate unmodified.

Usage:
    with session_scope() as session:
        view = MonthlyOverviewService(session, settings).get_monthly_overview("2026-02")
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.orm import Session

from budget_config.schema import KernelSettings
from budget_engines.monthly_overview import MonthlyOverviewCalculator
from budget_kernel.domain.dtos import BudgetSummary, MonthlyOverviewResult
from budget_kernel.domain.values import MonthToken, to_major_units
from budget_kernel.logging_config import LogContext, get_logger
from budget_kernel.selectors.overview_selector import OverviewSnapshotSelector

logger = get_logger("services.monthly_overview")


@dataclass(frozen=True)
class BudgetSummaryView:
    """One envelope of the overview, in display units."""

    budget_id: Hashable
    name: str
    budget_type: str
    target_amount: Decimal
    allocated: Decimal
    spent: Decimal
    available: Decimal
    carryover: Decimal


@dataclass(frozen=True)
class MonthlyOverviewView:
    """The monthly overview, in display units."""

    month: str
    currency: str
    ready_to_assign: Decimal
    total_allocated: Decimal
    total_spent: Decimal
    capital_balance: Decimal
    available_funds: Decimal
    savings_rate: float
    budget_summaries: tuple[BudgetSummaryView, ...] = field(default_factory=tuple)


class MonthlyOverviewService:
    """
    Builds MonthlyOverviewView records from the database.

    Contract:
        Read-only.  Never flushes or commits the session.
    Guarantees:
        - One storage snapshot per call; the engine sees a consistent
          input set.
        - Summaries keep the engine's order (budget name order).
    Non-goals:
        - Does not cache results; every call recomputes from history.
    """

    def __init__(
        self,
        session: Session,
        settings: KernelSettings | None = None,
        calculator: MonthlyOverviewCalculator | None = None,
    ):
        self.session = session
        self.settings = settings or KernelSettings()
        self._calculator = calculator or MonthlyOverviewCalculator()

    @property
    def _exponent(self) -> int:
        return self.settings.currency.minor_unit_exponent

    def get_monthly_overview(self, month: str | MonthToken) -> MonthlyOverviewView:
        """
        Overview of ``month`` in display units.

        Raises:
            InvalidMonthError: If ``month`` is not YYYY-MM.
        """
        token = MonthToken.parse(month)

        with LogContext.bind(month=token.value):
            snapshot = OverviewSnapshotSelector(self.session).load()
            result = self._calculator.compute(
                month=token,
                budgets=snapshot.budgets,
                allocations=snapshot.allocations,
                transactions=snapshot.transactions,
                account_balances=snapshot.account_balances,
            )
            view = self.to_view(result)
            logger.info("monthly_overview_served", extra={
                "summary_count": len(view.budget_summaries),
                "currency": view.currency,
            })
        return view

    def to_view(self, result: MonthlyOverviewResult) -> MonthlyOverviewView:
        """Convert an engine result into display units."""
        money = self._money
        return MonthlyOverviewView(
            month=result.month.value,
            currency=self.settings.currency.code,
            ready_to_assign=money(result.ready_to_assign),
            total_allocated=money(result.total_allocated),
            total_spent=money(result.total_spent),
            capital_balance=money(result.capital_balance),
            available_funds=money(result.available_funds),
            savings_rate=result.savings_rate,
            budget_summaries=tuple(
                self._summary_view(summary) for summary in result.budget_summaries
            ),
        )

    def _summary_view(self, summary: BudgetSummary) -> BudgetSummaryView:
        money = self._money
        return BudgetSummaryView(
            budget_id=summary.budget_id,
            name=summary.name,
            budget_type=summary.type.display_label,
            target_amount=money(summary.target_amount),
            allocated=money(summary.allocated),
            spent=money(summary.spent),
            available=money(summary.available),
            carryover=money(summary.carryover),
        )

    def _money(self, minor: int) -> Decimal:
        return to_major_units(minor, self._exponent)
