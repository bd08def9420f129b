"""
budget_engines.monthly_overview -- Monthly budget overview calculation.

Responsibility:
    Turn account balances, envelope definitions, allocations and
    transaction summaries into the complete overview of one calendar
    month: Ready to Assign, month totals, savings rate, capital and
    available funds, and one summary per active envelope.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import budget_kernel.domain and sibling engine modules.
    Consumed by budget_services.monthly_overview.

Invariants enforced:
    - Conservation: ready_to_assign + total_allocated_ever == total_inflows.
      Every unit that ever entered an operational account is either in an
      envelope or in the unassigned pool.
    - Replay safety: identical inputs produce identical outputs; no clock,
      no randomness, no state kept between calls.
    - Envelope behaviour is selected by ``BudgetType.envelope_kind``:
      RESETTING envelopes (spending) carry only deficits forward;
      ACCUMULATING envelopes (savings, goal, periodic) report a cumulative
      ``available`` and a carryover of 0.
    - The month is validated before any aggregation runs.

Failure modes:
    - InvalidMonthError if ``month`` is not a YYYY-MM token.
    - Any other exception during aggregation propagates unmodified; a call
      either returns a complete result or raises.

Usage:
    from budget_engines.monthly_overview import MonthlyOverviewCalculator

    calculator = MonthlyOverviewCalculator()
    result = calculator.compute(
        month="2026-02",
        budgets=budgets,
        allocations=allocations,
        transactions=transactions,
        account_balances=account_balances,
    )
    print(result.ready_to_assign)
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence

from budget_kernel.domain.dtos import (
    AccountBalanceInput,
    AllocationInput,
    BudgetInput,
    BudgetSummary,
    MonthlyOverviewResult,
    TransactionInput,
)
from budget_kernel.domain.values import EnvelopeKind, MonthToken
from budget_kernel.exceptions import InvalidMonthError
from budget_kernel.logging_config import get_logger
from budget_engines import aggregation
from budget_engines.carryover import replay_spending_history
from budget_engines.tracer import traced_engine

logger = get_logger("engines.monthly_overview")

ENGINE_NAME = "monthly_overview"
ENGINE_VERSION = "1.0"

_Summarizer = Callable[
    [MonthToken, BudgetInput, Sequence[AllocationInput], Sequence[TransactionInput]],
    BudgetSummary,
]


def summarize_resetting_envelope(
    month: MonthToken,
    budget: BudgetInput,
    allocations: Sequence[AllocationInput],
    transactions: Sequence[TransactionInput],
) -> BudgetSummary:
    """
    Spending envelope: resets monthly, only debt carries forward.

    Formula:
        available = allocated(month) - spent(month) + carryover
        carryover = deficit left after replaying every prior active month
    """
    allocated = aggregation.allocated_in_month(allocations, month)
    spent = aggregation.spent_in_month(transactions, month)
    steps = replay_spending_history(allocations, transactions, month)
    carryover = steps[-1].carried_out if steps else 0

    if carryover:
        logger.debug("spending_carryover_replayed", extra={
            "budget_id": str(budget.budget_id),
            "months_replayed": len(steps),
            "carryover": carryover,
        })

    return BudgetSummary(
        budget_id=budget.budget_id,
        name=budget.name,
        type=budget.type,
        target_amount=budget.target_amount,
        allocated=allocated,
        spent=spent,
        available=allocated - spent + carryover,
        carryover=carryover,
    )


def summarize_accumulating_envelope(
    month: MonthToken,
    budget: BudgetInput,
    allocations: Sequence[AllocationInput],
    transactions: Sequence[TransactionInput],
) -> BudgetSummary:
    """
    Savings / goal / periodic envelope: the balance persists indefinitely.

    Formula:
        available = allocations(period <= month) - debits(month <= month)

    ``allocated`` and ``spent`` are still month-only, for display.  The
    accumulation is already inside ``available``, so carryover is 0.
    """
    return BudgetSummary(
        budget_id=budget.budget_id,
        name=budget.name,
        type=budget.type,
        target_amount=budget.target_amount,
        allocated=aggregation.allocated_in_month(allocations, month),
        spent=aggregation.spent_in_month(transactions, month),
        available=(
            aggregation.allocated_up_to_month(allocations, month)
            - aggregation.spent_up_to_month(transactions, month)
        ),
        carryover=0,
    )


_SUMMARIZERS: dict[EnvelopeKind, _Summarizer] = {
    EnvelopeKind.RESETTING: summarize_resetting_envelope,
    EnvelopeKind.ACCUMULATING: summarize_accumulating_envelope,
}


class MonthlyOverviewCalculator:
    """
    Pure function calculator for the monthly overview.

    Contract:
        No I/O, no database access, fully deterministic.
        All inputs passed as parameters; the caller supplies a consistent
        snapshot.
    Guarantees:
        - ``ready_to_assign = total_inflows - total_allocated_ever``.
        - ``total_allocated`` and ``total_spent`` are scoped to ``month``;
          ``total_spent`` covers every account role.
        - ``savings_rate`` uses operational income only, 0.0 without income.
        - One BudgetSummary per non-archived budget, in input order.
    Non-goals:
        - Does not convert to display units; see
          budget_services.monthly_overview.
        - Does not persist or memoize carryover.
    """

    @traced_engine(
        ENGINE_NAME,
        ENGINE_VERSION,
        fingerprint_fields=("month", "budgets", "allocations", "transactions", "account_balances"),
    )
    def compute(
        self,
        month: str | MonthToken,
        budgets: Iterable[BudgetInput],
        allocations: Iterable[AllocationInput],
        transactions: Iterable[TransactionInput],
        account_balances: Iterable[AccountBalanceInput],
    ) -> MonthlyOverviewResult:
        """
        Compute the full overview for ``month``.

        Preconditions:
            ``month`` is a YYYY-MM string or MonthToken.
            Allocation periods were validated at construction.

        Postconditions:
            Returns a MonthlyOverviewResult satisfying the conservation
            invariant.  Inputs are not mutated.

        Args:
            month: Target calendar month.
            budgets: Envelope definitions, archived ones included.
            allocations: Every allocation ever made, any period.
            transactions: Every transaction summary, any date.
            account_balances: Current balances of every account.

        Returns:
            MonthlyOverviewResult

        Raises:
            InvalidMonthError: If ``month`` is not a valid YYYY-MM token.
        """
        t0 = time.monotonic()
        token = self._validate_month(month)

        budgets = tuple(budgets)
        allocations = tuple(allocations)
        transactions = tuple(transactions)
        account_balances = tuple(account_balances)

        logger.info("monthly_overview_started", extra={
            "month": token.value,
            "budget_count": len(budgets),
            "allocation_count": len(allocations),
            "transaction_count": len(transactions),
            "account_count": len(account_balances),
        })

        total_inflows = aggregation.total_inflows(account_balances, transactions)
        total_allocated_ever = aggregation.total_allocated_ever(allocations)
        total_spent = aggregation.spent_in_month(transactions, token)
        income = aggregation.income_in_month(transactions, token)

        result = MonthlyOverviewResult(
            month=token,
            ready_to_assign=total_inflows - total_allocated_ever,
            total_allocated=aggregation.allocated_in_month(allocations, token),
            total_spent=total_spent,
            capital_balance=aggregation.capital_balance(account_balances),
            available_funds=aggregation.available_funds(account_balances),
            savings_rate=aggregation.savings_rate(income, total_spent),
            budget_summaries=self.summarize_budgets(
                token, budgets, allocations, transactions
            ),
        )

        duration_ms = round((time.monotonic() - t0) * 1000, 2)
        logger.info("monthly_overview_computed", extra={
            "month": token.value,
            "total_inflows": total_inflows,
            "total_allocated_ever": total_allocated_ever,
            "ready_to_assign": result.ready_to_assign,
            "total_allocated": result.total_allocated,
            "total_spent": result.total_spent,
            "summary_count": len(result.budget_summaries),
            "duration_ms": duration_ms,
        })

        return result

    def summarize_budgets(
        self,
        month: MonthToken,
        budgets: Sequence[BudgetInput],
        allocations: Sequence[AllocationInput],
        transactions: Sequence[TransactionInput],
    ) -> tuple[BudgetSummary, ...]:
        """One summary per non-archived budget, in input order."""
        return tuple(
            self.summarize_budget(month, budget, allocations, transactions)
            for budget in budgets
            if not budget.is_archived
        )

    def summarize_budget(
        self,
        month: MonthToken,
        budget: BudgetInput,
        allocations: Sequence[AllocationInput],
        transactions: Sequence[TransactionInput],
    ) -> BudgetSummary:
        """Narrow the inputs to ``budget`` and apply its envelope rules."""
        summarize = _SUMMARIZERS[budget.type.envelope_kind]
        return summarize(
            month,
            budget,
            aggregation.allocations_for_budget(allocations, budget.budget_id),
            aggregation.transactions_for_budget(transactions, budget.budget_id),
        )

    @staticmethod
    def _validate_month(month: str | MonthToken) -> MonthToken:
        try:
            return MonthToken.parse(month)
        except InvalidMonthError:
            logger.error("monthly_overview_invalid_month", extra={
                "month": str(month),
            })
            raise
