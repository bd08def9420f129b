"""Tests for fund moves between envelopes (budget_engines/fund_moves.py)."""

from datetime import date
from uuid import uuid4

import pytest

from budget_engines.fund_moves import FundMove, plan_fund_move
from budget_engines.monthly_overview import MonthlyOverviewCalculator
from budget_kernel.domain.values import MonthToken
from budget_kernel.exceptions import (
    BudgetError,
    BudgetNotFoundError,
    InvalidAmountError,
    InvalidPeriodError,
    SameBudgetTransferError,
)
from tests.support import allocate, debit, make_budget, operational, records_with_message


class TestPlanFundMove:

    def setup_method(self):
        self.source = uuid4()
        self.dest = uuid4()

    def test_pair_of_allocations(self):
        move = plan_fund_move(self.source, self.dest, 25000, "2026-02")

        assert isinstance(move, FundMove)
        assert move.source.budget_id == self.source
        assert move.source.amount == -25000
        assert move.destination.budget_id == self.dest
        assert move.destination.amount == 25000
        assert move.source.period == move.destination.period == MonthToken("2026-02")
        assert move.amount == 25000
        assert move.period == MonthToken("2026-02")

    def test_allocations_sum_to_zero(self):
        move = plan_fund_move(self.source, self.dest, 1, "2026-02")
        assert sum(a.amount for a in move.allocations()) == 0

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(InvalidAmountError) as exc_info:
            plan_fund_move(self.source, self.dest, amount, "2026-02")
        assert exc_info.value.amount == amount

    def test_same_budget_rejected(self):
        with pytest.raises(SameBudgetTransferError) as exc_info:
            plan_fund_move(self.source, self.source, 100, "2026-02")
        assert exc_info.value.budget_id == self.source
        assert exc_info.value.code == "SAME_BUDGET_TRANSFER"

    def test_same_budget_checked_before_known_ids(self):
        with pytest.raises(SameBudgetTransferError):
            plan_fund_move(self.source, self.source, 100, "2026-02", known_budget_ids=set())

    def test_bad_period_rejected(self):
        with pytest.raises(InvalidPeriodError):
            plan_fund_move(self.source, self.dest, 100, "2026-13")

    def test_unknown_destination_rejected(self):
        with pytest.raises(BudgetNotFoundError) as exc_info:
            plan_fund_move(self.source, self.dest, 100, "2026-02", known_budget_ids={self.source})
        assert exc_info.value.budget_id == self.dest
        assert isinstance(exc_info.value, BudgetError)

    def test_unknown_source_rejected(self):
        with pytest.raises(BudgetNotFoundError) as exc_info:
            plan_fund_move(self.source, self.dest, 100, "2026-02", known_budget_ids={self.dest})
        assert exc_info.value.budget_id == self.source

    def test_known_ids_accepted(self):
        move = plan_fund_move(
            self.source, self.dest, 100, "2026-02", known_budget_ids={self.source, self.dest}
        )
        assert move.amount == 100

    def test_planned_event_logged(self, log_stream):
        plan_fund_move(self.source, self.dest, 700, "2026-02")
        (event,) = records_with_message(log_stream, "fund_move_planned")
        assert event["amount"] == 700
        assert event["period"] == "2026-02"
        assert event["source_budget_id"] == str(self.source)


class TestFundMoveEffect:
    """A planned move applied to the overview engine."""

    def test_ready_to_assign_unchanged_and_deficit_covered(self):
        groceries = make_budget("Groceries")
        holiday = make_budget("Holiday")
        allocations = [
            allocate(groceries, 1000, "2026-02"),
            allocate(holiday, 5000, "2026-02"),
        ]
        transactions = [debit(1500, date(2026, 2, 10), groceries)]
        accounts = [operational(initial_balance=10000)]
        calculator = MonthlyOverviewCalculator()

        before = calculator.compute("2026-02", [groceries, holiday], allocations, transactions, accounts)
        move = plan_fund_move(holiday.budget_id, groceries.budget_id, 500, "2026-02")
        after = calculator.compute(
            "2026-02",
            [groceries, holiday],
            allocations + list(move.allocations()),
            transactions,
            accounts,
        )

        assert before.summary_for(groceries.budget_id).available == -500
        assert after.summary_for(groceries.budget_id).available == 0
        assert after.summary_for(holiday.budget_id).available == 4500
        assert after.ready_to_assign == before.ready_to_assign == 4000
