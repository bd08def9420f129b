"""
Tests for the aggregation helpers (budget_engines/aggregation.py).

Covers:
- Capital and available funds by account role
- All-time inflows with opening balances and exclusions
- Month-scoped allocation, spend and income
- Savings rate
"""

from datetime import date

from budget_engines import aggregation
from budget_kernel.domain.values import AccountRole, MonthToken
from tests.support import (
    allocate,
    credit,
    debit,
    make_budget,
    operational,
    savings_account,
)

JAN = MonthToken("2026-01")
FEB = MonthToken("2026-02")


class TestAccountBalances:

    def test_capital_is_savings_accounts_only(self):
        accounts = [operational(100), savings_account(5000), savings_account(2500)]
        assert aggregation.capital_balance(accounts) == 7500

    def test_available_funds_is_operational_only(self):
        accounts = [operational(100), operational(-40), savings_account(5000)]
        assert aggregation.available_funds(accounts) == 60

    def test_empty(self):
        assert aggregation.capital_balance([]) == 0
        assert aggregation.available_funds([]) == 0

    def test_initial_balances_operational_only_missing_counts_zero(self):
        accounts = [
            operational(initial_balance=1000),
            operational(initial_balance=None),
            savings_account(initial_balance=99999),
        ]
        assert aggregation.sum_initial_balances(accounts) == 1000


class TestTotalInflows:

    def test_opening_plus_income(self):
        accounts = [operational(initial_balance=1000000)]
        transactions = [credit(300000, date(2026, 1, 5)), credit(100, date(2025, 6, 1))]
        assert aggregation.total_inflows(accounts, transactions) == 1300100

    def test_excluded_credit_subtracted(self):
        accounts = [operational(initial_balance=1000000)]
        transactions = [credit(50000, date(2026, 1, 5), excluded=True)]
        assert aggregation.total_inflows(accounts, transactions) == 950000

    def test_excluded_debit_subtracted(self):
        transactions = [debit(2000, date(2026, 1, 5), excluded=True)]
        assert aggregation.total_inflows([], transactions) == -2000

    def test_savings_transactions_ignored(self):
        transactions = [
            credit(7000, date(2026, 1, 5), role=AccountRole.SAVINGS),
            credit(7000, date(2026, 1, 5), role=AccountRole.SAVINGS, excluded=True),
        ]
        assert aggregation.total_inflows([], transactions) == 0

    def test_debits_do_not_reduce_inflows(self):
        transactions = [credit(5000, date(2026, 1, 5)), debit(3000, date(2026, 1, 6))]
        assert aggregation.total_inflows([], transactions) == 5000

    def test_accepts_generator(self):
        transactions = (t for t in [credit(5, date(2026, 1, 1)), credit(5, date(2026, 1, 2), excluded=True)])
        assert aggregation.total_inflows([], transactions) == 0


class TestAllocations:

    def setup_method(self):
        self.budget = make_budget()
        self.allocations = [
            allocate(self.budget, 500, "2025-12"),
            allocate(self.budget, 300, "2026-01"),
            allocate(self.budget, -100, "2026-01"),
            allocate(self.budget, 900, "2026-03"),
        ]

    def test_total_allocated_ever(self):
        assert aggregation.total_allocated_ever(self.allocations) == 1600

    def test_allocated_in_month_sums_duplicates(self):
        assert aggregation.allocated_in_month(self.allocations, JAN) == 200

    def test_allocated_up_to_month(self):
        assert aggregation.allocated_up_to_month(self.allocations, FEB) == 700

    def test_allocations_for_budget(self):
        other = make_budget("Other")
        allocations = self.allocations + [allocate(other, 1, "2026-01")]
        narrowed = aggregation.allocations_for_budget(allocations, other.budget_id)
        assert [a.amount for a in narrowed] == [1]


class TestSpendAndIncome:

    def test_spent_in_month_counts_every_role(self):
        transactions = [
            debit(100, date(2026, 1, 3)),
            debit(40, date(2026, 1, 20), role=AccountRole.SAVINGS),
            debit(999, date(2026, 2, 1)),
            credit(5000, date(2026, 1, 4)),
        ]
        assert aggregation.spent_in_month(transactions, JAN) == 140

    def test_spent_includes_excluded_debits(self):
        transactions = [debit(100, date(2026, 1, 3), excluded=True)]
        assert aggregation.spent_in_month(transactions, JAN) == 100

    def test_spent_up_to_month(self):
        transactions = [
            debit(100, date(2025, 11, 3)),
            debit(40, date(2026, 1, 31)),
            debit(7, date(2026, 2, 1)),
        ]
        assert aggregation.spent_up_to_month(transactions, JAN) == 140

    def test_income_in_month_operational_not_excluded(self):
        transactions = [
            credit(1000, date(2026, 1, 3)),
            credit(200, date(2026, 1, 3), excluded=True),
            credit(300, date(2026, 1, 3), role=AccountRole.SAVINGS),
            credit(400, date(2026, 2, 3)),
            debit(50, date(2026, 1, 3)),
        ]
        assert aggregation.income_in_month(transactions, JAN) == 1000

    def test_transactions_for_budget_skips_unassigned(self):
        budget = make_budget()
        transactions = [debit(1, date(2026, 1, 1), budget), debit(2, date(2026, 1, 1))]
        narrowed = aggregation.transactions_for_budget(transactions, budget.budget_id)
        assert [t.amount for t in narrowed] == [1]


class TestSavingsRate:

    def test_rate(self):
        assert aggregation.savings_rate(1000, 250) == 0.75

    def test_overspend_negative(self):
        assert aggregation.savings_rate(1000, 1500) == -0.5

    def test_no_income_is_zero(self):
        assert aggregation.savings_rate(0, 500) == 0.0
        assert aggregation.savings_rate(-10, 0) == 0.0
