"""Shared test helpers: engine input factories and log parsing."""

import json
from datetime import date
from io import StringIO
from uuid import uuid4

from budget_kernel.domain.dtos import (
    AccountBalanceInput,
    AllocationInput,
    BudgetInput,
    TransactionInput,
)
from budget_kernel.domain.values import AccountRole, BudgetType, TransactionType


def make_budget(name="Groceries", type=BudgetType.SPENDING, budget_id=None,
                target_amount=0, is_archived=False) -> BudgetInput:
    return BudgetInput(
        budget_id=budget_id or uuid4(),
        name=name,
        type=type,
        target_amount=target_amount,
        is_archived=is_archived,
    )


def allocate(budget: BudgetInput, amount: int, period: str) -> AllocationInput:
    return AllocationInput(budget_id=budget.budget_id, amount=amount, period=period)


def debit(amount: int, on: date, budget: BudgetInput | None = None,
          role=AccountRole.OPERATIONAL, excluded=False) -> TransactionInput:
    return TransactionInput(
        budget_id=budget.budget_id if budget is not None else None,
        amount=amount,
        type=TransactionType.DEBIT,
        date=on,
        account_role=role,
        exclude_from_calculations=excluded,
    )


def credit(amount: int, on: date, budget: BudgetInput | None = None,
           role=AccountRole.OPERATIONAL, excluded=False) -> TransactionInput:
    return TransactionInput(
        budget_id=budget.budget_id if budget is not None else None,
        amount=amount,
        type=TransactionType.CREDIT,
        date=on,
        account_role=role,
        exclude_from_calculations=excluded,
    )


def operational(balance=0, initial_balance=None) -> AccountBalanceInput:
    return AccountBalanceInput(
        balance=balance, role=AccountRole.OPERATIONAL, initial_balance=initial_balance
    )


def savings_account(balance=0, initial_balance=None) -> AccountBalanceInput:
    return AccountBalanceInput(
        balance=balance, role=AccountRole.SAVINGS, initial_balance=initial_balance
    )


def parse_log_lines(stream: StringIO) -> list[dict]:
    """Parse every JSON log line written to ``stream``."""
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


def records_with_message(stream: StringIO, message: str) -> list[dict]:
    return [r for r in parse_log_lines(stream) if r["message"] == message]
