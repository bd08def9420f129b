"""
Module: budget_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for the
    service layer.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import budget_kernel.domain, budget_kernel.exceptions and
    budget_kernel.logging_config.  MUST NOT import budget_services,
    budget_kernel.db, budget_kernel.models or budget_kernel.selectors.

Invariants enforced:
    - Purity: engines never read the clock, the database or the
      environment.  The month is always an explicit parameter.
    - Integer minor-unit arithmetic for all monetary amounts.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from budget_engines import MonthlyOverviewCalculator, plan_fund_move
"""

from budget_engines.aggregation import (
    allocated_in_month,
    allocated_up_to_month,
    available_funds,
    capital_balance,
    income_in_month,
    savings_rate,
    spent_in_month,
    spent_up_to_month,
    total_allocated_ever,
    total_inflows,
)
from budget_engines.carryover import (
    CarryoverStep,
    previous_months,
    replay_spending_history,
    spending_carryover,
)
from budget_engines.fund_moves import FundMove, plan_fund_move
from budget_engines.monthly_overview import (
    MonthlyOverviewCalculator,
    summarize_accumulating_envelope,
    summarize_resetting_envelope,
)
from budget_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    # Aggregation
    "allocated_in_month",
    "allocated_up_to_month",
    "available_funds",
    "capital_balance",
    "income_in_month",
    "savings_rate",
    "spent_in_month",
    "spent_up_to_month",
    "total_allocated_ever",
    "total_inflows",
    # Carryover
    "CarryoverStep",
    "previous_months",
    "replay_spending_history",
    "spending_carryover",
    # Fund moves
    "FundMove",
    "plan_fund_move",
    # Monthly overview
    "MonthlyOverviewCalculator",
    "summarize_accumulating_envelope",
    "summarize_resetting_envelope",
    # Tracing
    "compute_input_fingerprint",
    "traced_engine",
]
