"""
budget_services -- imperative shell around the pure engines.

Services own the wiring: ``bootstrap`` turns the settings file into a
configured logger and database engine; the overview service takes a
caller-owned session and settings, reads a snapshot through the
selectors, runs an engine, and shapes the result for display.
"""

from budget_services.bootstrap import bootstrap
from budget_services.monthly_overview import (
    BudgetSummaryView,
    MonthlyOverviewService,
    MonthlyOverviewView,
)

__all__ = [
    "BudgetSummaryView",
    "MonthlyOverviewService",
    "MonthlyOverviewView",
    "bootstrap",
]
