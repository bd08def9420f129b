"""
ORM models for the budget kernel's persistence boundary.

Importing this package registers every table on ``Base.metadata``.
"""

from budget_kernel.models.account import Account
from budget_kernel.models.budget import Allocation, Budget
from budget_kernel.models.transaction import Transaction

__all__ = [
    "Account",
    "Allocation",
    "Budget",
    "Transaction",
]
