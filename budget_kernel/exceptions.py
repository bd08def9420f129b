"""
Typed Exception Hierarchy for the Budget Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Budget figures feed directly into what a person believes they can spend.
Callers must be able to tell "you sent a bad month" apart from "the stored
data is corrupt" without parsing message strings:

    try:
        overview = service.get_monthly_overview(month)
    except InvalidMonthError as e:          # typed catch
        return bad_request(code=e.code, month=e.month)

Every exception has:
  1. A TYPED class (catch by type, not message)
  2. A CODE class attribute (machine-readable, API-safe)
  3. Structured DATA attributes (not just a message string)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BudgetKernelError (base)
    |
    +-- ValidationError
    |   +-- InvalidMonthError
    |   +-- InvalidPeriodError
    |   +-- InvalidAmountError
    |
    +-- BudgetError
    |   +-- BudgetNotFoundError
    |   +-- SameBudgetTransferError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                  | When Raised
----------------|-----------------------|-----------------------------------------
Validation      | INVALID_MONTH         | Month argument is not YYYY-MM
                | INVALID_PERIOD        | Allocation period is not YYYY-MM
                | INVALID_AMOUNT        | Amount violates a sign/magnitude rule
----------------|-----------------------|-----------------------------------------
Budget          | BUDGET_NOT_FOUND      | Budget id is not known to the caller
                | SAME_BUDGET_TRANSFER  | Fund move onto the source envelope
----------------|-----------------------|-----------------------------------------
Configuration   | CONFIGURATION_ERROR   | Settings file is structurally invalid

None of these are retryable: the calculation engine performs no I/O, so
every failure means the input itself is wrong.
"""


class BudgetKernelError(Exception):
    """
    Base exception for all budget kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BUDGET_KERNEL_ERROR"


# Validation exceptions


class ValidationError(BudgetKernelError):
    """Base exception for rejected input values."""

    code: str = "VALIDATION_ERROR"


class InvalidMonthError(ValidationError):
    """Month token does not match YYYY-MM."""

    code: str = "INVALID_MONTH"

    def __init__(self, month: object):
        self.month = month
        super().__init__(
            f'Invalid month format: "{month}". Expected YYYY-MM (e.g., "2026-02").'
        )


class InvalidPeriodError(ValidationError):
    """Allocation period does not match YYYY-MM."""

    code: str = "INVALID_PERIOD"

    def __init__(self, period: object, budget_id: object = None):
        self.period = period
        self.budget_id = budget_id
        super().__init__(f'Invalid period format: "{period}". Expected YYYY-MM.')


class InvalidAmountError(ValidationError):
    """Amount violates a sign or magnitude rule."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, amount: object, reason: str):
        self.amount = amount
        self.reason = reason
        super().__init__(f"Invalid amount {amount}: {reason}")


# Budget exceptions


class BudgetError(BudgetKernelError):
    """Base exception for envelope-related errors."""

    code: str = "BUDGET_ERROR"


class BudgetNotFoundError(BudgetError):
    """Budget with given ID was not found."""

    code: str = "BUDGET_NOT_FOUND"

    def __init__(self, budget_id: object):
        self.budget_id = budget_id
        super().__init__(f"Budget not found: {budget_id}")


class SameBudgetTransferError(BudgetError):
    """Funds cannot be moved from an envelope onto itself."""

    code: str = "SAME_BUDGET_TRANSFER"

    def __init__(self, budget_id: object):
        self.budget_id = budget_id
        super().__init__(f"Cannot move funds from budget {budget_id} to itself")


# Configuration exceptions


class ConfigurationError(BudgetKernelError):
    """Settings file is present but structurally invalid."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")
