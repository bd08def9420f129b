"""
Values -- Immutable, self-validating domain value objects.

Responsibility:
    Provides the value types every budget computation is expressed in:
    the ``MonthToken`` replay key, the budget/transaction/account
    enumerations, and minor/major currency-unit conversion.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every other domain module and by the engines.

Invariants enforced:
    - A MonthToken always matches ``^[0-9]{4}-(0[1-9]|1[0-2])$``; invalid
      tokens are rejected at construction, never coerced.
      Digits are ASCII only; other Unicode decimal digits are rejected.
    - MonthToken ordering is plain string ordering of the zero-padded
      token, which equals chronological ordering.  Replay code sorts tokens,
      never parsed dates.
    - Monetary amounts are integers in minor units; conversion to display
      units goes through Decimal, never float.

Failure modes:
    - InvalidMonthError on construction of a malformed MonthToken.
    - TypeError from to_minor_units when given a float.

Audit relevance:
    Carryover is recomputed from the full history on every call, ordered by
    MonthToken.  A token that sorted differently from the calendar would
    silently reorder deficits.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from budget_kernel.exceptions import InvalidMonthError

MONTH_PATTERN = re.compile(r"^[0-9]{4}-(0[1-9]|1[0-2])$")


def is_valid_month(value: object) -> bool:
    """True if ``value`` is a string in YYYY-MM form."""
    return isinstance(value, str) and MONTH_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True, order=True, slots=True)
class MonthToken:
    """
    Calendar month key in ``YYYY-MM`` form.

    Contract:
        Wraps a validated, zero-padded month string.  Comparison, hashing
        and sorting operate on that string.

    Guarantees:
        - Immutable and hashable.
        - ``a < b`` iff month ``a`` is chronologically before month ``b``.
        - ``str(token)`` round-trips through ``MonthToken.parse``.

    Non-goals:
        - Does NOT carry a day, time zone or locale.
        - Does NOT do month arithmetic; replay only needs ordering.
    """

    value: str

    def __post_init__(self) -> None:
        if not is_valid_month(self.value):
            raise InvalidMonthError(self.value)

    @classmethod
    def parse(cls, value: str | MonthToken) -> MonthToken:
        """Build a token from a ``YYYY-MM`` string (or return an existing token)."""
        if isinstance(value, MonthToken):
            return value
        return cls(value)

    @classmethod
    def from_date(cls, value: date | datetime) -> MonthToken:
        """Month a calendar date falls in, using the date's own fields."""
        return cls(f"{value.year:04d}-{value.month:02d}")

    @property
    def year(self) -> int:
        return int(self.value[:4])

    @property
    def month(self) -> int:
        return int(self.value[5:])

    def contains(self, value: date | datetime) -> bool:
        """True if ``value`` falls within this month."""
        return value.year == self.year and value.month == self.month

    def __str__(self) -> str:
        return self.value


class BudgetType(str, Enum):
    """Kind of envelope."""

    SPENDING = "spending"
    SAVINGS = "savings"
    GOAL = "goal"
    PERIODIC = "periodic"

    @property
    def envelope_kind(self) -> EnvelopeKind:
        """How the envelope's balance behaves across months."""
        if self is BudgetType.SPENDING:
            return EnvelopeKind.RESETTING
        return EnvelopeKind.ACCUMULATING

    @property
    def display_label(self) -> str:
        return self.name


class EnvelopeKind(str, Enum):
    """Balance behaviour of an envelope across month boundaries."""

    RESETTING = "resetting"  # Surplus discarded each month; deficits carry
    ACCUMULATING = "accumulating"  # Balance persists indefinitely


class TransactionType(str, Enum):
    """Direction of a transaction."""

    CREDIT = "credit"
    DEBIT = "debit"


class AccountRole(str, Enum):
    """What an account is used for."""

    OPERATIONAL = "operational"  # Day-to-day money, feeds Ready to Assign
    SAVINGS = "savings"  # Capital, excluded from inflow accounting


DEFAULT_MINOR_UNIT_EXPONENT = 2


def to_major_units(minor: int, exponent: int = DEFAULT_MINOR_UNIT_EXPONENT) -> Decimal:
    """
    Convert an integer minor-unit amount to a display Decimal.

    ``to_major_units(10050) == Decimal("100.50")``
    """
    return Decimal(minor).scaleb(-exponent)


def to_minor_units(
    major: Decimal | int | str, exponent: int = DEFAULT_MINOR_UNIT_EXPONENT
) -> int:
    """
    Convert a major-unit amount to integer minor units (ROUND_HALF_UP).

    Floats are rejected; pass a Decimal or a numeric string instead.
    """
    if isinstance(major, float):
        raise TypeError("Float amounts are not accepted; use Decimal or str")
    scaled = Decimal(major).scaleb(exponent)
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
