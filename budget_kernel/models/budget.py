"""
Module: budget_kernel.models.budget
Responsibility: ORM persistence for envelopes (Budget) and the money
    assigned to them month by month (Allocation).
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - Budget.name is unique (uq_budget_name).
    - Allocation.period is a ``YYYY-MM`` string.  Malformed periods are
      rejected when the selector builds AllocationInput records, not here.
    - Allocation.amount is signed minor units; several allocations for the
      same (budget, period) sum.

Failure modes:
    - IntegrityError on a duplicate budget name or an allocation pointing
      at a missing budget.
"""

from datetime import date
from uuid import UUID

from sqlalchemy import BigInteger, Boolean, Date, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from budget_kernel.db.base import Base, UUIDString, enum_column
from budget_kernel.domain.values import BudgetType


class Budget(Base):
    """
    An envelope.

    Guarantees:
        - ``type`` is a BudgetType value and selects the envelope's
          carryover behaviour.
        - ``target_amount`` is informational and never enters a formula.
    """

    __tablename__ = "budgets"

    __table_args__ = (
        UniqueConstraint("name", name="uq_budget_name"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    type: Mapped[BudgetType] = mapped_column(
        enum_column(BudgetType),
        nullable=False,
        default=BudgetType.SPENDING,
    )

    target_amount: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    allocations: Mapped[list["Allocation"]] = relationship(
        back_populates="budget",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Budget {self.name} type={self.type}>"


class Allocation(Base):
    """Money assigned to one envelope for one month."""

    __tablename__ = "allocations"

    __table_args__ = (
        Index("idx_allocation_budget_period", "budget_id", "period"),
    )

    budget_id: Mapped[UUID] = mapped_column(
        UUIDString(),
        ForeignKey("budgets.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Signed, minor units
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)

    # YYYY-MM
    period: Mapped[str] = mapped_column(String(7), nullable=False)

    allocated_on: Mapped[date | None] = mapped_column(Date, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    budget: Mapped[Budget] = relationship(back_populates="allocations")

    def __repr__(self) -> str:
        return f"<Allocation budget={self.budget_id} {self.period} amount={self.amount}>"
