"""
Module: budget_kernel.models.transaction
Responsibility: ORM persistence for money movements.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - ``type`` is a TransactionType value and carries the direction.
      ``amount`` may have been stored signed by an importer; the selector
      takes its absolute value.
    - ``budget_id`` NULL means the transaction is unassigned.
    - ``account_id`` NULL means the account is unknown; the transaction
      is treated as operational.

Audit relevance:
    ``exclude_from_calculations`` marks transfers and other movements that
    are not income.  A flagged operational transaction adds nothing to
    inflows: its amount is subtracted from them, whichever its direction.
    It still counts as spend when it is a debit.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from budget_kernel.db.base import Base, UUIDString, enum_column
from budget_kernel.domain.values import TransactionType
from budget_kernel.models.account import Account
from budget_kernel.models.budget import Budget


class Transaction(Base):
    """A single credit or debit on an account."""

    __tablename__ = "transactions"

    __table_args__ = (
        Index("idx_transaction_budget", "budget_id"),
        Index("idx_transaction_occurred_at", "occurred_at"),
    )

    budget_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("budgets.id", ondelete="SET NULL"),
        nullable=True,
    )

    account_id: Mapped[UUID | None] = mapped_column(
        UUIDString(),
        ForeignKey("accounts.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Minor units
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)

    type: Mapped[TransactionType] = mapped_column(enum_column(TransactionType), nullable=False)

    occurred_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    description: Mapped[str | None] = mapped_column(String(500), nullable=True)

    exclude_from_calculations: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    budget: Mapped[Budget | None] = relationship()
    account: Mapped[Account | None] = relationship()

    def __repr__(self) -> str:
        return f"<Transaction {self.type} amount={self.amount} at={self.occurred_at}>"
