"""
Module: budget_kernel.models.account
Responsibility: ORM persistence for money-holding accounts.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - ``balance`` and ``initial_balance`` are integer minor units.
    - ``role`` is an AccountRole value.  Only operational accounts feed
      Ready to Assign; savings accounts are capital.

Audit relevance:
    ``initial_balance`` is the opening money of the account and part of
    total inflows.  NULL means the opening balance is unknown and counts
    as 0.
"""

from sqlalchemy import BigInteger, Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from budget_kernel.db.base import Base, enum_column
from budget_kernel.domain.values import AccountRole


class Account(Base):
    """
    A bank account, card or cash pocket.

    Contract:
        The kernel only reads accounts.  Lifecycle (archiving, deletion)
        belongs to the persistence owner; archived accounts still report
        their balance.
    """

    __tablename__ = "accounts"

    __table_args__ = (
        Index("idx_account_role", "role"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Current balance, minor units
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    role: Mapped[AccountRole] = mapped_column(
        enum_column(AccountRole),
        nullable=False,
        default=AccountRole.OPERATIONAL,
    )

    # Opening balance, minor units; NULL when unknown
    initial_balance: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Account {self.name} role={self.role} balance={self.balance}>"
