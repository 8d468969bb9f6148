"""
Account model.

A named balance-bearing record (the "account types" of the
club's finance settings). The balance is stored on the row and
changed only by the LedgerService; every change is paired with
an appended LedgerEntry.

The version column drives SQLAlchemy's optimistic concurrency
check: an UPDATE written against a stale read matches no rows
and raises StaleDataError instead of overwriting a newer balance.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, Text, DateTime, Integer, Numeric,
    CheckConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from club_ledger.models.base import Base
from club_ledger.models.enums import AccountCategory, AccountStatus


class Account(Base):
    __tablename__ = "account_types"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    account_type: Mapped[AccountCategory] = mapped_column(
        SAEnum(
            AccountCategory,
            name="account_category_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
        default=AccountCategory.INCOME,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[AccountStatus] = mapped_column(
        SAEnum(
            AccountStatus,
            name="account_status_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
        default=AccountStatus.ACTIVE,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False, default=Decimal("0")
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Chronological entry history, oldest first
    entries: Mapped[list["LedgerEntry"]] = relationship(
        back_populates="account",
        foreign_keys="LedgerEntry.account_id",
        order_by="LedgerEntry.position",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def is_active(self) -> bool:
        return self.status == AccountStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Account {self.name} {self.balance} ({self.status.value})>"
