"""
Ledger entry model.

Each entry records one balance change on one account. Entries
are immutable: once appended they are never modified or
deleted. position gives the account's chronological order.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Integer, Numeric, ForeignKey,
    CheckConstraint, UniqueConstraint, Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from club_ledger.models.base import Base
from club_ledger.models.enums import EntryType


class LedgerEntry(Base):
    """
    An immutable credit or debit on a single account.

    The two halves of a transfer share a correlation id and
    are told apart by their "-from" / "-to" suffix. Each half
    points at the other account through transfer_to_account
    or transfer_from_account.
    """

    __tablename__ = "ledger_entries"
    __table_args__ = (
        UniqueConstraint("account_id", "entry_id", name="uq_entry_id_per_account"),
        UniqueConstraint("account_id", "position", name="uq_entry_position_per_account"),
        CheckConstraint("amount > 0", name="ck_entry_amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    entry_id: Mapped[str] = mapped_column(String(64), nullable=False)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("account_types.id"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    entry_type: Mapped[EntryType] = mapped_column(
        SAEnum(
            EntryType,
            name="entry_type_enum",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4), nullable=False
    )
    description: Mapped[str] = mapped_column(
        String(500), nullable=False
    )
    date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    transfer_to_account: Mapped[int | None] = mapped_column(
        ForeignKey("account_types.id"), nullable=True
    )
    transfer_from_account: Mapped[int | None] = mapped_column(
        ForeignKey("account_types.id"), nullable=True
    )
    received_from: Mapped[str | None] = mapped_column(String(100), nullable=True)
    received_from_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)

    account: Mapped["Account"] = relationship(
        back_populates="entries",
        foreign_keys=[account_id],
    )

    @property
    def correlation_id(self) -> str:
        """The id shared by both halves of a transfer."""
        for suffix in ("-from", "-to"):
            if self.entry_id.endswith(suffix):
                return self.entry_id[: -len(suffix)]
        return self.entry_id

    def __repr__(self) -> str:
        return (
            f"<LedgerEntry {self.entry_id} {self.entry_type.value} "
            f"{self.amount}>"
        )
