"""accounts and ledger entries

Revision ID: 0001
Revises:
Create Date: 2026-10-16 09:00:00

"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "account_types",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column(
            "account_type",
            sa.Enum("Income", "Expense", name="account_category_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("Active", "Inactive", name="account_status_enum", create_constraint=True),
            nullable=False,
        ),
        sa.Column("balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),
    )

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("entry_id", sa.String(length=64), nullable=False),
        sa.Column("account_id", sa.Integer(), sa.ForeignKey("account_types.id"), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column(
            "entry_type",
            sa.Enum("credit", "debit", name="entry_type_enum"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("transfer_to_account", sa.Integer(), sa.ForeignKey("account_types.id"), nullable=True),
        sa.Column("transfer_from_account", sa.Integer(), sa.ForeignKey("account_types.id"), nullable=True),
        sa.Column("received_from", sa.String(length=100), nullable=True),
        sa.Column("received_from_type", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.UniqueConstraint("account_id", "entry_id", name="uq_entry_id_per_account"),
        sa.UniqueConstraint("account_id", "position", name="uq_entry_position_per_account"),
        sa.CheckConstraint("amount > 0", name="ck_entry_amount_positive"),
    )
    op.create_index("ix_ledger_entries_account_id", "ledger_entries", ["account_id"])


def downgrade() -> None:
    op.drop_index("ix_ledger_entries_account_id", table_name="ledger_entries")
    op.drop_table("ledger_entries")
    op.drop_table("account_types")
    sa.Enum(name="entry_type_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="account_status_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="account_category_enum").drop(op.get_bind(), checkfirst=True)
