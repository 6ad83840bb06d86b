"""Accounts, scheduled orders and ledger entries

Revision ID: 0001
Revises:
Create Date: 2026-10-18 00:00:00
"""

from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


allowance_interval_enum = sa.Enum(
    "HOURLY", "DAILY", "WEEKLY", "MONTHLY", "YEARLY",
    name="allowance_interval_enum",
    create_constraint=True,
)
entry_category_enum = sa.Enum(
    "DEPOSIT", "WITHDRAWAL", "RECURRING_PAYMENT",
    name="entry_category_enum",
)


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("external_id", sa.Uuid(), nullable=False, unique=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "scheduled_orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id"), nullable=False,
        ),
        sa.Column("created_by_user_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("interval", allowance_interval_enum, nullable=False),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("day_of_month", sa.Integer(), nullable=False),
        sa.Column("month_of_year", sa.Integer(), nullable=False),
        sa.Column("time_of_day", sa.Time(), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("next_run_at", sa.DateTime(), nullable=False),
        sa.Column("last_run_at", sa.DateTime(), nullable=True),
        sa.Column("time_zone_id", sa.String(64), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_scheduled_orders_account_id", "scheduled_orders", ["account_id"]
    )
    op.create_index(
        "ix_scheduled_orders_next_run_at", "scheduled_orders", ["next_run_at"]
    )

    op.create_table(
        "ledger_entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("external_id", sa.Uuid(), nullable=False, unique=True),
        sa.Column(
            "account_id", sa.Integer(),
            sa.ForeignKey("accounts.id"), nullable=False,
        ),
        sa.Column(
            "scheduled_order_id", sa.Integer(),
            sa.ForeignKey("scheduled_orders.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("category", entry_category_enum, nullable=False),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("description", sa.String(255), nullable=False),
        sa.Column("approved_by", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index(
        "ix_ledger_entries_account_id", "ledger_entries", ["account_id"]
    )
    op.create_index(
        "ix_ledger_entries_scheduled_order_id",
        "ledger_entries", ["scheduled_order_id"],
    )
    op.create_index(
        "ix_ledger_entries_created_at", "ledger_entries", ["created_at"]
    )


def downgrade() -> None:
    op.drop_table("ledger_entries")
    op.drop_table("scheduled_orders")
    op.drop_table("accounts")
    allowance_interval_enum.drop(op.get_bind(), checkfirst=True)
    entry_category_enum.drop(op.get_bind(), checkfirst=True)
