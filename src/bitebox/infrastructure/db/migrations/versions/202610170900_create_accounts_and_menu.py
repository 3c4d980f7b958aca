"""create accounts and menu items

Revision ID: 202610170900
Revises:
Create Date: 2026-10-17 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610170900"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=32), nullable=True),
        sa.Column("wallet_balance_cents", sa.Integer(), server_default="0", nullable=False),
        sa.Column("restaurant_name", sa.String(length=255), nullable=True),
        sa.Column("restaurant_address", sa.String(length=500), nullable=True),
        sa.Column("cuisine", sa.String(length=100), nullable=True),
        sa.Column("rating", sa.Float(), server_default="0", nullable=False),
        sa.Column("num_reviews", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.CheckConstraint("wallet_balance_cents >= 0", name="ck_accounts_wallet_non_negative"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_accounts_email"),
    )
    op.create_index("ix_accounts_role", "accounts", ["role"], unique=False)

    op.create_table(
        "menu_items",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("vendor_id", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column("price_cents", sa.Integer(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("diet_type", sa.String(length=20), server_default="Veg", nullable=False),
        sa.Column("is_available", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["vendor_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_menu_items_vendor_category",
        "menu_items",
        ["vendor_id", "category"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_menu_items_vendor_category", table_name="menu_items")
    op.drop_table("menu_items")
    op.drop_index("ix_accounts_role", table_name="accounts")
    op.drop_table("accounts")
