"""Purchases table.

Revision ID: 001_purchases
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_purchases"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "purchases",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("description", sa.String(50), nullable=False),
        sa.Column("transaction_date", sa.Date, nullable=False),
        sa.Column("amount_usd", sa.Numeric(18, 2), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_purchases_transaction_date", "purchases", ["transaction_date"],
    )


def downgrade() -> None:
    op.drop_index("ix_purchases_transaction_date", table_name="purchases")
    op.drop_table("purchases")
