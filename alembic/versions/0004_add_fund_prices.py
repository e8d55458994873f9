"""Add fund_prices: daily closing price cache keyed by canonical fund code.

Revision ID: 0004
Revises: 0003
Create Date: 2025-10-29
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "0004"
down_revision: Union[str, None] = "0003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "fund_prices",
        sa.Column("price_date", sa.Date, primary_key=True),
        sa.Column("fund_code", sa.String(10), primary_key=True),
        sa.Column("price", sa.Numeric(18, 6), nullable=False),
        sa.Column(
            "pulled_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table("fund_prices")
