"""Snapshot layer ORM model: fund_snapshots."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class FundSnapshot(Base):
    """Immutable valuation of one fund for one user on one as-of day.

    One set per (user_id, as_of_day); the unique constraint on
    (user_id, fund_code, as_of_day) rejects a second capture of the same day.
    """

    __tablename__ = "fund_snapshots"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "fund_code", "as_of_day", name="uq_fund_snapshots_user_fund_day"
        ),
        Index("ix_fund_snapshots_user_day", "user_id", "as_of_day"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    fund_code: Mapped[str] = mapped_column(String(10), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    units: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False)
    market_value: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    mix_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    contribution_percent: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 4), nullable=True)
    as_of_day: Mapped[date] = mapped_column(Date, nullable=False)
    captured_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
