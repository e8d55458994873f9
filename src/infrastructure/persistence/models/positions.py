"""Position layer ORM models: fund_positions, retirement_profiles."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class FundPosition(Base):
    """Current holding of one fund for one user.

    The current_* columns and last_priced_as_of are a denormalized cache
    rewritten by the valuation service; they are NULL until first priced.
    Allocation edits replace the whole set for a user (delete, then insert).
    """

    __tablename__ = "fund_positions"
    __table_args__ = (
        UniqueConstraint("user_id", "fund_code", name="uq_fund_positions_user_fund"),
    )

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    fund_code: Mapped[str] = mapped_column(String(10), nullable=False)
    contribution_percent: Mapped[Decimal] = mapped_column(
        Numeric(8, 4), nullable=False, default=Decimal("0")
    )
    units: Mapped[Decimal] = mapped_column(Numeric(18, 6), nullable=False, default=Decimal("0"))
    current_price: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 6), nullable=True)
    current_market_value: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 2), nullable=True)
    current_mix_percent: Mapped[Optional[Decimal]] = mapped_column(Numeric(8, 4), nullable=True)
    last_priced_as_of: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class RetirementProfile(Base):
    """Per-user retirement profile.

    The five *_fund_percent columns and current_balance predate
    fund_positions and are only read when a user has no position rows.
    total_balance is the denormalized sum from the last valuation run.
    """

    __tablename__ = "retirement_profiles"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    contribution_rate_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    employer_match_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    current_balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    target_balance: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    g_fund_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    f_fund_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    c_fund_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    s_fund_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    i_fund_percent: Mapped[Decimal] = mapped_column(Numeric(8, 4), nullable=False)
    total_balance: Mapped[Optional[Decimal]] = mapped_column(Numeric(18, 2), nullable=True)
    last_updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
