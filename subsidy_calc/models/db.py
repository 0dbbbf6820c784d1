"""SQLAlchemy ORM models for the portal tables the calculator reads."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class BusinessProgramRecord(Base):
    """Business support program. Only the columns the calculator uses are mapped."""
    __tablename__ = "business_programs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    title: Mapped[str] = mapped_column(String(500))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    organization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    program_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Loan limits
    min_loan_amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    max_loan_amount: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)

    # Subsidy calculator
    bank_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)  # Annual %, e.g. 20.5
    subsidy_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)  # p.p. off bank_rate
    max_loan_term_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    calculator_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
