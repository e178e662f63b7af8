"""
SQLAlchemy database models for the FCA Fines API.

ORM models that map to database tables with proper indexing,
constraints, and defaults.

Responsibility: Define database schema and ORM mappings
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
import sqlalchemy as sa
from sqlalchemy import (
    String, Integer, Date, DateTime, Boolean, Text, Numeric,
    Index, UniqueConstraint, CheckConstraint
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models"""
    pass


class FcaFineModel(Base):
    """
    Database model for FCA enforcement fines.

    Rows are loaded by the scraper/importer; this service only reads them.
    """

    __tablename__ = "fca_fines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    fine_reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    firm_individual: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    firm_category: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    regulator: Mapped[str] = mapped_column(String(20), nullable=False, server_default="FCA")

    final_notice_url: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False, server_default="")
    breach_type: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    breach_categories: Mapped[List[str]] = mapped_column(
        JSONB,
        nullable=False,
        server_default=sa.text("'[]'::jsonb")
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(15, 2), nullable=False)
    date_issued: Mapped[date] = mapped_column(Date, nullable=False)
    year_issued: Mapped[int] = mapped_column(Integer, nullable=False)
    month_issued: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()")
    )

    __table_args__ = (
        UniqueConstraint("final_notice_url", "firm_individual", name="uq_fca_fines_notice_firm"),
        CheckConstraint("amount >= 0", name="ck_fca_fines_amount_non_negative"),
        Index("idx_fca_fines_date_issued", "date_issued"),
        Index("idx_fca_fines_year_issued", "year_issued"),
    )

    def __repr__(self) -> str:
        return f"<FcaFineModel(id={self.id}, firm={self.firm_individual}, amount={self.amount})>"


class DigestSubscriptionModel(Base):
    """
    Database model for email digest subscriptions.

    verification_token/verification_expires_at are only set while the
    subscription is pending; activation clears both.
    """

    __tablename__ = "digest_subscriptions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False, server_default="weekly")
    status: Mapped[str] = mapped_column(String(20), nullable=False, server_default="pending")
    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=sa.false())

    verification_token: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    verification_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )
    unsubscribe_token: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        server_default=sa.text("gen_random_uuid()::text")
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
        onupdate=sa.func.now()
    )

    __table_args__ = (
        UniqueConstraint("email", "frequency", name="uq_digest_subscriptions_email_frequency"),
        UniqueConstraint("verification_token", name="uq_digest_subscriptions_verification_token"),
        UniqueConstraint("unsubscribe_token", name="uq_digest_subscriptions_unsubscribe_token"),
        CheckConstraint(
            "frequency IN ('daily', 'weekly', 'monthly')",
            name="ck_digest_subscriptions_frequency"
        ),
        CheckConstraint(
            "status IN ('pending', 'active', 'unsubscribed', 'expired')",
            name="ck_digest_subscriptions_status"
        ),
        Index("idx_digest_subscriptions_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<DigestSubscriptionModel(id={self.id}, frequency={self.frequency}, status={self.status})>"
