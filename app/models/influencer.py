"""
Back Office Ledger - Influencer Models

Influencers, their social handles, campaign collaborations and the
payments made to them.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel


class SocialPlatform(str, Enum):
    INSTAGRAM = "INSTAGRAM"
    FACEBOOK = "FACEBOOK"
    YOUTUBE = "YOUTUBE"
    TIKTOK = "TIKTOK"
    TWITTER = "TWITTER"
    LINKEDIN = "LINKEDIN"
    OTHER = "OTHER"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH = "CASH"
    CHEQUE = "CHEQUE"
    DIGITAL_WALLET = "DIGITAL_WALLET"
    CREDIT_CARD = "CREDIT_CARD"
    OTHER = "OTHER"


class Influencer(BaseModel):
    """Influencer the business collaborates with."""

    __tablename__ = "influencers"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    social_handles: Mapped[List["SocialHandle"]] = relationship(
        "SocialHandle",
        back_populates="influencer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    collaborations: Mapped[List["Collaboration"]] = relationship(
        "Collaboration",
        back_populates="influencer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="influencer",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SocialHandle(BaseModel):
    """A single social media account of an influencer."""

    __tablename__ = "social_handles"

    influencer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("influencers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    platform: Mapped[SocialPlatform] = mapped_column(
        SQLEnum(SocialPlatform, name="social_platform"),
        nullable=False,
    )
    handle: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    followers: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    influencer: Mapped["Influencer"] = relationship("Influencer", back_populates="social_handles")


class Collaboration(BaseModel):
    """Campaign agreement with an influencer."""

    __tablename__ = "collaborations"

    influencer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("influencers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    campaign_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    deliverables: Mapped[str] = mapped_column(Text, nullable=False)
    agreed_amount_nrs: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(50), default="ACTIVE", nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    influencer: Mapped["Influencer"] = relationship("Influencer", back_populates="collaborations")
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="collaboration",
        passive_deletes=True,
    )


class Payment(BaseModel):
    """Payment owed or made to an influencer."""

    __tablename__ = "payments"

    influencer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("influencers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    collaboration_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("collaborations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    amount_nrs: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus, name="payment_status"),
        default=PaymentStatus.PENDING,
        nullable=False,
        index=True,
    )
    payment_method: Mapped[Optional[PaymentMethod]] = mapped_column(
        SQLEnum(PaymentMethod, name="payment_method"),
        nullable=True,
    )
    transaction_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    payment_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    due_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    influencer: Mapped["Influencer"] = relationship("Influencer", back_populates="payments")
    collaboration: Mapped[Optional["Collaboration"]] = relationship(
        "Collaboration",
        back_populates="payments",
    )
