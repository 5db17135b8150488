"""
Back Office Ledger - Admin Reminder Model
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.client import Client
    from app.models.staff import Staff


class ReminderType(str, Enum):
    """What a reminder is about."""
    CONTRACT_EXPIRY = "CONTRACT_EXPIRY"
    STAFF_CONTRACT = "STAFF_CONTRACT"
    PAYMENT_DUE = "PAYMENT_DUE"
    GENERAL = "GENERAL"


class ReminderPriority(str, Enum):
    """Reminder urgency, lowest first."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ReminderStage(str, Enum):
    """Contract expiry stage."""
    INITIAL = "INITIAL"
    MIDPOINT = "MIDPOINT"
    FINAL = "FINAL"


# Shared by admin_reminders.stage and clients.last_reminder_stage
reminder_stage_enum = SQLEnum(ReminderStage, name="reminder_stage")


# Sort rank used for "most urgent first" ordering
PRIORITY_RANK = {
    ReminderPriority.LOW: 0,
    ReminderPriority.MEDIUM: 1,
    ReminderPriority.HIGH: 2,
    ReminderPriority.URGENT: 3,
}


class AdminReminder(BaseModel):
    """Reminder shown to administrators, optionally tied to a client or staff member."""

    __tablename__ = "admin_reminders"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[ReminderType] = mapped_column(
        SQLEnum(ReminderType, name="reminder_type"),
        nullable=False,
    )
    priority: Mapped[ReminderPriority] = mapped_column(
        SQLEnum(ReminderPriority, name="reminder_priority"),
        default=ReminderPriority.MEDIUM,
        nullable=False,
    )
    stage: Mapped[Optional[ReminderStage]] = mapped_column(
        reminder_stage_enum,
        nullable=True,
    )
    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    client_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    staff_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("staff.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    client: Mapped[Optional["Client"]] = relationship("Client")
    staff: Mapped[Optional["Staff"]] = relationship("Staff")

    def __repr__(self) -> str:
        return f"<AdminReminder(id={self.id}, type={self.type}, priority={self.priority})>"
