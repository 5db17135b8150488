"""
Back Office Ledger - Income and Expense Models
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Text, func, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.client import Client
    from app.models.staff import Staff


class ExpenseSource(str, Enum):
    """Where an expense originated."""
    STAFF_MONTHLY = "STAFF_MONTHLY"
    STAFF_WORK_BASIS = "STAFF_WORK_BASIS"
    GENERAL = "GENERAL"


class Income(BaseModel):
    """Money received from a client."""

    __tablename__ = "incomes"

    client_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount_nrs: Mapped[int] = mapped_column(Integer, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    received_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.now,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    client: Mapped["Client"] = relationship("Client", back_populates="incomes")


class Expense(BaseModel):
    """Money paid out, optionally to a staff member."""

    __tablename__ = "expenses"

    staff_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("staff.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    amount_nrs: Mapped[int] = mapped_column(Integer, nullable=False)
    source: Mapped[ExpenseSource] = mapped_column(
        SQLEnum(ExpenseSource, name="expense_source"),
        nullable=False,
        index=True,
    )
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.now,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    staff: Mapped[Optional["Staff"]] = relationship("Staff", back_populates="expenses")
