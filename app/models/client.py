"""
Back Office Ledger - Client Model

Client model for contract and account balance tracking.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Integer, String, Text, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel
from app.models.reminder import ReminderStage, reminder_stage_enum

if TYPE_CHECKING:
    from app.models.ledger import Income
    from app.models.staff import StaffWork


class ClientType(str, Enum):
    """Lifecycle state of a client."""
    PROSPECT = "PROSPECT"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Client(BaseModel):
    """
    Client model.

    Account balances follow the identity
    due_amount_nrs == locked_amount_nrs - advance_amount_nrs.
    """

    __tablename__ = "clients"

    # Basic Info
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    contact_person: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contract_pdf_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Contract
    contract_start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    contract_duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[ClientType] = mapped_column(
        SQLEnum(ClientType, name="client_type"),
        default=ClientType.PROSPECT,
        nullable=False,
        index=True,
    )

    # Account balances (NPR)
    locked_amount_nrs: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    advance_amount_nrs: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    due_amount_nrs: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Last contract expiry stage a reminder was issued for
    last_reminder_stage: Mapped[Optional[ReminderStage]] = mapped_column(
        reminder_stage_enum,
        nullable=True,
    )

    # Relationships
    incomes: Mapped[List["Income"]] = relationship(
        "Income",
        back_populates="client",
        passive_deletes="all",
    )
    staff_works: Mapped[List["StaffWork"]] = relationship(
        "StaffWork",
        back_populates="client",
        passive_deletes=True,
    )

    @property
    def contract_end_date(self) -> datetime:
        """Date the contract expires."""
        return self.contract_start_date + timedelta(days=self.contract_duration_days)

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name={self.name})>"
