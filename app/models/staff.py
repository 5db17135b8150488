"""
Back Office Ledger - Staff Models

Staff members, the billable work items they perform, and the work log.

Monthly staff are paid a fixed salary; work-basis staff are paid
quantity x rate for each logged piece of work.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, func, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.client import Client
    from app.models.ledger import Expense


class StaffType(str, Enum):
    """How a staff member is paid."""
    MONTHLY = "MONTHLY"
    WORK_BASIS = "WORK_BASIS"


class Staff(BaseModel):
    """Contracted staff member."""

    __tablename__ = "staff"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[StaffType] = mapped_column(
        SQLEnum(StaffType, name="staff_type"),
        nullable=False,
        index=True,
    )
    # Only meaningful for MONTHLY staff
    monthly_salary_nrs: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    staff_works: Mapped[List["StaffWork"]] = relationship(
        "StaffWork",
        back_populates="staff",
        passive_deletes="all",
    )
    expenses: Mapped[List["Expense"]] = relationship(
        "Expense",
        back_populates="staff",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Staff(id={self.id}, name={self.name}, type={self.type})>"


class WorkItem(BaseModel):
    """Billable unit of work with a default rate."""

    __tablename__ = "work_items"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    rate_nrs: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    staff_works: Mapped[List["StaffWork"]] = relationship(
        "StaffWork",
        back_populates="work_item",
        passive_deletes=True,
    )


class StaffWork(BaseModel):
    """
    One logged piece of staff work.

    Work-basis entries reference a WorkItem and carry quantity and
    unit_rate_nrs. The rate is copied from the work item when the entry
    is created and does not follow later rate changes. Monthly-staff
    entries carry a free-text title/description instead.
    """

    __tablename__ = "staff_works"

    staff_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("staff.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    work_item_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("work_items.id", ondelete="SET NULL"),
        nullable=True,
    )
    client_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("clients.id", ondelete="SET NULL"),
        nullable=True,
    )

    quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    unit_rate_nrs: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    performed_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.now,
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    staff: Mapped["Staff"] = relationship("Staff", back_populates="staff_works")
    work_item: Mapped[Optional["WorkItem"]] = relationship("WorkItem", back_populates="staff_works")
    client: Mapped[Optional["Client"]] = relationship("Client", back_populates="staff_works")

    @property
    def line_total_nrs(self) -> Optional[int]:
        """quantity x unit rate, or None when either is missing."""
        if self.quantity is None or self.unit_rate_nrs is None:
            return None
        return self.quantity * self.unit_rate_nrs
