"""
Back Office Ledger - Staff Schemas

Pydantic schemas for staff, work items and the staff work log.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.models.staff import StaffType
from app.schemas.common import CamelModel, LocalDatetime
from app.schemas.client import ClientSummary
from app.schemas.ledger import ExpenseResponse


# ===========================================
# STAFF
# ===========================================

class StaffCreateRequest(CamelModel):
    """Schema for creating a staff member."""
    name: str = Field(..., min_length=1, max_length=255)
    type: StaffType
    monthly_salary_nrs: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class StaffUpdateRequest(CamelModel):
    """Schema for updating a staff member."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[StaffType] = None
    monthly_salary_nrs: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class MonthlyPayoutRequest(CamelModel):
    """Salary payout for a MONTHLY staff member. paid_at defaults to now."""
    amount_nrs: int = Field(..., ge=0)
    note: Optional[str] = None
    paid_at: Optional[LocalDatetime] = None


class StaffSummary(CamelModel):
    id: int
    name: str
    type: StaffType


class StaffResponse(CamelModel):
    """Schema for staff response."""
    id: int
    name: str
    type: StaffType
    monthly_salary_nrs: Optional[int] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


# ===========================================
# WORK ITEMS
# ===========================================

class WorkItemCreateRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    rate_nrs: int = Field(..., ge=0)
    is_active: bool = True


class WorkItemUpdateRequest(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    rate_nrs: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class WorkItemSummary(CamelModel):
    id: int
    title: str
    rate_nrs: int


class WorkItemResponse(CamelModel):
    id: int
    title: str
    rate_nrs: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


# ===========================================
# STAFF WORKS
# ===========================================

class StaffWorkCreateRequest(CamelModel):
    """
    Schema for logging staff work.

    Either work_item_id or title must be supplied. When unit_rate_nrs is
    omitted for a work-item entry it defaults to the work item's rate.
    """
    staff_id: int
    work_item_id: Optional[int] = None
    client_id: Optional[int] = None
    quantity: Optional[int] = Field(None, ge=1)
    unit_rate_nrs: Optional[int] = Field(None, ge=0)
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    performed_at: Optional[LocalDatetime] = None


class StaffWorkUpdateRequest(CamelModel):
    """
    Partial update. Only fields present in the payload are applied; an
    explicit null work_item_id unlinks the work item and clears quantity
    and rate.
    """
    staff_id: Optional[int] = None
    work_item_id: Optional[int] = None
    client_id: Optional[int] = None
    quantity: Optional[int] = Field(None, ge=1)
    unit_rate_nrs: Optional[int] = Field(None, ge=0)
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    performed_at: Optional[LocalDatetime] = None


class StaffWorkResponse(CamelModel):
    id: int
    staff_id: int
    work_item_id: Optional[int] = None
    client_id: Optional[int] = None
    staff: Optional[StaffSummary] = None
    work_item: Optional[WorkItemSummary] = None
    client: Optional[ClientSummary] = None
    quantity: Optional[int] = None
    unit_rate_nrs: Optional[int] = None
    line_total_nrs: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    performed_at: datetime
    created_at: datetime
    updated_at: datetime


class StaffDetailResponse(StaffResponse):
    """Staff member with works and expenses, optionally filtered by date."""
    staff_works: List[StaffWorkResponse] = []
    expenses: List[ExpenseResponse] = []
