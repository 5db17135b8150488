"""
Back Office Ledger - Income and Expense Schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.ledger import ExpenseSource
from app.schemas.common import CamelModel, LocalDatetime
from app.schemas.client import ClientSummary


# ===========================================
# INCOME
# ===========================================

class IncomeCreateRequest(CamelModel):
    """Schema for recording income. received_at defaults to now."""
    client_id: int
    amount_nrs: int = Field(..., ge=0)
    note: Optional[str] = None
    received_at: Optional[LocalDatetime] = None


class IncomeUpdateRequest(CamelModel):
    client_id: Optional[int] = None
    amount_nrs: Optional[int] = Field(None, ge=0)
    note: Optional[str] = None
    received_at: Optional[LocalDatetime] = None


class IncomeResponse(CamelModel):
    id: int
    client_id: int
    client: Optional[ClientSummary] = None
    amount_nrs: int
    note: Optional[str] = None
    received_at: datetime
    created_at: datetime
    updated_at: datetime


# ===========================================
# EXPENSES
# ===========================================

class ExpenseCreateRequest(CamelModel):
    """Schema for recording an expense. paid_at defaults to now."""
    staff_id: Optional[int] = None
    amount_nrs: int = Field(..., ge=0)
    source: ExpenseSource
    note: Optional[str] = None
    paid_at: Optional[LocalDatetime] = None


class ExpenseUpdateRequest(CamelModel):
    staff_id: Optional[int] = None
    amount_nrs: Optional[int] = Field(None, ge=0)
    source: Optional[ExpenseSource] = None
    note: Optional[str] = None
    paid_at: Optional[LocalDatetime] = None


class ExpenseResponse(CamelModel):
    id: int
    staff_id: Optional[int] = None
    amount_nrs: int
    source: ExpenseSource
    note: Optional[str] = None
    paid_at: datetime
    created_at: datetime
    updated_at: datetime
