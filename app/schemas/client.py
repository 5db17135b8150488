"""
Back Office Ledger - Client Schemas

Pydantic schemas for client management and account adjustment.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from app.models.client import ClientType
from app.models.reminder import ReminderStage
from app.schemas.common import CamelModel, LocalDatetime


# ===========================================
# REQUEST SCHEMAS
# ===========================================

class ClientCreateRequest(CamelModel):
    """Schema for creating a client. due is derived from locked - advance."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    contact_person: Optional[str] = Field(None, max_length=255)
    contract_pdf_path: Optional[str] = Field(None, max_length=500)

    contract_start_date: LocalDatetime
    contract_duration_days: int = Field(..., ge=1)
    type: ClientType = ClientType.PROSPECT

    locked_amount_nrs: int = 0
    advance_amount_nrs: int = 0


class ClientUpdateRequest(CamelModel):
    """Schema for updating a client."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    contact_person: Optional[str] = Field(None, max_length=255)
    contract_pdf_path: Optional[str] = Field(None, max_length=500)

    contract_start_date: Optional[LocalDatetime] = None
    contract_duration_days: Optional[int] = Field(None, ge=1)
    type: Optional[ClientType] = None

    locked_amount_nrs: Optional[int] = None
    advance_amount_nrs: Optional[int] = None


class AdjustAccountRequest(CamelModel):
    """Signed deltas applied to a client's locked and advance balances."""
    locked_delta: int = 0
    advance_delta: int = 0


# ===========================================
# RESPONSE SCHEMAS
# ===========================================

class ClientSummary(CamelModel):
    """Brief client info embedded in other responses."""
    id: int
    name: str


class ClientResponse(CamelModel):
    """Schema for client response."""
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    contact_person: Optional[str] = None
    contract_pdf_path: Optional[str] = None

    contract_start_date: datetime
    contract_duration_days: int
    contract_end_date: datetime
    type: ClientType

    locked_amount_nrs: int
    advance_amount_nrs: int
    due_amount_nrs: int

    last_reminder_stage: Optional[ReminderStage] = None
    created_at: datetime
    updated_at: datetime
