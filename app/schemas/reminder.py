"""
Back Office Ledger - Reminder Schemas
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.models.reminder import ReminderPriority, ReminderStage, ReminderType
from app.schemas.common import CamelModel, LocalDatetime
from app.schemas.client import ClientSummary
from app.schemas.staff import StaffSummary


# ===========================================
# REQUEST SCHEMAS
# ===========================================

class ReminderCreateRequest(CamelModel):
    """Schema for creating an admin reminder."""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: ReminderType
    priority: ReminderPriority = ReminderPriority.MEDIUM
    stage: Optional[ReminderStage] = None
    due_date: LocalDatetime
    client_id: Optional[int] = None
    staff_id: Optional[int] = None
    is_completed: bool = False


class ReminderUpdateRequest(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    type: Optional[ReminderType] = None
    priority: Optional[ReminderPriority] = None
    stage: Optional[ReminderStage] = None
    due_date: Optional[LocalDatetime] = None
    client_id: Optional[int] = None
    staff_id: Optional[int] = None
    is_completed: Optional[bool] = None


# ===========================================
# RESPONSE SCHEMAS
# ===========================================

class ReminderResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    type: ReminderType
    priority: ReminderPriority
    stage: Optional[ReminderStage] = None
    due_date: datetime
    is_completed: bool
    client_id: Optional[int] = None
    staff_id: Optional[int] = None
    client: Optional[ClientSummary] = None
    staff: Optional[StaffSummary] = None
    created_at: datetime
    updated_at: datetime


class ReminderCandidate(CamelModel):
    """Client whose contract crossed the reminder lead boundary."""
    client_id: int
    name: str
    email: str
    contract_start_date: datetime
    contract_duration_days: int
    contract_end_date: datetime
    days_until_expiry: int
    priority: ReminderPriority
    stage: ReminderStage
    last_reminder_stage: Optional[ReminderStage] = None


class DryRunResponse(CamelModel):
    client_reminders: List[ReminderCandidate] = []
    active_reminders: List[ReminderResponse] = []


class ReminderRunResult(CamelModel):
    """Outcome of one contract expiry scan."""
    skipped: bool = False
    candidates: int = 0
    reminders_created: int = 0
    notifications_sent: int = 0
    notifications_failed: int = 0
    skipped_duplicates: int = 0
