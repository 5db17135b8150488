"""
Back Office Ledger - Influencer Schemas

Pydantic schemas for influencers, social handles, collaborations and payments.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from app.models.influencer import PaymentMethod, PaymentStatus, SocialPlatform
from app.schemas.common import CamelModel, LocalDatetime


# ===========================================
# SOCIAL HANDLES
# ===========================================

class SocialHandleCreate(CamelModel):
    platform: SocialPlatform
    handle: str = Field(..., min_length=1, max_length=255)
    url: Optional[str] = Field(None, max_length=500)
    followers: Optional[int] = Field(None, ge=0)
    is_verified: bool = False
    is_primary: bool = False


class SocialHandleResponse(CamelModel):
    id: int
    platform: SocialPlatform
    handle: str
    url: Optional[str] = None
    followers: Optional[int] = None
    is_verified: bool
    is_primary: bool


# ===========================================
# INFLUENCERS
# ===========================================

class InfluencerCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    contact_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True
    social_handles: List[SocialHandleCreate] = []


class InfluencerUpdateRequest(CamelModel):
    """When social_handles is supplied the existing handles are replaced."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, min_length=3, max_length=255)
    contact_number: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None
    social_handles: Optional[List[SocialHandleCreate]] = None


class InfluencerSummary(CamelModel):
    id: int
    name: str
    email: str


class InfluencerResponse(CamelModel):
    id: int
    name: str
    email: str
    contact_number: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    social_handles: List[SocialHandleResponse] = []
    created_at: datetime
    updated_at: datetime


class InfluencerStats(CamelModel):
    """Collaboration count and payment sums by status, in NPR."""
    total_collaborations: int = 0
    total_earnings: int = 0
    pending_payments: int = 0
    overdue_payments: int = 0


class InfluencerStatsResponse(CamelModel):
    influencer: InfluencerResponse
    stats: InfluencerStats


# ===========================================
# COLLABORATIONS
# ===========================================

class CollaborationCreateRequest(CamelModel):
    influencer_id: int
    campaign_name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    deliverables: str
    agreed_amount_nrs: int = Field(..., ge=0)
    start_date: LocalDatetime
    end_date: LocalDatetime
    status: str = Field("ACTIVE", max_length=50)
    notes: Optional[str] = None


class CollaborationUpdateRequest(CamelModel):
    campaign_name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    deliverables: Optional[str] = None
    agreed_amount_nrs: Optional[int] = Field(None, ge=0)
    start_date: Optional[LocalDatetime] = None
    end_date: Optional[LocalDatetime] = None
    status: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class CollaborationResponse(CamelModel):
    id: int
    influencer_id: int
    influencer: Optional[InfluencerSummary] = None
    campaign_name: str
    description: Optional[str] = None
    deliverables: str
    agreed_amount_nrs: int
    start_date: datetime
    end_date: datetime
    status: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ===========================================
# PAYMENTS
# ===========================================

class PaymentCreateRequest(CamelModel):
    influencer_id: int
    collaboration_id: Optional[int] = None
    amount_nrs: int = Field(..., ge=0)
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = Field(None, max_length=255)
    payment_date: Optional[LocalDatetime] = None
    due_date: Optional[LocalDatetime] = None
    notes: Optional[str] = None


class PaymentUpdateRequest(CamelModel):
    collaboration_id: Optional[int] = None
    amount_nrs: Optional[int] = Field(None, ge=0)
    status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = Field(None, max_length=255)
    payment_date: Optional[LocalDatetime] = None
    due_date: Optional[LocalDatetime] = None
    notes: Optional[str] = None


class PaymentReportRequest(CamelModel):
    """Report over PAID payments, optionally narrowed by influencer and payment date."""
    report_type: str = "SUMMARY"
    influencer_id: Optional[int] = None
    start_date: Optional[LocalDatetime] = None
    end_date: Optional[LocalDatetime] = None

    @model_validator(mode="after")
    def check_range(self) -> "PaymentReportRequest":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("startDate must not be after endDate")
        return self


class CollaborationSummary(CamelModel):
    id: int
    campaign_name: str


class PaymentResponse(CamelModel):
    id: int
    influencer_id: int
    collaboration_id: Optional[int] = None
    influencer: Optional[InfluencerSummary] = None
    collaboration: Optional[CollaborationSummary] = None
    amount_nrs: int
    status: PaymentStatus
    payment_method: Optional[PaymentMethod] = None
    transaction_id: Optional[str] = None
    payment_date: Optional[datetime] = None
    due_date: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PaymentGroup(CamelModel):
    total_amount: int = 0
    payment_count: int = 0
    payments: List[PaymentResponse] = []


class InfluencerPaymentGroup(PaymentGroup):
    influencer: InfluencerSummary


class CampaignPaymentGroup(PaymentGroup):
    campaign_name: str


class ReportPeriod(CamelModel):
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class ReportSummary(CamelModel):
    total_amount: int = 0
    total_payments: int = 0
    average_payment: int = 0


class PaymentReport(CamelModel):
    report_type: str
    period: ReportPeriod
    summary: ReportSummary
    by_influencer: List[InfluencerPaymentGroup] = []
    by_campaign: List[CampaignPaymentGroup] = []
    payments: List[PaymentResponse] = []
