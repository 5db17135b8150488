"""
Back Office Ledger - Accounts Router

Financial summary and the staff work payout preview.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import success_response
from app.services.account_service import AccountService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get(
    "/summary",
    summary="Account summary",
    description="Totals, income by client, expense by source and operational counts.",
)
async def get_summary(
    timeout_seconds: Optional[float] = Query(
        None, alias="timeoutSeconds", gt=0, le=settings.aggregation_timeout_max_seconds
    ),
    db: AsyncSession = Depends(get_async_session),
):
    service = AccountService(db)
    summary = await service.get_summary(timeout_seconds=timeout_seconds)
    return success_response(summary)


@router.get(
    "/staff-work-payout-preview",
    summary="Staff work payout preview",
    description="Amounts owed to work-basis staff for one calendar month. "
                "Rows that cannot be priced are listed under warnings.",
)
async def get_staff_work_payout_preview(
    month: int = Query(..., description="Month (1-12)"),
    year: int = Query(..., description="Four digit year"),
    staff_id: Optional[int] = Query(None, alias="staffId"),
    timeout_seconds: Optional[float] = Query(
        None, alias="timeoutSeconds", gt=0, le=settings.aggregation_timeout_max_seconds
    ),
    db: AsyncSession = Depends(get_async_session),
):
    service = AccountService(db)
    preview = await service.get_staff_work_payout_preview(
        month=month,
        year=year,
        staff_id=staff_id,
        timeout_seconds=timeout_seconds,
    )
    return success_response(preview.staff, warnings=preview.warnings)
