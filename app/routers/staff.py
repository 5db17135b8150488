"""
Back Office Ledger - Staff Router

Staff CRUD, per-staff work and expense history, monthly salary payouts.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response, to_local_naive
from app.schemas.ledger import ExpenseResponse
from app.schemas.staff import (
    MonthlyPayoutRequest,
    StaffCreateRequest,
    StaffDetailResponse,
    StaffResponse,
    StaffUpdateRequest,
    StaffWorkResponse,
)
from app.services.staff_service import StaffService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List staff")
async def list_staff(db: AsyncSession = Depends(get_async_session)):
    service = StaffService(db)
    staff_list = await service.get_staff_list()
    return success_response([StaffResponse.model_validate(s) for s in staff_list])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create staff member")
async def create_staff(
    request: StaffCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = StaffService(db)
    staff = await service.create_staff(request)
    return success_response(StaffResponse.model_validate(staff))


@router.get(
    "/{staff_id}",
    summary="Get staff member",
    description="Staff member with logged works and expenses, optionally limited to a date range.",
)
async def get_staff(
    staff_id: int,
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_async_session),
):
    service = StaffService(db)
    details = await service.get_staff_details(
        staff_id,
        start_date=to_local_naive(start_date) if start_date else None,
        end_date=to_local_naive(end_date) if end_date else None,
    )

    response = StaffDetailResponse(
        **StaffResponse.model_validate(details.staff).model_dump(),
        staff_works=[StaffWorkResponse.model_validate(w) for w in details.staff_works],
        expenses=[ExpenseResponse.model_validate(e) for e in details.expenses],
    )
    return success_response(response)


@router.patch("/{staff_id}", summary="Update staff member")
async def update_staff(
    staff_id: int,
    request: StaffUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = StaffService(db)
    staff = await service.update_staff(staff_id, request)
    return success_response(StaffResponse.model_validate(staff))


@router.delete("/{staff_id}", summary="Delete staff member")
async def delete_staff(staff_id: int, db: AsyncSession = Depends(get_async_session)):
    service = StaffService(db)
    await service.delete_staff(staff_id)
    return success_response(MessageResponse(message="Staff deleted successfully"))


@router.post(
    "/{staff_id}/payout/monthly",
    status_code=status.HTTP_201_CREATED,
    summary="Record monthly salary payout",
    description="Records a STAFF_MONTHLY expense. Only MONTHLY staff can be paid this way.",
)
async def monthly_payout(
    staff_id: int,
    request: MonthlyPayoutRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = StaffService(db)
    expense = await service.monthly_payout(staff_id, request)
    return success_response(ExpenseResponse.model_validate(expense))
