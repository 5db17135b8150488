"""
Back Office Ledger - Payments Router

Influencer payments, the overdue sweep and the paid payments report.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.models.influencer import PaymentMethod, PaymentStatus
from app.schemas.common import MessageResponse, success_response, to_local_naive
from app.schemas.influencer import (
    PaymentCreateRequest,
    PaymentReportRequest,
    PaymentResponse,
    PaymentUpdateRequest,
)
from app.services.payment_service import PaymentService
from app.utils.error_handling import InvalidDateRangeException


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List payments")
async def list_payments(db: AsyncSession = Depends(get_async_session)):
    service = PaymentService(db)
    payments = await service.get_payments()
    return success_response([PaymentResponse.model_validate(p) for p in payments])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create payment")
async def create_payment(
    request: PaymentCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = PaymentService(db)
    payment = await service.create_payment(request)
    return success_response(PaymentResponse.model_validate(payment))


@router.get(
    "/filter",
    summary="Filter payments",
    description="All criteria are optional and combined; amount and date bounds are inclusive.",
)
async def filter_payments(
    payment_status: Optional[PaymentStatus] = Query(None, alias="status"),
    payment_method: Optional[PaymentMethod] = Query(None, alias="paymentMethod"),
    influencer_id: Optional[int] = Query(None, alias="influencerId"),
    collaboration_id: Optional[int] = Query(None, alias="collaborationId"),
    min_amount: Optional[int] = Query(None, alias="minAmount", ge=0),
    max_amount: Optional[int] = Query(None, alias="maxAmount", ge=0),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_async_session),
):
    start_date = to_local_naive(start_date) if start_date else None
    end_date = to_local_naive(end_date) if end_date else None
    if start_date and end_date and start_date > end_date:
        raise InvalidDateRangeException(start_date.isoformat(), end_date.isoformat())

    service = PaymentService(db)
    payments = await service.filter_payments(
        status=payment_status,
        payment_method=payment_method,
        influencer_id=influencer_id,
        collaboration_id=collaboration_id,
        min_amount=min_amount,
        max_amount=max_amount,
        start_date=start_date,
        end_date=end_date,
    )
    return success_response([PaymentResponse.model_validate(p) for p in payments])


@router.get("/overdue", summary="Overdue payments")
async def get_overdue_payments(db: AsyncSession = Depends(get_async_session)):
    service = PaymentService(db)
    payments = await service.get_overdue_payments()
    return success_response([PaymentResponse.model_validate(p) for p in payments])


@router.post(
    "/mark-overdue",
    summary="Mark overdue payments",
    description="Move PENDING payments past their due date to OVERDUE.",
)
async def mark_overdue(db: AsyncSession = Depends(get_async_session)):
    service = PaymentService(db)
    count = await service.mark_overdue()
    return success_response({"count": count})


@router.post("/report", summary="Paid payments report")
async def generate_report(
    request: PaymentReportRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = PaymentService(db)
    return success_response(await service.generate_report(request))


@router.get("/{payment_id}", summary="Get payment")
async def get_payment(payment_id: int, db: AsyncSession = Depends(get_async_session)):
    service = PaymentService(db)
    payment = await service.get_payment(payment_id)
    return success_response(PaymentResponse.model_validate(payment))


@router.patch("/{payment_id}", summary="Update payment")
async def update_payment(
    payment_id: int,
    request: PaymentUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = PaymentService(db)
    payment = await service.update_payment(payment_id, request)
    return success_response(PaymentResponse.model_validate(payment))


@router.delete("/{payment_id}", summary="Delete payment")
async def delete_payment(payment_id: int, db: AsyncSession = Depends(get_async_session)):
    service = PaymentService(db)
    await service.delete_payment(payment_id)
    return success_response(MessageResponse(message="Payment deleted successfully"))
