"""
Back Office Ledger - Collaborations Router
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response, to_local_naive
from app.schemas.influencer import (
    CollaborationCreateRequest,
    CollaborationResponse,
    CollaborationUpdateRequest,
)
from app.services.collaboration_service import CollaborationService
from app.utils.error_handling import InvalidDateRangeException


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List collaborations")
async def list_collaborations(db: AsyncSession = Depends(get_async_session)):
    service = CollaborationService(db)
    collaborations = await service.get_collaborations()
    return success_response([CollaborationResponse.model_validate(c) for c in collaborations])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create collaboration")
async def create_collaboration(
    request: CollaborationCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = CollaborationService(db)
    collaboration = await service.create_collaboration(request)
    return success_response(CollaborationResponse.model_validate(collaboration))


@router.get(
    "/filter",
    summary="Filter collaborations",
    description="All criteria are optional and combined. Date bounds apply to the start date, "
                "amount bounds to the agreed amount; both are inclusive.",
)
async def filter_collaborations(
    campaign_name: Optional[str] = Query(None, alias="campaignName"),
    collaboration_status: Optional[str] = Query(None, alias="status"),
    influencer_id: Optional[int] = Query(None, alias="influencerId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    min_amount: Optional[int] = Query(None, alias="minAmount", ge=0),
    max_amount: Optional[int] = Query(None, alias="maxAmount", ge=0),
    db: AsyncSession = Depends(get_async_session),
):
    start_date = to_local_naive(start_date) if start_date else None
    end_date = to_local_naive(end_date) if end_date else None
    if start_date and end_date and start_date > end_date:
        raise InvalidDateRangeException(start_date.isoformat(), end_date.isoformat())

    service = CollaborationService(db)
    collaborations = await service.filter_collaborations(
        campaign_name=campaign_name,
        status=collaboration_status,
        influencer_id=influencer_id,
        start_date=start_date,
        end_date=end_date,
        min_amount=min_amount,
        max_amount=max_amount,
    )
    return success_response([CollaborationResponse.model_validate(c) for c in collaborations])


@router.get("/influencer/{influencer_id}", summary="List collaborations for an influencer")
async def list_by_influencer(influencer_id: int, db: AsyncSession = Depends(get_async_session)):
    service = CollaborationService(db)
    collaborations = await service.get_collaborations_by_influencer(influencer_id)
    return success_response([CollaborationResponse.model_validate(c) for c in collaborations])


@router.get("/{collaboration_id}", summary="Get collaboration")
async def get_collaboration(collaboration_id: int, db: AsyncSession = Depends(get_async_session)):
    service = CollaborationService(db)
    collaboration = await service.get_collaboration(collaboration_id)
    return success_response(CollaborationResponse.model_validate(collaboration))


@router.patch("/{collaboration_id}", summary="Update collaboration")
async def update_collaboration(
    collaboration_id: int,
    request: CollaborationUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = CollaborationService(db)
    collaboration = await service.update_collaboration(collaboration_id, request)
    return success_response(CollaborationResponse.model_validate(collaboration))


@router.delete("/{collaboration_id}", summary="Delete collaboration")
async def delete_collaboration(collaboration_id: int, db: AsyncSession = Depends(get_async_session)):
    service = CollaborationService(db)
    await service.delete_collaboration(collaboration_id)
    return success_response(MessageResponse(message="Collaboration deleted successfully"))
