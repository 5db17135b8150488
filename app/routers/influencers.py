"""
Back Office Ledger - Influencers Router
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response
from app.models.influencer import SocialPlatform
from app.schemas.influencer import InfluencerCreateRequest, InfluencerResponse, InfluencerUpdateRequest
from app.services.influencer_service import InfluencerService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List influencers")
async def list_influencers(db: AsyncSession = Depends(get_async_session)):
    service = InfluencerService(db)
    influencers = await service.get_influencers()
    return success_response([InfluencerResponse.model_validate(i) for i in influencers])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create influencer")
async def create_influencer(
    request: InfluencerCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = InfluencerService(db)
    influencer = await service.create_influencer(request)
    return success_response(InfluencerResponse.model_validate(influencer))


@router.get(
    "/search",
    summary="Search influencers",
    description="Case-insensitive match on name, email or social handle, ordered by name.",
)
async def search_influencers(
    query: Optional[str] = Query(None, description="Text to match against name, email or handle"),
    platform: Optional[SocialPlatform] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    db: AsyncSession = Depends(get_async_session),
):
    service = InfluencerService(db)
    influencers = await service.search_influencers(query=query, platform=platform, is_active=is_active)
    return success_response([InfluencerResponse.model_validate(i) for i in influencers])


@router.get("/{influencer_id}", summary="Get influencer")
async def get_influencer(influencer_id: int, db: AsyncSession = Depends(get_async_session)):
    service = InfluencerService(db)
    influencer = await service.get_influencer(influencer_id)
    return success_response(InfluencerResponse.model_validate(influencer))


@router.get("/{influencer_id}/stats", summary="Influencer statistics")
async def get_influencer_stats(influencer_id: int, db: AsyncSession = Depends(get_async_session)):
    service = InfluencerService(db)
    return success_response(await service.get_influencer_stats(influencer_id))


@router.patch(
    "/{influencer_id}",
    summary="Update influencer",
    description="A supplied socialHandles list replaces all existing handles.",
)
async def update_influencer(
    influencer_id: int,
    request: InfluencerUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = InfluencerService(db)
    influencer = await service.update_influencer(influencer_id, request)
    return success_response(InfluencerResponse.model_validate(influencer))


@router.delete("/{influencer_id}", summary="Delete influencer")
async def delete_influencer(influencer_id: int, db: AsyncSession = Depends(get_async_session)):
    service = InfluencerService(db)
    await service.delete_influencer(influencer_id)
    return success_response(MessageResponse(message="Influencer deleted successfully"))
