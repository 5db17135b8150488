"""
Back Office Ledger - Collaboration Service
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.influencer import Collaboration, Influencer
from app.schemas.influencer import CollaborationCreateRequest, CollaborationUpdateRequest
from app.utils.error_handling import InvalidDateRangeException, NotFoundException


class CollaborationService:
    """Service for influencer collaborations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(Collaboration).options(selectinload(Collaboration.influencer))

    async def get_collaborations(self) -> List[Collaboration]:
        result = await self.db.execute(
            self._base_query().order_by(Collaboration.start_date.desc(), Collaboration.id.desc())
        )
        return list(result.scalars().all())

    async def get_collaborations_by_influencer(self, influencer_id: int) -> List[Collaboration]:
        if not await self.db.get(Influencer, influencer_id):
            raise NotFoundException("Influencer", influencer_id)

        result = await self.db.execute(
            self._base_query()
            .where(Collaboration.influencer_id == influencer_id)
            .order_by(Collaboration.start_date.desc(), Collaboration.id.desc())
        )
        return list(result.scalars().all())

    async def filter_collaborations(
        self,
        campaign_name: Optional[str] = None,
        status: Optional[str] = None,
        influencer_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        min_amount: Optional[int] = None,
        max_amount: Optional[int] = None,
    ) -> List[Collaboration]:
        """
        Collaborations matching every supplied criterion, latest start first.

        campaign_name is a case-insensitive substring match. The date bounds
        apply to start_date and the amount bounds to agreed_amount_nrs, all inclusive.
        """
        query = self._base_query()

        if campaign_name:
            query = query.where(Collaboration.campaign_name.icontains(campaign_name, autoescape=True))
        if status:
            query = query.where(Collaboration.status == status)
        if influencer_id is not None:
            query = query.where(Collaboration.influencer_id == influencer_id)
        if start_date is not None:
            query = query.where(Collaboration.start_date >= start_date)
        if end_date is not None:
            query = query.where(Collaboration.start_date <= end_date)
        if min_amount is not None:
            query = query.where(Collaboration.agreed_amount_nrs >= min_amount)
        if max_amount is not None:
            query = query.where(Collaboration.agreed_amount_nrs <= max_amount)

        result = await self.db.execute(
            query.order_by(Collaboration.start_date.desc(), Collaboration.id.desc())
        )
        return list(result.scalars().all())

    async def get_collaboration(self, collaboration_id: int) -> Collaboration:
        result = await self.db.execute(
            self._base_query()
            .where(Collaboration.id == collaboration_id)
            .execution_options(populate_existing=True)
        )
        collaboration = result.scalar_one_or_none()
        if not collaboration:
            raise NotFoundException("Collaboration", collaboration_id)
        return collaboration

    async def create_collaboration(self, data: CollaborationCreateRequest) -> Collaboration:
        if not await self.db.get(Influencer, data.influencer_id):
            raise NotFoundException("Influencer", data.influencer_id)
        if data.start_date > data.end_date:
            raise InvalidDateRangeException(data.start_date.isoformat(), data.end_date.isoformat())

        collaboration = Collaboration(**data.model_dump())
        self.db.add(collaboration)
        await self.db.commit()
        return await self.get_collaboration(collaboration.id)

    async def update_collaboration(
        self,
        collaboration_id: int,
        data: CollaborationUpdateRequest,
    ) -> Collaboration:
        collaboration = await self.get_collaboration(collaboration_id)

        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key not in ("description", "notes"):
                continue
            setattr(collaboration, key, value)

        if collaboration.start_date > collaboration.end_date:
            start, end = collaboration.start_date.isoformat(), collaboration.end_date.isoformat()
            await self.db.rollback()
            raise InvalidDateRangeException(start, end)

        await self.db.commit()
        return await self.get_collaboration(collaboration_id)

    async def delete_collaboration(self, collaboration_id: int) -> None:
        collaboration = await self.get_collaboration(collaboration_id)
        await self.db.delete(collaboration)
        await self.db.commit()
