"""
Back Office Ledger - Influencer Service

Business logic for influencers and their social handles.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.influencer import (
    Collaboration,
    Influencer,
    Payment,
    PaymentStatus,
    SocialHandle,
    SocialPlatform,
)
from app.schemas.influencer import (
    InfluencerCreateRequest,
    InfluencerResponse,
    InfluencerStats,
    InfluencerStatsResponse,
    InfluencerUpdateRequest,
)
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)


class InfluencerService:
    """Service for influencer operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(Influencer).options(selectinload(Influencer.social_handles))

    async def get_influencers(self) -> List[Influencer]:
        result = await self.db.execute(
            self._base_query().order_by(Influencer.created_at.desc(), Influencer.id.desc())
        )
        return list(result.scalars().all())

    async def get_influencer(self, influencer_id: int) -> Influencer:
        result = await self.db.execute(
            self._base_query()
            .where(Influencer.id == influencer_id)
            .execution_options(populate_existing=True)
        )
        influencer = result.scalar_one_or_none()
        if not influencer:
            raise NotFoundException("Influencer", influencer_id)
        return influencer

    async def create_influencer(self, data: InfluencerCreateRequest) -> Influencer:
        influencer = Influencer(**data.model_dump(exclude={"social_handles"}))
        influencer.social_handles = [
            SocialHandle(**handle.model_dump()) for handle in data.social_handles
        ]
        self.db.add(influencer)
        await self.db.commit()

        logger.info(f"Created influencer {influencer.id} with {len(data.social_handles)} social handles")
        return await self.get_influencer(influencer.id)

    async def update_influencer(self, influencer_id: int, data: InfluencerUpdateRequest) -> Influencer:
        """Update an influencer; a supplied social_handles list replaces all existing handles."""
        influencer = await self.get_influencer(influencer_id)
        changes = data.model_dump(exclude_unset=True, exclude={"social_handles"})

        for key, value in changes.items():
            if value is None and key not in ("contact_number", "address", "notes"):
                continue
            setattr(influencer, key, value)

        if data.social_handles is not None:
            await self.db.execute(
                delete(SocialHandle).where(SocialHandle.influencer_id == influencer_id)
            )
            for handle in data.social_handles:
                self.db.add(SocialHandle(influencer_id=influencer_id, **handle.model_dump()))

        await self.db.commit()
        return await self.get_influencer(influencer_id)

    async def delete_influencer(self, influencer_id: int) -> None:
        """Delete an influencer with its handles, collaborations and payments."""
        influencer = await self.get_influencer(influencer_id)
        await self.db.delete(influencer)
        await self.db.commit()
        logger.info(f"Deleted influencer {influencer_id}")

    async def search_influencers(
        self,
        query: Optional[str] = None,
        platform: Optional[SocialPlatform] = None,
        is_active: Optional[bool] = None,
    ) -> List[Influencer]:
        """
        Influencers matching every supplied criterion, ordered by name.

        query matches name, email or any social handle, case-insensitively.
        platform keeps influencers with at least one handle on that platform.
        """
        stmt = self._base_query()

        if is_active is not None:
            stmt = stmt.where(Influencer.is_active == is_active)
        if query:
            stmt = stmt.where(or_(
                Influencer.name.icontains(query, autoescape=True),
                Influencer.email.icontains(query, autoescape=True),
                Influencer.social_handles.any(SocialHandle.handle.icontains(query, autoescape=True)),
            ))
        if platform is not None:
            stmt = stmt.where(Influencer.social_handles.any(SocialHandle.platform == platform))

        result = await self.db.execute(stmt.order_by(Influencer.name, Influencer.id))
        return list(result.scalars().all())

    async def get_influencer_stats(self, influencer_id: int) -> InfluencerStatsResponse:
        """Collaboration count plus PAID, PENDING and OVERDUE payment sums."""
        influencer = await self.get_influencer(influencer_id)

        total_collaborations = await self.db.scalar(
            select(func.count(Collaboration.id)).where(Collaboration.influencer_id == influencer_id)
        )
        rows = await self.db.execute(
            select(Payment.status, func.sum(Payment.amount_nrs))
            .where(Payment.influencer_id == influencer_id)
            .group_by(Payment.status)
        )
        sums = {status: int(total or 0) for status, total in rows.all()}

        return InfluencerStatsResponse(
            influencer=InfluencerResponse.model_validate(influencer),
            stats=InfluencerStats(
                total_collaborations=total_collaborations or 0,
                total_earnings=sums.get(PaymentStatus.PAID, 0),
                pending_payments=sums.get(PaymentStatus.PENDING, 0),
                overdue_payments=sums.get(PaymentStatus.OVERDUE, 0),
            ),
        )
