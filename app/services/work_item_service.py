"""
Back Office Ledger - Work Item Service
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.staff import WorkItem
from app.schemas.staff import WorkItemCreateRequest, WorkItemUpdateRequest
from app.utils.error_handling import NotFoundException


class WorkItemService:
    """Service for work item operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_work_items(self) -> List[WorkItem]:
        result = await self.db.execute(select(WorkItem).order_by(WorkItem.title, WorkItem.id))
        return list(result.scalars().all())

    async def get_work_item(self, work_item_id: int) -> WorkItem:
        work_item = await self.db.get(WorkItem, work_item_id)
        if not work_item:
            raise NotFoundException("Work item", work_item_id)
        return work_item

    async def create_work_item(self, data: WorkItemCreateRequest) -> WorkItem:
        work_item = WorkItem(**data.model_dump())
        self.db.add(work_item)
        await self.db.commit()
        await self.db.refresh(work_item)
        return work_item

    async def update_work_item(self, work_item_id: int, data: WorkItemUpdateRequest) -> WorkItem:
        """Update a work item. Existing staff works keep the rate they were logged with."""
        work_item = await self.get_work_item(work_item_id)

        for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(work_item, key, value)

        await self.db.commit()
        await self.db.refresh(work_item)
        return work_item

    async def delete_work_item(self, work_item_id: int) -> None:
        work_item = await self.get_work_item(work_item_id)
        await self.db.delete(work_item)
        await self.db.commit()
