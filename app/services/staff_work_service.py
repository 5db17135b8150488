"""
Back Office Ledger - Staff Work Service

Business logic for the staff work log.

Work-basis entries link a WorkItem and are priced quantity x unit rate; the
unit rate is copied from the work item when the entry is created (or
re-linked) and is never updated when the work item's rate changes later.
Monthly-staff entries carry a title instead. Every entry has a work item
or a title.
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.client import Client
from app.models.staff import Staff, StaffWork, WorkItem
from app.schemas.staff import StaffWorkCreateRequest, StaffWorkUpdateRequest
from app.utils.error_handling import NotFoundException, ValidationException

logger = logging.getLogger(__name__)


class StaffWorkService:
    """Service for staff work operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(StaffWork).options(
            selectinload(StaffWork.staff),
            selectinload(StaffWork.work_item),
            selectinload(StaffWork.client),
        )

    async def _require(self, model, resource_type: str, resource_id: int):
        instance = await self.db.get(model, resource_id)
        if not instance:
            raise NotFoundException(resource_type, resource_id)
        return instance

    async def get_staff_works(self) -> List[StaffWork]:
        result = await self.db.execute(
            self._base_query().order_by(StaffWork.performed_at.desc(), StaffWork.id.desc())
        )
        return list(result.scalars().all())

    async def get_staff_work(self, staff_work_id: int) -> StaffWork:
        result = await self.db.execute(
            self._base_query()
            .where(StaffWork.id == staff_work_id)
            .execution_options(populate_existing=True)
        )
        staff_work = result.scalar_one_or_none()
        if not staff_work:
            raise NotFoundException("Staff work", staff_work_id)
        return staff_work

    async def create_staff_work(self, data: StaffWorkCreateRequest) -> StaffWork:
        """
        Log a piece of staff work.

        Raises:
            NotFoundException: Referenced staff, work item or client is missing
            ValidationException: Neither a work item nor a title was supplied
        """
        await self._require(Staff, "Staff", data.staff_id)
        if data.client_id is not None:
            await self._require(Client, "Client", data.client_id)

        staff_work = StaffWork(
            staff_id=data.staff_id,
            client_id=data.client_id,
            title=data.title or None,
            description=data.description,
        )
        if data.performed_at is not None:
            staff_work.performed_at = data.performed_at

        if data.work_item_id is not None:
            work_item = await self._require(WorkItem, "Work item", data.work_item_id)
            staff_work.work_item_id = work_item.id
            staff_work.quantity = data.quantity
            staff_work.unit_rate_nrs = (
                data.unit_rate_nrs if data.unit_rate_nrs is not None else work_item.rate_nrs
            )
        elif not data.title:
            raise ValidationException(
                "Title is required for staff work entries without a work item",
                field="title",
            )
        else:
            staff_work.quantity = data.quantity
            staff_work.unit_rate_nrs = data.unit_rate_nrs

        self.db.add(staff_work)
        await self.db.commit()

        logger.info(f"Logged staff work {staff_work.id} for staff {staff_work.staff_id}")
        return await self.get_staff_work(staff_work.id)

    async def update_staff_work(self, staff_work_id: int, data: StaffWorkUpdateRequest) -> StaffWork:
        """
        Apply a partial update.

        An explicit null work item unlinks it and clears quantity and rate.
        Linking a work item defaults the rate from it unless a rate is given.
        """
        staff_work = await self.get_staff_work(staff_work_id)
        changes = data.model_dump(exclude_unset=True)

        if "work_item_id" in changes:
            if changes["work_item_id"] is None:
                staff_work.work_item_id = None
                staff_work.quantity = None
                staff_work.unit_rate_nrs = None
            else:
                work_item = await self._require(WorkItem, "Work item", changes["work_item_id"])
                staff_work.work_item_id = work_item.id
                if "unit_rate_nrs" not in changes:
                    staff_work.unit_rate_nrs = work_item.rate_nrs

        if changes.get("staff_id") is not None:
            await self._require(Staff, "Staff", changes["staff_id"])
            staff_work.staff_id = changes["staff_id"]

        if "client_id" in changes:
            if changes["client_id"] is not None:
                await self._require(Client, "Client", changes["client_id"])
            staff_work.client_id = changes["client_id"]

        for key in ("title", "description", "quantity", "unit_rate_nrs"):
            if key in changes:
                setattr(staff_work, key, changes[key])

        if "performed_at" in changes:
            staff_work.performed_at = changes["performed_at"] or datetime.now()

        if staff_work.work_item_id is None and not staff_work.title:
            await self.db.rollback()
            raise ValidationException(
                "Either workItemId or title must be provided",
                field="title",
            )

        await self.db.commit()
        # Reload so relationships follow the updated ids
        return await self.get_staff_work(staff_work_id)

    async def delete_staff_work(self, staff_work_id: int) -> None:
        staff_work = await self.get_staff_work(staff_work_id)
        await self.db.delete(staff_work)
        await self.db.commit()
