"""
Back Office Ledger - Staff Service

Business logic for staff members and monthly salary payouts.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.ledger import Expense, ExpenseSource
from app.models.staff import Staff, StaffType, StaffWork
from app.schemas.staff import MonthlyPayoutRequest, StaffCreateRequest, StaffUpdateRequest
from app.utils.error_handling import BusinessRuleException, InvalidDateRangeException, NotFoundException

logger = logging.getLogger(__name__)


@dataclass
class StaffDetails:
    """Staff member with the works and expenses inside a date filter."""
    staff: Staff
    staff_works: List[StaffWork] = field(default_factory=list)
    expenses: List[Expense] = field(default_factory=list)


class StaffService:
    """Service for staff operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_staff_list(self) -> List[Staff]:
        result = await self.db.execute(select(Staff).order_by(Staff.name, Staff.id))
        return list(result.scalars().all())

    async def get_staff(self, staff_id: int) -> Staff:
        """
        Get staff member by ID.

        Raises:
            NotFoundException: If the staff member does not exist
        """
        staff = await self.db.get(Staff, staff_id)
        if not staff:
            raise NotFoundException("Staff", staff_id)
        return staff

    async def get_staff_details(
        self,
        staff_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> StaffDetails:
        """
        Staff member with works (by performed_at) and expenses (by paid_at)
        inside the optional inclusive date range, newest first.
        """
        if start_date and end_date and start_date > end_date:
            raise InvalidDateRangeException(start_date.isoformat(), end_date.isoformat())

        staff = await self.get_staff(staff_id)

        works_query = (
            select(StaffWork)
            .options(
                selectinload(StaffWork.staff),
                selectinload(StaffWork.work_item),
                selectinload(StaffWork.client),
            )
            .where(StaffWork.staff_id == staff_id)
            .order_by(StaffWork.performed_at.desc(), StaffWork.id.desc())
        )
        expenses_query = (
            select(Expense)
            .where(Expense.staff_id == staff_id)
            .order_by(Expense.paid_at.desc(), Expense.id.desc())
        )

        if start_date:
            works_query = works_query.where(StaffWork.performed_at >= start_date)
            expenses_query = expenses_query.where(Expense.paid_at >= start_date)
        if end_date:
            works_query = works_query.where(StaffWork.performed_at <= end_date)
            expenses_query = expenses_query.where(Expense.paid_at <= end_date)

        works = (await self.db.execute(works_query)).scalars().all()
        expenses = (await self.db.execute(expenses_query)).scalars().all()

        return StaffDetails(staff=staff, staff_works=list(works), expenses=list(expenses))

    async def create_staff(self, data: StaffCreateRequest) -> Staff:
        staff = Staff(**data.model_dump())
        self.db.add(staff)
        await self.db.commit()
        await self.db.refresh(staff)

        logger.info(f"Created staff {staff.id} ({staff.name}, {staff.type.value})")
        return staff

    async def update_staff(self, staff_id: int, data: StaffUpdateRequest) -> Staff:
        staff = await self.get_staff(staff_id)

        for key, value in data.model_dump(exclude_unset=True).items():
            if value is None and key != "monthly_salary_nrs":
                continue
            setattr(staff, key, value)

        await self.db.commit()
        await self.db.refresh(staff)
        return staff

    async def delete_staff(self, staff_id: int) -> None:
        """Delete a staff member. Fails with an integrity error while work entries reference it."""
        staff = await self.get_staff(staff_id)
        await self.db.delete(staff)
        await self.db.commit()
        logger.info(f"Deleted staff {staff_id}")

    async def monthly_payout(self, staff_id: int, data: MonthlyPayoutRequest) -> Expense:
        """
        Record a salary payout as a STAFF_MONTHLY expense.

        Raises:
            NotFoundException: If the staff member does not exist
            BusinessRuleException: If the staff member is not MONTHLY
        """
        staff = await self.get_staff(staff_id)

        if staff.type != StaffType.MONTHLY:
            raise BusinessRuleException(
                "Monthly payout is only available for MONTHLY staff",
                rule="MONTHLY_STAFF_ONLY",
                details={"staff_id": staff_id, "staff_type": staff.type.value},
            )

        expense = Expense(
            staff_id=staff_id,
            amount_nrs=data.amount_nrs,
            source=ExpenseSource.STAFF_MONTHLY,
            note=data.note,
            paid_at=data.paid_at or datetime.now(),
        )
        self.db.add(expense)
        await self.db.commit()
        await self.db.refresh(expense)

        logger.info(f"Recorded monthly payout of {data.amount_nrs} NPR for staff {staff_id}")
        return expense
