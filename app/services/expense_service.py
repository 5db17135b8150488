"""
Back Office Ledger - Expense Service
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.ledger import Expense
from app.models.staff import Staff
from app.schemas.ledger import ExpenseCreateRequest, ExpenseUpdateRequest
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for expense records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_staff(self, staff_id: int) -> None:
        if not await self.db.get(Staff, staff_id):
            raise NotFoundException("Staff", staff_id)

    async def get_expenses(self) -> List[Expense]:
        result = await self.db.execute(
            select(Expense).order_by(Expense.paid_at.desc(), Expense.id.desc())
        )
        return list(result.scalars().all())

    async def get_expense(self, expense_id: int) -> Expense:
        expense = await self.db.get(Expense, expense_id)
        if not expense:
            raise NotFoundException("Expense", expense_id)
        return expense

    async def create_expense(self, data: ExpenseCreateRequest) -> Expense:
        if data.staff_id is not None:
            await self._require_staff(data.staff_id)

        expense = Expense(
            staff_id=data.staff_id,
            amount_nrs=data.amount_nrs,
            source=data.source,
            note=data.note,
            paid_at=data.paid_at or datetime.now(),
        )
        self.db.add(expense)
        await self.db.commit()
        await self.db.refresh(expense)

        logger.info(f"Recorded expense {expense.id} of {expense.amount_nrs} NPR ({expense.source.value})")
        return expense

    async def update_expense(self, expense_id: int, data: ExpenseUpdateRequest) -> Expense:
        expense = await self.get_expense(expense_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("staff_id") is not None:
            await self._require_staff(changes["staff_id"])

        for key, value in changes.items():
            if value is None and key not in ("staff_id", "note"):
                continue
            setattr(expense, key, value)

        await self.db.commit()
        await self.db.refresh(expense)
        return expense

    async def delete_expense(self, expense_id: int) -> None:
        expense = await self.get_expense(expense_id)
        await self.db.delete(expense)
        await self.db.commit()
