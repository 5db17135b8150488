"""
Back Office Ledger - Income Service
"""

import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.client import Client
from app.models.ledger import Income
from app.schemas.ledger import IncomeCreateRequest, IncomeUpdateRequest
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)


class IncomeService:
    """Service for income records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _require_client(self, client_id: int) -> None:
        if not await self.db.get(Client, client_id):
            raise NotFoundException("Client", client_id)

    async def get_incomes(self) -> List[Income]:
        result = await self.db.execute(
            select(Income)
            .options(selectinload(Income.client))
            .order_by(Income.received_at.desc(), Income.id.desc())
        )
        return list(result.scalars().all())

    async def get_income(self, income_id: int) -> Income:
        result = await self.db.execute(
            select(Income)
            .options(selectinload(Income.client))
            .where(Income.id == income_id)
            .execution_options(populate_existing=True)
        )
        income = result.scalar_one_or_none()
        if not income:
            raise NotFoundException("Income", income_id)
        return income

    async def create_income(self, data: IncomeCreateRequest) -> Income:
        await self._require_client(data.client_id)

        income = Income(
            client_id=data.client_id,
            amount_nrs=data.amount_nrs,
            note=data.note,
            received_at=data.received_at or datetime.now(),
        )
        self.db.add(income)
        await self.db.commit()

        logger.info(f"Recorded income {income.id} of {income.amount_nrs} NPR from client {income.client_id}")
        return await self.get_income(income.id)

    async def update_income(self, income_id: int, data: IncomeUpdateRequest) -> Income:
        income = await self.get_income(income_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("client_id") is not None:
            await self._require_client(changes["client_id"])

        for key, value in changes.items():
            if value is None and key != "note":
                continue
            setattr(income, key, value)

        await self.db.commit()
        return await self.get_income(income_id)

    async def delete_income(self, income_id: int) -> None:
        income = await self.get_income(income_id)
        await self.db.delete(income)
        await self.db.commit()
