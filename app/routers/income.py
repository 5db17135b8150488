"""
Back Office Ledger - Income Router
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response
from app.schemas.ledger import IncomeCreateRequest, IncomeResponse, IncomeUpdateRequest
from app.services.income_service import IncomeService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List income")
async def list_income(db: AsyncSession = Depends(get_async_session)):
    service = IncomeService(db)
    incomes = await service.get_incomes()
    return success_response([IncomeResponse.model_validate(i) for i in incomes])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Record income")
async def create_income(
    request: IncomeCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = IncomeService(db)
    income = await service.create_income(request)
    return success_response(IncomeResponse.model_validate(income))


@router.get("/{income_id}", summary="Get income")
async def get_income(income_id: int, db: AsyncSession = Depends(get_async_session)):
    service = IncomeService(db)
    income = await service.get_income(income_id)
    return success_response(IncomeResponse.model_validate(income))


@router.patch("/{income_id}", summary="Update income")
async def update_income(
    income_id: int,
    request: IncomeUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = IncomeService(db)
    income = await service.update_income(income_id, request)
    return success_response(IncomeResponse.model_validate(income))


@router.delete("/{income_id}", summary="Delete income")
async def delete_income(income_id: int, db: AsyncSession = Depends(get_async_session)):
    service = IncomeService(db)
    await service.delete_income(income_id)
    return success_response(MessageResponse(message="Income deleted successfully"))
