"""
Back Office Ledger - Expenses Router
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response
from app.schemas.ledger import ExpenseCreateRequest, ExpenseResponse, ExpenseUpdateRequest
from app.services.expense_service import ExpenseService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List expenses")
async def list_expenses(db: AsyncSession = Depends(get_async_session)):
    service = ExpenseService(db)
    expenses = await service.get_expenses()
    return success_response([ExpenseResponse.model_validate(e) for e in expenses])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Record expense")
async def create_expense(
    request: ExpenseCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = ExpenseService(db)
    expense = await service.create_expense(request)
    return success_response(ExpenseResponse.model_validate(expense))


@router.get("/{expense_id}", summary="Get expense")
async def get_expense(expense_id: int, db: AsyncSession = Depends(get_async_session)):
    service = ExpenseService(db)
    expense = await service.get_expense(expense_id)
    return success_response(ExpenseResponse.model_validate(expense))


@router.patch("/{expense_id}", summary="Update expense")
async def update_expense(
    expense_id: int,
    request: ExpenseUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = ExpenseService(db)
    expense = await service.update_expense(expense_id, request)
    return success_response(ExpenseResponse.model_validate(expense))


@router.delete("/{expense_id}", summary="Delete expense")
async def delete_expense(expense_id: int, db: AsyncSession = Depends(get_async_session)):
    service = ExpenseService(db)
    await service.delete_expense(expense_id)
    return success_response(MessageResponse(message="Expense deleted successfully"))
