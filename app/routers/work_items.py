"""
Back Office Ledger - Work Items Router
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response
from app.schemas.staff import WorkItemCreateRequest, WorkItemResponse, WorkItemUpdateRequest
from app.services.work_item_service import WorkItemService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List work items")
async def list_work_items(db: AsyncSession = Depends(get_async_session)):
    service = WorkItemService(db)
    items = await service.get_work_items()
    return success_response([WorkItemResponse.model_validate(i) for i in items])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create work item")
async def create_work_item(
    request: WorkItemCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = WorkItemService(db)
    item = await service.create_work_item(request)
    return success_response(WorkItemResponse.model_validate(item))


@router.get("/{work_item_id}", summary="Get work item")
async def get_work_item(work_item_id: int, db: AsyncSession = Depends(get_async_session)):
    service = WorkItemService(db)
    item = await service.get_work_item(work_item_id)
    return success_response(WorkItemResponse.model_validate(item))


@router.patch("/{work_item_id}", summary="Update work item")
async def update_work_item(
    work_item_id: int,
    request: WorkItemUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = WorkItemService(db)
    item = await service.update_work_item(work_item_id, request)
    return success_response(WorkItemResponse.model_validate(item))


@router.delete("/{work_item_id}", summary="Delete work item")
async def delete_work_item(work_item_id: int, db: AsyncSession = Depends(get_async_session)):
    service = WorkItemService(db)
    await service.delete_work_item(work_item_id)
    return success_response(MessageResponse(message="Work item deleted successfully"))
