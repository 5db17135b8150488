"""
Back Office Ledger - Staff Works Router

Log of work performed by staff, priced per unit.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response
from app.schemas.staff import StaffWorkCreateRequest, StaffWorkResponse, StaffWorkUpdateRequest
from app.services.staff_work_service import StaffWorkService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List staff works")
async def list_staff_works(db: AsyncSession = Depends(get_async_session)):
    service = StaffWorkService(db)
    works = await service.get_staff_works()
    return success_response([StaffWorkResponse.model_validate(w) for w in works])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Log staff work",
    description="Either workItemId or title is required. unitRateNrs defaults to the work item's rate.",
)
async def create_staff_work(
    request: StaffWorkCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = StaffWorkService(db)
    work = await service.create_staff_work(request)
    return success_response(StaffWorkResponse.model_validate(work))


@router.get("/{staff_work_id}", summary="Get staff work")
async def get_staff_work(staff_work_id: int, db: AsyncSession = Depends(get_async_session)):
    service = StaffWorkService(db)
    work = await service.get_staff_work(staff_work_id)
    return success_response(StaffWorkResponse.model_validate(work))


@router.patch("/{staff_work_id}", summary="Update staff work")
async def update_staff_work(
    staff_work_id: int,
    request: StaffWorkUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = StaffWorkService(db)
    work = await service.update_staff_work(staff_work_id, request)
    return success_response(StaffWorkResponse.model_validate(work))


@router.delete("/{staff_work_id}", summary="Delete staff work")
async def delete_staff_work(staff_work_id: int, db: AsyncSession = Depends(get_async_session)):
    service = StaffWorkService(db)
    await service.delete_staff_work(staff_work_id)
    return success_response(MessageResponse(message="Staff work deleted successfully"))
