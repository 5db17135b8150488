"""
Back Office Ledger - Reminders Router

Admin reminders and the contract expiry scan.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_async_session
from app.dependencies import get_current_admin
from app.schemas.common import MessageResponse, success_response
from app.schemas.reminder import ReminderCreateRequest, ReminderResponse, ReminderUpdateRequest
from app.services.reminder_service import ReminderService


router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", summary="List reminders")
async def list_reminders(
    include_completed: bool = Query(True, alias="includeCompleted"),
    db: AsyncSession = Depends(get_async_session),
):
    service = ReminderService(db)
    reminders = await service.list_reminders(include_completed=include_completed)
    return success_response([ReminderResponse.model_validate(r) for r in reminders])


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create reminder")
async def create_reminder(
    request: ReminderCreateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = ReminderService(db)
    reminder = await service.create_reminder(request)
    return success_response(ReminderResponse.model_validate(reminder))


@router.get(
    "/active",
    summary="Active reminders",
    description="Open reminders not yet due, most urgent first then soonest due.",
)
async def get_active_reminders(db: AsyncSession = Depends(get_async_session)):
    service = ReminderService(db)
    reminders = await service.get_active_reminders()
    return success_response([ReminderResponse.model_validate(r) for r in reminders])


@router.get(
    "/dry-run",
    summary="Preview contract expiry scan",
    description="Clients the scan would pick up right now and the active reminders. Writes nothing.",
)
async def dry_run(db: AsyncSession = Depends(get_async_session)):
    service = ReminderService(db)
    return success_response(await service.get_dry_run())


@router.post(
    "/run",
    summary="Run contract expiry scan",
    description="Trigger the daily scan now. Returns skipped=true if a scan is already running.",
)
async def run_scan(db: AsyncSession = Depends(get_async_session)):
    service = ReminderService(db)
    return success_response(await service.send_contract_expiry_reminders())


@router.get("/{reminder_id}", summary="Get reminder")
async def get_reminder(reminder_id: int, db: AsyncSession = Depends(get_async_session)):
    service = ReminderService(db)
    reminder = await service.get_reminder(reminder_id)
    return success_response(ReminderResponse.model_validate(reminder))


@router.patch("/{reminder_id}/complete", summary="Mark reminder completed")
async def mark_reminder_completed(reminder_id: int, db: AsyncSession = Depends(get_async_session)):
    service = ReminderService(db)
    reminder = await service.mark_reminder_completed(reminder_id)
    return success_response(ReminderResponse.model_validate(reminder))


@router.patch("/{reminder_id}", summary="Update reminder")
async def update_reminder(
    reminder_id: int,
    request: ReminderUpdateRequest,
    db: AsyncSession = Depends(get_async_session),
):
    service = ReminderService(db)
    reminder = await service.update_reminder(reminder_id, request)
    return success_response(ReminderResponse.model_validate(reminder))


@router.delete("/{reminder_id}", summary="Delete reminder")
async def delete_reminder(reminder_id: int, db: AsyncSession = Depends(get_async_session)):
    service = ReminderService(db)
    await service.delete_reminder(reminder_id)
    return success_response(MessageResponse(message="Reminder deleted successfully"))
