"""
Back Office Ledger - Background Tasks

Scheduled job definitions. Each job takes an AsyncSession so it can be run
by the Celery worker, by TaskRunner in development, or directly in tests
with a fixed clock.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.services.email_service import EmailService
from app.services.payment_service import PaymentService
from app.services.reminder_service import ReminderService

logger = logging.getLogger(__name__)


# ===========================================
# SCHEDULED TASK: CONTRACT EXPIRY REMINDERS
# ===========================================

async def run_contract_expiry_reminders(
    db: AsyncSession,
    now: Optional[datetime] = None,
    email_service: Optional[EmailService] = None,
) -> dict:
    """
    Daily contract expiry scan.
    Should run once a day at the configured reminder hour.
    """
    service = ReminderService(db, email_service=email_service)
    result = await service.send_contract_expiry_reminders(now)
    return result.model_dump(by_alias=True)


# ===========================================
# SCHEDULED TASK: PAYMENT OVERDUE SWEEP
# ===========================================

async def mark_overdue_payments(db: AsyncSession, now: Optional[datetime] = None) -> dict:
    """
    Move PENDING influencer payments past their due date to OVERDUE.
    Should run daily.
    """
    count = await PaymentService(db).mark_overdue(now)
    return {"markedOverdue": count}


class TaskRunner:
    """
    Runs job functions with a fresh database session each.
    Used by the Celery tasks and for running jobs by hand in development.
    """

    def __init__(self, db_session_factory):
        self.db_session_factory = db_session_factory

    async def run_task(self, task_func, *args, **kwargs):
        """Run a single task with a new database session."""
        async with self.db_session_factory() as db:
            try:
                result = await task_func(db, *args, **kwargs)
                logger.info(f"Task {task_func.__name__} completed: {result}")
                return result
            except Exception as e:
                logger.error(f"Task {task_func.__name__} failed: {e}")
                raise
