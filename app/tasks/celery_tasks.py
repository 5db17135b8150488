"""
Back Office Ledger - Celery Tasks

Celery entry points for the scheduled jobs in app.tasks.scheduled_tasks.
"""

import asyncio
import logging
from typing import Any, Dict

from celery import shared_task

from app.database import async_session_maker, engine
from app.tasks.scheduled_tasks import (
    TaskRunner,
    mark_overdue_payments,
    run_contract_expiry_reminders,
)

logger = logging.getLogger(__name__)


def run_async(coro):
    """Helper to run async functions in Celery tasks."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


async def _run_job(task_func) -> Dict[str, Any]:
    try:
        return await TaskRunner(async_session_maker).run_task(task_func)
    finally:
        # Pooled connections are bound to this task's event loop
        await engine.dispose()


@shared_task(name='app.tasks.celery_tasks.contract_expiry_reminders_task')
def contract_expiry_reminders_task() -> Dict[str, Any]:
    """Daily contract expiry scan and admin notification."""
    return run_async(_run_job(run_contract_expiry_reminders))


@shared_task(name='app.tasks.celery_tasks.mark_overdue_payments_task')
def mark_overdue_payments_task() -> Dict[str, Any]:
    """Daily sweep of PENDING payments past their due date."""
    return run_async(_run_job(mark_overdue_payments))
