"""
Back Office Ledger - Background Tasks Package

Scheduled jobs and their Celery wrappers.
"""

from app.tasks.scheduled_tasks import (
    mark_overdue_payments,
    run_contract_expiry_reminders,
    TaskRunner,
)

__all__ = [
    "mark_overdue_payments",
    "run_contract_expiry_reminders",
    "TaskRunner",
]
