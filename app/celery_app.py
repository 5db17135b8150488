"""
Back Office Ledger - Celery Configuration

Celery configuration for background task processing.
Uses Redis as the message broker and result backend.
"""

from celery import Celery
from celery.schedules import crontab

from app.config import settings


# Create Celery app
celery_app = Celery(
    'backoffice_ledger',
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=['app.tasks.celery_tasks'],
)

# Celery configuration
celery_app.conf.update(
    # Serialization
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',

    # Beat crontabs are read in this timezone
    timezone=settings.reminder_timezone,
    enable_utc=True,

    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_time_limit=300,  # 5 minutes
    task_soft_time_limit=240,  # 4 minutes (warning before hard limit)

    # Worker settings
    worker_prefetch_multiplier=1,

    # Result backend settings
    result_expires=86400,  # 24 hours

    # Beat schedule for periodic tasks
    beat_schedule={
        # Contract expiry reminders once a day
        'contract-expiry-reminders': {
            'task': 'app.tasks.celery_tasks.contract_expiry_reminders_task',
            'schedule': crontab(hour=settings.reminder_hour, minute=0),
        },

        # Overdue influencer payments once a day
        'mark-overdue-payments': {
            'task': 'app.tasks.celery_tasks.mark_overdue_payments_task',
            'schedule': crontab(hour=settings.payment_overdue_sweep_hour, minute=0),
        },
    },
)
