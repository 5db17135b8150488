"""
Back Office Ledger - SQLAlchemy Models Package

This package contains all database models for the application.
"""

from app.models.base import BaseModel, TimestampMixin
from app.models.reminder import (
    AdminReminder,
    ReminderType,
    ReminderPriority,
    ReminderStage,
    PRIORITY_RANK,
)
from app.models.client import Client, ClientType
from app.models.staff import Staff, StaffType, WorkItem, StaffWork
from app.models.ledger import Income, Expense, ExpenseSource
from app.models.influencer import (
    Influencer,
    SocialHandle,
    SocialPlatform,
    Collaboration,
    Payment,
    PaymentStatus,
    PaymentMethod,
)

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "AdminReminder",
    "ReminderType",
    "ReminderPriority",
    "ReminderStage",
    "PRIORITY_RANK",
    "Client",
    "ClientType",
    "Staff",
    "StaffType",
    "WorkItem",
    "StaffWork",
    "Income",
    "Expense",
    "ExpenseSource",
    "Influencer",
    "SocialHandle",
    "SocialPlatform",
    "Collaboration",
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
]
