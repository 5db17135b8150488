"""
Back Office Ledger - Services Package

Business logic services.
"""

from app.services.account_service import AccountService
from app.services.client_service import ClientService
from app.services.collaboration_service import CollaborationService
from app.services.email_service import EmailService
from app.services.expense_service import ExpenseService
from app.services.income_service import IncomeService
from app.services.influencer_service import InfluencerService
from app.services.payment_service import PaymentService
from app.services.reminder_service import ReminderService
from app.services.staff_service import StaffService
from app.services.staff_work_service import StaffWorkService
from app.services.work_item_service import WorkItemService

__all__ = [
    "AccountService",
    "ClientService",
    "CollaborationService",
    "EmailService",
    "ExpenseService",
    "IncomeService",
    "InfluencerService",
    "PaymentService",
    "ReminderService",
    "StaffService",
    "StaffWorkService",
    "WorkItemService",
]
