"""
Back Office Ledger - Routers Package

FastAPI route handlers.

Routers:
- accounts: Financial summary and staff work payout preview
- clients: Client management and account adjustment
- staff: Staff management and monthly salary payouts
- work_items: Priced work catalogue
- staff_works: Staff work log
- income: Client income records
- expenses: Expense records
- reminders: Admin reminders and the contract expiry scan
- influencers: Influencer management
- collaborations: Influencer campaigns
- payments: Influencer payments, overdue sweep and reports
"""

from app.routers import (
    accounts,
    clients,
    collaborations,
    expenses,
    income,
    influencers,
    payments,
    reminders,
    staff,
    staff_works,
    work_items,
)

__all__ = [
    "accounts",
    "clients",
    "collaborations",
    "expenses",
    "income",
    "influencers",
    "payments",
    "reminders",
    "staff",
    "staff_works",
    "work_items",
]
