"""
Back Office Ledger - Account Schemas

Shapes returned by the account summary and staff payout preview.
"""

from datetime import datetime
from typing import List, Optional

from app.models.ledger import ExpenseSource
from app.schemas.common import CamelModel


# ===========================================
# SUMMARY
# ===========================================

class SummaryTotals(CamelModel):
    total_income_nrs: int = 0
    total_expense_nrs: int = 0
    net_nrs: int = 0


class IncomeByClient(CamelModel):
    client_id: int
    name: str
    total: int


class ExpenseBySource(CamelModel):
    source: ExpenseSource
    total: int


class SummaryCounts(CamelModel):
    active_clients: int = 0
    active_staff: int = 0
    open_contracts: int = 0
    contracts_expiring_in_30_days: int = 0
    contracts_expiring_in_7_days: int = 0
    contracts_expiring_in_1_day: int = 0


class AccountSummary(CamelModel):
    """Point-in-time financial snapshot."""
    totals: SummaryTotals
    income_by_client: List[IncomeByClient] = []
    expense_by_source: List[ExpenseBySource] = []
    counts: SummaryCounts


# ===========================================
# PAYOUT PREVIEW
# ===========================================

class PayoutLine(CamelModel):
    id: int
    work_item: Optional[str] = None
    client: str
    quantity: int
    unit_rate: int
    total: int
    performed_at: datetime


class StaffPayout(CamelModel):
    staff_id: int
    staff_name: str
    total_amount: int = 0
    works: List[PayoutLine] = []


class PayoutWarning(CamelModel):
    """A staff work row excluded from the preview."""
    staff_work_id: int
    staff_id: int
    message: str


class PayoutPreview(CamelModel):
    staff: List[StaffPayout] = []
    warnings: List[PayoutWarning] = []
