"""
Back Office Ledger - Account Service

Aggregations over the ledger:
1. Account summary (totals, breakdowns and contract counts)
2. Staff work payout preview for a calendar month

Every aggregation runs under a deadline; a query that overruns it fails
the whole call with AggregationTimeoutException rather than returning a
partial result.
"""

import asyncio
import logging
from datetime import MAXYEAR, MINYEAR, datetime, timedelta
from typing import Awaitable, Dict, List, Optional, Tuple, TypeVar

from sqlalchemy import and_, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.client import Client, ClientType
from app.models.ledger import Expense, Income
from app.models.staff import Staff, StaffType, StaffWork, WorkItem
from app.schemas.account import (
    AccountSummary,
    ExpenseBySource,
    IncomeByClient,
    PayoutLine,
    PayoutPreview,
    PayoutWarning,
    StaffPayout,
    SummaryCounts,
    SummaryTotals,
)
from app.utils.error_handling import (
    AggregationTimeoutException,
    IncompletePayoutDataError,
    ValidationException,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNKNOWN_CLIENT = "Unknown"
NO_CLIENT = "No Client"

# Horizons for the contract expiry counters, in days
EXPIRY_HORIZONS = (30, 7, 1)


def month_window(month: int, year: int) -> Tuple[datetime, datetime]:
    """
    Return the half-open window [first day of month, first day of next month).

    Raises:
        ValidationException: month outside 1..12 or year outside the datetime range
    """
    if not 1 <= month <= 12:
        raise ValidationException(
            f"Month must be between 1 and 12, got {month}",
            field="month",
        )
    if not MINYEAR <= year < MAXYEAR:
        raise ValidationException(
            f"Year must be between {MINYEAR} and {MAXYEAR - 1}, got {year}",
            field="year",
        )

    start = datetime(year, month, 1)
    if month == 12:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month + 1, 1)
    return start, end


def price_staff_work(work: StaffWork) -> int:
    """
    Line total for a staff work row.

    Raises:
        IncompletePayoutDataError: quantity or unit rate is missing
    """
    missing = []
    if work.quantity is None:
        missing.append("quantity")
    if work.unit_rate_nrs is None:
        missing.append("unitRateNrs")
    if missing:
        raise IncompletePayoutDataError(work.id, work.staff_id, missing)
    return work.quantity * work.unit_rate_nrs


class AccountService:
    """Service for account aggregations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _bounded(
        self,
        operation: str,
        work: Awaitable[T],
        timeout_seconds: Optional[float] = None,
    ) -> T:
        timeout = settings.aggregation_timeout_seconds if timeout_seconds is None else timeout_seconds
        try:
            return await asyncio.wait_for(work, timeout=timeout)
        except asyncio.TimeoutError:
            logger.error(f"{operation} exceeded {timeout}s deadline")
            raise AggregationTimeoutException(operation, timeout)

    # ===========================================
    # SUMMARY
    # ===========================================

    async def get_summary(
        self,
        now: Optional[datetime] = None,
        timeout_seconds: Optional[float] = None,
    ) -> AccountSummary:
        """Point-in-time financial snapshot."""
        return await self._bounded(
            "Account summary",
            self._compute_summary(now or datetime.now()),
            timeout_seconds,
        )

    async def _compute_summary(self, now: datetime) -> AccountSummary:
        total_income = await self.db.scalar(
            select(func.coalesce(func.sum(Income.amount_nrs), 0))
        )
        total_expense = await self.db.scalar(
            select(func.coalesce(func.sum(Expense.amount_nrs), 0))
        )
        total_income = int(total_income or 0)
        total_expense = int(total_expense or 0)

        return AccountSummary(
            totals=SummaryTotals(
                total_income_nrs=total_income,
                total_expense_nrs=total_expense,
                net_nrs=total_income - total_expense,
            ),
            income_by_client=await self._income_by_client(),
            expense_by_source=await self._expense_by_source(),
            counts=await self._counts(now),
        )

    async def _income_by_client(self) -> List[IncomeByClient]:
        result = await self.db.execute(
            select(
                Income.client_id,
                func.coalesce(Client.name, UNKNOWN_CLIENT).label("name"),
                func.sum(Income.amount_nrs).label("total"),
            )
            .outerjoin(Client, Income.client_id == Client.id)
            .group_by(Income.client_id, Client.name)
            .order_by(Income.client_id)
        )
        return [
            IncomeByClient(client_id=row.client_id, name=row.name, total=int(row.total))
            for row in result.all()
        ]

    async def _expense_by_source(self) -> List[ExpenseBySource]:
        result = await self.db.execute(
            select(
                Expense.source,
                func.sum(Expense.amount_nrs).label("total"),
            ).group_by(Expense.source)
        )
        # Native enum ordering differs per backend, sort by name here
        rows = sorted(result.all(), key=lambda row: row.source.value)
        return [ExpenseBySource(source=row.source, total=int(row.total)) for row in rows]

    async def _counts(self, now: datetime) -> SummaryCounts:
        def expiring_within(days: int):
            window = and_(
                Client.contract_start_date > now,
                Client.contract_start_date <= now + timedelta(days=days),
            )
            return func.coalesce(func.sum(case((window, 1), else_=0)), 0)

        client_row = (await self.db.execute(
            select(
                func.count(Client.id).label("active"),
                *[expiring_within(days).label(f"within_{days}") for days in EXPIRY_HORIZONS],
            ).where(Client.type == ClientType.ACTIVE)
        )).one()

        active_staff = await self.db.scalar(
            select(func.count(Staff.id)).where(Staff.is_active.is_(True))
        )

        active_clients = int(client_row.active or 0)
        return SummaryCounts(
            active_clients=active_clients,
            active_staff=int(active_staff or 0),
            open_contracts=active_clients,
            contracts_expiring_in_30_days=int(client_row.within_30 or 0),
            contracts_expiring_in_7_days=int(client_row.within_7 or 0),
            contracts_expiring_in_1_day=int(client_row.within_1 or 0),
        )

    # ===========================================
    # PAYOUT PREVIEW
    # ===========================================

    async def get_staff_work_payout_preview(
        self,
        month: int,
        year: int,
        staff_id: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
    ) -> PayoutPreview:
        """
        Payout owed to WORK_BASIS staff for work performed in the given month.

        Rows that cannot be priced are excluded and reported in
        PayoutPreview.warnings instead of failing the whole preview.
        """
        start, end = month_window(month, year)
        return await self._bounded(
            "Staff work payout preview",
            self._compute_payout(start, end, staff_id),
            timeout_seconds,
        )

    async def _compute_payout(
        self,
        start: datetime,
        end: datetime,
        staff_id: Optional[int],
    ) -> PayoutPreview:
        query = (
            select(
                StaffWork,
                Staff.name.label("staff_name"),
                WorkItem.title.label("work_item_title"),
                Client.name.label("client_name"),
            )
            .join(Staff, StaffWork.staff_id == Staff.id)
            .outerjoin(WorkItem, StaffWork.work_item_id == WorkItem.id)
            .outerjoin(Client, StaffWork.client_id == Client.id)
            .where(
                Staff.type == StaffType.WORK_BASIS,
                StaffWork.performed_at >= start,
                StaffWork.performed_at < end,
            )
            .order_by(StaffWork.performed_at, StaffWork.id)
        )
        if staff_id is not None:
            query = query.where(StaffWork.staff_id == staff_id)

        result = await self.db.execute(query)

        payouts: Dict[int, StaffPayout] = {}
        warnings: List[PayoutWarning] = []

        for work, staff_name, work_item_title, client_name in result.all():
            try:
                line_total = price_staff_work(work)
            except IncompletePayoutDataError as e:
                logger.warning(f"Excluding staff work from payout preview: {e.message}")
                warnings.append(PayoutWarning(
                    staff_work_id=e.staff_work_id,
                    staff_id=e.staff_id,
                    message=e.message,
                ))
                continue

            payout = payouts.get(work.staff_id)
            if payout is None:
                payout = StaffPayout(staff_id=work.staff_id, staff_name=staff_name)
                payouts[work.staff_id] = payout

            payout.works.append(PayoutLine(
                id=work.id,
                work_item=work_item_title or work.title,
                client=client_name or NO_CLIENT,
                quantity=work.quantity,
                unit_rate=work.unit_rate_nrs,
                total=line_total,
                performed_at=work.performed_at,
            ))
            payout.total_amount += line_total

        return PayoutPreview(staff=list(payouts.values()), warnings=warnings)
