"""
Back Office Ledger - Account Service Tests

Unit tests for the account summary and the staff work payout preview.
"""

import asyncio
from datetime import datetime, timedelta

import pytest

from app.models.client import Client, ClientType
from app.models.ledger import Expense, ExpenseSource, Income
from app.models.staff import Staff, StaffType, StaffWork
from app.services.account_service import AccountService, month_window, price_staff_work
from app.utils.error_handling import (
    AggregationTimeoutException,
    IncompletePayoutDataError,
    ValidationException,
)
from tests.conftest import NOW


def _work(staff, work_item, quantity, rate, performed_at, client=None):
    return StaffWork(
        staff_id=staff.id,
        work_item_id=work_item.id if work_item else None,
        client_id=client.id if client else None,
        quantity=quantity,
        unit_rate_nrs=rate,
        performed_at=performed_at,
    )


class TestAccountSummary:
    """Test cases for AccountService.get_summary."""

    @pytest.mark.asyncio
    async def test_empty_ledger_returns_zeros(self, db_session):
        """An empty ledger produces zero totals and empty breakdowns."""
        service = AccountService(db_session)

        summary = await service.get_summary(now=NOW)

        assert summary.totals.total_income_nrs == 0
        assert summary.totals.total_expense_nrs == 0
        assert summary.totals.net_nrs == 0
        assert summary.income_by_client == []
        assert summary.expense_by_source == []
        assert summary.counts.active_clients == 0

    @pytest.mark.asyncio
    async def test_summary_scenario(self, db_session, test_client_record, other_client_record):
        """Totals and breakdowns for a small mixed ledger."""
        db_session.add_all([
            Income(client_id=test_client_record.id, amount_nrs=1000),
            Income(client_id=test_client_record.id, amount_nrs=500),
            Income(client_id=other_client_record.id, amount_nrs=300),
            Expense(amount_nrs=200, source=ExpenseSource.GENERAL),
            Expense(amount_nrs=400, source=ExpenseSource.STAFF_MONTHLY),
        ])
        await db_session.commit()

        summary = await AccountService(db_session).get_summary(now=NOW)

        assert summary.totals.total_income_nrs == 1800
        assert summary.totals.total_expense_nrs == 600
        assert summary.totals.net_nrs == 1200

        by_client = {row.client_id: (row.name, row.total) for row in summary.income_by_client}
        assert by_client == {
            test_client_record.id: ("Himalayan Traders", 1500),
            other_client_record.id: ("Everest Foods", 300),
        }

        by_source = [(row.source, row.total) for row in summary.expense_by_source]
        assert by_source == [(ExpenseSource.GENERAL, 200), (ExpenseSource.STAFF_MONTHLY, 400)]

    @pytest.mark.asyncio
    async def test_breakdowns_add_up_to_totals(self, db_session, test_client_record, monthly_staff):
        """Breakdown lists sum to the totals and net may go negative."""
        db_session.add_all([
            Income(client_id=test_client_record.id, amount_nrs=700),
            Expense(staff_id=monthly_staff.id, amount_nrs=60000, source=ExpenseSource.STAFF_MONTHLY),
            Expense(amount_nrs=1500, source=ExpenseSource.STAFF_WORK_BASIS),
        ])
        await db_session.commit()

        summary = await AccountService(db_session).get_summary(now=NOW)

        assert sum(row.total for row in summary.income_by_client) == summary.totals.total_income_nrs
        assert sum(row.total for row in summary.expense_by_source) == summary.totals.total_expense_nrs
        assert summary.totals.net_nrs == 700 - 61500
        assert ExpenseSource.GENERAL not in {row.source for row in summary.expense_by_source}

    @pytest.mark.asyncio
    async def test_counts(self, db_session, work_basis_staff, monthly_staff):
        """Active counts and contract expiry horizons anchored on the start date."""
        monthly_staff.is_active = False

        def client(name, start, client_type=ClientType.ACTIVE):
            return Client(
                name=name,
                email=f"{name}@clients.com",
                contract_start_date=start,
                contract_duration_days=90,
                type=client_type,
            )

        db_session.add_all([
            client("within-1", NOW + timedelta(hours=12)),
            client("within-7", NOW + timedelta(days=5)),
            client("within-30", NOW + timedelta(days=20)),
            client("beyond-30", NOW + timedelta(days=40)),
            client("started", NOW - timedelta(days=1)),
            client("prospect", NOW + timedelta(days=2), ClientType.PROSPECT),
        ])
        await db_session.commit()

        counts = (await AccountService(db_session).get_summary(now=NOW)).counts

        assert counts.active_clients == 5
        assert counts.open_contracts == 5
        assert counts.active_staff == 1
        assert counts.contracts_expiring_in_1_day == 1
        assert counts.contracts_expiring_in_7_days == 2
        assert counts.contracts_expiring_in_30_days == 3

    @pytest.mark.asyncio
    async def test_deadline_exceeded(self, db_session):
        """An aggregation that overruns its deadline fails as a whole."""
        service = AccountService(db_session)

        with pytest.raises(AggregationTimeoutException) as exc_info:
            await service._bounded("Slow aggregation", asyncio.sleep(1), timeout_seconds=0.01)

        assert exc_info.value.status_code == 504

    @pytest.mark.asyncio
    async def test_zero_deadline_is_not_the_default(self, db_session):
        service = AccountService(db_session)

        with pytest.raises(AggregationTimeoutException) as exc_info:
            await service._bounded("Slow aggregation", asyncio.sleep(1), timeout_seconds=0)

        assert exc_info.value.details["timeout_seconds"] == 0


class TestStaffWorkPayoutPreview:
    """Test cases for AccountService.get_staff_work_payout_preview."""

    @pytest.mark.asyncio
    async def test_payout_total(self, db_session, work_basis_staff, test_work_item, test_client_record):
        """Line totals are quantity x rate and accumulate per staff member."""
        db_session.add_all([
            _work(work_basis_staff, test_work_item, 3, 500, datetime(2026, 10, 5), test_client_record),
            _work(work_basis_staff, test_work_item, 2, 200, datetime(2026, 10, 6)),
        ])
        await db_session.commit()

        preview = await AccountService(db_session).get_staff_work_payout_preview(10, 2026)

        assert len(preview.staff) == 1
        payout = preview.staff[0]
        assert payout.staff_id == work_basis_staff.id
        assert payout.staff_name == "Ram Thapa"
        assert payout.total_amount == 1900
        assert [line.total for line in payout.works] == [1500, 400]
        assert payout.works[0].work_item == "Poster design"
        assert payout.works[0].client == "Himalayan Traders"
        assert payout.works[1].client == "No Client"
        assert preview.warnings == []

    @pytest.mark.asyncio
    async def test_month_boundary(self, db_session, work_basis_staff, test_work_item):
        """Work on the last day of the month counts; the first day of the next month does not."""
        db_session.add_all([
            _work(work_basis_staff, test_work_item, 1, 100, datetime(2026, 9, 30, 23, 59, 59)),
            _work(work_basis_staff, test_work_item, 1, 200, datetime(2026, 10, 1, 0, 0, 0)),
            _work(work_basis_staff, test_work_item, 1, 300, datetime(2026, 10, 31, 23, 59, 59)),
            _work(work_basis_staff, test_work_item, 1, 400, datetime(2026, 11, 1, 0, 0, 0)),
        ])
        await db_session.commit()

        preview = await AccountService(db_session).get_staff_work_payout_preview(
            10, 2026, staff_id=work_basis_staff.id
        )

        assert preview.staff[0].total_amount == 500

    @pytest.mark.asyncio
    async def test_december_rolls_into_next_year(self, db_session, work_basis_staff, test_work_item):
        db_session.add_all([
            _work(work_basis_staff, test_work_item, 1, 250, datetime(2026, 12, 31, 18, 0)),
            _work(work_basis_staff, test_work_item, 1, 999, datetime(2027, 1, 1, 0, 0)),
        ])
        await db_session.commit()

        preview = await AccountService(db_session).get_staff_work_payout_preview(12, 2026)

        assert preview.staff[0].total_amount == 250

    @pytest.mark.asyncio
    async def test_monthly_staff_excluded(self, db_session, monthly_staff, test_work_item):
        db_session.add(_work(monthly_staff, test_work_item, 4, 500, datetime(2026, 10, 10)))
        await db_session.commit()

        preview = await AccountService(db_session).get_staff_work_payout_preview(10, 2026)

        assert preview.staff == []

    @pytest.mark.asyncio
    async def test_incomplete_row_is_reported_not_priced(self, db_session, work_basis_staff, test_work_item):
        """A linked row without a quantity is excluded and surfaced as a warning."""
        good = _work(work_basis_staff, test_work_item, 2, 500, datetime(2026, 10, 2))
        broken = _work(work_basis_staff, test_work_item, None, 500, datetime(2026, 10, 3))
        db_session.add_all([good, broken])
        await db_session.commit()

        preview = await AccountService(db_session).get_staff_work_payout_preview(10, 2026)

        assert preview.staff[0].total_amount == 1000
        assert [line.id for line in preview.staff[0].works] == [good.id]
        assert len(preview.warnings) == 1
        assert preview.warnings[0].staff_work_id == broken.id
        assert preview.warnings[0].staff_id == work_basis_staff.id
        assert "quantity" in preview.warnings[0].message

    @pytest.mark.asyncio
    async def test_unfiltered_is_union_of_per_staff(self, db_session, work_basis_staff, test_work_item):
        second = Staff(name="Hari Karki", type=StaffType.WORK_BASIS)
        db_session.add(second)
        await db_session.commit()
        db_session.add_all([
            _work(work_basis_staff, test_work_item, 1, 500, datetime(2026, 10, 4)),
            _work(second, test_work_item, 2, 300, datetime(2026, 10, 8)),
            _work(second, test_work_item, 1, 100, datetime(2026, 10, 9)),
        ])
        await db_session.commit()

        service = AccountService(db_session)
        everyone = await service.get_staff_work_payout_preview(10, 2026)
        first_only = await service.get_staff_work_payout_preview(10, 2026, staff_id=work_basis_staff.id)
        second_only = await service.get_staff_work_payout_preview(10, 2026, staff_id=second.id)

        def totals(preview):
            return {payout.staff_id: payout.total_amount for payout in preview.staff}

        assert totals(everyone) == {**totals(first_only), **totals(second_only)}
        assert totals(everyone) == {work_basis_staff.id: 500, second.id: 700}

    @pytest.mark.asyncio
    async def test_invalid_month_rejected(self, db_session):
        service = AccountService(db_session)

        with pytest.raises(ValidationException):
            await service.get_staff_work_payout_preview(13, 2026)
        with pytest.raises(ValidationException):
            await service.get_staff_work_payout_preview(0, 2026)


class TestPayoutHelpers:
    """Pure helpers used by the payout preview."""

    def test_month_window_is_half_open(self):
        start, end = month_window(2, 2028)
        assert start == datetime(2028, 2, 1)
        assert end == datetime(2028, 3, 1)

    def test_price_staff_work_lists_missing_fields(self):
        work = StaffWork(id=7, staff_id=3, quantity=None, unit_rate_nrs=None)

        with pytest.raises(IncompletePayoutDataError) as exc_info:
            price_staff_work(work)

        assert exc_info.value.missing == ["quantity", "unitRateNrs"]
        assert exc_info.value.status_code == 500
