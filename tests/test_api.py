"""
Back Office Ledger - API Tests

Envelopes, authentication and error mapping through the HTTP layer.
"""

from datetime import datetime

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.client import Client
from app.models.influencer import Collaboration, Influencer, SocialHandle, SocialPlatform
from app.models.ledger import Income
from app.models.staff import Staff, StaffWork, WorkItem


class TestHealthAndAuth:
    """Public endpoints and bearer token checks."""

    @pytest.mark.asyncio
    async def test_health_is_public(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_missing_token_is_rejected(self, client: AsyncClient):
        response = await client.get("/api/v1/clients")

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 401
        assert body["error"] == "UNAUTHORIZED"
        assert body["message"] == "Not authenticated"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_invalid_token_is_rejected(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/accounts/summary",
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401
        body = response.json()
        assert body["error"] == "TOKEN_INVALID"
        assert body["message"] == "Invalid or expired token"
        assert response.headers["WWW-Authenticate"] == "Bearer"


class TestClientEndpoints:
    """Client CRUD and account adjustment over HTTP."""

    @pytest.mark.asyncio
    async def test_create_client(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/clients",
            headers=auth_headers,
            json={
                "name": "Annapurna Textiles",
                "email": "billing@annapurna-textiles.com",
                "contractStartDate": "2026-06-01T00:00:00",
                "contractDurationDays": 30,
                "type": "ACTIVE",
                "lockedAmountNrs": 9000,
                "advanceAmountNrs": 2500,
            },
        )

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["dueAmountNrs"] == 6500
        assert body["data"]["contractEndDate"] == "2026-07-01T00:00:00"

    @pytest.mark.asyncio
    async def test_list_clients_envelope(self, client: AsyncClient, auth_headers, test_client_record: Client):
        response = await client.get("/api/v1/clients", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [c["name"] for c in body["data"]] == ["Himalayan Traders"]

    @pytest.mark.asyncio
    async def test_missing_client_returns_not_found_envelope(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/v1/clients/999", headers=auth_headers)

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 404
        assert body["error"] == "NOT_FOUND"
        assert body["message"] == "Client with ID '999' not found"

    @pytest.mark.asyncio
    async def test_missing_field_returns_validation_error(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/clients",
            headers=auth_headers,
            json={"name": "No Email Ltd", "contractStartDate": "2026-06-01T00:00:00"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["message"] == "Request validation failed"
        assert body["details"]["errors"]

    @pytest.mark.asyncio
    async def test_adjust_account(self, client: AsyncClient, auth_headers, test_client_record: Client):
        response = await client.post(
            f"/api/v1/clients/{test_client_record.id}/account/adjust",
            headers=auth_headers,
            json={"lockedDelta": 2000, "advanceDelta": 500},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["lockedAmountNrs"] == 12000
        assert data["advanceAmountNrs"] == 4500
        assert data["dueAmountNrs"] == 7500

    @pytest.mark.asyncio
    async def test_adjust_missing_client(self, client: AsyncClient, auth_headers):
        response = await client.post(
            "/api/v1/clients/999/account/adjust",
            headers=auth_headers,
            json={"lockedDelta": 100},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_referenced_client_conflicts(
        self,
        client: AsyncClient,
        auth_headers,
        db_session: AsyncSession,
        test_client_record: Client,
    ):
        db_session.add(Income(client_id=test_client_record.id, amount_nrs=1000))
        await db_session.commit()

        response = await client.delete(f"/api/v1/clients/{test_client_record.id}", headers=auth_headers)

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "DATA_INTEGRITY_ERROR"
        assert body["message"] == "Record is still referenced by other records"


class TestAccountEndpoints:
    """Summary and payout preview over HTTP."""

    @pytest.mark.asyncio
    async def test_summary_uses_camel_case(self, client: AsyncClient, auth_headers, db_session: AsyncSession, test_client_record: Client):
        db_session.add(Income(client_id=test_client_record.id, amount_nrs=1800))
        await db_session.commit()

        response = await client.get("/api/v1/accounts/summary", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totals"]["totalIncomeNrs"] == 1800
        assert data["totals"]["netNrs"] == 1800
        assert data["incomeByClient"] == [
            {"clientId": test_client_record.id, "name": "Himalayan Traders", "total": 1800}
        ]
        assert "contractsExpiringIn30Days" in data["counts"]

    @pytest.mark.asyncio
    async def test_summary_timeout_above_cap_is_rejected(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/v1/accounts/summary",
            headers=auth_headers,
            params={"timeoutSeconds": 100000},
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_payout_preview_with_warnings(
        self,
        client: AsyncClient,
        auth_headers,
        db_session: AsyncSession,
        work_basis_staff: Staff,
        test_work_item: WorkItem,
        test_client_record: Client,
    ):
        db_session.add_all([
            StaffWork(
                staff_id=work_basis_staff.id,
                work_item_id=test_work_item.id,
                client_id=test_client_record.id,
                quantity=3,
                unit_rate_nrs=500,
                performed_at=datetime(2026, 10, 5, 10, 0),
            ),
            StaffWork(
                staff_id=work_basis_staff.id,
                work_item_id=test_work_item.id,
                client_id=test_client_record.id,
                quantity=None,
                unit_rate_nrs=500,
                performed_at=datetime(2026, 10, 6, 10, 0),
            ),
        ])
        await db_session.commit()

        response = await client.get(
            "/api/v1/accounts/staff-work-payout-preview",
            headers=auth_headers,
            params={"month": 10, "year": 2026},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert len(body["data"]) == 1
        assert body["data"][0]["staffName"] == "Ram Thapa"
        assert body["data"][0]["totalAmount"] == 1500
        assert len(body["warnings"]) == 1
        assert body["warnings"][0]["staffId"] == work_basis_staff.id

    @pytest.mark.asyncio
    async def test_payout_preview_invalid_month(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/v1/accounts/staff-work-payout-preview",
            headers=auth_headers,
            params={"month": 13, "year": 2026},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"


class TestStaffEndpoints:
    """Monthly payout rules over HTTP."""

    @pytest.mark.asyncio
    async def test_monthly_payout(self, client: AsyncClient, auth_headers, monthly_staff: Staff):
        response = await client.post(
            f"/api/v1/staff/{monthly_staff.id}/payout/monthly",
            headers=auth_headers,
            json={"amountNrs": 60000, "note": "October salary"},
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["source"] == "STAFF_MONTHLY"
        assert data["amountNrs"] == 60000

    @pytest.mark.asyncio
    async def test_monthly_payout_rejects_work_basis_staff(
        self, client: AsyncClient, auth_headers, work_basis_staff: Staff
    ):
        response = await client.post(
            f"/api/v1/staff/{work_basis_staff.id}/payout/monthly",
            headers=auth_headers,
            json={"amountNrs": 1000},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "BUSINESS_RULE_VIOLATION"
        assert body["details"]["violated_rule"] == "MONTHLY_STAFF_ONLY"


class TestReminderAndPaymentEndpoints:
    """Scan preview and the overdue sweep over HTTP."""

    @pytest.mark.asyncio
    async def test_dry_run_shape(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/v1/reminders/dry-run", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {"clientReminders": [], "activeReminders": []}

    @pytest.mark.asyncio
    async def test_missing_reminder(self, client: AsyncClient, auth_headers):
        response = await client.get("/api/v1/reminders/999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Reminder with ID '999' not found"

    @pytest.mark.asyncio
    async def test_mark_overdue_returns_count(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/v1/payments/mark-overdue", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"count": 0}

    @pytest.mark.asyncio
    async def test_filter_rejects_inverted_dates(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/v1/payments/filter",
            headers=auth_headers,
            params={"startDate": "2026-10-31T00:00:00", "endDate": "2026-10-01T00:00:00"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_DATE_RANGE"


class TestInfluencerEndpoints:
    """Search, stats and collaboration filter routes."""

    @pytest.mark.asyncio
    async def test_search_by_handle(self, client: AsyncClient, auth_headers, db_session: AsyncSession, test_influencer: Influencer):
        db_session.add(SocialHandle(
            influencer_id=test_influencer.id,
            platform=SocialPlatform.TIKTOK,
            handle="@asha.dances",
        ))
        await db_session.commit()

        response = await client.get(
            "/api/v1/influencers/search",
            headers=auth_headers,
            params={"query": "DANCES", "platform": "TIKTOK", "isActive": "true"},
        )

        assert response.status_code == 200
        assert [i["name"] for i in response.json()["data"]] == ["Asha Gurung"]

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, auth_headers, test_influencer: Influencer, test_collaboration: Collaboration):
        response = await client.get(f"/api/v1/influencers/{test_influencer.id}/stats", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["influencer"]["id"] == test_influencer.id
        assert data["stats"] == {
            "totalCollaborations": 1,
            "totalEarnings": 0,
            "pendingPayments": 0,
            "overduePayments": 0,
        }

    @pytest.mark.asyncio
    async def test_collaboration_filter(self, client: AsyncClient, auth_headers, test_collaboration: Collaboration):
        response = await client.get(
            "/api/v1/collaborations/filter",
            headers=auth_headers,
            params={"campaignName": "launch", "minAmount": 45000, "maxAmount": 45000},
        )

        assert response.status_code == 200
        assert [c["campaignName"] for c in response.json()["data"]] == ["Dashain Launch"]

    @pytest.mark.asyncio
    async def test_collaboration_filter_rejects_inverted_dates(self, client: AsyncClient, auth_headers):
        response = await client.get(
            "/api/v1/collaborations/filter",
            headers=auth_headers,
            params={"startDate": "2026-10-31T00:00:00", "endDate": "2026-10-01T00:00:00"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_DATE_RANGE"
