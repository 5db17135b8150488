"""
Seed Script: Demo Back Office Data
==================================
Populates an empty database with a small demo dataset.

This script creates:
- Clients with contracts at different stages
- Monthly and work-basis staff with a work item catalogue
- Logged staff work for the current month
- Income and expense records
- An influencer with a collaboration and payments

Run after the schema exists (alembic upgrade head, or app startup in development).
"""

import asyncio
from datetime import datetime, timedelta

# Add project root to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session_maker, init_db
from app.models.client import Client, ClientType
from app.models.influencer import PaymentMethod, PaymentStatus, SocialPlatform
from app.models.ledger import ExpenseSource
from app.models.staff import StaffType
from app.schemas.client import ClientCreateRequest
from app.schemas.influencer import (
    CollaborationCreateRequest,
    InfluencerCreateRequest,
    PaymentCreateRequest,
    SocialHandleCreate,
)
from app.schemas.ledger import ExpenseCreateRequest, IncomeCreateRequest
from app.schemas.staff import (
    MonthlyPayoutRequest,
    StaffCreateRequest,
    StaffWorkCreateRequest,
    WorkItemCreateRequest,
)
from app.services.client_service import ClientService
from app.services.collaboration_service import CollaborationService
from app.services.expense_service import ExpenseService
from app.services.income_service import IncomeService
from app.services.influencer_service import InfluencerService
from app.services.payment_service import PaymentService
from app.services.staff_service import StaffService
from app.services.staff_work_service import StaffWorkService
from app.services.work_item_service import WorkItemService


# =============================================================================
# SEED FUNCTIONS
# =============================================================================

async def seed_clients(db: AsyncSession, now: datetime) -> list:
    print("Creating clients...")
    service = ClientService(db)
    specs = [
        # Contract starting just inside the reminder window
        ("Himalayan Traders", now + timedelta(days=29, hours=12), 100, ClientType.ACTIVE, 50000, 20000),
        ("Everest Foods", now - timedelta(days=300), 365, ClientType.ACTIVE, 120000, 120000),
        ("Kathmandu Prints", now - timedelta(days=20), 90, ClientType.PROSPECT, 0, 0),
    ]
    clients = []
    for name, start, duration, client_type, locked, advance in specs:
        clients.append(await service.create_client(ClientCreateRequest(
            name=name,
            email=f"{name.lower().replace(' ', '.')}@example.com",
            contract_start_date=start,
            contract_duration_days=duration,
            type=client_type,
            locked_amount_nrs=locked,
            advance_amount_nrs=advance,
        )))
    print(f"Created {len(clients)} clients")
    return clients


async def seed_staff(db: AsyncSession, clients: list, now: datetime) -> None:
    print("Creating staff and work log...")
    staff_service = StaffService(db)
    work_item_service = WorkItemService(db)
    staff_work_service = StaffWorkService(db)

    manager = await staff_service.create_staff(StaffCreateRequest(
        name="Sita Sharma", type=StaffType.MONTHLY, monthly_salary_nrs=60000,
    ))
    designer = await staff_service.create_staff(StaffCreateRequest(
        name="Ram Thapa", type=StaffType.WORK_BASIS,
    ))

    poster = await work_item_service.create_work_item(WorkItemCreateRequest(title="Poster design", rate_nrs=1500))
    reel = await work_item_service.create_work_item(WorkItemCreateRequest(title="Short video edit", rate_nrs=400))

    month_start = now.replace(day=1, hour=10, minute=0, second=0, microsecond=0)
    for work_item, quantity, client in ((poster, 1, clients[0]), (reel, 2, clients[1])):
        await staff_work_service.create_staff_work(StaffWorkCreateRequest(
            staff_id=designer.id,
            work_item_id=work_item.id,
            client_id=client.id,
            quantity=quantity,
            performed_at=month_start,
        ))

    await staff_work_service.create_staff_work(StaffWorkCreateRequest(
        staff_id=manager.id,
        title="Quarterly planning",
        description="Planned next quarter's campaigns",
        performed_at=month_start,
    ))
    await staff_service.monthly_payout(manager.id, MonthlyPayoutRequest(amount_nrs=60000, note="Salary"))
    print("Created 2 staff, 2 work items and 3 work log entries")


async def seed_ledger(db: AsyncSession, clients: list) -> None:
    print("Creating income and expenses...")
    income_service = IncomeService(db)
    expense_service = ExpenseService(db)

    await income_service.create_income(IncomeCreateRequest(client_id=clients[0].id, amount_nrs=20000))
    await income_service.create_income(IncomeCreateRequest(client_id=clients[1].id, amount_nrs=120000))
    await expense_service.create_expense(ExpenseCreateRequest(
        amount_nrs=8000, source=ExpenseSource.GENERAL, note="Office rent",
    ))
    print("Created 2 income and 1 general expense records")


async def seed_influencers(db: AsyncSession, now: datetime) -> None:
    print("Creating influencers...")
    influencer = await InfluencerService(db).create_influencer(InfluencerCreateRequest(
        name="Asha Gurung",
        email="asha@example.com",
        social_handles=[
            SocialHandleCreate(platform=SocialPlatform.INSTAGRAM, handle="@asha.eats", followers=52000, is_primary=True),
            SocialHandleCreate(platform=SocialPlatform.TIKTOK, handle="@ashagurung", followers=18000),
        ],
    ))
    collaboration = await CollaborationService(db).create_collaboration(CollaborationCreateRequest(
        influencer_id=influencer.id,
        campaign_name="Dashain Launch",
        deliverables="3 reels, 5 stories",
        agreed_amount_nrs=45000,
        start_date=now - timedelta(days=10),
        end_date=now + timedelta(days=20),
    ))

    payment_service = PaymentService(db)
    await payment_service.create_payment(PaymentCreateRequest(
        influencer_id=influencer.id,
        collaboration_id=collaboration.id,
        amount_nrs=20000,
        status=PaymentStatus.PAID,
        payment_method=PaymentMethod.BANK_TRANSFER,
        payment_date=now - timedelta(days=5),
    ))
    await payment_service.create_payment(PaymentCreateRequest(
        influencer_id=influencer.id,
        collaboration_id=collaboration.id,
        amount_nrs=25000,
        due_date=now + timedelta(days=20),
    ))
    print("Created 1 influencer with 1 collaboration and 2 payments")


async def main():
    """Run all seed functions."""
    print("=" * 60)
    print("Seeding Back Office Demo Data")
    print("=" * 60)

    await init_db()
    now = datetime.now()

    async with async_session_maker() as db:
        existing = await db.scalar(select(func.count(Client.id)))
        if existing:
            print(f"Database already has {existing} clients, nothing to do")
            return

        clients = await seed_clients(db, now)
        await seed_staff(db, clients, now)
        await seed_ledger(db, clients)
        await seed_influencers(db, now)

    print()
    print("=" * 60)
    print("Demo Data Seeding Complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
