"""
Back Office Ledger - Influencer Service Tests

Influencers, collaborations and payments.
"""

from datetime import datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.models.influencer import (
    Collaboration,
    Payment,
    PaymentMethod,
    PaymentStatus,
    SocialHandle,
    SocialPlatform,
)
from app.schemas.influencer import (
    CollaborationCreateRequest,
    CollaborationUpdateRequest,
    InfluencerCreateRequest,
    InfluencerUpdateRequest,
    PaymentCreateRequest,
    PaymentReportRequest,
    SocialHandleCreate,
)
from app.services.collaboration_service import CollaborationService
from app.services.influencer_service import InfluencerService
from app.services.payment_service import PaymentService
from app.tasks.scheduled_tasks import TaskRunner, mark_overdue_payments
from app.utils.error_handling import InvalidDateRangeException, NotFoundException
from tests.conftest import NOW


def _payment(influencer, amount, status=PaymentStatus.PENDING, collaboration=None, **kwargs):
    return Payment(
        influencer_id=influencer.id,
        collaboration_id=collaboration.id if collaboration else None,
        amount_nrs=amount,
        status=status,
        **kwargs,
    )


class TestInfluencerService:

    @pytest.mark.asyncio
    async def test_create_with_handles(self, db_session):
        influencer = await InfluencerService(db_session).create_influencer(InfluencerCreateRequest(
            name="Bikash Lama",
            email="bikash@lama-creates.com",
            social_handles=[
                SocialHandleCreate(platform=SocialPlatform.YOUTUBE, handle="bikashlama", followers=120000),
                SocialHandleCreate(platform=SocialPlatform.INSTAGRAM, handle="@bikash", is_primary=True),
            ],
        ))

        assert len(influencer.social_handles) == 2
        assert {h.platform for h in influencer.social_handles} == {SocialPlatform.YOUTUBE, SocialPlatform.INSTAGRAM}

    @pytest.mark.asyncio
    async def test_update_replaces_handles(self, db_session):
        service = InfluencerService(db_session)
        influencer = await service.create_influencer(InfluencerCreateRequest(
            name="Bikash Lama",
            email="bikash@lama-creates.com",
            social_handles=[SocialHandleCreate(platform=SocialPlatform.YOUTUBE, handle="bikashlama")],
        ))

        updated = await service.update_influencer(influencer.id, InfluencerUpdateRequest(
            notes="Prefers video campaigns",
            social_handles=[SocialHandleCreate(platform=SocialPlatform.TIKTOK, handle="@bikash.tt")],
        ))

        assert updated.notes == "Prefers video campaigns"
        assert [h.handle for h in updated.social_handles] == ["@bikash.tt"]
        assert await db_session.scalar(select(func.count(SocialHandle.id))) == 1

    @pytest.mark.asyncio
    async def test_delete_cascades(self, db_session, test_influencer, test_collaboration):
        db_session.add(_payment(test_influencer, 5000, collaboration=test_collaboration))
        await db_session.commit()

        await InfluencerService(db_session).delete_influencer(test_influencer.id)

        assert await db_session.scalar(select(func.count(Collaboration.id))) == 0
        assert await db_session.scalar(select(func.count(Payment.id))) == 0

    @pytest.mark.asyncio
    async def test_search(self, db_session, test_influencer):
        service = InfluencerService(db_session)
        await service.create_influencer(InfluencerCreateRequest(
            name="Bikash Lama",
            email="bikash@lama-creates.com",
            social_handles=[SocialHandleCreate(platform=SocialPlatform.YOUTUBE, handle="TrekWithBikash")],
        ))
        await service.create_influencer(InfluencerCreateRequest(
            name="Anjali Rai",
            email="anjali@rai.com",
            is_active=False,
            social_handles=[SocialHandleCreate(platform=SocialPlatform.INSTAGRAM, handle="@anjali_trek")],
        ))

        by_handle = await service.search_influencers(query="trek")
        assert [i.name for i in by_handle] == ["Anjali Rai", "Bikash Lama"]

        by_name = await service.search_influencers(query="GURUNG")
        assert [i.name for i in by_name] == ["Asha Gurung"]

        by_platform = await service.search_influencers(platform=SocialPlatform.YOUTUBE)
        assert [i.name for i in by_platform] == ["Bikash Lama"]

        active = await service.search_influencers(query="trek", is_active=True)
        assert [i.name for i in active] == ["Bikash Lama"]

        assert await service.search_influencers(query="100%") == []

    @pytest.mark.asyncio
    async def test_stats(self, db_session, test_influencer, test_collaboration):
        db_session.add_all([
            _payment(test_influencer, 20000, PaymentStatus.PAID, test_collaboration),
            _payment(test_influencer, 5000, PaymentStatus.PAID),
            _payment(test_influencer, 15000, PaymentStatus.PENDING, test_collaboration),
            _payment(test_influencer, 700, PaymentStatus.CANCELLED),
        ])
        await db_session.commit()

        result = await InfluencerService(db_session).get_influencer_stats(test_influencer.id)

        assert result.influencer.name == "Asha Gurung"
        assert result.stats.total_collaborations == 1
        assert result.stats.total_earnings == 25000
        assert result.stats.pending_payments == 15000
        assert result.stats.overdue_payments == 0

    @pytest.mark.asyncio
    async def test_stats_missing_influencer(self, db_session):
        with pytest.raises(NotFoundException):
            await InfluencerService(db_session).get_influencer_stats(404)


class TestCollaborationService:

    @pytest.mark.asyncio
    async def test_create_requires_influencer(self, db_session):
        with pytest.raises(NotFoundException):
            await CollaborationService(db_session).create_collaboration(CollaborationCreateRequest(
                influencer_id=12,
                campaign_name="Tihar Sale",
                deliverables="2 posts",
                agreed_amount_nrs=10000,
                start_date=datetime(2026, 11, 1),
                end_date=datetime(2026, 11, 15),
            ))

    @pytest.mark.asyncio
    async def test_inverted_dates_rejected(self, db_session, test_collaboration):
        with pytest.raises(InvalidDateRangeException):
            await CollaborationService(db_session).update_collaboration(
                test_collaboration.id,
                CollaborationUpdateRequest(end_date=datetime(2026, 9, 1)),
            )

    @pytest.mark.asyncio
    async def test_list_by_influencer(self, db_session, test_influencer, test_collaboration):
        collaborations = await CollaborationService(db_session).get_collaborations_by_influencer(test_influencer.id)

        assert [c.campaign_name for c in collaborations] == ["Dashain Launch"]

    @pytest.mark.asyncio
    async def test_filter(self, db_session, test_influencer, test_collaboration):
        service = CollaborationService(db_session)
        await service.create_collaboration(CollaborationCreateRequest(
            influencer_id=test_influencer.id,
            campaign_name="Tihar Sale",
            deliverables="2 posts",
            agreed_amount_nrs=10000,
            start_date=datetime(2026, 11, 1),
            end_date=datetime(2026, 11, 15),
            status="DRAFT",
        ))

        everything = await service.filter_collaborations()
        assert [c.campaign_name for c in everything] == ["Tihar Sale", "Dashain Launch"]

        by_name = await service.filter_collaborations(campaign_name="dashain")
        assert [c.campaign_name for c in by_name] == ["Dashain Launch"]

        by_status = await service.filter_collaborations(status="DRAFT", influencer_id=test_influencer.id)
        assert [c.campaign_name for c in by_status] == ["Tihar Sale"]

        by_start = await service.filter_collaborations(
            start_date=datetime(2026, 10, 1),
            end_date=datetime(2026, 10, 31),
        )
        assert [c.campaign_name for c in by_start] == ["Dashain Launch"]

        by_amount = await service.filter_collaborations(min_amount=10000, max_amount=10000)
        assert [c.campaign_name for c in by_amount] == ["Tihar Sale"]


class TestPaymentService:

    @pytest.mark.asyncio
    async def test_create_checks_collaboration(self, db_session, test_influencer):
        with pytest.raises(NotFoundException):
            await PaymentService(db_session).create_payment(PaymentCreateRequest(
                influencer_id=test_influencer.id,
                collaboration_id=999,
                amount_nrs=1000,
            ))

    @pytest.mark.asyncio
    async def test_filter(self, db_session, test_influencer, test_collaboration):
        db_session.add_all([
            _payment(test_influencer, 1000, PaymentStatus.PAID, payment_method=PaymentMethod.CASH,
                     payment_date=datetime(2026, 10, 2)),
            _payment(test_influencer, 5000, PaymentStatus.PAID, test_collaboration,
                     payment_method=PaymentMethod.BANK_TRANSFER, payment_date=datetime(2026, 10, 10)),
            _payment(test_influencer, 8000, PaymentStatus.PENDING, test_collaboration),
        ])
        await db_session.commit()
        service = PaymentService(db_session)

        paid = await service.filter_payments(status=PaymentStatus.PAID)
        mid_range = await service.filter_payments(min_amount=1000, max_amount=5000)
        bank = await service.filter_payments(payment_method=PaymentMethod.BANK_TRANSFER)
        early = await service.filter_payments(end_date=datetime(2026, 10, 5))

        assert sorted(p.amount_nrs for p in paid) == [1000, 5000]
        assert sorted(p.amount_nrs for p in mid_range) == [1000, 5000]
        assert [p.amount_nrs for p in bank] == [5000]
        assert [p.amount_nrs for p in early] == [1000]

    @pytest.mark.asyncio
    async def test_overdue_sweep(self, db_session, test_influencer):
        db_session.add_all([
            _payment(test_influencer, 100, due_date=datetime(2026, 10, 18)),
            _payment(test_influencer, 200, due_date=datetime(2026, 10, 25)),
            _payment(test_influencer, 300, PaymentStatus.PAID, due_date=datetime(2026, 10, 1)),
            _payment(test_influencer, 400),
        ])
        await db_session.commit()
        service = PaymentService(db_session)

        overdue = await service.get_overdue_payments(NOW)
        assert [p.amount_nrs for p in overdue] == [100]

        result = await mark_overdue_payments(db_session, now=NOW)
        assert result == {"markedOverdue": 1}

        statuses = dict((await db_session.execute(select(Payment.amount_nrs, Payment.status))).all())
        assert statuses[100] == PaymentStatus.OVERDUE
        assert statuses[200] == PaymentStatus.PENDING
        assert statuses[300] == PaymentStatus.PAID

    @pytest.mark.asyncio
    async def test_task_runner_uses_own_session(self, db_engine, db_session, test_influencer):
        db_session.add(_payment(test_influencer, 100, due_date=datetime(2026, 10, 1)))
        await db_session.commit()
        runner = TaskRunner(async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False))

        result = await runner.run_task(mark_overdue_payments, now=NOW)

        assert result == {"markedOverdue": 1}
        assert await db_session.scalar(
            select(func.count(Payment.id)).where(Payment.status == PaymentStatus.OVERDUE)
        ) == 1

    @pytest.mark.asyncio
    async def test_report(self, db_session, test_influencer, test_collaboration):
        db_session.add_all([
            _payment(test_influencer, 1000, PaymentStatus.PAID, test_collaboration,
                     payment_date=datetime(2026, 10, 3)),
            _payment(test_influencer, 2001, PaymentStatus.PAID, payment_date=datetime(2026, 10, 4)),
            _payment(test_influencer, 9999, PaymentStatus.PENDING, test_collaboration),
            _payment(test_influencer, 7777, PaymentStatus.PAID, payment_date=datetime(2026, 8, 1)),
        ])
        await db_session.commit()

        report = await PaymentService(db_session).generate_report(PaymentReportRequest(
            start_date=datetime(2026, 10, 1),
            end_date=datetime(2026, 10, 31),
        ))

        assert report.summary.total_amount == 3001
        assert report.summary.total_payments == 2
        # 1500.5 rounds half up
        assert report.summary.average_payment == 1501
        assert len(report.by_influencer) == 1
        assert report.by_influencer[0].total_amount == 3001
        assert [(g.campaign_name, g.total_amount) for g in report.by_campaign] == [("Dashain Launch", 1000)]

    @pytest.mark.asyncio
    async def test_empty_report(self, db_session):
        report = await PaymentService(db_session).generate_report(PaymentReportRequest())

        assert report.summary.total_payments == 0
        assert report.summary.average_payment == 0
        assert report.payments == []
