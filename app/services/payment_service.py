"""
Back Office Ledger - Payment Service

Influencer payments: CRUD, filtering, the overdue sweep and the paid
payments report.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.influencer import Collaboration, Influencer, Payment, PaymentMethod, PaymentStatus
from app.schemas.influencer import (
    CampaignPaymentGroup,
    InfluencerPaymentGroup,
    InfluencerSummary,
    PaymentCreateRequest,
    PaymentReport,
    PaymentReportRequest,
    PaymentResponse,
    PaymentUpdateRequest,
    ReportPeriod,
    ReportSummary,
)
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)


class PaymentService:
    """Service for influencer payments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _base_query(self):
        return select(Payment).options(
            selectinload(Payment.influencer),
            selectinload(Payment.collaboration),
        )

    async def _check_references(self, influencer_id: Optional[int], collaboration_id: Optional[int]) -> None:
        if influencer_id is not None and not await self.db.get(Influencer, influencer_id):
            raise NotFoundException("Influencer", influencer_id)
        if collaboration_id is not None and not await self.db.get(Collaboration, collaboration_id):
            raise NotFoundException("Collaboration", collaboration_id)

    # ===========================================
    # CRUD
    # ===========================================

    async def get_payments(self) -> List[Payment]:
        result = await self.db.execute(
            self._base_query().order_by(Payment.created_at.desc(), Payment.id.desc())
        )
        return list(result.scalars().all())

    async def get_payment(self, payment_id: int) -> Payment:
        result = await self.db.execute(
            self._base_query()
            .where(Payment.id == payment_id)
            .execution_options(populate_existing=True)
        )
        payment = result.scalar_one_or_none()
        if not payment:
            raise NotFoundException("Payment", payment_id)
        return payment

    async def create_payment(self, data: PaymentCreateRequest) -> Payment:
        await self._check_references(data.influencer_id, data.collaboration_id)

        payment = Payment(**data.model_dump())
        self.db.add(payment)
        await self.db.commit()

        logger.info(f"Created payment {payment.id} of {payment.amount_nrs} NPR for influencer {payment.influencer_id}")
        return await self.get_payment(payment.id)

    async def update_payment(self, payment_id: int, data: PaymentUpdateRequest) -> Payment:
        payment = await self.get_payment(payment_id)
        changes = data.model_dump(exclude_unset=True)
        await self._check_references(None, changes.get("collaboration_id"))

        for key, value in changes.items():
            if value is None and key in ("amount_nrs", "status"):
                continue
            setattr(payment, key, value)

        await self.db.commit()
        return await self.get_payment(payment_id)

    async def delete_payment(self, payment_id: int) -> None:
        payment = await self.get_payment(payment_id)
        await self.db.delete(payment)
        await self.db.commit()

    async def filter_payments(
        self,
        status: Optional[PaymentStatus] = None,
        payment_method: Optional[PaymentMethod] = None,
        influencer_id: Optional[int] = None,
        collaboration_id: Optional[int] = None,
        min_amount: Optional[int] = None,
        max_amount: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Payment]:
        """Payments matching every supplied criterion; amount and date bounds are inclusive."""
        query = self._base_query()

        if status is not None:
            query = query.where(Payment.status == status)
        if payment_method is not None:
            query = query.where(Payment.payment_method == payment_method)
        if influencer_id is not None:
            query = query.where(Payment.influencer_id == influencer_id)
        if collaboration_id is not None:
            query = query.where(Payment.collaboration_id == collaboration_id)
        if min_amount is not None:
            query = query.where(Payment.amount_nrs >= min_amount)
        if max_amount is not None:
            query = query.where(Payment.amount_nrs <= max_amount)
        if start_date is not None:
            query = query.where(Payment.payment_date >= start_date)
        if end_date is not None:
            query = query.where(Payment.payment_date <= end_date)

        result = await self.db.execute(query.order_by(Payment.created_at.desc(), Payment.id.desc()))
        return list(result.scalars().all())

    # ===========================================
    # OVERDUE
    # ===========================================

    async def get_overdue_payments(self, now: Optional[datetime] = None) -> List[Payment]:
        """PENDING payments whose due date has passed, oldest due first."""
        result = await self.db.execute(
            self._base_query()
            .where(
                Payment.status == PaymentStatus.PENDING,
                Payment.due_date < (now or datetime.now()),
            )
            .order_by(Payment.due_date, Payment.id)
        )
        return list(result.scalars().all())

    async def mark_overdue(self, now: Optional[datetime] = None) -> int:
        """Move PENDING payments past their due date to OVERDUE. Returns the number updated."""
        result = await self.db.execute(
            update(Payment)
            .where(
                Payment.status == PaymentStatus.PENDING,
                Payment.due_date < (now or datetime.now()),
            )
            .values(status=PaymentStatus.OVERDUE)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        count = result.rowcount or 0
        logger.info(f"Marked {count} payments as overdue")
        return count

    # ===========================================
    # REPORT
    # ===========================================

    async def generate_report(self, request: PaymentReportRequest) -> PaymentReport:
        """
        Totals over PAID payments, grouped by influencer and by campaign.

        Payments without a collaboration appear in the influencer groups only.
        """
        query = self._base_query().where(Payment.status == PaymentStatus.PAID)
        if request.influencer_id is not None:
            query = query.where(Payment.influencer_id == request.influencer_id)
        if request.start_date is not None:
            query = query.where(Payment.payment_date >= request.start_date)
        if request.end_date is not None:
            query = query.where(Payment.payment_date <= request.end_date)

        result = await self.db.execute(
            query.order_by(Payment.payment_date.desc(), Payment.id.desc())
        )
        payments = [PaymentResponse.model_validate(p) for p in result.scalars().all()]

        by_influencer: Dict[int, InfluencerPaymentGroup] = {}
        by_campaign: Dict[str, CampaignPaymentGroup] = {}

        for payment in payments:
            group = by_influencer.get(payment.influencer_id)
            if group is None:
                group = InfluencerPaymentGroup(influencer=InfluencerSummary.model_validate(payment.influencer))
                by_influencer[payment.influencer_id] = group
            group.total_amount += payment.amount_nrs
            group.payment_count += 1
            group.payments.append(payment)

            if payment.collaboration is not None:
                campaign = payment.collaboration.campaign_name
                campaign_group = by_campaign.get(campaign)
                if campaign_group is None:
                    campaign_group = CampaignPaymentGroup(campaign_name=campaign)
                    by_campaign[campaign] = campaign_group
                campaign_group.total_amount += payment.amount_nrs
                campaign_group.payment_count += 1
                campaign_group.payments.append(payment)

        total_amount = sum(p.amount_nrs for p in payments)
        total_payments = len(payments)
        # Half-up rounding, amounts are non-negative
        average = (2 * total_amount + total_payments) // (2 * total_payments) if total_payments else 0

        return PaymentReport(
            report_type=request.report_type,
            period=ReportPeriod(start_date=request.start_date, end_date=request.end_date),
            summary=ReportSummary(
                total_amount=total_amount,
                total_payments=total_payments,
                average_payment=average,
            ),
            by_influencer=list(by_influencer.values()),
            by_campaign=list(by_campaign.values()),
            payments=payments,
        )
