"""
Back Office Ledger - Reminder Service

Contract expiry staging and admin reminder management.

The daily scan picks clients whose contract start date has just crossed
the reminder lead boundary (now + lead days, within the last 24 hours),
classifies how far through the contract they are, records an admin
reminder and emails the administrator. Client.last_reminder_stage
suppresses a second reminder for the same stage when the scan is re-run.
Each client is claimed with a conditional UPDATE on that column, so scans
running in separate processes (API trigger and Celery beat) cannot both
record the same stage.

Notification is fire-and-forget: the reminder and the recorded stage are
committed before the email goes out, and a failed email is only logged.
Later scans do not retry it because the stage is already recorded.
"""

import logging
import math
import threading
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import case, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.models.client import Client
from app.models.reminder import (
    AdminReminder,
    PRIORITY_RANK,
    ReminderPriority,
    ReminderStage,
    ReminderType,
)
from app.models.staff import Staff
from app.schemas.reminder import (
    DryRunResponse,
    ReminderCandidate,
    ReminderCreateRequest,
    ReminderResponse,
    ReminderRunResult,
    ReminderUpdateRequest,
)
from app.services.email_service import EmailService
from app.utils.error_handling import NotFoundException

logger = logging.getLogger(__name__)

# Held while a contract expiry scan is running in this process
_scan_lock = threading.Lock()

SCAN_WINDOW = timedelta(hours=24)


# ===========================================
# STAGING
# ===========================================

def classify_contract_stage(total_days: int, days_remaining: int) -> Tuple[ReminderPriority, ReminderStage]:
    """
    Map days remaining on a contract to a reminder priority and stage.

    Thresholds are floor(total * 0.25) and floor(total * 0.5), both inclusive.
    """
    halfway = math.floor(total_days * 0.5)
    quarter = math.floor(total_days * 0.25)

    if days_remaining <= quarter:
        return ReminderPriority.URGENT, ReminderStage.FINAL
    if days_remaining <= halfway:
        return ReminderPriority.HIGH, ReminderStage.MIDPOINT
    return ReminderPriority.MEDIUM, ReminderStage.INITIAL


def days_until_expiry(contract_start_date: datetime, duration_days: int, now: datetime) -> int:
    """Whole days from now until the contract ends, rounded up."""
    remaining = contract_start_date + timedelta(days=duration_days) - now
    return math.ceil(remaining / timedelta(days=1))


def priority_rank():
    """SQL expression ranking priorities, URGENT highest."""
    return case(
        *[(AdminReminder.priority == priority, rank) for priority, rank in PRIORITY_RANK.items()],
        else_=-1,
    )


class ReminderService:
    """Service for contract expiry reminders and admin reminder CRUD."""

    def __init__(
        self,
        db: AsyncSession,
        email_service: Optional[EmailService] = None,
        admin_email: Optional[str] = None,
    ):
        self.db = db
        self.email_service = email_service or EmailService()
        self.admin_email = admin_email if admin_email is not None else settings.admin_notification_email

    # ===========================================
    # CONTRACT EXPIRY SCAN
    # ===========================================

    async def _candidate_clients(self, now: datetime) -> List[Tuple[Client, ReminderCandidate]]:
        boundary = now + timedelta(days=settings.contract_reminder_lead_days)

        result = await self.db.execute(
            select(Client)
            .where(
                Client.contract_start_date >= boundary - SCAN_WINDOW,
                Client.contract_start_date <= boundary,
            )
            .order_by(Client.id)
        )

        candidates = []
        for client in result.scalars().all():
            days_left = days_until_expiry(client.contract_start_date, client.contract_duration_days, now)
            priority, stage = classify_contract_stage(client.contract_duration_days, days_left)
            candidates.append((client, ReminderCandidate(
                client_id=client.id,
                name=client.name,
                email=client.email,
                contract_start_date=client.contract_start_date,
                contract_duration_days=client.contract_duration_days,
                contract_end_date=client.contract_end_date,
                days_until_expiry=days_left,
                priority=priority,
                stage=stage,
                last_reminder_stage=client.last_reminder_stage,
            )))
        return candidates

    async def get_clients_for_reminder(self, now: Optional[datetime] = None) -> List[ReminderCandidate]:
        """Clients the next scan would consider, with their computed stage."""
        return [candidate for _, candidate in await self._candidate_clients(now or datetime.now())]

    async def send_contract_expiry_reminders(self, now: Optional[datetime] = None) -> ReminderRunResult:
        """
        Run the contract expiry scan.

        Returns a result with skipped=True without touching any rows when
        another scan is already running in this process.
        """
        lock = _scan_lock
        if not lock.acquire(blocking=False):
            logger.warning("Contract expiry scan already running, skipping this trigger")
            return ReminderRunResult(skipped=True)

        try:
            return await self._run_scan(now or datetime.now())
        finally:
            lock.release()

    async def _run_scan(self, now: datetime) -> ReminderRunResult:
        candidates = await self._candidate_clients(now)
        result = ReminderRunResult(candidates=len(candidates))

        for client, candidate in candidates:
            if client.last_reminder_stage == candidate.stage or not await self._claim(client.id, candidate.stage):
                result.skipped_duplicates += 1
                continue

            reminder = AdminReminder(
                title=f"Contract Expiry {candidate.stage.value} Alert - {client.name}",
                description=(
                    f"Client contract for {client.name} will expire in "
                    f"{candidate.days_until_expiry} days ({candidate.stage.value} stage)"
                ),
                type=ReminderType.CONTRACT_EXPIRY,
                priority=candidate.priority,
                stage=candidate.stage,
                due_date=candidate.contract_end_date,
                client_id=client.id,
            )
            self.db.add(reminder)
            await self.db.commit()
            result.reminders_created += 1

            if await self._notify(candidate):
                result.notifications_sent += 1
            else:
                result.notifications_failed += 1

        logger.info(
            f"Contract expiry scan: {result.candidates} candidates, "
            f"{result.reminders_created} reminders created, "
            f"{result.skipped_duplicates} duplicates skipped, "
            f"{result.notifications_failed} notifications failed"
        )
        return result

    async def _claim(self, client_id: int, stage: ReminderStage) -> bool:
        """Record the stage unless another scan already has. True if this scan won."""
        result = await self.db.execute(
            update(Client)
            .where(
                Client.id == client_id,
                or_(Client.last_reminder_stage.is_(None), Client.last_reminder_stage != stage),
            )
            .values(last_reminder_stage=stage)
        )
        if result.rowcount != 1:
            logger.info(f"Client {client_id} already has a {stage.value} reminder, skipping")
            return False
        return True

    async def _notify(self, candidate: ReminderCandidate) -> bool:
        """Email the administrator about one client. Never raises."""
        if not self.admin_email:
            logger.warning(
                f"No admin notification email configured, not notifying about client {candidate.client_id}"
            )
            return False

        try:
            sent = await self.email_service.send_contract_expiry_alert(
                to_email=self.admin_email,
                client_name=candidate.name,
                stage=candidate.stage,
                days_until_expiry=candidate.days_until_expiry,
                contract_start_date=candidate.contract_start_date,
                contract_duration_days=candidate.contract_duration_days,
                contract_end_date=candidate.contract_end_date,
            )
        except Exception as e:
            logger.error(f"Failed to send contract expiry alert for client {candidate.client_id}: {e}")
            return False

        if sent:
            logger.info(
                f"Contract expiry alert sent for {candidate.name} "
                f"({candidate.days_until_expiry} days, {candidate.stage.value} stage)"
            )
        else:
            logger.error(f"Contract expiry alert for client {candidate.client_id} was not delivered")
        return sent

    async def get_dry_run(self, now: Optional[datetime] = None) -> DryRunResponse:
        """What the scan would do right now, without writing anything."""
        now = now or datetime.now()
        candidates = await self.get_clients_for_reminder(now)
        active = await self.get_active_reminders(now)
        return DryRunResponse(
            client_reminders=candidates,
            active_reminders=[ReminderResponse.model_validate(r) for r in active],
        )

    # ===========================================
    # ADMIN REMINDER CRUD
    # ===========================================

    def _base_query(self):
        return select(AdminReminder).options(
            selectinload(AdminReminder.client),
            selectinload(AdminReminder.staff),
        )

    async def list_reminders(self, include_completed: bool = True) -> List[AdminReminder]:
        query = self._base_query().order_by(AdminReminder.due_date, AdminReminder.id)
        if not include_completed:
            query = query.where(AdminReminder.is_completed.is_(False))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_active_reminders(self, now: Optional[datetime] = None) -> List[AdminReminder]:
        """Open reminders not yet due, most urgent first then soonest due."""
        result = await self.db.execute(
            self._base_query()
            .where(
                AdminReminder.is_completed.is_(False),
                AdminReminder.due_date >= (now or datetime.now()),
            )
            .order_by(priority_rank().desc(), AdminReminder.due_date, AdminReminder.id)
        )
        return list(result.scalars().all())

    async def get_reminder(self, reminder_id: int) -> AdminReminder:
        result = await self.db.execute(
            self._base_query()
            .where(AdminReminder.id == reminder_id)
            .execution_options(populate_existing=True)
        )
        reminder = result.scalar_one_or_none()
        if not reminder:
            raise NotFoundException("Reminder", reminder_id)
        return reminder

    async def _check_references(self, client_id: Optional[int], staff_id: Optional[int]) -> None:
        if client_id is not None and not await self.db.get(Client, client_id):
            raise NotFoundException("Client", client_id)
        if staff_id is not None and not await self.db.get(Staff, staff_id):
            raise NotFoundException("Staff", staff_id)

    async def create_reminder(self, data: ReminderCreateRequest) -> AdminReminder:
        await self._check_references(data.client_id, data.staff_id)

        reminder = AdminReminder(**data.model_dump())
        self.db.add(reminder)
        await self.db.commit()
        return await self.get_reminder(reminder.id)

    async def update_reminder(self, reminder_id: int, data: ReminderUpdateRequest) -> AdminReminder:
        reminder = await self.get_reminder(reminder_id)
        changes = data.model_dump(exclude_unset=True)
        await self._check_references(changes.get("client_id"), changes.get("staff_id"))

        for key, value in changes.items():
            if value is None and key not in ("description", "stage", "client_id", "staff_id"):
                continue
            setattr(reminder, key, value)

        await self.db.commit()
        return await self.get_reminder(reminder_id)

    async def mark_reminder_completed(self, reminder_id: int) -> AdminReminder:
        reminder = await self.get_reminder(reminder_id)
        reminder.is_completed = True
        await self.db.commit()
        return await self.get_reminder(reminder_id)

    async def delete_reminder(self, reminder_id: int) -> None:
        reminder = await self.get_reminder(reminder_id)
        await self.db.delete(reminder)
        await self.db.commit()
