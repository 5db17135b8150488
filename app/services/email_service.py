"""
Back Office Ledger - Email Service

Handles administrator notification emails.
Supports SMTP, with a mock provider used when no mail server is configured.
"""

import asyncio
import logging
import smtplib
import ssl
from dataclasses import dataclass
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

from app.config import settings
from app.models.reminder import ReminderStage

logger = logging.getLogger(__name__)


class EmailProvider:
    """Email provider types."""
    SMTP = "smtp"
    MOCK = "mock"


@dataclass
class EmailMessage:
    """Email message data structure."""
    to: List[str]
    subject: str
    body_text: str
    body_html: Optional[str] = None
    cc: Optional[List[str]] = None
    reply_to: Optional[str] = None


STAGE_MESSAGES = {
    ReminderStage.INITIAL: "This is an early reminder about an upcoming contract expiry.",
    ReminderStage.MIDPOINT: "The contract has passed the midpoint of its duration.",
    ReminderStage.FINAL: "URGENT: The contract is about to expire. Immediate action required!",
}


class EmailService:
    """Service for sending notification emails."""

    def __init__(self):
        self.from_email = settings.email_from or "noreply@localhost"
        self.from_name = settings.mail_from_name

        # SMTP settings
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.mail_port
        self.smtp_username = settings.mail_username
        self.smtp_password = settings.mail_password
        self.smtp_use_tls = settings.mail_use_tls

    def _determine_provider(self) -> str:
        """Determine which email provider to use based on configuration."""
        if self.smtp_host:
            return EmailProvider.SMTP
        return EmailProvider.MOCK

    async def send_email(self, message: EmailMessage) -> bool:
        """
        Send an email using the configured provider.

        Returns False instead of raising when delivery fails.
        """
        provider = self._determine_provider()

        try:
            if provider == EmailProvider.SMTP:
                return await self._send_via_smtp(message)
            return await self._send_mock(message)
        except Exception as e:
            logger.error(f"Failed to send email via {provider}: {e}")
            return False

    async def _send_via_smtp(self, message: EmailMessage) -> bool:
        """Send email via SMTP."""
        msg = MIMEMultipart('alternative')
        msg['Subject'] = message.subject
        msg['From'] = f"{self.from_name} <{self.from_email}>"
        msg['To'] = ', '.join(message.to)

        if message.cc:
            msg['Cc'] = ', '.join(message.cc)

        if message.reply_to:
            msg['Reply-To'] = message.reply_to

        msg.attach(MIMEText(message.body_text, 'plain'))
        if message.body_html:
            msg.attach(MIMEText(message.body_html, 'html'))

        recipients = message.to + (message.cc or [])

        # smtplib blocks, keep it off the event loop
        await asyncio.to_thread(self._deliver, recipients, msg.as_string())

        logger.info(f"Email sent via SMTP to {message.to}")
        return True

    def _deliver(self, recipients: List[str], payload: str) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
            if self.smtp_use_tls:
                server.starttls(context=ssl.create_default_context())
            if self.smtp_username and self.smtp_password:
                server.login(self.smtp_username, self.smtp_password)
            server.sendmail(self.from_email, recipients, payload)

    async def _send_mock(self, message: EmailMessage) -> bool:
        """Mock email sending for development."""
        logger.info(f"[MOCK EMAIL] To: {message.to} | Subject: {message.subject}")
        logger.debug(f"[MOCK EMAIL] Body: {message.body_text[:200]}...")
        return True

    # ===========================================
    # NOTIFICATION TEMPLATES
    # ===========================================

    async def send_contract_expiry_alert(
        self,
        to_email: str,
        client_name: str,
        stage: ReminderStage,
        days_until_expiry: int,
        contract_start_date: datetime,
        contract_duration_days: int,
        contract_end_date: datetime,
    ) -> bool:
        """Notify the administrator that a client contract is nearing expiry."""
        stage_message = STAGE_MESSAGES[stage]
        subject = f"Contract Expiry {stage.value} Alert - {days_until_expiry} days remaining"

        body_html = f"""
        <html>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <h2>Contract Expiry {stage.value} Alert</h2>
            <p><strong>Client:</strong> {client_name}</p>
            <p>Contract will expire in <strong>{days_until_expiry} days</strong>.</p>
            <p>{stage_message}</p>
            <p><strong>Contract Details:</strong></p>
            <ul>
                <li>Start Date: {contract_start_date:%a %b %d %Y}</li>
                <li>Duration: {contract_duration_days} days</li>
                <li>Expiry Date: {contract_end_date:%a %b %d %Y}</li>
            </ul>
            <p>Please review and take necessary actions.</p>
        </body>
        </html>
        """

        body_text = (
            f"Contract Expiry {stage.value} Alert\n\n"
            f"Client: {client_name}\n"
            f"Contract will expire in {days_until_expiry} days.\n"
            f"{stage_message}\n\n"
            f"Start Date: {contract_start_date:%Y-%m-%d}\n"
            f"Duration: {contract_duration_days} days\n"
            f"Expiry Date: {contract_end_date:%Y-%m-%d}\n"
        )

        return await self.send_email(EmailMessage(
            to=[to_email],
            subject=subject,
            body_text=body_text,
            body_html=body_html,
        ))
