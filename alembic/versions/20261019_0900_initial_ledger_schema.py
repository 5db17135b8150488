"""Initial back office ledger schema

Revision ID: 20261019_0900
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '20261019_0900'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUMS = {
    'client_type': ('PROSPECT', 'ACTIVE', 'INACTIVE'),
    'reminder_type': ('CONTRACT_EXPIRY', 'STAFF_CONTRACT', 'PAYMENT_DUE', 'GENERAL'),
    'reminder_priority': ('LOW', 'MEDIUM', 'HIGH', 'URGENT'),
    'reminder_stage': ('INITIAL', 'MIDPOINT', 'FINAL'),
    'staff_type': ('MONTHLY', 'WORK_BASIS'),
    'expense_source': ('STAFF_MONTHLY', 'STAFF_WORK_BASIS', 'GENERAL'),
    'social_platform': ('INSTAGRAM', 'FACEBOOK', 'YOUTUBE', 'TIKTOK', 'TWITTER', 'LINKEDIN', 'OTHER'),
    'payment_status': ('PENDING', 'PAID', 'OVERDUE', 'CANCELLED'),
    'payment_method': ('BANK_TRANSFER', 'CASH', 'CHEQUE', 'DIGITAL_WALLET', 'CREDIT_CARD', 'OTHER'),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Create enum types
    for name in ENUMS:
        _enum(name).create(op.get_bind(), checkfirst=True)

    op.create_table(
        'clients',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.Text, nullable=True),
        sa.Column('contact_person', sa.String(255), nullable=True),
        sa.Column('contract_pdf_path', sa.String(500), nullable=True),

        # Contract
        sa.Column('contract_start_date', sa.DateTime, nullable=False),
        sa.Column('contract_duration_days', sa.Integer, nullable=False),
        sa.Column('type', _enum('client_type'), nullable=False),

        # Account balances (NPR)
        sa.Column('locked_amount_nrs', sa.Integer, nullable=False),
        sa.Column('advance_amount_nrs', sa.Integer, nullable=False),
        sa.Column('due_amount_nrs', sa.Integer, nullable=False),

        sa.Column('last_reminder_stage', _enum('reminder_stage'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_clients_contract_start_date', 'clients', ['contract_start_date'])
    op.create_index('ix_clients_type', 'clients', ['type'])

    op.create_table(
        'staff',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', _enum('staff_type'), nullable=False),
        sa.Column('monthly_salary_nrs', sa.Integer, nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_staff_type', 'staff', ['type'])

    op.create_table(
        'work_items',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('rate_nrs', sa.Integer, nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'staff_works',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('staff_id', sa.Integer,
                  sa.ForeignKey('staff.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('work_item_id', sa.Integer,
                  sa.ForeignKey('work_items.id', ondelete='SET NULL'), nullable=True),
        sa.Column('client_id', sa.Integer,
                  sa.ForeignKey('clients.id', ondelete='SET NULL'), nullable=True),
        sa.Column('quantity', sa.Integer, nullable=True),
        sa.Column('unit_rate_nrs', sa.Integer, nullable=True),
        sa.Column('title', sa.String(255), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('performed_at', sa.DateTime, server_default=sa.func.now(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_staff_works_staff_id', 'staff_works', ['staff_id'])
    op.create_index('ix_staff_works_performed_at', 'staff_works', ['performed_at'])

    op.create_table(
        'incomes',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('client_id', sa.Integer,
                  sa.ForeignKey('clients.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('amount_nrs', sa.Integer, nullable=False),
        sa.Column('note', sa.Text, nullable=True),
        sa.Column('received_at', sa.DateTime, server_default=sa.func.now(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_incomes_client_id', 'incomes', ['client_id'])
    op.create_index('ix_incomes_received_at', 'incomes', ['received_at'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('staff_id', sa.Integer,
                  sa.ForeignKey('staff.id', ondelete='SET NULL'), nullable=True),
        sa.Column('amount_nrs', sa.Integer, nullable=False),
        sa.Column('source', _enum('expense_source'), nullable=False),
        sa.Column('note', sa.Text, nullable=True),
        sa.Column('paid_at', sa.DateTime, server_default=sa.func.now(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_expenses_staff_id', 'expenses', ['staff_id'])
    op.create_index('ix_expenses_source', 'expenses', ['source'])
    op.create_index('ix_expenses_paid_at', 'expenses', ['paid_at'])

    op.create_table(
        'admin_reminders',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('type', _enum('reminder_type'), nullable=False),
        sa.Column('priority', _enum('reminder_priority'), nullable=False),
        sa.Column('stage', _enum('reminder_stage'), nullable=True),
        sa.Column('due_date', sa.DateTime, nullable=False),
        sa.Column('is_completed', sa.Boolean, nullable=False),
        sa.Column('client_id', sa.Integer,
                  sa.ForeignKey('clients.id', ondelete='SET NULL'), nullable=True),
        sa.Column('staff_id', sa.Integer,
                  sa.ForeignKey('staff.id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_admin_reminders_due_date', 'admin_reminders', ['due_date'])
    op.create_index('ix_admin_reminders_client_id', 'admin_reminders', ['client_id'])
    op.create_index('ix_admin_reminders_staff_id', 'admin_reminders', ['staff_id'])

    op.create_table(
        'influencers',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('contact_number', sa.String(50), nullable=True),
        sa.Column('address', sa.Text, nullable=True),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'social_handles',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('influencer_id', sa.Integer,
                  sa.ForeignKey('influencers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('platform', _enum('social_platform'), nullable=False),
        sa.Column('handle', sa.String(255), nullable=False),
        sa.Column('url', sa.String(500), nullable=True),
        sa.Column('followers', sa.Integer, nullable=True),
        sa.Column('is_verified', sa.Boolean, nullable=False),
        sa.Column('is_primary', sa.Boolean, nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_social_handles_influencer_id', 'social_handles', ['influencer_id'])

    op.create_table(
        'collaborations',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('influencer_id', sa.Integer,
                  sa.ForeignKey('influencers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('campaign_name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('deliverables', sa.Text, nullable=False),
        sa.Column('agreed_amount_nrs', sa.Integer, nullable=False),
        sa.Column('start_date', sa.DateTime, nullable=False),
        sa.Column('end_date', sa.DateTime, nullable=False),
        sa.Column('status', sa.String(50), nullable=False),
        sa.Column('notes', sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_collaborations_influencer_id', 'collaborations', ['influencer_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('influencer_id', sa.Integer,
                  sa.ForeignKey('influencers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('collaboration_id', sa.Integer,
                  sa.ForeignKey('collaborations.id', ondelete='SET NULL'), nullable=True),
        sa.Column('amount_nrs', sa.Integer, nullable=False),
        sa.Column('status', _enum('payment_status'), nullable=False),
        sa.Column('payment_method', _enum('payment_method'), nullable=True),
        sa.Column('transaction_id', sa.String(255), nullable=True),
        sa.Column('payment_date', sa.DateTime, nullable=True),
        sa.Column('due_date', sa.DateTime, nullable=True),
        sa.Column('notes', sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_payments_influencer_id', 'payments', ['influencer_id'])
    op.create_index('ix_payments_collaboration_id', 'payments', ['collaboration_id'])
    op.create_index('ix_payments_status', 'payments', ['status'])
    op.create_index('ix_payments_due_date', 'payments', ['due_date'])


def downgrade() -> None:
    # Indexes go with their tables
    for table in (
        'payments',
        'collaborations',
        'social_handles',
        'influencers',
        'admin_reminders',
        'expenses',
        'incomes',
        'staff_works',
        'work_items',
        'staff',
        'clients',
    ):
        op.drop_table(table)

    # Drop enum types
    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
