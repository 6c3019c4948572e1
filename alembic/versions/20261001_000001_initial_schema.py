"""Initial schema: users, technicians, tickets, system settings, preferences

Revision ID: 20261001_000001
Revises:
Create Date: 2026-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20261001_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # === USERS ===
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='CLIENT'),
        sa.Column('avatar', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    # === TECHNICIANS ===
    op.create_table(
        'technicians',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('full_name', sa.String(length=200), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('user_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_technicians_email'), 'technicians', ['email'], unique=True)

    # === TICKETS ===
    op.create_table(
        'tickets',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('status', sa.String(length=30), nullable=False, server_default='New'),
        sa.Column('priority', sa.String(length=20), nullable=False, server_default='Medium'),
        sa.Column('created_by_id', sa.Uuid(), nullable=True),
        sa.Column('assigned_technician_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assigned_technician_id'], ['technicians.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_tickets_assigned_technician_id'), 'tickets', ['assigned_technician_id']
    )

    # === SYSTEM SETTINGS ===
    op.create_table(
        'system_settings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('app_name', sa.String(length=200), nullable=False),
        sa.Column('support_email', sa.String(length=255), nullable=False),
        sa.Column('support_phone', sa.String(length=50), nullable=True),
        sa.Column('default_language', sa.String(length=10), nullable=False, server_default='fa'),
        sa.Column('default_theme', sa.String(length=20), nullable=False, server_default='system'),
        sa.Column('timezone', sa.String(length=100), nullable=False, server_default='Asia/Tehran'),
        sa.Column('default_priority', sa.String(length=20), nullable=False, server_default='Medium'),
        sa.Column('default_status', sa.String(length=30), nullable=False, server_default='New'),
        sa.Column('response_sla_hours', sa.Integer(), nullable=False, server_default='24'),
        sa.Column('auto_assign_enabled', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('allow_client_attachments', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('max_attachment_size_mb', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('email_notifications_enabled', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('sms_notifications_enabled', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('notify_on_ticket_created', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('notify_on_ticket_assigned', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('notify_on_ticket_replied', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('notify_on_ticket_closed', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('password_min_length', sa.Integer(), nullable=False, server_default='6'),
        sa.Column('require_2fa', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('session_timeout_minutes', sa.Integer(), nullable=False, server_default='60'),
        sa.Column('allowed_email_domains', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    # === USER PREFERENCES (appearance only) ===
    op.create_table(
        'user_preferences',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('theme', sa.String(length=20), nullable=False, server_default='system'),
        sa.Column('font_size', sa.String(length=10), nullable=False, server_default='md'),
        sa.Column('language', sa.String(length=10), nullable=False, server_default='fa'),
        sa.Column('timezone', sa.String(length=100), nullable=False, server_default='Asia/Tehran'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_preferences_user_id'), 'user_preferences', ['user_id'], unique=True)


def downgrade() -> None:
    op.drop_index(op.f('ix_user_preferences_user_id'), table_name='user_preferences')
    op.drop_table('user_preferences')
    op.drop_table('system_settings')
    op.drop_index(op.f('ix_tickets_assigned_technician_id'), table_name='tickets')
    op.drop_table('tickets')
    op.drop_index(op.f('ix_technicians_email'), table_name='technicians')
    op.drop_table('technicians')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
