"""Add notification channels to user preferences

Existing rows receive every channel switched off and
notifications_migrated = false; the application restores the defaults on
their next read. New rows get the regular defaults.

Revision ID: 20261010_000001
Revises: 20261001_000001
Create Date: 2026-10-10

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '20261010_000001'
down_revision: Union[str, None] = '20261001_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CHANNEL_DEFAULTS = {
    'email_enabled': 'true',
    'push_enabled': 'true',
    'sms_enabled': 'false',
    'desktop_enabled': 'true',
}


def upgrade() -> None:
    with op.batch_alter_table('user_preferences') as batch_op:
        for column in CHANNEL_DEFAULTS:
            batch_op.add_column(
                sa.Column(column, sa.Boolean(), nullable=False, server_default=sa.text('false'))
            )
        batch_op.add_column(
            sa.Column(
                'notifications_migrated',
                sa.Boolean(),
                nullable=False,
                server_default=sa.text('false'),
            )
        )

    with op.batch_alter_table('user_preferences') as batch_op:
        for column, default in CHANNEL_DEFAULTS.items():
            batch_op.alter_column(
                column,
                existing_type=sa.Boolean(),
                existing_nullable=False,
                server_default=sa.text(default),
            )


def downgrade() -> None:
    with op.batch_alter_table('user_preferences') as batch_op:
        batch_op.drop_column('notifications_migrated')
        for column in reversed(list(CHANNEL_DEFAULTS)):
            batch_op.drop_column(column)
