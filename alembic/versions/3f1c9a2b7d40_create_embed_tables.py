"""Create workspace, account and embed tables

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

account_role = sa.Enum('admin', 'manager', 'default', name='accountrole')


def upgrade() -> None:
    op.create_table(
        'workspaces',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('role', account_role, nullable=False),
        sa.Column('suspended', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )

    op.create_table(
        'embed_configs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('uuid', sa.String(length=36), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('chat_mode', sa.String(length=32), nullable=False, server_default='query'),
        sa.Column('allowlist_domains', sa.Text(), nullable=True),
        sa.Column('allow_model_override', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_temperature_override', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('allow_prompt_override', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('max_chats_per_day', sa.Integer(), nullable=True),
        sa.Column('max_chats_per_session', sa.Integer(), nullable=True),

        # Widget appearance, camelCase to match the wire format
        sa.Column('chatIcon', sa.String(length=255), nullable=True),
        sa.Column('buttonColor', sa.String(length=255), nullable=True),
        sa.Column('userBgColor', sa.String(length=255), nullable=True),
        sa.Column('assistantBgColor', sa.String(length=255), nullable=True),
        sa.Column('brandImageUrl', sa.String(length=255), nullable=True),
        sa.Column('assistantName', sa.String(length=255), nullable=True),
        sa.Column('assistantIcon', sa.String(length=255), nullable=True),
        sa.Column('position', sa.String(length=255), nullable=True),
        sa.Column('windowHeight', sa.String(length=255), nullable=True),
        sa.Column('windowWidth', sa.String(length=255), nullable=True),
        sa.Column('textSize', sa.String(length=255), nullable=True),
        sa.Column('supportEmail', sa.String(length=255), nullable=True),
        sa.Column('defaultMessages', sa.Text(), nullable=True),

        sa.Column('workspace_id', sa.Integer(), nullable=False),
        sa.Column('createdBy', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['workspace_id'], ['workspaces.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['createdBy'], ['accounts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('uuid'),
    )

    op.create_table(
        'embed_chats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('prompt', sa.Text(), nullable=False),
        sa.Column('response', sa.Text(), nullable=False),
        sa.Column('session_id', sa.String(length=255), nullable=False),
        sa.Column('include', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('connection_information', sa.Text(), nullable=True),
        sa.Column('embed_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['embed_id'], ['embed_configs.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_embed_chats_session_id', 'embed_chats', ['session_id'])

    op.create_table(
        'api_keys',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('secret', sa.String(length=64), nullable=False),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['created_by'], ['accounts.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('secret'),
    )

    op.create_table(
        'event_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('event', sa.String(length=255), nullable=False),
        sa.Column('metadata', sa.Text(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('occurred_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_event_logs_event', 'event_logs', ['event'])


def downgrade() -> None:
    op.drop_index('ix_event_logs_event', table_name='event_logs')
    op.drop_table('event_logs')
    op.drop_table('api_keys')
    op.drop_index('ix_embed_chats_session_id', table_name='embed_chats')
    op.drop_table('embed_chats')
    op.drop_table('embed_configs')
    op.drop_table('accounts')
    op.drop_table('workspaces')
    account_role.drop(op.get_bind(), checkfirst=True)
