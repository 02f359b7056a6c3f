"""create_event_tables

Revision ID: 5c1f0a9d2b7e
Revises:
Create Date: 2026-10-18 09:12:44.318802

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5c1f0a9d2b7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'baby_profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('feed_term_seconds', sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'custom_event_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('emoji', sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_custom_event_types_emoji'), 'custom_event_types', ['emoji'], unique=True)

    op.create_table(
        'feed_sessions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('profile_id', sa.Uuid(), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('amount_value', sa.Float(), nullable=True),
        sa.Column('amount_unit_symbol', sa.String(length=16), nullable=True),
        sa.Column('memo_text', sa.Text(), nullable=True),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['baby_profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_feed_sessions_start_time', 'feed_sessions', ['start_time'], unique=False)
    op.create_index('idx_feed_sessions_profile_id', 'feed_sessions', ['profile_id'], unique=False)

    op.create_table(
        'diaper_changes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('profile_id', sa.Uuid(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('diaper_type', sa.String(length=16), nullable=False),
        sa.Column('memo_text', sa.Text(), nullable=True),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['baby_profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_diaper_changes_timestamp', 'diaper_changes', ['timestamp'], unique=False)
    op.create_index('idx_diaper_changes_profile_id', 'diaper_changes', ['profile_id'], unique=False)

    op.create_table(
        'custom_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('profile_id', sa.Uuid(), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('event_type_name', sa.String(length=100), nullable=False),
        sa.Column('event_type_emoji', sa.String(length=32), nullable=False),
        sa.Column('memo_text', sa.Text(), nullable=True),
        *_timestamps(),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['profile_id'], ['baby_profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_custom_events_timestamp', 'custom_events', ['timestamp'], unique=False)
    op.create_index('idx_custom_events_profile_id', 'custom_events', ['profile_id'], unique=False)
    op.create_index('idx_custom_events_event_type_emoji', 'custom_events', ['event_type_emoji'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_custom_events_event_type_emoji', table_name='custom_events')
    op.drop_index('idx_custom_events_profile_id', table_name='custom_events')
    op.drop_index('idx_custom_events_timestamp', table_name='custom_events')
    op.drop_table('custom_events')
    op.drop_index('idx_diaper_changes_profile_id', table_name='diaper_changes')
    op.drop_index('idx_diaper_changes_timestamp', table_name='diaper_changes')
    op.drop_table('diaper_changes')
    op.drop_index('idx_feed_sessions_profile_id', table_name='feed_sessions')
    op.drop_index('idx_feed_sessions_start_time', table_name='feed_sessions')
    op.drop_table('feed_sessions')
    op.drop_index(op.f('ix_custom_event_types_emoji'), table_name='custom_event_types')
    op.drop_table('custom_event_types')
    op.drop_table('baby_profiles')
