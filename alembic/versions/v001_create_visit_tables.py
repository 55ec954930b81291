"""Create visits and waitlist_entries tables

Revision ID: v001_create_visit_tables
Revises:
Create Date: 2026-10-19

This migration creates the front desk tables:
- visits: client visits seated at a table
- waitlist_entries: clients waiting for a free table

The partial unique index uq_visits_active_table allows one active visit per
(venue_id, floor, table_number), so concurrent seatings cannot share a table.
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'v001_create_visit_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'visits',
        sa.Column('id', sa.String(), primary_key=True),

        # Occupancy key
        sa.Column('venue_id', sa.String(), nullable=False),
        sa.Column('floor', sa.String(), nullable=False, server_default='N/A'),
        sa.Column('table_number', sa.Integer(), nullable=False),

        sa.Column('status', sa.String(20), nullable=False, server_default='active'),

        # Client and broker
        sa.Column('client_name', sa.String(), nullable=False),
        sa.Column('client_document', sa.String(), nullable=False),
        sa.Column('client_phone', sa.String(), nullable=True),
        sa.Column('broker_id', sa.String(), nullable=True),
        sa.Column('broker_name', sa.String(), nullable=True),
        sa.Column('development', sa.String(), nullable=True),

        # Timestamps
        sa.Column('entry_time', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('exit_time', sa.DateTime(timezone=True), nullable=True),

        sa.CheckConstraint('table_number >= 1', name='check_visit_table_positive'),
    )

    op.create_check_constraint(
        'check_visit_status',
        'visits',
        "status IN ('active', 'finished')"
    )

    op.create_index('ix_visits_venue_id', 'visits', ['venue_id'])
    op.create_index('ix_visits_broker_id', 'visits', ['broker_id'])
    op.create_index('ix_visits_venue_status', 'visits', ['venue_id', 'status'])
    op.create_index(
        'uq_visits_active_table',
        'visits',
        ['venue_id', 'floor', 'table_number'],
        unique=True,
        postgresql_where=sa.text("status = 'active'"),
    )

    op.create_table(
        'waitlist_entries',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('venue_id', sa.String(), nullable=False),
        sa.Column('client_name', sa.String(), nullable=False),
        sa.Column('client_document', sa.String(), nullable=False),
        sa.Column('client_phone', sa.String(), nullable=True),
        sa.Column('broker_id', sa.String(), nullable=True),
        sa.Column('broker_name', sa.String(), nullable=True),
        sa.Column('desired_development', sa.String(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='waiting'),
        sa.Column('visit_id', sa.String(), sa.ForeignKey('visits.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('NOW()')),
        sa.Column('seated_at', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_check_constraint(
        'check_waitlist_status',
        'waitlist_entries',
        "status IN ('waiting', 'seated')"
    )

    op.create_index('ix_waitlist_entries_venue_id', 'waitlist_entries', ['venue_id'])
    op.create_index('ix_waitlist_venue_status', 'waitlist_entries', ['venue_id', 'status'])


def downgrade() -> None:
    op.drop_index('ix_waitlist_venue_status', table_name='waitlist_entries')
    op.drop_index('ix_waitlist_entries_venue_id', table_name='waitlist_entries')
    op.drop_table('waitlist_entries')

    op.drop_index('uq_visits_active_table', table_name='visits')
    op.drop_index('ix_visits_venue_status', table_name='visits')
    op.drop_index('ix_visits_broker_id', table_name='visits')
    op.drop_index('ix_visits_venue_id', table_name='visits')
    op.drop_table('visits')
