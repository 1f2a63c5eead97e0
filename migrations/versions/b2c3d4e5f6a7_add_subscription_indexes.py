"""add subscription indexes for filter and aggregate queries

Revision ID: b2c3d4e5f6a7
Revises: a1b2c3d4e5f6
Create Date: 2026-01-21
"""
from alembic import op


revision = 'b2c3d4e5f6a7'
down_revision = 'a1b2c3d4e5f6'
branch_labels = None
depends_on = None


def upgrade():
    op.create_index('ix_subscriptions_user_id', 'subscriptions', ['user_id'])
    op.create_index('ix_subscriptions_service_name', 'subscriptions', ['service_name'])
    op.create_index('ix_subscriptions_dates', 'subscriptions', ['start_date', 'end_date'])
    op.create_index(
        'ix_subscriptions_agg', 'subscriptions',
        ['user_id', 'service_name', 'start_date', 'end_date'],
    )


def downgrade():
    op.drop_index('ix_subscriptions_agg', table_name='subscriptions')
    op.drop_index('ix_subscriptions_dates', table_name='subscriptions')
    op.drop_index('ix_subscriptions_service_name', table_name='subscriptions')
    op.drop_index('ix_subscriptions_user_id', table_name='subscriptions')
