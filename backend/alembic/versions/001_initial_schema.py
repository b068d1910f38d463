"""Initial schema baseline

This migration creates the complete database schema for the Wealth Tracker.

Tables:
    - users: User accounts (default currency label for balances)
    - asset_classes: Top level of each user's asset tree
    - instruments: Kinds of holdings within an asset class
    - providers: Institutions holding the assets
    - assets: Individual trackable holdings
    - monthly_values: One recorded value per asset per calendar month

Revision ID: 001
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # ==========================================================================
    # USERS
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('email', sa.String(), nullable=False, unique=True, index=True),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('default_currency', sa.String(3), nullable=False, server_default='ILS'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    # ==========================================================================
    # ASSET HIERARCHY
    # ==========================================================================
    op.create_table(
        'asset_classes',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )

    op.create_table(
        'instruments',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('asset_class_id', sa.String(32), sa.ForeignKey('asset_classes.id'), nullable=False, index=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )

    op.create_table(
        'providers',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('instrument_id', sa.String(32), sa.ForeignKey('instruments.id'), nullable=False, index=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
    )

    op.create_table(
        'assets',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('provider_id', sa.String(32), sa.ForeignKey('providers.id'), nullable=False, index=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('is_liquid', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('currency', sa.String(3), nullable=False, server_default='ILS'),
        sa.Column('notes', sa.String(1000), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('provider_id', 'name', name='uq_provider_asset_name'),
    )

    # ==========================================================================
    # MONTHLY VALUES
    # ==========================================================================
    op.create_table(
        'monthly_values',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('asset_id', sa.String(32), sa.ForeignKey('assets.id'), nullable=False, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('value', sa.Numeric(18, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('asset_id', 'month', 'year', name='uq_asset_month_year'),
    )
    op.create_index(
        'ix_monthly_value_user_year_month',
        'monthly_values',
        ['user_id', 'year', 'month'],
    )


def downgrade() -> None:
    op.drop_index('ix_monthly_value_user_year_month', table_name='monthly_values')
    op.drop_table('monthly_values')
    op.drop_table('assets')
    op.drop_table('providers')
    op.drop_table('instruments')
    op.drop_table('asset_classes')
    op.drop_table('users')
