"""Initial store schema: users, catalog, orders, audit log

Revision ID: 3f1c9a2b7d10
Revises: 
Create Date: 2026-10-19 10:12:41.508311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.CheckConstraint("role IN ('Admin', 'Customer')"),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'home_appliances',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('sku', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.CheckConstraint('price >= 0'),
    )
    op.create_index('ix_home_appliances_id', 'home_appliances', ['id'])
    op.create_index('ix_home_appliances_sku', 'home_appliances', ['sku'], unique=True)
    op.create_index('ix_home_appliances_category', 'home_appliances', ['category'])

    op.create_table(
        'appliance_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('home_appliance_id', sa.Integer(), sa.ForeignKey('home_appliances.id'), nullable=False),
        sa.Column('warranty_years', sa.Integer(), nullable=False),
        sa.Column('brand', sa.String(), nullable=False),
        sa.Column('model', sa.String(), nullable=False),
        sa.CheckConstraint('warranty_years >= 0'),
    )
    op.create_index('ix_appliance_items_id', 'appliance_items', ['id'])
    op.create_index('ix_appliance_items_home_appliance_id', 'appliance_items', ['home_appliance_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('total_price', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint('total_price >= 0'),
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])

    op.create_table(
        'audit_log',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('username', sa.String(length=100), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    op.create_index('ix_audit_log_id', 'audit_log', ['id'])
    op.create_index('ix_audit_log_ts', 'audit_log', ['ts'])
    op.create_index('ix_audit_log_action', 'audit_log', ['action'])
    op.create_index('ix_audit_log_resource', 'audit_log', ['resource'])
    op.create_index('ix_audit_log_status', 'audit_log', ['status'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('audit_log')
    op.drop_table('orders')
    op.drop_table('appliance_items')
    op.drop_table('home_appliances')
    op.drop_table('users')
