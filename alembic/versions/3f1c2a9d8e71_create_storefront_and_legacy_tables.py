"""Create storefront and legacy store tables

Revision ID: 3f1c2a9d8e71
Revises: 
Create Date: 2026-10-19 10:12:44.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f1c2a9d8e71'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _entity_keys():
    # Keys shared by every legacy store table
    return [
        sa.Column('partition_key', sa.String(length=64), primary_key=True),
        sa.Column('row_key', sa.String(length=64), primary_key=True),
        sa.Column('etag', sa.String(length=32), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    # Storefront tables
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('shipping_address', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_date', sa.DateTime(), nullable=False),
        sa.Column('last_login_date', sa.DateTime(), nullable=True),
        sa.CheckConstraint("role IN ('Customer', 'Admin')", name='ck_users_role'),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'cart',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('product_image_url', sa.String(), nullable=True),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('date_added', sa.DateTime(), nullable=False),
        sa.CheckConstraint('quantity >= 1', name='ck_cart_quantity'),
        sa.UniqueConstraint('user_id', 'product_id', name='uq_cart_user_product'),
    )
    op.create_index('ix_cart_id', 'cart', ['id'])
    op.create_index('ix_cart_user_id', 'cart', ['user_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('shipping_address', sa.String(), nullable=False),
        sa.Column('order_date', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_user_id', 'orders', ['user_id'])
    op.create_index('ix_orders_order_date', 'orders', ['order_date'])

    op.create_table(
        'logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('action', sa.String(length=50), nullable=True),
        sa.Column('resource', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
    )
    op.create_index('ix_logs_id', 'logs', ['id'])
    op.create_index('ix_logs_ts', 'logs', ['ts'])
    op.create_index('ix_logs_action', 'logs', ['action'])
    op.create_index('ix_logs_resource', 'logs', ['resource'])
    op.create_index('ix_logs_status', 'logs', ['status'])

    # Legacy store tables
    op.create_table(
        'products',
        *_entity_keys(),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('stock_available', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.CheckConstraint('price >= 0', name='ck_products_price'),
        sa.CheckConstraint('stock_available >= 0', name='ck_products_stock'),
    )
    op.create_index('ix_products_product_name', 'products', ['product_name'])

    op.create_table(
        'customers',
        *_entity_keys(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('surname', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('shipping_address', sa.String(), nullable=False),
    )
    op.create_index('ix_customers_username', 'customers', ['username'])

    op.create_table(
        'legacy_orders',
        *_entity_keys(),
        sa.Column('customer_id', sa.String(length=64), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('product_id', sa.String(length=64), nullable=False),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
    )
    op.create_index('ix_legacy_orders_username', 'legacy_orders', ['username'])

    op.create_table(
        'queue_messages',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('queue_name', sa.String(length=63), nullable=False),
        sa.Column('payload', sa.Text(), nullable=False),
        sa.Column('enqueued_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_queue_messages_id', 'queue_messages', ['id'])
    op.create_index('ix_queue_messages_queue_name', 'queue_messages', ['queue_name'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('queue_messages')
    op.drop_table('legacy_orders')
    op.drop_table('customers')
    op.drop_table('products')
    op.drop_table('logs')
    op.drop_table('orders')
    op.drop_table('cart')
    op.drop_table('users')
