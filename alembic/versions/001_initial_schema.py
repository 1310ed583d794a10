"""Initial schema with registry and stock opname tables

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), nullable=False, server_default='VIEWER'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('must_change_password', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_id', 'users', ['id'], unique=False)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Reference data
    op.create_table(
        'sites',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('province', sa.String(100), nullable=True),
        sa.Column('postal_code', sa.String(20), nullable=True),
        sa.Column('country', sa.String(100), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_index('ix_sites_id', 'sites', ['id'], unique=False)

    for table in ('categories', 'departments'):
        op.create_table(
            table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(255), nullable=False),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
            *_timestamps(),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('name')
        )
        op.create_index(f'ix_{table}_id', table, ['id'], unique=False)

    # Create employees table
    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('department', sa.String(255), nullable=True),
        sa.Column('position', sa.String(255), nullable=True),
        sa.Column('join_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_employees_id', 'employees', ['id'], unique=False)
    op.create_index('ix_employees_employee_id', 'employees', ['employee_id'], unique=True)

    # Create assets table
    op.create_table(
        'assets',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_number', sa.String(100), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('status', sa.String(50), nullable=True),
        sa.Column('serial_no', sa.String(255), nullable=True),
        sa.Column('brand', sa.String(255), nullable=True),
        sa.Column('model', sa.String(255), nullable=True),
        sa.Column('cost', sa.Float(), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('pic', sa.String(255), nullable=True),
        sa.Column('pic_id', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.String(500), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('site_id', sa.Integer(), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('department_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['pic_id'], ['employees.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['site_id'], ['sites.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_assets_id', 'assets', ['id'], unique=False)
    op.create_index('ix_assets_asset_number', 'assets', ['asset_number'], unique=True)
    for column in ('pic_id', 'site_id', 'category_id', 'department_id'):
        op.create_index(f'ix_assets_{column}', 'assets', [column], unique=False)

    # Create so_sessions table
    op.create_table(
        'so_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('completion_notes', sa.Text(), nullable=True),
        sa.Column('plan_start', sa.Date(), nullable=True),
        sa.Column('plan_end', sa.Date(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='Active'),
        sa.Column('total_assets', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('scanned_assets', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_so_sessions_id', 'so_sessions', ['id'], unique=False)
    op.create_index('ix_so_sessions_status', 'so_sessions', ['status'], unique=False)

    # Create so_asset_entries table
    op.create_table(
        'so_asset_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('so_session_id', sa.Integer(), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='Scanned'),
        sa.Column('scanned_by', sa.String(255), nullable=True),
        sa.Column('scanned_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('temp_name', sa.String(255), nullable=True),
        sa.Column('temp_status', sa.String(50), nullable=True),
        sa.Column('temp_asset_number', sa.String(100), nullable=True),
        sa.Column('temp_serial_no', sa.String(255), nullable=True),
        sa.Column('temp_pic', sa.String(255), nullable=True),
        sa.Column('temp_pic_id', sa.Integer(), nullable=True),
        sa.Column('temp_brand', sa.String(255), nullable=True),
        sa.Column('temp_model', sa.String(255), nullable=True),
        sa.Column('temp_cost', sa.Float(), nullable=True),
        sa.Column('temp_purchase_date', sa.Date(), nullable=True),
        sa.Column('temp_notes', sa.Text(), nullable=True),
        sa.Column('temp_image_url', sa.String(500), nullable=True),
        sa.Column('temp_site_id', sa.Integer(), nullable=True),
        sa.Column('temp_category_id', sa.Integer(), nullable=True),
        sa.Column('temp_department_id', sa.Integer(), nullable=True),
        sa.Column('is_identified', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('is_crucial', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('crucial_notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['so_session_id'], ['so_sessions.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='RESTRICT'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('so_session_id', 'asset_id', name='uq_so_entry_session_asset')
    )
    op.create_index('ix_so_asset_entries_id', 'so_asset_entries', ['id'], unique=False)
    op.create_index('ix_so_asset_entries_so_session_id', 'so_asset_entries', ['so_session_id'], unique=False)
    op.create_index('ix_so_asset_entries_asset_id', 'so_asset_entries', ['asset_id'], unique=False)

    # Create asset_checkouts table
    op.create_table(
        'asset_checkouts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=False),
        sa.Column('assign_to_id', sa.Integer(), nullable=False),
        sa.Column('department_id', sa.Integer(), nullable=True),
        sa.Column('checkout_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('signature', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='CHECKED_OUT'),
        sa.Column('returned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('return_notes', sa.Text(), nullable=True),
        sa.Column('received_by_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['assign_to_id'], ['employees.id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['department_id'], ['departments.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['received_by_id'], ['employees.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_asset_checkouts_id', 'asset_checkouts', ['id'], unique=False)
    op.create_index('ix_asset_checkouts_asset_id', 'asset_checkouts', ['asset_id'], unique=False)
    op.create_index('ix_asset_checkouts_assign_to_id', 'asset_checkouts', ['assign_to_id'], unique=False)
    op.create_index('ix_asset_checkouts_status', 'asset_checkouts', ['status'], unique=False)

    # Create asset_events table
    op.create_table(
        'asset_events',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('asset_id', sa.Integer(), nullable=False),
        sa.Column('event_type', sa.String(20), nullable=False),
        sa.Column('actor_id', sa.Integer(), nullable=True),
        sa.Column('actor_name', sa.String(255), nullable=True),
        sa.Column('checkout_id', sa.Integer(), nullable=True),
        sa.Column('so_session_id', sa.Integer(), nullable=True),
        sa.Column('so_asset_entry_id', sa.Integer(), nullable=True),
        sa.Column('payload', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['asset_id'], ['assets.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['actor_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['checkout_id'], ['asset_checkouts.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['so_session_id'], ['so_sessions.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['so_asset_entry_id'], ['so_asset_entries.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_asset_events_id', 'asset_events', ['id'], unique=False)
    op.create_index('ix_asset_events_asset_id', 'asset_events', ['asset_id'], unique=False)
    op.create_index('ix_asset_events_asset_created', 'asset_events', ['asset_id', 'created_at'], unique=False)


def downgrade() -> None:
    for table in (
        'asset_events',
        'asset_checkouts',
        'so_asset_entries',
        'so_sessions',
        'assets',
        'employees',
        'departments',
        'categories',
        'sites',
        'users',
    ):
        op.drop_table(table)
