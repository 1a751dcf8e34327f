"""create salon booking tables

Revision ID: a1c4e7b9d2f0
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1c4e7b9d2f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Users (clients and staff accounts)
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='client'),
        sa.Column('profile_image', sa.String, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'))
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2. Services
    op.create_table(
        'services',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('duration', sa.Integer, nullable=False),
        sa.Column('price', sa.Integer, nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('image', sa.String, nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.CheckConstraint('duration > 0', name='ck_services_duration_positive')
    )
    op.create_index('ix_services_category', 'services', ['category'])

    # 3. Staff profiles and the services they perform
    op.create_table(
        'staff',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False, unique=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column('bio', sa.Text, nullable=True),
        sa.Column('rating', sa.Integer, nullable=True),
        sa.Column('review_count', sa.Integer, server_default='0')
    )

    op.create_table(
        'staff_services',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('staff_id', sa.Integer, sa.ForeignKey('staff.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False),
        sa.UniqueConstraint('staff_id', 'service_id', name='uq_staff_service')
    )
    op.create_index('ix_staff_services_staff_id', 'staff_services', ['staff_id'])

    # 4. Working hours and unavailable dates
    op.create_table(
        'working_hours',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('staff_id', sa.Integer, sa.ForeignKey('staff.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer, nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('is_available', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_working_hours_day'),
        sa.CheckConstraint('NOT is_available OR start_time < end_time', name='ck_working_hours_window')
    )
    op.create_index('ix_working_hours_staff_day', 'working_hours', ['staff_id', 'day_of_week'])

    op.create_table(
        'unavailable_dates',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('staff_id', sa.Integer, sa.ForeignKey('staff.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('reason', sa.Text, nullable=True)
    )
    op.create_index('ix_unavailable_dates_staff_id', 'unavailable_dates', ['staff_id'])

    # 5. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('client_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('staff_id', sa.Integer, sa.ForeignKey('staff.id'), nullable=False),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id'), nullable=False),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='confirmed'),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reminder_sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('start_time < end_time', name='ck_appointments_interval'),
        sa.CheckConstraint("status IN ('confirmed', 'completed', 'cancelled')", name='ck_appointments_status')
    )
    op.create_index('ix_appointments_client_id', 'appointments', ['client_id'])
    op.create_index('ix_appointments_staff_date', 'appointments', ['staff_id', 'date'])
    op.create_index(
        'uq_appointments_live_slot', 'appointments', ['staff_id', 'date', 'start_time'],
        unique=True, postgresql_where=sa.text("status <> 'cancelled'")
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_appointments_live_slot', table_name='appointments')
    op.drop_index('ix_appointments_staff_date', table_name='appointments')
    op.drop_index('ix_appointments_client_id', table_name='appointments')
    op.drop_table('appointments')
    op.drop_index('ix_unavailable_dates_staff_id', table_name='unavailable_dates')
    op.drop_table('unavailable_dates')
    op.drop_index('ix_working_hours_staff_day', table_name='working_hours')
    op.drop_table('working_hours')
    op.drop_index('ix_staff_services_staff_id', table_name='staff_services')
    op.drop_table('staff_services')
    op.drop_table('staff')
    op.drop_index('ix_services_category', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
