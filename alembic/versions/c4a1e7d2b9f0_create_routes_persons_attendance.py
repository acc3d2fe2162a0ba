"""create routes, persons and attendance records

Revision ID: c4a1e7d2b9f0
Revises:
Create Date: 2026-01-13 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'c4a1e7d2b9f0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'routes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('number', sa.Integer(), nullable=False, unique=True),
        sa.Column('bus_number', sa.String(), nullable=False),
        sa.Column('driver', sa.String(), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
    )

    op.create_table(
        'persons',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('date_of_birth', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('gender', sa.String(), nullable=True),
        sa.Column('paid', sa.Boolean(), nullable=True),
        sa.Column('seat_number', sa.Integer(), nullable=True),
        sa.Column('route_number', sa.Integer(), sa.ForeignKey('routes.number'), nullable=True),
    )
    op.create_index('ix_persons_role_email', 'persons', ['role', sa.text('lower(email)')])

    op.create_table(
        'attendance_records',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('route_number', sa.Integer(), sa.ForeignKey('routes.number'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('count >= 0', name='attendance_count_non_negative'),
    )
    op.create_index('ix_attendance_records_route_number', 'attendance_records', ['route_number'])


def downgrade() -> None:
    op.drop_index('ix_attendance_records_route_number', table_name='attendance_records')
    op.drop_table('attendance_records')
    op.drop_index('ix_persons_role_email', table_name='persons')
    op.drop_table('persons')
    op.drop_table('routes')
