"""rota tables

Revision ID: 0001
Revises: 
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('branches',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('color', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_branches_name', 'branches', ['name'])

    op.create_table('branch_schedules',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('branch_id', sa.String(36), sa.ForeignKey('branches.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.String(16), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('1')),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('branch_id', name='uq_branch_schedule_branch'),
    )
    op.create_index('ix_branch_schedule_day', 'branch_schedules', ['day_of_week'])

    op.create_table('teachers',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('mobile', sa.String(32), nullable=True),
        sa.Column('gender', sa.String(16), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('specialties', sa.JSON(), nullable=False),
        sa.Column('work_start', sa.String(5), nullable=False),
        sa.Column('work_end', sa.String(5), nullable=False),
        sa.Column('max_hours_per_day', sa.Integer(), nullable=False),
        sa.Column('max_hours_per_week', sa.Integer(), nullable=False),
        sa.Column('available_days', sa.JSON(), nullable=False),
        sa.Column('branch_id', sa.String(36), sa.ForeignKey('branches.id', ondelete='SET NULL'), nullable=True),
        sa.Column('assigned_day', sa.String(16), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_teachers_name', 'teachers', ['name'])

    op.create_table('weekly_teacher_assignments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('teacher_id', sa.String(36), sa.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('branch_id', sa.String(36), sa.ForeignKey('branches.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.String(16), nullable=False),
        sa.Column('week_start_date', sa.String(10), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('branch_id', 'day_of_week', 'week_start_date', name='uq_assignment_branch_slot'),
        sa.UniqueConstraint('teacher_id', 'day_of_week', 'week_start_date', name='uq_assignment_teacher_day'),
    )
    op.create_index('ix_assignment_teacher', 'weekly_teacher_assignments', ['teacher_id'])

def downgrade():
    op.drop_index('ix_assignment_teacher', table_name='weekly_teacher_assignments')
    op.drop_table('weekly_teacher_assignments')
    op.drop_index('ix_teachers_name', table_name='teachers')
    op.drop_table('teachers')
    op.drop_index('ix_branch_schedule_day', table_name='branch_schedules')
    op.drop_table('branch_schedules')
    op.drop_index('ix_branches_name', table_name='branches')
    op.drop_table('branches')
