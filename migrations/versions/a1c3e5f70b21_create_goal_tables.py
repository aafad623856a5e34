"""Create users, goals and habit_completions tables

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'a1c3e5f70b21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=80), nullable=False),
        sa.Column('email', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('user_id'),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('username'),
    )

    op.create_table(
        'goals',
        sa.Column('goal_id', sa.String(length=32), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('unit', sa.String(length=50), nullable=False),
        sa.Column('deadline', sa.Date(), nullable=True),
        sa.Column('target_value', sa.Float(), nullable=False),
        sa.Column('current_value', sa.Float(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('xp_value', sa.Integer(), nullable=False),
        sa.Column('xp_earned', sa.Float(), nullable=False),
        sa.Column('habit_type', sa.String(length=20), nullable=False),
        sa.Column('streak_count', sa.Integer(), nullable=False),
        sa.Column('last_completed_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id']),
        sa.PrimaryKeyConstraint('goal_id'),
    )
    with op.batch_alter_table('goals', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_goals_user_id'), ['user_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_goals_created_at'), ['created_at'], unique=False)

    op.create_table(
        'habit_completions',
        sa.Column('completion_id', sa.Integer(), nullable=False),
        sa.Column('goal_id', sa.String(length=32), nullable=False),
        sa.Column('completed_date', sa.Date(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('auto_completed', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(['goal_id'], ['goals.goal_id']),
        sa.PrimaryKeyConstraint('completion_id'),
        sa.UniqueConstraint('goal_id', 'completed_date', name='_goal_completion_day_uc'),
    )
    with op.batch_alter_table('habit_completions', schema=None) as batch_op:
        batch_op.create_index('ix_habit_completions_date', ['completed_date'], unique=False)


def downgrade():
    with op.batch_alter_table('habit_completions', schema=None) as batch_op:
        batch_op.drop_index('ix_habit_completions_date')
    op.drop_table('habit_completions')

    with op.batch_alter_table('goals', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_goals_created_at'))
        batch_op.drop_index(batch_op.f('ix_goals_user_id'))
    op.drop_table('goals')

    op.drop_table('users')
