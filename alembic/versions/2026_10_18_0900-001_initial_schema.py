"""Initial schema: profiles, sessions, roster, questionnaires, workouts

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

AutoString = sqlmodel.sql.sqltypes.AutoString


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)'))


def _assignment_columns() -> list:
    return [sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('assigned_to', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
            sa.Column('assigned_by', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
            _timestamp('assigned_at'),
            sa.Column('due_date', sa.Date(), nullable=True),
            sa.Column('status', AutoString(length=20), nullable=False, server_default='pending')]


def upgrade() -> None:
    """Create all tables."""
    op.create_table('profiles', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', AutoString(length=255), nullable=False),
        sa.Column('hashed_password', AutoString(), nullable=False),
        sa.Column('name', AutoString(length=255), nullable=True),
        sa.Column('role', AutoString(length=20), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        _timestamp('created_at'), _timestamp('updated_at'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_profiles_email'), 'profiles', ['email'], unique=True)
    op.create_index(op.f('ix_profiles_role'), 'profiles', ['role'])

    op.create_table('auth_sessions', sa.Column('id', AutoString(length=64), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('user_agent', AutoString(length=255), nullable=True),
        _timestamp('created_at'),
        sa.Column('expires_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_auth_sessions_user_id'), 'auth_sessions', ['user_id'])

    op.create_table('trainer_athletes', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('trainer_id', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('athlete_id', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('status', AutoString(length=20), nullable=False, server_default='active'),
        _timestamp('created_at'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('trainer_id', 'athlete_id', name='uq_trainer_athlete'))
    op.create_index(op.f('ix_trainer_athletes_trainer_id'), 'trainer_athletes', ['trainer_id'])
    op.create_index(op.f('ix_trainer_athletes_athlete_id'), 'trainer_athletes', ['athlete_id'])

    # Questionnaires
    op.create_table('questionnaires', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', AutoString(length=255), nullable=False),
        sa.Column('description', AutoString(length=2000), nullable=True),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
        _timestamp('created_at'), _timestamp('updated_at'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_questionnaires_created_by'), 'questionnaires', ['created_by'])

    op.create_table('questions', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('questionnaire_id', sa.Integer(), sa.ForeignKey('questionnaires.id'), nullable=False),
        sa.Column('text', AutoString(length=1000), nullable=False),
        sa.Column('type', AutoString(length=20), nullable=False),
        sa.Column('question_order', sa.Integer(), nullable=False, server_default='1'),
        _timestamp('created_at'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_questions_questionnaire_id'), 'questions', ['questionnaire_id'])

    op.create_table('questionnaire_assignments', *_assignment_columns(),
        sa.Column('questionnaire_id', sa.Integer(), sa.ForeignKey('questionnaires.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    for column in ('assigned_to', 'assigned_by', 'questionnaire_id'):
        op.create_index(op.f(f'ix_questionnaire_assignments_{column}'), 'questionnaire_assignments', [column])

    op.create_table('responses', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), sa.ForeignKey('questions.id'), nullable=False),
        sa.Column('assignment_id', sa.Integer(), sa.ForeignKey('questionnaire_assignments.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
        sa.Column('response_text', AutoString(length=5000), nullable=True),
        sa.Column('response_number', sa.Float(), nullable=True),
        _timestamp('submitted_at'),
        sa.PrimaryKeyConstraint('id'))
    for column in ('question_id', 'assignment_id', 'user_id'):
        op.create_index(op.f(f'ix_responses_{column}'), 'responses', [column])

    # Workouts
    op.create_table('workouts', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', AutoString(length=255), nullable=False),
        sa.Column('description', AutoString(length=2000), nullable=False, server_default=''),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('profiles.id'), nullable=False),
        _timestamp('created_at'), _timestamp('updated_at'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_workouts_created_by'), 'workouts', ['created_by'])

    op.create_table('exercises', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id'), nullable=False),
        sa.Column('name', AutoString(length=255), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('reps', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('rest', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', AutoString(length=1000), nullable=False, server_default=''),
        sa.Column('exercise_order', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_exercises_workout_id'), 'exercises', ['workout_id'])

    op.create_table('workout_assignments', *_assignment_columns(),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id'), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    for column in ('assigned_to', 'assigned_by', 'workout_id'):
        op.create_index(op.f(f'ix_workout_assignments_{column}'), 'workout_assignments', [column])


def downgrade() -> None:
    """Drop all tables."""
    for table in ('workout_assignments', 'exercises', 'workouts', 'responses', 'questionnaire_assignments',
                  'questions', 'questionnaires', 'trainer_athletes', 'auth_sessions', 'profiles'):
        op.drop_table(table)
