"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def _authorship():
    return [
        sa.Column('created_by_id', sa.String(length=36), nullable=True),
        sa.Column('updated_by_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['created_by_id'], ['user.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['updated_by_id'], ['user.id'], ondelete='SET NULL'),
    ]


def upgrade():
    # User table
    op.create_table(
        'user',
        *_timestamps(),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('ADMIN', 'USER', 'MANAGER', 'COACH', name='user_role', native_enum=False), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_user_username', 'user', ['username'], unique=True)
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    # Team table
    op.create_table(
        'team',
        *_timestamps(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=255), nullable=False),
        sa.Column('stadium', sa.String(length=255), nullable=False),
        sa.Column('sport', sa.Enum('BASEBALL', 'BASKETBALL', 'HOCKEY', 'FOOTBALL', 'SOCCER', name='sport_type', native_enum=False), nullable=False),
        sa.Column('manager_id', sa.String(length=36), nullable=True),
        sa.Column('stadium_photo', sa.String(length=512), nullable=True),
        sa.Column('team_type', sa.Enum('YOUTH', 'PROFESSIONAL', 'COLLEGE', 'AMATEUR', name='team_type', native_enum=False), nullable=True),
        sa.Column('stadium_location', sa.String(length=255), nullable=True),
        sa.Column('stadium_capacity', sa.Integer(), nullable=True),
        *_authorship(),
        sa.ForeignKeyConstraint(['manager_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_index('ix_team_manager_id', 'team', ['manager_id'], unique=False)

    # Player table
    op.create_table(
        'player',
        *_timestamps(),
        sa.Column('team_id', sa.String(length=36), nullable=True),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('player_number', sa.Integer(), nullable=False),
        sa.Column('position', sa.String(length=64), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'INJURED', 'INACTIVE', name='player_status', native_enum=False), nullable=False),
        sa.Column('hometown', sa.String(length=255), nullable=True),
        sa.Column('headshot', sa.String(length=512), nullable=True),
        *_authorship(),
        sa.ForeignKeyConstraint(['team_id'], ['team.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('team_id', 'player_number', name='uq_player_team_number')
    )
    op.create_index('ix_player_team_id', 'player', ['team_id'], unique=False)
    op.create_index('ix_player_team_position', 'player', ['team_id', 'position'], unique=False)

    # Schedule table
    op.create_table(
        'schedule',
        *_timestamps(),
        sa.Column('home_team_id', sa.String(length=36), nullable=False),
        sa.Column('away_team_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('arena', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=255), nullable=False),
        sa.Column('status', sa.Enum('SCHEDULED', 'COMPLETED', 'CANCELED', name='fixture_status', native_enum=False), nullable=False),
        sa.Column('season', sa.Enum('REGULAR', 'PLAYOFFS', 'FRIENDLY', 'TOURNAMENT', name='season_type', native_enum=False), nullable=False),
        sa.Column('location', sa.Enum('HOME', 'AWAY', 'NEUTRAL', name='fixture_location', native_enum=False), nullable=False),
        sa.Column('game_duration', sa.Integer(), nullable=True),
        sa.Column('time_zone', sa.String(length=64), nullable=True),
        *_authorship(),
        sa.ForeignKeyConstraint(['home_team_id'], ['team.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['away_team_id'], ['team.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('home_team_id', 'away_team_id', 'date', name='uq_schedule_matchup_date')
    )
    op.create_index('ix_schedule_home_team_id', 'schedule', ['home_team_id'], unique=False)
    op.create_index('ix_schedule_away_team_id', 'schedule', ['away_team_id'], unique=False)
    op.create_index('ix_schedule_date', 'schedule', ['date'], unique=False)

    # Audit log
    op.create_table(
        'audit_log',
        *_timestamps(),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('action', sa.String(length=128), nullable=False),
        sa.Column('entity_type', sa.String(length=128), nullable=False),
        sa.Column('entity_id', sa.String(length=36), nullable=True),
        sa.Column('meta', sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_audit_log_user_id', 'audit_log', ['user_id'], unique=False)


def downgrade():
    op.drop_index('ix_audit_log_user_id', table_name='audit_log')
    op.drop_table('audit_log')
    op.drop_index('ix_schedule_date', table_name='schedule')
    op.drop_index('ix_schedule_away_team_id', table_name='schedule')
    op.drop_index('ix_schedule_home_team_id', table_name='schedule')
    op.drop_table('schedule')
    op.drop_index('ix_player_team_position', table_name='player')
    op.drop_index('ix_player_team_id', table_name='player')
    op.drop_table('player')
    op.drop_index('ix_team_manager_id', table_name='team')
    op.drop_table('team')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_index('ix_user_username', table_name='user')
    op.drop_table('user')
