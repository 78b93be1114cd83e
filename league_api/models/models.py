from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from flask import current_app
from sqlalchemy import (
    DateTime,
    Enum as SqlEnum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from league_api.extensions import db, bcrypt

JSONType = JSON().with_variant(JSONB, 'postgresql')


class TimestampedBase(db.Model):
    """Abstract base providing id/created/updated columns."""

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class UserRole(Enum):
    ADMIN = "admin"
    USER = "user"
    MANAGER = "manager"
    COACH = "coach"


class SportType(Enum):
    BASEBALL = "Baseball"
    BASKETBALL = "Basketball"
    HOCKEY = "Hockey"
    FOOTBALL = "Football"
    SOCCER = "Soccer"


class TeamType(Enum):
    YOUTH = "Youth"
    PROFESSIONAL = "Professional"
    COLLEGE = "College"
    AMATEUR = "Amateur"


class PlayerStatus(Enum):
    ACTIVE = "Active"
    INJURED = "Injured"
    INACTIVE = "Inactive"


class FixtureStatus(Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELED = "Canceled"


class SeasonType(Enum):
    REGULAR = "Regular"
    PLAYOFFS = "Playoffs"
    FRIENDLY = "Friendly"
    TOURNAMENT = "Tournament"


class FixtureLocation(Enum):
    HOME = "home"
    AWAY = "away"
    NEUTRAL = "neutral"


class User(TimestampedBase):
    __tablename__ = "user"

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SqlEnum(UserRole, name="user_role", native_enum=False),
        nullable=False,
        default=UserRole.USER,
    )
    first_name: Mapped[str | None] = mapped_column(String(255))
    last_name: Mapped[str | None] = mapped_column(String(255))

    managed_teams: Mapped[list["Team"]] = relationship(
        back_populates="manager",
        foreign_keys="Team.manager_id",
    )
    audit_logs: Mapped[list["AuditLog"]] = relationship(back_populates="user")

    def set_password(self, password: str) -> None:
        rounds = current_app.config.get('BCRYPT_LOG_ROUNDS', 12)
        self.password_hash = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds)).decode('utf-8')

    def check_password(self, password: str) -> bool:
        if not self.password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), self.password_hash.encode('utf-8'))
        except ValueError:
            return False

    def has_role(self, *roles: UserRole | str) -> bool:
        role_value = self.role.value if isinstance(self.role, UserRole) else str(self.role)
        allowed = {r.value if isinstance(r, UserRole) else str(r) for r in roles}
        return role_value in allowed

    @property
    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN)

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_active(self) -> bool:  # Flask-Login compatibility
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    def get_id(self) -> str:
        return self.id


class Team(TimestampedBase):
    __tablename__ = "team"

    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    stadium: Mapped[str] = mapped_column(String(255), nullable=False)
    sport: Mapped[SportType] = mapped_column(
        SqlEnum(SportType, name="sport_type", native_enum=False),
        nullable=False,
    )
    manager_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    stadium_photo: Mapped[str | None] = mapped_column(String(512))
    team_type: Mapped[TeamType | None] = mapped_column(
        SqlEnum(TeamType, name="team_type", native_enum=False),
    )
    stadium_location: Mapped[str | None] = mapped_column(String(255))
    stadium_capacity: Mapped[int | None] = mapped_column(Integer)
    created_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
    )
    updated_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
    )

    manager: Mapped[User | None] = relationship(
        back_populates="managed_teams",
        foreign_keys=[manager_id],
    )
    created_by: Mapped[User | None] = relationship(foreign_keys=[created_by_id])
    updated_by: Mapped[User | None] = relationship(foreign_keys=[updated_by_id])

    # Roster and fixtures are read from the owning side's foreign keys, so
    # they can never disagree with Player.team_id / Schedule.*_team_id.
    players: Mapped[list["Player"]] = relationship(
        back_populates="team",
        order_by="Player.player_number",
    )
    fixtures: Mapped[list["Schedule"]] = relationship(
        "Schedule",
        primaryjoin=(
            "or_(Team.id == foreign(Schedule.home_team_id), "
            "Team.id == foreign(Schedule.away_team_id))"
        ),
        viewonly=True,
        order_by="Schedule.date",
    )


class Player(TimestampedBase):
    __tablename__ = "player"
    __table_args__ = (
        UniqueConstraint("team_id", "player_number", name="uq_player_team_number"),
        Index("ix_player_team_position", "team_id", "position"),
    )

    team_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("team.id", ondelete="SET NULL"),
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    player_number: Mapped[int] = mapped_column(Integer, nullable=False)
    position: Mapped[str] = mapped_column(String(64), nullable=False)
    status: Mapped[PlayerStatus] = mapped_column(
        SqlEnum(PlayerStatus, name="player_status", native_enum=False),
        nullable=False,
        default=PlayerStatus.ACTIVE,
    )
    hometown: Mapped[str | None] = mapped_column(String(255))
    headshot: Mapped[str | None] = mapped_column(String(512))
    created_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
    )
    updated_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
    )

    team: Mapped[Team | None] = relationship(back_populates="players")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Schedule(TimestampedBase):
    __tablename__ = "schedule"
    __table_args__ = (
        UniqueConstraint("home_team_id", "away_team_id", "date", name="uq_schedule_matchup_date"),
        Index("ix_schedule_date", "date"),
    )

    home_team_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("team.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    away_team_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("team.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    arena: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[FixtureStatus] = mapped_column(
        SqlEnum(FixtureStatus, name="fixture_status", native_enum=False),
        nullable=False,
        default=FixtureStatus.SCHEDULED,
    )
    season: Mapped[SeasonType] = mapped_column(
        SqlEnum(SeasonType, name="season_type", native_enum=False),
        nullable=False,
        default=SeasonType.REGULAR,
    )
    location: Mapped[FixtureLocation] = mapped_column(
        SqlEnum(FixtureLocation, name="fixture_location", native_enum=False),
        nullable=False,
    )
    game_duration: Mapped[int | None] = mapped_column(Integer)  # minutes
    time_zone: Mapped[str | None] = mapped_column(String(64))
    created_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
    )
    updated_by_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
    )

    home_team: Mapped[Team] = relationship(foreign_keys=[home_team_id])
    away_team: Mapped[Team] = relationship(foreign_keys=[away_team_id])


class AuditLog(TimestampedBase):
    __tablename__ = "audit_log"

    user_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("user.id", ondelete="SET NULL"),
        index=True,
    )
    action: Mapped[str] = mapped_column(String(128), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(128), nullable=False)
    entity_id: Mapped[str | None] = mapped_column(String(36))
    meta: Mapped[dict | None] = mapped_column(JSONType, default=dict)

    user: Mapped[User | None] = relationship(back_populates="audit_logs")
