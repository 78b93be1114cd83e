from league_api.models.models import (
    AuditLog,
    FixtureLocation,
    FixtureStatus,
    Player,
    PlayerStatus,
    Schedule,
    SeasonType,
    SportType,
    Team,
    TeamType,
    TimestampedBase,
    User,
    UserRole,
)

__all__ = [
    "AuditLog",
    "FixtureLocation",
    "FixtureStatus",
    "Player",
    "PlayerStatus",
    "Schedule",
    "SeasonType",
    "SportType",
    "Team",
    "TeamType",
    "TimestampedBase",
    "User",
    "UserRole",
]
