"""Ownership checks for team, roster and fixture mutations."""

from __future__ import annotations

from league_api.errors import AuthorizationError
from league_api.models import Schedule, Team, User


def requester_can_mutate(team: Team, requester: User | None, allow_admin: bool = False) -> bool:
    """True when ``requester`` manages ``team`` (or is an admin and that is allowed)."""
    if requester is None:
        return False
    if allow_admin and requester.is_admin:
        return True
    return team.manager_id is not None and team.manager_id == requester.id


def require_team_manager(team: Team, requester: User | None, allow_admin: bool = False) -> None:
    if not requester_can_mutate(team, requester, allow_admin=allow_admin):
        raise AuthorizationError("You're not allowed to do that")


def require_fixture_manager(fixture: Schedule, requester: User | None) -> None:
    """Fixtures may be changed by either side's manager, or by an admin."""
    teams = [team for team in (fixture.home_team, fixture.away_team) if team is not None]
    if any(requester_can_mutate(team, requester, allow_admin=True) for team in teams):
        return
    raise AuthorizationError("You're not allowed to do that")


__all__ = ['requester_can_mutate', 'require_team_manager', 'require_fixture_manager']
