"""JSON shapes returned by the API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from league_api.models import Player, Schedule, Team, User


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    # SQLite hands back naive datetimes; every stored instant is UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def _enum(value: Any) -> Any:
    return value.value if hasattr(value, 'value') else value


def serialize_user(user: User) -> dict:
    return {
        'id': user.id,
        'username': user.username,
        'email': user.email,
        'role': _enum(user.role),
        'first_name': user.first_name,
        'last_name': user.last_name,
        'created_at': _iso(user.created_at),
    }


def serialize_manager(user: User | None) -> dict | None:
    if user is None:
        return None
    return {'id': user.id, 'username': user.username}


def serialize_team_summary(team: Team | None) -> dict | None:
    if team is None:
        return None
    return {
        'id': team.id,
        'name': team.name,
        'city': team.city,
        'stadium': team.stadium,
    }


def serialize_roster_entry(player: Player) -> dict:
    return {
        'id': player.id,
        'first_name': player.first_name,
        'last_name': player.last_name,
        'player_number': player.player_number,
        'position': player.position,
        'status': _enum(player.status),
    }


def serialize_player(player: Player) -> dict:
    data = serialize_roster_entry(player)
    data.update({
        'hometown': player.hometown,
        'headshot': player.headshot,
        'team': serialize_team_summary(player.team),
        'created_at': _iso(player.created_at),
        'updated_at': _iso(player.updated_at),
    })
    return data


def serialize_fixture(fixture: Schedule) -> dict:
    return {
        'id': fixture.id,
        'home_team': serialize_team_summary(fixture.home_team),
        'away_team': serialize_team_summary(fixture.away_team),
        'date': _iso(fixture.date),
        'arena': fixture.arena,
        'city': fixture.city,
        'status': _enum(fixture.status),
        'season': _enum(fixture.season),
        'location': _enum(fixture.location),
        'game_duration': fixture.game_duration,
        'time_zone': fixture.time_zone,
        'created_at': _iso(fixture.created_at),
        'updated_at': _iso(fixture.updated_at),
    }


def serialize_team(team: Team, include_roster: bool = True) -> dict:
    data = {
        'id': team.id,
        'name': team.name,
        'city': team.city,
        'stadium': team.stadium,
        'sport': _enum(team.sport),
        'team_type': _enum(team.team_type),
        'stadium_photo': team.stadium_photo,
        'stadium_location': team.stadium_location,
        'stadium_capacity': team.stadium_capacity,
        'manager': serialize_manager(team.manager),
        'created_at': _iso(team.created_at),
        'updated_at': _iso(team.updated_at),
    }
    if include_roster:
        data['players'] = [serialize_roster_entry(p) for p in team.players]
        data['schedule'] = [serialize_fixture(f) for f in team.fixtures]
    return data


def serialize_pagination(pagination) -> dict:
    return {
        'page': pagination.page,
        'limit': pagination.per_page,
        'total': pagination.total,
        'total_pages': pagination.pages,
    }


__all__ = [
    'serialize_user',
    'serialize_manager',
    'serialize_team_summary',
    'serialize_roster_entry',
    'serialize_player',
    'serialize_fixture',
    'serialize_team',
    'serialize_pagination',
]
