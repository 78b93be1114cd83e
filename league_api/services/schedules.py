"""Fixture scheduling: validation pipeline, venue derivation and status changes."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from flask import current_app
from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from league_api.errors import ConflictError, NotFoundError, ValidationError
from league_api.extensions import db
from league_api.forms import require_object
from league_api.models import FixtureLocation, FixtureStatus, Schedule, SeasonType, Team, User
from league_api.services.authorization import require_fixture_manager
from league_api.services.crud import CRUDService
from league_api.services.serializers import serialize_fixture
from league_api.services.teams import team_service

ALREADY_SCHEDULED = "A game between these teams is already scheduled for this date."

NEUTRAL_ARENA = "Neutral Site"
NEUTRAL_CITY = "Neutral City"

MAX_GAME_DURATION = 24 * 60  # minutes

# Allowed status changes; Completed and Canceled are terminal
TRANSITIONS: dict[FixtureStatus, frozenset[FixtureStatus]] = {
    FixtureStatus.SCHEDULED: frozenset({FixtureStatus.COMPLETED, FixtureStatus.CANCELED}),
    FixtureStatus.COMPLETED: frozenset(),
    FixtureStatus.CANCELED: frozenset(),
}

REQUIRED_FIELDS = ('home_team', 'away_team', 'date', 'location')


def parse_fixture_date(value: Any, now: datetime | None = None) -> datetime:
    """
    Parse an ISO 8601 date into an aware UTC datetime in the future.

    A trailing ``Z`` is accepted and naive values are read as UTC.

    Raises:
        ValidationError: unparseable, or not strictly after ``now``
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Invalid date format")
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        # Offsets near datetime.max can shift past the representable range
        parsed = parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        raise ValidationError("Invalid date format")

    now = now or datetime.now(timezone.utc)
    if parsed <= now:
        raise ValidationError("The game date must be in the future.")
    return parsed


def derive_venue(location: FixtureLocation, home_team: Team, away_team: Team) -> tuple[str, str]:
    """Arena and city for a fixture, from whichever side hosts it."""
    if location == FixtureLocation.HOME:
        return home_team.stadium, home_team.city
    if location == FixtureLocation.AWAY:
        return away_team.stadium, away_team.city
    return NEUTRAL_ARENA, NEUTRAL_CITY


def _parse_enum(enum_cls, value: Any, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f"{label} must be one of: {allowed}")


def _parse_duration(value: Any) -> int | None:
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValidationError("Game duration must be a positive number of minutes")
    try:
        minutes = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Game duration must be a positive number of minutes")
    if minutes > MAX_GAME_DURATION:
        raise ValidationError(f"Game duration cannot exceed {MAX_GAME_DURATION} minutes")
    if minutes <= 0 or minutes != float(value):
        raise ValidationError("Game duration must be a positive number of minutes")
    return minutes


def _parse_time_zone(value: Any) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or len(value.strip()) > 64:
        raise ValidationError("Time zone must be a name of at most 64 characters")
    return value.strip() or None


class ScheduleService(CRUDService):
    """Service for fixture operations."""

    conflict_messages = {
        'schedule.home_team_id, schedule.away_team_id, schedule.date': ALREADY_SCHEDULED,
        'uq_schedule_matchup_date': ALREADY_SCHEDULED,
    }

    def __init__(self):
        super().__init__(Schedule, label='Schedule')

    def _matchup_exists(self, home_team_id: str, away_team_id: str, date: datetime,
                        exclude_id: str | None = None) -> bool:
        stmt = select(Schedule.id).where(
            Schedule.home_team_id == home_team_id,
            Schedule.away_team_id == away_team_id,
            Schedule.date == date,
        )
        if exclude_id:
            stmt = stmt.where(Schedule.id != exclude_id)
        return db.session.execute(stmt.limit(1)).first() is not None

    def validate_fixture(self, payload: Any, exclude_id: str | None = None) -> dict[str, Any]:
        """
        Run the matchup checks, stopping at the first failure.

        Order: required fields, location, date, both teams exist, teams
        differ, no identical fixture.

        Returns:
            Column values for the matchup, including the derived venue
        """
        data = require_object(payload)

        missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, '')]
        if missing:
            raise ValidationError("Home team, away team, date and location are required")

        location = _parse_enum(FixtureLocation, data['location'], 'Location')
        date = parse_fixture_date(data['date'])

        home_team = team_service.get_or_404(str(data['home_team']), "Team not found")
        away_team = team_service.get_or_404(str(data['away_team']), "Team not found")

        if home_team.id == away_team.id:
            raise ValidationError("Home team and away team cannot be the same")

        if self._matchup_exists(home_team.id, away_team.id, date, exclude_id=exclude_id):
            raise ConflictError(ALREADY_SCHEDULED)

        arena, city = derive_venue(location, home_team, away_team)
        return {
            'home_team_id': home_team.id,
            'away_team_id': away_team.id,
            'date': date,
            'location': location,
            'arena': arena,
            'city': city,
        }

    @staticmethod
    def _optional_fields(payload: dict[str, Any]) -> dict[str, Any]:
        """Season, duration and time zone, for the keys present in the payload."""
        values: dict[str, Any] = {}
        if payload.get('season') not in (None, ''):
            values['season'] = _parse_enum(SeasonType, payload['season'], 'Season')
        if 'game_duration' in payload:
            values['game_duration'] = _parse_duration(payload['game_duration'])
        if 'time_zone' in payload:
            values['time_zone'] = _parse_time_zone(payload['time_zone'])
        return values

    def create_fixture(self, team_id: str, payload: Any, requester: User) -> Schedule:
        """
        Schedule a game for ``team_id``, which must be one of the two sides.

        Raises:
            NotFoundError: the path team or either side does not exist
            ValidationError: a field is missing or invalid
            ConflictError: the same matchup is already scheduled at that date
        """
        team = team_service.get_or_404(team_id)
        payload = require_object(payload)
        values = self.validate_fixture(payload)

        if team.id not in (values['home_team_id'], values['away_team_id']):
            raise ValidationError("The schedule must belong to the specified team.")
        values.update(self._optional_fields(payload))

        fixture = Schedule(
            **values,
            status=FixtureStatus.SCHEDULED,
            created_by_id=requester.id,
            updated_by_id=requester.id,
        )
        db.session.add(fixture)
        self.flush('create')

        self.log(requester, 'created', fixture, values)
        self.commit('create')
        current_app.logger.info(f"Fixture {fixture.id} scheduled for {fixture.date.isoformat()}")
        return fixture

    def get_fixture(self, fixture_id: str) -> Schedule:
        return self.get_or_404(fixture_id)

    def list_fixtures(self, team_id: str | None = None, status: str | None = None) -> list[Schedule]:
        """All fixtures ordered by date, optionally for one team or status."""
        stmt = (
            select(Schedule)
            .options(selectinload(Schedule.home_team), selectinload(Schedule.away_team))
            .order_by(Schedule.date, Schedule.id)
        )
        if team_id:
            stmt = stmt.where(or_(Schedule.home_team_id == team_id, Schedule.away_team_id == team_id))
        if status:
            stmt = stmt.where(Schedule.status == _parse_enum(FixtureStatus, status, 'Status'))
        return list(db.session.execute(stmt).scalars())

    def list_team_fixtures(self, team_id: str) -> list[Schedule]:
        team = team_service.get_or_404(team_id)
        return self.list_fixtures(team_id=team.id)

    def _load_for_mutation(self, fixture_id: str, requester: User) -> Schedule:
        fixture = self.get_or_404(fixture_id)
        require_fixture_manager(fixture, requester)
        return fixture

    def update_fixture(self, fixture_id: str, payload: Any, requester: User) -> Schedule:
        """
        Replace the matchup of a scheduled fixture.

        The full validation pipeline runs against the new values; the
        duplicate check ignores the fixture being edited. Season and the
        optional extras keep their stored values when omitted.
        """
        fixture = self._load_for_mutation(fixture_id, requester)
        if fixture.status != FixtureStatus.SCHEDULED:
            raise ValidationError(f"{fixture.status.value} fixtures cannot be changed")

        payload = require_object(payload)
        values = self.validate_fixture(payload, exclude_id=fixture.id)
        values.update(self._optional_fields(payload))

        changed = self.apply_changes(fixture, values)
        if changed:
            fixture.updated_by_id = requester.id
            self.log(requester, 'updated', fixture, {key: values[key] for key in changed})
            self.commit('update')
        return fixture

    def set_status(self, fixture_id: str, status: Any, requester: User) -> Schedule:
        """Move a fixture along its state machine. The date is not re-checked."""
        fixture = self._load_for_mutation(fixture_id, requester)
        if status in (None, ''):
            raise ValidationError("Status is required")
        target = _parse_enum(FixtureStatus, status, 'Status')

        if target == fixture.status:
            return fixture
        if target not in TRANSITIONS[fixture.status]:
            raise ValidationError(
                f"Cannot change status from {fixture.status.value} to {target.value}"
            )

        previous = fixture.status
        fixture.status = target
        fixture.updated_by_id = requester.id
        self.log(requester, 'status_changed', fixture, {'from': previous, 'to': target})
        self.commit('update')
        return fixture

    def delete_fixture(self, fixture_id: str, requester: User) -> dict[str, Any]:
        fixture = self._load_for_mutation(fixture_id, requester)
        deleted = serialize_fixture(fixture)
        self.log(requester, 'deleted', fixture)
        db.session.delete(fixture)
        self.commit('delete')
        return deleted


schedule_service = ScheduleService()

__all__ = [
    'ScheduleService',
    'schedule_service',
    'parse_fixture_date',
    'derive_venue',
    'TRANSITIONS',
    'ALREADY_SCHEDULED',
]
