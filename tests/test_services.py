"""Service-level rules exercised without HTTP."""

from datetime import datetime, timedelta, timezone

import pytest

from league_api.errors import AuthorizationError, ConflictError, UnexpectedError, ValidationError
from league_api.extensions import db
from league_api.models import FixtureLocation, FixtureStatus, SportType, Team, User, UserRole
from league_api.services.authorization import requester_can_mutate, require_team_manager
from league_api.services.schedules import TRANSITIONS, derive_venue, parse_fixture_date
from league_api.services.sport_config import get_positions, is_valid_position
from league_api.services.teams import team_service


class TestFixtureDates:

    def test_zulu_suffix(self):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        parsed = parse_fixture_date('2030-06-01T18:30:00Z', now=now)
        assert parsed == datetime(2030, 6, 1, 18, 30, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        parsed = parse_fixture_date('2030-06-01T18:30:00', now=now)
        assert parsed.tzinfo == timezone.utc
        assert parsed.hour == 18

    def test_offset_is_normalized(self):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        parsed = parse_fixture_date('2030-06-01T20:30:00+02:00', now=now)
        assert parsed == datetime(2030, 6, 1, 18, 30, tzinfo=timezone.utc)

    def test_now_is_not_future(self):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        with pytest.raises(ValidationError):
            parse_fixture_date('2030-01-01T00:00:00Z', now=now)

    @pytest.mark.parametrize('value', [None, '', 'soon', 20300101, '2030-13-01', '9999-12-31T23:00:00-05:00'])
    def test_garbage(self, value):
        with pytest.raises(ValidationError) as exc:
            parse_fixture_date(value)
        assert exc.value.message == 'Invalid date format'


class TestVenue:

    def test_each_location(self):
        home = Team(name='H', city='Home City', stadium='Home Park', sport=SportType.SOCCER)
        away = Team(name='A', city='Away City', stadium='Away Park', sport=SportType.SOCCER)
        assert derive_venue(FixtureLocation.HOME, home, away) == ('Home Park', 'Home City')
        assert derive_venue(FixtureLocation.AWAY, home, away) == ('Away Park', 'Away City')
        assert derive_venue(FixtureLocation.NEUTRAL, home, away) == ('Neutral Site', 'Neutral City')


class TestStateMachine:

    def test_only_scheduled_moves(self):
        assert TRANSITIONS[FixtureStatus.SCHEDULED] == {FixtureStatus.COMPLETED, FixtureStatus.CANCELED}
        assert not TRANSITIONS[FixtureStatus.COMPLETED]
        assert not TRANSITIONS[FixtureStatus.CANCELED]


class TestOwnershipPredicate:

    def _users(self):
        manager = User(id='m', username='m', email='m@league.io', role=UserRole.MANAGER)
        other = User(id='o', username='o', email='o@league.io', role=UserRole.USER)
        admin = User(id='a', username='a', email='a@league.io', role=UserRole.ADMIN)
        return manager, other, admin

    def test_manager_only(self):
        manager, other, admin = self._users()
        team = Team(name='T', city='C', stadium='S', sport=SportType.HOCKEY, manager_id='m')
        assert requester_can_mutate(team, manager)
        assert not requester_can_mutate(team, other)
        assert not requester_can_mutate(team, admin)
        assert requester_can_mutate(team, admin, allow_admin=True)
        assert not requester_can_mutate(team, None)

    def test_unmanaged_team(self):
        manager, _, admin = self._users()
        team = Team(name='T', city='C', stadium='S', sport=SportType.HOCKEY, manager_id=None)
        assert not requester_can_mutate(team, manager)
        assert requester_can_mutate(team, admin, allow_admin=True)
        with pytest.raises(AuthorizationError):
            require_team_manager(team, manager)


class TestSportPositions:

    def test_positions_per_sport(self):
        assert 'Goalkeeper' in get_positions(SportType.SOCCER)
        assert 'Pitcher' in get_positions('Baseball')
        assert get_positions('Cricket') == []

    def test_validation(self):
        assert is_valid_position(SportType.BASKETBALL, 'Center')
        assert is_valid_position(SportType.HOCKEY, 'Center')
        assert not is_valid_position(SportType.SOCCER, 'Center')
        assert not is_valid_position(SportType.SOCCER, None)


class TestTeamServiceTransactions:

    def test_name_conflict_leaves_nothing_behind(self, app, make_user):
        owner_id = make_user('owner', UserRole.MANAGER)
        with app.app_context():
            owner = db.session.get(User, owner_id)
            payload = {'name': 'Hawks', 'city': 'Metro', 'stadium': 'Metro Field', 'sport': 'Soccer'}
            team_service.create_team(payload, owner)
            with pytest.raises(ConflictError):
                team_service.create_team(dict(payload, city='Elsewhere'), owner)
            assert db.session.query(Team).count() == 1

    def test_unique_constraint_maps_to_conflict(self, app, make_user):
        owner_id = make_user('owner', UserRole.MANAGER)
        with app.app_context():
            db.session.add(Team(name='Hawks', city='Metro', stadium='Field', sport=SportType.SOCCER, manager_id=owner_id))
            db.session.commit()

            db.session.add(Team(name='Hawks', city='Metro', stadium='Field', sport=SportType.SOCCER, manager_id=owner_id))
            with pytest.raises(ConflictError) as exc:
                team_service.commit('create')
            assert exc.value.message == 'A team with this name already exists'
            assert db.session.query(Team).count() == 1

    def test_flush_maps_constraint_to_conflict(self, app, make_user):
        owner_id = make_user('owner', UserRole.MANAGER)
        with app.app_context():
            db.session.add(Team(name='Hawks', city='Metro', stadium='Field', sport=SportType.SOCCER, manager_id=owner_id))
            db.session.commit()

            db.session.add(Team(name='Hawks', city='Metro', stadium='Field', sport=SportType.SOCCER, manager_id=owner_id))
            with pytest.raises(ConflictError) as exc:
                team_service.flush('create')
            assert exc.value.message == 'A team with this name already exists'
            assert db.session.query(Team).count() == 1

    def test_unexpected_failure_keeps_the_cause(self, app):
        def broken_commit():
            raise RuntimeError('disk full')

        with app.app_context():
            session = db.session()
            session.commit = broken_commit
            with pytest.raises(UnexpectedError) as exc:
                team_service.commit('update')
            assert exc.value.message == 'Failed to update team: disk full'

    def test_future_fixture_dates_stay_aware(self):
        later = datetime.now(timezone.utc) + timedelta(days=1)
        assert parse_fixture_date(later.isoformat()).tzinfo is not None
