"""Shared fixtures for the league API test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from league_api import create_app
from league_api.config import TestingConfig
from league_api.extensions import db
from league_api.models import User, UserRole
from league_api.services.tokens import issue_token

PASSWORD = 'secret-pass'


@pytest.fixture
def app():
    """Create and configure a test application instance.

    No application context is held while tests run, so every client
    request gets a fresh ``g`` and resolves its own bearer token.
    """
    app = create_app(TestingConfig)

    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory creating a user directly in the database; returns its id."""
    def _make_user(username, role=UserRole.USER):
        with app.app_context():
            user = User(username=username, email=f'{username}@league.io', role=role)
            user.set_password(PASSWORD)
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make_user


@pytest.fixture
def headers_for(app):
    """Factory returning Authorization headers for a user id."""
    def _headers_for(user_id):
        with app.app_context():
            token = issue_token(db.session.get(User, user_id))
        return {'Authorization': f'Bearer {token}'}
    return _headers_for


@pytest.fixture
def manager(make_user):
    return make_user('manager', UserRole.MANAGER)


@pytest.fixture
def manager_headers(headers_for, manager):
    return headers_for(manager)


@pytest.fixture
def rival(make_user):
    return make_user('rival', UserRole.MANAGER)


@pytest.fixture
def rival_headers(headers_for, rival):
    return headers_for(rival)


@pytest.fixture
def admin(make_user):
    return make_user('admin', UserRole.ADMIN)


@pytest.fixture
def admin_headers(headers_for, admin):
    return headers_for(admin)


@pytest.fixture
def create_team(client):
    """Factory posting a team and returning the response body's team."""
    def _create_team(headers, name='Hawks', city='Metro', stadium='Metro Field', sport='Soccer', **extra):
        payload = {'name': name, 'city': city, 'stadium': stadium, 'sport': sport, **extra}
        response = client.post('/teams', json=payload, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['team']
    return _create_team


@pytest.fixture
def add_player(client):
    """Factory adding a player to a team's roster."""
    def _add_player(headers, team_id, number, position='Forward', first_name='A', last_name='B'):
        response = client.post(f'/teams/{team_id}/players', json={
            'first_name': first_name,
            'last_name': last_name,
            'player_number': number,
            'position': position,
        }, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['player']
    return _add_player


def future_date(days=7):
    return (datetime.now(timezone.utc) + timedelta(days=days)).replace(microsecond=0).isoformat()


@pytest.fixture
def kickoff():
    """ISO date one week ahead."""
    return future_date()


@pytest.fixture
def create_fixture(client):
    """Factory scheduling a game through the team endpoint."""
    def _create_fixture(headers, home_id, away_id, date=None, location='home', team_id=None, **extra):
        payload = {
            'home_team': home_id,
            'away_team': away_id,
            'date': date or future_date(),
            'location': location,
            **extra,
        }
        response = client.post(f'/teams/{team_id or home_id}/schedules', json=payload, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()['schedule']
    return _create_fixture
