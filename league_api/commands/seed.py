"""Data seeding CLI commands."""

from datetime import datetime, timedelta, timezone

import click
from flask.cli import with_appcontext

from league_api.errors import LeagueError
from league_api.models import SportType, UserRole
from league_api.services.players import player_service
from league_api.services.schedules import schedule_service
from league_api.services.sport_config import get_positions
from league_api.services.teams import team_service
from league_api.services.users import user_service

DEMO_TEAMS = [
    ('Hawks', 'Metro', 'Metro Field'),
    ('Rovers', 'Harbor City', 'Harbor Park'),
    ('Miners', 'Ridgeview', 'Quarry Stadium'),
    ('Comets', 'Lakeside', 'Lakeside Arena'),
]

FIRST_NAMES = ['Alex', 'Sam', 'Jordan', 'Chris', 'Taylor', 'Morgan', 'Jamie', 'Casey', 'Riley', 'Drew']
LAST_NAMES = ['Smith', 'Garcia', 'Chen', 'Okafor', 'Novak', 'Silva', 'Brown', 'Kowalski', 'Haddad', 'Lee']


@click.group('seed')
def seed_commands():
    """Data seeding commands."""
    pass


@seed_commands.command('demo')
@click.option('--manager', 'username', default='demo_manager', show_default=True, help='Manager username to create')
@click.option('--password', default='demo-password', show_default=True, help='Manager password')
@click.option('--sport', type=click.Choice([s.value for s in SportType]), default=SportType.SOCCER.value, show_default=True)
@click.option('--teams', default=4, help='Number of teams to create (max 4)')
@click.option('--players-per-team', default=8, help='Players per team (default: 8)')
@with_appcontext
def seed_demo(username, password, sport, teams, players_per_team):
    """Seed a manager with teams, rosters and a round of fixtures.

    Everything is created through the services, so the usual roster and
    scheduling rules apply.

    Example:
        flask seed demo
        flask seed demo --sport Basketball --players-per-team 10
    """
    manager = user_service.find_by_username(username)
    try:
        if manager is None:
            manager = user_service.create_user(
                username=username,
                email=f'{username}@example.com',
                password=password,
                role=UserRole.MANAGER,
            )

        positions = get_positions(sport)
        created = []
        for name, city, stadium in DEMO_TEAMS[:max(0, min(teams, len(DEMO_TEAMS)))]:
            team = team_service.create_team(
                {'name': name, 'city': city, 'stadium': stadium, 'sport': sport},
                manager,
            )
            for number in range(1, players_per_team + 1):
                player_service.add_player(team.id, {
                    'first_name': FIRST_NAMES[number % len(FIRST_NAMES)],
                    'last_name': LAST_NAMES[(number + len(created)) % len(LAST_NAMES)],
                    'player_number': number,
                    'position': positions[number % len(positions)],
                }, manager)
            created.append(team)
            click.echo(f'Created team {name} with {players_per_team} players')

        kickoff = datetime.now(timezone.utc).replace(hour=18, minute=0, second=0, microsecond=0)
        fixtures = 0
        for index, home in enumerate(created):
            for offset, away in enumerate(created[index + 1:], start=1):
                schedule_service.create_fixture(home.id, {
                    'home_team': home.id,
                    'away_team': away.id,
                    'date': (kickoff + timedelta(days=7 * (index + offset))).isoformat(),
                    'location': 'home',
                }, manager)
                fixtures += 1
    except LeagueError as exc:
        click.echo(click.style(f'Error: {exc.message}', fg='red'))
        return

    click.echo(click.style(f'Seeded {len(created)} teams and {fixtures} fixtures.', fg='green'))
