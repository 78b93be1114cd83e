"""User management CLI commands."""

import click
from flask.cli import with_appcontext

from league_api.errors import LeagueError
from league_api.models import UserRole
from league_api.services.users import user_service


@click.group('user')
def user_commands():
    """User management commands."""
    pass


@user_commands.command('create')
@click.option('--username', required=True, help='Login name')
@click.option('--email', required=True, help='User email')
@click.option('--password', required=True, help='User password')
@click.option('--role', type=click.Choice([r.value for r in UserRole]), default=UserRole.ADMIN.value, show_default=True)
@with_appcontext
def create_user(username, email, password, role):
    """Create a user; this is the only way to create admins."""
    try:
        user = user_service.create_user(
            username=username.strip(),
            email=email.strip(),
            password=password,
            role=UserRole(role),
        )
    except LeagueError as exc:
        click.echo(click.style(f'Error: {exc.message}', fg='red'))
        return

    click.echo(click.style('User created successfully!', fg='green'))
    click.echo(f'  Username: {user.username}')
    click.echo(f'  Email: {user.email}')
    click.echo(f'  Role: {role}')


@user_commands.command('set-password')
@click.option('--username', required=True, help='Login name')
@click.option('--password', required=True, help='New password')
@with_appcontext
def set_password(username, password):
    """Set or reset a user's password."""
    user = user_service.find_by_username(username)
    if not user:
        click.echo(click.style(f'Error: No user {username} found', fg='red'))
        return

    user_service.set_password(user, password)
    click.echo(click.style('Password updated.', fg='green'))


@user_commands.command('set-role')
@click.option('--username', required=True, help='Login name')
@click.option('--role', type=click.Choice([r.value for r in UserRole]), required=True)
@with_appcontext
def set_role(username, role):
    """Change a user's role."""
    user = user_service.find_by_username(username)
    if not user:
        click.echo(click.style(f'Error: No user {username} found', fg='red'))
        return

    user_service.set_role(user, UserRole(role))
    click.echo(click.style(f'{username} is now {role}.', fg='green'))
