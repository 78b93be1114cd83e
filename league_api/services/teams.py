"""Team lifecycle: creation, updates and the delete cascade."""

from __future__ import annotations

from typing import Any

from flask import current_app
from sqlalchemy import delete, or_, select, update

from league_api.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from league_api.extensions import db
from league_api.forms import validate_payload
from league_api.forms.teams import TeamForm
from league_api.models import FixtureStatus, Player, Schedule, SportType, Team, TeamType, User
from league_api.services.authorization import require_team_manager
from league_api.services.crud import CRUDService
from league_api.services.pagination import page_args, paginate
from league_api.services.serializers import serialize_team_summary
from league_api.services.sport_config import is_valid_position

DUPLICATE_NAME = "A team with this name already exists"
HAS_COMPLETED_FIXTURES = "Team has completed games on record and cannot be deleted"


class TeamService(CRUDService):
    """Service for team operations."""

    protected_fields = CRUDService.protected_fields | {'manager_id'}
    conflict_messages = {
        'team.name': DUPLICATE_NAME,
        'team_name_key': DUPLICATE_NAME,
    }

    def __init__(self):
        super().__init__(Team)

    def _name_taken(self, name: str, exclude_id: str | None = None) -> bool:
        stmt = select(Team.id).where(Team.name == name)
        if exclude_id:
            stmt = stmt.where(Team.id != exclude_id)
        return db.session.execute(stmt.limit(1)).first() is not None

    @staticmethod
    def _coerce(data: dict[str, Any]) -> dict[str, Any]:
        """Turn validated form strings into column values."""
        values = dict(data)
        if values.get('sport'):
            values['sport'] = SportType(values['sport'])
        if 'team_type' in values:
            values['team_type'] = TeamType(values['team_type']) if values['team_type'] else None
        return values

    def create_team(self, payload: Any, requester: User) -> Team:
        """
        Create a team managed by the requester.

        Raises:
            ValidationError: required field missing or an enum/number invalid
            ConflictError: a team with the same name exists
        """
        data = self._coerce(validate_payload(TeamForm, payload))
        if self._name_taken(data['name']):
            raise ConflictError(DUPLICATE_NAME)

        team = Team(
            **data,
            manager_id=requester.id,
            created_by_id=requester.id,
            updated_by_id=requester.id,
        )
        db.session.add(team)
        self.flush('create')

        self.log(requester, 'created', team, data)
        self.commit('create')
        current_app.logger.info(f"Team {team.name} created by {requester.username}")
        return team

    def get_team(self, team_id: str) -> Team:
        return self.get_or_404(team_id)

    def list_teams(self, search: str | None = None, page=None, limit=None):
        """Paginated teams, optionally matching ``search`` in name or city."""
        page, limit = page_args(page, limit)
        stmt = select(Team).order_by(Team.name)
        if search and search.strip():
            term = search.strip()
            stmt = stmt.where(or_(
                Team.name.icontains(term, autoescape=True),
                Team.city.icontains(term, autoescape=True),
            ))

        pagination = paginate(stmt, page, limit)
        if not pagination.items and current_app.config['EMPTY_RESULTS_NOT_FOUND']:
            raise NotFoundError("No teams found.")
        return pagination

    def update_team(self, team_id: str, payload: Any, requester: User, admin_override: bool = False) -> Team:
        """
        Apply a partial update.

        Only the team's manager may update it; ``admin_override`` is used by
        the admin endpoint and lets any admin through instead. The manager
        itself is never changed here.
        """
        team = self.get_or_404(team_id)
        if admin_override:
            if not requester.is_admin:
                raise AuthorizationError("You are not authorized to perform this action")
        else:
            require_team_manager(team, requester)

        data = self._coerce(validate_payload(TeamForm, payload, partial=True))

        if 'name' in data and data['name'] != team.name and self._name_taken(data['name'], team.id):
            raise ConflictError(DUPLICATE_NAME)

        new_sport = data.get('sport')
        if new_sport and new_sport != team.sport:
            for player in team.players:
                if not is_valid_position(new_sport, player.position):
                    raise ValidationError(
                        f"Player #{player.player_number} plays {player.position}, "
                        f"which is not a {new_sport.value} position"
                    )

        changed = self.apply_changes(team, data)
        if changed:
            team.updated_by_id = requester.id
            self.log(requester, 'updated', team, {key: data[key] for key in changed})
            self.commit('update')
        return team

    def delete_team(self, team_id: str, requester: User) -> dict[str, Any]:
        """
        Delete a team in one transaction.

        Players on the roster are kept and become free agents; upcoming and
        canceled fixtures the team plays in are removed since they cannot
        exist with one side.

        Returns:
            Summary of the deleted team with the freed player and removed
            fixture counts

        Raises:
            ConflictError: completed fixtures still reference the team
        """
        team = self.get_or_404(team_id)
        require_team_manager(team, requester, allow_admin=True)
        summary = serialize_team_summary(team)

        involves_team = or_(Schedule.home_team_id == team.id, Schedule.away_team_id == team.id)
        played = db.session.execute(
            select(Schedule.id).where(involves_team, Schedule.status == FixtureStatus.COMPLETED).limit(1)
        ).first()
        if played is not None:
            raise ConflictError(HAS_COMPLETED_FIXTURES)

        freed = db.session.execute(
            update(Player).where(Player.team_id == team.id).values(team_id=None)
        ).rowcount
        removed = db.session.execute(
            delete(Schedule).where(involves_team)
        ).rowcount

        self.log(requester, 'deleted', team, {
            'name': team.name,
            'freed_players': freed,
            'removed_fixtures': removed,
        })
        db.session.delete(team)
        self.commit('delete')

        current_app.logger.info(f"Freed {freed} players from team {summary['name']}")
        return {'team': summary, 'freed_players': freed, 'removed_fixtures': removed}


team_service = TeamService()

__all__ = ['TeamService', 'team_service', 'DUPLICATE_NAME', 'HAS_COMPLETED_FIXTURES']
