"""Roster management: adding, updating and removing players."""

from __future__ import annotations

from typing import Any

from flask import current_app
from sqlalchemy import or_, select
from sqlalchemy.orm import selectinload

from league_api.errors import ConflictError, NotFoundError, ValidationError
from league_api.extensions import db
from league_api.forms import require_object, validate_payload
from league_api.forms.players import PlayerForm
from league_api.models import Player, PlayerStatus, Team, User
from league_api.services.authorization import require_team_manager
from league_api.services.crud import CRUDService
from league_api.services.pagination import page_args, paginate
from league_api.services.serializers import serialize_player
from league_api.services.sport_config import get_positions, is_valid_position
from league_api.services.teams import team_service

DUPLICATE_NUMBER = "Player already exists in the team with the same number"


class PlayerService(CRUDService):
    """Service for roster operations."""

    protected_fields = CRUDService.protected_fields | {'team_id'}
    conflict_messages = {
        'player.team_id, player.player_number': DUPLICATE_NUMBER,
        'uq_player_team_number': DUPLICATE_NUMBER,
    }

    def __init__(self):
        super().__init__(Player)

    @staticmethod
    def _number_taken(team_id: str, number: int, exclude_id: str | None = None) -> bool:
        stmt = select(Player.id).where(Player.team_id == team_id, Player.player_number == number)
        if exclude_id:
            stmt = stmt.where(Player.id != exclude_id)
        return db.session.execute(stmt.limit(1)).first() is not None

    @staticmethod
    def _check_position(team: Team, position: str) -> None:
        if not is_valid_position(team.sport, position):
            allowed = ', '.join(get_positions(team.sport))
            raise ValidationError(f"Position must be one of: {allowed}")

    @staticmethod
    def _coerce(data: dict[str, Any]) -> dict[str, Any]:
        values = dict(data)
        if 'status' in values:
            values['status'] = PlayerStatus(values['status']) if values['status'] else PlayerStatus.ACTIVE
        return values

    def add_player(self, team_id: str, payload: Any, requester: User) -> Player:
        """
        Put a new player on a team's roster.

        Raises:
            NotFoundError: the team does not exist
            ValidationError: invalid fields or a position foreign to the team's sport
            ConflictError: the jersey number is already used on this team
        """
        team = team_service.get_or_404(team_id)
        data = self._coerce(validate_payload(PlayerForm, payload))
        self._check_position(team, data['position'])

        if self._number_taken(team.id, data['player_number']):
            raise ConflictError(DUPLICATE_NUMBER)

        player = Player(
            **data,
            team_id=team.id,
            created_by_id=requester.id,
            updated_by_id=requester.id,
        )
        db.session.add(player)
        self.flush('create')

        self.log(requester, 'created', player, dict(data, team_id=team.id))
        self.commit('create')
        current_app.logger.info(f"Player #{player.player_number} {player.full_name} added to {team.name}")
        return player

    def create_player(self, payload: Any, requester: User) -> Player:
        """Variant of :meth:`add_player` taking the team from the body."""
        payload = require_object(payload)
        team_id = payload.get('team') or payload.get('team_id')
        if not team_id:
            raise ValidationError("Team is required")
        if not isinstance(team_id, str):
            raise ValidationError("Team must be a team id")
        fields = {k: v for k, v in payload.items() if k not in ('team', 'team_id')}
        return self.add_player(team_id, fields, requester)

    def get_player(self, player_id: str) -> Player:
        return self.get_or_404(player_id)

    def list_players(
        self,
        team_id: str | None = None,
        position: str | None = None,
        search: str | None = None,
        page=None,
        limit=None,
    ):
        """Paginated players ordered by last name, then first name."""
        page, limit = page_args(page, limit)
        stmt = (
            select(Player)
            .options(selectinload(Player.team))
            .order_by(Player.last_name, Player.first_name, Player.id)
        )
        if team_id:
            stmt = stmt.where(Player.team_id == team_id)
        if position:
            stmt = stmt.where(Player.position == position)
        if search and search.strip():
            term = search.strip()
            stmt = stmt.where(or_(
                Player.first_name.icontains(term, autoescape=True),
                Player.last_name.icontains(term, autoescape=True),
            ))

        pagination = paginate(stmt, page, limit)
        if not pagination.items and current_app.config['EMPTY_RESULTS_NOT_FOUND']:
            raise NotFoundError("No players found.")
        return pagination

    def _load_for_mutation(self, player_id: str, requester: User) -> tuple[Player, Team]:
        player = self.get_or_404(player_id)
        if player.team_id is None:
            raise ValidationError("Player does not have a team")
        team = team_service.get_or_404(player.team_id)
        require_team_manager(team, requester)
        return player, team

    def update_player(self, player_id: str, payload: Any, requester: User) -> Player:
        """
        Partially update a player; only the team's manager may do so.

        The team link is not changed here. A new jersey number is checked
        against the rest of the roster.
        """
        player, team = self._load_for_mutation(player_id, requester)
        data = self._coerce(validate_payload(PlayerForm, payload, partial=True))

        if 'position' in data:
            self._check_position(team, data['position'])
        if 'player_number' in data and data['player_number'] != player.player_number:
            if self._number_taken(team.id, data['player_number'], exclude_id=player.id):
                raise ConflictError(DUPLICATE_NUMBER)

        changed = self.apply_changes(player, data)
        if changed:
            player.updated_by_id = requester.id
            self.log(requester, 'updated', player, {key: data[key] for key in changed})
            self.commit('update')
        return player

    def delete_player(self, player_id: str, requester: User) -> dict[str, Any]:
        player, team = self._load_for_mutation(player_id, requester)
        deleted = serialize_player(player)
        self.log(requester, 'deleted', player, {'team_id': team.id, 'player_number': player.player_number})
        db.session.delete(player)
        self.commit('delete')
        current_app.logger.info(f"Player #{deleted['player_number']} {deleted['first_name']} {deleted['last_name']} removed from {team.name}")
        return deleted


player_service = PlayerService()

__all__ = ['PlayerService', 'player_service', 'DUPLICATE_NUMBER']
