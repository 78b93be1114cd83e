"""Team registry endpoints, including roster and fixture sub-resources."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user

from league_api.auth import login_required
from league_api.blueprints.common import json_body, paginated_response, query_arg
from league_api.services.players import player_service
from league_api.services.schedules import schedule_service
from league_api.services.serializers import serialize_fixture, serialize_player, serialize_team
from league_api.services.teams import team_service

teams_bp = Blueprint("teams", __name__)


def _serialize_listed_team(team):
    return serialize_team(team, include_roster=False)


@teams_bp.route("", methods=["POST"])
@login_required
def create_team():
    team = team_service.create_team(json_body(), current_user)
    return jsonify({'team': serialize_team(team)}), 201


@teams_bp.route("", methods=["GET"])
def list_teams():
    pagination = team_service.list_teams(
        search=query_arg('search', 'q'),
        page=query_arg('page'),
        limit=query_arg('limit'),
    )
    return paginated_response(pagination, _serialize_listed_team)


@teams_bp.route("/<team_id>", methods=["GET"])
def get_team(team_id):
    return jsonify({'team': serialize_team(team_service.get_team(team_id))})


@teams_bp.route("/<team_id>", methods=["PUT"])
@login_required
def update_team(team_id):
    team = team_service.update_team(team_id, json_body(), current_user)
    return jsonify({'team': serialize_team(team)})


@teams_bp.route("/<team_id>", methods=["DELETE"])
@login_required
def delete_team(team_id):
    result = team_service.delete_team(team_id, current_user)
    return jsonify({
        'message': "Team deleted successfully",
        'team': result['team'],
        'freed_players': result['freed_players'],
        'removed_fixtures': result['removed_fixtures'],
    })


@teams_bp.route("/<team_id>/players", methods=["POST"])
@login_required
def add_player(team_id):
    player = player_service.add_player(team_id, json_body(), current_user)
    return jsonify({'player': serialize_player(player)}), 201


@teams_bp.route("/<team_id>/schedules", methods=["POST"])
@login_required
def create_fixture(team_id):
    fixture = schedule_service.create_fixture(team_id, json_body(), current_user)
    return jsonify({'schedule': serialize_fixture(fixture)}), 201


@teams_bp.route("/<team_id>/schedules", methods=["GET"])
def team_fixtures(team_id):
    fixtures = schedule_service.list_team_fixtures(team_id)
    return jsonify({'items': [serialize_fixture(f) for f in fixtures]})
