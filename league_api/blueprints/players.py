"""Player registry endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user

from league_api.auth import login_required
from league_api.blueprints.common import json_body, paginated_response, query_arg
from league_api.services.players import player_service
from league_api.services.serializers import serialize_player

players_bp = Blueprint("players", __name__)


@players_bp.route("", methods=["POST"])
@login_required
def create_player():
    player = player_service.create_player(json_body(), current_user)
    return jsonify({'player': serialize_player(player)}), 201


@players_bp.route("", methods=["GET"])
def list_players():
    pagination = player_service.list_players(
        team_id=query_arg('teamId', 'team_id', 'team'),
        position=query_arg('position'),
        search=query_arg('search', 'q'),
        page=query_arg('page'),
        limit=query_arg('limit'),
    )
    return paginated_response(pagination, serialize_player)


@players_bp.route("/<player_id>", methods=["GET"])
def get_player(player_id):
    return jsonify({'player': serialize_player(player_service.get_player(player_id))})


@players_bp.route("/<player_id>", methods=["PUT"])
@login_required
def update_player(player_id):
    player = player_service.update_player(player_id, json_body(), current_user)
    return jsonify({'player': serialize_player(player)})


@players_bp.route("/<player_id>", methods=["DELETE"])
@login_required
def delete_player(player_id):
    deleted = player_service.delete_player(player_id, current_user)
    return jsonify({'message': "Player deleted successfully", 'player': deleted})
