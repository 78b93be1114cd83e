"""Account endpoints and the elevated team routes."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user

from league_api.auth import admin_required, login_required
from league_api.blueprints.common import json_body
from league_api.services.serializers import serialize_team, serialize_user
from league_api.services.teams import team_service

users_bp = Blueprint("users", __name__)


@users_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify({'user': serialize_user(current_user)})


@users_bp.route("/teams", methods=["POST"])
@admin_required
def create_team_as_admin():
    """Admins create teams here; the admin becomes the manager."""
    team = team_service.create_team(json_body(), current_user)
    return jsonify({'team': serialize_team(team)}), 201


@users_bp.route("/teams/<team_id>", methods=["PUT"])
@login_required
def update_own_team(team_id):
    team = team_service.update_team(team_id, json_body(), current_user)
    return jsonify({'team': serialize_team(team)})


@users_bp.route("/teams/<team_id>/admin", methods=["PUT"])
@admin_required
def update_team_as_admin(team_id):
    team = team_service.update_team(team_id, json_body(), current_user, admin_override=True)
    return jsonify({'team': serialize_team(team)})
