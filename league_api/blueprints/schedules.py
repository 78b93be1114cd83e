"""Fixture endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user

from league_api.auth import login_required
from league_api.blueprints.common import json_body, query_arg
from league_api.forms import require_object
from league_api.services.schedules import schedule_service
from league_api.services.serializers import serialize_fixture

schedules_bp = Blueprint("schedules", __name__)


@schedules_bp.route("", methods=["GET"])
def list_fixtures():
    fixtures = schedule_service.list_fixtures(
        team_id=query_arg('teamId', 'team_id', 'team'),
        status=query_arg('status'),
    )
    return jsonify({'items': [serialize_fixture(f) for f in fixtures]})


@schedules_bp.route("/<fixture_id>", methods=["GET"])
def get_fixture(fixture_id):
    return jsonify({'schedule': serialize_fixture(schedule_service.get_fixture(fixture_id))})


@schedules_bp.route("/<fixture_id>", methods=["PUT"])
@login_required
def update_fixture(fixture_id):
    fixture = schedule_service.update_fixture(fixture_id, json_body(), current_user)
    return jsonify({'schedule': serialize_fixture(fixture)})


@schedules_bp.route("/<fixture_id>/status", methods=["POST"])
@login_required
def set_fixture_status(fixture_id):
    payload = require_object(json_body())
    fixture = schedule_service.set_status(fixture_id, payload.get('status'), current_user)
    return jsonify({'schedule': serialize_fixture(fixture)})


@schedules_bp.route("/<fixture_id>", methods=["DELETE"])
@login_required
def delete_fixture(fixture_id):
    deleted = schedule_service.delete_fixture(fixture_id, current_user)
    return jsonify({'message': "Schedule deleted successfully", 'schedule': deleted})
