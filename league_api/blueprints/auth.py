"""Authentication blueprint: sign-up and sign-in."""

from __future__ import annotations

from flask import Blueprint, jsonify

from league_api.blueprints.common import json_body
from league_api.extensions import limiter
from league_api.security.config import auth_rate_limit
from league_api.services.serializers import serialize_user
from league_api.services.users import user_service

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/sign-up", methods=["POST"])
@limiter.limit(auth_rate_limit)
def sign_up():
    user, token = user_service.sign_up(json_body())
    return jsonify({'token': token, 'user': serialize_user(user)}), 201


@auth_bp.route("/sign-in", methods=["POST"])
@limiter.limit(auth_rate_limit)
def sign_in():
    user, token = user_service.sign_in(json_body())
    return jsonify({'token': token, 'user': serialize_user(user)})
