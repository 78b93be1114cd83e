"""Error taxonomy shared by services and blueprints.

Services raise these; the application factory renders them as
``{"error": message}`` with the matching HTTP status.
"""

from __future__ import annotations

from flask import jsonify
from werkzeug.exceptions import HTTPException

from league_api.extensions import db


class LeagueError(Exception):
    """Base class for expected, client-visible failures."""

    status_code = 500
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {'error': self.message}


class ValidationError(LeagueError):
    status_code = 400
    default_message = "Invalid input"


class AuthenticationError(LeagueError):
    status_code = 401
    default_message = "Invalid token."


class AuthorizationError(LeagueError):
    status_code = 403
    default_message = "You're not allowed to do that"


class NotFoundError(LeagueError):
    status_code = 404
    default_message = "Not found"


class ConflictError(LeagueError):
    status_code = 409
    default_message = "A record with these values already exists"


class UnexpectedError(LeagueError):
    status_code = 500


def register_error_handlers(app) -> None:
    """Render every failure as ``{"error": message}`` with its status code."""
    @app.errorhandler(LeagueError)
    def handle_league_error(error: LeagueError):
        if error.status_code >= 500:
            app.logger.error(f"{error.__class__.__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        response = jsonify({'error': error.description or error.name})
        response.status_code = error.code or 500
        if getattr(error, 'valid_methods', None):
            response.headers['Allow'] = ', '.join(error.valid_methods)
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        db.session.rollback()
        app.logger.exception(f"Unhandled error: {error}")
        return jsonify({'error': str(error) or UnexpectedError.default_message}), 500


__all__ = [
    'LeagueError',
    'ValidationError',
    'AuthenticationError',
    'AuthorizationError',
    'NotFoundError',
    'ConflictError',
    'UnexpectedError',
    'register_error_handlers',
]
