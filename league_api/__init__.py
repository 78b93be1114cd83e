"""Application factory for the league API."""

from __future__ import annotations

import logging

from flask import Flask, g, jsonify

from league_api.blueprints.auth import auth_bp
from league_api.blueprints.players import players_bp
from league_api.blueprints.schedules import schedules_bp
from league_api.blueprints.teams import teams_bp
from league_api.blueprints.users import users_bp
from league_api.config import Config
from league_api.errors import AuthenticationError, register_error_handlers
from league_api.extensions import (
    db,
    migrate,
    login_manager,
    limiter,
)
from league_api.security.config import configure_cors, configure_security_headers
from league_api.services.tokens import resolve_user


def create_app(config_class=Config):
    """Create Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    limiter.init_app(app)

    # Configure security
    configure_security_headers(app)
    configure_cors(app)

    @login_manager.request_loader
    def load_user_from_request(request):
        """Resolve the bearer token; remember why it was rejected."""
        g.auth_error = None
        try:
            return resolve_user(request.headers.get('Authorization'))
        except AuthenticationError as exc:
            g.auth_error = exc.message
            return None

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        raise AuthenticationError(g.pop('auth_error', None) or "No token provided.")

    # Ensure models are registered for migrations
    import league_api.models  # noqa: F401

    # Register blueprints
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(users_bp, url_prefix='/users')
    app.register_blueprint(teams_bp, url_prefix='/teams')
    app.register_blueprint(players_bp, url_prefix='/players')
    app.register_blueprint(schedules_bp, url_prefix='/schedules')

    register_error_handlers(app)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    # Register CLI commands
    from league_api.commands import register_commands
    register_commands(app)

    return app
