#!/usr/bin/env python3
"""Development server runner for the league API."""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv


def setup_environment():
    """Load .env and default the Flask variables."""
    project_root = Path(__file__).parent
    env_file = project_root / '.env'
    if env_file.exists():
        load_dotenv(env_file)
        print(f"Loaded environment from {env_file}")
    else:
        print(f"No .env file found at {env_file}, using defaults")

    os.environ.setdefault('FLASK_APP', 'league_api:create_app')
    os.environ.setdefault('FLASK_DEBUG', '1')


def initialize_database(app):
    """Create missing tables for a quick local start (use `flask db upgrade` elsewhere)."""
    from league_api.extensions import db

    with app.app_context():
        db.create_all()
    print("Database tables ready")


def run_development_server(app):
    """Run the Flask development server."""
    print("\n" + "=" * 60)
    print("Starting league API development server")
    print("=" * 60)
    print(f"Database: {app.config['SQLALCHEMY_DATABASE_URI']}")
    print("\nAccess the API at:")
    print("   http://localhost:5000/health")
    print("\nTo create an admin and demo data, run in another terminal:")
    print("   flask user create --username admin --email admin@example.com --password change-me")
    print("   flask seed demo")
    print("\nPress Ctrl+C to stop the server")
    print("=" * 60)

    app.run(host='0.0.0.0', port=5000, debug=True, use_reloader=True)


def main():
    setup_environment()

    from league_api import create_app

    app = create_app()
    initialize_database(app)

    try:
        run_development_server(app)
    except KeyboardInterrupt:
        print("\nDevelopment server stopped by user")
        sys.exit(0)


if __name__ == "__main__":
    main()
