"""JSON blueprints."""
