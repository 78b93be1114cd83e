"""Security helpers for the API."""
