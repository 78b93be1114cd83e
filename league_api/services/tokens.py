"""Bearer token issuance and verification."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from flask import current_app
from jose import JWTError, jwt

from league_api.errors import AuthenticationError
from league_api.extensions import db
from league_api.models import User


def issue_token(user: User) -> str:
    """Sign a token identifying ``user``; expiry comes from JWT_EXPIRES_MINUTES."""
    now = datetime.now(timezone.utc)
    claims = {
        'sub': user.id,
        'username': user.username,
        'role': user.role.value,
        'iat': now,
        'exp': now + timedelta(minutes=current_app.config['JWT_EXPIRES_MINUTES']),
    }
    return jwt.encode(
        claims,
        current_app.config['JWT_SECRET'],
        algorithm=current_app.config['JWT_ALGORITHM'],
    )


def decode_token(token: str) -> dict[str, Any]:
    return jwt.decode(
        token,
        current_app.config['JWT_SECRET'],
        algorithms=[current_app.config['JWT_ALGORITHM']],
    )


def extract_bearer_token(header: str | None) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not header:
        raise AuthenticationError("No token provided.")
    scheme, _, token = header.strip().partition(' ')
    token = token.strip()
    if scheme.lower() != 'bearer' or not token or ' ' in token:
        raise AuthenticationError("Malformed token.")
    return token


def resolve_user(header: str | None) -> User:
    """
    Turn an Authorization header into the user it was issued for.

    Raises:
        AuthenticationError: header missing, malformed, token invalid or
            expired, or the user no longer exists
    """
    token = extract_bearer_token(header)
    try:
        payload = decode_token(token)
    except JWTError:
        raise AuthenticationError("Invalid token.")

    user_id = payload.get('sub')
    user = db.session.get(User, user_id) if user_id else None
    if user is None:
        raise AuthenticationError("Invalid token.")
    return user


__all__ = ['issue_token', 'decode_token', 'extract_bearer_token', 'resolve_user']
