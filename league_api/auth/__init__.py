"""Authentication helpers shared across blueprints."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar, cast

from flask import current_app, request
from flask_login import current_user, login_required

from league_api.errors import AuthorizationError
from league_api.models import UserRole

F = TypeVar('F', bound=Callable[..., object])


def admin_required(func: F) -> F:
    """Decorator to ensure the current user is an admin."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            return current_app.login_manager.unauthorized()

        if not current_user.has_role(UserRole.ADMIN):
            current_app.logger.warning(f"Non-admin {current_user.username} tried {request.method} {request.path}")
            raise AuthorizationError("You are not authorized to perform this action")

        return func(*args, **kwargs)

    return cast(F, wrapper)


def role_required(*required_roles: UserRole | str):
    """Decorator factory to require specific roles."""
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return current_app.login_manager.unauthorized()

            if not current_user.has_role(*required_roles):
                raise AuthorizationError("You are not authorized to perform this action")

            return func(*args, **kwargs)
        return cast(F, wrapper)
    return decorator


__all__ = ['admin_required', 'login_required', 'role_required']
