"""Page/limit handling for listing endpoints."""

from __future__ import annotations

from flask import current_app

from league_api.errors import ValidationError
from league_api.extensions import db


def _positive_int(raw, name: str, default: int) -> int:
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"'{name}' must be a positive integer")
    if value < 1:
        raise ValidationError(f"'{name}' must be a positive integer")
    return value


def page_args(page=None, limit=None) -> tuple[int, int]:
    """Parse page/limit query values, clamping limit to MAX_PAGE_SIZE."""
    page = _positive_int(page, 'page', 1)
    limit = _positive_int(limit, 'limit', current_app.config['DEFAULT_PAGE_SIZE'])
    return page, min(limit, current_app.config['MAX_PAGE_SIZE'])


def paginate(statement, page: int, limit: int):
    return db.paginate(
        statement,
        page=page,
        per_page=limit,
        max_per_page=current_app.config['MAX_PAGE_SIZE'],
        error_out=False,
        count=True,
    )


__all__ = ['page_args', 'paginate']
