"""Request helpers shared by the JSON blueprints."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from flask import jsonify, request

from league_api.errors import ValidationError
from league_api.services.serializers import serialize_pagination


def json_body() -> Any:
    """Decoded JSON body; an empty body reads as ``{}``."""
    if not request.get_data(cache=True):
        return {}
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        raise ValidationError("Request body must be valid JSON")
    return payload


def query_arg(*names: str) -> str | None:
    """First non-empty query string value among ``names``."""
    for name in names:
        value = request.args.get(name)
        if value not in (None, ''):
            return value
    return None


def paginated_response(pagination, serializer: Callable[[Any], dict]):
    items: Iterable[Any] = pagination.items
    return jsonify({
        'items': [serializer(item) for item in items],
        'pagination': serialize_pagination(pagination),
    })
