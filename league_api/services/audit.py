"""Audit logging service for administrative events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flask import has_request_context, request

from league_api.extensions import db
from league_api.models import AuditLog

if TYPE_CHECKING:
    from league_api.models import User


def log_admin_action(
    user: User | None,
    action: str,
    entity_type: str,
    entity_id: str | None = None,
    metadata: dict[str, Any] | None = None
) -> AuditLog:
    """
    Record an action in the audit log.

    The entry is added to the current session only; it is committed together
    with the change it describes, so a rolled back mutation leaves no trace.

    Args:
        user: User who performed the action (None for CLI/system actions)
        action: Action performed (e.g., "team_created", "team_deleted")
        entity_type: Type of entity affected
        entity_id: ID of entity affected
        metadata: Additional metadata
    """
    meta = dict(metadata or {})
    if has_request_context():
        meta['ip_address'] = request.remote_addr

    audit_entry = AuditLog(
        user_id=user.id if user is not None else None,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        meta=meta
    )
    db.session.add(audit_entry)
    return audit_entry


__all__ = ["log_admin_action"]
