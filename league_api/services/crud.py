"""Shared service plumbing: lookups, commits and activity logging."""

from __future__ import annotations

from typing import Any, Callable, Iterable, Type, TypeVar

from flask import current_app
from sqlalchemy.exc import IntegrityError

from league_api.errors import ConflictError, NotFoundError, UnexpectedError
from league_api.extensions import db
from league_api.services.audit import log_admin_action

Model = TypeVar("Model", bound=db.Model)


class CRUDService:
    """Base service with common operations for one model."""

    # Columns a payload may never overwrite
    protected_fields = frozenset({'id', 'created_at', 'updated_at', 'created_by_id'})

    # Integrity constraint name -> message shown to the client
    conflict_messages: dict[str, str] = {}

    def __init__(self, model: Type[Model], label: str | None = None):
        """
        Initialize CRUD service.

        Args:
            model: SQLAlchemy model class
            label: Human readable name used in messages (defaults to the class name)
        """
        self.model = model
        self.model_name = model.__tablename__
        self.label = label or model.__name__

    def get_by_id(self, object_id: str | None) -> Model | None:
        if not object_id:
            return None
        return db.session.get(self.model, str(object_id))

    def get_or_404(self, object_id: str | None, message: str | None = None) -> Model:
        instance = self.get_by_id(object_id)
        if instance is None:
            raise NotFoundError(message or f"{self.label} not found")
        return instance

    def apply_changes(self, instance: Model, data: dict[str, Any]) -> list[str]:
        """Copy payload values onto the instance; returns the names that changed."""
        changed = []
        for key, value in data.items():
            if key in self.protected_fields or not hasattr(instance, key):
                continue
            if getattr(instance, key) != value:
                setattr(instance, key, value)
                changed.append(key)
        return changed

    def log(self, user: Any, action: str, instance: Model, data: dict[str, Any] | None = None) -> None:
        metadata = {'data': self._sanitize_log_data(data)} if data else None
        log_admin_action(user, f"{self.model_name}_{action}", self.model_name, instance.id, metadata=metadata)

    def flush(self, action: str) -> None:
        """Send pending rows to the database so ids exist before logging."""
        self._write(db.session.flush, action)

    def commit(self, action: str) -> None:
        """
        Commit the current unit of work.

        Every mutation of a request is flushed in one transaction; on failure the
        whole unit is rolled back.

        Raises:
            ConflictError: a unique constraint rejected the write
            UnexpectedError: any other database failure
        """
        self._write(db.session.commit, action)

    def _write(self, operation: Callable[[], None], action: str) -> None:
        try:
            operation()
        except IntegrityError as e:
            db.session.rollback()
            raise ConflictError(self._handle_integrity_error(e)) from e
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Failed to {action} {self.model_name}: {e}")
            raise UnexpectedError(f"Failed to {action} {self.model_name}: {e}") from e

    def _handle_integrity_error(self, error: IntegrityError) -> str:
        """Convert database integrity errors to user-friendly messages."""
        error_msg = str(error.orig if error.orig is not None else error)
        for marker, message in self._conflict_markers():
            if marker in error_msg:
                return message
        if 'unique' in error_msg.lower():
            return "A record with these values already exists"
        if 'foreign' in error_msg.lower():
            return "Referenced record does not exist"
        return "Database constraint violation"

    def _conflict_markers(self) -> Iterable[tuple[str, str]]:
        return self.conflict_messages.items()

    def _sanitize_log_data(self, data: dict[str, Any]) -> dict[str, Any]:
        """Remove sensitive fields and make values JSON friendly."""
        sensitive_fields = {'password', 'password_hash', 'secret', 'token'}
        clean = {}
        for key, value in data.items():
            if key in sensitive_fields:
                continue
            if hasattr(value, 'value'):
                value = value.value
            elif hasattr(value, 'isoformat'):
                value = value.isoformat()
            clean[key] = value
        return clean


__all__ = ['CRUDService']
