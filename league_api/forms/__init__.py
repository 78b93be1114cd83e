"""JSON payload validation built on WTForms.

Request bodies arrive as JSON objects; they are fed to the forms as form
data so the usual WTForms coercion (integers, choices, lengths) applies.
"""

from __future__ import annotations

from typing import Any, Type

from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict

from league_api.errors import ValidationError


def strip_or_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _to_formdata(payload: dict[str, Any]) -> MultiDict:
    formdata = MultiDict()
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            raise ValidationError(f"Field '{key}' must be a single value")
        formdata.add(key, str(value))
    return formdata


def require_object(payload: Any) -> dict[str, Any]:
    """Reject bodies that are not JSON objects."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def validate_payload(form_class: Type[FlaskForm], payload: Any, partial: bool = False) -> dict[str, Any]:
    """
    Validate a JSON payload against a form.

    Args:
        form_class: Form describing the accepted fields
        payload: Decoded JSON body
        partial: Only validate (and return) the fields present in the payload

    Returns:
        Cleaned field values keyed by field name

    Raises:
        ValidationError: with the first failing field's message
    """
    payload = require_object(payload)
    form = form_class(formdata=_to_formdata(payload), meta={'csrf': False})

    if partial:
        fields = [form[name] for name in form._fields if name in payload]
        results = [field.validate(form) for field in fields]
        valid = all(results)
    else:
        fields = list(form)
        valid = form.validate()

    if not valid:
        for field in fields:
            if field.errors:
                raise ValidationError(field.errors[0])
        raise ValidationError()

    return {field.name: field.data for field in fields}


__all__ = ['validate_payload', 'require_object', 'strip_or_none']
