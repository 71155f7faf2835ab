"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from flask import Request

from errors import ValidationError


def parse_request_payload(req: Request) -> dict[str, Any]:
    """Return the request body as a dict.

    JSON bodies must be objects. Form-encoded and multipart bodies are
    flattened to their first value per field. An empty body yields ``{}`` so
    the operation can report which fields are missing.
    """

    if req.is_json:
        data = req.get_json(silent=True)
        if data is None:
            if req.get_data(cache=True):
                raise ValidationError("Request JSON body is malformed.")
            return {}
        if not isinstance(data, dict):
            raise ValidationError("Request JSON payload must be an object.")
        return data

    if req.form:
        return req.form.to_dict(flat=True)

    return {}


def raw_text(value: Any) -> str:
    """Return ``value`` as a string, untrimmed, or ``""`` when absent."""

    if value is None:
        return ""
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        raise ValidationError("Text fields must be strings.")
    return str(value)


def clean_text(value: Any) -> str:
    """Return ``value`` as a stripped string, or ``""`` when absent."""

    return raw_text(value).strip()


def require_fields(
    data: Mapping[str, Any], required_keys: Iterable[str], message: str | None = None
) -> None:
    """Raise :class:`ValidationError` when any required field is blank."""

    missing = [key for key in required_keys if not clean_text(data.get(key))]
    if missing:
        raise ValidationError(
            message
            or "Missing required fields: {}.".format(", ".join(sorted(missing)))
        )
