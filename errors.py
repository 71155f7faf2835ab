"""Error taxonomy shared by services and routes.

Every error is a werkzeug ``HTTPException`` so the application's JSON error
handler can render it with the right status code.
"""

from __future__ import annotations

from werkzeug.exceptions import HTTPException


class ApiError(HTTPException):
    """Base class for errors surfaced to API clients."""

    code = 400
    description = "invalid request"


class ValidationError(ApiError):
    """Missing or malformed required fields."""

    code = 400
    description = "invalid request"


class DuplicateEmail(ApiError):
    code = 400
    description = "email already registered"


class InvalidCredentials(ApiError):
    """Unknown email or wrong password, deliberately indistinguishable."""

    code = 400
    description = "invalid credentials"


class Unauthenticated(ApiError):
    code = 401
    description = "invalid token"


class Forbidden(ApiError):
    code = 403
    description = "forbidden"


class InternalError(ApiError):
    code = 500
    description = "internal error"


class StoreError(Exception):
    """Raised when the document store cannot be read or written."""
