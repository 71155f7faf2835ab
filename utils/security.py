"""Password hashing, token issuance and the route authorization gate."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Iterable

from flask import g, request
from flask_bcrypt import Bcrypt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from errors import Forbidden, Unauthenticated

bcrypt = Bcrypt()

# Capability sets checked by the authorization gate.
POST_AUTHORS = frozenset({"ngo", "admin"})
ADMINS = frozenset({"admin"})

# bcrypt ignores everything past this many bytes.
_BCRYPT_MAX_BYTES = 72


@dataclass(frozen=True)
class Identity:
    """Decoded claims of a valid access token."""

    id: int
    role: str
    email: str

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Identity":
        try:
            return cls(
                id=int(claims.get("id", claims.get("sub"))),
                role=str(claims.get("role") or ""),
                email=str(claims.get("email") or ""),
            )
        except (TypeError, ValueError) as exc:
            raise Unauthenticated() from exc


def _password_bytes(password: str) -> bytes:
    return (password or "").encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""

    return bcrypt.generate_password_hash(_password_bytes(password)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash in constant time."""

    if not password_hash:
        return False
    try:
        return bcrypt.check_password_hash(password_hash, _password_bytes(password))
    except ValueError:
        # Malformed or foreign hash format.
        return False


def issue_token(user) -> str:
    """Return a signed access token carrying the user's id, role and email."""

    return create_access_token(
        identity=str(user.id),
        additional_claims={"id": user.id, "role": user.role, "email": user.email},
    )


def verify_token(token: str) -> Identity:
    """Decode ``token`` or raise :class:`Unauthenticated`.

    Expired and tampered tokens fail the same way.
    """

    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as exc:
        raise Unauthenticated() from exc
    return Identity.from_claims(claims)


def _bearer_token() -> str:
    header = request.headers.get("Authorization")
    if not header:
        raise Unauthenticated("missing auth")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthenticated()
    return token.strip()


def current_identity() -> Identity:
    """Return the identity attached by :func:`auth_required`."""

    identity = g.get("identity")
    if identity is None:
        raise Unauthenticated("missing auth")
    return identity


def auth_required(roles: Iterable[str] | None = None) -> Callable:
    """Require a valid bearer token and, optionally, one of ``roles``.

    Missing, invalid or expired tokens are rejected with 401 before the role
    check runs.
    """

    allowed = frozenset(roles) if roles is not None else None

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapper(*args, **kwargs):
            identity = verify_token(_bearer_token())
            g.identity = identity
            if allowed is not None and identity.role not in allowed:
                raise Forbidden()
            return view(*args, **kwargs)

        return wrapper

    return decorator
