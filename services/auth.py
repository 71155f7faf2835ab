"""Registration and login."""

from __future__ import annotations

from errors import DuplicateEmail, InvalidCredentials, ValidationError
from models import DocumentStore, User, next_id
from models.user import DEFAULT_ROLE, ROLES
from utils.security import hash_password, issue_token

from .payloads import Credentials, Registration


def _find_user(users: list[dict], email: str) -> User | None:
    wanted = email.strip().lower()
    for record in users:
        if str(record.get("email", "")).strip().lower() == wanted:
            return User.from_dict(record)
    return None


def register_user(
    store: DocumentStore, payload: Registration, *, restrict_roles: bool = False
) -> tuple[User, str]:
    """Create a user and return it with a fresh access token.

    The duplicate check and the insert run in one transaction, so two
    registrations for the same address cannot both succeed.
    """

    role = payload.role or DEFAULT_ROLE
    if restrict_roles:
        role = role.strip().lower()
        if role not in ROLES:
            raise ValidationError("role must be one of: {}.".format(", ".join(ROLES)))

    password_hash = hash_password(payload.password)

    with store.transaction() as document:
        users = document["users"]
        if _find_user(users, payload.email) is not None:
            raise DuplicateEmail()

        user = User(
            id=next_id(users),
            email=payload.email,
            password_hash=password_hash,
            name=payload.name,
            role=role,
        )
        users.append(user.to_dict())

    return user, issue_token(user)


def login_user(store: DocumentStore, payload: Credentials) -> tuple[User, str]:
    """Return the matching user and a token, or raise :class:`InvalidCredentials`."""

    with store.read() as document:
        user = _find_user(document["users"], payload.email)

    if user is None or not user.check_password(payload.password):
        raise InvalidCredentials()

    return user, issue_token(user)
