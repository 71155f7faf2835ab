"""Document store initialization and record exports."""

from datetime import datetime, timezone

from .store import Database, DocumentStore, empty_document, next_id


db = Database()


def utcnow_iso() -> str:
    """Return the current UTC time as an ISO-8601 string with a ``Z`` suffix."""

    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# Import records after the helpers they depend on.
from .user import User  # noqa: E402,F401
from .blood_request import BloodRequest  # noqa: E402,F401
from .post import Post  # noqa: E402,F401

__all__ = [
    "db",
    "Database",
    "DocumentStore",
    "empty_document",
    "next_id",
    "utcnow_iso",
    "User",
    "BloodRequest",
    "Post",
]
