"""Administrator-only views."""

from __future__ import annotations

from errors import Forbidden
from models import DocumentStore
from utils.security import ADMINS, Identity


def admin_stats(store: DocumentStore, identity: Identity) -> dict[str, int]:
    """Return the size of each collection."""

    if identity.role not in ADMINS:
        raise Forbidden()

    with store.read() as document:
        return {
            "users": len(document["users"]),
            "posts": len(document["posts"]),
            "requests": len(document["requests"]),
        }
