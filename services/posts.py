"""NGO appeals."""

from __future__ import annotations

from typing import Optional

from errors import Forbidden
from models import DocumentStore, Post, next_id
from utils.security import POST_AUTHORS, Identity

from .payloads import NewPost


def ensure_can_post(identity: Identity) -> None:
    if identity.role not in POST_AUTHORS:
        raise Forbidden()


def create_post(
    store: DocumentStore,
    identity: Identity,
    payload: NewPost,
    photo_url: Optional[str] = None,
) -> Post:
    """Publish an appeal owned by ``identity``.

    ``photo_url`` points at a file the upload storage already accepted.
    """

    ensure_can_post(identity)

    with store.transaction() as document:
        posts = document["posts"]
        post = Post(
            id=next_id(posts),
            ngo_id=identity.id,
            title=payload.title,
            description=payload.description,
            location_text=payload.location_text,
            photos=[photo_url] if photo_url else [],
        )
        posts.append(post.to_dict())
    return post


def list_posts(store: DocumentStore) -> list[Post]:
    """Return every post, newest first."""

    with store.read() as document:
        return [Post.from_dict(item) for item in reversed(document["posts"])]
