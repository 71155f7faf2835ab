"""NGO appeal endpoints with optional photo upload."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request, url_for
from werkzeug.datastructures import FileStorage

from models import db
from services import create_post, list_posts
from services.payloads import NewPost
from storage import LocalStorage
from utils.request_validation import parse_request_payload
from utils.security import POST_AUTHORS, auth_required, current_identity

ngo_bp = Blueprint("ngo", __name__)

PHOTO_FIELD = "photo"


def _upload_storage() -> LocalStorage:
    return LocalStorage(
        current_app.config.get("UPLOAD_DIR"),
        max_size=int(current_app.config.get("MAX_UPLOAD_SIZE")),
    )


def _store_photo(storage: LocalStorage) -> str | None:
    """Persist the optional photo and return its stored name."""

    photo = request.files.get(PHOTO_FIELD)
    if not isinstance(photo, FileStorage) or not photo.filename:
        return None

    return storage.save(photo, PHOTO_FIELD)


@ngo_bp.route("/posts", methods=["GET"])
def index():
    """Return every post, newest first."""

    posts = list_posts(db.store)
    return jsonify({"ok": True, "posts": [post.to_dict() for post in posts]})


@ngo_bp.route("/posts", methods=["POST"])
@auth_required(roles=POST_AUTHORS)
def create():
    """Create a post owned by the authenticated NGO or admin."""

    identity = current_identity()
    payload = NewPost.from_mapping(parse_request_payload(request))
    storage = _upload_storage()
    photo_name = _store_photo(storage)
    photo_url = None
    if photo_name:
        photo_url = url_for("uploaded_file", filename=photo_name, _external=True)

    try:
        post = create_post(db.store, identity, payload, photo_url=photo_url)
    except Exception:
        # No post references the photo, drop it.
        if photo_name:
            storage.delete(photo_name)
        raise

    current_app.logger.info("Post %s created by user %s", post.id, identity.id)
    return jsonify({"ok": True, "post": post.to_dict()})
