"""Administrator endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from models import db
from services import admin_stats
from utils.security import ADMINS, auth_required, current_identity

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/stats", methods=["GET"])
@auth_required(roles=ADMINS)
def stats():
    """Return the number of users, posts and requests."""

    return jsonify({"ok": True, "stats": admin_stats(db.store, current_identity())})
