"""Authentication blueprint providing register and login endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from models import db
from services import login_user, register_user
from services.payloads import Credentials, Registration
from utils.request_validation import parse_request_payload

auth_bp = Blueprint("auth", __name__)


def _auth_response(user, token):
    return jsonify({"ok": True, "user": user.public_dict(), "token": token})


@auth_bp.route("/register", methods=["POST"])
def register():
    """Register a new user with an email, password, and optional name and role."""

    payload = Registration.from_mapping(parse_request_payload(request))
    user, token = register_user(
        db.store,
        payload,
        restrict_roles=bool(current_app.config.get("RESTRICT_ROLES")),
    )
    current_app.logger.info("Registered user %s with role %s", user.id, user.role)
    return _auth_response(user, token)


@auth_bp.route("/login", methods=["POST"])
def login():
    """Authenticate a user and return a JWT access token."""

    payload = Credentials.from_mapping(parse_request_payload(request))
    user, token = login_user(db.store, payload)
    return _auth_response(user, token)
