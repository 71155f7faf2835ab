"""Emergency blood request endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from models import db
from services import create_request, list_requests
from services.payloads import NewBloodRequest
from utils.request_validation import parse_request_payload

requests_bp = Blueprint("requests", __name__)


@requests_bp.route("", methods=["GET"])
def index():
    """Return every request, newest first."""

    records = list_requests(db.store)
    return jsonify({"ok": True, "requests": [record.to_dict() for record in records]})


@requests_bp.route("", methods=["POST"])
def create():
    payload = NewBloodRequest.from_mapping(parse_request_payload(request))
    record = create_request(db.store, payload)
    current_app.logger.info(
        "Blood request %s created for %s in %s", record.id, record.blood_group, record.city
    )
    return jsonify({"ok": True, "request": record.to_dict()})
