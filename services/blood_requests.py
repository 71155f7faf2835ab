"""Emergency blood requests: an open broadcast channel, no auth required."""

from __future__ import annotations

from models import BloodRequest, DocumentStore, next_id

from .payloads import NewBloodRequest


def create_request(store: DocumentStore, payload: NewBloodRequest) -> BloodRequest:
    with store.transaction() as document:
        requests = document["requests"]
        record = BloodRequest(
            id=next_id(requests),
            phone=payload.phone,
            blood_group=payload.blood_group,
            city=payload.city,
            requester_name=payload.requester_name or "Anonymous",
            state=payload.state,
            notes=payload.notes,
        )
        requests.append(record.to_dict())
    return record


def list_requests(store: DocumentStore) -> list[BloodRequest]:
    """Return every request, newest first."""

    with store.read() as document:
        return [BloodRequest.from_dict(item) for item in reversed(document["requests"])]
