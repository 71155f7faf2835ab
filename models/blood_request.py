"""Emergency blood request record."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from . import utcnow_iso


@dataclass
class BloodRequest:
    """A public call for a blood group in a city."""

    id: int
    phone: str
    blood_group: str
    city: str
    requester_name: str = "Anonymous"
    state: str = ""
    notes: str = ""
    status: str = "open"
    created_at: str = field(default_factory=utcnow_iso)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BloodRequest":
        return cls(
            id=int(data["id"]),
            phone=data["phone"],
            blood_group=data["blood_group"],
            city=data["city"],
            requester_name=data.get("requester_name") or "Anonymous",
            state=data.get("state") or "",
            notes=data.get("notes") or "",
            status=data.get("status") or "open",
            created_at=data.get("created_at") or utcnow_iso(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
