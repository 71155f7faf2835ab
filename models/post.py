"""NGO appeal record."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from . import utcnow_iso


@dataclass
class Post:
    """An appeal published by an NGO, optionally with one photo."""

    id: int
    ngo_id: int
    title: str = ""
    description: str = ""
    location_text: str = ""
    photos: list[str] = field(default_factory=list)
    created_at: str = field(default_factory=utcnow_iso)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Post":
        return cls(
            id=int(data["id"]),
            ngo_id=int(data["ngo_id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            location_text=data.get("location_text") or "",
            photos=list(data.get("photos") or []),
            created_at=data.get("created_at") or utcnow_iso(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
