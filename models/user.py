"""User record definition."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from utils.security import hash_password, verify_password

from . import utcnow_iso


ROLES = ("donor", "ngo", "admin")
DEFAULT_ROLE = "ngo"


@dataclass
class User:
    """Represents a registered donor, NGO or administrator."""

    id: int
    email: str
    password_hash: str = ""
    name: Optional[str] = None
    role: str = DEFAULT_ROLE
    created_at: str = field(default_factory=utcnow_iso)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            email=data["email"],
            password_hash=data.get("password_hash", ""),
            name=data.get("name"),
            role=data.get("role") or DEFAULT_ROLE,
            created_at=data.get("created_at") or utcnow_iso(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the stored representation, including the password hash."""

        return asdict(self)

    def public_dict(self) -> dict[str, Any]:
        """Return the fields that may be shown to clients."""

        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role}

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    def matches_email(self, email: str) -> bool:
        return self.email.strip().lower() == (email or "").strip().lower()

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
