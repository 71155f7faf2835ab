"""Seed an administrator user."""

from __future__ import annotations

import os
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app  # noqa: E402
from models import User, db, next_id  # noqa: E402

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "AdminPass123")


def seed_admin(email: str = ADMIN_EMAIL, password: str = ADMIN_PASSWORD) -> tuple[User, str]:
    """Create the admin, or promote and reset an existing user with that email."""

    with db.store.transaction() as document:
        users = document["users"]
        for index, record in enumerate(users):
            if str(record.get("email", "")).strip().lower() == email.strip().lower():
                admin = User.from_dict(record)
                admin.role = "admin"
                admin.set_password(password)
                users[index] = admin.to_dict()
                return admin, "updated"

        admin = User(id=next_id(users), email=email, name="Administrator", role="admin")
        admin.set_password(password)
        users.append(admin.to_dict())
        return admin, "created"


def main() -> None:
    app = create_app()
    with app.app_context():
        admin, action = seed_admin()
        print(f"Admin user {action}: {admin.email}")


if __name__ == "__main__":
    main()
