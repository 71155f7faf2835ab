"""Typed request bodies, validated at the HTTP boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from errors import ValidationError
from utils.request_validation import clean_text, raw_text, require_fields


@dataclass(frozen=True)
class Credentials:
    """Body of the login endpoint."""

    email: str
    password: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Credentials":
        # Passwords are taken verbatim, whitespace included.
        password = raw_text(data.get("password"))
        if not clean_text(data.get("email")) or not password:
            raise ValidationError("email & password required")
        return cls(email=clean_text(data["email"]), password=password)


@dataclass(frozen=True)
class Registration:
    """Body of the register endpoint."""

    email: str
    password: str
    name: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Registration":
        credentials = Credentials.from_mapping(data)
        return cls(
            email=credentials.email,
            password=credentials.password,
            name=clean_text(data.get("name")) or None,
            role=raw_text(data.get("role")) or None,
        )


@dataclass(frozen=True)
class NewBloodRequest:
    """Body of the create-request endpoint."""

    phone: str
    blood_group: str
    city: str
    requester_name: str = ""
    state: str = ""
    notes: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NewBloodRequest":
        require_fields(
            data, ("phone", "blood_group", "city"), "phone, blood_group and city required"
        )
        return cls(
            phone=clean_text(data["phone"]),
            blood_group=clean_text(data["blood_group"]),
            city=clean_text(data["city"]),
            requester_name=clean_text(data.get("requester_name")),
            state=clean_text(data.get("state")),
            notes=clean_text(data.get("notes")),
        )


@dataclass(frozen=True)
class NewPost:
    """Text fields of the create-post endpoint; the photo travels separately."""

    title: str = ""
    description: str = ""
    location_text: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NewPost":
        return cls(
            title=clean_text(data.get("title")),
            description=clean_text(data.get("description")),
            location_text=clean_text(data.get("location_text")),
        )
