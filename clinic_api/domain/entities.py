"""Entity records kept by the repositories, serialized with camelCase keys."""
from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Mapping


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T10:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


class Record:
    """Mixin mapping snake_case dataclass fields to the wire/storage format."""

    def to_dict(self) -> dict[str, Any]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        return cls(**{f.name: data.get(_camel(f.name)) for f in fields(cls)})


@dataclass(frozen=True)
class User(Record):
    id: int
    username: str
    email: str
    password_digest: str
    created_at: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        # older data files stored the digest under "password"
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            email=data.get("email"),
            password_digest=data.get("passwordDigest") or data.get("password") or "",
            created_at=data.get("createdAt"),
        )

    def to_public_dict(self) -> dict[str, Any]:
        return {"id": self.id, "username": self.username, "email": self.email, "createdAt": self.created_at}


@dataclass(frozen=True)
class Appointment(Record):
    id: int
    patient_name: str
    date: str
    time: str
    doctor: str
    created_at: str


@dataclass(frozen=True)
class MedicalRecord(Record):
    id: int
    patient_name: str
    condition: str
    treatment: str
    created_at: str


@dataclass(frozen=True)
class Billing(Record):
    id: int
    patient_name: str
    amount: int | float
    payment_method: str
    created_at: str
