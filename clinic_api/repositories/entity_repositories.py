"""
In-memory entity collections synchronized with a durable store.

Each repository loads its collection once, appends on create and rewrites
the whole collection after every mutation. A per-repository lock makes
check-allocate-append-persist atomic for concurrent callers.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Generic, Mapping, Optional, TypeVar

from clinic_api.domain.entities import Appointment, Billing, MedicalRecord, Record, User, utc_timestamp
from clinic_api.domain.errors import DuplicateEmailError, ValidationError
from clinic_api.domain.validation import parse_amount, parse_calendar_date, require_fields, require_text

from .counters import APPOINTMENT_COUNTER, BILLING_COUNTER, MEDICAL_RECORD_COUNTER, USER_COUNTER, CounterAllocator
from .store import DurableStore

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Record)


class EntityRepository(Generic[E]):
    """Append-only collection of one entity type."""

    collection: str
    counter: str
    entity_type: type

    def __init__(self, store: DurableStore, counters: CounterAllocator) -> None:
        self._store = store
        self._counters = counters
        self._lock = threading.Lock()
        self._items: list[E] = self._load()

    def _load(self) -> list[E]:
        raw = self._store.load(self.collection, [])
        if not isinstance(raw, list):
            logger.warning("Collection %r is not a list; starting empty", self.collection)
            raw = []
        items = [self.entity_type.from_dict(row) for row in raw if isinstance(row, dict)]
        ids = [item.id for item in items if isinstance(item.id, int)]
        if ids:
            self._counters.reserve_past(self.counter, max(ids))
        logger.info("Loaded %d %s", len(items), self.collection)
        return items

    def list(self) -> list[E]:
        with self._lock:
            return list(self._items)

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def create(self, fields: Mapping[str, Any]) -> E:
        if not isinstance(fields, Mapping):
            raise ValidationError("Request body must be an object")
        values = self.clean(fields)
        with self._lock:
            self.check_unique(values)
            entity = self.entity_type(id=self._counters.next(self.counter), created_at=utc_timestamp(), **values)
            # appended before persisting: a failed save leaves memory ahead of the store
            self._items.append(entity)
            self._store.save(self.collection, [item.to_dict() for item in self._items])
            total = len(self._items)
        logger.info("%s %d created (total: %d)", self.entity_type.__name__, entity.id, total)
        return entity

    def clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Validate incoming wire fields and return constructor arguments."""
        raise NotImplementedError

    def check_unique(self, values: dict[str, Any]) -> None:
        """Hook for uniqueness rules; runs under the repository lock."""


class UserRepository(EntityRepository[User]):
    collection = "users"
    counter = USER_COUNTER
    entity_type = User

    def clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = require_fields(fields, ("username", "email", "passwordDigest"))
        return {
            "username": require_text(values, "username"),
            "email": require_text(values, "email"),
            "password_digest": require_text(values, "passwordDigest"),
        }

    def check_unique(self, values: dict[str, Any]) -> None:
        if self._find(lambda user: _same_email(user.email, values["email"])):
            raise DuplicateEmailError("Email already in use")

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._find(lambda user: _same_email(user.email, email))

    def find_by_username(self, username: str) -> Optional[User]:
        name = (username or "").strip()
        with self._lock:
            return self._find(lambda user: user.username == name)

    def _find(self, predicate) -> Optional[User]:
        for user in self._items:
            if predicate(user):
                return user
        return None


def _same_email(a: str | None, b: str | None) -> bool:
    left = (a or "").strip().lower()
    return bool(left) and left == (b or "").strip().lower()


class AppointmentRepository(EntityRepository[Appointment]):
    collection = "appointments"
    counter = APPOINTMENT_COUNTER
    entity_type = Appointment

    def clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = require_fields(fields, ("patientName", "date", "time", "doctor"))
        return {
            "patient_name": require_text(values, "patientName"),
            "date": parse_calendar_date(values["date"]),
            "time": require_text(values, "time"),
            "doctor": require_text(values, "doctor"),
        }


class MedicalRecordRepository(EntityRepository[MedicalRecord]):
    collection = "medicalRecords"
    counter = MEDICAL_RECORD_COUNTER
    entity_type = MedicalRecord

    def clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = require_fields(fields, ("patientName", "condition", "treatment"))
        return {
            "patient_name": require_text(values, "patientName"),
            "condition": require_text(values, "condition"),
            "treatment": require_text(values, "treatment"),
        }


class BillingRepository(EntityRepository[Billing]):
    collection = "billings"
    counter = BILLING_COUNTER
    entity_type = Billing

    def clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = require_fields(fields, ("patientName", "amount", "paymentMethod"))
        return {
            "patient_name": require_text(values, "patientName"),
            "amount": parse_amount(values["amount"]),
            "payment_method": require_text(values, "paymentMethod"),
        }
