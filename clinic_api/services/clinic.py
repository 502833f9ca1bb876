"""Wiring of the store, counters, repositories and services for one app instance."""
from __future__ import annotations

from dataclasses import dataclass

from clinic_api.core.config import Settings
from clinic_api.repositories.counters import COUNTERS_KEY, CounterAllocator
from clinic_api.repositories.entity_repositories import (
    AppointmentRepository,
    BillingRepository,
    MedicalRecordRepository,
    UserRepository,
)
from clinic_api.repositories.store import DurableStore, open_store
from clinic_api.services.auth_service import AuthService

DOCUMENT_KEYS = (
    UserRepository.collection,
    AppointmentRepository.collection,
    MedicalRecordRepository.collection,
    BillingRepository.collection,
    COUNTERS_KEY,
)


@dataclass
class ClinicServices:
    store: DurableStore
    counters: CounterAllocator
    users: UserRepository
    appointments: AppointmentRepository
    medical_records: MedicalRecordRepository
    billings: BillingRepository
    auth: AuthService

    def counts(self) -> dict[str, int]:
        return {
            "users": self.users.count(),
            "appointments": self.appointments.count(),
            "medicalRecords": self.medical_records.count(),
            "billings": self.billings.count(),
        }


def build_services(settings: Settings, store: DurableStore | None = None) -> ClinicServices:
    """Load every collection from the configured store."""
    store = store or open_store(settings)
    counters = CounterAllocator(store)
    users = UserRepository(store, counters)
    return ClinicServices(
        store=store,
        counters=counters,
        users=users,
        appointments=AppointmentRepository(store, counters),
        medical_records=MedicalRecordRepository(store, counters),
        billings=BillingRepository(store, counters),
        auth=AuthService(users, settings),
    )
