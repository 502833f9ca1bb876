"""Liveness/readiness probes."""
from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from clinic_api.domain.entities import utc_timestamp

from .deps import get_services

router = APIRouter(tags=["health"])

SERVICE_NAME = "healthcare-backend"

_STORAGE_LABELS = {"file": "file-based", "sql": "sql"}


def _storage_label(request: Request) -> str:
    backend = get_services(request).store.backend
    return _STORAGE_LABELS.get(backend, backend)


@router.get("/", response_class=PlainTextResponse)
def root(request: Request):
    return f"Backend server is running! ({_storage_label(request)} storage mode)"


@router.get("/health")
def health(request: Request):
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "service": SERVICE_NAME,
        "storage": _storage_label(request),
    }


@router.get("/ready")
def ready(request: Request):
    services = get_services(request)
    return {
        "status": "ready",
        "storage": _storage_label(request),
        "timestamp": utc_timestamp(),
        "service": SERVICE_NAME,
        "data": services.counts(),
    }
