"""Appointment, medical record and billing endpoints (create and list)."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from clinic_api.domain.errors import ClinicError
from clinic_api.repositories.entity_repositories import EntityRepository

from .deps import error_response, get_services

router = APIRouter(prefix="/api", tags=["records"])


def _create(repository: EntityRepository, payload: Optional[dict]) -> JSONResponse:
    try:
        entity = repository.create(payload or {})
    except ClinicError as exc:
        return error_response(exc)
    return JSONResponse(entity.to_dict(), status_code=201)


def _list(repository: EntityRepository) -> list[dict]:
    return [entity.to_dict() for entity in repository.list()]


@router.post("/appointments")
def create_appointment(request: Request, payload: Optional[dict] = Body(None)):
    return _create(get_services(request).appointments, payload)


@router.get("/appointments")
def list_appointments(request: Request):
    return _list(get_services(request).appointments)


@router.post("/medicalrecords")
def create_medical_record(request: Request, payload: Optional[dict] = Body(None)):
    return _create(get_services(request).medical_records, payload)


@router.get("/medicalrecords")
def list_medical_records(request: Request):
    return _list(get_services(request).medical_records)


@router.post("/billings")
def create_billing(request: Request, payload: Optional[dict] = Body(None)):
    return _create(get_services(request).billings, payload)


@router.get("/billings")
def list_billings(request: Request):
    return _list(get_services(request).billings)
