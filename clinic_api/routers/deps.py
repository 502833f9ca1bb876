"""Helpers shared by the routers."""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse

from clinic_api.domain.errors import ClinicError
from clinic_api.services.clinic import ClinicServices


def get_services(request: Request) -> ClinicServices:
    services = getattr(getattr(request.app, "state", None), "services", None)
    if not services:
        raise RuntimeError("Clinic services not configured")
    return services


def error_response(exc: ClinicError) -> JSONResponse:
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)
