from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from clinic_api.domain.errors import ClinicError
from clinic_api.services.auth_service import AdminLogin

from .deps import error_response, get_services

router = APIRouter(prefix="/api", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/signup")
def signup(request: Request, payload: Optional[dict] = Body(None)):
    payload = payload or {}
    auth = get_services(request).auth
    try:
        user = auth.register(payload.get("username"), payload.get("email"), payload.get("password"))
    except ClinicError as exc:
        logger.info("Signup rejected: %s", exc.message)
        return error_response(exc)
    return JSONResponse({"message": "User registered successfully!", "userId": user.id}, status_code=201)


@router.post("/login")
def login(request: Request, payload: Optional[dict] = Body(None)):
    payload = payload or {}
    auth = get_services(request).auth
    try:
        outcome = auth.login(payload.get("password"), email=payload.get("email"), username=payload.get("username"))
    except ClinicError as exc:
        return error_response(exc)
    if isinstance(outcome, AdminLogin):
        return {"message": "Admin login successful", "redirectTo": outcome.redirect_to}
    return {"message": "Login successful", "username": outcome.username}


@router.get("/users")
def list_users(request: Request):
    """Registered users without their password digests."""
    return [user.to_public_dict() for user in get_services(request).users.list()]
