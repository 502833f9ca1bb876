from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from clinic_api import __version__
from clinic_api.core.config import Settings, get_settings
from clinic_api.core.log import configure_logging
from clinic_api.domain.errors import ClinicError
from clinic_api.repositories.store import DurableStore
from clinic_api.routers import auth as auth_router
from clinic_api.routers import health as health_router
from clinic_api.routers import records as records_router
from clinic_api.services.clinic import build_services

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


async def _clinic_error_handler(request: Request, exc: ClinicError) -> JSONResponse:
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"message": "Internal server error"}, status_code=500)


def create_app(settings: Optional[Settings] = None, store: Optional[DurableStore] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn; loads every collection up front."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Clinic API", version=__version__)
    app.state.settings = settings
    app.state.services = build_services(settings, store)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(ClinicError, _clinic_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(health_router.router)
    app.include_router(auth_router.router)
    app.include_router(records_router.router)

    logger.info(
        "Clinic API ready (storage: %s, %s)",
        settings.storage_backend,
        settings.data_dir if settings.storage_backend == "file" else "database",
    )
    return app
