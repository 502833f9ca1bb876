"""Entry point for uvicorn/gunicorn: ``uvicorn clinic_api.app_factory:app``."""
from clinic_api.app import create_app

app = create_app()

__all__ = ["app", "create_app"]
