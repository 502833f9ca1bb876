"""Run the API with uvicorn: ``python -m clinic_api``."""
from __future__ import annotations

import uvicorn

from clinic_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("clinic_api.app_factory:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
