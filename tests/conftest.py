from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Garante que o pacote clinic_api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinic_api.core.config import Settings  # noqa: E402
from clinic_api.db import session as db_session  # noqa: E402
from clinic_api.domain.errors import StorageError  # noqa: E402
from clinic_api.repositories.json_storage import JsonFileStore  # noqa: E402


class FlakyStore:
    """Wraps a store and fails ``save`` for the keys listed in ``failing``."""

    def __init__(self, inner, failing: set[str] | None = None) -> None:
        self.inner = inner
        self.backend = inner.backend
        self.failing = set(failing or ())
        self.saves: list[str] = []

    def load(self, key: str, default: Any) -> Any:
        return self.inner.load(key, default)

    def save(self, key: str, document: Any) -> None:
        if key in self.failing:
            raise StorageError(f"Error saving {key}")
        self.saves.append(key)
        self.inner.save(key, document)


def reset_sql_engine(url: str) -> None:
    """Dispose the cached engine so the SQLite file is not left locked (Windows)."""
    try:
        db_session.get_engine(url).dispose()
    except Exception:
        pass
    db_session._engine_for.cache_clear()  # type: ignore[attr-defined]
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def data_dir(tmp_path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def file_store(data_dir) -> JsonFileStore:
    return JsonFileStore(data_dir)


@pytest.fixture()
def sqlite_url(tmp_path):
    url = f"sqlite:///{tmp_path / 'clinic.db'}"
    yield url
    reset_sql_engine(url)


@pytest.fixture()
def settings(data_dir, sqlite_url) -> Settings:
    return Settings(data_dir=str(data_dir), database_url=sqlite_url, cors_origins=())
