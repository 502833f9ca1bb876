"""One-off migration script: JSON data directory -> SQL document store."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# make clinic_api importable when run directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinic_api.core.config import get_settings
from clinic_api.core.log import configure_logging
from clinic_api.repositories.json_storage import JsonFileStore
from clinic_api.repositories.sql_storage import SQLDocumentStore
from clinic_api.repositories.store import copy_documents
from clinic_api.services.clinic import DOCUMENT_KEYS


def migrate(data_dir: str, database_url: str) -> list[str]:
    source_dir = Path(data_dir)
    if not source_dir.is_dir():
        raise SystemExit(f"Data directory not found: {source_dir}")
    target = SQLDocumentStore(database_url)
    target.ensure_schema()
    return copy_documents(JsonFileStore(source_dir), target, DOCUMENT_KEYS)


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Copy JSON collections and counters into the SQL store")
    ap.add_argument("--data-dir", default=settings.data_dir, help="JSON data directory (default: DATA_DIR)")
    ap.add_argument("--database-url", default=settings.database_url, help="SQLAlchemy URL (default: DATABASE_URL)")
    args = ap.parse_args()

    configure_logging(settings.log_level)
    copied = migrate(args.data_dir, args.database_url)
    logging.getLogger("clinic_api.migrate").info("Migrated documents: %s", ", ".join(copied) or "none")


if __name__ == "__main__":
    main()
