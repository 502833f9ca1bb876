"""Document persistence backed by SQLAlchemy: one row per key in ``documents``."""
from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Text, cast, select
from sqlalchemy.exc import SQLAlchemyError

from clinic_api.db.create_tables import create_all
from clinic_api.db.models import StoredDocument
from clinic_api.db.session import get_session
from clinic_api.domain.errors import StorageError

logger = logging.getLogger(__name__)

CORRUPT_SUFFIX = ".corrupt"


class SQLDocumentStore:
    backend = "sql"

    def __init__(self, database_url: str | None = None) -> None:
        self.database_url = database_url

    def ensure_schema(self) -> None:
        create_all(self.database_url)

    def load(self, key: str, default: Any) -> Any:
        """
        Undecodable payloads fall back to ``default`` (raw text kept under
        ``<key>.corrupt``). Database failures raise StorageError.
        """
        try:
            with get_session(self.database_url) as session:
                entity = session.get(StoredDocument, key)
                if entity is None:
                    return copy.deepcopy(default)
                return copy.deepcopy(entity.payload)
        except ValueError:
            logger.warning("Could not decode document %r; starting from the default document", key, exc_info=True)
            self._keep_corrupt_copy(key)
            return copy.deepcopy(default)
        except SQLAlchemyError as exc:
            logger.exception("Error reading document %r", key)
            raise StorageError(f"Error loading {key}") from exc

    def save(self, key: str, document: Any) -> None:
        now = datetime.now(timezone.utc)
        with get_session(self.database_url) as session:
            try:
                session.merge(StoredDocument(key=key, payload=copy.deepcopy(document), updated_at=now))
                session.commit()
            except (SQLAlchemyError, TypeError, ValueError) as exc:
                session.rollback()
                logger.exception("Error writing document %r", key)
                raise StorageError(f"Error saving {key}") from exc

    def _keep_corrupt_copy(self, key: str) -> None:
        target = key + CORRUPT_SUFFIX
        try:
            with get_session(self.database_url) as session:
                raw = session.execute(
                    select(cast(StoredDocument.payload, Text)).where(StoredDocument.key == key)
                ).scalar_one_or_none()
                if raw is None:
                    return
                session.merge(StoredDocument(key=target, payload=raw, updated_at=datetime.now(timezone.utc)))
                session.commit()
        except SQLAlchemyError:
            logger.error("Could not preserve unreadable document %r", key)
        else:
            logger.warning("Unreadable contents of document %r preserved under %r", key, target)
