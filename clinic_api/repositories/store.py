"""
Durable store interface.

A store reads and writes whole named documents (a collection of records or
the counters record). It does no locking of its own; repositories serialize
their writes.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol

from clinic_api.core.config import Settings


class DurableStore(Protocol):
    backend: str

    def load(self, key: str, default: Any) -> Any:
        """Return the stored document, or a copy of ``default`` when absent or undecodable."""

    def save(self, key: str, document: Any) -> None:
        """Replace the stored document; raises StorageError on failure."""


def copy_documents(source: DurableStore, target: DurableStore, keys: Iterable[str]) -> list[str]:
    """Copy every document present in ``source`` to ``target``; returns the copied keys."""
    copied = []
    for key in keys:
        document = source.load(key, None)
        if document is None:
            continue
        target.save(key, document)
        copied.append(key)
    return copied


def open_store(settings: Settings) -> DurableStore:
    """Build the store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "sql":
        from .sql_storage import SQLDocumentStore

        store = SQLDocumentStore(settings.database_url)
        store.ensure_schema()
        return store
    from .json_storage import JsonFileStore

    return JsonFileStore(settings.data_dir)
