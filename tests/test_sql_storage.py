"""
Smoke tests for the SQL document store against a temporary SQLite database.
"""
from __future__ import annotations

import logging
from dataclasses import replace

import pytest
from sqlalchemy import text

from clinic_api.db.session import get_engine
from clinic_api.domain.errors import StorageError
from clinic_api.repositories.sql_storage import SQLDocumentStore
from clinic_api.repositories.store import copy_documents, open_store
from clinic_api.services.clinic import DOCUMENT_KEYS


@pytest.fixture()
def sql_store(sqlite_url):
    store = SQLDocumentStore(sqlite_url)
    store.ensure_schema()
    return store


def test_missing_key_returns_default(sql_store):
    assert sql_store.load("users", []) == []
    assert sql_store.load("counters", {"userIdCounter": 1}) == {"userIdCounter": 1}


def test_save_then_overwrite(sql_store):
    sql_store.save("appointments", [{"id": 1, "patientName": "Bob"}])
    sql_store.save("appointments", [{"id": 1, "patientName": "Bob"}, {"id": 2, "patientName": "Ana"}])

    loaded = sql_store.load("appointments", [])
    assert [row["id"] for row in loaded] == [1, 2]


def test_unserializable_document_raises_storage_error(sql_store):
    sql_store.save("billings", [{"id": 1}])

    with pytest.raises(StorageError):
        sql_store.save("billings", [{"id": 2, "amount": object()}])

    assert sql_store.load("billings", []) == [{"id": 1}]


def test_undecodable_row_falls_back_and_is_preserved(sql_store, sqlite_url, caplog):
    with get_engine(sqlite_url).begin() as conn:
        conn.execute(
            text("INSERT INTO documents (\"key\", payload, updated_at) VALUES ('users', '{not json', CURRENT_TIMESTAMP)")
        )

    with caplog.at_level(logging.WARNING, logger="clinic_api.repositories.sql_storage"):
        assert sql_store.load("users", []) == []

    assert "users" in caplog.text
    assert sql_store.load("users.corrupt", None) == "{not json"

    sql_store.save("users", [{"id": 1}])
    assert sql_store.load("users", []) == [{"id": 1}]


def test_database_failure_on_load_raises_instead_of_defaulting(sqlite_url):
    store = SQLDocumentStore(sqlite_url)  # schema never created

    with pytest.raises(StorageError) as excinfo:
        store.load("counters", {"userIdCounter": 1})

    assert excinfo.value.message == "Error loading counters"


def test_copy_documents_from_json_files(file_store, sql_store):
    file_store.save("users", [{"id": 1, "username": "alice"}])
    file_store.save("counters", {"userIdCounter": 2})

    copied = copy_documents(file_store, sql_store, DOCUMENT_KEYS)

    assert copied == ["users", "counters"]
    assert sql_store.load("users", []) == [{"id": 1, "username": "alice"}]
    assert sql_store.load("counters", {}) == {"userIdCounter": 2}
    assert sql_store.load("appointments", None) is None


def test_open_store_picks_backend(settings):
    assert open_store(settings).backend == "file"

    sql_settings = replace(settings, storage_backend="sql")
    store = open_store(sql_settings)
    assert store.backend == "sql"
    assert store.load("users", []) == []
