from __future__ import annotations

import json
import logging

import pytest

from clinic_api.domain.errors import StorageError
from clinic_api.repositories.json_storage import JsonFileStore


def test_missing_file_returns_a_fresh_default(file_store):
    default = {"userIdCounter": 1}

    loaded = file_store.load("counters", default)
    loaded["userIdCounter"] = 99

    assert file_store.load("counters", default) == {"userIdCounter": 1}
    assert not file_store.path_for("counters").exists()


def test_save_writes_whole_document(file_store):
    rows = [{"id": 1, "patientName": "Bob"}, {"id": 2, "patientName": "Ana"}]

    file_store.save("appointments", rows)

    path = file_store.path_for("appointments")
    assert json.loads(path.read_text(encoding="utf-8")) == rows
    assert file_store.load("appointments", []) == rows
    assert [p.name for p in path.parent.iterdir()] == ["appointments.json"]


def test_save_keeps_non_ascii_text(file_store):
    file_store.save("medicalRecords", [{"patientName": "José"}])

    assert "José" in file_store.path_for("medicalRecords").read_text(encoding="utf-8")


def test_corrupt_file_falls_back_to_default_and_is_preserved(file_store, caplog):
    path = file_store.path_for("users")
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING):
        assert file_store.load("users", []) == []

    assert "Could not read" in caplog.text
    preserved = path.with_name("users.json.corrupt")
    assert preserved.read_text(encoding="utf-8") == "{not json"


def test_failed_save_raises_storage_error_and_keeps_previous_file(file_store):
    file_store.save("billings", [{"id": 1}])

    with pytest.raises(StorageError) as excinfo:
        file_store.save("billings", [{"id": 2, "amount": object()}])

    assert excinfo.value.status_code == 500
    assert file_store.load("billings", []) == [{"id": 1}]


def test_creates_missing_data_directory(tmp_path):
    target = tmp_path / "nested" / "data"

    JsonFileStore(target)

    assert target.is_dir()
