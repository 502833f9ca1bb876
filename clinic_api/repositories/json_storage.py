"""
JSON file persistence adapter.

Each key maps to ``<data_dir>/<key>.json`` holding the whole document.
Writes go to a temporary file that then replaces the target, so a crash
mid-write leaves the previous document intact.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from clinic_api.domain.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileStore:
    backend = "file"

    def __init__(self, data_dir: str | os.PathLike) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def load(self, key: str, default: Any) -> Any:
        path = self.path_for(key)
        if not path.exists():
            return copy.deepcopy(default)
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            logger.warning("Could not read %s; starting from the default document", path, exc_info=True)
            self._keep_corrupt_copy(path)
            return copy.deepcopy(default)

    def save(self, key: str, document: Any) -> None:
        path = self.path_for(key)
        try:
            payload = json.dumps(document, ensure_ascii=False, indent=2)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("Error writing %s", path)
            raise StorageError(f"Error saving {key}") from exc

    def _keep_corrupt_copy(self, path: Path) -> None:
        target = path.with_name(path.name + ".corrupt")
        try:
            shutil.copy2(path, target)
        except OSError:
            logger.error("Could not preserve unreadable file %s", path)
        else:
            logger.warning("Unreadable contents of %s preserved at %s", path, target)
