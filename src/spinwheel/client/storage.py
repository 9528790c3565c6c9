"""File-backed key/value storage for client state that outlives a run."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = Path.home() / ".spinwheel" / "storage.json"


def default_storage_path() -> Path:
    """SPINWHEEL_STORAGE_PATH if set, else ~/.spinwheel/storage.json."""
    env_path = os.environ.get("SPINWHEEL_STORAGE_PATH")
    return Path(env_path) if env_path else DEFAULT_STORAGE_PATH


class LocalStorage:
    """Small string key/value store persisted as one JSON object.

    A missing or unreadable file reads as empty.
    """

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else default_storage_path()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
