"""
Persistence of the JSONPath history: the last used path and a short
most-recent-first list of recent paths, stored as a small JSON file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sse_merge._settings import DEFAULT_JSON_PATH

logger = logging.getLogger(__name__)

MAX_RECENT_PATHS = 10


class PathPreferences(BaseModel):
    """On-disk shape of the preferences file."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    last_used_path: str = Field(default="", alias="lastUsedPath")
    recent_paths: list[str] = Field(default_factory=list, alias="recentPaths")


def push_recent(recent: list[str], path: str, limit: int = MAX_RECENT_PATHS) -> list[str]:
    """Move path to the front of recent, dropping duplicates and capping the length."""
    updated = [p for p in recent if p != path]
    updated.insert(0, path)
    return updated[:limit]


class PreferenceStore:
    """
    JSON-file backed store for path preferences.

    A missing file reads as empty preferences; an unreadable or invalid one
    is logged and treated the same way, and is replaced on the next save.
    """

    def __init__(self, path: str | Path, *, default_json_path: str = DEFAULT_JSON_PATH) -> None:
        self._path = Path(path)
        self._default_json_path = default_json_path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def default_json_path(self) -> str:
        return self._default_json_path

    def load(self) -> PathPreferences:
        if not self._path.is_file():
            return PathPreferences()
        try:
            return PathPreferences.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable preferences file %s: %s", self._path, e)
            return PathPreferences()

    def save(self, prefs: PathPreferences) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(prefs.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

    def get_last_used_path(self) -> str:
        return self.load().last_used_path or self._default_json_path

    def get_recent_paths(self) -> list[str]:
        return list(self.load().recent_paths)

    def save_recent_path(self, path: str) -> None:
        """Record path as the last used one and move it to the front of the recent list."""
        prefs = self.load()
        prefs.recent_paths = push_recent(prefs.recent_paths, path)
        prefs.last_used_path = path
        self.save(prefs)

    def clear(self) -> None:
        self.save(PathPreferences())
