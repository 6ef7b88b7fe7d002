"""File settings consulted by the stack manager."""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from ..config import settings
from ..models.settings import FileSettings, FileSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsProvider(Protocol):
    def get_file_settings(self) -> FileSettings: ...

    def add_recent_destination(self, destination: str) -> None: ...

    def update_file_settings(self, update: FileSettingsUpdate) -> FileSettings: ...

    def clear_recent_destinations(self) -> None: ...

    def reset(self) -> None: ...


def push_recent(recent: list[str], destination: str, limit: int) -> list[str]:
    """Most-recent-first, unique by exact string, capped at ``limit``."""
    filtered = [d for d in recent if d != destination]
    filtered.insert(0, destination)
    return filtered[:limit]


class InMemorySettingsProvider:
    def __init__(
        self,
        file_settings: Optional[FileSettings] = None,
        max_recent: int = settings.max_recent_destinations,
    ):
        self._defaults = file_settings or FileSettings(
            default_destination=str(settings.default_destination)
        )
        self._settings = self._defaults.model_copy(deep=True)
        self.max_recent = max_recent

    def get_file_settings(self) -> FileSettings:
        return self._settings.model_copy(deep=True)

    def add_recent_destination(self, destination: str) -> None:
        if not destination:
            return
        self._settings.recent_destinations = push_recent(
            self._settings.recent_destinations, destination, self.max_recent
        )
        self._changed()

    def update_file_settings(self, update: FileSettingsUpdate) -> FileSettings:
        changes = update.model_dump(exclude_unset=True)
        self._settings = self._settings.model_copy(update=changes)
        self._changed()
        return self.get_file_settings()

    def clear_recent_destinations(self) -> None:
        self._settings.recent_destinations = []
        self._changed()

    def reset(self) -> None:
        self._settings = self._defaults.model_copy(deep=True)
        self._changed()

    def _changed(self) -> None:
        pass


class JsonSettingsProvider(InMemorySettingsProvider):
    """Persists file settings as JSON, rewriting the file on every change."""

    def __init__(
        self,
        path: Path = settings.settings_file,
        file_settings: Optional[FileSettings] = None,
        max_recent: int = settings.max_recent_destinations,
    ):
        super().__init__(file_settings, max_recent=max_recent)
        self.path = Path(path)
        first_run = not self.path.exists()
        if not first_run:
            self._settings = self._load()
        else:
            self._create_default_destination()
            self._changed()

    def _load(self) -> FileSettings:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return FileSettings.model_validate(data.get("files", {}))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable settings file {self.path}: {e}")
            return self._defaults.model_copy(deep=True)

    def _create_default_destination(self) -> None:
        dest = self._settings.default_destination
        if not dest:
            return
        try:
            Path(dest).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create default destination {dest}: {e}")

    def _changed(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps({"files": self._settings.model_dump()}, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            logger.error(f"Could not save settings to {self.path}: {e}")
