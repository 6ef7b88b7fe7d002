from pathlib import Path

import pytest

from drop_shelf.models.settings import FileSettings
from drop_shelf.services.settings_provider import InMemorySettingsProvider
from drop_shelf.services.stack_manager import StackManager


class RecordingListener:
    def __init__(self):
        self.snapshots = []
        self.notifications = []

    async def on_files_updated(self, files):
        self.snapshots.append(files)

    async def on_notification(self, notification):
        self.notifications.append(notification)


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    src = tmp_path / "source"
    src.mkdir()
    return src


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    return tmp_path / "dest"


@pytest.fixture
def make_file(source_dir: Path):
    def _make(name: str, content: bytes = b"data") -> str:
        path = source_dir / name
        path.write_bytes(content)
        return str(path)
    return _make


@pytest.fixture
def settings_provider(dest_dir: Path) -> InMemorySettingsProvider:
    return InMemorySettingsProvider(
        FileSettings(default_destination=str(dest_dir), categorize_by_type=True)
    )


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def manager(settings_provider, listener) -> StackManager:
    m = StackManager(settings_provider)
    m.subscribe(listener)
    return m
