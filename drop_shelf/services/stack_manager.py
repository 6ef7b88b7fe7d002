"""Stack lifecycle: staging, selection and dispatch."""

import asyncio
import logging
import os
from pathlib import Path
from typing import Iterable, Optional

from ..models.common import FileCategory, FileDescriptor
from ..models.stack import AddResult, CopyPathsResult, StackStats
from ..models.transfer import TransferSummary
from ..stack.store import StackStore
from ..transfer.engine import TransferEngine
from .notifier import (
    Notifier,
    StackListener,
    added_notification,
    cleared_notification,
    copied_notification,
    error_notification,
    moved_notification,
)
from .settings_provider import SettingsProvider

logger = logging.getLogger(__name__)


class StackManager:
    """Entry point for every operation the presentation layer can trigger.

    Mutating operations run one at a time; a call arriving while another is in
    flight waits for it. Public operations always return a result and report
    failures through notifications instead of raising.
    """

    def __init__(
        self,
        settings_provider: SettingsProvider,
        store: Optional[StackStore] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.settings_provider = settings_provider
        self.store = store or StackStore()
        self.notifier = notifier or Notifier()
        self._lock = asyncio.Lock()
        self._selection: set[str] = set()
        self._auto_clear_task: Optional[asyncio.Task] = None

    def subscribe(self, listener: StackListener) -> None:
        self.notifier.subscribe(listener)

    def unsubscribe(self, listener: StackListener) -> None:
        self.notifier.unsubscribe(listener)

    def snapshot(self) -> list[FileDescriptor]:
        return self.store.snapshot()

    def stats(self) -> StackStats:
        return self.store.stats()

    def groups(self) -> dict[FileCategory, list[FileDescriptor]]:
        return self.store.group_by_category()

    # -- staging -----------------------------------------------------------

    async def add_files(self, paths: list[str]) -> AddResult:
        if not paths:
            return AddResult(files=self.snapshot())

        async with self._lock:
            try:
                result = await self.store.add(paths)
            except Exception:
                logger.exception("Error processing dropped files")
                await self.notifier.notify(
                    error_notification("Failed to process dropped files.")
                )
                return AddResult(failed_count=len(paths), files=self.snapshot())

            if result.added:
                await self.notifier.files_updated(result.files)
                self._schedule_auto_clear()

            notification = added_notification(result)
            if notification:
                await self.notifier.notify(notification)
            return result

    async def remove_file(self, path: str) -> list[FileDescriptor]:
        async with self._lock:
            files = self.store.remove(path)
            self._prune_selection()
            await self.notifier.files_updated(files)
            return files

    async def remove_file_by_id(self, file_id: str) -> list[FileDescriptor]:
        async with self._lock:
            files = self.store.remove_by_id(file_id)
            self._prune_selection()
            await self.notifier.files_updated(files)
            return files

    async def clear_stack(self) -> list[FileDescriptor]:
        async with self._lock:
            self._clear_locked()
            await self.notifier.files_updated([])
            await self.notifier.notify(cleared_notification())
            return []

    def _clear_locked(self) -> None:
        self.store.clear()
        self._selection.clear()
        self._cancel_auto_clear()

    # -- dispatch ----------------------------------------------------------

    async def move_files_to_destination(
        self, destination: Optional[str] = None
    ) -> TransferSummary:
        """Copy the whole stack into ``destination`` and clear the stack.

        Falls back to the default destination when none is given. The stack
        is cleared whatever the per-file outcome.
        """
        async with self._lock:
            files = self.store.snapshot()
            if not files:
                await self.notifier.notify(
                    error_notification("There are no files to move.")
                )
                return TransferSummary(destination=destination or "")

            try:
                file_settings = self.settings_provider.get_file_settings()
                destination = destination or file_settings.default_destination
                engine = TransferEngine(
                    destination=destination,
                    categorize_by_type=file_settings.categorize_by_type,
                )
                summary = await engine.move_all(files)
                self._record_destination(destination)
                notification = moved_notification(summary)
            except Exception:
                logger.exception(f"Error moving files to {destination}")
                summary = TransferSummary(
                    failures=len(files), destination=destination or ""
                )
                notification = error_notification("Failed to move files to destination.")

            self._clear_locked()
            await self.notifier.files_updated([])
            await self.notifier.notify(notification)
            return summary

    def _record_destination(self, destination: str) -> None:
        if not destination or not Path(destination).is_dir():
            return
        try:
            self.settings_provider.add_recent_destination(destination)
        except Exception:
            logger.exception(f"Could not record recent destination {destination}")

    async def copy_file_paths(self, paths: Optional[list[str]] = None) -> CopyPathsResult:
        """Collect paths for the clipboard.

        Explicit ``paths`` win; otherwise the selection, or the whole stack
        when nothing is selected.
        """
        if not paths:
            paths = [f.path for f in self.dispatch_targets()]
        result = CopyPathsResult(paths=list(paths), text="\n".join(paths))
        await self.notifier.notify(copied_notification(len(result.paths)))
        return result

    def drag_out_paths(self) -> list[str]:
        """Dispatch targets that still exist, for starting a native drag."""
        paths = []
        for f in self.dispatch_targets():
            if os.path.exists(f.path):
                paths.append(f.path)
            else:
                logger.warning(f"File does not exist: {f.path}")
        return paths

    # -- selection ---------------------------------------------------------

    def dispatch_targets(self) -> list[FileDescriptor]:
        files = self.store.snapshot()
        if not self._selection:
            return files
        return [f for f in files if f.id in self._selection]

    def selected_files(self) -> list[FileDescriptor]:
        return [f for f in self.store.snapshot() if f.id in self._selection]

    def select(self, ids: Iterable[str]) -> list[FileDescriptor]:
        known = {f.id for f in self.store.snapshot()}
        self._selection.update(i for i in ids if i in known)
        return self.selected_files()

    def deselect(self, ids: Iterable[str]) -> list[FileDescriptor]:
        self._selection.difference_update(ids)
        return self.selected_files()

    def toggle_selection(self, file_id: str) -> list[FileDescriptor]:
        if file_id in self._selection:
            self._selection.discard(file_id)
        elif self.store.get(file_id) is not None:
            self._selection.add(file_id)
        return self.selected_files()

    def select_all(self) -> list[FileDescriptor]:
        self._selection = {f.id for f in self.store.snapshot()}
        return self.selected_files()

    def clear_selection(self) -> list[FileDescriptor]:
        self._selection.clear()
        return []

    def toggle_select_all(self) -> list[FileDescriptor]:
        if self.store.snapshot() and len(self.selected_files()) == len(self.store):
            return self.clear_selection()
        return self.select_all()

    def _prune_selection(self) -> None:
        known = {f.id for f in self.store.snapshot()}
        self._selection &= known

    # -- auto clear --------------------------------------------------------

    def _schedule_auto_clear(self) -> None:
        timeout = self.settings_provider.get_file_settings().auto_clear_timeout
        self._cancel_auto_clear()
        if not timeout or timeout <= 0:
            return
        self._auto_clear_task = asyncio.create_task(self._auto_clear_after(timeout * 60))

    def _cancel_auto_clear(self) -> None:
        task = self._auto_clear_task
        self._auto_clear_task = None
        if task and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def _auto_clear_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        logger.info("Auto-clearing idle stack")
        await self.clear_stack()
