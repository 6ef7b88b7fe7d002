"""Compose and deliver user-facing notifications."""

import logging
from pathlib import Path
from typing import Optional, Protocol

from ..models.common import FileDescriptor
from ..models.notification import Notification, NotificationKind
from ..models.stack import AddResult
from ..models.transfer import TransferSummary

logger = logging.getLogger(__name__)


class StackListener(Protocol):
    """Presentation-side observer of the stack."""

    async def on_files_updated(self, files: list[FileDescriptor]) -> None: ...

    async def on_notification(self, notification: Notification) -> None: ...


def added_notification(result: AddResult) -> Optional[Notification]:
    """Summarize a drop. Returns None when nothing happened."""
    added = len(result.added)
    duplicates = result.duplicate_count
    failed = result.failed_count

    if added == 0 and duplicates == 0:
        if failed == 0:
            return None
        return Notification(
            kind=NotificationKind.ERROR,
            title="Error",
            body=f"Failed to add {failed} file(s).",
        )

    if duplicates > 0 and added == 0:
        kind, title = NotificationKind.DUPLICATE, "Duplicate Files"
        body = f"All {duplicates} file(s) already exist."
    elif duplicates > 0:
        kind, title = NotificationKind.ADDED, "Files Added"
        body = f"Added {added} files. Skipped {duplicates} duplicate file(s)."
    else:
        kind, title = NotificationKind.ADDED, "Files Added"
        body = f"Added {added} files."

    if failed:
        body += f" Failed to add {failed} file(s)."
    return Notification(kind=kind, title=title, body=body)


def cleared_notification() -> Notification:
    return Notification(
        kind=NotificationKind.CLEARED,
        title="Stack Cleared",
        body="All files have been removed from the stack.",
    )


def moved_notification(summary: TransferSummary) -> Notification:
    if summary.failures == 0:
        leaf = Path(summary.destination).name or summary.destination
        return Notification(
            kind=NotificationKind.MOVED,
            title="Success",
            body=f"Moved {summary.successes} files to {leaf}.",
        )
    if summary.successes == 0:
        return Notification(
            kind=NotificationKind.ERROR,
            title="Error",
            body=f"Moved 0 files, {summary.failures} failed.",
        )
    return Notification(
        kind=NotificationKind.PARTIAL_MOVED,
        title="Partial Success",
        body=f"Moved {summary.successes} files, {summary.failures} failed.",
    )


def copied_notification(count: int) -> Notification:
    return Notification(
        kind=NotificationKind.COPIED,
        title="Copied",
        body=f"{count} file paths copied to clipboard.",
    )


def error_notification(body: str) -> Notification:
    return Notification(kind=NotificationKind.ERROR, title="Error", body=body)


class Notifier:
    """Fan-out to registered listeners. Delivery is best effort."""

    def __init__(self):
        self._listeners: list[StackListener] = []

    def subscribe(self, listener: StackListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StackListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def files_updated(self, files: list[FileDescriptor]) -> None:
        for listener in list(self._listeners):
            try:
                await listener.on_files_updated(list(files))
            except Exception:
                logger.exception("Listener failed on files_updated")

    async def notify(self, notification: Notification) -> None:
        logger.debug(f"{notification.kind.value}: {notification.body}")
        for listener in list(self._listeners):
            try:
                await listener.on_notification(notification)
            except Exception:
                logger.exception("Listener failed on notification")
