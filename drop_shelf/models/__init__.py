"""Data models."""

from .common import FileCategory, FileDescriptor
from .stack import AddResult, CopyPathsResult, StackStats
from .transfer import ErrorKind, TransferOutcome, TransferSummary
from .notification import Notification, NotificationKind
from .settings import FileSettings, FileSettingsUpdate

__all__ = [
    "FileCategory",
    "FileDescriptor",
    "AddResult",
    "CopyPathsResult",
    "StackStats",
    "ErrorKind",
    "TransferOutcome",
    "TransferSummary",
    "Notification",
    "NotificationKind",
    "FileSettings",
    "FileSettingsUpdate",
]
