"""Toast notification models pushed to the presentation layer."""

from enum import Enum
from pydantic import BaseModel


class NotificationKind(str, Enum):
    ADDED = "added"
    DUPLICATE = "duplicate"
    CLEARED = "cleared"
    MOVED = "moved"
    PARTIAL_MOVED = "partial_moved"
    COPIED = "copied"
    ERROR = "error"


class Notification(BaseModel):
    kind: NotificationKind
    title: str
    body: str
