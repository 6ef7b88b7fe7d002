"""Core shared models."""

from enum import Enum
from pydantic import BaseModel, ConfigDict


class FileCategory(str, Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    VIDEO = "video"
    AUDIO = "audio"
    ARCHIVE = "archive"
    CODE = "code"
    OTHER = "other"


class FileDescriptor(BaseModel):
    """Metadata captured for one staged file at the moment it was dropped."""

    model_config = ConfigDict(frozen=True)

    id: str
    path: str
    name: str
    extension: str = ""
    category: FileCategory = FileCategory.OTHER
    size: int = 0
    last_modified: float = 0.0  # epoch milliseconds
