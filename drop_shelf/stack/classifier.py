"""Turn a dropped path into a FileDescriptor."""

import os
import stat
import time
import uuid
from pathlib import Path

from ..errors import NotFoundError
from ..models.common import FileCategory, FileDescriptor

EXTENSION_CATEGORIES: dict[str, FileCategory] = {}

for _category, _extensions in (
    (FileCategory.IMAGE, (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp", ".svg", ".ico")),
    (FileCategory.DOCUMENT, (".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".pdf", ".txt", ".rtf", ".odt")),
    (FileCategory.VIDEO, (".mp4", ".avi", ".mov", ".wmv", ".flv", ".webm", ".mkv")),
    (FileCategory.AUDIO, (".mp3", ".wav", ".ogg", ".flac", ".aac", ".wma")),
    (FileCategory.ARCHIVE, (".zip", ".rar", ".7z", ".tar", ".gz", ".bz2")),
    (FileCategory.CODE, (".js", ".ts", ".py", ".java", ".c", ".cpp", ".cs", ".html", ".css", ".php", ".rb", ".go", ".rs")),
):
    for _ext in _extensions:
        EXTENSION_CATEGORIES[_ext] = _category


def category_for_extension(extension: str) -> FileCategory:
    """Case-insensitive lookup; unknown or empty extensions are OTHER."""
    ext = extension.lower()
    if ext and not ext.startswith("."):
        ext = f".{ext}"
    return EXTENSION_CATEGORIES.get(ext, FileCategory.OTHER)


def make_descriptor_id(name: str) -> str:
    return f"{name}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}"


def classify(path: str) -> FileDescriptor:
    """Stat ``path`` and build its descriptor.

    Raises NotFoundError when the path is gone or is not a regular file.
    """
    try:
        st = os.stat(path)
    except FileNotFoundError as e:
        raise NotFoundError(path, f"Source file not found: {path}") from e
    except OSError as e:
        raise NotFoundError(path, f"Cannot read {path}: {e}") from e

    if not stat.S_ISREG(st.st_mode):
        raise NotFoundError(path, f"Not a regular file: {path}")

    p = Path(path)
    return FileDescriptor(
        id=make_descriptor_id(p.name),
        path=path,
        name=p.name,
        extension=p.suffix,
        category=category_for_extension(p.suffix),
        size=st.st_size,
        last_modified=st.st_mtime * 1000,
    )
