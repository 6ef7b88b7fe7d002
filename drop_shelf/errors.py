"""Errors raised while staging and transferring files."""

from .models.transfer import ErrorKind


class DropShelfError(Exception):
    kind: ErrorKind = ErrorKind.COPY_FAILED

    def __init__(self, path: str, message: str = ""):
        self.path = path
        super().__init__(message or f"{self.kind.value}: {path}")


class NotFoundError(DropShelfError):
    """Source path vanished before it could be classified or copied."""

    kind = ErrorKind.NOT_FOUND


class DestinationUncreatable(DropShelfError):
    """A destination directory could not be created."""

    kind = ErrorKind.DESTINATION_UNCREATABLE


class CopyFailed(DropShelfError):
    """I/O failure while copying one file."""

    kind = ErrorKind.COPY_FAILED
