"""Copy staged files into a destination folder."""

import asyncio
import logging
import os
import shutil
import time
from pathlib import Path

from ..errors import CopyFailed, DestinationUncreatable, DropShelfError, NotFoundError
from ..models.common import FileDescriptor
from ..models.transfer import ErrorKind, TransferOutcome, TransferSummary

logger = logging.getLogger(__name__)


class TransferEngine:
    def __init__(self, destination: str, categorize_by_type: bool = True):
        self.raw_destination = destination
        self.destination = Path(destination)
        self.categorize_by_type = categorize_by_type

    async def move_all(self, files: list[FileDescriptor]) -> TransferSummary:
        """Copy every file, concurrently, and aggregate the outcomes.

        A failing file never stops its siblings. When the destination root
        cannot be created, or is empty, every file fails with
        DESTINATION_UNCREATABLE.
        """
        try:
            if not self.raw_destination.strip():
                raise DestinationUncreatable(self.raw_destination, "No destination folder is set")
            await asyncio.to_thread(self._ensure_dir, self.destination)
        except DestinationUncreatable as e:
            logger.warning(str(e))
            outcomes = [
                TransferOutcome(
                    descriptor=f,
                    error_kind=ErrorKind.DESTINATION_UNCREATABLE,
                    error=str(e),
                )
                for f in files
            ]
            return TransferSummary.from_outcomes(self.raw_destination, outcomes)

        outcomes = await asyncio.gather(
            *(asyncio.to_thread(self._transfer_one, f) for f in files)
        )
        summary = TransferSummary.from_outcomes(str(self.destination), list(outcomes))
        logger.info(
            f"Transfer to {self.destination}: {summary.successes} copied, "
            f"{summary.failures} failed"
        )
        return summary

    def _transfer_one(self, file: FileDescriptor) -> TransferOutcome:
        """Copy a single file. Runs in a worker thread."""
        result = TransferOutcome(descriptor=file)
        try:
            source = Path(file.path)
            if not source.is_file():
                raise NotFoundError(file.path, f"Source file not found: {file.path}")

            target_dir = self._target_dir(file)
            self._ensure_dir(target_dir)

            final_path = self._reserve_path(target_dir, file.name)
            try:
                shutil.copy2(str(source), str(final_path))
            except FileNotFoundError as e:
                final_path.unlink(missing_ok=True)
                raise NotFoundError(file.path, f"Source file not found: {file.path}") from e
            except OSError as e:
                final_path.unlink(missing_ok=True)
                raise CopyFailed(file.path, f"Copy failed for {file.path}: {e}") from e

            result.final_path = str(final_path)
            result.success = True

        except DropShelfError as e:
            result.error_kind = e.kind
            result.error = str(e)
            logger.warning(f"Failed to transfer {file.path}: {e}")
        except Exception as e:
            result.error_kind = ErrorKind.COPY_FAILED
            result.error = str(e)
            logger.warning(f"Failed to transfer {file.path}: {e!r}")

        return result

    def _target_dir(self, file: FileDescriptor) -> Path:
        if self.categorize_by_type:
            return self.destination / file.category.value
        return self.destination

    def _ensure_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DestinationUncreatable(str(path), f"Cannot create {path}: {e}") from e

    def _reserve_path(self, target_dir: Path, name: str) -> Path:
        """Claim a free path in ``target_dir`` for ``name``.

        The plain name is used when free. Otherwise the name becomes
        ``<stem>_<epoch-ms><suffix>`` with the timestamp taken now; if a
        sibling already claimed that timestamp it is bumped until free.
        The path is created empty with O_EXCL so no two copies can share it.
        """
        path = target_dir / name
        if self._try_create(path):
            return path

        stem, suffix = Path(name).stem, Path(name).suffix
        timestamp = int(time.time() * 1000)
        while True:
            path = target_dir / f"{stem}_{timestamp}{suffix}"
            if self._try_create(path):
                return path
            timestamp += 1

    def _try_create(self, path: Path) -> bool:
        try:
            fd = os.open(str(path), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError:
            return False
        except OSError as e:
            raise CopyFailed(str(path), f"Cannot write {path}: {e}") from e
        os.close(fd)
        return True
