"""In-memory ordered stack of staged files."""

import asyncio
import logging
from typing import Optional

from ..errors import NotFoundError
from ..models.common import FileCategory, FileDescriptor
from ..models.stack import AddResult, StackStats
from .classifier import classify

logger = logging.getLogger(__name__)


class StackStore:
    """Owns the staged descriptors.

    No two descriptors ever share a ``path``; the raw path string is the key,
    so paths differing only in case are distinct entries.
    """

    def __init__(self):
        self._files: list[FileDescriptor] = []

    def __len__(self) -> int:
        return len(self._files)

    def snapshot(self) -> list[FileDescriptor]:
        return list(self._files)

    def contains(self, path: str) -> bool:
        return any(f.path == path for f in self._files)

    def get(self, file_id: str) -> Optional[FileDescriptor]:
        return next((f for f in self._files if f.id == file_id), None)

    async def add(self, paths: list[str]) -> AddResult:
        """Classify and append every path not already staged.

        Paths already in the stack, or repeated earlier in the same batch, are
        counted as duplicates. Paths that cannot be classified are counted as
        failures. New descriptors keep the order of ``paths``.
        """
        seen = {f.path for f in self._files}
        new_paths: list[str] = []
        duplicate_count = 0
        for path in paths:
            if path in seen:
                duplicate_count += 1
                continue
            seen.add(path)
            new_paths.append(path)

        results = await asyncio.gather(
            *(asyncio.to_thread(classify, path) for path in new_paths),
            return_exceptions=True,
        )

        added: list[FileDescriptor] = []
        failed_count = 0
        for path, result in zip(new_paths, results):
            if isinstance(result, FileDescriptor):
                added.append(result)
            elif isinstance(result, NotFoundError):
                failed_count += 1
                logger.warning(f"Skipping {path}: {result}")
            elif isinstance(result, Exception):
                failed_count += 1
                logger.warning(f"Skipping {path}: unexpected error {result!r}")
            else:
                raise result

        self._files.extend(added)
        logger.info(
            f"Added {len(added)} files, {duplicate_count} duplicates, "
            f"{failed_count} failed ({len(self._files)} staged)"
        )
        return AddResult(
            added=added,
            duplicate_count=duplicate_count,
            failed_count=failed_count,
            files=self.snapshot(),
        )

    def remove(self, path: str) -> list[FileDescriptor]:
        for i, f in enumerate(self._files):
            if f.path == path:
                del self._files[i]
                break
        return self.snapshot()

    def remove_by_id(self, file_id: str) -> list[FileDescriptor]:
        self._files = [f for f in self._files if f.id != file_id]
        return self.snapshot()

    def clear(self) -> None:
        self._files = []

    def group_by_category(self) -> dict[FileCategory, list[FileDescriptor]]:
        groups: dict[FileCategory, list[FileDescriptor]] = {}
        for f in self._files:
            groups.setdefault(f.category, []).append(f)
        return groups

    def stats(self) -> StackStats:
        by_category: dict[FileCategory, int] = {}
        for f in self._files:
            by_category[f.category] = by_category.get(f.category, 0) + 1
        return StackStats(
            total_files=len(self._files),
            total_size=sum(f.size for f in self._files),
            by_category=by_category,
        )
