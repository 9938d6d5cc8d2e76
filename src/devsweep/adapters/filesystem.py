"""Local filesystem adapter backed by pathlib and shutil."""

from __future__ import annotations

import asyncio
import logging
import shutil
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from ..errors import DomainError
from ..result import UNIT, Result, Unit
from ..values import FilePath, FileSize

logger = logging.getLogger(__name__)


def _tree_size(path: Path) -> int:
    """Total size of regular files under ``path``, skipping unreadable entries."""
    stat = path.stat()
    if not path.is_dir():
        return stat.st_size

    total = 0
    for entry in path.rglob("*"):
        try:
            if entry.is_file() and not entry.is_symlink():
                total += entry.stat().st_size
        except OSError:
            logger.debug("Cannot stat: %s", entry)
    return total


class LocalFileSystem:
    """Filesystem capability for the machine devsweep runs on.

    Searches and recursive deletes run in a worker thread. ``size`` walks
    the tree on the calling thread, so concurrent analyses only overlap
    while they wait on searches or deletions.
    """

    def directory_exists(self, path: FilePath) -> bool:
        return path.as_path().is_dir()

    def file_exists(self, path: FilePath) -> bool:
        return path.as_path().is_file()

    def is_directory_not_empty(self, path: FilePath) -> bool:
        try:
            return any(path.as_path().iterdir())
        except OSError:
            return False

    def size(self, path: FilePath) -> Result[FileSize]:
        try:
            return FileSize.create(_tree_size(path.as_path()))
        except OSError as e:
            return Result.failure(DomainError.invalid_operation(f"Cannot read size of {path}: {e}"))

    def last_write_time(self, path: FilePath) -> Result[datetime]:
        try:
            modified = path.as_path().stat().st_mtime
        except OSError as e:
            return Result.failure(DomainError.invalid_operation(f"Cannot read modification time of {path}: {e}"))
        return Result.success(datetime.fromtimestamp(modified, tz=UTC))

    async def delete_directory(self, path: FilePath) -> Result[Unit]:
        try:
            await asyncio.to_thread(shutil.rmtree, path.as_path())
        except PermissionError as e:
            return Result.failure(DomainError.invalid_operation(f"Permission denied: {e}"))
        except OSError as e:
            return Result.failure(DomainError.invalid_operation(str(e)))
        return Result.success(UNIT)

    async def delete_file(self, path: FilePath) -> Result[Unit]:
        try:
            await asyncio.to_thread(path.as_path().unlink)
        except PermissionError as e:
            return Result.failure(DomainError.invalid_operation(f"Permission denied: {e}"))
        except OSError as e:
            return Result.failure(DomainError.invalid_operation(str(e)))
        return Result.success(UNIT)

    async def find_directories(self, base_path: FilePath, pattern: str) -> Result[list[FilePath]]:
        return await asyncio.to_thread(self._find, base_path, pattern, Path.is_dir)

    async def find_files(self, base_path: FilePath, pattern: str) -> Result[list[FilePath]]:
        return await asyncio.to_thread(self._find, base_path, pattern, Path.is_file)

    @staticmethod
    def _find(base_path: FilePath, pattern: str, keep: Callable[[Path], bool]) -> Result[list[FilePath]]:
        base = base_path.as_path()
        if not base.is_dir():
            return Result.failure(DomainError.not_found("Directory", str(base_path)))

        found: list[FilePath] = []
        try:
            for entry in sorted(base.glob(pattern)):
                if entry.is_symlink() or not keep(entry):
                    continue
                path = FilePath.create(entry)
                if path.is_failure:
                    logger.debug("Skipping %s: %s", entry, path.error.message)
                    continue
                found.append(path.value)
        except PermissionError:
            logger.warning("Permission denied scanning: %s", base)
        except OSError as e:
            return Result.failure(DomainError.invalid_operation(f"Cannot scan {base_path}: {e}"))
        return Result.success(found)
