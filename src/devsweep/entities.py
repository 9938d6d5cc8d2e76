"""Domain entities: discovered cache artifacts and per-module cleanup outcomes."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from .errors import DomainError
from .result import Result
from .values import CleanupResult, FilePath, FileSize


class OperatingSystem(Enum):
    """Platforms a cleanup module may declare support for."""

    MACOS = "macos"
    LINUX = "linux"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    @classmethod
    def current(cls) -> OperatingSystem:
        if sys.platform == "darwin":
            return cls.MACOS
        if sys.platform.startswith("linux"):
            return cls.LINUX
        if sys.platform in ("win32", "cygwin"):
            return cls.WINDOWS
        return cls.UNKNOWN


@dataclass(frozen=True)
class CleanableItem:
    """A discovered cache artifact with its safety verdict.

    The safety flag and its reason always change together; transitions
    return a new item and leave the original untouched.
    """

    path: FilePath
    size: FileSize
    module_name: str
    is_safe_to_delete: bool
    reason: str

    @classmethod
    def safe(cls, path: FilePath, size: FileSize, module_name: str, reason: str) -> CleanableItem:
        return cls(path, size, module_name, True, reason)

    @classmethod
    def unsafe(cls, path: FilePath, size: FileSize, module_name: str, reason: str) -> CleanableItem:
        return cls(path, size, module_name, False, reason)

    def mark_for_deletion(self) -> Result[CleanableItem]:
        if not self.is_safe_to_delete:
            return Result.failure(DomainError.invalid_operation("Cannot mark unsafe item for deletion"))
        return Result.success(self)

    def mark_as_unsafe(self, new_reason: str) -> Result[CleanableItem]:
        if not self.is_safe_to_delete:
            return Result.failure(DomainError.invalid_operation("Item is already marked as unsafe"))
        return Result.success(replace(self, is_safe_to_delete=False, reason=new_reason))

    def mark_as_safe(self, new_reason: str) -> Result[CleanableItem]:
        if self.is_safe_to_delete:
            return Result.failure(DomainError.invalid_operation("Item is already marked as safe"))
        return Result.success(replace(self, is_safe_to_delete=True, reason=new_reason))


@dataclass(frozen=True)
class CleanupSummary:
    """Outcome of one module's cleanup run."""

    module_name: str
    total_items_scanned: int
    safe_items_found: int
    result: CleanupResult
    was_confirmed: bool = True

    @classmethod
    def create(
        cls,
        module_name: str,
        items: Sequence[CleanableItem] | None,
        result: CleanupResult,
        *,
        was_confirmed: bool = True,
    ) -> Result[CleanupSummary]:
        """Summarize a cleanup over ``items``.

        A summary must describe at least one scanned item: ``None`` is a
        validation error and an empty sequence an invalid operation.
        """
        if items is None:
            return Result.failure(DomainError.validation("items is required"))
        if len(items) == 0:
            return Result.failure(DomainError.invalid_operation("Cannot create summary with no items"))

        safe_count = sum(1 for item in items if item.is_safe_to_delete)
        return Result.success(cls(module_name, len(items), safe_count, result, was_confirmed))
