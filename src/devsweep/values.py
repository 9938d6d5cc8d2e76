"""Immutable value objects: paths, sizes and cleanup outcomes."""

from __future__ import annotations

import ntpath
import posixpath
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from functools import total_ordering
from pathlib import Path
from types import ModuleType

from .errors import DomainError
from .result import Result

MAX_PATH_LENGTH = 260

_BYTES_PER_KILOBYTE = Decimal(1024)
_KILOBYTE = 1024
_MEGABYTE = _KILOBYTE * 1024
_GIGABYTE = _MEGABYTE * 1024


def _path_module(raw: str) -> ModuleType:
    # Windows-style paths (drive letters, backslashes) split on both separators
    if "\\" in raw or (len(raw) > 1 and raw[1] == ":"):
        return ntpath
    return posixpath


@dataclass(frozen=True)
class FilePath:
    """A validated, bounded-length filesystem location."""

    value: str

    @classmethod
    def create(cls, raw: str | Path | None) -> Result[FilePath]:
        if raw is None:
            return Result.failure(DomainError.validation("File path cannot be empty"))
        text = str(raw)
        if not text.strip():
            return Result.failure(DomainError.validation("File path cannot be empty"))
        if len(text) > MAX_PATH_LENGTH:
            return Result.failure(
                DomainError.validation(f"File path exceeds maximum length of {MAX_PATH_LENGTH} characters")
            )
        return Result.success(cls(text))

    def file_name(self) -> str:
        return _path_module(self.value).basename(self.value)

    def extension(self) -> str:
        """Extension including the leading dot, or an empty string."""
        return _path_module(self.value).splitext(self.file_name())[1]

    def directory_path(self) -> str:
        return _path_module(self.value).dirname(self.value)

    def join(self, *parts: str) -> Result[FilePath]:
        """Append path segments, re-validating the combined length."""
        return FilePath.create(_path_module(self.value).join(self.value, *parts))

    def as_path(self) -> Path:
        return Path(self.value)

    def __str__(self) -> str:
        return self.value


@total_ordering
@dataclass(frozen=True)
class FileSize:
    """A non-negative byte count."""

    bytes: int

    @classmethod
    def create(cls, byte_count: int) -> Result[FileSize]:
        if byte_count < 0:
            return Result.failure(DomainError.validation("File size cannot be negative"))
        return Result.success(cls(int(byte_count)))

    @classmethod
    def zero(cls) -> FileSize:
        return cls(0)

    def in_kilobytes(self) -> Decimal:
        return Decimal(self.bytes) / _BYTES_PER_KILOBYTE

    def in_megabytes(self) -> Decimal:
        return Decimal(self.bytes) / (_BYTES_PER_KILOBYTE**2)

    def in_gigabytes(self) -> Decimal:
        return Decimal(self.bytes) / (_BYTES_PER_KILOBYTE**3)

    def add(self, other: FileSize) -> FileSize:
        return FileSize(self.bytes + other.bytes)

    def __add__(self, other: FileSize) -> FileSize:
        if not isinstance(other, FileSize):
            return NotImplemented
        return self.add(other)

    def __lt__(self, other: FileSize) -> bool:
        if not isinstance(other, FileSize):
            return NotImplemented
        return self.bytes < other.bytes

    def __str__(self) -> str:
        if self.bytes < _KILOBYTE:
            return f"{self.bytes} B"
        if self.bytes < _MEGABYTE:
            return f"{self.in_kilobytes():.2f} KB"
        if self.bytes < _GIGABYTE:
            return f"{self.in_megabytes():.2f} MB"
        return f"{self.in_gigabytes():.2f} GB"


@dataclass(frozen=True)
class CleanupResult:
    """Accumulated outcome of deleting a set of items.

    Combining is associative and ``CleanupResult.empty()`` is its identity,
    so per-item results can be folded in any grouping.
    """

    total_files_deleted: int = 0
    total_space_freed: FileSize = field(default_factory=FileSize.zero)
    error_messages: tuple[str, ...] = ()

    @classmethod
    def create(
        cls,
        files_deleted: int,
        bytes_freed: FileSize,
        errors: Iterable[str] = (),
    ) -> Result[CleanupResult]:
        if files_deleted < 0:
            return Result.failure(DomainError.validation("Files deleted cannot be negative"))
        return Result.success(cls(files_deleted, bytes_freed, tuple(errors)))

    @classmethod
    def empty(cls) -> CleanupResult:
        return cls()

    @classmethod
    def failed(cls, message: str) -> CleanupResult:
        """A result recording a single error and no deletions."""
        return cls(error_messages=(message,))

    @classmethod
    def combine_all(cls, results: Iterable[CleanupResult]) -> CleanupResult:
        combined = cls.empty()
        for result in results:
            combined = combined.combine(result)
        return combined

    def has_errors(self) -> bool:
        return bool(self.error_messages)

    def combine(self, other: CleanupResult) -> CleanupResult:
        return CleanupResult(
            self.total_files_deleted + other.total_files_deleted,
            self.total_space_freed.add(other.total_space_freed),
            self.error_messages + other.error_messages,
        )
