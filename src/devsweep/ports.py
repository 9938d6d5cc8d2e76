"""Capabilities through which modules and use cases reach the outside world.

Every coroutine here is cancelled through normal asyncio task cancellation;
implementations must let ``asyncio.CancelledError`` propagate.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .entities import CleanupSummary, OperatingSystem
    from .models import AnalysisReport, CommandOutput
    from .result import Result, Unit
    from .values import FilePath, FileSize


@runtime_checkable
class FileSystem(Protocol):
    """Filesystem queries and deletions."""

    def directory_exists(self, path: FilePath) -> bool: ...

    def file_exists(self, path: FilePath) -> bool: ...

    def is_directory_not_empty(self, path: FilePath) -> bool: ...

    def size(self, path: FilePath) -> Result[FileSize]:
        """Size of a file, or the recursive size of a directory."""
        ...

    def last_write_time(self, path: FilePath) -> Result[datetime]:
        """Modification time as an aware UTC datetime."""
        ...

    async def delete_directory(self, path: FilePath) -> Result[Unit]:
        """Recursively delete a directory."""
        ...

    async def delete_file(self, path: FilePath) -> Result[Unit]: ...

    async def find_directories(self, base_path: FilePath, pattern: str) -> Result[list[FilePath]]:
        """Directories under ``base_path`` matching a relative glob pattern (``**`` recurses)."""
        ...

    async def find_files(self, base_path: FilePath, pattern: str) -> Result[list[FilePath]]:
        """Files under ``base_path`` matching a relative glob pattern."""
        ...


@runtime_checkable
class ProcessManager(Protocol):
    def is_process_running(self, process_name: str) -> bool: ...

    async def kill_process(self, process_name: str) -> Result[bool]:
        """Terminate processes by name; ``True`` when one was found and killed."""
        ...


@runtime_checkable
class CommandRunner(Protocol):
    def is_command_available(self, command: str) -> bool: ...

    async def run(self, command: str, arguments: Sequence[str] = ()) -> Result[CommandOutput]:
        """Run a command to completion.

        A process that cannot be started yields a successful result holding
        ``CommandOutput.failed(...)`` rather than a failed result.
        """
        ...


@runtime_checkable
class EnvironmentProvider(Protocol):
    """Well-known locations of developer caches on the current machine."""

    @property
    def current_os(self) -> OperatingSystem: ...

    @property
    def home_path(self) -> FilePath: ...

    def jetbrains_base_path(self) -> FilePath: ...

    def docker_config_path(self) -> FilePath: ...

    def maven_repository_path(self) -> FilePath: ...

    def gradle_cache_path(self) -> FilePath: ...

    def node_cache_path(self) -> FilePath: ...

    def python_cache_path(self) -> FilePath: ...

    def sdkman_path(self) -> FilePath: ...

    def homebrew_cache_path(self) -> FilePath: ...

    def system_temp_path(self) -> FilePath: ...

    def system_logs_path(self) -> FilePath: ...

    def system_cache_path(self) -> FilePath: ...


@runtime_checkable
class UserInteraction(Protocol):
    async def confirm(self, message: str, is_destructive: bool) -> bool: ...


@runtime_checkable
class OutputFormatter(Protocol):
    """User-facing rendering of messages, reports and summaries."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def section(self, title: str) -> None: ...

    def display_banner(self, version: str) -> None: ...

    def display_analysis_report(self, report: AnalysisReport) -> None: ...

    def display_completion(self, summaries: Sequence[CleanupSummary]) -> None: ...
