"""Base protocol, context and shared helpers for cleanup modules."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..entities import CleanableItem, OperatingSystem
from ..errors import DomainError
from ..models import ModuleAnalysis
from ..result import Result
from ..values import CleanupResult, FilePath

if TYPE_CHECKING:
    from ..config import DevSweepConfig
    from ..ports import (
        CommandRunner,
        EnvironmentProvider,
        FileSystem,
        OutputFormatter,
        ProcessManager,
        UserInteraction,
    )

logger = logging.getLogger(__name__)

UNIX_PLATFORMS: frozenset[OperatingSystem] = frozenset({OperatingSystem.MACOS, OperatingSystem.LINUX})


@dataclass(frozen=True)
class CleanupContext:
    """The capabilities a module may use; its only channel to the outside world."""

    file_system: FileSystem
    process_manager: ProcessManager
    command_runner: CommandRunner
    environment_provider: EnvironmentProvider
    user_interaction: UserInteraction
    output_formatter: OutputFormatter

    @classmethod
    def create(
        cls,
        file_system: FileSystem | None,
        process_manager: ProcessManager | None,
        command_runner: CommandRunner | None,
        environment_provider: EnvironmentProvider | None,
        user_interaction: UserInteraction | None,
        output_formatter: OutputFormatter | None,
    ) -> Result[CleanupContext]:
        capabilities = {
            "file_system": file_system,
            "process_manager": process_manager,
            "command_runner": command_runner,
            "environment_provider": environment_provider,
            "user_interaction": user_interaction,
            "output_formatter": output_formatter,
        }
        for capability_name, capability in capabilities.items():
            if capability is None:
                return Result.failure(DomainError.validation(f"{capability_name} is required"))
        return Result.success(cls(**capabilities))  # type: ignore[arg-type]


@runtime_checkable
class CleanupModule(Protocol):
    """Interface every cache source implements."""

    MODULE_ENABLED: bool
    name: str
    description: str
    is_destructive: bool

    def is_available_on(self, operating_system: OperatingSystem) -> bool:
        """Whether this module can run on ``operating_system``.

        Callers check this before ``analyze``/``clean``; modules do not
        enforce it themselves.
        """
        ...

    async def analyze(self, context: CleanupContext) -> Result[ModuleAnalysis]:
        """Locate candidate paths and give each a safety verdict.

        Must not delete anything.
        """
        ...

    async def clean(self, context: CleanupContext, items: Sequence[CleanableItem]) -> Result[CleanupResult]:
        """Delete ``items``, recording per-item failures instead of stopping.

        Returns:
            Accumulated result; failed deletions appear in ``error_messages``.

        """
        ...


async def delete_item(context: CleanupContext, item: CleanableItem) -> CleanupResult:
    """Delete a single item, converting any failure into an error entry."""
    checked = item.mark_for_deletion()
    if checked.is_failure:
        return CleanupResult.failed(f"{item.path}: {checked.error.message}")

    file_system = context.file_system
    if file_system.directory_exists(item.path):
        deleted = await file_system.delete_directory(item.path)
    elif file_system.file_exists(item.path):
        deleted = await file_system.delete_file(item.path)
    else:
        return CleanupResult.failed(f"{item.path}: path no longer exists")

    if deleted.is_failure:
        logger.warning("Failed to delete %s: %s", item.path, deleted.error.message)
        return CleanupResult.failed(f"{item.path}: {deleted.error.message}")

    logger.debug("Deleted %s (%s)", item.path, item.size)
    return CleanupResult(1, item.size)


async def delete_items(context: CleanupContext, items: Sequence[CleanableItem]) -> CleanupResult:
    """Delete items one after another; a failure never stops the batch."""
    combined = CleanupResult.empty()
    for item in items:
        combined = combined.combine(await delete_item(context, item))
    return combined


def first_running(context: CleanupContext, process_names: Sequence[str]) -> str | None:
    """Name of the first running process out of ``process_names``, if any."""
    for process_name in process_names:
        if context.process_manager.is_process_running(process_name):
            return process_name
    return None


class CacheDirectoryModule:
    """Base for modules that reclaim a fixed set of cache directories.

    Subclasses set the metadata attributes and implement ``cache_paths``.
    Every existing, non-empty directory becomes one item; all of them are
    unsafe while one of ``guard_processes`` is running.
    """

    MODULE_ENABLED: bool = False
    name: str = ""
    description: str = ""
    is_destructive: bool = False
    platforms: frozenset[OperatingSystem] = UNIX_PLATFORMS
    guard_processes: tuple[str, ...] = ()
    safe_reason: str = "Regenerable cache"

    def __init__(self, config: DevSweepConfig) -> None:
        self.config = config

    def is_available_on(self, operating_system: OperatingSystem) -> bool:
        return operating_system in self.platforms

    def cache_paths(self, environment: EnvironmentProvider) -> Result[list[FilePath]]:
        raise NotImplementedError

    async def analyze(self, context: CleanupContext) -> Result[ModuleAnalysis]:
        file_system = context.file_system
        running = first_running(context, self.guard_processes)
        items: list[CleanableItem] = []

        paths = self.cache_paths(context.environment_provider)
        if paths.is_failure:
            return Result.failure(paths.error)

        for path in paths.value:
            if not file_system.directory_exists(path) or not file_system.is_directory_not_empty(path):
                logger.debug("%s: nothing at %s", self.name, path)
                continue

            size = file_system.size(path)
            if size.is_failure:
                return Result.failure(size.error)

            if running:
                items.append(CleanableItem.unsafe(path, size.value, self.name, f"{running} is running"))
            else:
                items.append(CleanableItem.safe(path, size.value, self.name, self.safe_reason))

        return ModuleAnalysis.create(self.name, items)

    async def clean(self, context: CleanupContext, items: Sequence[CleanableItem]) -> Result[CleanupResult]:
        return Result.success(await delete_items(context, items))
