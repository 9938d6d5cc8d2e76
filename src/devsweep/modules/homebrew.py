"""Homebrew download cache cleanup module.

Lets ``brew cleanup`` prune what it knows about first, then deletes the
cache entries that are still present.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..entities import CleanableItem
from ..models import ModuleAnalysis
from ..result import Result
from ..values import CleanupResult
from .base import UNIX_PLATFORMS, delete_items, first_running

if TYPE_CHECKING:
    from ..config import DevSweepConfig
    from ..entities import OperatingSystem
    from ..values import FilePath
    from .base import CleanupContext

logger = logging.getLogger(__name__)

_BREW_CLEANUP_ARGS = ("cleanup", "--prune=all", "-s")


class HomebrewModule:
    """Reclaims the Homebrew download cache."""

    MODULE_ENABLED: bool = True
    name: str = "homebrew"
    description: str = "Homebrew downloads and outdated bottles"
    is_destructive: bool = False

    def __init__(self, config: DevSweepConfig) -> None:
        self.config = config

    def is_available_on(self, operating_system: OperatingSystem) -> bool:
        return operating_system in UNIX_PLATFORMS

    async def analyze(self, context: CleanupContext) -> Result[ModuleAnalysis]:
        file_system = context.file_system
        base = context.environment_provider.homebrew_cache_path()

        if not file_system.directory_exists(base):
            return Result.success(ModuleAnalysis.empty(self.name))

        directories, files = await asyncio.gather(
            file_system.find_directories(base, "*"),
            file_system.find_files(base, "*"),
        )
        if directories.is_failure:
            return Result.failure(directories.error)
        if files.is_failure:
            return Result.failure(files.error)

        running = first_running(context, ("brew",))
        items: list[CleanableItem] = []

        for path in sorted([*directories.value, *files.value], key=str):
            size = file_system.size(path)
            if size.is_failure:
                return Result.failure(size.error)
            if running:
                items.append(CleanableItem.unsafe(path, size.value, self.name, "brew is running"))
            else:
                items.append(CleanableItem.safe(path, size.value, self.name, "Homebrew download cache"))

        return ModuleAnalysis.create(self.name, items)

    async def clean(self, context: CleanupContext, items: Sequence[CleanableItem]) -> Result[CleanupResult]:
        if not items or not context.command_runner.is_command_available("brew"):
            return Result.success(await delete_items(context, items))

        output = await context.command_runner.run("brew", _BREW_CLEANUP_ARGS)
        if output.is_failure:
            return Result.failure(output.error)

        pruned = CleanupResult.empty()
        if not output.value.is_successful():
            stderr = output.value.standard_error.strip()
            logger.warning("brew cleanup failed: %s", stderr)
            pruned = CleanupResult.failed(f"brew cleanup failed: {stderr}")

        # Entries brew already pruned count as deleted
        remaining: list[CleanableItem] = []
        for item in items:
            if self._exists(context, item.path):
                remaining.append(item)
            else:
                pruned = pruned.combine(CleanupResult(1, item.size))

        return Result.success(pruned.combine(await delete_items(context, remaining)))

    @staticmethod
    def _exists(context: CleanupContext, path: FilePath) -> bool:
        return context.file_system.directory_exists(path) or context.file_system.file_exists(path)
