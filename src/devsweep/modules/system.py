"""Stale temp and log file cleanup module."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from ..entities import CleanableItem
from ..models import ModuleAnalysis
from ..result import Result
from ..values import CleanupResult
from .base import UNIX_PLATFORMS, delete_items

if TYPE_CHECKING:
    from ..config import DevSweepConfig
    from ..entities import OperatingSystem
    from ..values import FilePath
    from .base import CleanupContext

logger = logging.getLogger(__name__)


class SystemModule:
    """Reclaims temp files and logs not modified for a configurable number of days.

    Recently modified files may still be held open by a running program and
    are reported as unsafe.
    """

    MODULE_ENABLED: bool = True
    name: str = "system"
    description: str = "Old files in the user temp and log directories"
    is_destructive: bool = True

    def __init__(self, config: DevSweepConfig) -> None:
        self.config = config

    def is_available_on(self, operating_system: OperatingSystem) -> bool:
        return operating_system in UNIX_PLATFORMS

    async def analyze(self, context: CleanupContext) -> Result[ModuleAnalysis]:
        environment = context.environment_provider
        searches = (
            (environment.system_temp_path(), "*"),
            (environment.system_logs_path(), "**/*.log"),
        )

        candidates: list[FilePath] = []
        for base, pattern in searches:
            if not context.file_system.directory_exists(base):
                logger.debug("%s: nothing at %s", self.name, base)
                continue
            found = await context.file_system.find_files(base, pattern)
            if found.is_failure:
                return Result.failure(found.error)
            candidates.extend(found.value)

        max_age = timedelta(days=self.config.system_file_age_days)
        now = datetime.now(UTC)
        items: list[CleanableItem] = []

        for path in candidates:
            # Candidates removed since the search are skipped
            size = context.file_system.size(path)
            if size.is_failure:
                logger.debug("Skipping %s: %s", path, size.error.message)
                continue
            modified = context.file_system.last_write_time(path)
            if modified.is_failure:
                logger.debug("Skipping %s: %s", path, modified.error.message)
                continue

            age = now - modified.value
            if age >= max_age:
                reason = f"Not modified in {age.days} days"
                items.append(CleanableItem.safe(path, size.value, self.name, reason))
            else:
                reason = f"Modified within the last {self.config.system_file_age_days} days"
                items.append(CleanableItem.unsafe(path, size.value, self.name, reason))

        return ModuleAnalysis.create(self.name, items)

    async def clean(self, context: CleanupContext, items: Sequence[CleanableItem]) -> Result[CleanupResult]:
        return Result.success(await delete_items(context, items))
