"""Docker data cleanup module.

Targets Docker Desktop's VM disk image and logs plus the buildx cache.
Removing the VM disk deletes every local image, container and volume, so
this module is destructive and asks for confirmation.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..entities import CleanableItem
from ..models import ModuleAnalysis
from ..result import Result, collect
from ..values import CleanupResult
from .base import UNIX_PLATFORMS, delete_items, first_running

if TYPE_CHECKING:
    from ..config import DevSweepConfig
    from ..entities import OperatingSystem
    from .base import CleanupContext

logger = logging.getLogger(__name__)

# Relative to the Docker config path: Docker Desktop on macOS keeps its VM
# under Data/, on Linux under desktop/
_DATA_DIRECTORIES = ("Data/vms", "Data/log", "desktop/vms", "desktop/log", "buildx")

_DOCKER_PROCESSES = ("Docker", "Docker Desktop", "com.docker.backend", "dockerd")


class DockerModule:
    """Reclaims Docker images, containers, volumes and build cache on disk."""

    MODULE_ENABLED: bool = True
    name: str = "docker"
    description: str = "Docker Desktop disk image, logs and buildx cache (removes all images and volumes)"
    is_destructive: bool = True

    def __init__(self, config: DevSweepConfig) -> None:
        self.config = config

    def is_available_on(self, operating_system: OperatingSystem) -> bool:
        return operating_system in UNIX_PLATFORMS

    async def analyze(self, context: CleanupContext) -> Result[ModuleAnalysis]:
        file_system = context.file_system
        base = context.environment_provider.docker_config_path()

        if not file_system.directory_exists(base):
            logger.debug("Docker config path not found: %s", base)
            return Result.success(ModuleAnalysis.empty(self.name))

        paths = collect(base.join(relative) for relative in _DATA_DIRECTORIES)
        if paths.is_failure:
            return Result.failure(paths.error)

        running = first_running(context, _DOCKER_PROCESSES)
        items: list[CleanableItem] = []

        for path in paths.value:
            if not file_system.directory_exists(path):
                continue
            size = file_system.size(path)
            if size.is_failure:
                return Result.failure(size.error)

            if running:
                reason = f"Docker is running ({running}); quit Docker before cleaning"
                items.append(CleanableItem.unsafe(path, size.value, self.name, reason))
            else:
                reason = f"Docker data: {path.file_name()}"
                items.append(CleanableItem.safe(path, size.value, self.name, reason))

        return ModuleAnalysis.create(self.name, items)

    async def clean(self, context: CleanupContext, items: Sequence[CleanableItem]) -> Result[CleanupResult]:
        return Result.success(await delete_items(context, items))
