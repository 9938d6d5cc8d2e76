"""Gradle cache cleanup module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..result import Result
from .base import CacheDirectoryModule

if TYPE_CHECKING:
    from ..ports import EnvironmentProvider
    from ..values import FilePath


class GradleModule(CacheDirectoryModule):
    """Reclaims ~/.gradle/caches while no Gradle build is running."""

    MODULE_ENABLED: bool = True
    name: str = "gradle"
    description: str = "Gradle dependency and build caches (~/.gradle/caches)"
    guard_processes: tuple[str, ...] = ("gradle", "gradlew")
    safe_reason: str = "Gradle cache, rebuilt by the next build"

    def cache_paths(self, environment: EnvironmentProvider) -> Result[list[FilePath]]:
        return Result.success([environment.gradle_cache_path()])
