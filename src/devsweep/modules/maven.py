"""Maven local repository cleanup module.

Artifacts under ~/.m2/repository are downloaded again on the next build.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..result import Result
from .base import CacheDirectoryModule

if TYPE_CHECKING:
    from ..ports import EnvironmentProvider
    from ..values import FilePath


class MavenModule(CacheDirectoryModule):
    """Reclaims the Maven local artifact repository."""

    MODULE_ENABLED: bool = True
    name: str = "maven"
    description: str = "Maven local repository (~/.m2/repository), re-downloaded on demand"
    guard_processes: tuple[str, ...] = ("mvn", "mvnd")
    safe_reason: str = "Downloaded artifacts, fetched again by the next build"

    def cache_paths(self, environment: EnvironmentProvider) -> Result[list[FilePath]]:
        return Result.success([environment.maven_repository_path()])
