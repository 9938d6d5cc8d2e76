"""pip download/wheel cache cleanup module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..result import Result
from .base import CacheDirectoryModule

if TYPE_CHECKING:
    from ..ports import EnvironmentProvider
    from ..values import FilePath


class PythonCacheModule(CacheDirectoryModule):
    """Reclaims the pip HTTP and wheel cache."""

    MODULE_ENABLED: bool = True
    name: str = "python"
    description: str = "pip HTTP and wheel cache"
    guard_processes: tuple[str, ...] = ("pip", "pip3")
    safe_reason: str = "pip cache, rebuilt on the next install"

    def cache_paths(self, environment: EnvironmentProvider) -> Result[list[FilePath]]:
        return Result.success([environment.python_cache_path()])
