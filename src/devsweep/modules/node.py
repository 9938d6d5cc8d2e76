"""Node package manager cache cleanup module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..result import Result
from .base import CacheDirectoryModule

if TYPE_CHECKING:
    from ..ports import EnvironmentProvider
    from ..values import FilePath


class NodeModule(CacheDirectoryModule):
    MODULE_ENABLED: bool = True
    name: str = "node"
    description: str = "npm package cache, repopulated by the next install"
    guard_processes: tuple[str, ...] = ("npm", "yarn", "pnpm")
    safe_reason: str = "npm download cache"

    def cache_paths(self, environment: EnvironmentProvider) -> Result[list[FilePath]]:
        return Result.success([environment.node_cache_path()])
