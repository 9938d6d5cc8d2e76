"""SDKMAN! archive and temp cleanup module.

Only the downloaded archives and the temp directory are touched; installed
candidates stay in place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..result import Result, collect
from .base import CacheDirectoryModule

if TYPE_CHECKING:
    from ..ports import EnvironmentProvider
    from ..values import FilePath

_SUBDIRECTORIES = ("archives", "tmp")


class SdkmanModule(CacheDirectoryModule):
    MODULE_ENABLED: bool = True
    name: str = "sdkman"
    description: str = "SDKMAN! downloaded archives and temp files"
    guard_processes: tuple[str, ...] = ()
    safe_reason: str = "Downloaded SDK archives, installed candidates are kept"

    def cache_paths(self, environment: EnvironmentProvider) -> Result[list[FilePath]]:
        base = environment.sdkman_path()
        return collect(base.join(subdirectory) for subdirectory in _SUBDIRECTORIES)
