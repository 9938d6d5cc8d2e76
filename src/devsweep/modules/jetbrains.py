"""JetBrains IDE cache cleanup module.

Each IDE keeps one cache directory per installed version, e.g.
``IntelliJIdea2023.3`` and ``IntelliJIdea2024.1``. Caches of outdated
versions are left behind after upgrades; the newest version of every
product is kept.
"""

from __future__ import annotations

import logging
import re
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

_VERSIONED_DIR = re.compile(r"^(?P<product>[A-Za-z][A-Za-z-]*?)(?P<version>\d{4}\.\d+(?:\.\d+)?)$")

_IDE_PROCESSES = (
    "idea",
    "pycharm",
    "webstorm",
    "phpstorm",
    "goland",
    "clion",
    "rider",
    "rubymine",
    "datagrip",
    "studio",
)


def parse_version_directory(name: str) -> tuple[str, tuple[int, ...]] | None:
    """Split ``PyCharm2024.1`` into ``("PyCharm", (2024, 1))``."""
    match = _VERSIONED_DIR.match(name)
    if not match:
        return None
    version = tuple(int(part) for part in match.group("version").split("."))
    return match.group("product"), version


class JetBrainsModule:
    """Reclaims caches of outdated JetBrains IDE versions."""

    MODULE_ENABLED: bool = True
    name: str = "jetbrains"
    description: str = "Caches and indexes of outdated JetBrains IDE versions"
    is_destructive: bool = False

    def __init__(self, config: DevSweepConfig) -> None:
        self.config = config

    def is_available_on(self, operating_system: OperatingSystem) -> bool:
        return operating_system in UNIX_PLATFORMS

    async def analyze(self, context: CleanupContext) -> Result[ModuleAnalysis]:
        file_system = context.file_system
        base = context.environment_provider.jetbrains_base_path()

        if not file_system.directory_exists(base):
            return Result.success(ModuleAnalysis.empty(self.name))

        found = await file_system.find_directories(base, "*")
        if found.is_failure:
            return Result.failure(found.error)

        products: dict[str, list[tuple[tuple[int, ...], FilePath]]] = {}
        for path in found.value:
            parsed = parse_version_directory(path.file_name())
            if parsed is None:
                logger.debug("Skipping unversioned JetBrains directory: %s", path)
                continue
            product, version = parsed
            products.setdefault(product, []).append((version, path))

        running = first_running(context, _IDE_PROCESSES)
        items: list[CleanableItem] = []

        for product in sorted(products):
            versions = sorted(products[product], key=lambda entry: entry[0])
            newest_version = versions[-1][0]
            for version, path in versions:
                size = file_system.size(path)
                if size.is_failure:
                    return Result.failure(size.error)

                label = ".".join(str(part) for part in version)
                if running:
                    reason = f"JetBrains IDE is running ({running})"
                    items.append(CleanableItem.unsafe(path, size.value, self.name, reason))
                elif version == newest_version:
                    reason = f"Most recent {product} installation ({label})"
                    items.append(CleanableItem.unsafe(path, size.value, self.name, reason))
                else:
                    reason = f"Outdated {product} {label} cache"
                    items.append(CleanableItem.safe(path, size.value, self.name, reason))

        return ModuleAnalysis.create(self.name, items)

    async def clean(self, context: CleanupContext, items: Sequence[CleanableItem]) -> Result[CleanupResult]:
        return Result.success(await delete_items(context, items))
