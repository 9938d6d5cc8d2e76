"""Cleanup module registry with auto-discovery."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import types
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ..errors import DomainError
from ..result import UNIT, Result, Unit
from .base import CleanupContext, CleanupModule

if TYPE_CHECKING:
    from ..config import DevSweepConfig

__all__ = ["CleanupContext", "CleanupModule", "ModuleRegistry", "discover_modules"]

logger = logging.getLogger(__name__)


class ModuleRegistry:
    """Name-keyed store of cleanup modules; re-registering a name replaces it."""

    def __init__(self) -> None:
        self._modules: dict[str, CleanupModule] = {}

    def register(self, module: CleanupModule | None) -> Result[Unit]:
        if module is None:
            return Result.failure(DomainError.validation("module is required"))
        if module.name in self._modules:
            logger.debug("Replacing registered module: %s", module.name)
        self._modules[module.name] = module
        return Result.success(UNIT)

    def for_name(self, name: str) -> Result[CleanupModule]:
        module = self._modules.get(name)
        if module is None:
            return Result.failure(DomainError.not_found("CleanupModule", name))
        return Result.success(module)

    def modules(self) -> list[CleanupModule]:
        return list(self._modules.values())

    def names(self) -> list[str]:
        return list(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def __iter__(self) -> Iterator[CleanupModule]:
        return iter(self._modules.values())

    def __contains__(self, name: object) -> bool:
        return name in self._modules


def discover_modules(config: DevSweepConfig) -> ModuleRegistry:
    """Discover, instantiate and register all enabled cleanup modules.

    Scans the modules package for classes with MODULE_ENABLED = True,
    instantiates them with the config, and leaves out names listed in
    ``config.modules_disabled``.
    """
    registry = ModuleRegistry()
    package = importlib.import_module(__package__ or "devsweep.modules")

    for _finder, module_name, _is_pkg in pkgutil.iter_modules(package.__path__):
        if module_name == "base":
            continue
        try:
            mod = importlib.import_module(f"{package.__name__}.{module_name}")
        except ImportError:
            logger.warning("Failed to import module: %s", module_name)
            continue

        for instance in _find_module_classes(mod, config):
            registry.register(instance)

    return registry


def _find_module_classes(mod: types.ModuleType, config: DevSweepConfig) -> list[CleanupModule]:
    """Instantiate all enabled CleanupModule classes defined in the given Python module."""
    found: list[CleanupModule] = []

    for attr_name in dir(mod):
        attr = getattr(mod, attr_name)
        if not (
            isinstance(attr, type)
            and getattr(attr, "MODULE_ENABLED", False) is True
            and attr.__module__ == mod.__name__
        ):
            continue

        try:
            instance = attr(config)
        except (TypeError, ValueError):
            logger.warning("Failed to instantiate module: %s", attr_name, exc_info=True)
            continue

        if instance.name in config.modules_disabled:
            logger.info("Module disabled by config: %s", instance.name)
            continue

        found.append(instance)
        logger.debug("Loaded module: %s", instance.name)

    return found
