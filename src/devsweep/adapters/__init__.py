"""Default capability implementations for running on a real workstation."""

from __future__ import annotations

from ..modules.base import CleanupContext
from ..result import Result
from .command import SubprocessCommandRunner
from .console import ConsoleInteraction, RichOutputFormatter
from .environment import SystemEnvironment
from .filesystem import LocalFileSystem
from .process import SystemProcessManager

__all__ = [
    "ConsoleInteraction",
    "LocalFileSystem",
    "RichOutputFormatter",
    "SubprocessCommandRunner",
    "SystemEnvironment",
    "SystemProcessManager",
    "create_system_context",
]


def create_system_context(formatter: RichOutputFormatter | None = None) -> Result[CleanupContext]:
    """Bundle the default adapters into a cleanup context."""
    formatter = formatter or RichOutputFormatter()
    return CleanupContext.create(
        LocalFileSystem(),
        SystemProcessManager(),
        SubprocessCommandRunner(),
        SystemEnvironment(),
        ConsoleInteraction(formatter.console),
        formatter,
    )
