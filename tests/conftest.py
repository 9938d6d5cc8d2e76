"""Shared in-memory test doubles for the cleanup context capabilities."""

from __future__ import annotations

import fnmatch
import posixpath
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from devsweep.config import DevSweepConfig
from devsweep.entities import CleanableItem, CleanupSummary, OperatingSystem
from devsweep.errors import DomainError
from devsweep.models import AnalysisReport, CommandOutput, ModuleAnalysis
from devsweep.modules import ModuleRegistry
from devsweep.modules.base import CleanupContext
from devsweep.result import UNIT, Result, Unit
from devsweep.values import CleanupResult, FilePath, FileSize

HOME = "/home/dev"


def fp(raw: str) -> FilePath:
    """Build a FilePath that is known to be valid."""
    return FilePath.create(raw).value


def size(byte_count: int) -> FileSize:
    return FileSize.create(byte_count).value


def _under(base: str, path: str) -> bool:
    return path.startswith(base.rstrip("/") + "/")


def _matches(base: str, path: str, pattern: str) -> bool:
    if not _under(base, path):
        return False
    relative = path[len(base.rstrip("/")) + 1 :]
    if pattern.startswith("**/"):
        return fnmatch.fnmatch(posixpath.basename(relative), pattern[3:])
    return "/" not in relative and fnmatch.fnmatch(relative, pattern)


class FakeFileSystem:
    """Directories and files held in dictionaries keyed by path string."""

    def __init__(self) -> None:
        self.directories: dict[str, int] = {}
        self.files: dict[str, tuple[int, datetime]] = {}
        self.failing_paths: set[str] = set()
        self.failing_searches: set[str] = set()
        self.deleted: list[str] = []

    def add_directory(self, path: str, size_bytes: int = 0) -> FakeFileSystem:
        self.directories[path] = size_bytes
        return self

    def add_file(self, path: str, size_bytes: int = 0, modified: datetime | None = None) -> FakeFileSystem:
        self.files[path] = (size_bytes, modified or datetime.now(UTC))
        parent = posixpath.dirname(path)
        self.directories.setdefault(parent, 0)
        return self

    def _children(self, path: str) -> list[str]:
        return [p for p in [*self.directories, *self.files] if _under(path, p)]

    def directory_exists(self, path: FilePath) -> bool:
        return str(path) in self.directories

    def file_exists(self, path: FilePath) -> bool:
        return str(path) in self.files

    def is_directory_not_empty(self, path: FilePath) -> bool:
        key = str(path)
        return self.directories.get(key, 0) > 0 or bool(self._children(key))

    def size(self, path: FilePath) -> Result[FileSize]:
        key = str(path)
        if key in self.files:
            return FileSize.create(self.files[key][0])
        if key in self.directories:
            nested = sum(self.files[p][0] for p in self.files if _under(key, p))
            return FileSize.create(self.directories[key] + nested)
        return Result.failure(DomainError.invalid_operation(f"Cannot read size of {key}"))

    def last_write_time(self, path: FilePath) -> Result[datetime]:
        key = str(path)
        if key not in self.files:
            return Result.failure(DomainError.invalid_operation(f"Cannot read modification time of {key}"))
        return Result.success(self.files[key][1])

    async def delete_directory(self, path: FilePath) -> Result[Unit]:
        key = str(path)
        if key in self.failing_paths:
            return Result.failure(DomainError.invalid_operation("Permission denied"))
        for child in self._children(key):
            self.directories.pop(child, None)
            self.files.pop(child, None)
        del self.directories[key]
        self.deleted.append(key)
        return Result.success(UNIT)

    async def delete_file(self, path: FilePath) -> Result[Unit]:
        key = str(path)
        if key in self.failing_paths:
            return Result.failure(DomainError.invalid_operation("Permission denied"))
        del self.files[key]
        self.deleted.append(key)
        return Result.success(UNIT)

    async def find_directories(self, base_path: FilePath, pattern: str) -> Result[list[FilePath]]:
        return self._find(self.directories, base_path, pattern)

    async def find_files(self, base_path: FilePath, pattern: str) -> Result[list[FilePath]]:
        return self._find(self.files, base_path, pattern)

    def _find(self, entries: dict, base_path: FilePath, pattern: str) -> Result[list[FilePath]]:
        base = str(base_path)
        if base in self.failing_searches:
            return Result.failure(DomainError.invalid_operation(f"Cannot scan {base}"))
        return Result.success([fp(p) for p in sorted(entries) if _matches(base, p, pattern)])


class FakeProcessManager:
    def __init__(self, running: Sequence[str] = ()) -> None:
        self.running = set(running)
        self.killed: list[str] = []

    def is_process_running(self, process_name: str) -> bool:
        return process_name in self.running

    async def kill_process(self, process_name: str) -> Result[bool]:
        if process_name not in self.running:
            return Result.success(False)
        self.running.discard(process_name)
        self.killed.append(process_name)
        return Result.success(True)


class FakeCommandRunner:
    def __init__(self, available: Sequence[str] = ()) -> None:
        self.available = set(available)
        self.outputs: dict[str, CommandOutput] = {}
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def is_command_available(self, command: str) -> bool:
        return command in self.available

    async def run(self, command: str, arguments: Sequence[str] = ()) -> Result[CommandOutput]:
        self.calls.append((command, tuple(arguments)))
        if command not in self.available:
            return CommandOutput.failed(f"{command}: command not found")
        return Result.success(self.outputs.get(command, CommandOutput(0, "", "")))


class FakeEnvironment:
    """Cache locations rooted at ``/home/dev``."""

    def __init__(self, operating_system: OperatingSystem = OperatingSystem.MACOS) -> None:
        self._os = operating_system

    @property
    def current_os(self) -> OperatingSystem:
        return self._os

    @property
    def home_path(self) -> FilePath:
        return fp(HOME)

    def jetbrains_base_path(self) -> FilePath:
        return fp(f"{HOME}/.cache/JetBrains")

    def docker_config_path(self) -> FilePath:
        return fp(f"{HOME}/.docker")

    def maven_repository_path(self) -> FilePath:
        return fp(f"{HOME}/.m2/repository")

    def gradle_cache_path(self) -> FilePath:
        return fp(f"{HOME}/.gradle/caches")

    def node_cache_path(self) -> FilePath:
        return fp(f"{HOME}/.npm/_cacache")

    def python_cache_path(self) -> FilePath:
        return fp(f"{HOME}/.cache/pip")

    def sdkman_path(self) -> FilePath:
        return fp(f"{HOME}/.sdkman")

    def homebrew_cache_path(self) -> FilePath:
        return fp(f"{HOME}/.cache/Homebrew")

    def system_temp_path(self) -> FilePath:
        return fp("/tmp/dev")

    def system_logs_path(self) -> FilePath:
        return fp(f"{HOME}/.local/state")

    def system_cache_path(self) -> FilePath:
        return fp(f"{HOME}/.cache")


class FakeUserInteraction:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.prompts: list[tuple[str, bool]] = []

    async def confirm(self, message: str, is_destructive: bool) -> bool:
        self.prompts.append((message, is_destructive))
        return self.answer


class RecordingFormatter:
    """Output formatter that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []
        self.reports: list[AnalysisReport] = []
        self.completions: list[list[CleanupSummary]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def section(self, title: str) -> None:
        self.messages.append(("section", title))

    def display_banner(self, version: str) -> None:
        self.messages.append(("banner", version))

    def display_analysis_report(self, report: AnalysisReport) -> None:
        self.reports.append(report)

    def display_completion(self, summaries: Sequence[CleanupSummary]) -> None:
        self.completions.append(list(summaries))


@dataclass
class StubModule:
    """Cleanup module returning canned analyses and counting clean calls."""

    name: str
    items: list[CleanableItem] = field(default_factory=list)
    description: str = "Stub cache"
    is_destructive: bool = False
    platforms: frozenset[OperatingSystem] = frozenset(OperatingSystem)
    analysis_error: DomainError | None = None
    clean_error: DomainError | None = None
    MODULE_ENABLED: bool = False
    analyze_calls: int = 0
    cleaned: list[list[CleanableItem]] = field(default_factory=list)

    def is_available_on(self, operating_system: OperatingSystem) -> bool:
        return operating_system in self.platforms

    async def analyze(self, context: CleanupContext) -> Result[ModuleAnalysis]:
        self.analyze_calls += 1
        if self.analysis_error is not None:
            return Result.failure(self.analysis_error)
        return ModuleAnalysis.create(self.name, self.items)

    async def clean(self, context: CleanupContext, items: Sequence[CleanableItem]) -> Result[CleanupResult]:
        self.cleaned.append(list(items))
        if self.clean_error is not None:
            return Result.failure(self.clean_error)
        return CleanupResult.create(len(items), sum((item.size for item in items), FileSize.zero()))


def safe_item(path: str, size_bytes: int = 1024, module_name: str = "stub") -> CleanableItem:
    return CleanableItem.safe(fp(path), size(size_bytes), module_name, "Regenerable cache")


def unsafe_item(path: str, size_bytes: int = 1024, module_name: str = "stub") -> CleanableItem:
    return CleanableItem.unsafe(fp(path), size(size_bytes), module_name, "Currently in use")


@pytest.fixture
def config() -> DevSweepConfig:
    """Create the default test configuration."""
    return DevSweepConfig()


@pytest.fixture
def file_system() -> FakeFileSystem:
    return FakeFileSystem()


@pytest.fixture
def process_manager() -> FakeProcessManager:
    return FakeProcessManager()


@pytest.fixture
def command_runner() -> FakeCommandRunner:
    return FakeCommandRunner()


@pytest.fixture
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def user_interaction() -> FakeUserInteraction:
    return FakeUserInteraction()


@pytest.fixture
def formatter() -> RecordingFormatter:
    return RecordingFormatter()


@pytest.fixture
def context(
    file_system: FakeFileSystem,
    process_manager: FakeProcessManager,
    command_runner: FakeCommandRunner,
    environment: FakeEnvironment,
    user_interaction: FakeUserInteraction,
    formatter: RecordingFormatter,
) -> CleanupContext:
    """Create a cleanup context wired to the in-memory fakes."""
    return CleanupContext.create(
        file_system,
        process_manager,
        command_runner,
        environment,
        user_interaction,
        formatter,
    ).value


@pytest.fixture
def registry() -> ModuleRegistry:
    return ModuleRegistry()
