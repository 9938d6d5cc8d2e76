"""Well-known developer cache locations for macOS and Linux."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from ..entities import OperatingSystem
from ..values import FilePath


class SystemEnvironment:
    """Resolves cache paths from the platform, honoring tool-specific env overrides.

    Args:
        operating_system: Platform to resolve for. Detected when None.
        home: Home directory. ``Path.home()`` when None.
        environ: Environment variables. ``os.environ`` when None.

    """

    def __init__(
        self,
        operating_system: OperatingSystem | None = None,
        home: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._os = operating_system or OperatingSystem.current()
        self._home = home or Path.home()
        self._environ = os.environ if environ is None else environ

    @property
    def current_os(self) -> OperatingSystem:
        return self._os

    @property
    def home_path(self) -> FilePath:
        return self._path(self._home)

    def jetbrains_base_path(self) -> FilePath:
        return self._path(self._cache_home() / "JetBrains")

    def docker_config_path(self) -> FilePath:
        if self._os is OperatingSystem.MACOS:
            return self._path(self._home / "Library/Containers/com.docker.docker")
        return self._path(self._home / ".docker")

    def maven_repository_path(self) -> FilePath:
        return self._path(self._home / ".m2" / "repository")

    def gradle_cache_path(self) -> FilePath:
        gradle_home = self._environ.get("GRADLE_USER_HOME")
        return self._path(Path(gradle_home) / "caches" if gradle_home else self._home / ".gradle" / "caches")

    def node_cache_path(self) -> FilePath:
        npm_cache = self._environ.get("npm_config_cache")
        return self._path(Path(npm_cache) / "_cacache" if npm_cache else self._home / ".npm" / "_cacache")

    def python_cache_path(self) -> FilePath:
        pip_cache = self._environ.get("PIP_CACHE_DIR")
        return self._path(Path(pip_cache) if pip_cache else self._cache_home() / "pip")

    def sdkman_path(self) -> FilePath:
        sdkman_dir = self._environ.get("SDKMAN_DIR")
        return self._path(Path(sdkman_dir) if sdkman_dir else self._home / ".sdkman")

    def homebrew_cache_path(self) -> FilePath:
        brew_cache = self._environ.get("HOMEBREW_CACHE")
        return self._path(Path(brew_cache) if brew_cache else self._cache_home() / "Homebrew")

    def system_temp_path(self) -> FilePath:
        return self._path(Path(tempfile.gettempdir()))

    def system_logs_path(self) -> FilePath:
        if self._os is OperatingSystem.MACOS:
            return self._path(self._home / "Library" / "Logs")
        state_home = self._environ.get("XDG_STATE_HOME")
        return self._path(Path(state_home) if state_home else self._home / ".local" / "state")

    def system_cache_path(self) -> FilePath:
        return self._path(self._cache_home())

    def _cache_home(self) -> Path:
        if self._os is OperatingSystem.MACOS:
            return self._home / "Library" / "Caches"
        xdg_cache = self._environ.get("XDG_CACHE_HOME")
        return Path(xdg_cache) if xdg_cache else self._home / ".cache"

    @staticmethod
    def _path(path: Path) -> FilePath:
        # Raises ResultAccessError for paths over the length limit
        return FilePath.create(path).value
