"""Tests for the JetBrains IDE cache module."""

from __future__ import annotations

import pytest
from conftest import HOME, FakeFileSystem, FakeProcessManager

from devsweep.config import DevSweepConfig
from devsweep.modules.base import CleanupContext
from devsweep.modules.jetbrains import JetBrainsModule, parse_version_directory

BASE = f"{HOME}/.cache/JetBrains"


@pytest.fixture
def module(config: DevSweepConfig) -> JetBrainsModule:
    return JetBrainsModule(config)


@pytest.fixture
def installs(file_system: FakeFileSystem) -> FakeFileSystem:
    file_system.add_directory(BASE)
    for name, size_bytes in (
        ("IntelliJIdea2023.3", 300),
        ("IntelliJIdea2024.1", 400),
        ("IntelliJIdea2023.10", 350),
        ("PyCharm2024.1", 200),
        ("consentOptions", 1),
    ):
        file_system.add_directory(f"{BASE}/{name}", size_bytes)
    return file_system


class TestParseVersionDirectory:
    """Tests for splitting product and version out of directory names."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("PyCharm2024.1", ("PyCharm", (2024, 1))),
            ("PyCharmCE2023.2", ("PyCharmCE", (2023, 2))),
            ("IntelliJIdea2023.10", ("IntelliJIdea", (2023, 10))),
            ("GoLand2024.1.2", ("GoLand", (2024, 1, 2))),
            ("consentOptions", None),
            ("2024.1", None),
        ],
    )
    def test_parse(self, name: str, expected: tuple[str, tuple[int, ...]] | None) -> None:
        assert parse_version_directory(name) == expected


class TestJetBrainsModule:
    """Tests for outdated-version detection."""

    @pytest.mark.asyncio
    async def test_missing_base(self, module: JetBrainsModule, context: CleanupContext) -> None:
        assert (await module.analyze(context)).value.is_empty()

    @pytest.mark.asyncio
    async def test_keeps_newest_version_per_product(
        self,
        module: JetBrainsModule,
        context: CleanupContext,
        installs: FakeFileSystem,
    ) -> None:
        analysis = (await module.analyze(context)).value
        verdicts = {item.path.file_name(): item.is_safe_to_delete for item in analysis.items}

        assert verdicts == {
            "IntelliJIdea2023.3": True,
            "IntelliJIdea2023.10": True,
            "IntelliJIdea2024.1": False,
            "PyCharm2024.1": False,
        }
        assert analysis.total_size().bytes == 1250

    @pytest.mark.asyncio
    async def test_numeric_version_ordering(
        self,
        module: JetBrainsModule,
        context: CleanupContext,
        file_system: FakeFileSystem,
    ) -> None:
        file_system.add_directory(BASE)
        file_system.add_directory(f"{BASE}/WebStorm2023.9", 10)
        file_system.add_directory(f"{BASE}/WebStorm2023.10", 10)

        analysis = (await module.analyze(context)).value
        newest = [item for item in analysis.items if not item.is_safe_to_delete]

        assert [item.path.file_name() for item in newest] == ["WebStorm2023.10"]
        assert newest[0].reason == "Most recent WebStorm installation (2023.10)"

    @pytest.mark.asyncio
    async def test_running_ide_makes_everything_unsafe(
        self,
        module: JetBrainsModule,
        context: CleanupContext,
        installs: FakeFileSystem,
        process_manager: FakeProcessManager,
    ) -> None:
        process_manager.running.add("pycharm")

        analysis = (await module.analyze(context)).value

        assert analysis.safe_item_count() == 0
        assert all("pycharm" in item.reason for item in analysis.items)
