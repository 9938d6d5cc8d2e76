"""Aggregates exchanged between modules, use cases and the output layer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .entities import CleanableItem
from .errors import DomainError
from .result import Result
from .values import FileSize


@dataclass(frozen=True)
class ModuleAnalysis:
    """Every item one module found during a scan.

    Totals and counts are derived from ``items`` on demand, never stored.
    """

    module_name: str
    items: tuple[CleanableItem, ...] = ()

    @classmethod
    def create(cls, module_name: str, items: Sequence[CleanableItem] | None) -> Result[ModuleAnalysis]:
        if items is None:
            return Result.failure(DomainError.validation("items is required"))
        return Result.success(cls(module_name, tuple(items)))

    @classmethod
    def empty(cls, module_name: str) -> ModuleAnalysis:
        return cls(module_name)

    def total_size(self) -> FileSize:
        total = FileSize.zero()
        for item in self.items:
            total = total.add(item.size)
        return total

    def safe_items(self) -> list[CleanableItem]:
        return [item for item in self.items if item.is_safe_to_delete]

    def safe_item_count(self) -> int:
        return sum(1 for item in self.items if item.is_safe_to_delete)

    def unsafe_item_count(self) -> int:
        return sum(1 for item in self.items if not item.is_safe_to_delete)

    def item_count(self) -> int:
        return len(self.items)

    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class AnalysisReport:
    """All module analyses of one run, in the order they were requested."""

    analyses: tuple[ModuleAnalysis, ...] = ()

    @classmethod
    def create(cls, analyses: Sequence[ModuleAnalysis] | None) -> Result[AnalysisReport]:
        if analyses is None:
            return Result.failure(DomainError.validation("moduleAnalyses is required"))
        return Result.success(cls(tuple(analyses)))

    @classmethod
    def empty(cls) -> AnalysisReport:
        return cls()

    def total_size(self) -> FileSize:
        total = FileSize.zero()
        for analysis in self.analyses:
            total = total.add(analysis.total_size())
        return total

    def safe_size(self) -> FileSize:
        """Bytes that a cleanup of this report could reclaim."""
        total = FileSize.zero()
        for analysis in self.analyses:
            for item in analysis.safe_items():
                total = total.add(item.size)
        return total

    def total_item_count(self) -> int:
        return sum(analysis.item_count() for analysis in self.analyses)

    def module_count(self) -> int:
        return len(self.analyses)

    def is_empty(self) -> bool:
        return all(analysis.is_empty() for analysis in self.analyses)

    def analysis_for(self, module_name: str) -> Result[ModuleAnalysis]:
        for analysis in self.analyses:
            if analysis.module_name == module_name:
                return Result.success(analysis)
        return Result.failure(DomainError.not_found("ModuleAnalysis", module_name))


@dataclass(frozen=True)
class ModuleDescriptor:
    """Advertised metadata of a registered module."""

    name: str
    description: str
    is_destructive: bool

    @classmethod
    def create(cls, name: str, description: str | None, is_destructive: bool) -> Result[ModuleDescriptor]:
        if description is None or not description.strip():
            return Result.failure(DomainError.validation("Description cannot be null or whitespace"))
        return Result.success(cls(name, description, is_destructive))


@dataclass(frozen=True)
class CommandOutput:
    """Exit code and captured streams of an external command."""

    exit_code: int
    standard_output: str
    standard_error: str

    @classmethod
    def create(cls, exit_code: int, standard_output: str | None, standard_error: str | None) -> Result[CommandOutput]:
        if standard_output is None:
            return Result.failure(DomainError.validation("Standard output cannot be null"))
        if standard_error is None:
            return Result.failure(DomainError.validation("Standard error cannot be null"))
        return Result.success(cls(exit_code, standard_output, standard_error))

    @classmethod
    def failed(cls, error_message: str | None) -> Result[CommandOutput]:
        """Synthesized output for a command that could not be started."""
        if not error_message:
            return Result.failure(DomainError.validation("Error message cannot be null or empty"))
        return Result.success(cls(-1, "", error_message))

    def is_successful(self) -> bool:
        return self.exit_code == 0

    def has_output(self) -> bool:
        return bool(self.standard_output)
