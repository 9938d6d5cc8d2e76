"""Application use cases: analyze, clean up and list cleanup modules."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .entities import CleanupSummary
from .models import AnalysisReport, ModuleAnalysis, ModuleDescriptor
from .result import Result, collect
from .values import CleanupResult

if TYPE_CHECKING:
    from .modules import CleanupContext, CleanupModule, ModuleRegistry

logger = logging.getLogger(__name__)


def _unique(names: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(names))


class AnalyzeUseCase:
    """Run the analyze phase of the selected modules and assemble a report.

    Every requested name is resolved before any module runs, so a single
    unknown name fails the run without scanning anything. The first module
    failure, in request order, aborts the run: a partial report is never
    returned as a complete one.
    """

    def __init__(self, registry: ModuleRegistry, context: CleanupContext, *, parallel: bool = True) -> None:
        self.registry = registry
        self.context = context
        self.parallel = parallel

    def resolve(self, module_names: Sequence[str]) -> Result[list[CleanupModule]]:
        """Look up modules by name and drop those unavailable on this platform."""
        resolved = collect(self.registry.for_name(name) for name in _unique(module_names))
        if resolved.is_failure:
            return resolved

        current_os = self.context.environment_provider.current_os
        available: list[CleanupModule] = []
        for module in resolved.value:
            if module.is_available_on(current_os):
                available.append(module)
                continue
            logger.info("Skipping %s: not available on %s", module.name, current_os.value)
            self.context.output_formatter.warning(f"Skipping {module.name}: not available on {current_os.value}")
        return Result.success(available)

    async def execute(self, module_names: Sequence[str]) -> Result[AnalysisReport]:
        resolved = self.resolve(module_names)
        if resolved.is_failure:
            return Result.failure(resolved.error)
        modules = resolved.value

        if self.parallel:
            analyses = await asyncio.gather(*(self._analyze(module) for module in modules))
        else:
            analyses = [await self._analyze(module) for module in modules]

        return collect(analyses).bind(AnalysisReport.create)

    async def _analyze(self, module: CleanupModule) -> Result[ModuleAnalysis]:
        logger.debug("Analyzing %s", module.name)
        analysis = await module.analyze(self.context)
        if analysis.is_failure:
            logger.error("Analysis of %s failed: %s", module.name, analysis.error)
        else:
            logger.debug(
                "%s: %d items, %s",
                module.name,
                analysis.value.item_count(),
                analysis.value.total_size(),
            )
        return analysis


class CleanupUseCase:
    """Analyze the selected modules, then delete their safe items.

    Destructive modules are confirmed through the context's user interaction
    before anything is deleted; declining is a normal outcome reported as a
    summary with an empty result. Modules are cleaned one after another.
    """

    def __init__(
        self,
        registry: ModuleRegistry,
        context: CleanupContext,
        *,
        parallel: bool = True,
        assume_yes: bool = False,
    ) -> None:
        self.registry = registry
        self.context = context
        self.assume_yes = assume_yes
        self.analyze = AnalyzeUseCase(registry, context, parallel=parallel)

    async def execute(self, module_names: Sequence[str]) -> Result[list[CleanupSummary]]:
        report = await self.analyze.execute(module_names)
        if report.is_failure:
            return Result.failure(report.error)
        return await self.execute_report(report.value)

    async def execute_report(self, report: AnalysisReport) -> Result[list[CleanupSummary]]:
        """Clean the modules of an already computed report.

        Every analysis is validated before the first deletion, so a report
        that cannot be summarized fails without touching the filesystem.
        """
        checked = collect(
            CleanupSummary.create(analysis.module_name, analysis.items, CleanupResult.empty())
            for analysis in report.analyses
        )
        if checked.is_failure:
            return Result.failure(checked.error)
        resolved = collect(self.registry.for_name(analysis.module_name) for analysis in report.analyses)
        if resolved.is_failure:
            return Result.failure(resolved.error)

        summaries: list[CleanupSummary] = []
        for analysis in report.analyses:
            summary = await self._clean_module(analysis)
            if summary.is_failure:
                return Result.failure(summary.error)
            summaries.append(summary.value)

        return Result.success(summaries)

    async def _clean_module(self, analysis: ModuleAnalysis) -> Result[CleanupSummary]:
        module_result = self.registry.for_name(analysis.module_name)
        if module_result.is_failure:
            return Result.failure(module_result.error)
        module = module_result.value

        safe_items = analysis.safe_items()
        if not safe_items:
            logger.info("%s: nothing safe to delete", module.name)
            return CleanupSummary.create(module.name, analysis.items, CleanupResult.empty())

        if module.is_destructive and not self.assume_yes:
            message = (
                f"{module.name}: delete {len(safe_items)} items "
                f"({_safe_size(analysis)})? This cannot be undone."
            )
            confirmed = await self.context.user_interaction.confirm(message, is_destructive=True)
            if not confirmed:
                logger.info("Cleanup of %s declined by user", module.name)
                self.context.output_formatter.info(f"Skipped {module.name}")
                return CleanupSummary.create(
                    module.name,
                    analysis.items,
                    CleanupResult.empty(),
                    was_confirmed=False,
                )

        self.context.output_formatter.section(f"Cleaning {module.name}")
        cleaned = await module.clean(self.context, safe_items)
        if cleaned.is_failure:
            logger.error("Cleanup of %s failed: %s", module.name, cleaned.error)
            return Result.failure(cleaned.error)

        result = cleaned.value
        for message in result.error_messages:
            self.context.output_formatter.warning(message)
        logger.info(
            "%s: deleted %d items, freed %s, %d errors",
            module.name,
            result.total_files_deleted,
            result.total_space_freed,
            len(result.error_messages),
        )
        return CleanupSummary.create(module.name, analysis.items, result)


def _safe_size(analysis: ModuleAnalysis) -> str:
    return str(ModuleAnalysis(analysis.module_name, tuple(analysis.safe_items())).total_size())


class ModuleDiscoveryUseCase:
    """List the registered modules as descriptors, sorted by name."""

    def __init__(self, registry: ModuleRegistry) -> None:
        self.registry = registry

    def available_modules(self) -> list[ModuleDescriptor]:
        descriptors: list[ModuleDescriptor] = []
        for module in sorted(self.registry.modules(), key=lambda m: m.name):
            descriptor = ModuleDescriptor.create(module.name, module.description, module.is_destructive)
            if descriptor.is_failure:
                logger.warning("Module %s has an invalid descriptor: %s", module.name, descriptor.error)
                continue
            descriptors.append(descriptor.value)
        return descriptors
