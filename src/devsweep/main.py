"""Main entry point for devsweep."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from . import __version__
from .adapters import RichOutputFormatter, create_system_context
from .config import DevSweepConfig
from .log import setup_logging
from .models import AnalysisReport
from .modules import ModuleRegistry, discover_modules
from .modules.base import CleanupContext
from .use_cases import AnalyzeUseCase, CleanupUseCase, ModuleDiscoveryUseCase

logger = logging.getLogger("devsweep")

MODULE_FLAGS = ("docker", "homebrew", "jetbrains", "maven", "gradle", "node", "python", "sdkman", "system")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments.

    """
    parser = argparse.ArgumentParser(
        prog="devsweep",
        description="Find and remove developer tool caches",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only analyze and report, never delete",
    )
    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Do not ask before cleaning destructive modules",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        dest="list_modules",
        help="List available modules and exit",
    )
    parser.add_argument(
        "--all",
        "-a",
        action="store_true",
        help="Select every available module",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug output",
    )

    modules_group = parser.add_argument_group("modules")
    for name in MODULE_FLAGS:
        modules_group.add_argument(
            f"--{name}",
            action="append_const",
            const=name,
            dest="modules",
            help=f"Clean {name} caches",
        )

    return parser.parse_args(argv)


def cmd_list(registry: ModuleRegistry) -> int:
    """Print the registered modules.

    Returns:
        Exit code.

    """
    console = Console()
    table = Table(title="Available modules")
    table.add_column("Module", style="cyan")
    table.add_column("Description")
    table.add_column("Destructive", justify="center")

    for descriptor in ModuleDiscoveryUseCase(registry).available_modules():
        table.add_row(
            descriptor.name,
            descriptor.description,
            "[red]yes[/red]" if descriptor.is_destructive else "no",
        )

    console.print(table)
    return EXIT_OK


async def cmd_sweep(
    registry: ModuleRegistry,
    context: CleanupContext,
    config: DevSweepConfig,
    module_names: list[str],
    *,
    dry_run: bool,
) -> int:
    """Analyze the selected modules and, unless dry-running, clean them.

    Returns:
        Exit code.

    """
    output = context.output_formatter
    analyze = AnalyzeUseCase(registry, context, parallel=config.parallel_analysis)

    output.section("Analysis")
    report = await analyze.execute(module_names)
    if report.is_failure:
        output.error(f"Analysis failed: {report.error.message}")
        return EXIT_FAILURE

    output.display_analysis_report(report.value)
    if dry_run:
        output.info("Dry run: nothing was deleted")
        return EXIT_OK

    # Modules that found nothing have nothing to summarize
    with_items = [analysis for analysis in report.value.analyses if not analysis.is_empty()]
    if not with_items:
        output.success("Nothing to clean")
        return EXIT_OK

    cleanup = CleanupUseCase(
        registry,
        context,
        parallel=config.parallel_analysis,
        assume_yes=config.assume_yes,
    )
    summaries = await cleanup.execute_report(AnalysisReport(tuple(with_items)))
    if summaries.is_failure:
        output.error(f"Cleanup failed: {summaries.error.message}")
        return EXIT_FAILURE

    output.display_completion(summaries.value)
    if any(summary.result.has_errors() for summary in summaries.value):
        output.warning("Some items could not be deleted")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code.

    """
    args = parse_args(argv)
    try:
        config = DevSweepConfig.load(args.config)
        if args.yes:
            config.assume_yes = True
        setup_logging(config, verbose=args.verbose)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    registry = discover_modules(config)

    if args.list_modules:
        return cmd_list(registry)

    module_names = registry.names() if args.all else list(args.modules or [])
    if not module_names:
        print("No module selected. Use --all, --list or a module flag such as --jetbrains.", file=sys.stderr)
        return EXIT_USAGE

    formatter = RichOutputFormatter(show_debug=args.verbose)
    context = create_system_context(formatter)
    if context.is_failure:
        formatter.error(str(context.error))
        return EXIT_FAILURE

    formatter.display_banner(__version__)
    try:
        return asyncio.run(cmd_sweep(registry, context.value, config, module_names, dry_run=args.dry_run))
    except KeyboardInterrupt:
        formatter.warning("Interrupted")
        return EXIT_FAILURE


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
