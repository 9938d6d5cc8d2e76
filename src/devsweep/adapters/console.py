"""Rich-based console output and confirmation prompts."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rich.console import Console
from rich.prompt import Confirm
from rich.rule import Rule
from rich.table import Table

if TYPE_CHECKING:
    from ..entities import CleanupSummary
    from ..models import AnalysisReport


class RichOutputFormatter:
    """Renders messages, analysis reports and completion summaries."""

    def __init__(self, console: Console | None = None, *, show_debug: bool = False) -> None:
        self.console = console or Console()
        self.show_debug = show_debug

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]i[/cyan] {message}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]![/yellow] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def debug(self, message: str) -> None:
        if self.show_debug:
            self.console.print(f"[dim]{message}[/dim]")

    def section(self, title: str) -> None:
        self.console.print(Rule(title, style="cyan"))

    def display_banner(self, version: str) -> None:
        self.console.print(f"[bold cyan]DevSweep[/bold cyan] [dim]v{version}[/dim]")

    def display_analysis_report(self, report: AnalysisReport) -> None:
        if report.is_empty():
            self.console.print("[green]Nothing to clean[/green]")
            return

        table = Table(title=f"Analysis: {report.total_item_count()} items, {report.total_size()}")
        table.add_column("Module", style="cyan")
        table.add_column("Path", style="dim", overflow="fold")
        table.add_column("Size", justify="right")
        table.add_column("Status")
        table.add_column("Reason", style="dim")

        for analysis in report.analyses:
            for item in analysis.items:
                status = "[green]safe[/green]" if item.is_safe_to_delete else "[red]in use[/red]"
                table.add_row(analysis.module_name, str(item.path), str(item.size), status, item.reason)

        self.console.print(table)
        self.console.print(f"Reclaimable: [bold green]{report.safe_size()}[/bold green]")

    def display_completion(self, summaries: Sequence[CleanupSummary]) -> None:
        table = Table(title="Cleanup complete")
        table.add_column("Module", style="cyan")
        table.add_column("Scanned", justify="right")
        table.add_column("Safe", justify="right")
        table.add_column("Deleted", justify="right")
        table.add_column("Freed", justify="right", style="green")
        table.add_column("Errors", justify="right")

        for summary in summaries:
            result = summary.result
            deleted = str(result.total_files_deleted) if summary.was_confirmed else "[yellow]skipped[/yellow]"
            errors = len(result.error_messages)
            table.add_row(
                summary.module_name,
                str(summary.total_items_scanned),
                str(summary.safe_items_found),
                deleted,
                str(result.total_space_freed),
                f"[red]{errors}[/red]" if errors else "0",
            )

        self.console.print(table)


class ConsoleInteraction:
    """Yes/no prompts on the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    async def confirm(self, message: str, is_destructive: bool) -> bool:
        prompt = f"[bold red]{message}[/bold red]" if is_destructive else message
        # Prompt blocks on stdin; keep the event loop free while waiting
        return await asyncio.to_thread(Confirm.ask, prompt, console=self.console, default=not is_destructive)
