# src/kubetagger/cli/formatter.py
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kubetagger.core.models import TagInfo


class TagFormatter:
    """
    TagFormatter: renders tag records, diagnostics and batch summaries.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_records(self, records: List[TagInfo], title: str = "Tag Records"):
        """
        One row per entity; low and high cardinality tags in separate columns.
        """
        if not records:
            self.console.print("[dim]ℹ No entities found.[/dim]")
            return

        table = Table(title=title, show_lines=True, header_style="bold magenta")
        table.add_column("Entity", style="cyan")
        table.add_column("Low Cardinality", style="green")
        table.add_column("High Cardinality", style="yellow")

        for record in records:
            table.add_row(
                escape(record.entity) or "[dim]<no id>[/dim]",
                escape("\n".join(record.low_card_tags)),
                escape("\n".join(record.high_card_tags)),
            )

        self.console.print(table)

    def show_diagnostics(self, file_path: str, diagnostics: List[str]):
        """Lists the tags that were skipped during extraction."""
        for entry in diagnostics:
            self.console.print(f"[bold cyan]ℹ  {file_path}:[/bold cyan] {escape(entry)}")

    def print_summary(self, summary: Dict[str, Any]):
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Payload Files:     {summary['total_files']}\n"
            f"Failed:            [red]{summary['failed']}[/red]\n"
            f"Pods:              {summary['pods']}\n"
            f"Pod Records:       [green]{summary['pod_records']}[/green]\n"
            f"Container Records: [green]{summary['container_records']}[/green]\n"
            f"Diagnostics:       {summary['diagnostics']}",
            border_style="dim"
        ))
