#!/usr/bin/env python3
"""
KUBETAGGER CLI
--------------
Command-line front end:
1. extract    - tag records from kubelet pod payloads (file or directory)
2. providers  - configs exposed by the environment provider
3. heuristic  - deployment names recovered from ReplicaSet names

Author: KubeTagger Team
Date: 2026-10-19
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kubetagger.cli.formatter import TagFormatter
from kubetagger.core.config import ConfigError, load_config
from kubetagger.core.engine import TaggingEngine
from kubetagger.output.exporter import TagExporter
from kubetagger.providers.env import EnvProvider
from kubetagger.tagging.owners import parse_deployment_for_replicaset

VERSION = "kubetagger v1.0.0"

# Global console for consistent styling across the application
console = Console()


class KubeTaggerCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    """

    def __init__(self, out: Optional[Console] = None, err: Optional[Console] = None):
        self.console = out or console
        # Notices go here when stdout carries a YAML/JSON document
        self.err_console = err or Console(stderr=True)
        self.formatter = TagFormatter(self.console)
        self.parser = argparse.ArgumentParser(
            prog="kubetagger",
            description="KubeTagger - Kubernetes pod & container tag extraction",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("--version", action="version", version=VERSION)
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        extract_parser = subparsers.add_parser("extract", help="Extract tags from kubelet pod payloads")
        extract_parser.add_argument("path", help="Path to a JSON/YAML pod list or a directory of them")
        extract_parser.add_argument("--config", help="YAML/JSON tagging configuration file")
        extract_parser.add_argument("--format", choices=["table", "yaml", "json"], default="table",
                                    help="Output format (default: table)")
        extract_parser.add_argument("--show-diagnostics", action="store_true",
                                    help="List tags skipped during extraction")

        providers_parser = subparsers.add_parser("providers", help="Show configs collected from the environment")
        providers_parser.add_argument("--config", help="YAML/JSON tagging configuration file")

        heuristic_parser = subparsers.add_parser("heuristic", help="Recover deployment names from ReplicaSet names")
        heuristic_parser.add_argument("names", nargs="+", help="ReplicaSet names")

    def print_header(self, subtitle: str):
        self.console.print(Panel.fit(
            f"[bold cyan]{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _run_extract(self, args: argparse.Namespace) -> int:
        input_path = Path(args.path)
        if not input_path.exists():
            self.console.print(f"[bold red]Error:[/bold red] Path '{args.path}' not found.")
            return 1

        try:
            config = load_config(args.config)
        except ConfigError as e:
            self.console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
            return 1

        engine = TaggingEngine(config)
        if input_path.is_dir():
            reports = engine.scan_directory(str(input_path))
        else:
            reports = [engine.extract_file(str(input_path))]

        if not reports:
            self.console.print("[bold yellow]⚠️  No pod payload files found.[/bold yellow]")
            return 0

        records = [record for r in reports for record in r["records"]]

        if args.format != "table":
            sys.stdout.write(TagExporter().export(records, args.format))
            notices = self.err_console
        else:
            notices = self.console
            self.print_header("Pod Tag Extraction")
            self.formatter.print_records(records)
            self.formatter.print_summary(engine.generate_summary(reports))

        for r in reports:
            if not r["success"]:
                notices.print(f"[bold red]Error in {r['file_path']}:[/bold red] {escape(r['error'])}")
            elif args.show_diagnostics:
                TagFormatter(notices).show_diagnostics(r["file_path"], r["diagnostics"])

        return 1 if any(not r["success"] for r in reports) else 0

    def _run_providers(self, args: argparse.Namespace) -> int:
        try:
            provider = EnvProvider(load_config(args.config))
        except ConfigError as e:
            self.console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
            return 1

        configs = provider.collect()
        if not configs:
            self.console.print(f"[dim]ℹ No configuration found by the {provider} provider.[/dim]")
            return 0

        table = Table(title="Collected Configs", header_style="bold magenta")
        table.add_column("Provider", style="cyan")
        table.add_column("Name")
        table.add_column("Logs Config", style="dim")
        for c in configs:
            table.add_row(c.provider, c.name, escape(c.logs_config.decode("utf-8")))
        self.console.print(table)
        return 0

    def _run_heuristic(self, args: argparse.Namespace) -> int:
        table = Table(title="ReplicaSet Owners", header_style="bold magenta")
        table.add_column("ReplicaSet", style="cyan")
        table.add_column("Deployment")
        for name in args.names:
            deployment = parse_deployment_for_replicaset(name)
            table.add_row(escape(name), escape(deployment) or "[dim]-[/dim]")
        self.console.print(table)
        return 0

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s %(name)s: %(message)s",
        )

        if args.command == "extract":
            return self._run_extract(args)
        if args.command == "providers":
            return self._run_providers(args)
        if args.command == "heuristic":
            return self._run_heuristic(args)

        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(KubeTaggerCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
