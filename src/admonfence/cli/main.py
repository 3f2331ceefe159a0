#!/usr/bin/env python3
"""
ADMONFENCE CLI
--------------
Orchestrates:
1. Subcommand Routing (scan/convert)
2. Safety Gates (Confirmation & Batch Protection)
3. Visual Diffing (--diff)
4. Progress Tracking & Summary

Author: AdmonFence Team
Date: 2026-10-18
"""

import sys
import argparse
from pathlib import Path
from typing import List, Dict, Any

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    BarColumn,
    TaskProgressColumn
)

from admonfence.cli.formatter import AdmonFormatter
from admonfence.config.loader import ConfigError, load_type_map
from admonfence.core.engine import ConversionEngine
from admonfence.core.locator import list_documents

# Global console for consistent styling across the application
console = Console()

__version__ = "1.0.0"


class AdmonFenceCLI:
    """
    CLI wrapper that translates user commands into Engine actions.
    Provides visual feedback, safety confirmations, and diffs.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="admonfence",
            description="AdmonFence - MkDocs admonitions to Docusaurus containers",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = AdmonFormatter(console)
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version=f"admonfence v{__version__}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        # 'convert' subcommand - rewrites documents in place
        convert_parser = subparsers.add_parser("convert", help="Convert admonitions in place")
        convert_parser.add_argument("path", help="Path to a Markdown file or directory")
        convert_parser.add_argument("--dry-run", action="store_true", help="Preview results without writing")
        convert_parser.add_argument("-y", "--yes", action="store_true", help="Auto-confirm single file")
        convert_parser.add_argument("--yes-all", action="store_true", help="Auto-confirm batch operations")
        convert_parser.add_argument("--force", action="store_true", help="Write even if fence validation fails")
        convert_parser.add_argument("--no-backup", action="store_true", help="Do not keep .admonfence.backup copies")
        self._add_common_args(convert_parser)

        # 'scan' subcommand - read-only preview
        scan_parser = subparsers.add_parser("scan", help="Report documents that would change (Read-Only)")
        scan_parser.add_argument("path", help="Path to scan")
        self._add_common_args(scan_parser)

    def _add_common_args(self, parser: argparse.ArgumentParser):
        parser.add_argument("--diff", action="store_true", help="Show line-by-line diff of proposed changes")
        parser.add_argument("--ext", default=".md", help="File extension filter (default: .md)")
        parser.add_argument("--mapping", help="YAML file extending the type mapping table")
        parser.add_argument("--default-type", help="Container type for unmapped admonitions (default: note)")

    def print_header(self, subtitle: str):
        """Renders the AdmonFence splash header with themed styling."""
        console.print(Panel.fit(
            f"[bold cyan]AdmonFence v{__version__}[/bold cyan]\n"
            "══════════════════════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _confirm_action(self, target_count: int, args: argparse.Namespace) -> bool:
        """Safety Gate logic: ensures the user wants to proceed with writes."""
        if args.dry_run:
            return True

        if target_count == 1:
            if args.yes or args.yes_all:
                return True
            choice = console.input("\n[bold yellow]Apply conversion to this file? (y/N): [/bold yellow]").lower()
            return choice == 'y'

        if target_count > 1:
            if args.yes_all:
                return True

            console.print(Panel(
                f"[bold red]⚠️  BATCH MODIFICATION DETECTED[/bold red]\n\n"
                f"Target Path: [white]{args.path}[/white]\n"
                f"File Count:  [bold cyan]{target_count} files[/bold cyan]\n",
                expand=False, border_style="red"
            ))
            user_input = console.input("[bold yellow]Type 'CONFIRM' to convert: [/bold yellow]")
            return user_input == "CONFIRM"

        return False

    def _read_for_diff(self, file_path: Path) -> str:
        # The engine reports unreadable files itself
        try:
            return file_path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError):
            return ""

    def _run_engine(self, args: argparse.Namespace, is_convert_mode: bool) -> int:
        """Main processing loop orchestration. Returns the process exit code."""
        input_path = Path(args.path).resolve()
        if not input_path.exists():
            console.print(f"[bold red]Error:[/bold red] Path '{args.path}' not found.")
            return 1

        try:
            type_map = load_type_map(args.mapping, args.default_type)
        except ConfigError as e:
            console.print(f"[bold red]CONFIG ERROR:[/bold red] {e}")
            return 1

        dry_run = args.dry_run if is_convert_mode else True
        if is_convert_mode and dry_run:
            console.print("[bold cyan]!!! DRY RUN MODE: No files will be changed !!![/bold cyan]")

        workspace = input_path if input_path.is_dir() else input_path.parent
        engine = ConversionEngine(
            str(workspace), type_map,
            backup=not getattr(args, 'no_backup', False)
        )

        if input_path.is_file():
            target_files = [input_path]
        else:
            target_files = list_documents(input_path, args.ext)

        if not target_files:
            console.print(f"\n[bold yellow]⚠️  No '{args.ext}' documents found.[/bold yellow]")
            return 0

        if is_convert_mode and not self._confirm_action(len(target_files), args):
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            return 1

        reports: List[Dict[str, Any]] = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console
        ) as progress:

            task_id = progress.add_task("Converting documents...", total=len(target_files))

            for file_path in target_files:
                rel_path = str(file_path.relative_to(workspace))
                old_content = self._read_for_diff(file_path) if args.diff else ""

                report = engine.convert_file(
                    rel_path,
                    dry_run=dry_run,
                    force_write=getattr(args, 'force', False)
                )
                reports.append(report)

                show_diff = args.diff and report.get('converted_content')
                if report.get('fallback_types') or show_diff:
                    progress.stop()
                    self.formatter.show_fallback_logs(rel_path, report.get('fallback_types', []), type_map.default)
                    if show_diff:
                        self.formatter.display_diff(old_content, report['converted_content'], rel_path)
                    progress.start()

                progress.update(task_id, advance=1, description=f"Checked: {file_path.name}")

        self.formatter.print_final_table(reports)
        summary = engine.generate_summary(reports)
        self.formatter.print_summary(summary, dry_run)
        return 1 if summary['failed'] else 0

    def run(self, argv: List[str] = None) -> int:
        """Primary routing entry point."""
        argv = sys.argv[1:] if argv is None else argv
        if not argv:
            self.print_header("Admonition Converter")
            self.parser.print_help()
            return 0

        args = self.parser.parse_args(argv)
        if args.command == "scan":
            self.print_header("Conversion Preview Scan")
            return self._run_engine(args, is_convert_mode=False)
        if args.command == "convert":
            self.print_header("Admonition Converter")
            return self._run_engine(args, is_convert_mode=True)

        self.parser.print_help()
        return 0


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(AdmonFenceCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
