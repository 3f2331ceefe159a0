# src/admonfence/cli/formatter.py
import difflib
from typing import Any, Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Initialize the Rich console for high-quality terminal output
console = Console()


class AdmonFormatter:
    """
    AdmonFormatter: The visual heart of the CLI.
    Responsible for rendering Diffs, Fallback Warnings, and Execution Reports.
    """

    def __init__(self, output: Console = None):
        self.console = output or console

    def display_diff(self, original_text: str, converted_text: str, file_name: str):
        """
        Calculates and renders a colorized diff between the original
        MkDocs document and the converted Docusaurus output.
        """
        if not converted_text or not original_text:
            return

        diff_list = list(difflib.unified_diff(
            original_text.splitlines(),
            converted_text.splitlines(),
            fromfile=f"Original: {file_name}",
            tofile="Converted Version",
            lineterm=""
        ))

        if not diff_list:
            self.console.print(f"[dim]ℹ No admonitions needed conversion in {file_name}.[/dim]")
            return

        syntax = Syntax("\n".join(diff_list), "diff", theme="monokai", line_numbers=True)
        self.console.print(Panel(
            syntax,
            title=f"Proposed Conversion: {file_name}",
            border_style="green"
        ))

    def show_fallback_logs(self, file_name: str, tokens: List[str], default_type: str):
        """
        Explains which admonition types were not in the mapping table
        and fell back to the default container type.
        """
        for token in sorted(set(tokens)):
            self.console.print(
                f"[bold yellow]⚠  Unknown type:[/bold yellow] '{token}' in {file_name} "
                f"→ [cyan]{default_type}[/cyan]"
            )

    def print_final_table(self, reports: List[Dict[str, Any]]):
        """
        Builds the per-document table shown at the end of a run.
        """
        table = Table(title="AdmonFence Execution Report", show_lines=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Blocks", justify="right")
        table.add_column("Result", justify="center")

        for r in reports:
            if r.get('error'):
                self.console.print(f"[bold red]Error in {r['file_path']}:[/bold red] {r.get('error')}")
            if r.get('write_error'):
                self.console.print(f"[bold red]Write failed for {r['file_path']}:[/bold red] {r.get('write_error')}")
            if r.get('validation_error'):
                self.console.print(f"[yellow]{r['file_path']}:[/yellow] {r.get('validation_error')}")

            success = r.get('success', False)
            modified = r.get('modified', False)
            status_color = "red" if not success else "green" if modified else "dim"
            result_icon = "❌" if not success else "✅" if modified else "➖"

            table.add_row(
                str(r.get('file_path')),
                f"[{status_color}]{r.get('status', 'FAILED')}[/{status_color}]",
                str(r.get('blocks_converted', 0)),
                result_icon
            )

        self.console.print(table)

    def print_summary(self, summary: Dict[str, Any], dry_run: bool):
        self.console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Total Files:      {summary['total_files']}\n"
            f"Changed:          [green]{summary['changed']}[/green]\n"
            f"Written:          {summary['written_to_disk']}\n"
            f"Blocks Converted: {summary['blocks_converted']}\n"
            f"Failures:         [red]{summary['failed']}[/red]\n"
            f"Backups Created:  {summary['backups_created']}",
            border_style="dim"
        ))
        if summary.get('fallback_types'):
            self.console.print(
                f"[yellow]Unmapped types:[/yellow] {', '.join(summary['fallback_types'])}"
            )
        if dry_run:
            self.console.print(
                f"\n[bold cyan]Dry Run Mode:[/bold cyan] {summary['changed']} files would be updated. "
                f"Run 'admonfence convert' without --dry-run to apply changes."
            )
        else:
            self.console.print(f"\nProcess complete. {summary['written_to_disk']} files updated.")
