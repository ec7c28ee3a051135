# src/pbxclean/cli/formatter.py
import difflib
from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table


class PbxFormatter:
    """
    Renders diffs, the per-file report table and the summary panel.
    Diffs go to console; the table and summary go to report_console so
    stdout stays limited to the completion notice.
    """

    def __init__(self, console: Console, report_console: Console = None):
        self.console = console
        self.report_console = report_console or console

    def display_diff(self, original_text: str, normalized_text: str, file_name: str):
        diff_list = list(difflib.unified_diff(
            original_text.splitlines(),
            normalized_text.splitlines(),
            fromfile=f"original/{file_name}",
            tofile=f"normalized/{file_name}",
            lineterm=""
        ))

        if not diff_list:
            self.console.print(f"[dim]ℹ Already normalized: {escape(file_name)}[/dim]")
            return

        syntax = Syntax("\n".join(diff_list), "diff", theme="monokai", line_numbers=True)
        self.console.print(Panel(syntax, title=f"Proposed changes: {file_name}", border_style="green"))

    def print_final_table(self, reports: List[Dict[str, Any]]):
        table = Table(title="PbxClean Report", show_header=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Versions Found")
        table.add_column("Kept", justify="right")
        table.add_column("Duplicates", justify="right")
        table.add_column("Status", style="bold")

        for r in reports:
            stats = r.get("stats", {})
            color = "green" if r["status"] == "NORMALIZED" else "yellow" if r["status"] == "PREVIEW" else "dim"
            table.add_row(
                escape(r["file_path"]),
                ", ".join(r.get("versions_found", [])) or "-",
                r.get("resolved_version") or "-",
                str(stats.get("duplicates_removed", 0)),
                f"[{color}]{r['status']}[/{color}]",
            )

        self.report_console.print(table)

    def print_summary(self, summary: Dict[str, Any]):
        self.report_console.print(Panel(
            f"Total Files:           {summary['total_files']}\n"
            f"Changed:               [green]{summary['changed']}[/green]\n"
            f"Written:               {summary['written_to_disk']}\n"
            f"Duplicates Removed:    {summary['duplicates_removed']}\n"
            f"Version Lines Dropped: {summary['version_lines_dropped']}\n"
            f"Backups Created:       {summary['backups_created']}",
            title="[bold white]Summary[/bold white]",
            border_style="dim"
        ))
