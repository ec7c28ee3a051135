#!/usr/bin/env python3
"""
PBXCLEAN CLI
------------
Command-line front end for the normalization engine.

    pbxclean fix path/to/App.xcodeproj/project.pbxproj
    pbxclean fix . --resolve-version lowest --diff
    pbxclean check .          # exit 1 if anything would change

Only the completion notice and any requested --diff go to stdout; the header
and report are written to stderr.

Exit codes: 0 success, 1 check found changes, 2 fatal normalization error,
130 interrupted.

Author: PbxClean Team
Date: 2026-10-17
"""

import sys
import argparse
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from pbxclean.cli.formatter import PbxFormatter
from pbxclean.core.config import load_config
from pbxclean.core.engine import ProjectEngine
from pbxclean.core.errors import PbxCleanError
from pbxclean.core.models import ResolvePolicy

__version__ = "1.0.0"

EXIT_OK = 0
EXIT_CHANGES_PENDING = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130

console = Console()
err_console = Console(stderr=True)


class PbxCleanCLI:
    """
    Translates user commands into engine calls and renders the results.
    """

    def __init__(self, console: Console = console, err_console: Console = err_console):
        self.console = console
        self.err_console = err_console
        self.formatter = PbxFormatter(console, err_console)
        self.parser = argparse.ArgumentParser(
            prog="pbxclean",
            description="PbxClean - deterministic Xcode project.pbxproj normalizer",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"pbxclean v{__version__}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        fix_parser = subparsers.add_parser("fix", help="Sort, dedupe and resolve versions in place")
        self._add_common_args(fix_parser)
        fix_parser.add_argument("--dry-run", action="store_true", help="Preview results without writing")
        fix_parser.add_argument("--backup", action="store_true", help="Keep a .pbxclean.backup copy")

        check_parser = subparsers.add_parser("check", help="Exit 1 if any file is not normalized")
        self._add_common_args(check_parser)

    def _add_common_args(self, parser: argparse.ArgumentParser):
        parser.add_argument("path", nargs="?", help="project.pbxproj file or a directory to search")
        parser.add_argument("--pbx", dest="pbx", help=argparse.SUPPRESS)
        parser.add_argument(
            "--resolve-version", "--resolveVersion", dest="resolve_version",
            choices=[p.value for p in ResolvePolicy], default=None,
            help="Which CURRENT_PROJECT_VERSION to keep (default: highest)"
        )
        parser.add_argument("--diff", action="store_true", help="Show a unified diff of changes")
        parser.add_argument("--config", default=None, help="Settings file (default: ./.pbxclean.yaml)")
        parser.add_argument("-q", "--quiet", action="store_true", help="Suppress the header and report on stderr")

    def print_header(self, subtitle: str):
        self.err_console.print(Panel.fit(
            f"[bold cyan]PbxClean v{__version__}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def _run_engine(self, args: argparse.Namespace, is_fix_mode: bool) -> int:
        target = args.path or args.pbx
        if not target:
            self.parser.error("a project.pbxproj path is required")

        config = load_config(args.config)
        if getattr(args, "backup", False):
            config.create_backup = True
        policy = ResolvePolicy.parse(args.resolve_version) if args.resolve_version else None

        engine = ProjectEngine(config)
        try:
            targets = engine.discover(target)
        except FileNotFoundError:
            self.err_console.print(f"[bold red]Error:[/bold red] Path '{escape(target)}' not found.")
            return EXIT_FATAL

        if not targets:
            self.err_console.print("[bold yellow]No project.pbxproj files found.[/bold yellow]")
            return EXIT_OK

        dry_run = not is_fix_mode or args.dry_run
        reports = []
        for file_path in targets:
            report = engine.normalize_file(file_path, dry_run=dry_run, policy=policy)
            reports.append(report)
            if args.diff:
                self.formatter.display_diff(report["original_content"], report["normalized_content"], report["file_path"])

        if not args.quiet:
            self.formatter.print_final_table(reports)
            self.formatter.print_summary(engine.generate_summary(reports))

        if not is_fix_mode:
            pending = [r for r in reports if r["changed"]]
            for r in pending:
                self.err_console.print(f"[yellow]Not normalized:[/yellow] {escape(r['file_path'])}")
            return EXIT_CHANGES_PENDING if pending else EXIT_OK

        self.console.print("Done! 🧹")
        return EXIT_OK

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        if not args.command:
            self.parser.print_help()
            return EXIT_OK

        if not args.quiet:
            self.print_header("Normalize" if args.command == "fix" else "Check")

        try:
            return self._run_engine(args, is_fix_mode=args.command == "fix")
        except PbxCleanError as e:
            self.err_console.print(f"[bold red]Aborted:[/bold red] {escape(str(e))}")
            self.err_console.print("[dim]The file on disk was left unchanged.[/dim]")
            return EXIT_FATAL
        except OSError as e:
            self.err_console.print(f"[bold red]Write failed:[/bold red] {escape(str(e))}")
            return EXIT_FATAL


def main(argv: Optional[List[str]] = None):
    try:
        sys.exit(PbxCleanCLI().run(argv))
    except KeyboardInterrupt:
        err_console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    main()
