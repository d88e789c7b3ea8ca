#!/usr/bin/env python3
"""
bkmerge - Bookmark Merger

Merge browser bookmark exports into a single deduplicated bookmark file.
"""
import sys
import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from bkmerge.config import init_config, get_config
from bkmerge.errors import BkmergeError
from bkmerge.extractor import extract_file
from bkmerge.models import LinkEntry
from bkmerge.notify import ConsoleNotifier
from bkmerge.session import FileResult, MergeSession, confirmation_message

logger = logging.getLogger(__name__)


console = Console()


def output_entries(entries: List[LinkEntry], format: str = "table"):
    """Output extracted entries in the specified format."""
    if format == "json":
        print(json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False))
    elif format == "plain":
        for e in entries:
            print(f"{e.label}\t{e.url}")
    else:
        table = Table(title=f"Links ({len(entries)})")
        table.add_column("#", style="cyan")
        table.add_column("Label", style="green")
        table.add_column("URL", style="blue")

        for i, entry in enumerate(entries, 1):
            table.add_row(str(i), escape(entry.label[:50]), escape(entry.url[:80]))

        console.print(table)


def output_results(results: List[FileResult]):
    """Print a per-file ingest summary."""
    table = Table(title="Files")
    table.add_column("File", style="cyan")
    table.add_column("Status")
    table.add_column("Added", style="green", justify="right")
    table.add_column("Duplicates", style="yellow", justify="right")

    for r in results:
        status = "[green]ok[/green]" if r.ok else f"[red]{r.status.value}[/red]"
        table.add_row(escape(r.name), status, str(r.added), str(r.skipped))

    console.print(table)


def output_groups(groups: Dict[str, List[str]]):
    """Print each accumulated label with its bookmark count."""
    table = Table(title="Parsed Bookmarks")
    table.add_column("Label", style="green")
    table.add_column("Bookmarks", style="magenta", justify="right")

    for label, urls in groups.items():
        table.add_row(escape(label), str(len(urls)))

    console.print(table)


def cmd_merge(args):
    """Merge bookmark files into one."""
    config = get_config()
    notifier = ConsoleNotifier(console, quiet=args.quiet)

    with MergeSession(config, notifier) as session:
        ordered = False if args.unordered else None
        results = session.add_files([Path(f) for f in args.files], ordered=ordered)

        if not args.quiet:
            output_results(results)

        if session.store.label_count == 0:
            console.print("[yellow]No bookmarks found to merge[/yellow]")
            sys.exit(1)

        if not args.quiet:
            output_groups(session.store.groups)

        if args.yes or config.assume_yes:
            confirm = None
        else:
            confirm = lambda count: Confirm.ask(confirmation_message(count), console=console)

        path = session.merge(output=args.output_file, confirm=confirm)
        if path is None:
            console.print("[yellow]Merge cancelled[/yellow]")
            return

        if not args.quiet:
            console.print(
                f"[green]Merged {session.store.url_count} bookmarks into "
                f"{session.store.label_count} folders: {path}[/green]"
            )


def cmd_extract(args):
    """List the links found in a bookmark file."""
    config = get_config()
    strict = args.strict or config.strict_parsing

    entries = extract_file(Path(args.file), strict=strict, encoding=config.encoding)
    output_entries(entries, args.output)


def cmd_config(args):
    """Show or set configuration values."""
    config = get_config()

    if args.key is None:
        table = Table(title="Configuration")
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")
        for key, value in asdict(config).items():
            table.add_row(key, str(value))
        console.print(table)
    elif args.value is None:
        if not hasattr(config, args.key):
            raise BkmergeError(f"Unknown config key: {args.key}")
        console.print(f"{args.key} = {getattr(config, args.key)}")
    else:
        try:
            config.set(args.key, args.value)
        except KeyError as e:
            raise BkmergeError(e.args[0]) from e
        config.save()
        console.print(f"[green]Set {args.key} = {getattr(config, args.key)}[/green]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bkmerge",
        description="bkmerge - merge browser bookmark exports into one deduplicated file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Merge two exports (asks for confirmation)
  bkmerge merge chrome.html firefox.html

  # Merge without prompting, to a chosen file
  bkmerge merge *.html -y -f all-bookmarks.html

  # Inspect the links found in an export
  bkmerge extract chrome.html
  bkmerge -o json extract chrome.html | jq '.[].url'

  # Configuration
  bkmerge config
  bkmerge config output_file ~/bookmarks/merged.html

Configuration:
  Config file: ~/.config/bkmerge/config.toml or ./bkmerge.toml
  Environment: BKMERGE_OUTPUT_FILE, BKMERGE_STRICT_PARSING, ...
        """
    )

    # Global options
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-q", "--quiet", action="store_true", help="Minimal output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-o", "--output", choices=["table", "json", "plain"], default="table",
                        help="Output format for listings")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Commands")

    merge_parser = subparsers.add_parser("merge", help="Merge bookmark files")
    merge_parser.add_argument("files", nargs="+", help="Bookmark HTML files")
    merge_parser.add_argument("--output-file", "-f", dest="output_file",
                              help="Output file (default: merged-bookmarks.html)")
    merge_parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    merge_parser.add_argument("--strict", action="store_true",
                              help="Reject files that are not parseable markup")
    merge_parser.add_argument("--no-escape", action="store_true",
                              help="Write labels and URLs verbatim (legacy output)")
    merge_parser.add_argument("--unordered", action="store_true",
                              help="Ingest files as their reads complete")
    merge_parser.add_argument("--heading", help="Top-level heading of the merged file")
    merge_parser.set_defaults(func=cmd_merge)

    extract_parser = subparsers.add_parser("extract", help="List links in a bookmark file")
    extract_parser.add_argument("file", help="Bookmark HTML file")
    extract_parser.add_argument("--strict", action="store_true",
                                help="Fail on input that is not parseable markup")
    extract_parser.set_defaults(func=cmd_extract)

    config_parser = subparsers.add_parser("config", help="Show or set configuration")
    config_parser.add_argument("key", nargs="?", help="Config key")
    config_parser.add_argument("value", nargs="?", help="Config value (for set)")
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: List[str] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Initialize configuration with CLI overrides
    config_args = {}
    if getattr(args, "strict", False):
        config_args["strict_parsing"] = True
    if getattr(args, "no_escape", False):
        config_args["escape_output"] = False
    if getattr(args, "heading", None):
        config_args["heading"] = args.heading

    config = init_config(
        config_file=Path(args.config) if args.config else None,
        **config_args
    )

    level = "DEBUG" if args.verbose else config.log_level
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO),
                        format='%(levelname)s: %(message)s')
    if not config.color_output:
        console.no_color = True

    # Execute command
    try:
        args.func(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
