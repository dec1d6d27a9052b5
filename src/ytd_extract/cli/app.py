"""CLI application entry point and command routing for ytd-extract.

The CLI drives the same :class:`~ytd_extract.plugin.YtDlpExtractor` a
host media player installs, which makes it handy for checking what a
query resolves to before wiring the extractor into a player.

This module is the **sole error boundary** for the CLI.  It catches
:class:`~ytd_extract.exceptions.YtdExtractError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.
"""

from __future__ import annotations

import argparse
import asyncio
import shutil
import sys
from pathlib import Path

from rich.table import Table

from ytd_extract.cli import exit_codes
from ytd_extract.cli.console import console, output
from ytd_extract.core.models import ExtractorResult, QueryType, SearchContext
from ytd_extract.exceptions import YtdExtractError
from ytd_extract.plugin.extractor import PROTOCOLS, YtDlpExtractor
from ytd_extract.utils.config import ExtractorConfig
from ytd_extract.utils.logging import configure_logging
from ytd_extract.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``ytd-extract resolve <query>``          — resolve a query to tracks
    * ``ytd-extract related <url>``            — auto-play suggestions
    * ``ytd-extract fetch <url> -o <file>``    — extract audio to a file
    * ``ytd-extract doctor``                   — environment diagnostics
    """
    parser = argparse.ArgumentParser(
        prog="ytd-extract",
        description="Resolve YouTube queries and extract audio with yt-dlp.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging.",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    resolve = commands.add_parser("resolve", help="Resolve a URL or search text to tracks.")
    resolve.add_argument("query", nargs="+", help="YouTube URL or free-text search.")
    resolve.add_argument(
        "-t",
        "--type",
        default=QueryType.AUTO.value,
        choices=[member.value for member in QueryType],
        help="Declared query type (default: %(default)s).",
    )
    resolve.add_argument(
        "-p",
        "--protocol",
        default=None,
        choices=list(PROTOCOLS),
        help="Protocol hint; 'ytsearch' forces a search.",
    )

    related = commands.add_parser("related", help="List auto-play suggestions for a video.")
    related.add_argument("url", help="YouTube video URL.")

    fetch = commands.add_parser("fetch", help="Extract a video's audio to a file.")
    fetch.add_argument("url", help="YouTube video URL or search text.")
    fetch.add_argument("-o", "--output", required=True, type=Path, help="Destination file.")

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_result(result: ExtractorResult) -> None:
    title = "Tracks"
    if result.playlist is not None:
        title = f"{result.playlist.title} — {result.playlist.author.name}"

    table = Table(title=title, header_style="bold cyan", border_style="dim")
    table.add_column("#", justify="right")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Duration", justify="right")
    table.add_column("URL", overflow="fold")
    for index, track in enumerate(result.tracks, start=1):
        table.add_row(str(index), track.title, track.author, track.duration, track.url)
    output.print(table)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

async def _resolve(extractor: YtDlpExtractor, query: str, context: SearchContext) -> ExtractorResult:
    await extractor.activate()
    try:
        return await extractor.handle(query, context)
    finally:
        await extractor.deactivate()


async def _related(extractor: YtDlpExtractor, url: str) -> ExtractorResult:
    await extractor.activate()
    try:
        resolved = await extractor.handle(url, SearchContext(type=QueryType.AUTO))
        if not resolved:
            return resolved
        return await extractor.get_related_tracks(resolved.tracks[0], ())
    finally:
        await extractor.deactivate()


async def _fetch(extractor: YtDlpExtractor, url: str, destination: Path) -> int | None:
    await extractor.activate()
    try:
        resolved = await extractor.handle(url, SearchContext(type=QueryType.AUTO))
        if not resolved:
            return None
        track = resolved.tracks[0]
        console.print(f"[bold]Extracting…[/bold]  {track.title}")
        stream = await extractor.stream(track)
        with stream, destination.open("wb") as sink:
            shutil.copyfileobj(stream, sink)
        return destination.stat().st_size
    finally:
        await extractor.deactivate()


def _handle_resolve(args: argparse.Namespace, config: ExtractorConfig) -> int:
    context = SearchContext(type=args.type, protocol=args.protocol)
    result = asyncio.run(_resolve(YtDlpExtractor(config=config), " ".join(args.query), context))
    if not result:
        console.print("[yellow]No results.[/yellow]")
        return exit_codes.NO_RESULTS
    _render_result(result)
    return exit_codes.SUCCESS


def _handle_related(args: argparse.Namespace, config: ExtractorConfig) -> int:
    result = asyncio.run(_related(YtDlpExtractor(config=config), args.url))
    if not result:
        console.print("[yellow]No related tracks.[/yellow]")
        return exit_codes.NO_RESULTS
    _render_result(result)
    return exit_codes.SUCCESS


def _handle_fetch(args: argparse.Namespace, config: ExtractorConfig) -> int:
    written = asyncio.run(_fetch(YtDlpExtractor(config=config), args.url, args.output))
    if written is None:
        console.print("[yellow]Nothing to extract.[/yellow]")
        return exit_codes.NO_RESULTS
    console.print(f"[bold green]Saved[/bold green] {written} bytes to {args.output}")
    return exit_codes.SUCCESS


def _handle_doctor(config: ExtractorConfig) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from ytd_extract.cli.doctor import run_doctor

    return run_doctor(config)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ytd-extract CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    config = ExtractorConfig.from_env()
    configure_logging("DEBUG" if args.verbose else config.log_level)

    if args.command == "doctor":
        return _handle_doctor(config)
    if args.command == "resolve":
        return _handle_resolve(args, config)
    if args.command == "related":
        return _handle_related(args, config)
    return _handle_fetch(args, config)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except YtdExtractError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
