"""``ytd-extract doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can resolve and stream YouTube audio.

This module lives in the CLI layer — it may import from ``infra``
and ``utils``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from rich.table import Table

from ytd_extract.cli import exit_codes
from ytd_extract.cli.console import console
from ytd_extract.infra.ytdlp_binary import detect_binary, detect_ytdlp
from ytd_extract.utils.config import ExtractorConfig
from ytd_extract.version import __version__

OK = "[green]OK[/green]"
WARN = "[yellow]WARN[/yellow]"
FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _ytdlp_package_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp package row (catalog lookups)."""
    try:
        from yt_dlp.version import __version__ as ydl_ver

        return "yt-dlp", ydl_ver, OK
    except ImportError:
        pass

    # Fallback: yt-dlp installed but version submodule unavailable.
    try:
        import yt_dlp  # noqa: F401

        return "yt-dlp", "unknown", OK
    except ImportError:
        return "yt-dlp", "NOT INSTALLED", FAIL


def _ytdlp_executable_check(configured: str | None) -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp executable row (streaming)."""
    status = detect_ytdlp(configured)
    if status.found:
        return "yt-dlp exe", " ".join(status.command), OK
    return "yt-dlp exe", status.version_hint, FAIL


def _ffmpeg_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the ffmpeg row.

    m4a audio-only formats need no remuxing, so a missing ffmpeg is a
    warning only.
    """
    status = detect_binary("ffmpeg")
    if status.found:
        return "ffmpeg", status.command[0], OK
    return "ffmpeg", "not found", WARN


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, OK


def _ytd_extract_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the ytd-extract version row."""
    return "ytd-extract", __version__, OK


def collect_checks(config: ExtractorConfig) -> list[tuple[str, str, str]]:
    return [
        _ytd_extract_version_check(),
        _python_version_check(),
        _ytdlp_package_check(),
        _ytdlp_executable_check(config.ytdlp_binary),
        _ffmpeg_check(),
        _os_check(),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config: ExtractorConfig | None = None) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = collect_checks(config or ExtractorConfig.from_env())
    has_failure = any("FAIL" in status for _, _, status in checks)

    table = Table(
        title="ytd-extract doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        console.print("Install yt-dlp with:  [bold]pip install --upgrade yt-dlp[/bold]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
