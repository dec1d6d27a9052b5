"""Infrastructure: locating the executables the extractor shells out to.

The stream provisioner runs yt-dlp as a separate process.  The command
is resolved in order:

1. An explicitly configured path (must exist or be on ``PATH``).
2. ``yt-dlp`` on ``PATH``.
3. ``<current interpreter> -m yt_dlp`` when the yt-dlp package is
   importable.

Rules
-----
* Detection via :func:`shutil.which` and :func:`importlib.util.find_spec`
  only — nothing is executed here.
* No permanent PATH modification and no automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import importlib.util
import platform
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from ytd_extract.exceptions import YtDlpNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BinaryStatus:
    """Result of an executable probe.

    Attributes
    ----------
    name : str
        Executable name that was probed (``"yt-dlp"``, ``"ffmpeg"``).
    found : bool
        Whether a usable command was located.
    command : tuple[str, ...]
        argv prefix that runs the tool; empty when not found.
    version_hint : str
        Human-readable status string (e.g. ``"found at …"`` or ``"not found"``).
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when it is already present.
    """

    name: str
    found: bool
    command: tuple[str, ...]
    version_hint: str
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_binary(name: str) -> BinaryStatus:
    """Probe ``PATH`` for *name*.

    Returns a :class:`BinaryStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)
    if result is not None:
        resolved = Path(result).resolve()
        return BinaryStatus(
            name=name,
            found=True,
            command=(str(resolved),),
            version_hint=f"found at {resolved}",
            install_commands=(),
        )
    return BinaryStatus(
        name=name,
        found=False,
        command=(),
        version_hint="not found",
        install_commands=_platform_install_commands(name),
    )


def detect_ytdlp(configured: str | None = None) -> BinaryStatus:
    """Resolve the yt-dlp command, honouring an explicit *configured* path."""
    if configured:
        candidate = Path(configured).expanduser()
        located = str(candidate) if candidate.is_file() else shutil.which(configured)
        if located is not None:
            return BinaryStatus(
                name="yt-dlp",
                found=True,
                command=(located,),
                version_hint=f"configured at {located}",
                install_commands=(),
            )
        return BinaryStatus(
            name="yt-dlp",
            found=False,
            command=(),
            version_hint=f"configured path {configured} not found",
            install_commands=_platform_install_commands("yt-dlp"),
        )

    status = detect_binary("yt-dlp")
    if status.found:
        return status

    if importlib.util.find_spec("yt_dlp") is not None:
        return BinaryStatus(
            name="yt-dlp",
            found=True,
            command=(sys.executable, "-m", "yt_dlp"),
            version_hint="python -m yt_dlp",
            install_commands=(),
        )
    return status


def require_ytdlp(configured: str | None = None) -> tuple[str, ...]:
    """Return the yt-dlp argv prefix or raise :class:`YtDlpNotFoundError`."""
    status = detect_ytdlp(configured)
    if not status.found:
        hint_lines: list[str] = []
        if status.install_commands:
            hint_lines.append("Install yt-dlp using one of:")
            hint_lines.extend(f"  {cmd}" for cmd in status.install_commands)
        raise YtDlpNotFoundError(
            f"yt-dlp executable unavailable ({status.version_hint}).",
            hint="\n".join(hint_lines) if hint_lines else None,
        )
    return status.command


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    if name == "yt-dlp":
        return ("pip install --upgrade yt-dlp",)
    system = platform.system().lower()
    if system == "windows":
        return (
            f"winget install {name}",
            f"choco install {name}",
        )
    if system == "linux":
        return (
            f"sudo apt install {name}",
            f"sudo dnf install {name}",
            f"sudo pacman -S {name}",
        )
    if system == "darwin":
        return (f"brew install {name}",)
    return (f"Please install {name} and make sure it is on PATH",)
