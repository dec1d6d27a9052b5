"""yt-dlp subprocess backed implementation of :class:`~ytd_extract.core.protocols.AudioProvisioner`.

This module is the **only** place in the codebase that spawns the
yt-dlp executable.  Each call downloads audio into its own uniquely
named temporary file and hands back a :class:`TempAudioStream` that owns
the file from then on.

Known limitation: the download completes before any byte is readable;
there is no progressive delivery while yt-dlp is still running.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import tempfile
from pathlib import Path

from ytd_extract.core.url_classifier import canonicalize_url
from ytd_extract.exceptions import (
    ExtractionError,
    YtDlpNotFoundError,
    append_ytdlp_upgrade_suggestion,
)
from ytd_extract.infra.audio_stream import TempAudioStream
from ytd_extract.infra.ytdlp_binary import require_ytdlp

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_FORMAT: str = "bestaudio[ext=m4a]/m4a"
AUDIO_EXTENSION: str = "m4a"

# Characters of yt-dlp stderr kept in error messages.
_STDERR_TAIL: int = 400


class YtDlpStreamProvisioner:
    """Runs ``yt-dlp <url> -f <format> -o <tempfile>`` and streams the result.

    Parameters
    ----------
    command:
        argv prefix that launches yt-dlp.  Resolved lazily through
        :func:`~ytd_extract.infra.ytdlp_binary.require_ytdlp` when omitted.
    binary_path:
        Explicit executable used for lazy resolution.
    audio_format:
        yt-dlp ``-f`` selector.
    temp_dir:
        Directory for temporary audio files (system default when ``None``).
    """

    def __init__(
        self,
        *,
        command: tuple[str, ...] | None = None,
        binary_path: str | None = None,
        audio_format: str = DEFAULT_AUDIO_FORMAT,
        temp_dir: str | Path | None = None,
    ) -> None:
        self._command = command
        self._binary_path = binary_path
        self._audio_format = audio_format
        self._temp_dir = Path(temp_dir) if temp_dir is not None else None

    @property
    def command(self) -> tuple[str, ...]:
        if self._command is None:
            self._command = require_ytdlp(self._binary_path)
        return self._command

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    async def provision(self, url: str) -> TempAudioStream:
        """Download audio for *url* and return a stream over the file.

        Raises
        ------
        ExtractionError
            When yt-dlp cannot be located or started, or exits with a
            non-zero status.
        """
        try:
            command = self.command
        except YtDlpNotFoundError as exc:
            raise ExtractionError(str(exc), hint=exc.hint) from exc

        target = self._temp_path()
        argv = self._build_argv(command, canonicalize_url(url), target)
        logger.debug("Running %s", " ".join(argv))

        try:
            await self._run(argv)
        except BaseException:
            self._discard(target)
            raise

        if not target.is_file():
            raise ExtractionError(
                f"yt-dlp finished without producing {target.name}.",
                hint=append_ytdlp_upgrade_suggestion(
                    "The video may not offer an audio-only format.",
                ),
            )
        return TempAudioStream(target)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _temp_path(self) -> Path:
        directory = self._temp_dir or Path(tempfile.gettempdir())
        return directory / f"{secrets.token_hex(16)}.{AUDIO_EXTENSION}"

    def _build_argv(self, command: tuple[str, ...], url: str, target: Path) -> list[str]:
        return [
            *command,
            url,
            "-f",
            self._audio_format,
            "--no-playlist",
            "--no-progress",
            "-o",
            str(target),
        ]

    @staticmethod
    async def _run(argv: list[str]) -> None:
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ExtractionError(
                f"Could not start yt-dlp: {exc}",
                hint="Check the configured yt-dlp binary path.",
            ) from exc

        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                process.kill()
                await process.wait()
            raise

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()[-_STDERR_TAIL:]
            raise ExtractionError(
                f"yt-dlp exited with status {process.returncode}: {detail}",
                hint=append_ytdlp_upgrade_suggestion(
                    "Check the URL and your network connection.",
                ),
            )

    @staticmethod
    def _discard(target: Path) -> None:
        for leftover in (target, target.with_name(f"{target.name}.part")):
            leftover.unlink(missing_ok=True)
