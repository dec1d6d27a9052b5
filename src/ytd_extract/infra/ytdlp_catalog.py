"""yt-dlp backed implementation of :class:`~ytd_extract.core.protocols.CatalogProvider`.

This module is the **only** place in the codebase that imports ``yt_dlp``.
All yt-dlp exceptions are caught here and re-raised as typed
:class:`~ytd_extract.exceptions.YtdExtractError` subclasses — nothing raw
escapes the infrastructure boundary.

Lookups
-------
* video     — full ``extract_info`` of a watch page (no playlist expansion).
* playlist  — flat extraction capped with ``playlistend``.
* search    — flat extraction of ``ytsearch<N>:<query>``.
* related   — flat extraction of the video's auto-generated mix
  (``watch?v=<id>&list=RD<id>``) with the seed video removed.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ytd_extract.core.url_classifier import validate_id, watch_url
from ytd_extract.exceptions import EnvironmentError, MetadataExtractionError, VideoUnavailableError

logger = logging.getLogger(__name__)

RELATED_MIX_TEMPLATE: str = "https://www.youtube.com/watch?v={video_id}&list=RD{video_id}"


class YtDlpCatalogProvider:
    """Concrete :class:`CatalogProvider` backed by the yt-dlp Python API.

    Usage::

        provider = YtDlpCatalogProvider()
        info = provider.fetch_video("https://www.youtube.com/watch?v=...")

    Parameters
    ----------
    base_options:
        Extra yt-dlp options applied to every lookup (e.g. ``proxy``).
        Per-call ``options`` take precedence over these.
    """

    # Substrings in yt-dlp error messages that indicate the video itself
    # is unavailable (as opposed to a transient or extraction error).
    _UNAVAILABLE_SIGNALS: tuple[str, ...] = (
        "unavailable",
        "private video",
        "removed",
        "not available",
        "account terminated",
        "video has been removed",
        "this video is no longer available",
        "sign in to confirm your age",
    )

    def __init__(self, base_options: Mapping[str, Any] | None = None) -> None:
        self._base_options: dict[str, Any] = dict(base_options or {})

    def _build_opts(
        self,
        options: Mapping[str, Any] | None,
        **overrides: Any,
    ) -> dict[str, Any]:
        """Return yt-dlp options suitable for metadata-only extraction."""
        opts: dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "no_color": True,
            # Do not write any files to disk.
            "skip_download": True,
        }
        opts.update(overrides)
        opts.update(self._base_options)
        if options:
            opts.update(options)
        return opts

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def fetch_video(
        self,
        url: str,
        *,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Extract full metadata for a single video page.

        Raises
        ------
        VideoUnavailableError
            When yt-dlp reports the video as unavailable / private / removed.
        MetadataExtractionError
            For all other extraction failures.
        """
        return self._extract(url, self._build_opts(options, noplaylist=True))

    def fetch_playlist(
        self,
        url: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Extract a playlist and its first *limit* entries (flat)."""
        opts = self._build_opts(
            options,
            extract_flat="in_playlist",
            playlistend=limit,
        )
        info = self._extract(url, opts)
        if info.get("_type") not in ("playlist", "multi_video"):
            raise MetadataExtractionError(
                "yt-dlp did not return a playlist for the given URL.",
                hint="Check that the link points at a playlist.",
            )
        return info

    def search(
        self,
        query: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return up to *limit* video entries matching *query*."""
        opts = self._build_opts(options, extract_flat="in_playlist")
        info = self._extract(f"ytsearch{limit}:{query}", opts)
        return self._video_entries(info)[:limit]

    def fetch_related(
        self,
        video_id: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return up to *limit* videos from *video_id*'s auto-generated mix."""
        opts = self._build_opts(
            options,
            extract_flat="in_playlist",
            # The mix starts with the seed video itself.
            playlistend=limit + 1,
        )
        info = self._extract(RELATED_MIX_TEMPLATE.format(video_id=video_id), opts)
        related = [
            entry for entry in self._video_entries(info) if entry.get("id") != video_id
        ]
        return related[:limit]

    # ------------------------------------------------------------------
    # yt-dlp invocation
    # ------------------------------------------------------------------

    def _extract(self, url: str, opts: dict[str, Any]) -> dict[str, Any]:
        try:
            import yt_dlp
            import yt_dlp.utils
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "yt-dlp is not installed. Install with: pip install yt-dlp",
            ) from exc

        logger.debug("yt-dlp extract_info %s", url)
        try:
            with yt_dlp.YoutubeDL(opts) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            self._raise_mapped(exc)
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected yt-dlp error: {exc}",
            ) from exc

        if info is None:
            raise MetadataExtractionError(
                "yt-dlp returned no metadata for the given URL.",
                hint="The URL may not point to a valid video or playlist.",
            )

        if not isinstance(info, dict):
            raise MetadataExtractionError(
                "yt-dlp returned an unexpected data structure.",
            )

        return dict(info)  # shallow copy — isolate from yt-dlp internals

    @staticmethod
    def _video_entries(info: dict[str, Any]) -> list[dict[str, Any]]:
        """Keep flat entries that point at single videos (drops channels/playlists)."""
        entries: list[dict[str, Any]] = []
        for entry in info.get("entries") or []:
            if not isinstance(entry, dict):
                continue
            video_id = entry.get("id")
            if not isinstance(video_id, str) or not validate_id(video_id):
                continue
            entry = dict(entry)
            entry.setdefault("webpage_url", watch_url(video_id))
            entries.append(entry)
        return entries

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @classmethod
    def _raise_mapped(cls, exc: Exception) -> None:
        """Translate a yt-dlp ``DownloadError`` into a domain exception.

        Always raises — the ``Never`` return type is implicit via
        ``raise`` at every exit path.
        """
        msg_lower = str(exc).lower()
        if any(signal in msg_lower for signal in cls._UNAVAILABLE_SIGNALS):
            raise VideoUnavailableError(
                str(exc),
                hint="The video may be private, removed, or geo-restricted.",
            ) from exc
        raise MetadataExtractionError(str(exc)) from exc
