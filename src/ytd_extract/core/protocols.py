"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, BinaryIO, Protocol


class CatalogProvider(Protocol):
    """Contract for YouTube metadata backends.

    Every method is blocking; the core layer runs them in worker
    threads.  Records are provider-specific dicts shaped like yt-dlp
    info dicts (``id``, ``title``, ``url``/``webpage_url``,
    ``duration``, ``view_count``, ``channel``, ``thumbnails`` ...).

    Implementations must map all backend-specific exceptions to
    :class:`~ytd_extract.exceptions.YtdExtractError` subclasses.
    """

    def fetch_video(
        self,
        url: str,
        *,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return the full metadata record for a single video page.

        Raises
        ------
        MetadataExtractionError
            When the backend fails to extract metadata.
        VideoUnavailableError
            When the target video is confirmed unavailable.
        """
        ...  # pragma: no cover

    def fetch_playlist(
        self,
        url: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a playlist record whose ``entries`` hold at most *limit* items."""
        ...  # pragma: no cover

    def search(
        self,
        query: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return up to *limit* video records matching free-text *query*."""
        ...  # pragma: no cover

    def fetch_related(
        self,
        video_id: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Return up to *limit* videos related to *video_id* (seed excluded)."""
        ...  # pragma: no cover


class AudioProvisioner(Protocol):
    """Contract for turning a video page URL into readable audio bytes."""

    async def provision(self, url: str) -> BinaryIO:
        """Materialise audio for *url* and return a readable binary stream.

        Raises
        ------
        ExtractionError
            When the audio cannot be produced.
        """
        ...  # pragma: no cover


class HistoryEntry(Protocol):
    """Anything previously played that exposes its page URL."""

    @property
    def url(self) -> str: ...  # pragma: no cover
