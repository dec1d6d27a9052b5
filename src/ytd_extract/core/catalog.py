"""Async, best-effort facade over a :class:`CatalogProvider`.

Providers are blocking, so every call runs in a worker thread via
:func:`asyncio.to_thread`.  Lookup failures are part of normal
operation for a player (deleted videos, typos, empty searches): they
are logged and turned into ``None`` / ``[]``.  Only missing runtime
dependencies (:class:`~ytd_extract.exceptions.EnvironmentError`)
escape.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from ytd_extract.core.protocols import CatalogProvider
from ytd_extract.exceptions import MetadataExtractionError, YtdExtractError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CatalogClient:
    """Stateless adapter used by the resolution pipeline and related resolver.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`CatalogProvider` protocol.
    """

    def __init__(self, provider: CatalogProvider) -> None:
        self._provider: CatalogProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def video(
        self,
        url: str,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        return await self._best_effort(
            f"video {url}",
            self._provider.fetch_video,
            url,
            options=options,
        )

    async def playlist(
        self,
        url: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        return await self._best_effort(
            f"playlist {url}",
            self._provider.fetch_playlist,
            url,
            limit=limit,
            options=options,
        )

    async def search(
        self,
        query: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        results = await self._best_effort(
            f"search {query!r}",
            self._provider.search,
            query,
            limit=limit,
            options=options,
        )
        return list(results or [])

    async def related(
        self,
        video_id: str,
        *,
        limit: int,
        options: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        results = await self._best_effort(
            f"related {video_id}",
            self._provider.fetch_related,
            video_id,
            limit=limit,
            options=options,
        )
        return list(results or [])

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    async def _best_effort(
        self,
        label: str,
        func: Callable[..., T],
        *args: Any,
        **kwargs: Any,
    ) -> T | None:
        """Run *func* in a thread; log and return ``None`` on lookup failure."""
        try:
            return await self._fetch(func, *args, **kwargs)
        except MetadataExtractionError as exc:
            logger.warning("Catalog lookup failed (%s): %s", label, exc)
            return None

    @staticmethod
    async def _fetch(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except YtdExtractError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected provider error: {exc}",
            ) from exc
