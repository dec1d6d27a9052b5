"""Resolution pipeline — query text → :class:`ExtractorResult`.

Flow
----
1. Canonicalize the text (alternate YouTube hosts → base domain).
2. Classify: the ``ytsearch`` protocol forces a search; otherwise a
   parseable single-video link (that is not a radio mix) forces a
   direct-video lookup; otherwise the declared type stands.
3. Dispatch to the playlist, direct-video or search branch.

Every branch degrades to an empty result when the catalog has nothing
to offer; the host shows "no results" rather than an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ytd_extract.core import url_classifier
from ytd_extract.core.catalog import CatalogClient
from ytd_extract.core.models import ExtractorResult, Query, QueryType, SearchContext, Track
from ytd_extract.core.normalizer import TrackNormalizer
from ytd_extract.exceptions import InvalidURLError

logger = logging.getLogger(__name__)

SEARCH_PROTOCOL: str = "ytsearch"
"""Protocol hint that routes a query straight to free-text search."""

PLAYLIST_PAGE_SIZE: int = 100
"""Entries YouTube returns per playlist continuation page."""


def classify(query: Query) -> QueryType | None:
    """Return the effective query type for an already canonical *query*."""
    if query.protocol == SEARCH_PROTOCOL:
        return QueryType.YOUTUBE_SEARCH
    if not url_classifier.is_radio_mix(query.text) and url_classifier.validate_url(query.text):
        return QueryType.YOUTUBE_VIDEO
    return query.declared_type


class ResolutionPipeline:
    """Turns host queries into normalized tracks and playlists.

    Parameters
    ----------
    catalog:
        Best-effort catalog facade.
    normalizer:
        Builds tracks stamped with the owning extractor.
    search_limit:
        Number of results requested for free-text searches.
    playlist_pages:
        Upper bound on playlist pages fetched (``PLAYLIST_PAGE_SIZE`` each).
    """

    def __init__(
        self,
        catalog: CatalogClient,
        normalizer: TrackNormalizer,
        *,
        search_limit: int = 10,
        playlist_pages: int = 20,
    ) -> None:
        self._catalog = catalog
        self._normalizer = normalizer
        self._search_limit = search_limit
        self._playlist_limit = playlist_pages * PLAYLIST_PAGE_SIZE

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def handle(self, text: str, context: SearchContext) -> ExtractorResult:
        """Resolve *text* according to *context*."""
        query = Query.from_context(url_classifier.canonicalize_url(text), context)
        query_type = classify(query)
        logger.debug("Resolving %r as %s", query.text, query_type)

        if query_type is QueryType.YOUTUBE_PLAYLIST:
            return await self._resolve_playlist(query, context)
        if query_type is QueryType.YOUTUBE_VIDEO:
            return await self._resolve_video(query, context)
        return await self._resolve_search(query, context, query_type)

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    async def _resolve_playlist(self, query: Query, context: SearchContext) -> ExtractorResult:
        record = await self._catalog.playlist(
            query.text,
            limit=self._playlist_limit,
            options=context.request_options,
        )
        if not record or not TrackNormalizer.entries(record):
            return ExtractorResult()

        playlist = self._normalizer.to_playlist(
            record,
            requested_by=context.requested_by,
            fallback_url=query.text,
        )
        return ExtractorResult(playlist=playlist, tracks=tuple(playlist.tracks))

    async def _resolve_video(self, query: Query, context: SearchContext) -> ExtractorResult:
        try:
            video_id = url_classifier.parse_url(query.text)
        except InvalidURLError as exc:
            logger.debug("Not a direct video link %r: %s", query.text, exc)
            return ExtractorResult()

        record = await self._catalog.video(
            url_classifier.watch_url(video_id),
            options=context.request_options,
        )
        if not record:
            return ExtractorResult()

        track = self._normalizer.to_track(
            record,
            requested_by=context.requested_by,
            query_type=QueryType.YOUTUBE_VIDEO,
        )
        return ExtractorResult(tracks=(track,))

    async def _resolve_search(
        self,
        query: Query,
        context: SearchContext,
        query_type: QueryType | None,
    ) -> ExtractorResult:
        tracks = await self.search(
            query.text,
            requested_by=context.requested_by,
            query_type=query_type,
            options=context.request_options,
        )
        return ExtractorResult(tracks=tuple(tracks))

    async def search(
        self,
        text: str,
        *,
        requested_by: Any = None,
        query_type: QueryType | None = None,
        limit: int | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> list[Track]:
        """Free-text search; an empty list when nothing (or an error) comes back."""
        records = await self._catalog.search(
            text,
            limit=limit or self._search_limit,
            options=options,
        )
        if not records:
            return []
        return self._normalizer.to_tracks(
            records,
            requested_by=requested_by,
            query_type=query_type,
        )
