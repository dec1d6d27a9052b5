"""Related-track resolution for auto-play.

Candidates come from the reference video's related list when its URL is
a direct video link, otherwise (or when that yields nothing) from a
small search on the author name or title.  Candidates already present
in the play history are dropped, unless that would leave nothing — a
repeated suggestion beats silence.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ytd_extract.core import url_classifier
from ytd_extract.core.catalog import CatalogClient
from ytd_extract.core.models import ExtractorResult, Track
from ytd_extract.core.normalizer import TrackNormalizer
from ytd_extract.core.protocols import HistoryEntry

logger = logging.getLogger(__name__)

FALLBACK_SEARCH_LIMIT: int = 5


class RelatedTrackResolver:
    """Finds follow-up tracks for a finished track.

    Parameters
    ----------
    catalog:
        Best-effort catalog facade.
    normalizer:
        Builds tracks stamped with the owning extractor.
    related_limit:
        Number of related entries requested from the catalog.
    """

    def __init__(
        self,
        catalog: CatalogClient,
        normalizer: TrackNormalizer,
        *,
        related_limit: int = 25,
    ) -> None:
        self._catalog = catalog
        self._normalizer = normalizer
        self._related_limit = related_limit

    async def resolve(
        self,
        track: Track,
        history: Sequence[HistoryEntry],
        *,
        options: Mapping[str, Any] | None = None,
    ) -> ExtractorResult:
        candidates = await self._candidates(track, options)
        if not candidates:
            return ExtractorResult()

        played = {entry.url for entry in history}
        unique = [
            record
            for record in candidates
            if TrackNormalizer.candidate_url(record) not in played
        ]
        if not unique:
            logger.debug("All %d related candidates already played", len(candidates))

        similar = [
            self._normalizer.to_related_track(record, requested_by=track.requested_by)
            for record in (unique or candidates)
        ]
        return ExtractorResult(tracks=tuple(similar))

    async def _candidates(
        self,
        track: Track,
        options: Mapping[str, Any] | None,
    ) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        if url_classifier.validate_url(track.url):
            records = await self._catalog.related(
                url_classifier.parse_url(track.url),
                limit=self._related_limit,
                options=options,
            )

        if not records:
            fallback = track.author or track.title
            if not fallback:
                return []
            records = await self._catalog.search(
                fallback,
                limit=FALLBACK_SEARCH_LIMIT,
                options=options,
            )
        return records
