"""Core / service layer — classification, normalization and orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem access and no direct network I/O; catalog access goes
  through an injected :class:`~ytd_extract.core.protocols.CatalogProvider`.
* No imports from ``cli``, ``infra`` or ``plugin``.
"""

from ytd_extract.core.catalog import CatalogClient
from ytd_extract.core.models import (
    ExtractorResult,
    Playlist,
    PlaylistAuthor,
    Query,
    QueryType,
    SearchContext,
    Track,
)
from ytd_extract.core.normalizer import TrackNormalizer, format_duration
from ytd_extract.core.protocols import AudioProvisioner, CatalogProvider, HistoryEntry
from ytd_extract.core.related import RelatedTrackResolver
from ytd_extract.core.resolution import ResolutionPipeline

__all__: list[str] = [
    "AudioProvisioner",
    "CatalogClient",
    "CatalogProvider",
    "ExtractorResult",
    "HistoryEntry",
    "Playlist",
    "PlaylistAuthor",
    "Query",
    "QueryType",
    "RelatedTrackResolver",
    "ResolutionPipeline",
    "SearchContext",
    "Track",
    "TrackNormalizer",
    "format_duration",
]
