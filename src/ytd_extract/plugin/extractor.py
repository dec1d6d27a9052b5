"""Host-facing YouTube extractor backed by yt-dlp.

The media player installs one :class:`YtDlpExtractor` per process and
drives it through four calls:

* :meth:`~YtDlpExtractor.validate` — may this extractor take the query?
* :meth:`~YtDlpExtractor.handle` — query → tracks / playlist.
* :meth:`~YtDlpExtractor.stream` — track → readable audio bytes.
* :meth:`~YtDlpExtractor.get_related_tracks` — auto-play suggestions.

:attr:`YtDlpExtractor.instance` is process-wide state: it is set by
:meth:`~YtDlpExtractor.activate` and cleared by
:meth:`~YtDlpExtractor.deactivate`.  The host sequences those calls
(one install/uninstall per process), so the pointer is not locked.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, BinaryIO, ClassVar

from ytd_extract.core import url_classifier
from ytd_extract.core.catalog import CatalogClient
from ytd_extract.core.models import ExtractorResult, Playlist, QueryType, SearchContext, Track
from ytd_extract.core.normalizer import TrackNormalizer
from ytd_extract.core.protocols import AudioProvisioner, CatalogProvider, HistoryEntry
from ytd_extract.core.related import RelatedTrackResolver
from ytd_extract.core.resolution import SEARCH_PROTOCOL, ResolutionPipeline
from ytd_extract.utils.config import ExtractorConfig

logger = logging.getLogger(__name__)

PROTOCOLS: tuple[str, ...] = (SEARCH_PROTOCOL, "youtube")


class YtDlpExtractor:
    """YouTube extractor plugin.

    Parameters
    ----------
    config:
        Static settings; read from the environment when omitted.
    catalog:
        Metadata backend; :class:`~ytd_extract.infra.YtDlpCatalogProvider`
        when omitted.
    provisioner:
        Audio backend; :class:`~ytd_extract.infra.YtDlpStreamProvisioner`
        when omitted.
    """

    identifier: ClassVar[str] = "ytdlp-extractor"
    ytdlp_binary_path: ClassVar[str | None] = None
    """Class-wide yt-dlp executable override (wins over the config)."""

    instance: ClassVar[YtDlpExtractor | None] = None

    def __init__(
        self,
        *,
        config: ExtractorConfig | None = None,
        catalog: CatalogProvider | None = None,
        provisioner: AudioProvisioner | None = None,
    ) -> None:
        self.config: ExtractorConfig = config or ExtractorConfig.from_env()
        self.protocols: list[str] = []

        if catalog is None:
            from ytd_extract.infra.ytdlp_catalog import YtDlpCatalogProvider

            catalog = YtDlpCatalogProvider()
        self._provisioner = provisioner

        client = CatalogClient(catalog)
        normalizer = TrackNormalizer(self, self.identifier)
        self._pipeline = ResolutionPipeline(
            client,
            normalizer,
            search_limit=self.config.search_limit,
            playlist_pages=self.config.playlist_pages,
        )
        self._related = RelatedTrackResolver(
            client,
            normalizer,
            related_limit=self.config.related_limit,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def activate(self) -> None:
        self.protocols = list(PROTOCOLS)
        YtDlpExtractor.instance = self
        logger.info("%s activated (protocols: %s)", self.identifier, ", ".join(self.protocols))

    async def deactivate(self) -> None:
        self.protocols = []
        YtDlpExtractor.instance = None
        logger.info("%s deactivated", self.identifier)

    # ------------------------------------------------------------------
    # Host API
    # ------------------------------------------------------------------

    async def validate(self, query: object, type: QueryType | str | None = None) -> bool:
        """Admission gate; total — wrong argument types give ``False``."""
        return url_classifier.validate_query_type(query, type)

    async def handle(self, query: str, context: SearchContext) -> ExtractorResult:
        return await self._pipeline.handle(query, context)

    async def get_related_tracks(
        self,
        track: Track,
        history: Any,
        *,
        context: SearchContext | None = None,
    ) -> ExtractorResult:
        """Suggest follow-ups for *track*.

        *history* is the host's queue history (anything with a
        ``tracks`` sequence) or a plain sequence of played tracks.
        """
        played: Sequence[HistoryEntry] = getattr(history, "tracks", history) or ()
        options = context.request_options if context is not None else None
        return await self._related.resolve(track, played, options=options)

    async def stream(self, track: Track) -> BinaryIO:
        """Return a readable stream of *track*'s audio.

        Raises
        ------
        ExtractionError
            When yt-dlp fails; the host reports the playback failure.
        """
        logger.info("Extracting audio for %s", track.url)
        return await self.provisioner.provision(track.url)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def provisioner(self) -> AudioProvisioner:
        if self._provisioner is None:
            from ytd_extract.infra.stream_provisioner import YtDlpStreamProvisioner

            self._provisioner = YtDlpStreamProvisioner(
                binary_path=self.ytdlp_binary_path or self.config.ytdlp_binary,
                audio_format=self.config.audio_format,
                temp_dir=self.config.temp_dir,
            )
        return self._provisioner

    def empty_response(self) -> ExtractorResult:
        return ExtractorResult()

    def create_response(
        self,
        playlist: Playlist | None = None,
        tracks: Sequence[Track] = (),
    ) -> ExtractorResult:
        return ExtractorResult(playlist=playlist, tracks=tuple(tracks))

    validate_url = staticmethod(url_classifier.validate_url)
    validate_id = staticmethod(url_classifier.validate_id)
    parse_url = staticmethod(url_classifier.parse_url)


YouTubeExtractor = YtDlpExtractor
