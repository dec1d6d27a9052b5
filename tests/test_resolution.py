"""Tests for the resolution pipeline (core/resolution.py).

Catalog providers are MagicMocks; assertions cover routing, result
shape and degradation to empty results.
"""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from ytd_extract.core.catalog import CatalogClient
from ytd_extract.core.models import Query, QueryType, SearchContext
from ytd_extract.core.normalizer import TrackNormalizer
from ytd_extract.core.resolution import PLAYLIST_PAGE_SIZE, ResolutionPipeline, classify
from ytd_extract.exceptions import MetadataExtractionError, VideoUnavailableError

from conftest import WATCH_URL, fake_catalog, playlist_record, video_record

PLAYLIST_URL = "https://www.youtube.com/playlist?list=PL1234567890"
MIX_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ&list=RDdQw4w9WgXcQ"


def _pipeline(provider: MagicMock, normalizer: TrackNormalizer, **kwargs: int) -> ResolutionPipeline:
    return ResolutionPipeline(CatalogClient(provider), normalizer, **kwargs)


def _handle(pipeline: ResolutionPipeline, text: str, context: SearchContext):
    return asyncio.run(pipeline.handle(text, context))


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

class TestClassify:
    def test_search_protocol_wins(self) -> None:
        query = Query(WATCH_URL, QueryType.YOUTUBE_PLAYLIST, "ytsearch")
        assert classify(query) is QueryType.YOUTUBE_SEARCH

    def test_video_link_overrides_declared_type(self) -> None:
        assert classify(Query(WATCH_URL, QueryType.AUTO)) is QueryType.YOUTUBE_VIDEO

    def test_radio_mix_keeps_declared_type(self) -> None:
        query = Query(MIX_URL, QueryType.YOUTUBE_PLAYLIST)
        assert classify(query) is QueryType.YOUTUBE_PLAYLIST

    def test_plain_text_keeps_declared_type(self) -> None:
        assert classify(Query("lofi beats", QueryType.AUTO_SEARCH)) is QueryType.AUTO_SEARCH


# ---------------------------------------------------------------------------
# Playlist branch
# ---------------------------------------------------------------------------

class TestPlaylistBranch:
    def test_returns_playlist_and_tracks(self, normalizer: TrackNormalizer) -> None:
        record = playlist_record(video_record("aaaaaaaaaaa"), video_record("bbbbbbbbbbb"))
        provider = fake_catalog(playlist=record)
        context = SearchContext(type=QueryType.YOUTUBE_PLAYLIST, requested_by="dan")

        result = _handle(_pipeline(provider, normalizer), PLAYLIST_URL, context)

        assert result.playlist is not None
        assert result.tracks == tuple(result.playlist.tracks)
        assert len(result) == 2
        assert all(track.playlist is result.playlist for track in result.tracks)
        assert all(track.requested_by == "dan" for track in result.tracks)

    def test_page_limit(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(playlist=playlist_record(video_record()))
        _handle(
            _pipeline(provider, normalizer, playlist_pages=3),
            PLAYLIST_URL,
            SearchContext(type="youtubePlaylist"),
        )
        _, kwargs = provider.fetch_playlist.call_args
        assert kwargs["limit"] == 3 * PLAYLIST_PAGE_SIZE

    def test_fetch_failure_gives_empty_result(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(playlist=MetadataExtractionError("not a playlist"))
        result = _handle(
            _pipeline(provider, normalizer),
            PLAYLIST_URL,
            SearchContext(type=QueryType.YOUTUBE_PLAYLIST),
        )
        assert not result
        assert result.playlist is None

    def test_empty_playlist_gives_empty_result(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(playlist=playlist_record())
        result = _handle(
            _pipeline(provider, normalizer),
            PLAYLIST_URL,
            SearchContext(type=QueryType.YOUTUBE_PLAYLIST),
        )
        assert not result
        assert result.playlist is None

    def test_radio_mix_resolved_as_playlist(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(playlist=playlist_record(video_record()))
        _handle(
            _pipeline(provider, normalizer),
            MIX_URL,
            SearchContext(type=QueryType.YOUTUBE_PLAYLIST),
        )
        provider.fetch_playlist.assert_called_once()
        provider.fetch_video.assert_not_called()


# ---------------------------------------------------------------------------
# Video branch
# ---------------------------------------------------------------------------

class TestVideoBranch:
    def test_single_track(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(video=video_record())
        context = SearchContext(type=QueryType.AUTO, requested_by="erin")

        result = _handle(_pipeline(provider, normalizer), "https://youtu.be/dQw4w9WgXcQ", context)

        provider.fetch_video.assert_called_once_with(WATCH_URL, options={})
        assert result.playlist is None
        assert len(result) == 1
        track = result.tracks[0]
        assert track.query_type is QueryType.YOUTUBE_VIDEO
        assert track.requested_by == "erin"

    def test_alternate_host_canonicalized(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(video=video_record())
        result = _handle(
            _pipeline(provider, normalizer),
            "https://music.youtube.com/watch?v=dQw4w9WgXcQ",
            SearchContext(type=QueryType.AUTO),
        )
        assert len(result) == 1

    def test_unavailable_video_gives_empty_result(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(video=VideoUnavailableError("Video unavailable"))
        result = _handle(_pipeline(provider, normalizer), WATCH_URL, SearchContext())
        assert not result

    def test_declared_video_with_bad_link(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(video=video_record())
        result = _handle(
            _pipeline(provider, normalizer),
            "https://example.com/clip",
            SearchContext(type=QueryType.YOUTUBE_VIDEO),
        )
        assert not result
        provider.fetch_video.assert_not_called()

    def test_request_options_forwarded(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(video=video_record())
        context = SearchContext(request_options={"cookiefile": "c.txt"})
        _handle(_pipeline(provider, normalizer), WATCH_URL, context)
        provider.fetch_video.assert_called_once_with(WATCH_URL, options={"cookiefile": "c.txt"})


# ---------------------------------------------------------------------------
# Search branch
# ---------------------------------------------------------------------------

class TestSearchBranch:
    def test_search_tracks_keep_effective_type(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(search=[video_record("aaaaaaaaaaa"), video_record("bbbbbbbbbbb")])
        result = _handle(
            _pipeline(provider, normalizer, search_limit=4),
            "lofi beats",
            SearchContext(type=QueryType.AUTO_SEARCH, requested_by="fay"),
        )
        provider.search.assert_called_once_with("lofi beats", limit=4, options={})
        assert len(result) == 2
        assert result.playlist is None
        assert all(track.query_type is QueryType.AUTO_SEARCH for track in result.tracks)
        assert all(track.requested_by == "fay" for track in result.tracks)

    def test_search_protocol_forces_search_on_link(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(search=[video_record()])
        result = _handle(
            _pipeline(provider, normalizer),
            WATCH_URL,
            SearchContext(type=QueryType.AUTO, protocol="ytsearch"),
        )
        provider.fetch_video.assert_not_called()
        provider.search.assert_called_once()
        assert result.tracks[0].query_type is QueryType.YOUTUBE_SEARCH

    def test_no_results(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(search=[])
        result = _handle(_pipeline(provider, normalizer), "zzzz", SearchContext(type="auto"))
        assert not result

    def test_search_failure_gives_empty_result(self, normalizer: TrackNormalizer) -> None:
        provider = fake_catalog(search=MetadataExtractionError("HTTP 429"))
        result = _handle(_pipeline(provider, normalizer), "zzzz", SearchContext(type="auto"))
        assert not result

    @pytest.mark.parametrize("limit", [None, 2])
    def test_search_helper_limit(self, normalizer: TrackNormalizer, limit: int | None) -> None:
        provider = fake_catalog(search=[])
        pipeline = _pipeline(provider, normalizer, search_limit=9)
        asyncio.run(pipeline.search("q", limit=limit))
        _, kwargs = provider.search.call_args
        assert kwargs["limit"] == (limit or 9)
