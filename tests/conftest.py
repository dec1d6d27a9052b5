"""Shared pytest fixtures and helpers for the ytd-extract test suite.

Guidelines
----------
* No internet access in any test.
* yt-dlp must be mocked at the infra boundary; subprocess tests run a
  tiny ``python -c`` stand-in for the yt-dlp executable.
* Async code is driven with :func:`asyncio.run`.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from ytd_extract.core.normalizer import TrackNormalizer

VIDEO_ID = "dQw4w9WgXcQ"
WATCH_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"


class FakeExtractor:
    """Weak-referenceable stand-in for the owning extractor."""

    identifier = "fake-extractor"


def video_record(video_id: str = VIDEO_ID, **overrides: Any) -> dict[str, Any]:
    """Factory for a yt-dlp shaped video record."""
    record: dict[str, Any] = {
        "id": video_id,
        "title": f"Video {video_id}",
        "description": "A description",
        "channel": "Some Channel",
        "channel_url": "https://www.youtube.com/channel/UC123",
        "webpage_url": f"https://www.youtube.com/watch?v={video_id}",
        "thumbnail": f"https://i.ytimg.com/vi/{video_id}/maxresdefault.jpg",
        "view_count": 1_234_567,
        "duration": 212,
        "duration_string": "3:32",
    }
    record.update(overrides)
    return record


def playlist_record(*entries: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "_type": "playlist",
        "id": "PL1234567890",
        "title": "Favourites",
        "description": "",
        "channel": "Curator",
        "channel_url": "https://www.youtube.com/@curator",
        "webpage_url": "https://www.youtube.com/playlist?list=PL1234567890",
        "thumbnails": [
            {"url": "https://i.ytimg.com/small.jpg"},
            {"url": "https://i.ytimg.com/large.jpg"},
        ],
        "entries": list(entries),
    }
    record.update(overrides)
    return record


def fake_catalog(
    *,
    video: dict[str, Any] | Exception | None = None,
    playlist: dict[str, Any] | Exception | None = None,
    search: list[dict[str, Any]] | Exception | None = None,
    related: list[dict[str, Any]] | Exception | None = None,
) -> MagicMock:
    """Return a mock CatalogProvider.

    Each argument is either the value returned by the matching method
    or an exception it raises.
    """
    catalog = MagicMock()
    for method, value in (
        (catalog.fetch_video, video),
        (catalog.fetch_playlist, playlist),
        (catalog.search, search if search is not None else []),
        (catalog.fetch_related, related if related is not None else []),
    ):
        if isinstance(value, Exception):
            method.side_effect = value
        else:
            method.return_value = value
    return catalog


@pytest.fixture
def owner() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def normalizer(owner: FakeExtractor) -> TrackNormalizer:
    return TrackNormalizer(owner, owner.identifier)
