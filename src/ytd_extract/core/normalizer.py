"""Raw catalog record → :class:`Track` / :class:`Playlist` mapping.

Records are yt-dlp shaped dicts.  Full video extractions and the flat
entries of playlists and searches share the same keys, so a single set
of field readers covers both.  Values are passed through as reported;
only the formatted duration is derived, and only when the record does
not carry one.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ytd_extract.core.models import Playlist, PlaylistAuthor, QueryType, Track
from ytd_extract.core.url_classifier import watch_url


def format_duration(seconds: float | None) -> str:
    """Render *seconds* as a player time code (``"0:05"``, ``"03:32"``, ``"01:01:40"``)."""
    total = int(seconds or 0)
    days, rem = divmod(total, 86_400)
    hours, rem = divmod(rem, 3_600)
    minutes, secs = divmod(rem, 60)
    parts = [days, hours, minutes, secs]
    while len(parts) > 1 and parts[0] == 0:
        parts.pop(0)
    code = ":".join(f"{part:02d}" for part in parts)
    if len(code) <= 3:
        return f"0:{code}"
    return code


class TrackNormalizer:
    """Builds tracks stamped with the identity of the producing extractor.

    Parameters
    ----------
    extractor:
        The extractor object; stored on each track as a weak reference.
    identifier:
        The extractor's stable identifier string.
    """

    def __init__(self, extractor: Any, identifier: str) -> None:
        self._extractor = extractor
        self._identifier = identifier

    # ------------------------------------------------------------------
    # Tracks
    # ------------------------------------------------------------------

    def to_track(
        self,
        record: dict[str, Any],
        *,
        requested_by: Any = None,
        query_type: QueryType | None = None,
    ) -> Track:
        """Map a video record (full or flat) to a :class:`Track`."""
        track = Track(
            title=self._text(record, "title"),
            description=self._text(record, "description"),
            author=self._author(record),
            url=self.record_url(record),
            thumbnail=self._thumbnail(record),
            views=record.get("view_count"),
            duration=self._duration(record),
            duration_seconds=record.get("duration"),
            requested_by=requested_by,
            query_type=query_type,
            raw=record,
        )
        track.attach_extractor(self._extractor, self._identifier)
        return track

    def to_related_track(self, record: dict[str, Any], *, requested_by: Any = None) -> Track:
        """Map an auto-play candidate; the URL is rebuilt from the video id."""
        title = self._text(record, "title")
        track = Track(
            title=title,
            description=title,
            author=self._author(record),
            url=self.candidate_url(record),
            thumbnail=self._thumbnail(record),
            views=record.get("view_count"),
            duration=self._duration(record),
            duration_seconds=record.get("duration"),
            requested_by=requested_by,
            query_type=QueryType.YOUTUBE_VIDEO,
            raw=record,
        )
        track.attach_extractor(self._extractor, self._identifier)
        return track

    def to_tracks(
        self,
        records: Iterable[dict[str, Any]],
        *,
        requested_by: Any = None,
        query_type: QueryType | None = None,
    ) -> list[Track]:
        return [
            self.to_track(record, requested_by=requested_by, query_type=query_type)
            for record in records
        ]

    # ------------------------------------------------------------------
    # Playlists
    # ------------------------------------------------------------------

    def to_playlist(
        self,
        record: dict[str, Any],
        *,
        requested_by: Any = None,
        fallback_url: str = "",
    ) -> Playlist:
        """Map a playlist record and all of its entries.

        Every entry becomes a ``youtubeVideo`` track whose playlist
        back-reference points at the returned playlist.
        """
        title = self._text(record, "title")
        playlist = Playlist(
            title=title,
            description=self._text(record, "description") or title,
            thumbnail=self._thumbnail(record),
            author=PlaylistAuthor(
                name=self._author(record),
                url=str(record.get("channel_url") or record.get("uploader_url") or ""),
            ),
            id=str(record.get("id") or ""),
            url=str(record.get("webpage_url") or fallback_url),
            raw=record,
        )
        playlist.add_tracks(
            self.to_tracks(
                self.entries(record),
                requested_by=requested_by,
                query_type=QueryType.YOUTUBE_VIDEO,
            )
        )
        return playlist

    # ------------------------------------------------------------------
    # Field readers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def entries(record: dict[str, Any]) -> list[dict[str, Any]]:
        """Safely pull the ``entries`` list, skipping malformed items."""
        raw: object = record.get("entries")
        if raw is None:
            return []
        return [entry for entry in raw if isinstance(entry, dict)]

    @staticmethod
    def record_url(record: dict[str, Any]) -> str:
        """Return the page URL of a video record."""
        for key in ("webpage_url", "url"):
            value = record.get(key)
            if isinstance(value, str) and value.startswith(("http://", "https://")):
                return value
        video_id = record.get("id")
        return watch_url(str(video_id)) if video_id else ""

    @classmethod
    def candidate_url(cls, record: dict[str, Any]) -> str:
        """Return the canonical watch URL of a related candidate."""
        video_id = record.get("id")
        return watch_url(str(video_id)) if video_id else cls.record_url(record)

    @staticmethod
    def _text(record: dict[str, Any], key: str) -> str:
        value = record.get(key)
        return str(value) if value is not None else ""

    @staticmethod
    def _author(record: dict[str, Any]) -> str:
        return str(record.get("channel") or record.get("uploader") or "")

    @staticmethod
    def _thumbnail(record: dict[str, Any]) -> str:
        # yt-dlp orders ``thumbnails`` worst to best.
        single = record.get("thumbnail")
        if isinstance(single, str) and single:
            return single
        thumbnails = record.get("thumbnails")
        if isinstance(thumbnails, list):
            for thumb in reversed(thumbnails):
                if isinstance(thumb, dict) and thumb.get("url"):
                    return str(thumb["url"])
        return ""

    @staticmethod
    def _duration(record: dict[str, Any]) -> str:
        formatted = record.get("duration_string")
        if isinstance(formatted, str) and formatted:
            return formatted
        return format_duration(record.get("duration"))
