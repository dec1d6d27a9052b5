"""Domain models for ytd-extract.

Value objects are **frozen** dataclasses.  They carry zero I/O and no
dependency on external packages.

:class:`Track` and :class:`Playlist` reference each other: a playlist
owns its tracks, while each track only holds a *weak* back-reference to
its playlist and to the extractor that produced it.  Both back-references
are attached right after construction and never change afterwards.
"""

from __future__ import annotations

import weakref
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

SOURCE: str = "youtube"
"""Source tag stamped on every track and playlist."""


# ---------------------------------------------------------------------------
# Query classification
# ---------------------------------------------------------------------------

class QueryType(str, Enum):
    """Query types this extractor admits.

    Values match the host player's query-type strings so that plain
    strings coming from the host compare equal to members.
    """

    YOUTUBE = "youtube"
    YOUTUBE_PLAYLIST = "youtubePlaylist"
    YOUTUBE_SEARCH = "youtubeSearch"
    YOUTUBE_VIDEO = "youtubeVideo"
    AUTO = "auto"
    AUTO_SEARCH = "autoSearch"

    @classmethod
    def coerce(cls, value: object) -> QueryType | None:
        """Return the member for *value*, or ``None`` when unsupported."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class SearchContext:
    """Per-call context handed over by the host player."""

    type: QueryType | str | None = None
    """Query type declared by the host (may be overridden by classification)."""

    protocol: str | None = None
    """Protocol hint, e.g. ``"ytsearch"`` for explicit search routing."""

    requested_by: Any = None
    """Opaque requester identity copied onto every produced track."""

    request_options: Mapping[str, Any] = field(default_factory=dict)
    """Extra yt-dlp options (``proxy``, ``cookiefile``, ...) for catalog calls."""


@dataclass(frozen=True, slots=True)
class Query:
    """Immutable pipeline input: raw text plus routing hints."""

    text: str
    declared_type: QueryType | None = None
    protocol: str | None = None

    @classmethod
    def from_context(cls, text: str, context: SearchContext) -> Query:
        return cls(
            text=text,
            declared_type=QueryType.coerce(context.type),
            protocol=context.protocol,
        )


# ---------------------------------------------------------------------------
# Tracks and playlists
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Track:
    """A normalized playable unit.

    Value fields are frozen.  :meth:`attach_extractor` and
    :meth:`attach_playlist` set the two non-owning back-references.
    """

    title: str
    description: str
    author: str
    url: str
    thumbnail: str
    views: int | None
    duration: str
    """Human-readable duration (e.g. ``"3:32"``)."""

    duration_seconds: float | None
    """Raw duration in seconds as reported by the catalog."""

    requested_by: Any = None
    query_type: QueryType | None = None
    source: str = SOURCE
    raw: Any = field(default=None, repr=False)
    """The original catalog record this track was built from."""

    extractor_identifier: str | None = field(default=None, init=False)
    _extractor_ref: Any = field(default=None, init=False, repr=False)
    _playlist_ref: Any = field(default=None, init=False, repr=False)

    def resolve_metadata(self) -> Any:
        """Return the raw catalog record (same object, not a copy)."""
        return self.raw

    @property
    def extractor(self) -> Any:
        """The extractor that produced this track, if still alive."""
        ref = self._extractor_ref
        return ref() if ref is not None else None

    @property
    def playlist(self) -> Playlist | None:
        """The playlist this track belongs to, if any."""
        ref = self._playlist_ref
        return ref() if ref is not None else None

    def attach_extractor(self, extractor: Any, identifier: str) -> None:
        object.__setattr__(self, "_extractor_ref", weakref.ref(extractor))
        object.__setattr__(self, "extractor_identifier", identifier)

    def attach_playlist(self, playlist: Playlist) -> None:
        object.__setattr__(self, "_playlist_ref", weakref.ref(playlist))


@dataclass(frozen=True, slots=True)
class PlaylistAuthor:
    name: str
    url: str


@dataclass(eq=False)
class Playlist:
    """An ordered collection of tracks sharing playlist metadata."""

    title: str
    description: str
    thumbnail: str
    author: PlaylistAuthor
    id: str
    url: str
    tracks: list[Track] = field(default_factory=list)
    raw: Any = field(default=None, repr=False)
    source: str = SOURCE
    type: str = "playlist"

    def add_tracks(self, tracks: Sequence[Track]) -> None:
        """Append *tracks*, pointing each one back at this playlist."""
        for track in tracks:
            track.attach_playlist(self)
            self.tracks.append(track)


# ---------------------------------------------------------------------------
# Resolution result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExtractorResult:
    """Outcome of every resolution path.

    An empty ``tracks`` tuple means "no results"; it is never an error.
    """

    playlist: Playlist | None = None
    tracks: tuple[Track, ...] = ()

    def __len__(self) -> int:
        return len(self.tracks)

    def __bool__(self) -> bool:
        return len(self.tracks) > 0
