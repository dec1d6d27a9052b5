"""YouTube link classification — pure parsing, no I/O.

Link rules:

* ``v=`` query parameter wins when present.
* ``youtu.be/<id>`` and ``youtube.com/{embed,v,shorts}/<id>`` carry the
  id in the path.
* Any other host must be one of :data:`VALID_QUERY_DOMAINS`.
* The identifier is cut to 11 characters and must match
  :data:`VIDEO_ID_PATTERN`.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qs, urlsplit

from ytd_extract.core.models import QueryType
from ytd_extract.exceptions import (
    DomainMismatchError,
    InvalidVideoIdError,
    InvalidURLError,
    VideoIdNotFoundError,
)

VALID_QUERY_DOMAINS: frozenset[str] = frozenset(
    {
        "youtube.com",
        "www.youtube.com",
        "m.youtube.com",
        "music.youtube.com",
        "gaming.youtube.com",
    }
)

VALID_PATH_DOMAINS: re.Pattern[str] = re.compile(
    r"^https?://(youtu\.be/|(www\.)?youtube\.com/(embed|v|shorts)/)"
)

VIDEO_ID_PATTERN: re.Pattern[str] = re.compile(r"^[a-zA-Z0-9_-]{11}$")

VIDEO_ID_LENGTH: int = 11

SHORT_LINK_HOST: str = "youtu.be"

RADIO_MIX_MARKER: str = "list=RD"

WATCH_URL_TEMPLATE: str = "https://www.youtube.com/watch?v={video_id}"

SUPPORTED_QUERY_TYPES: frozenset[QueryType] = frozenset(QueryType)

# Alternate hosts collapse onto the base domain; anchored to the host so
# a second pass never matches.
_ALTERNATE_HOST_PREFIX: re.Pattern[str] = re.compile(
    r"(?:(?<=//)|^)(?:m|music|gaming)\.(?=youtube\.com)"
)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

def is_recognized_host(url: str) -> bool:
    """Return ``True`` for allow-listed hosts and short/embed/shorts links."""
    stripped = url.strip()
    if VALID_PATH_DOMAINS.match(stripped):
        return True
    try:
        hostname = urlsplit(stripped).hostname
    except ValueError:
        return False
    return hostname is not None and hostname in VALID_QUERY_DOMAINS


def is_radio_mix(text: str) -> bool:
    """Return ``True`` when *text* references an auto-generated mix."""
    return RADIO_MIX_MARKER in text


def validate_id(video_id: str) -> bool:
    """Return ``True`` when *video_id* is a well-formed 11-character id."""
    return VIDEO_ID_PATTERN.match(video_id.strip()) is not None


def validate_url(link: str) -> bool:
    """Return ``True`` when a video id can be parsed out of *link*.

    Never raises.
    """
    try:
        parse_url(link)
    except InvalidURLError:
        return False
    return True


def validate_query_type(query: object, query_type: object) -> bool:
    """Admission gate: accept only string queries of a supported type."""
    if not isinstance(query, str):
        return False
    return QueryType.coerce(query_type) in SUPPORTED_QUERY_TYPES


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_url(link: str) -> str:
    """Extract the video id from *link*.

    Raises
    ------
    VideoIdNotFoundError
        When no identifier can be located (including non-URL text).
    DomainMismatchError
        When the host is present but not a YouTube domain.
    InvalidVideoIdError
        When the located identifier is malformed.
    """
    stripped = link.strip()
    try:
        parsed = urlsplit(stripped)
    except ValueError as exc:
        raise VideoIdNotFoundError(f'No video id found: "{link}"') from exc
    if not parsed.scheme or not parsed.netloc:
        raise VideoIdNotFoundError(f'No video id found: "{link}"')

    values = parse_qs(parsed.query).get("v")
    video_id: str | None = values[0] if values else None

    if VALID_PATH_DOMAINS.match(stripped) and not video_id:
        paths = parsed.path.split("/")
        index = 1 if parsed.netloc.lower() == SHORT_LINK_HOST else 2
        video_id = paths[index] if len(paths) > index else None
    elif parsed.hostname and parsed.hostname not in VALID_QUERY_DOMAINS:
        raise DomainMismatchError(
            "Not a YouTube domain",
            hint=f"Unrecognised host: {parsed.hostname}",
        )

    if not video_id:
        raise VideoIdNotFoundError(f'No video id found: "{link}"')

    video_id = video_id[:VIDEO_ID_LENGTH]
    if not validate_id(video_id):
        raise InvalidVideoIdError(
            f"Video id ({video_id}) does not match expected "
            f"format ({VIDEO_ID_PATTERN.pattern})",
        )
    return video_id


# ---------------------------------------------------------------------------
# Rewriting
# ---------------------------------------------------------------------------

def canonicalize_url(text: str) -> str:
    """Collapse ``m.``/``music.``/``gaming.`` YouTube hosts onto the base domain.

    Text that does not reference ``youtube.com`` is returned unchanged.
    Applying the function twice gives the same result as applying it once.
    """
    if "youtube.com" not in text:
        return text
    return _ALTERNATE_HOST_PREFIX.sub("", text)


def watch_url(video_id: str) -> str:
    """Return the canonical watch-page URL for *video_id*."""
    return WATCH_URL_TEMPLATE.format(video_id=video_id)
