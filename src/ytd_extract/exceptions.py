"""Custom exception hierarchy for ytd-extract.

All exceptions that cross layer boundaries must inherit from
:class:`YtdExtractError`.  Raw third-party exceptions (e.g. from yt-dlp)
must NEVER propagate beyond the infrastructure layer — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
YtdExtractError
├── InvalidURLError
│   ├── VideoIdNotFoundError
│   ├── DomainMismatchError
│   └── InvalidVideoIdError
├── MetadataExtractionError
│   └── VideoUnavailableError
├── ExtractionError
└── EnvironmentError
    ├── YtDlpNotFoundError
    └── ConfigurationError
"""

from __future__ import annotations


class YtdExtractError(Exception):
    """Base exception for all ytd-extract errors.

    Every error condition surfaced to the host player or to the CLI maps
    to a subclass of this exception so that callers can render a clean
    message without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Identifier parsing ----------------------------------------------------

class InvalidURLError(YtdExtractError):
    """Raised when a link does not point at a single YouTube video."""


class VideoIdNotFoundError(InvalidURLError):
    """Raised when no video identifier can be located in the link."""


class DomainMismatchError(InvalidURLError):
    """Raised when the link's host is not a known YouTube domain."""


class InvalidVideoIdError(InvalidURLError):
    """Raised when the located identifier is not an 11-character video id."""


# --- Catalog lookups -------------------------------------------------------

class MetadataExtractionError(YtdExtractError):
    """Raised when yt-dlp fails to fetch video, playlist or search metadata."""


class VideoUnavailableError(MetadataExtractionError):
    """Raised when the target video is unavailable (private, removed, etc.)."""


# --- Audio extraction ------------------------------------------------------

class ExtractionError(YtdExtractError):
    """Raised when the yt-dlp process fails to produce an audio file."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(YtdExtractError):
    """Raised when a required runtime dependency is not available."""


class YtDlpNotFoundError(EnvironmentError):
    """Raised when no yt-dlp executable can be located."""


class ConfigurationError(EnvironmentError):
    """Raised when an environment variable holds an unusable value."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
