"""Environment-driven configuration for the extractor.

Every setting has a default, so an empty environment yields a working
configuration.  Values are read once per :meth:`ExtractorConfig.from_env`
call; the extractor never re-reads the environment behind the caller's
back.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from ytd_extract.exceptions import ConfigurationError

ENV_PREFIX: str = "YTD_EXTRACT_"

_DEFAULTS: dict[str, str] = {
    "YTD_EXTRACT_AUDIO_FORMAT": "bestaudio[ext=m4a]/m4a",
    "YTD_EXTRACT_SEARCH_LIMIT": "10",
    "YTD_EXTRACT_RELATED_LIMIT": "25",
    "YTD_EXTRACT_PLAYLIST_PAGES": "20",
    "YTD_EXTRACT_LOG_LEVEL": "WARNING",
}


@dataclass(frozen=True, slots=True)
class ExtractorConfig:
    """Static settings shared by every resolution and stream call."""

    ytdlp_binary: str | None = None
    """Explicit yt-dlp executable; auto-detected when ``None``."""

    audio_format: str = _DEFAULTS["YTD_EXTRACT_AUDIO_FORMAT"]
    temp_dir: str | None = None
    search_limit: int = 10
    related_limit: int = 25
    playlist_pages: int = 20
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ExtractorConfig:
        """Build a config from ``YTD_EXTRACT_*`` variables.

        Raises
        ------
        ConfigurationError
            When a numeric setting is not a positive integer.
        """
        env = os.environ if environ is None else environ
        return cls(
            ytdlp_binary=_optional(env, "YTD_EXTRACT_YTDLP_BINARY"),
            audio_format=_coalesce(env, "YTD_EXTRACT_AUDIO_FORMAT"),
            temp_dir=_optional(env, "YTD_EXTRACT_TEMP_DIR"),
            search_limit=_positive_int(env, "YTD_EXTRACT_SEARCH_LIMIT"),
            related_limit=_positive_int(env, "YTD_EXTRACT_RELATED_LIMIT"),
            playlist_pages=_positive_int(env, "YTD_EXTRACT_PLAYLIST_PAGES"),
            log_level=_coalesce(env, "YTD_EXTRACT_LOG_LEVEL").upper(),
        )


def _optional(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key)
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def _coalesce(env: Mapping[str, str], key: str) -> str:
    return _optional(env, key) or _DEFAULTS[key]


def _positive_int(env: Mapping[str, str], key: str) -> int:
    raw = _coalesce(env, key)
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"Environment variable '{key}' must be an integer, got {raw!r}",
        ) from exc
    if value < 1:
        raise ConfigurationError(
            f"Environment variable '{key}' must be positive, got {value}",
        )
    return value
