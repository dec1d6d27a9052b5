"""Tests for YouTube link classification (core/url_classifier.py).

Pure functions — no mocking required.
"""

from __future__ import annotations

import pytest

from ytd_extract.core.models import QueryType
from ytd_extract.core.url_classifier import (
    canonicalize_url,
    is_radio_mix,
    is_recognized_host,
    parse_url,
    validate_id,
    validate_query_type,
    validate_url,
    watch_url,
)
from ytd_extract.exceptions import (
    DomainMismatchError,
    InvalidURLError,
    InvalidVideoIdError,
    VideoIdNotFoundError,
)

VIDEO_ID = "dQw4w9WgXcQ"


# ---------------------------------------------------------------------------
# parse_url
# ---------------------------------------------------------------------------

class TestParseUrl:
    @pytest.mark.parametrize(
        "link",
        [
            f"https://www.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtube.com/watch?v={VIDEO_ID}&t=42",
            f"https://m.youtube.com/watch?v={VIDEO_ID}",
            f"https://music.youtube.com/watch?v={VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}",
            f"https://youtu.be/{VIDEO_ID}?si=abcdef",
            f"https://www.youtube.com/embed/{VIDEO_ID}",
            f"https://youtube.com/v/{VIDEO_ID}",
            f"https://www.youtube.com/shorts/{VIDEO_ID}",
            f"  https://www.youtube.com/watch?v={VIDEO_ID}  ",
        ],
    )
    def test_extracts_id(self, link: str) -> None:
        assert parse_url(link) == VIDEO_ID

    def test_query_param_wins_over_path(self) -> None:
        other = "aaaaaaaaaaa"
        assert parse_url(f"https://www.youtube.com/embed/{other}?v={VIDEO_ID}") == VIDEO_ID

    def test_short_link_with_query_param_is_foreign(self) -> None:
        with pytest.raises(DomainMismatchError):
            parse_url(f"https://youtu.be/aaaaaaaaaaa?v={VIDEO_ID}")

    def test_truncates_to_eleven_characters(self) -> None:
        assert parse_url(f"https://www.youtube.com/watch?v={VIDEO_ID}extra") == VIDEO_ID

    def test_foreign_domain_raises(self) -> None:
        with pytest.raises(DomainMismatchError):
            parse_url(f"https://vimeo.com/watch?v={VIDEO_ID}")

    def test_missing_id_raises(self) -> None:
        with pytest.raises(VideoIdNotFoundError):
            parse_url("https://www.youtube.com/feed/trending")

    def test_short_id_raises(self) -> None:
        with pytest.raises(InvalidVideoIdError):
            parse_url("https://www.youtube.com/watch?v=short")

    def test_illegal_characters_raise(self) -> None:
        with pytest.raises(InvalidVideoIdError):
            parse_url("https://youtu.be/abc$%^&*()!")

    @pytest.mark.parametrize("text", ["never gonna give you up", "", "youtube.com/watch"])
    def test_non_absolute_text_raises(self, text: str) -> None:
        with pytest.raises(VideoIdNotFoundError):
            parse_url(text)

    def test_playlist_link_without_video_has_no_id(self) -> None:
        with pytest.raises(InvalidURLError):
            parse_url("https://www.youtube.com/playlist?list=PL1234567890")


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

class TestValidateUrl:
    def test_true_for_video_link(self) -> None:
        assert validate_url(f"https://youtu.be/{VIDEO_ID}") is True

    @pytest.mark.parametrize(
        "text",
        [
            "https://example.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/playlist?list=PL1234567890",
            "plain search text",
            "http://[::1",
        ],
    )
    def test_false_never_raises(self, text: str) -> None:
        assert validate_url(text) is False


class TestValidateId:
    def test_accepts_well_formed(self) -> None:
        assert validate_id(VIDEO_ID)
        assert validate_id("a-b_c-d_e-f")

    def test_surrounding_whitespace_ignored(self) -> None:
        assert validate_id(f"  {VIDEO_ID}\n")

    @pytest.mark.parametrize("value", ["", "short", f"{VIDEO_ID}x", "abc def ghi"])
    def test_rejects_malformed(self, value: str) -> None:
        assert not validate_id(value)


class TestRecognizedHost:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=x",
            "https://gaming.youtube.com/",
            f"https://youtu.be/{VIDEO_ID}",
        ],
    )
    def test_recognized(self, url: str) -> None:
        assert is_recognized_host(url)

    def test_unrecognized(self) -> None:
        assert not is_recognized_host("https://notyoutube.com/watch?v=x")


class TestRadioMix:
    def test_detects_mix(self) -> None:
        assert is_radio_mix(f"https://www.youtube.com/watch?v={VIDEO_ID}&list=RD{VIDEO_ID}")

    def test_regular_playlist_is_not_mix(self) -> None:
        assert not is_radio_mix("https://www.youtube.com/playlist?list=PL1234567890")


class TestValidateQueryType:
    @pytest.mark.parametrize("query_type", list(QueryType))
    def test_supported_members(self, query_type: QueryType) -> None:
        assert validate_query_type("anything", query_type)

    def test_plain_string_type(self) -> None:
        assert validate_query_type("anything", "youtubePlaylist")

    @pytest.mark.parametrize("query_type", ["spotifySong", None, 42])
    def test_unsupported_type(self, query_type: object) -> None:
        assert validate_query_type("anything", query_type) is False

    @pytest.mark.parametrize("query", [None, 42, ["a"], b"bytes"])
    def test_non_string_query(self, query: object) -> None:
        assert validate_query_type(query, QueryType.AUTO) is False


# ---------------------------------------------------------------------------
# Rewriting
# ---------------------------------------------------------------------------

class TestCanonicalize:
    @pytest.mark.parametrize("prefix", ["m.", "music.", "gaming."])
    def test_collapses_alternate_host(self, prefix: str) -> None:
        url = f"https://{prefix}youtube.com/watch?v={VIDEO_ID}"
        assert canonicalize_url(url) == f"https://youtube.com/watch?v={VIDEO_ID}"

    def test_base_domain_untouched(self) -> None:
        url = f"https://www.youtube.com/watch?v={VIDEO_ID}"
        assert canonicalize_url(url) == url

    def test_search_text_untouched(self) -> None:
        assert canonicalize_url("music. youtube remix") == "music. youtube remix"

    def test_other_hosts_untouched(self) -> None:
        url = "https://m.example.com/?ref=youtube.com"
        assert canonicalize_url(url) == url

    @pytest.mark.parametrize(
        "text",
        [
            f"https://music.youtube.com/watch?v={VIDEO_ID}",
            "https://m.m.youtube.com/",
            "music.youtube.com/playlist?list=PL1",
            "plain text",
        ],
    )
    def test_idempotent(self, text: str) -> None:
        once = canonicalize_url(text)
        assert canonicalize_url(once) == once


def test_watch_url() -> None:
    assert watch_url(VIDEO_ID) == f"https://www.youtube.com/watch?v={VIDEO_ID}"
