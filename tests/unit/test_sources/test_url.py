"""Unit tests for URL canonicalization and deduplication."""

import pytest

from ai_briefing.sources.url import canonicalize_url, dedupe_sources
from tests.helpers.factories import make_source
from tests.helpers.time import hours_ago


class TestCanonicalizeUrl:
    """Tests for canonicalize_url."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            (
                "https://www.example.com/a?utm_source=x&id=3#frag",
                "https://example.com/a?id=3",
            ),
            (
                "https://example.com/a?fbclid=1&gclid=2&mc_cid=3&mc_eid=4",
                "https://example.com/a",
            ),
            ("https://example.com/a?b=2&a=1", "https://example.com/a?b=2&a=1"),
            ("https://example.com/a#section", "https://example.com/a"),
        ],
    )
    def test_canonicalize(self, url: str, expected: str) -> None:
        """Test tracking parameters, fragments and www are removed."""
        assert canonicalize_url(url) == expected

    @pytest.mark.parametrize("url", ["", "not a url", "/relative/path"])
    def test_non_absolute_unchanged(self, url: str) -> None:
        """Test values without scheme and host pass through."""
        assert canonicalize_url(url) == url


class TestDedupeSources:
    """Tests for dedupe_sources."""

    def test_keeps_most_recent(self) -> None:
        """Test duplicates collapse onto the most recent item."""
        items = [
            make_source(
                "old",
                url="https://www.example.com/a?utm_medium=rss",
                published_at=hours_ago(5),
            ),
            make_source("new", url="https://example.com/a", published_at=hours_ago(1)),
            make_source("other", url="https://example.com/b", published_at=hours_ago(3)),
        ]
        deduped = dedupe_sources(items)

        assert [i.source_id for i in deduped] == ["new", "other"]
        assert deduped[0].url == "https://example.com/a"

    def test_rewrites_url(self) -> None:
        """Test kept items carry the canonical URL."""
        item = make_source(url="https://www.example.com/x?utm_source=feed")
        assert dedupe_sources([item])[0].url == "https://example.com/x"
