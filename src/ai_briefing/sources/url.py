"""URL canonicalization and source deduplication."""

from collections.abc import Iterable
from urllib.parse import parse_qsl, urlencode, urlparse, urlunparse

from ai_briefing.sources.models import SourceItem


# Tracking parameters stripped in addition to every utm_* key
STRIP_PARAMS: frozenset[str] = frozenset({"fbclid", "gclid", "mc_cid", "mc_eid"})


def _is_tracking_param(key: str) -> bool:
    return key.startswith("utm_") or key in STRIP_PARAMS


def canonicalize_url(url: str) -> str:
    """Canonicalize a URL for deduplication.

    Canonicalization includes:
    - Removing the fragment
    - Stripping ``utm_*``, ``fbclid``, ``gclid``, ``mc_cid`` and ``mc_eid``
    - Dropping a leading ``www.`` from the host

    Args:
        url: The URL to canonicalize.

    Returns:
        Canonical URL, or the input unchanged when it is not an absolute URL.
    """
    if not url:
        return url

    try:
        parsed = urlparse(url)
    except ValueError:
        return url
    if not parsed.scheme or not parsed.netloc:
        return url

    netloc = parsed.netloc
    if netloc.lower().startswith("www."):
        netloc = netloc[4:]

    params = [
        (key, value)
        for key, value in parse_qsl(parsed.query, keep_blank_values=True)
        if not _is_tracking_param(key)
    ]
    query = urlencode(params)

    return urlunparse((parsed.scheme, netloc, parsed.path, parsed.params, query, ""))


def dedupe_sources(items: Iterable[SourceItem]) -> list[SourceItem]:
    """Drop items sharing a canonical URL, keeping the most recent.

    Args:
        items: Source items in any order.

    Returns:
        Items sorted by published_at descending, one per canonical URL, with
        ``url`` rewritten to its canonical form.
    """
    seen: set[str] = set()
    deduped: list[SourceItem] = []
    for item in sorted(items, key=lambda i: i.published_at, reverse=True):
        canonical = canonicalize_url(item.url)
        if canonical in seen:
            continue
        seen.add(canonical)
        deduped.append(item.model_copy(update={"url": canonical}))
    return deduped
