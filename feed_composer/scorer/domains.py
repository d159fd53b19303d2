"""Registrable domain extraction for browsing signals."""

from urllib.parse import urlparse

from feed_composer.scorer.constants import MULTI_PART_SUFFIXES


_TWO_LETTER_TLD = 2


def base_domain(url: str | None) -> str | None:
    """Get the registrable domain of a URL.

    ``https://www.news.bbc.co.uk/a`` and ``https://bbc.co.uk`` both map to
    ``bbc.co.uk``; ``https://blog.example.com`` maps to ``example.com``.

    Args:
        url: URL to inspect.

    Returns:
        Lowercased registrable domain, or None if the URL has no host.
    """
    if not url:
        return None

    host = urlparse(url).hostname
    if not host:
        return None

    labels = [label for label in host.lower().rstrip(".").split(".") if label]
    if not labels:
        return None
    if len(labels) <= 2:  # noqa: PLR2004
        return ".".join(labels)

    # IPv4 hosts have no registrable part
    if all(label.isdigit() for label in labels):
        return host

    tld, second = labels[-1], labels[-2]
    if len(tld) == _TWO_LETTER_TLD and second in MULTI_PART_SUFFIXES:
        return ".".join(labels[-3:])
    return ".".join(labels[-2:])
