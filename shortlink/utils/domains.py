"""Domain frequency aggregation

Functions:
    extract_domain(long_url) -> str
        Host of a URL with a leading 'www.' removed, or 'unknown'.
    rank_domains(long_urls, limit) -> list[DomainMetricsModel]
        Most frequent domains, most frequent first.

Example:
    >>> extract_domain('https://www.youtube.com/watch?v=abc')
    'youtube.com'
    >>> extract_domain('not a url')
    'unknown'
    >>> rank_domains(['https://a.com/1', 'https://b.com', 'https://a.com/2'], 1)
    [DomainMetricsModel(domain='a.com', count=2)]
"""

import re
from collections import Counter
from collections.abc import Iterable
from urllib.parse import urlsplit

from shortlink.constants import Defaults
from shortlink.models import DomainMetricsModel


WWW_PREFIX = 'www.'

# Dot-separated ASCII labels (names, IPv4) or a bracketless IPv6 literal
HOST_PATTERN = re.compile(r'(?:[a-z0-9-]+\.)*[a-z0-9-]+\.?|[0-9a-f:.]+')


def extract_domain(long_url: str) -> str:
    """Return the host of a URL, without a leading 'www.'

    URLs which cannot be parsed, have no host, or whose host contains
    characters outside letters, digits, '-' and '.' map to the 'unknown'
    sentinel instead of raising.

    NOTE: the host is lowercased by urlsplit().hostname. urlsplit() itself
          accepts hosts such as 'you tube.com', hence the HOST_PATTERN check.
          Non-ASCII (IDN) and underscore hosts are counted as 'unknown'.
          No other normalization (IDNA, trailing dots, ports) is applied.
    """
    try:
        host = urlsplit(long_url).hostname
    except ValueError:
        return Defaults.UNKNOWN_DOMAIN

    if not host or not HOST_PATTERN.fullmatch(host):
        return Defaults.UNKNOWN_DOMAIN
    return host.removeprefix(WWW_PREFIX) or Defaults.UNKNOWN_DOMAIN


def rank_domains(long_urls: Iterable[str], limit: int) -> list[DomainMetricsModel]:
    """Count URLs per domain and return the `limit` most frequent

    Args:
        long_urls (Iterable[str]):
            URLs to aggregate. Every URL is counted, including the ones
            falling into the 'unknown' bucket.

        limit (int):
            Maximum number of domains returned. Non-positive values yield [].

    Returns:
        list[DomainMetricsModel]:
            Sorted by count descending; equal counts are ordered by domain
            name ascending so results are reproducible.
    """
    if limit <= 0:
        return []

    counts = Counter(extract_domain(url) for url in long_urls)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [DomainMetricsModel(domain=domain, count=count) for domain, count in ranked[:limit]]
