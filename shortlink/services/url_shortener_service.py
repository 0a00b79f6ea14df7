"""URL shortening service

The service is the only entry point external layers (HTTP handlers, the CLI)
call into. It owns code assignment, deduplication, lookups, access tracking
and domain metrics, and delegates all state to a UrlRecordBaseDAO.

Classes:
    UrlShortenerService:
        Shorten, resolve and track URLs on top of a data store.

Example:
    >>> from shortlink.dao.memory import UrlRecordMemoryDAO
    >>> service = UrlShortenerService(UrlRecordMemoryDAO())
    >>> record = service.shorten('https://www.udemy.com/course/python')
    >>> service.resolve(record.short_code) == record
    True
    >>> service.record_access(record.short_code)
    >>> service.resolve(record.short_code).access_count
    1
    >>> service.top_domains(3)
    [DomainMetricsModel(domain='udemy.com', count=1)]
"""

import logging

from shortlink.constants import Defaults, ShortCode
from shortlink.dao.base import UrlRecordBaseDAO
from shortlink.dao.exceptions import ShortCodeTakenError
from shortlink.exceptions import ShortCodeExhaustedError
from shortlink.models import DomainMetricsModel, UrlRecordModel
from shortlink.utils.domains import rank_domains
from shortlink.utils.helpers import get_short_url, utc_now
from shortlink.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


class UrlShortenerService:
    """Shorten long URLs into fixed-length codes and resolve them back

    Attributes:
        dao (UrlRecordBaseDAO):
            Data store holding the URL records.
        base_url (str):
            Public base URL used to compose short URLs.
        max_retries (int):
            Upper bound of collision retries for a single URL.
    """

    def __init__(
        self,
        dao: UrlRecordBaseDAO,
        base_url: str = Defaults.BASE_URL,
        max_retries: int = ShortCode.MAX_COLLISION_RETRIES,
    ):
        self.dao = dao
        self.base_url = base_url
        self.max_retries = max_retries

    def shorten(self, long_url: str) -> UrlRecordModel:
        """Return the record of a long URL, creating it on first use

        Procedure:
        - Step 1: Return the existing record if the URL was shortened before
        - Step 2: Hash the URL into a candidate code
        - Step 3: On collision, hash the URL with an appended attempt counter
                  (0, 1, 2, ...) until a free code is found
        - Step 4: Insert the record atomically keyed by the long URL

        Shortening the same string twice always returns the same record. If a
        concurrent caller inserts the same URL first, its record is returned.

        NOTE: the caller is responsible for validating `long_url` (scheme,
              length, private addresses). No normalization is applied.

        Args:
            long_url (str):
                The URL to shorten.

        Returns:
            UrlRecordModel: The new or already existing record.

        Raises:
            ShortCodeExhaustedError:
                If no free code was found within `max_retries` attempts.
            DataStoreError:
                If the data store fails.
        """
        existing = self.dao.get_by_long_url(long_url)
        if existing is not None:
            logger.debug('Long URL already shortened.', extra={'shortCode': existing.short_code})
            return existing

        candidate = generate_shortcode(long_url)
        attempt = 0
        while True:
            if not self.dao.exists(candidate):
                record = UrlRecordModel(short_code=candidate, long_url=long_url, created_at=utc_now(), access_count=0)
                try:
                    stored = self.dao.put_if_absent(record)
                except ShortCodeTakenError:
                    # Another URL claimed the code between the exists() check and insert
                    pass
                else:
                    if stored is record:
                        logger.info('Created short URL.', extra={'shortCode': stored.short_code, 'attempts': attempt})
                    return stored

            if attempt >= self.max_retries:
                raise ShortCodeExhaustedError(f'No free short code found after {self.max_retries} attempts.')

            logger.info('Short code collision, retrying.', extra={'shortCode': candidate, 'attempt': attempt})
            candidate = generate_shortcode(long_url, attempt=attempt)
            attempt += 1

    def resolve(self, short_code: str) -> UrlRecordModel | None:
        """Look up a record by short code without touching its access counter"""
        record = self.dao.get(short_code)
        if record is None:
            logger.debug('Short code not found.', extra={'shortCode': short_code})
        return record

    def record_access(self, short_code: str) -> None:
        """Count one access of a short code. Unknown codes are ignored."""
        if self.dao.increment_access_count(short_code) is None:
            logger.debug('Access to unknown short code ignored.', extra={'shortCode': short_code})

    def top_domains(self, n: int = Defaults.TOP_DOMAINS) -> list[DomainMetricsModel]:
        """Return the `n` most shortened domains, most frequent first

        Equal counts are ordered by domain name. URLs without a parseable host
        are counted under 'unknown'.
        """
        return rank_domains((record.long_url for record in self.dao.all()), n)

    def short_url(self, short_code: str, base_url: str | None = None) -> str:
        """Compose the public short URL of a code, e.g. 'http://localhost:8081/aZ3kP9q'"""
        return get_short_url(short_code, base_url or self.base_url)
