"""Helper utilities.

Functions:
    get_short_url(short_code: str, base_url: str) -> str
        Get string representation of short URL for a given short code
    utc_now() -> datetime
        Current moment as a timezone-aware UTC datetime

Example:
    >>> get_short_url('aZ3kP9q', 'https://sho.rt/')
    'https://sho.rt/aZ3kP9q'
"""

from datetime import datetime, UTC


def get_short_url(short_code: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        short_code (str): short code
        base_url (str): public base URL of the shortener, e.g. 'http://localhost:8081'

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{short_code}'


def utc_now() -> datetime:
    """Return the current moment in UTC.

    Example:
        >>> utc_now().tzinfo
        datetime.timezone.utc
    """
    return datetime.now(UTC)
