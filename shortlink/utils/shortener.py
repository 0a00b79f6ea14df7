"""Shortcode generation utility

This module provides helpers for deriving short, deterministic codes from
the content of a long URL.

Functions:
    digest(data) -> bytes:
        One-way digest of a string (SHA-256, with an xxHash fallback).
    encode_base62(number, length=7) -> str:
        Fixed-length Base62 encoding of the lowest digits of a number.
    generate_shortcode(long_url, attempt=None, length=7) -> str:
        Generate a short code suitable for use as a URL slug.

Example:
    >>> from shortlink.utils import generate_shortcode
    >>> len(generate_shortcode('https://example.com/x'))
    7
    >>> generate_shortcode('https://example.com/x') == generate_shortcode('https://example.com/x')
    True
"""

import hashlib
import logging
import string

import xxhash

from shortlink.constants import ShortCode


logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits, URL path safe as is

_digest_fallback_warned = False


def digest(data: str) -> bytes:
    """Compute a one-way digest of a string

    SHA-256 is used whenever the interpreter provides it. Hosts which block it
    (e.g. FIPS-restricted OpenSSL builds raise ValueError) fall back to the
    128-bit XXH3 digest, which is deterministic and well distributed but not
    cryptographic. The fallback is logged once per process.

    Args:
        data (str):
            Input string, encoded as UTF-8 before hashing.

    Returns:
        bytes: The raw digest.
    """
    global _digest_fallback_warned

    payload = data.encode('utf-8')
    try:
        return hashlib.new('sha256', payload).digest()
    except ValueError:
        if not _digest_fallback_warned:
            logger.warning('SHA-256 unavailable on this host, falling back to XXH3-128 for short codes.')
            _digest_fallback_warned = True
        return xxhash.xxh3_128_digest(payload)


def encode_base62(number: int, length: int = ShortCode.LENGTH) -> str:
    """Encode the lowest `length` Base62 digits of a non-negative integer

    Args:
        number (int):
            Non-negative integer to encode.

        length (int, optional):
            Exact length of the result. Defaults to 7.

    Returns:
        str: Base62 string, most significant digit first, zero-padded ('a').

    Example:
        >>> encode_base62(0, length=3)
        'aaa'
        >>> encode_base62(61, length=3)
        'aa9'
    """
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    # 1- Encode the number into base62 digits, least significant first
    # 2- Reverse so the most significant digit comes first
    # 3- Join into a single string
    return ''.join(reversed([ALPHABET[(number // BASE**i) % BASE] for i in range(length)]))


def generate_shortcode(long_url: str, attempt: int | None = None, length: int = ShortCode.LENGTH) -> str:
    """Generate a short, deterministic code for a long URL.

    The URL (optionally perturbed by appending the collision attempt number)
    is digested, the digest is read as a big-endian unsigned integer and its
    lowest `length` Base62 digits become the code. Taking the low digits
    keeps every character close to uniformly distributed.

    Args:
        long_url (str):
            The original URL.

        attempt (int | None, optional):
            Collision attempt counter. None for the first candidate; 0, 1, 2...
            for every retry after a collision. The counter is appended to the
            URL before hashing.

        length (int, optional):
            Length of the code. Defaults to 7.

    Returns:
        str: A code of exactly `length` characters from [a-zA-Z0-9].

    Example:
        >>> generate_shortcode('https://example.com') != generate_shortcode('https://example.com', attempt=0)
        True
    """
    if not isinstance(long_url, str):
        raise TypeError(f'Long URL must be of type string (given type: {type(long_url)}).')
    if attempt is not None and attempt < 0:
        raise ValueError(f'Attempt must be a non-negative integer (given value: {attempt}).')

    seed = long_url if attempt is None else f'{long_url}{attempt}'
    number = int.from_bytes(digest(seed), 'big')
    return encode_base62(number % BASE**length, length=length)
