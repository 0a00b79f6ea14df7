"""Unit tests for helper functions in helpers.py.

Test coverage includes:

1. get_short_url() joins base URL and short code with exactly one slash
2. utc_now() returns the current, timezone-aware UTC moment
"""

from datetime import datetime, UTC

import pytest
from freezegun import freeze_time

from shortlink.utils.helpers import get_short_url, utc_now


# -------------------------------
# 1. get_short_url()
# -------------------------------


@pytest.mark.parametrize(
    'base_url, expected',
    [
        ('http://localhost:8081', 'http://localhost:8081/aZ3kP9q'),
        ('http://localhost:8081/', 'http://localhost:8081/aZ3kP9q'),
        ('https://sho.rt/s', 'https://sho.rt/s/aZ3kP9q'),
    ],
)
def test_get_short_url(base_url, expected):
    assert get_short_url('aZ3kP9q', base_url) == expected


# -------------------------------
# 2. utc_now()
# -------------------------------


@freeze_time('2026-10-19 08:15:00')
def test_utc_now():
    now = utc_now()
    assert now == datetime(2026, 10, 19, 8, 15, 0, tzinfo=UTC)
    assert now.tzinfo is UTC
