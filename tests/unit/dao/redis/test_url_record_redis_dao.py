"""Unit tests for the UrlRecordRedisDAO

Test coverage includes:

1. Insertion behavior (put)
   - Ensures hash, reverse index and code set are written under WATCH/MULTI/EXEC.
   - Ensures overwriting a code with another URL drops the stale reverse entry,
     but never an entry that already points at another code.
   - Ensures concurrent modifications (WatchError) are retried.
   - Ensures invalid types raise TypeError or BeartypeCallHintParamViolation.

2. Atomic insertion keyed by long URL (put_if_absent)
   - Ensures a new record is written under WATCH/MULTI/EXEC.
   - Ensures an already shortened URL returns the stored record, writing nothing.
   - Ensures a code owned by another URL raises ShortCodeTakenError.
   - Ensures concurrent modifications (WatchError) are retried.
   - Ensures a dangling reverse index entry raises DataStoreError.

3. Retrieval behavior
   - get(), exists(), get_by_long_url() hit and miss paths.
   - all() enumerates every stored record in a single pipeline.

4. Access counter
   - Ensures increment_access_count() uses HINCRBY on existing records.
   - Ensures unknown codes are a no-op returning None.

5. Errors
   - Confirms Redis connection errors raise DataStoreError.
"""

import re
from datetime import datetime, UTC
from unittest.mock import MagicMock, call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation

from shortlink.models import UrlRecordModel
from shortlink.dao.exceptions import DataStoreError, ShortCodeTakenError
from shortlink.dao.redis import UrlRecordRedisDAO


# -------------------------------
# Fixtures
# -------------------------------


CREATED_AT = datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def redis_client():
    """Mock a Redis pipeline-compatible client."""
    _redis_client = MagicMock(spec=redis.client.Pipeline)
    _redis_client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': '203.0.113.1', 'port': 18000, 'db': 5},
    )
    _redis_client.exists.return_value = 0
    _redis_client.get.return_value = None
    _redis_client.hget.return_value = None
    _redis_client.hgetall.return_value = {}
    _redis_client.pipeline.return_value = _redis_client
    _redis_client.__enter__.return_value = _redis_client
    _redis_client.__exit__.return_value = None
    return _redis_client


@pytest.fixture
def dao(redis_client):
    return UrlRecordRedisDAO(redis_client=redis_client, prefix='testapp:test')


@pytest.fixture
def record():
    return UrlRecordModel(short_code='abc1234', long_url='https://example.com/test', created_at=CREATED_AT)


@pytest.fixture
def stored_mapping():
    return {
        'long_url': 'https://example.com/test',
        'created_at': CREATED_AT.isoformat(),
        'access_count': '7',
    }


# -------------------------------
# 1. Insertion behavior (put)
# -------------------------------


def test_put_writes_record_and_indexes(dao, redis_client, record):
    assert dao.put(record) is dao

    redis_client.watch.assert_called_once_with('testapp:test:links:abc1234')
    redis_client.hget.assert_called_once_with('testapp:test:links:abc1234', 'long_url')
    redis_client.multi.assert_called_once()
    redis_client.hset.assert_called_once_with('testapp:test:links:abc1234', mapping=record.to_dict())
    redis_client.set.assert_called_once_with('testapp:test:urls:https://example.com/test:code', 'abc1234')
    redis_client.sadd.assert_called_once_with('testapp:test:links:codes', 'abc1234')
    redis_client.delete.assert_not_called()
    redis_client.execute.assert_called_once()


def test_put_overwrite_drops_stale_reverse_entry(dao, redis_client, record):
    redis_client.hget.return_value = 'https://example.com/old'
    redis_client.get.return_value = 'abc1234'

    dao.put(record)

    redis_client.watch.assert_has_calls(
        [call('testapp:test:links:abc1234'), call('testapp:test:urls:https://example.com/old:code')]
    )
    redis_client.get.assert_called_once_with('testapp:test:urls:https://example.com/old:code')
    redis_client.delete.assert_called_once_with('testapp:test:urls:https://example.com/old:code')


def test_put_overwrite_keeps_reverse_entry_owned_by_another_code(dao, redis_client):
    """put(A, L1), put(B, L1), put(A, L2): L1 must keep resolving to B."""
    redis_client.hget.return_value = 'https://l1.example'
    redis_client.get.return_value = 'def5678'

    dao.put(UrlRecordModel(short_code='abc1234', long_url='https://l2.example', created_at=CREATED_AT))

    redis_client.delete.assert_not_called()
    redis_client.set.assert_called_once_with('testapp:test:urls:https://l2.example:code', 'abc1234')


def test_put_same_url_keeps_reverse_entry(dao, redis_client, record):
    redis_client.hget.return_value = record.long_url
    dao.put(record)
    redis_client.get.assert_not_called()
    redis_client.delete.assert_not_called()


def test_put_retries_on_watch_error(dao, redis_client, record):
    redis_client.execute.side_effect = [redis.exceptions.WatchError(), [1, True, 1]]

    assert dao.put(record) is dao
    assert redis_client.watch.call_count == 2
    assert redis_client.execute.call_count == 2


def test_put_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.put('https://example.com/notamodel')


# -------------------------------
# 2. Atomic insertion keyed by long URL
# -------------------------------


def test_put_if_absent_inserts_new_record(dao, redis_client, record):
    stored = dao.put_if_absent(record)

    assert stored is record
    redis_client.watch.assert_called_once_with('testapp:test:urls:https://example.com/test:code', 'testapp:test:links:abc1234')
    redis_client.multi.assert_called_once()
    redis_client.hset.assert_called_once_with('testapp:test:links:abc1234', mapping=record.to_dict())
    redis_client.set.assert_called_once_with('testapp:test:urls:https://example.com/test:code', 'abc1234')
    redis_client.sadd.assert_called_once_with('testapp:test:links:codes', 'abc1234')
    redis_client.execute.assert_called_once()


def test_put_if_absent_returns_existing_record(dao, redis_client, stored_mapping):
    redis_client.get.return_value = 'zzz9999'
    redis_client.hgetall.return_value = stored_mapping
    candidate = UrlRecordModel(short_code='abc1234', long_url='https://example.com/test', created_at=datetime.now(UTC))

    stored = dao.put_if_absent(candidate)

    assert stored.short_code == 'zzz9999'
    assert stored.access_count == 7
    redis_client.unwatch.assert_called_once()
    redis_client.hgetall.assert_called_once_with('testapp:test:links:zzz9999')
    redis_client.multi.assert_not_called()
    redis_client.hset.assert_not_called()


def test_put_if_absent_with_taken_short_code(dao, redis_client, record):
    redis_client.exists.return_value = 1

    with pytest.raises(ShortCodeTakenError, match=re.escape("Short code 'abc1234' is already taken.")):
        dao.put_if_absent(record)

    redis_client.unwatch.assert_called_once()
    redis_client.multi.assert_not_called()
    redis_client.hset.assert_not_called()


def test_put_if_absent_retries_on_watch_error(dao, redis_client, record):
    redis_client.execute.side_effect = [redis.exceptions.WatchError(), [1, True, 1]]

    assert dao.put_if_absent(record) is record
    assert redis_client.watch.call_count == 2
    assert redis_client.execute.call_count == 2


def test_put_if_absent_with_dangling_reverse_entry(dao, redis_client, record):
    redis_client.get.return_value = 'zzz9999'
    redis_client.hgetall.return_value = {}

    with pytest.raises(DataStoreError, match='missing short code'):
        dao.put_if_absent(record)


# -------------------------------
# 3. Retrieval behavior
# -------------------------------


def test_get_record(dao, redis_client, stored_mapping):
    redis_client.hgetall.return_value = stored_mapping

    record = dao.get('abc1234')

    assert isinstance(record, UrlRecordModel)
    assert record.short_code == 'abc1234'
    assert record.long_url == 'https://example.com/test'
    assert record.created_at == CREATED_AT
    assert record.access_count == 7
    redis_client.hgetall.assert_called_once_with('testapp:test:links:abc1234')


def test_get_missing_record(dao):
    assert dao.get('abc1234') is None


def test_get_with_invalid_type(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(12345)


@pytest.mark.parametrize('reply, expected', [(1, True), (0, False)])
def test_exists(dao, redis_client, reply, expected):
    redis_client.exists.return_value = reply
    assert dao.exists('abc1234') is expected
    redis_client.exists.assert_called_once_with('testapp:test:links:abc1234')


def test_get_by_long_url(dao, redis_client, stored_mapping):
    redis_client.get.return_value = 'abc1234'
    redis_client.hgetall.return_value = stored_mapping

    record = dao.get_by_long_url('https://example.com/test')

    assert record.short_code == 'abc1234'
    redis_client.get.assert_called_once_with('testapp:test:urls:https://example.com/test:code')


def test_get_by_long_url_miss(dao, redis_client):
    assert dao.get_by_long_url('https://example.com/unknown') is None
    redis_client.hgetall.assert_not_called()


def test_all_records(dao, redis_client, stored_mapping):
    other = {'long_url': 'https://udemy.com/c', 'created_at': CREATED_AT.isoformat(), 'access_count': '0'}
    redis_client.smembers.return_value = ['abc1234', 'def5678', 'ghost00']
    redis_client.execute.return_value = [stored_mapping, other, {}]

    records = dao.all()

    assert [r.short_code for r in records] == ['abc1234', 'def5678']
    assert [r.long_url for r in records] == ['https://example.com/test', 'https://udemy.com/c']
    redis_client.pipeline.assert_called_once_with(transaction=False)
    redis_client.hgetall.assert_has_calls(
        [call('testapp:test:links:abc1234'), call('testapp:test:links:def5678'), call('testapp:test:links:ghost00')]
    )


def test_all_records_when_empty(dao, redis_client):
    redis_client.smembers.return_value = set()
    assert dao.all() == []
    redis_client.pipeline.assert_not_called()


def test_count(dao, redis_client):
    redis_client.scard.return_value = 3
    assert dao.count() == 3
    redis_client.scard.assert_called_once_with('testapp:test:links:codes')


# -------------------------------
# 4. Access counter
# -------------------------------


def test_increment_access_count(dao, redis_client):
    redis_client.exists.return_value = 1
    redis_client.hincrby.return_value = 8

    assert dao.increment_access_count('abc1234') == 8
    redis_client.hincrby.assert_called_once_with('testapp:test:links:abc1234', 'access_count', 1)


def test_increment_access_count_for_unknown_code(dao, redis_client):
    assert dao.increment_access_count('abc1234') is None
    redis_client.hincrby.assert_not_called()


# -------------------------------
# 5. Errors
# -------------------------------


@pytest.mark.parametrize(
    'method, args',
    [
        ('get', ('abc1234',)),
        ('exists', ('abc1234',)),
        ('get_by_long_url', ('https://example.com',)),
        ('increment_access_count', ('abc1234',)),
        ('count', ()),
    ],
)
def test_redis_connection_error(dao, redis_client, method, args):
    error = redis.exceptions.ConnectionError('Connection error')
    redis_client.hgetall.side_effect = error
    redis_client.exists.side_effect = error
    redis_client.get.side_effect = error
    redis_client.scard.side_effect = error

    with pytest.raises(DataStoreError, match="Can't connect to Redis at 203.0.113.1:18000/5."):
        getattr(dao, method)(*args)
