"""Data Access Object (DAO) implementation for managing URL records in Redis

This module provides a Redis-based implementation of UrlRecordBaseDAO.

Responsibilities:
    - Store records as Redis hashes keyed by short code;
    - Maintain the long URL -> short code reverse index;
    - Track every short code in a set for enumeration;
    - Insert atomically keyed by long URL (optimistic WATCH/MULTI/EXEC);
    - Increment access counters with HINCRBY (no lost updates).

Key layout (see RedisKeySchema):
    <prefix>:links:<code>           hash {long_url, created_at, access_count}
    <prefix>:urls:<long_url>:code   string, reverse index
    <prefix>:links:codes            set of all short codes

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecordModel in a Redis datastore.

Example:
    >>> dao = UrlRecordRedisDAO(prefix="shortlink:dev")
    >>> dao.put_if_absent(record)
    UrlRecordModel(short_code='aZ3kP9q', long_url='https://example.com/page', ...)
    >>> dao.increment_access_count('aZ3kP9q')
    1
"""

import logging

import redis
from beartype import beartype

from shortlink.models import UrlRecordModel
from shortlink.dao.base import UrlRecordBaseDAO
from shortlink.dao.redis.mixins import RedisClientMixin
from shortlink.dao.redis.helpers import handle_redis_connection_error
from shortlink.dao.exceptions import DataStoreError, ShortCodeTakenError


logger = logging.getLogger(__name__)


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for URL records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    NOTE:
        The client must decode responses (decode_responses=True), every
        value read back is expected to be a str.
    """

    @handle_redis_connection_error
    @beartype
    def put(self, record: UrlRecordModel, **kwargs) -> 'UrlRecordRedisDAO':
        """Insert or overwrite a record keyed by its short code

        The hash, reverse index and code set are written in one transaction,
        so a reader never sees a reverse index entry without its record.

        When the code previously held another URL, that URL's reverse index
        entry is dropped only if it still points at this code. Both the record
        key and the stale reverse key are WATCHed until EXEC.

        Example:
            >>> dao.put(record)
            <UrlRecordRedisDAO>
        """
        link_key = self.keys.link_key(record.short_code)

        with self.redis.pipeline() as pipe:
            while True:
                try:
                    pipe.watch(link_key)
                    stale_reverse_key = None
                    previous_url = pipe.hget(link_key, 'long_url')
                    if previous_url is not None and previous_url != record.long_url:
                        reverse_key = self.keys.reverse_key(previous_url)
                        pipe.watch(reverse_key)
                        if pipe.get(reverse_key) == record.short_code:
                            stale_reverse_key = reverse_key

                    pipe.multi()
                    if stale_reverse_key is not None:
                        pipe.delete(stale_reverse_key)
                    pipe.hset(link_key, mapping=record.to_dict())
                    pipe.set(self.keys.reverse_key(record.long_url), record.short_code)
                    pipe.sadd(self.keys.codes_key(), record.short_code)
                    pipe.execute()
                    return self
                except redis.exceptions.WatchError:
                    logger.debug('Concurrent write detected, retrying put.', extra={'shortCode': record.short_code})
                    continue

    @handle_redis_connection_error
    @beartype
    def put_if_absent(self, record: UrlRecordModel, **kwargs) -> UrlRecordModel:
        """Atomically insert a record unless its long URL is already stored

        Both the reverse index key and the record key are WATCHed. If either
        changes between the checks and EXEC, the transaction is aborted by
        Redis (WatchError) and the checks are repeated.

        Raises:
            ShortCodeTakenError:
                If the short code is assigned to a different long URL.
            DataStoreError:
                If Redis connectivity issues occur, or the reverse index points
                at a record that does not exist.
        """
        link_key = self.keys.link_key(record.short_code)
        reverse_key = self.keys.reverse_key(record.long_url)

        with self.redis.pipeline() as pipe:
            while True:
                try:
                    pipe.watch(reverse_key, link_key)
                    existing_code = pipe.get(reverse_key)
                    if existing_code is not None:
                        pipe.unwatch()
                        break
                    if pipe.exists(link_key):
                        pipe.unwatch()
                        raise ShortCodeTakenError(f"Short code '{record.short_code}' is already taken.")

                    pipe.multi()
                    pipe.hset(link_key, mapping=record.to_dict())
                    pipe.set(reverse_key, record.short_code)
                    pipe.sadd(self.keys.codes_key(), record.short_code)
                    pipe.execute()
                    return record
                except redis.exceptions.WatchError:
                    logger.debug('Concurrent write detected, retrying insert.', extra={'shortCode': record.short_code})
                    continue

        existing = self.get(existing_code)
        if existing is None:
            raise DataStoreError(f"Reverse index points at missing short code '{existing_code}'.")
        return existing

    @handle_redis_connection_error
    @beartype
    def get(self, short_code: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a record by short code (HGETALL)

        Example:
            >>> dao.get('aZ3kP9q')
            UrlRecordModel(short_code='aZ3kP9q', long_url='https://example.com', ...)
            >>> dao.get('missing') is None
            True
        """
        data = self.redis.hgetall(self.keys.link_key(short_code))
        if not data:
            return None
        return UrlRecordModel.from_dict(short_code, data)

    @handle_redis_connection_error
    @beartype
    def exists(self, short_code: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_key(short_code)))

    @handle_redis_connection_error
    @beartype
    def get_by_long_url(self, long_url: str, **kwargs) -> UrlRecordModel | None:
        short_code = self.redis.get(self.keys.reverse_key(long_url))
        if short_code is None:
            return None
        return self.get(short_code)

    @handle_redis_connection_error
    def all(self, **kwargs) -> list[UrlRecordModel]:
        """Return every stored record

        Short codes come from the codes set; the hashes are fetched in a
        single non-transactional pipeline round trip.
        """
        short_codes = list(self.redis.smembers(self.keys.codes_key()))
        if not short_codes:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for short_code in short_codes:
                pipe.hgetall(self.keys.link_key(short_code))
            rows = pipe.execute()

        return [UrlRecordModel.from_dict(short_code, data) for short_code, data in zip(short_codes, rows) if data]

    @handle_redis_connection_error
    @beartype
    def increment_access_count(self, short_code: str, **kwargs) -> int | None:
        """Increment a record's access counter (HINCRBY)

        NOTE: HINCRBY on a missing hash would create it. The EXISTS check
              guards against creating phantom records; records are never
              deleted, so the check cannot go stale before the increment.

        Example:
            >>> dao.increment_access_count('aZ3kP9q')
            43
            >>> dao.increment_access_count('missing') is None
            True
        """
        link_key = self.keys.link_key(short_code)
        if not self.redis.exists(link_key):
            return None
        return int(self.redis.hincrby(link_key, 'access_count', 1))

    @handle_redis_connection_error
    def count(self, **kwargs) -> int:
        return int(self.redis.scard(self.keys.codes_key()))
