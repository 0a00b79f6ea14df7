"""Redis mixin attaching a client and a key schema to Redis-backed DAOs

Example:
    >>> class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    ...     pass
    ...
    >>> dao = UrlRecordRedisDAO(config={'host': 'localhost', 'port': 6379}, prefix='shortlink:dev')
    >>> dao.keys.codes_key()
    'shortlink:dev:links:codes'
"""

from typing import Any

import redis

from shortlink.dao.redis.redis_key_schema import RedisKeySchema
from shortlink.dao.redis.helpers import client_from_config, connection_address
from shortlink.dao.exceptions import DataStoreError


class RedisClientMixin:
    """Client setup and connectivity check for Redis-backed DAOs

    Attributes:
        redis (redis.Redis):
            Client used by the DAO methods.

        keys (RedisKeySchema):
            Namespaced key names of the records.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        """Attach a Redis client and PING it

        Args:
            config (dict[str, Any] | None):
                The `redis` section of the configuration document. Ignored
                when `redis_client` is given.

            redis_client (redis.Redis | None):
                Pre-built client, e.g. shared with other components or a test double.

            prefix (str | None):
                Key namespace, usually app_prefix() ('<app>:<env>').

        Raises:
            BadConfigurationError:
                If `config` holds unsupported or malformed options.
            DataStoreError:
                If Redis does not answer the PING.
        """
        self.redis = redis_client if redis_client is not None else client_from_config(config or {})
        self.keys = RedisKeySchema(prefix=prefix)

        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis; return False or raise DataStoreError when unreachable"""
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {connection_address(self.redis)}. Check the `redis` section of the configuration document."
            ) from e
        return True
