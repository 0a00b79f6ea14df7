"""Redis connection helpers shared by Redis-backed DAOs

Functions:
    connection_address(client) -> str
        'host:port/db' of a client, as shown in connectivity error messages.

    client_from_config(config) -> redis.Redis
        Build a client from the `redis` section of the configuration document.

    handle_redis_connection_error(method)
        Decorator turning redis ConnectionError into DataStoreError.

Example:
    >>> client = client_from_config({'host': 'localhost', 'port': 6379, 'db': 0})
    >>> connection_address(client)
    'localhost:6379/0'
"""

import functools
from typing import Any
from collections.abc import Callable

import redis

from shortlink.dao.exceptions import DataStoreError
from shortlink.exceptions import BadConfigurationError


CONNECTION_OPTIONS = frozenset({'host', 'port', 'db', 'username', 'password', 'socket_timeout'})
INTEGER_OPTIONS = ('port', 'db')


def connection_address(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def client_from_config(config: dict[str, Any]) -> redis.Redis:
    """Build a Redis client from the backend section of the configuration

    Responses are always decoded: UrlRecordModel.from_dict() expects str values.

    Args:
        config (dict[str, Any]):
            Connection options, e.g. {'host': 'localhost', 'port': 6379, 'db': 0}.
            Missing options fall back to the redis-py defaults.

    Returns:
        redis.Redis: A client which has not contacted the server yet.

    Raises:
        BadConfigurationError:
            If an option is unknown, or port/db are not integers.
    """
    unknown = set(config) - CONNECTION_OPTIONS
    if unknown:
        raise BadConfigurationError(f"Unsupported Redis options: {', '.join(sorted(unknown))}.")

    options = dict(config)
    for key in INTEGER_OPTIONS:
        if key not in options:
            continue
        try:
            options[key] = int(options[key])
        except (TypeError, ValueError) as e:
            raise BadConfigurationError(f"Redis option '{key}' must be an integer (given value: {options[key]!r}).") from e

    return redis.Redis(**options, decode_responses=True)


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Other redis errors (ResponseError, WatchError, ...) propagate unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def count(self):
        ...     return self.redis.scard('links:codes')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {connection_address(self.redis)}.") from e

    return wrapper
