"""Build the configured data store backend

Example:
    >>> from shortlink.utils.config import load_config
    >>> dao = dao_from_config(load_config())
"""

import logging

from shortlink.types import AppConfig
from shortlink.constants import Backend
from shortlink.exceptions import BadConfigurationError
from shortlink.dao.base import UrlRecordBaseDAO
from shortlink.dao.memory import UrlRecordMemoryDAO
from shortlink.dao.redis import UrlRecordRedisDAO
from shortlink.utils.config import app_prefix


logger = logging.getLogger(__name__)


def dao_from_config(config: AppConfig) -> UrlRecordBaseDAO:
    """Instantiate the DAO of the active backend

    Args:
        config (AppConfig):
            Configuration as returned by load_config().

    Returns:
        UrlRecordBaseDAO: Ready to use DAO. Redis DAOs are namespaced with app_prefix().

    Raises:
        BadConfigurationError:
            If the active backend is unsupported, or its section is malformed.
        DataStoreError:
            If the Redis backend is unreachable.
    """
    backend = config.get('active_backend')

    if backend == Backend.MEMORY:
        logger.debug('Using in-memory backend for URL records.')
        return UrlRecordMemoryDAO()

    if backend == Backend.REDIS:
        logger.debug('Using Redis backend for URL records.')
        return UrlRecordRedisDAO(config=config.get(Backend.REDIS) or {}, prefix=app_prefix())

    raise BadConfigurationError(f"Unsupported backend '{backend}'.")
