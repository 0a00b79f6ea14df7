from shortlink.dao.base import UrlRecordBaseDAO
from shortlink.dao.memory import UrlRecordMemoryDAO
from shortlink.dao.redis import UrlRecordRedisDAO
from shortlink.dao.factory import dao_from_config


__all__ = [
    'UrlRecordBaseDAO',
    'UrlRecordMemoryDAO',
    'UrlRecordRedisDAO',
    'dao_from_config',
]
