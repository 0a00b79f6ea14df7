from shortlink.models import UrlRecordModel, DomainMetricsModel
from shortlink.services import UrlShortenerService


__version__ = '0.1.0'

__all__ = [
    'UrlRecordModel',
    'DomainMetricsModel',
    'UrlShortenerService',
]
