from shortlink.models.url_record_model import UrlRecordModel
from shortlink.models.domain_metrics_model import DomainMetricsModel


__all__ = [
    'UrlRecordModel',
    'DomainMetricsModel',
]
