from .memory import MemStorage, UserNotFoundError
from .stats import StatsAggregator, STATUS_BUCKETS, status_bucket
from .links import CatalogueProductLinks
from .tables import EntityTable

__all__ = [
    'MemStorage', 'UserNotFoundError',
    'StatsAggregator', 'STATUS_BUCKETS', 'status_bucket',
    'CatalogueProductLinks', 'EntityTable',
]
