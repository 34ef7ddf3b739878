from .api import LaunchesClient
from .cache import QueryCache, query_key
from .driver import PaginationDriver

__all__ = ["LaunchesClient", "QueryCache", "query_key", "PaginationDriver"]
