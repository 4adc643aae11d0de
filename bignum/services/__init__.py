"""Services package - store clients."""
from .store import Key, KeyRef, StoreClient
from .redis_store import RedisStore, get_redis_store

__all__ = [
    "Key",
    "KeyRef",
    "StoreClient",
    "RedisStore",
    "get_redis_store",
]
