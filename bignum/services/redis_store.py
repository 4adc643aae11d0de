"""Redis store client."""
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import redis

from bignum.config import get_settings
from bignum.errors import ConversionError, StoreError
from bignum.services.store import Key, KeyRef

logger = logging.getLogger(__name__)


class RedisStore:
    """Redis-backed store for decimal text values.

    Read-modify-write goes through an optimistic transaction: the key is
    WATCHed, read, recomputed and written inside MULTI/EXEC. If another
    client writes the key in between, EXEC aborts and the whole cycle is
    retried up to ``max_watch_retries`` times.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        socket_timeout: Optional[float] = None,
        max_watch_retries: int = 32,
        client: Optional[redis.Redis] = None,
    ):
        self.client = client or redis.Redis(
            host=host,
            port=port,
            db=db,
            password=password,
            socket_timeout=socket_timeout,
            decode_responses=True,
        )
        self.max_watch_retries = max_watch_retries

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except UnicodeDecodeError as e:
            # Stored bytes that are not UTF-8 cannot be decimal text.
            raise ConversionError() from e
        except redis.RedisError as e:
            logger.warning(f"Redis error: {e}")
            raise StoreError(str(e)) from e

    async def health_check(self) -> tuple[bool, Optional[str]]:
        """Check if Redis connection is healthy."""
        try:
            self.client.ping()
            return True, None
        except redis.RedisError as e:
            return False, str(e)

    def get(self, key: Key) -> Optional[str]:
        with self._translate_errors():
            return self.client.get(key)

    def set(self, key: Key, value: str) -> None:
        with self._translate_errors():
            self.client.set(key, value)

    def hget(self, container: Key, field: Key) -> Optional[str]:
        with self._translate_errors():
            return self.client.hget(container, field)

    def hset(self, container: Key, field: Key, value: str) -> None:
        with self._translate_errors():
            self.client.hset(container, field, value)

    def fetch(self, ref: KeyRef) -> Optional[str]:
        """Read the text stored at ``ref``; ``None`` when absent."""
        if ref.is_hash:
            return self.hget(ref.key, ref.field)
        return self.get(ref.key)

    def store(self, ref: KeyRef, value: str) -> None:
        """Write ``value`` at ``ref``."""
        if ref.is_hash:
            self.hset(ref.key, ref.field, value)
        else:
            self.set(ref.key, value)

    def update(self, ref: KeyRef, compute: Callable[[Optional[str]], str]) -> str:
        """Atomically replace the value at ``ref`` with ``compute(current)``.

        Exceptions raised by ``compute`` abort the transaction with nothing
        written.

        Raises:
            ConversionError: The stored bytes are not UTF-8 text.
            StoreError: Redis failed, or the key kept changing for
                ``max_watch_retries`` attempts.
        """
        for attempt in range(1, self.max_watch_retries + 1):
            with self._translate_errors(), self.client.pipeline() as pipe:
                try:
                    pipe.watch(ref.key)
                    if ref.is_hash:
                        current = pipe.hget(ref.key, ref.field)
                    else:
                        current = pipe.get(ref.key)
                    value = compute(current)
                    pipe.multi()
                    if ref.is_hash:
                        pipe.hset(ref.key, ref.field, value)
                    else:
                        pipe.set(ref.key, value)
                    pipe.execute()
                    return value
                except redis.WatchError:
                    logger.info(
                        f"Concurrent write on {ref}, retrying "
                        f"({attempt}/{self.max_watch_retries})"
                    )
        raise StoreError(
            f"ERR {ref} was modified concurrently {self.max_watch_retries} times, giving up"
        )

    def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern."""
        with self._translate_errors():
            count = 0
            for key in self.client.scan_iter(match=pattern):
                self.client.delete(key)
                count += 1
            return count


# Singleton instance
_redis_store: Optional[RedisStore] = None


def get_redis_store() -> RedisStore:
    """Get or create Redis store singleton."""
    global _redis_store
    if _redis_store is None:
        settings = get_settings()
        _redis_store = RedisStore(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            password=settings.redis_password,
            socket_timeout=settings.redis_socket_timeout,
            max_watch_retries=settings.max_watch_retries,
        )
    return _redis_store
