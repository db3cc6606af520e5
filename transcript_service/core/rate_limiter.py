"""
Per-client request counting for the API.

The window is a reset-on-expiry counter: once ``window`` seconds have passed
since the first request of a window, the next request starts a new one with
a count of 1. Counting is delegated to a ``RateLimitStore`` so the in-memory
map can be replaced by a shared store when running several instances.
"""

import threading
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional

from pydantic import BaseModel

from transcript_service.utils.errors import RateLimitError
from transcript_service.utils.logger import logging


class RateLimitRecord(BaseModel):
    """Request count for one client address in the current window."""
    count: int = 1
    first_request: float


class RateLimitStore(ABC):
    """Interface for rate limit storage backends."""

    @abstractmethod
    def hit(self, key: str, now: float, window: float) -> RateLimitRecord:
        """
        Register a request for ``key`` and return the updated record.

        Implementations must start a new window (count 1) when no record
        exists or ``now - first_request > window``, and increment otherwise.
        """


class InMemoryRateLimitStore(RateLimitStore):
    """Process-local store. Entries are only replaced, never evicted."""

    def __init__(self):
        self._records: Dict[str, RateLimitRecord] = {}
        self._lock = threading.Lock()

    def hit(self, key: str, now: float, window: float) -> RateLimitRecord:
        with self._lock:
            record = self._records.get(key)
            if record is None or now - record.first_request > window:
                record = RateLimitRecord(count=1, first_request=now)
                self._records[key] = record
            else:
                record.count += 1
            return record.model_copy()


class RedisRateLimitStore(RateLimitStore):
    """Store shared between instances, using one expiring counter per client."""

    def __init__(self, client, prefix: str = "ratelimit"):
        """
        Args:
            client: A ``redis.Redis`` client
            prefix: Prefix for the counter keys
        """
        self.client = client
        self.prefix = prefix

    @classmethod
    def from_url(cls, redis_url: str, prefix: str = "ratelimit") -> "RedisRateLimitStore":
        import redis

        client = redis.from_url(redis_url)
        client.ping()
        logging.info("Redis rate limit store configured successfully")
        return cls(client, prefix)

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def _record(self, count: int, ttl_ms: int, now: float, window: float) -> RateLimitRecord:
        remaining = ttl_ms / 1000 if ttl_ms and ttl_ms > 0 else window
        return RateLimitRecord(count=count, first_request=now - (window - remaining))

    def hit(self, key: str, now: float, window: float) -> RateLimitRecord:
        redis_key = self._key(key)
        # NX only sets the expiry when the key has none, so the window start is kept
        pipe = self.client.pipeline(transaction=True)
        pipe.incr(redis_key)
        pipe.pexpire(redis_key, int(window * 1000), nx=True)
        pipe.pttl(redis_key)
        count, _, ttl_ms = pipe.execute()
        return self._record(int(count), ttl_ms, now, window)


class RateLimiter:
    """Allow at most ``max_requests`` per client address per window."""

    def __init__(self, store: RateLimitStore, window: float = 15 * 60, max_requests: int = 10):
        self.store = store
        self.window = window
        self.max_requests = max_requests

    def hit(self, client_id: str, now: Optional[float] = None) -> RateLimitRecord:
        """
        Count a request from ``client_id``.

        Raises:
            RateLimitError: If the request exceeds the limit for the window
        """
        now = time.time() if now is None else now
        record = self.store.hit(client_id, now, self.window)
        if record.count > self.max_requests:
            logging.warning(f"Rate limit exceeded for {client_id} ({record.count} requests)")
            raise RateLimitError("Too many requests. Please try again later.")
        return record
