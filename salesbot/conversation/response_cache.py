"""Short-lived reply cache for the multi-turn demo proxy."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from salesbot.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    reply: str
    expires_at: float


class ResponseCache:
    """Maps a cache key to a reply until its TTL elapses.

    Expired entries are removed when they are read, and every write
    sweeps the ones nobody read again.
    """

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        ttl = settings.proxy.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self.ttl_seconds = max(1, ttl)
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at < now:
                del self._entries[key]
                return None
            return entry.reply

    def put(self, key: str, reply: str) -> None:
        self.purge_expired()
        with self._lock:
            self._entries[key] = CacheEntry(reply=reply, expires_at=self._clock() + self.ttl_seconds)

    def purge_expired(self) -> int:
        """Drop every expired reply and return how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.expires_at < now]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Purged %d expired cached replies", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
