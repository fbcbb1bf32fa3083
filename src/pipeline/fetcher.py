"""Cache-checked fetch: at most one network round trip per request fingerprint."""

import asyncio
import logging
from typing import Any

from src.cache.store import FingerprintCache
from src.core.schemas import RequestDescriptor
from src.platforms.base import JobBoardClient

logger = logging.getLogger(__name__)


class CachedFetcher:
    """Serves descriptors from the cache, falling back to the client on a miss.

    Concurrent fetches of the same fingerprint share a lock, so duplicates
    wait for the first call and then read its cached result. A lock is
    dropped once no fetch holds or waits on it.

    A forced refresh goes to the network once per fingerprint for the life of
    the fetcher; later refreshes of the same fingerprint read what that call
    stored.
    """

    def __init__(self, cache: FingerprintCache, client: JobBoardClient) -> None:
        self._cache = cache
        self._client = client
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}
        self._refreshed: set[str] = set()
        self.hits = 0
        self.misses = 0

    @property
    def cache(self) -> FingerprintCache:
        return self._cache

    async def fetch(self, descriptor: RequestDescriptor, *, refresh: bool = False) -> Any:
        """Return the payload for a descriptor.

        refresh=True ignores any entry stored before this fetcher refreshed
        it. The old entry is only replaced once the client call succeeds.
        """
        key = descriptor.fingerprint
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        try:
            async with lock:
                return await self._fetch_locked(descriptor, key, refresh)
        finally:
            self._lock_users[key] -= 1
            if not self._lock_users[key]:
                del self._lock_users[key]
                del self._locks[key]

    async def _fetch_locked(self, descriptor: RequestDescriptor, key: str, refresh: bool) -> Any:
        stale = refresh and key not in self._refreshed
        if not stale and self._cache.has(descriptor):
            self.hits += 1
            logger.debug("Cache hit for %s (%s)", descriptor.path, key[:12])
            return self._cache.get(descriptor)

        self.misses += 1
        payload = await self._client.get_json(descriptor)
        self._cache.save(descriptor, payload)
        if refresh:
            self._refreshed.add(key)
        return payload
