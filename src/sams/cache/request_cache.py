"""RequestCache: TTL memoization with in-flight request de-duplication.

A data-access module owns one ``RequestCache`` and routes its reads through
:meth:`RequestCache.get_cached_value`::

    cache = RequestCache()
    users = await cache.get_cached_value("users:list", backend.list_users)

Concurrent callers asking for the same key while a fetch is running share
that fetch's result (or its exception).  Resolved values are served until
their TTL runs out.  A failed fetch leaves nothing behind.

All bookkeeping happens between ``await`` points on a single event loop,
so no locking is needed.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from sams.utils.constants import DEFAULT_CACHE_TTL_MS

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class CacheEntry:
    value: Any = _MISSING
    expiry: float = 0.0  # clock seconds
    pending: Optional[asyncio.Task] = None

    @property
    def has_value(self) -> bool:
        return self.value is not _MISSING


class RequestCache:
    """Key-addressed memoizing cache for asynchronous fetchers."""

    def __init__(self, default_ttl_ms: int = DEFAULT_CACHE_TTL_MS,
                 clock: Callable[[], float] = time.monotonic):
        _check_ttl(default_ttl_ms)
        self.default_ttl_ms = default_ttl_ms
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        return key in self._store

    async def get_cached_value(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        *,
        ttl_ms: int | None = None,
        force: bool = False,
    ) -> Any:
        """Return the value for *key*, fetching it at most once per TTL.

        Args:
            key: Non-empty cache key, e.g. ``"users:42"``.
            fetcher: Zero-argument callable returning an awaitable.
            ttl_ms: Lifetime of a resolved value.  Defaults to
                :attr:`default_ttl_ms`.
            force: Skip both the in-flight and the cached value and start
                a fresh fetch.  Later callers share the new fetch.

        Raises:
            ValueError: If *key* is empty or *ttl_ms* is not positive.
            Exception: Whatever the fetcher raises, unchanged.
        """
        if not isinstance(key, str) or not key:
            raise ValueError("cache key must be a non-empty string")
        ttl = self.default_ttl_ms if ttl_ms is None else ttl_ms
        _check_ttl(ttl)

        current = self._store.get(key)
        if not force and current is not None:
            if current.pending is not None:
                logger.debug("cache join in-flight: %s", key)
                return await asyncio.shield(current.pending)
            if current.has_value and current.expiry > self._clock():
                logger.debug("cache hit: %s", key)
                return current.value

        logger.debug("cache %s: %s", "refresh" if force else "miss", key)
        task = asyncio.ensure_future(fetcher())
        entry = CacheEntry(pending=task)
        if current is not None:
            # Keep serving the previous value to peeks while refreshing
            entry.value = current.value
            entry.expiry = current.expiry
        self._store[key] = entry
        task.add_done_callback(
            lambda done: self._settle(key, entry, done, ttl)
        )
        return await asyncio.shield(task)

    def _settle(self, key: str, entry: CacheEntry,
                task: asyncio.Task, ttl_ms: int):
        """Record the outcome of *task* if *entry* is still the live one."""
        if self._store.get(key) is not entry:
            # Superseded by force, invalidate or clear
            if not task.cancelled():
                task.exception()  # mark retrieved
            return
        if task.cancelled() or task.exception() is not None:
            logger.debug("cache fetch failed, evicting: %s", key)
            del self._store[key]
            return
        entry.value = task.result()
        entry.expiry = self._clock() + ttl_ms / 1000
        entry.pending = None

    def peek_cached_value(self, key: str) -> Any:
        """Return the resolved, unexpired value for *key* or ``None``.

        Never triggers a fetch.  An expired entry is evicted.
        """
        entry = self._store.get(key)
        if entry is None or not entry.has_value:
            return None
        if entry.expiry <= self._clock():
            # A refresh in flight keeps the entry alive for its joiners
            if entry.pending is None:
                logger.debug("cache expired on peek: %s", key)
                del self._store[key]
            return None
        return entry.value

    def invalidate_cache(self, key: str):
        """Drop *key* regardless of its state."""
        self._store.pop(key, None)

    def invalidate_cache_by_prefix(self, prefix: str) -> int:
        """Drop every key starting with *prefix*.  Returns the count."""
        doomed = [k for k in self._store if k.startswith(prefix)]
        for key in doomed:
            del self._store[key]
        if doomed:
            logger.debug("cache invalidated %d key(s) under %r",
                         len(doomed), prefix)
        return len(doomed)

    def clear_cache(self):
        """Drop all entries."""
        self._store.clear()


def _check_ttl(ttl_ms):
    if isinstance(ttl_ms, bool) or not isinstance(ttl_ms, int) or ttl_ms <= 0:
        raise ValueError(f"ttl_ms must be a positive integer, got {ttl_ms!r}")
