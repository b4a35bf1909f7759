import time
from typing import Any, Callable, Dict, Optional, Tuple


class TTLCache:
    """In-memory key-value store whose entries expire after a fixed TTL.

    Parameters
    ----------
    ttl_seconds : int
        Time-to-live in seconds. Entries older than this are treated as absent.
    time_func : Callable[[], float]
        Clock used to timestamp entries. Defaults to `time.monotonic`; tests
        pass a fake clock to move time forward.

    Notes
    -----
    - Reads and writes are separate calls; there is no fetch-or-compute helper,
      so callers decide explicitly what gets stored.
    - Expiration is lazy (on `get`/`exists`); there is no background reaper.
    """

    def __init__(self, ttl_seconds: int, time_func: Callable[[], float] = time.monotonic):
        self.ttl = ttl_seconds
        self._time_func = time_func
        self._store: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value for `key`, or `None` if missing or expired.

        A stale entry is removed as a side effect.
        """

        item = self._store.get(key)
        if not item:
            return None
        ts, value = item
        if self._time_func() - ts >= self.ttl:
            self._store.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Insert or replace a value for `key`, restarting its TTL."""

        self._store[key] = (self._time_func(), value)

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def delete(self, key: str) -> None:
        """Remove `key` if present. Missing keys are ignored."""

        self._store.pop(key, None)

    def clear(self) -> None:
        """Remove all entries from the cache.

        Useful for tests or to force a full refresh of cached data.
        """

        self._store.clear()
