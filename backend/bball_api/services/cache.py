import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable


@dataclass
class CacheEntry:
    value: Any
    expires_at: float
    stored_at: str


# In-memory ttl cache.
# One instance lives for the whole process (created by the app factory and
# kept on app.state). Nothing is persisted, a restart starts empty.
# Two requests missing the same key at once will both fetch upstream and
# both set; last write wins.
class TTLCache:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._store: dict[str, CacheEntry] = {}
        self._clock = clock

    # return the cached value if it has not expired, evicting it otherwise
    def get(self, key: str):
        entry = self._store.get(key)
        if entry is None:
            return None

        if self._clock() >= entry.expires_at:
            self._store.pop(key, None)
            return None

        return entry.value

    # set value in cache with a ttl, replacing any previous entry
    def set(self, key: str, value, ttl_seconds: int = 60):
        self._store[key] = CacheEntry(
            value=value,
            expires_at=self._clock() + ttl_seconds,
            stored_at=datetime.now(timezone.utc).isoformat(),
        )

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    # every key currently held, expired or not (no sweeping)
    def stats(self) -> dict:
        return {
            "entries": len(self._store),
            "keys": list(self._store.keys()),
        }

    # clear all cached items
    def clear(self):
        self._store.clear()


# make a readable cache key, e.g. "game:E2025:12"
def make_cache_key(endpoint: str, *parts) -> str:
    return ":".join([endpoint, *(str(p) for p in parts)])
