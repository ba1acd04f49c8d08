from __future__ import annotations
import inspect
import functools
import time
from typing import Any, Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

from starlette.concurrency import run_in_threadpool

V = TypeVar("V")


class TTLCache(Generic[V]):
    """
    In-process TTL cache. One instance per role (categories, season stats, matrix).
    Entries are (expires_at_epoch, stored_at_epoch, value). Expired entries are
    dropped on read and recomputed lazily by the caller; nothing refreshes in the background.
    """

    def __init__(self, ttl_seconds: float, *, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, int, V]] = {}

    def lookup(self, key: Hashable) -> Optional[Tuple[int, V]]:
        """Return (stored_at, value) for a live entry, else None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        exp_at, stored_at, value = entry
        if exp_at > self._clock():
            return stored_at, value
        self._entries.pop(key, None)
        return None

    def get(self, key: Hashable) -> Optional[V]:
        hit = self.lookup(key)
        return hit[1] if hit else None

    def set(self, key: Hashable, value: V) -> int:
        now = self._clock()
        stored_at = int(now)
        self._entries[key] = (now + self.ttl_seconds, stored_at, value)
        return stored_at

    def get_or_compute(self, key: Hashable, compute: Callable[[], V]) -> V:
        hit = self.lookup(key)
        if hit is not None:
            return hit[1]
        value = compute()
        self.set(key, value)
        return value

    def __len__(self) -> int:
        return len(self._entries)


def cache_route(
    *,
    cache: Callable[..., TTLCache],
    key_builder: Callable[..., Tuple[Any, ...]],
    cache_control: str | None = None,  # defaults to private,max-age=ttl
):
    """
    Decorator for FastAPI routes (sync or async).
    - `cache` resolves the TTLCache instance from the route kwargs (so it can be injected).
    - Caches the returned data by a computed key.
    - Sets X-Cache: HIT|MISS, X-Cache-Stored-At, and Cache-Control on the Response if present in kwargs.
    """

    def decorator(fn: Callable):
        is_async = inspect.iscoroutinefunction(fn)

        async def _call(*args, **kwargs):
            if is_async:
                return await fn(*args, **kwargs)
            # sync handlers run in the threadpool
            return await run_in_threadpool(fn, *args, **kwargs)

        def _stamp(response, hit: str, stored_at: int, ttl: float):
            if response is None:
                return
            response.headers["X-Cache"] = hit
            response.headers["X-Cache-Stored-At"] = str(stored_at)
            response.headers["Cache-Control"] = cache_control or f"private, max-age={int(ttl)}"

        @functools.wraps(fn)
        async def wrapper(*args, **kwargs):
            response = kwargs.get("response")  # FastAPI Response if included in signature
            store = cache(*args, **kwargs)
            key = key_builder(*args, **kwargs)

            hit = store.lookup(key)
            if hit is not None:
                stored_at, data = hit
                _stamp(response, "HIT", stored_at, store.ttl_seconds)
                return data

            # MISS → call downstream
            data = await _call(*args, **kwargs)
            stored_at = store.set(key, data)
            _stamp(response, "MISS", stored_at, store.ttl_seconds)
            return data

        return wrapper
    return decorator

# ------------- common key helpers -------------

def key_tuple(*parts: Any) -> Tuple[Any, ...]:
    return tuple(parts)
