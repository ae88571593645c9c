from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class CacheInfo:
    hits: int
    misses: int
    size: int
    max_size: int


class LRUCache(Generic[K, V]):
    """LRU cache with a max size limit, safe to share between threads.

    Values are handed out as-is, so only immutable values belong here.
    """

    def __init__(self, max_size: int = 128) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive.")
        self._max_size = max_size
        self._store: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def get(self, key: K) -> V | None:
        with self._lock:
            if key not in self._store:
                self._misses += 1
                return None
            self._hits += 1
            self._store.move_to_end(key)
            return self._store[key]

    def set(self, key: K, value: V) -> None:
        with self._lock:
            self._insert(key, value)

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        cached = self.get(key)
        if cached is not None:
            return cached
        # Build outside the lock; concurrent misses for one key may both build,
        # and the later insert wins.
        value = factory()
        with self._lock:
            self._insert(key, value)
        return value

    def info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(hits=self._hits, misses=self._misses, size=len(self._store), max_size=self._max_size)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    def _insert(self, key: K, value: V) -> None:
        if key in self._store:
            self._store.pop(key)
        self._store[key] = value
        if len(self._store) > self._max_size:
            self._store.popitem(last=False)
