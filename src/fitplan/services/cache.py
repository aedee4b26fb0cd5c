"""Bounded in-memory cache abstractions."""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Protocol


class Cache(Protocol):
    """Cache interface for cost-weighted key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present."""

    def set(self, key: str, value: object, cost: int) -> None:
        """Store a value with a cost that counts toward the size limit."""

    def remove(self, key: str) -> None:
        """Drop a cached value if present."""

    def clear(self) -> None:
        """Drop every cached value."""

    def __len__(self) -> int:
        """Return the number of cached values."""


@dataclass
class _CacheEntry:
    value: object
    cost: int


class LruCache(Cache):
    """Least-recently-used cache bounded by entry count and total cost."""

    def __init__(self, count_limit: int = 100, total_cost_limit: int = 0) -> None:
        """Create a cache; a limit of zero or less disables that bound."""
        self.count_limit = count_limit
        self.total_cost_limit = total_cost_limit
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._total_cost = 0

    @property
    def total_cost(self) -> int:
        return self._total_cost

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> object | None:
        """Return a cached value and mark it as most recently used."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        self._entries.move_to_end(key)
        return entry.value

    def set(self, key: str, value: object, cost: int = 0) -> None:
        """Store a value, evicting old entries until both limits hold."""
        self.remove(key)
        cost = max(cost, 0)
        if 0 < self.total_cost_limit < cost:
            return
        self._entries[key] = _CacheEntry(value=value, cost=cost)
        self._total_cost += cost
        self._evict()

    def remove(self, key: str) -> None:
        """Drop a cached value if present."""
        entry = self._entries.pop(key, None)
        if entry is not None:
            self._total_cost -= entry.cost

    def clear(self) -> None:
        """Drop every cached value."""
        self._entries.clear()
        self._total_cost = 0

    def _evict(self) -> None:
        while self._entries and (
            (self.count_limit > 0 and len(self._entries) > self.count_limit)
            or (0 < self.total_cost_limit < self._total_cost)
        ):
            _, entry = self._entries.popitem(last=False)
            self._total_cost -= entry.cost
