"""
Bounded cache of chosen moves.

Entries are keyed by (canonical FEN, side, difficulty) and hold the chosen
move in SAN. When full, the oldest inserted entry is evicted; reads do not
refresh an entry's position. Writing an existing key keeps the original value
and position, so two requests racing on the same key insert at most once.

The cache holds no lock. It is only ever touched between whole searches and
a lost update costs a recomputation, never a wrong answer.
"""

from collections import OrderedDict
from typing import NamedTuple

from nullshot.constants import CACHE_SIZE


class CacheKey(NamedTuple):
    fen: str
    side: str
    difficulty: str


class MoveCache:
    """Insertion-ordered move cache with a fixed capacity."""

    def __init__(self, capacity: int = CACHE_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries: OrderedDict[CacheKey, str] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: CacheKey) -> str | None:
        san = self._entries.get(key)
        if san is None:
            self.misses += 1
        else:
            self.hits += 1
        return san

    def put(self, key: CacheKey, san: str) -> None:
        if key in self._entries:
            return
        while len(self._entries) >= self.capacity:
            self._entries.popitem(last=False)
        self._entries[key] = san

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
