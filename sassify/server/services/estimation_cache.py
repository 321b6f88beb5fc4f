"""
In-memory estimation cache.

Entries expire ``ttl`` seconds after insertion and are evicted lazily on
read. When more than ``max_entries`` are stored the oldest insertion is
dropped. The cache lives for the process only.
"""

from __future__ import annotations

import copy
import time
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional, Tuple

DEFAULT_TTL_SECONDS = 1800
DEFAULT_MAX_ENTRIES = 100


class EstimationCache:
    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Dict[str, Any]]]" = OrderedDict()

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Return a copy of the cached result, or ``None`` if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, result = entry
        if self._clock() - stored_at > self.ttl:
            del self._entries[key]
            return None
        return copy.deepcopy(result)

    def set(self, key: str, result: Dict[str, Any]) -> None:
        # Re-inserting a key keeps its original position, as a dict update would.
        self._entries[key] = (self._clock(), copy.deepcopy(result))
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
