import logging
from collections import OrderedDict
from typing import Any, Optional

from pyroost.interfaces.storage import CacheAdapter

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1024


class MemoryCache(CacheAdapter):
    """In-process store holding the most recently used ``max_entries`` stores."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES):
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, Any]" = OrderedDict()

    def read(self, key: str) -> Optional[Any]:
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def write(self, key: str, value: Any) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted {evicted} from memory cache")

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class NullCache(CacheAdapter):
    def read(self, key: str) -> Optional[Any]:
        return None

    def write(self, key: str, value: Any) -> None:
        pass


def safe_read(cache: Optional[CacheAdapter], key: str) -> Optional[Any]:
    if cache is None:
        return None
    try:
        return cache.read(key)
    except Exception as e:
        logger.warning(f"Cache read failed for {key}: {e}")
        return None


def safe_write(cache: Optional[CacheAdapter], key: str, value: Any) -> bool:
    if cache is None:
        return False
    try:
        cache.write(key, value)
        return True
    except Exception as e:
        logger.warning(f"Cache write failed for {key}: {e}")
        return False
