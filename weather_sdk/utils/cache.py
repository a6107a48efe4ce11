import logging
import threading
from collections import OrderedDict
from typing import List, Optional

from weather_sdk.models import Entry
from weather_sdk.utils.validation import normalize_city

logger = logging.getLogger(__name__)


class WeatherCache:
    """
    In-memory weather cache with LRU eviction and TTL expiry.

    Keys are normalized city names. Reads and writes both count as access,
    so the first key in the ordering is always the next eviction candidate.
    Expired entries are dropped lazily when they are read.
    """

    def __init__(self, max_size: int):
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._entries: "OrderedDict[str, Entry]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, city: str) -> Optional[Entry]:
        """Return the cached entry for a city, or None if missing or expired."""
        key = normalize_city(city)

        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            if not entry.is_valid():
                del self._entries[key]
                logger.debug(f"Cache expired for {key}")
                return None

            self._entries.move_to_end(key)

        logger.debug(f"Cache hit for {key}")
        return entry

    def put(self, city: str, entry: Entry):
        """Store an entry, evicting the least recently used city if full."""
        key = normalize_city(city)

        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)

            evicted = None
            if len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)

        if evicted is not None:
            logger.debug(f"Evicted {evicted} to maintain size limit")

    def list_keys(self) -> List[str]:
        """Snapshot of cached cities, least recently used first."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, city) -> bool:
        key = normalize_city(city)
        with self._lock:
            return key in self._entries
