import logging
from enum import Enum
from typing import List, Optional

from weather_sdk.config import MAX_CACHE_SIZE
from weather_sdk.exceptions import InvalidArgumentError
from weather_sdk.models import Entry
from weather_sdk.scheduler import RefreshScheduler
from weather_sdk.services.weather_api import Fetcher, WeatherAPI
from weather_sdk.utils.cache import WeatherCache
from weather_sdk.utils.validation import validate_city

logger = logging.getLogger(__name__)


class Mode(Enum):
    """
    How the SDK keeps its cache fresh.

    ON_DEMAND fetches only when a caller asks for a missing or stale city.
    POLLING also refreshes every cached city in the background.
    """
    ON_DEMAND = "on_demand"
    POLLING = "polling"


class WeatherSDK:
    """Cached access to current weather by city name."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        mode: Mode = Mode.ON_DEMAND,
        fetcher: Optional[Fetcher] = None,
        max_size: int = MAX_CACHE_SIZE,
    ):
        """
        Args:
            api_key: OpenWeatherMap API key, used when no fetcher is given
            mode: Mode.ON_DEMAND or Mode.POLLING
            fetcher: Source of fresh weather records (defaults to WeatherAPI)
            max_size: Maximum number of cities to cache
        """
        if fetcher is None:
            if not api_key:
                raise InvalidArgumentError("API key cannot be null or empty")
            fetcher = WeatherAPI(api_key)

        self.mode = Mode(mode)
        self.fetcher = fetcher
        self.cache = WeatherCache(max_size)
        self.scheduler = RefreshScheduler(self.cache, self.fetcher)

        if self.mode is Mode.POLLING:
            self.scheduler.start()

    def get(self, city: str) -> Entry:
        """
        Current weather for a city, from cache when still fresh.

        Raises:
            InvalidArgumentError: for a blank city name
            UpstreamError: when the provider request fails
        """
        validate_city(city)

        entry = self.cache.get(city)
        if entry is not None:
            return entry

        logger.info(f"Cache miss for {city!r}, fetching")
        # provider gets the name as typed, the cache gets the normalized key
        entry = Entry.capture(self.fetcher.fetch(city))
        self.cache.put(city, entry)
        return entry

    def get_weather(self, city: str) -> str:
        """Current weather for a city as a JSON document."""
        return self.get(city).payload.to_json()

    def cached_cities(self) -> List[str]:
        return self.cache.list_keys()

    def shutdown(self):
        """Stop background polling, if any. Idempotent."""
        self.scheduler.shutdown()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
