"""
Weather record and cache entry types.
"""
import json
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from weather_sdk.config import CACHE_TTL


@dataclass(frozen=True)
class WeatherData:
    """Current weather for one city, as reported by OpenWeatherMap."""
    main_weather: str
    description: str
    temp: float
    feels_like: float
    visibility: int
    wind_speed: float
    dt: int   # provider observation time, unix seconds
    sunrise: int
    sunset: int
    timezone: int   # shift from UTC in seconds
    city_name: str

    def to_dict(self) -> Dict[str, Any]:
        """Nested representation returned to SDK callers."""
        return {
            'weather': {
                'main': self.main_weather,
                'description': self.description,
            },
            'temperature': {
                'temp': self.temp,
                'feels_like': self.feels_like,
            },
            'visibility': self.visibility,
            'wind': {
                'speed': self.wind_speed,
            },
            'datetime': self.dt,
            'sys': {
                'sunrise': self.sunrise,
                'sunset': self.sunset,
            },
            'timezone': self.timezone,
            'name': self.city_name,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class Entry:
    """
    A cached record plus the moment it was captured.

    Entries are never updated in place; a refresh stores a new Entry.
    """
    payload: WeatherData
    captured_at: datetime

    @classmethod
    def capture(cls, payload: WeatherData) -> 'Entry':
        return cls(payload=payload, captured_at=datetime.now())

    @property
    def age(self) -> timedelta:
        return datetime.now() - self.captured_at

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """True while the entry is younger than the cache TTL."""
        now = now or datetime.now()
        return now - self.captured_at < CACHE_TTL
