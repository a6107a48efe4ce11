"""Shared pytest fixtures for weather_sdk tests.

Tests never hit the real OpenWeatherMap API; a fake fetcher stands in for
the transport wherever the SDK needs one.
"""

import threading

import pytest

from weather_sdk.app import create_app
from weather_sdk.exceptions import UpstreamNotFoundError
from weather_sdk.models import WeatherData
from weather_sdk.sdk import WeatherSDK


def build_weather(city_name="London", temp=288.15, **fields):
    values = dict(
        main_weather="Clouds",
        description="scattered clouds",
        temp=temp,
        feels_like=temp - 1.0,
        visibility=10000,
        wind_speed=4.1,
        dt=1675744800,
        sunrise=1675751262,
        sunset=1675787560,
        timezone=0,
        city_name=city_name,
    )
    values.update(fields)
    return WeatherData(**values)


class FakeFetcher:
    """Records every city it is asked for and returns a new record each time."""

    def __init__(self, failing=()):
        self.calls = []
        self.failing = {city.lower() for city in failing}
        self.fetched = threading.Event()
        self._lock = threading.Lock()

    def fetch(self, city):
        with self._lock:
            self.calls.append(city)
            count = len(self.calls)
        self.fetched.set()

        if city.strip().lower() in self.failing:
            raise UpstreamNotFoundError("City not found", city=city, status_code=404)
        return build_weather(city_name=city.strip().title(), temp=280.0 + count)


@pytest.fixture
def weather():
    """Factory for WeatherData records."""
    return build_weather


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def sdk(fetcher):
    """On-demand SDK backed by the fake fetcher."""
    client = WeatherSDK(fetcher=fetcher)
    yield client
    client.shutdown()


@pytest.fixture
def app(sdk):
    return create_app(sdk=sdk, TESTING=True, RATELIMIT_ENABLED=False)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def failing_fetcher():
    """Fetcher that reports Atlantis as unknown and succeeds for anything else."""
    return FakeFetcher(failing=["atlantis"])


class BlockingFetcher:
    """Holds every fetch until release is set."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = []

    def fetch(self, city):
        self.calls.append(city)
        self.started.set()
        self.release.wait(timeout=5)
        return build_weather(city_name=city.strip().title(), temp=300.0)


@pytest.fixture
def blocking_fetcher():
    fetcher = BlockingFetcher()
    yield fetcher
    fetcher.release.set()
