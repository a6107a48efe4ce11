"""Tests for WeatherData formatting and Entry validity."""

import dataclasses
import json
from datetime import datetime, timedelta

import pytest

from weather_sdk.models import Entry


def test_json_contains_expected_fields(weather):
    data = weather(city_name="Berlin", temp=22.5, visibility=10000)

    document = json.loads(data.to_json())

    assert document["name"] == "Berlin"
    assert document["temperature"]["temp"] == 22.5
    assert document["visibility"] == 10000
    assert document["weather"] == {"main": "Clouds", "description": "scattered clouds"}
    assert document["sys"] == {"sunrise": 1675751262, "sunset": 1675787560}
    assert document["datetime"] == 1675744800


def test_json_is_pretty_printed(weather):
    assert '\n  "weather": {' in weather().to_json()


def test_weather_data_is_immutable(weather):
    data = weather()
    with pytest.raises(dataclasses.FrozenInstanceError):
        data.temp = 0.0


def test_expired_entry_is_invalid(weather):
    entry = Entry(weather(), datetime.now() - timedelta(minutes=11))
    assert not entry.is_valid()


def test_fresh_entry_is_valid(weather):
    entry = Entry.capture(weather())
    assert entry.is_valid()
    assert entry.age < timedelta(seconds=5)


def test_validity_boundary(weather):
    captured = datetime(2024, 1, 1, 12, 0, 0)
    entry = Entry(weather(), captured)

    assert entry.is_valid(now=captured + timedelta(minutes=9, seconds=59))
    assert not entry.is_valid(now=captured + timedelta(minutes=10))
