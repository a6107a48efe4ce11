"""Tests for the HTTP service endpoints."""

import pytest

from weather_sdk.app import create_app
from weather_sdk.sdk import WeatherSDK


def test_weather_endpoint_returns_200(client):
    response = client.get("/weather?city=London")
    assert response.status_code == 200


def test_weather_endpoint_returns_record_and_cache_info(client):
    data = client.get("/weather?city=London").get_json()

    assert data["name"] == "London"
    assert "temp" in data["temperature"]
    assert data["cache_info"]["ttl_seconds"] == 600
    assert data["request_id"].startswith("req-")


def test_second_request_is_served_from_cache(client, fetcher):
    first = client.get("/weather?city=London").get_json()
    second = client.get("/weather?city=london").get_json()

    assert first["cache_info"]["captured_at"] == second["cache_info"]["captured_at"]
    assert fetcher.calls == ["London"]


@pytest.mark.parametrize("query", ["", "?city=", "?city=%20%20"])
def test_blank_city_returns_400(client, fetcher, query):
    response = client.get(f"/weather{query}")

    assert response.status_code == 400
    assert fetcher.calls == []


def test_unknown_city_returns_404(failing_fetcher):
    app = create_app(sdk=WeatherSDK(fetcher=failing_fetcher), TESTING=True, RATELIMIT_ENABLED=False)

    response = app.test_client().get("/weather?city=Atlantis")

    assert response.status_code == 404
    assert response.get_json()["error_code"] == "UPSTREAM_NOT_FOUND"


def test_health_lists_cached_cities(client):
    client.get("/weather?city=Paris")

    data = client.get("/health").get_json()

    assert data["status"] == "healthy"
    assert data["mode"] == "on_demand"
    assert data["polling"] is False
    assert data["cached_cities"] == ["paris"]


def test_docs_lists_endpoints(client):
    data = client.get("/docs").get_json()
    assert set(data["endpoints"]) == {"/weather", "/health", "/docs"}


def test_weather_endpoint_is_rate_limited(sdk):
    app = create_app(sdk=sdk, TESTING=True)
    client = app.test_client()

    statuses = [client.get("/weather?city=London").status_code for _ in range(11)]

    assert statuses[:10] == [200] * 10
    assert statuses[10] == 429


def test_unexpected_error_returns_json_500():
    class BrokenFetcher:
        def fetch(self, city):
            raise RuntimeError("boom")

    app = create_app(sdk=WeatherSDK(fetcher=BrokenFetcher()), TESTING=True, RATELIMIT_ENABLED=False)

    response = app.test_client().get("/weather?city=London")

    assert response.status_code == 500
    data = response.get_json()
    assert data["error"] == "Internal server error"
    assert data["request_id"].startswith("req-")
    assert data["details"] == "boom"


def test_unknown_route_keeps_404(client):
    assert client.get("/nowhere").status_code == 404
