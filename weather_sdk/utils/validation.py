from weather_sdk.exceptions import InvalidArgumentError


def normalize_city(city: str) -> str:
    """Cache key for a city name: trimmed and lower-cased."""
    return city.strip().lower()


def validate_city(city) -> str:
    """
    Check that a city name is usable and return it unchanged.

    Raises:
        InvalidArgumentError: if the name is missing or blank
    """
    if city is None or not isinstance(city, str) or not city.strip():
        raise InvalidArgumentError(
            "City name cannot be null or empty",
            details={"city": city},
        )
    return city
