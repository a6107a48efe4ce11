"""
Weather SDK exceptions.

Every failure surfaced by the SDK is a WeatherSDKError. Upstream errors are
raised by the transport and passed through the facade unchanged.
"""

from typing import Any, Dict, Optional


class WeatherSDKError(Exception):
    """Base exception for SDK errors."""

    error_code = "WEATHER_SDK_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidArgumentError(WeatherSDKError):
    """Raised for a blank city name, before any cache or network access."""

    error_code = "INVALID_ARGUMENT"


class UpstreamError(WeatherSDKError):
    """Base for failures reported by the weather provider or its transport."""

    error_code = "UPSTREAM_ERROR"

    def __init__(
        self,
        message: str,
        city: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if city:
            details["city"] = city
        if status_code is not None:
            details["status_code"] = status_code
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__

        super().__init__(message=message, details=details)
        self.city = city
        self.status_code = status_code
        if original_error:
            self.__cause__ = original_error


class UpstreamUnauthorizedError(UpstreamError):
    """Provider rejected the API key (HTTP 401)."""

    error_code = "UPSTREAM_UNAUTHORIZED"


class UpstreamNotFoundError(UpstreamError):
    """Provider does not know the city (HTTP 404)."""

    error_code = "UPSTREAM_NOT_FOUND"


class UpstreamRateLimitedError(UpstreamError):
    """Provider rate limit exceeded (HTTP 429)."""

    error_code = "UPSTREAM_RATE_LIMITED"


class UpstreamServerError(UpstreamError):
    """Provider-side failure or an unexpected status code."""

    error_code = "UPSTREAM_SERVER_ERROR"


class UpstreamNetworkError(UpstreamError):
    """Connection, timeout or other transport failure."""

    error_code = "UPSTREAM_NETWORK"


class UpstreamMalformedError(UpstreamError):
    """Provider response could not be parsed into a weather record."""

    error_code = "UPSTREAM_MALFORMED"
