import logging
import time
from typing import Dict, Optional, Protocol

import requests

from weather_sdk import config
from weather_sdk.exceptions import (
    UpstreamMalformedError,
    UpstreamNetworkError,
    UpstreamNotFoundError,
    UpstreamRateLimitedError,
    UpstreamServerError,
    UpstreamUnauthorizedError,
)
from weather_sdk.models import WeatherData

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can produce a fresh weather record for a city."""

    def fetch(self, city: str) -> WeatherData:
        ...


_STATUS_ERRORS = {
    401: (UpstreamUnauthorizedError, "Invalid API key"),
    404: (UpstreamNotFoundError, "City not found"),
    429: (UpstreamRateLimitedError, "Too Many Requests"),
    500: (UpstreamServerError, "Server error"),
    502: (UpstreamServerError, "Server error"),
    503: (UpstreamServerError, "Server error"),
    504: (UpstreamServerError, "Server error"),
}


class WeatherAPI:
    """Класс для работы с OpenWeatherMap API"""

    def __init__(
        self,
        api_key: str,
        base_url: str = config.OWM_BASE_URL,
        timeout: float = config.OWM_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout  # секунд
        self.session = session or requests.Session()

    def fetch(self, city: str) -> WeatherData:
        """
        Получение текущей погоды для города

        Args:
            city: Название города, как его ввёл пользователь

        Returns:
            WeatherData с разобранным ответом API

        Raises:
            UpstreamError: При ошибках запроса или разбора ответа
        """
        params = {
            'q': city,
            'appid': self.api_key,
        }

        api_start = time.time()
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error(f"OpenWeatherMap API timeout for {city}")
            raise UpstreamNetworkError(f"Network error: {e}", city=city, original_error=e)
        except requests.exceptions.RequestException as e:
            logger.error(f"OpenWeatherMap API error for {city}: {str(e)}")
            raise UpstreamNetworkError(f"Network error: {e}", city=city, original_error=e)
        api_duration = time.time() - api_start

        self._log_interaction(params, response, api_duration)

        if response.status_code != 200:
            self._raise_for_status(city, response)

        return self.parse_weather_data(city, response)

    def _log_interaction(self, params: Dict, response: requests.Response, duration: float):
        """Log OpenWeatherMap API interactions"""
        logger.info(
            "OpenWeatherMap API Interaction",
            extra={'data': {
                'api_endpoint': self.base_url,
                'request_params': {**params, 'appid': 'REDACTED'},  # Hide API key
                'response_status': response.status_code,
                'processing_time_sec': duration,
            }}
        )

    def _raise_for_status(self, city: str, response: requests.Response):
        code = response.status_code
        error_cls, message = _STATUS_ERRORS.get(
            code, (UpstreamServerError, f"Unexpected response code: {code}")
        )
        logger.error(
            f"OWM API error for {city}",
            extra={'status_code': code, 'response': response.text}
        )
        raise error_cls(message, city=city, status_code=code)

    @staticmethod
    def parse_weather_data(city: str, response: requests.Response) -> WeatherData:
        """
        Разбор ответа API в WeatherData

        Raises:
            UpstreamMalformedError: Если в ответе нет нужных полей
        """
        try:
            root = response.json()
            weather_list = root['weather']
            if not weather_list:
                raise UpstreamMalformedError("No weather data found", city=city)

            weather = weather_list[0]
            main = root['main']

            return WeatherData(
                main_weather=weather['main'],
                description=weather['description'],
                temp=float(main['temp']),
                feels_like=float(main['feels_like']),
                visibility=int(root['visibility']),
                wind_speed=float(root['wind']['speed']),
                dt=int(root['dt']),
                sunrise=int(root['sys']['sunrise']),
                sunset=int(root['sys']['sunset']),
                timezone=int(root['timezone']),
                city_name=root['name'],
            )
        except UpstreamMalformedError:
            raise
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise UpstreamMalformedError(
                f"Failed to parse weather data: {e}", city=city, original_error=e
            )
