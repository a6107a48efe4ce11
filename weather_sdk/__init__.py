__version__ = '1.0.0'

from weather_sdk.exceptions import WeatherSDKError
from weather_sdk.models import Entry, WeatherData
from weather_sdk.sdk import Mode, WeatherSDK

__all__ = [
    "Entry",
    "Mode",
    "WeatherData",
    "WeatherSDK",
    "WeatherSDKError",
]
