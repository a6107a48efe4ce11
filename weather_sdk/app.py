from flask import Flask
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics

from weather_sdk import __version__, config
from weather_sdk.exceptions import WeatherSDKError
from weather_sdk.routes import (
    limiter,
    ratelimit_response,
    sdk_error_response,
    unexpected_error_response,
    weather_bp,
)
from weather_sdk.sdk import Mode, WeatherSDK


def create_app(sdk=None, **overrides):
    app = Flask(__name__)
    app.config.update(
        OWM_API_KEY=config.OWM_API_KEY,
        SDK_MODE=config.SDK_MODE,
        RATELIMIT_DEFAULT=config.RATELIMIT_DEFAULT,
        RATELIMIT_ENABLED=True,
        RATELIMIT_STORAGE_URI='memory://',
    )
    app.config.update(overrides)

    if sdk is None:
        sdk = WeatherSDK(app.config['OWM_API_KEY'], mode=Mode(app.config['SDK_MODE']))
    app.extensions['weather_sdk'] = sdk

    metrics = PrometheusMetrics(app, registry=CollectorRegistry())
    metrics.info('app_info', 'Weather Service Info', version=__version__)

    limiter.init_app(app)

    # Регистрация Blueprint
    app.register_blueprint(weather_bp)

    app.register_error_handler(WeatherSDKError, sdk_error_response)
    app.register_error_handler(429, ratelimit_response)
    app.register_error_handler(Exception, unexpected_error_response)

    return app
