import logging
import time
from datetime import datetime
from functools import wraps

from flask import Blueprint, current_app, g, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException

from weather_sdk.config import CACHE_TTL
from weather_sdk.exceptions import (
    InvalidArgumentError,
    UpstreamNotFoundError,
    UpstreamRateLimitedError,
    WeatherSDKError,
)

logger = logging.getLogger(__name__)

weather_bp = Blueprint('weather', __name__)

# Rate limiting, bound to the app in create_app()
limiter = Limiter(key_func=get_remote_address)

_ERROR_STATUS = {
    InvalidArgumentError: 400,
    UpstreamNotFoundError: 404,
    UpstreamRateLimitedError: 503,
}


def get_sdk():
    return current_app.extensions['weather_sdk']


def sdk_error_response(e: WeatherSDKError):
    """Map an SDK error onto a JSON error response"""
    status = next(
        (code for cls, code in _ERROR_STATUS.items() if isinstance(e, cls)),
        502,
    )
    return jsonify({
        "error": e.message,
        "error_code": e.error_code,
        "details": e.details,
    }), status


def ratelimit_response(e):
    return jsonify({
        "error": "Rate limit exceeded",
        "message": str(e.description)
    }), 429


def unexpected_error_response(e):
    if isinstance(e, HTTPException):
        return e

    request_id = g.get('request_id')
    logger.error(f"Unexpected error in request {request_id}", exc_info=e)
    return jsonify({
        'error': 'Internal server error',
        'request_id': request_id,
        'details': str(e)
    }), 500


def validate_city_param(f):
    """
    Декоратор для проверки параметра city в запросе.
    Проверяет наличие и непустое значение.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        city = request.args.get('city')

        if city is None:
            return jsonify({"error": "Missing city parameter"}), 400

        if not city.strip():
            return jsonify({
                "error": "Invalid city parameter",
                "details": "City name cannot be null or empty"
            }), 400

        return f(*args, **kwargs)

    return wrapper


@weather_bp.route('/weather', methods=['GET'])
@validate_city_param
@limiter.limit("10 per minute")
def get_weather():
    start_time = time.time()
    request_id = g.request_id = f"req-{datetime.utcnow().strftime('%Y%m%d-%H%M%S-%f')}"
    city = request.args.get('city')

    logger.info(
        f"Incoming request {request_id} from {request.remote_addr}",
        extra={'request_args': dict(request.args)}
    )

    entry = get_sdk().get(city)

    result = entry.payload.to_dict()
    result.update({
        'request_id': request_id,
        'processing_time_sec': time.time() - start_time,
        'cache_info': {
            'captured_at': entry.captured_at.isoformat(),
            'age_seconds': round(entry.age.total_seconds(), 1),
            'ttl_seconds': CACHE_TTL.total_seconds(),
        }
    })

    logger.info(f"Successful response for request {request_id}")
    return jsonify(result)


@weather_bp.route('/health')
def health_check():
    sdk = get_sdk()
    cities = sdk.cached_cities()
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "mode": sdk.mode.value,
        "polling": sdk.scheduler.running,
        "cache_size": len(cities),
        "cached_cities": cities,
    })


@weather_bp.route('/docs')
def api_docs():
    return jsonify({
        "endpoints": {
            "/weather": {
                "description": "Get current weather for a city",
                "parameters": {
                    "city": "City name (required)"
                },
                "rate_limit": "10 requests per minute"
            },
            "/health": {
                "description": "Service health check"
            },
            "/docs": {
                "description": "API documentation"
            }
        }
    })
