import logging
from logging.handlers import RotatingFileHandler
import atexit
import os
import signal

from weather_sdk import config
from weather_sdk.app import create_app


# Setup logging
def setup_logging():
    """Configure logging system"""
    if not os.path.exists(config.LOG_DIR):
        os.makedirs(config.LOG_DIR)

    log_file = os.path.join(config.LOG_DIR, 'weather_service.log')

    handler = RotatingFileHandler(
        log_file, maxBytes=1000000, backupCount=5
    )
    handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(config.LOG_LEVEL)


app = create_app()
sdk = app.extensions['weather_sdk']


def handle_shutdown(signum, frame):
    """Handle graceful shutdown"""
    app.logger.info("Shutting down...")
    sdk.shutdown()
    exit(0)


signal.signal(signal.SIGTERM, handle_shutdown)
signal.signal(signal.SIGINT, handle_shutdown)
atexit.register(sdk.shutdown)

# Initialize application
if __name__ == '__main__':
    setup_logging()

    app.run(host='0.0.0.0', port=5000)
