import os
from datetime import timedelta

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

OWM_API_KEY = os.getenv('OWM_API_KEY')
OWM_BASE_URL = os.getenv('OWM_BASE_URL', 'https://api.openweathermap.org/data/2.5/weather')
OWM_TIMEOUT_SECONDS = float(os.getenv('OWM_TIMEOUT_SECONDS', 15))
SDK_MODE = os.getenv('SDK_MODE', 'on_demand')
LOG_DIR = os.getenv('LOG_DIR', 'logs')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
RATELIMIT_DEFAULT = os.getenv('RATELIMIT_DEFAULT', '2000 per day;100 per hour')

# Cache policy is fixed, not environment driven
CACHE_TTL = timedelta(minutes=10)
MAX_CACHE_SIZE = 10
POLL_INTERVAL = timedelta(minutes=10)
