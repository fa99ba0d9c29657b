import os
from dotenv import load_dotenv

# Load environment variables from .env file(s)
load_dotenv()


def _split_env_list(name):
    """Read a comma-separated environment variable into a list of stripped values."""
    raw = os.environ.get(name, '')
    return [part.strip() for part in raw.split(',') if part.strip()]


class Config:
    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Discount codes from the seed set that should start out inactive
    INACTIVE_DISCOUNT_CODES = _split_env_list('BASKET_INACTIVE_DISCOUNT_CODES')

    # Server bind settings (used by run.py / dev_server.py)
    HOST = os.environ.get('BASKET_API_HOST', '0.0.0.0')
    PORT = int(os.environ.get('BASKET_API_PORT', 5054))
