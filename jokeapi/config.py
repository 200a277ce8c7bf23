# jokeapi/config.py
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env as early as possible so env vars are available everywhere
load_dotenv()

DEFAULT_BASE_URL = "https://v2.jokeapi.dev/joke/"
DEFAULT_TIMEOUT = 5.0


def _read_timeout() -> float:
    raw = os.getenv("JOKEAPI_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric JOKEAPI_TIMEOUT=%r; using %s", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT


# Base must end with "/" since the category segment is appended directly.
BASE_URL = os.getenv("JOKEAPI_BASE_URL", DEFAULT_BASE_URL)
if not BASE_URL.endswith("/"):
    BASE_URL += "/"

TIMEOUT = _read_timeout()
