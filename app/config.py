from dataclasses import dataclass
from functools import lru_cache
import logging
import os

from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

DEFAULT_URL = "0.0.0.0"
DEFAULT_PORT = 8000


@dataclass(frozen=True)
class Settings:
    url: str = DEFAULT_URL
    port: int = DEFAULT_PORT
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"


def _env(name: str, default):
    value = os.getenv(name)
    if not value:
        logger.warning("%s not found in environment, using %s", name, default)
        return default
    return value


@lru_cache()
def get_settings() -> Settings:
    return Settings(
        url=_env("URL", DEFAULT_URL),
        port=int(_env("PORT", DEFAULT_PORT)),
        api_prefix=os.getenv("API_PREFIX", "/api/v1").rstrip("/"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
