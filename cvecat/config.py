"""
cvecat/config.py -- Startup configuration via pydantic-settings.

All environment variable reads for cvecat happen here. No module should call
os.getenv() or os.environ.get() directly -- import get_settings() instead.

Environment variables (prefix CVECAT_):
  CVECAT_FORMAT    Output template used when --format is not given.
  CVECAT_BASE_URL  Root of the record tree, for mirrors of cvelistV5.
  CVECAT_TIMEOUT   Optional HTTP timeout in seconds. Unset means the
                   requests default (wait indefinitely).

Settings are read once, at first call to get_settings(), and are immutable
afterwards. The CLI layers its flags on top and hands the pipeline a frozen
RunOptions value rather than letting it read configuration lazily.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .identifier import DEFAULT_BASE_URL

logger = logging.getLogger("cvecat.config")

DEFAULT_FORMAT = "*{{ cve_metadata.cve_id }}*: {{ containers.cna.descriptions[0].value }}\n"


class Settings(BaseSettings):
    """Defaults loaded from CVECAT_* environment variables.

    All fields have defaults so Settings() can be instantiated in test
    environments with a clean environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="CVECAT_",
        extra="ignore",
        frozen=True,
    )

    format: str = DEFAULT_FORMAT
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    @field_validator("timeout")
    @classmethod
    def positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("CVECAT_TIMEOUT must be a positive number of seconds.")
        return value


@lru_cache
def get_settings() -> Settings:
    """Return the Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    settings = Settings()
    if settings.base_url != DEFAULT_BASE_URL:
        logger.debug("Using record mirror at %s", settings.base_url)
    return settings
