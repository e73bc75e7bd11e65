"""
Centralized settings for the price guide service.

Values come from PRICE_GUIDE_* environment variables with sensible defaults.
Settings are read by the API and UI only; the estimation engine never looks
at them.
"""
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..engine.models import DEFAULT_CURRENCY

ENV_PREFIX = 'PRICE_GUIDE_'
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    default_currency: str = DEFAULT_CURRENCY
    log_level: str = 'INFO'

    # API server
    api_host: str = '0.0.0.0'
    api_port: int = 8000

    @classmethod
    def load(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Load settings from the environment."""
        env = os.environ if environ is None else environ
        defaults = cls()

        port = env.get(f'{ENV_PREFIX}API_PORT')
        try:
            api_port = int(port) if port else defaults.api_port
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}API_PORT must be an integer, got {port!r}")

        return cls(
            default_currency=env.get(f'{ENV_PREFIX}DEFAULT_CURRENCY') or defaults.default_currency,
            log_level=(env.get(f'{ENV_PREFIX}LOG_LEVEL') or defaults.log_level).upper(),
            api_host=env.get(f'{ENV_PREFIX}API_HOST') or defaults.api_host,
            api_port=api_port,
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def configure_logging(settings: Optional[Settings] = None):
    """Set up root logging at the configured level."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
