"""
Configuration settings for the OSM API client
"""

import sys
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from .errors import ValidationError


@dataclass(frozen=True)
class APIConfig:
    """API endpoint and request settings"""
    # Base address of the API, without the version segment
    # Options: www.openstreetmap.org (production), master.apis.dev.openstreetmap.org (sandbox)
    base_url: str = "https://www.openstreetmap.org/api/"

    # Request settings
    request_timeout: int = 30

    # User agent for API requests
    user_agent: str = "osmclient/0.1"


@dataclass(frozen=True)
class ClientConfig:
    """Client configuration"""
    # API config
    api: APIConfig = field(default_factory=APIConfig)


# Global config instance
config = ClientConfig()


def get_config() -> ClientConfig:
    """Get global configuration"""
    return config


def check_base_url(base_url: str) -> Optional[str]:
    """Describe what is wrong with an API base address, None if it is usable"""
    if not base_url:
        return "base_url is required but not set"
    if not base_url.startswith(("http://", "https://")):
        return f"base_url must be an http(s) address, got {base_url!r}"
    return None


def validate_config(config: ClientConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValidationError if any required value is missing or invalid.
    """
    errors = []

    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        base_url_error = check_base_url(config.api.base_url)
        if base_url_error:
            errors.append(f"api.{base_url_error}")
        if config.api.request_timeout is None or config.api.request_timeout <= 0:
            errors.append(f"api.request_timeout must be positive, got {config.api.request_timeout}")
        if not config.api.user_agent:
            errors.append("api.user_agent is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValidationError(error_msg)


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )
