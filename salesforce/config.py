"""Client configuration resolved from explicit values or the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from salesforce.errors import ConfigurationError
from salesforce.model import Connection

DEFAULT_API_ROOT = "/services/data"
DEFAULT_API_VERSION = "v29.0"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_FEED_SORT = "LastModifiedDateDesc"
DEFAULT_FEED_PAGE_SIZE = 15

INSTANCE_URL_ENV = "SALESFORCE_INSTANCE_URL"
ACCESS_TOKEN_ENV = "SALESFORCE_ACCESS_TOKEN"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiConfig:
    """Where the REST API lives on an instance and how requests are shaped."""

    api_root: str = DEFAULT_API_ROOT
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    feed_sort: str = DEFAULT_FEED_SORT
    feed_page_size: int = DEFAULT_FEED_PAGE_SIZE

    @property
    def api_prefix(self) -> str:
        root = "/" + self.api_root.strip("/")
        return f"{root}/{self.api_version.strip('/')}/"

    def api_path(self, suffix: str) -> str:
        return self.api_prefix + suffix


DEFAULT_API_CONFIG = ApiConfig()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}.") from exc


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}.") from exc


def load_api_config() -> ApiConfig:
    """Build an ``ApiConfig`` from ``SALESFORCE_*`` environment variables."""

    return ApiConfig(
        api_root=os.getenv("SALESFORCE_API_ROOT", DEFAULT_API_ROOT),
        api_version=os.getenv("SALESFORCE_API_VERSION", DEFAULT_API_VERSION),
        timeout_seconds=_env_float("SALESFORCE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
        feed_sort=os.getenv("SALESFORCE_FEED_SORT", DEFAULT_FEED_SORT),
        feed_page_size=_env_int("SALESFORCE_FEED_PAGE_SIZE", DEFAULT_FEED_PAGE_SIZE),
    )


def connection_from_env() -> Connection:
    """Read the instance URL and access token from the environment."""

    instance_url = (os.getenv(INSTANCE_URL_ENV) or "").strip()
    access_token = (os.getenv(ACCESS_TOKEN_ENV) or "").strip()
    missing = [
        name
        for name, value in ((INSTANCE_URL_ENV, instance_url), (ACCESS_TOKEN_ENV, access_token))
        if not value
    ]
    if missing:
        logger.warning("Salesforce connection settings missing: %s", ", ".join(missing))
        raise ConfigurationError(f"Set {' and '.join(missing)} to connect to Salesforce.")
    return Connection(instance_url=instance_url, access_token=access_token)


__all__ = [
    "ApiConfig",
    "DEFAULT_API_CONFIG",
    "DEFAULT_TIMEOUT_SECONDS",
    "load_api_config",
    "connection_from_env",
    "INSTANCE_URL_ENV",
    "ACCESS_TOKEN_ENV",
]
