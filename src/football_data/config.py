"""Configuration and logging setup for the football-data client."""

import json
import logging
import os
import pathlib
from collections.abc import Mapping

import pydantic
import structlog

from .errors import ConfigurationError

DEFAULT_BASE_URI = "http://api.football-data.org/v2/"
DEFAULT_TIMEOUT = 30.0

ENV_PREFIX = "FOOTBALL_DATA_"


class ClientConfig(pydantic.BaseModel):
    """Configuration for the football-data client."""

    model_config = pydantic.ConfigDict(frozen=True)

    auth_token: str = pydantic.Field(description="football-data.org API token")
    base_uri: str = pydantic.Field(
        DEFAULT_BASE_URI,
        description="Base URI resources are appended to",
    )
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")

    @pydantic.field_validator("auth_token")
    @classmethod
    def _token_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Missing configuration for auth token!"
            raise ValueError(msg)
        return value

    @pydantic.field_validator("base_uri")
    @classmethod
    def _base_uri_trailing_slash(cls, value: str) -> str:
        # Resources are relative paths appended verbatim
        return value if value.endswith("/") else f"{value}/"


def make_config(**values: object) -> ClientConfig:
    """Validate configuration values into a ClientConfig.

    Raises:
        ConfigurationError: If any value is missing or invalid.
    """
    try:
        return ClientConfig(**values)
    except pydantic.ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def load_config(config_path: str | pathlib.Path) -> ClientConfig:
    """Load configuration from a JSON file."""
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise ConfigurationError(msg)

    with path.open("r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON in configuration file {config_path}: {exc}"
            raise ConfigurationError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Configuration file must contain a JSON object: {config_path}"
        raise ConfigurationError(msg)

    return make_config(**data)


def config_from_env(environ: Mapping[str, str] | None = None) -> ClientConfig:
    """Build configuration from ``FOOTBALL_DATA_*`` environment variables.

    ``FOOTBALL_DATA_AUTH_TOKEN`` is required; ``FOOTBALL_DATA_BASE_URI``,
    ``FOOTBALL_DATA_TIMEOUT`` and ``FOOTBALL_DATA_LOG_LEVEL`` are optional.
    """
    environ = os.environ if environ is None else environ
    values = {
        field_name: environ[ENV_PREFIX + field_name.upper()]
        for field_name in ClientConfig.model_fields
        if ENV_PREFIX + field_name.upper() in environ
    }
    values.setdefault("auth_token", "")
    return make_config(**values)


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
