"""football-data.org API client.

Client library for the football-data.org REST API that builds validated
resource URLs, authenticates requests and returns the decoded JSON
documents untouched.

Exports:
    FootballDataClient: Synchronous HTTP client.
    AsyncFootballDataClient: Asynchronous HTTP client with the same operations.
    ClientConfig: Immutable client configuration.
    FootballDataError: Base class for every error raised by this package.
"""

from .client import (
    DEFAULT_BASE_URI,
    DEFAULT_TIMEOUT,
    AsyncFootballDataClient,
    FootballDataClient,
)
from .config import ClientConfig, config_from_env, configure_logging, load_config
from .errors import (
    ConfigurationError,
    FootballDataError,
    InvalidParameterError,
    UpstreamAPIError,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BASE_URI",
    "DEFAULT_TIMEOUT",
    "AsyncFootballDataClient",
    "ClientConfig",
    "ConfigurationError",
    "FootballDataClient",
    "FootballDataError",
    "InvalidParameterError",
    "UpstreamAPIError",
    "config_from_env",
    "configure_logging",
    "load_config",
]
