"""Exceptions raised by the football-data client."""


class FootballDataError(Exception):
    """Base class for football-data client errors."""


class ConfigurationError(FootballDataError, ValueError):
    """Raised when the client configuration is missing or invalid."""


class InvalidParameterError(FootballDataError, ValueError):
    """Raised when a query parameter value is rejected by its validator."""

    def __init__(self, key: str, value: str):
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for {key}[{value}]")


class UpstreamAPIError(FootballDataError):
    """Raised when the API answers with an error document.

    Attributes:
        message: Error message reported by the API.
        code: Error code reported by the API, kept raw when not numeric.
        url: Full URL of the failed request.
    """

    def __init__(self, message: str, code: int | str, url: str):
        self.message = message
        self.code = code
        self.url = url
        super().__init__(f"Problem football-data.org API [{url}] {message}")
