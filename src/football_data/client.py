"""football-data.org API clients.

Provides a synchronous and an asynchronous HTTP client sharing the same
operations. Each operation builds a validated resource from the endpoint
table, issues a GET request and returns the decoded JSON document.
"""

import abc
import threading
import time
from collections.abc import Iterable
from typing import Any

import httpx
import structlog

from .config import (
    DEFAULT_BASE_URI,
    DEFAULT_TIMEOUT,
    ClientConfig,
    configure_logging,
    make_config,
)
from .endpoints import build_resource
from .errors import ConfigurationError, UpstreamAPIError

logger = structlog.get_logger(__name__)

__all__ = [
    "DEFAULT_BASE_URI",
    "DEFAULT_TIMEOUT",
    "AsyncFootballDataClient",
    "FootballDataClient",
]


def _interpret_response(response: httpx.Response, url: str) -> Any:
    """Decode a response body and surface API error documents.

    Raises:
        UpstreamAPIError: If the body is an error document.
        httpx.HTTPStatusError: If the status is an error and the body is not JSON.
        ValueError: If a successful response body is not JSON.
    """
    try:
        data = response.json()
    except ValueError:
        response.raise_for_status()
        raise

    code = data.get("errorCode") if isinstance(data, dict) else None
    if code is not None:
        try:
            code = int(code)
        except (TypeError, ValueError):
            logger.warning("Non-numeric API error code", url=url, code=code)
        message = data.get("message", "")
        logger.error("API error response", url=url, code=code, error_message=message)
        raise UpstreamAPIError(message=message, code=code, url=url)
    return data


class FootballDataOperations(abc.ABC):
    """The football-data.org resources as client methods.

    Subclasses provide ``_get`` which performs the request for a resource
    string. Resources are built before ``_get`` is called, so invalid
    parameters never reach the network.
    """

    @abc.abstractmethod
    def _get(self, resource: str) -> Any:
        """Request a resource string and return the decoded document."""

    def get_available_competitions(
        self,
        areas: Iterable[int] = (),
        plan: str = "",
    ) -> Any:
        """List all available competitions.

        Args:
            areas: Area ids to filter on.
            plan: Subscription tier, e.g. TIER_ONE.
        """
        return self._get(build_resource("competitions", areas=areas, plan=plan))

    def get_competition(self, competition_id: int) -> Any:
        """Show one particular competition."""
        return self._get(build_resource("competition", competition_id=competition_id))

    def get_competition_teams(
        self,
        competition_id: int,
        season: str | int = "",
        stage: str = "",
    ) -> Any:
        """List all teams of a competition."""
        return self._get(
            build_resource(
                "competition_teams",
                competition_id=competition_id,
                season=season,
                stage=stage,
            ),
        )

    def get_competition_standings(
        self,
        competition_id: int,
        standing_type: str = "",
    ) -> Any:
        """Show standings of a competition (TOTAL, HOME or AWAY)."""
        return self._get(
            build_resource(
                "competition_standings",
                competition_id=competition_id,
                standing_type=standing_type,
            ),
        )

    def get_competition_matches(  # noqa: PLR0913
        self,
        competition_id: int,
        date_from: str = "",
        date_to: str = "",
        stage: str = "",
        status: str = "",
        matchday: int | None = None,
        group: str = "",
        season: str | int = "",
    ) -> Any:
        """List all matches of a competition.

        Args:
            competition_id: Competition id.
            date_from: First day, YYYY-MM-DD.
            date_to: Last day, YYYY-MM-DD.
            stage: Competition stage.
            status: Match status, e.g. FINISHED.
            matchday: Matchday number.
            group: Competition group.
            season: Season starting year.
        """
        return self._get(
            build_resource(
                "competition_matches",
                competition_id=competition_id,
                date_from=date_from,
                date_to=date_to,
                stage=stage,
                status=status,
                matchday=matchday,
                group=group,
                season=season,
            ),
        )

    def get_competition_scorers(self, competition_id: int, limit: int = 10) -> Any:
        """List goal scorers of a competition."""
        return self._get(
            build_resource(
                "competition_scorers",
                competition_id=competition_id,
                limit=limit,
            ),
        )

    def get_matches(
        self,
        competitions: Iterable[int] = (),
        date_from: str = "",
        date_to: str = "",
        status: str = "",
    ) -> Any:
        """List matches across (a set of) competitions."""
        return self._get(
            build_resource(
                "matches",
                competitions=competitions,
                date_from=date_from,
                date_to=date_to,
                status=status,
            ),
        )

    def get_match(self, match_id: int) -> Any:
        """Show one particular match."""
        return self._get(build_resource("match", match_id=match_id))

    def get_team_matches(  # noqa: PLR0913
        self,
        team_id: int,
        date_from: str = "",
        date_to: str = "",
        status: str = "",
        venue: str = "",
        limit: int = 10,
    ) -> Any:
        """Show matches of a team.

        Args:
            team_id: Team id.
            date_from: First day, YYYY-MM-DD.
            date_to: Last day, YYYY-MM-DD.
            status: Match status.
            venue: HOME or AWAY.
            limit: Maximum number of matches.
        """
        return self._get(
            build_resource(
                "team_matches",
                team_id=team_id,
                date_from=date_from,
                date_to=date_to,
                status=status,
                venue=venue,
                limit=limit,
            ),
        )

    def get_team(self, team_id: int) -> Any:
        """Show one particular team."""
        return self._get(build_resource("team", team_id=team_id))

    def get_areas(self) -> Any:
        """List all available areas."""
        return self._get(build_resource("areas"))

    def get_area(self, area_id: int) -> Any:
        """Show one particular area."""
        return self._get(build_resource("area", area_id=area_id))

    def get_player(self, player_id: int) -> Any:
        """Show one particular player."""
        return self._get(build_resource("player", player_id=player_id))

    def get_player_matches(  # noqa: PLR0913
        self,
        player_id: int,
        date_from: str = "",
        date_to: str = "",
        status: str = "",
        competitions: Iterable[int] = (),
        limit: int = 10,
    ) -> Any:
        """Show matches of a player."""
        return self._get(
            build_resource(
                "player_matches",
                player_id=player_id,
                date_from=date_from,
                date_to=date_to,
                status=status,
                competitions=competitions,
                limit=limit,
            ),
        )


class _BaseClient(FootballDataOperations):
    """Configuration and request headers shared by both clients."""

    def __init__(
        self,
        auth_token: str,
        base_uri: str = DEFAULT_BASE_URI,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            auth_token: football-data.org API token.
            base_uri: Base URI resources are appended to.
            timeout: Request timeout in seconds.

        Raises:
            ConfigurationError: If the token is empty or a value is invalid.
        """
        if not auth_token or not auth_token.strip():
            msg = "Missing configuration for auth token!"
            raise ConfigurationError(msg)

        self.config = make_config(
            auth_token=auth_token,
            base_uri=base_uri,
            timeout=timeout,
        )
        self._headers = {
            "X-Auth-Token": self.config.auth_token,
            "Content-Type": "application/json",
        }

    @property
    def base_uri(self) -> str:
        return self.config.base_uri

    def _url(self, resource: str) -> str:
        return f"{self.config.base_uri}{resource}"


class FootballDataClient(_BaseClient):
    """Synchronous client for the football-data.org API.

    Thread-safe through thread-local storage of httpx.Client instances.
    Can be used as a context manager for automatic cleanup.
    """

    def __init__(
        self,
        auth_token: str,
        base_uri: str = DEFAULT_BASE_URI,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            auth_token: football-data.org API token.
            base_uri: Base URI resources are appended to.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport requests are sent through.

        Raises:
            ConfigurationError: If the token is empty or a value is invalid.
        """
        super().__init__(auth_token, base_uri=base_uri, timeout=timeout)
        self._transport = transport
        self._local = threading.local()

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.BaseTransport | None = None,
    ) -> "FootballDataClient":
        """Create a client from a loaded configuration.

        Also configures logging at the configured ``log_level``.
        """
        configure_logging(config.log_level)
        return cls(
            config.auth_token,
            base_uri=config.base_uri,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def client(self) -> httpx.Client:
        """Get or create the thread-local httpx client."""
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            self._local.client = httpx.Client(
                headers=self._headers,
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._local.client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the thread-local HTTP client if open."""
        if hasattr(self._local, "client") and not self._local.client.is_closed:
            self._local.client.close()

    def _get(self, resource: str) -> Any:
        """Request a resource and return the decoded JSON document.

        Raises:
            UpstreamAPIError: If the API answers with an error document.
            httpx.HTTPError: If the HTTP request fails.
        """
        url = self._url(resource)
        start_time = time.time()
        try:
            logger.debug("Making API request", method="GET", url=url)
            response = self.client.get(url)
        except httpx.HTTPError:
            logger.exception(
                "API request failed",
                url=url,
                duration_seconds=round(time.time() - start_time, 3),
            )
            raise
        logger.debug(
            "API request completed",
            status_code=response.status_code,
            duration_seconds=round(time.time() - start_time, 3),
        )
        return _interpret_response(response, url)


class AsyncFootballDataClient(_BaseClient):
    """Asynchronous client for the football-data.org API.

    Operations return awaitables. Parameters are validated when the
    operation is called, before anything is awaited.
    """

    def __init__(
        self,
        auth_token: str,
        base_uri: str = DEFAULT_BASE_URI,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            auth_token: football-data.org API token.
            base_uri: Base URI resources are appended to.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport requests are sent through.

        Raises:
            ConfigurationError: If the token is empty or a value is invalid.
        """
        super().__init__(auth_token, base_uri=base_uri, timeout=timeout)
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AsyncFootballDataClient":
        """Create a client from a loaded configuration.

        Also configures logging at the configured ``log_level``.
        """
        configure_logging(config.log_level)
        return cls(
            config.auth_token,
            base_uri=config.base_uri,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the httpx async client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._headers,
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    async def __aenter__(self):
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context manager and cleanup resources."""
        await self.aclose()

    async def aclose(self):
        """Close the HTTP client if open."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def _get(self, resource: str) -> Any:
        """Request a resource and return the decoded JSON document.

        Raises:
            UpstreamAPIError: If the API answers with an error document.
            httpx.HTTPError: If the HTTP request fails.
        """
        url = self._url(resource)
        start_time = time.time()
        try:
            logger.debug("Making API request", method="GET", url=url)
            response = await self.client.get(url)
        except httpx.HTTPError:
            logger.exception(
                "API request failed",
                url=url,
                duration_seconds=round(time.time() - start_time, 3),
            )
            raise
        logger.debug(
            "API request completed",
            status_code=response.status_code,
            duration_seconds=round(time.time() - start_time, 3),
        )
        return _interpret_response(response, url)
