"""Tests for FootballDataClient.

Requests go through an httpx.MockTransport so the full path from operation
call to URL, headers and response interpretation is exercised without any
network access.
"""

import json
from unittest.mock import patch

import httpx
import pytest
import structlog

from football_data import client, config
from football_data.errors import (
    ConfigurationError,
    InvalidParameterError,
    UpstreamAPIError,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


class RecordingHandler:
    """MockTransport handler returning a fixed response and keeping requests."""

    def __init__(self, status_code: int = 200, payload=None, text: str | None = None):
        self.status_code = status_code
        self.payload = {"count": 0} if payload is None else payload
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def api_client(handler: RecordingHandler) -> client.FootballDataClient:
    return client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("token", ["", "   ", "\t\n"])
def test_init_rejects_empty_token(token):
    """Empty or blank tokens fail construction."""
    with pytest.raises(ConfigurationError, match="auth token"):
        client.FootballDataClient(token)


def test_init_rejects_invalid_timeout():
    """Invalid configuration values surface as ConfigurationError."""
    with pytest.raises(ConfigurationError):
        client.FootballDataClient("AUTH_TOKEN", timeout=0)


def test_init_defaults():
    api_client = client.FootballDataClient("AUTH_TOKEN")

    assert api_client.base_uri == "http://api.football-data.org/v2/"
    assert api_client.config.timeout == client.DEFAULT_TIMEOUT


def test_init_normalizes_base_uri():
    """A base URI without trailing slash still joins cleanly with resources."""
    api_client = client.FootballDataClient("AUTH_TOKEN", base_uri="http://localhost/v2")
    assert api_client.base_uri == "http://localhost/v2/"


@patch("football_data.client.configure_logging")
def test_from_config(mock_configure_logging, handler: RecordingHandler):
    cfg = config.ClientConfig(auth_token="FROM_CONFIG", base_uri="http://localhost/v4/")
    api_client = client.FootballDataClient.from_config(
        cfg,
        transport=httpx.MockTransport(handler),
    )

    api_client.get_areas()

    assert str(handler.requests[0].url) == "http://localhost/v4/areas/"
    assert handler.requests[0].headers["X-Auth-Token"] == "FROM_CONFIG"


@patch("football_data.client.configure_logging")
def test_from_config_applies_log_level(mock_configure_logging):
    """The configured log level is passed on to the logging setup."""
    cfg = config.ClientConfig(auth_token="AUTH_TOKEN", log_level="WARNING")

    client.FootballDataClient.from_config(cfg)

    mock_configure_logging.assert_called_once_with("WARNING")


def test_from_config_log_level_filters_output(capsys):
    """A client built from config logs only at or above its log level."""
    cfg = config.ClientConfig(auth_token="AUTH_TOKEN", log_level="WARNING")
    try:
        client.FootballDataClient.from_config(cfg)
        log = structlog.get_logger("football_data.test")
        log.info("below threshold")
        log.warning("at threshold")
        output = capsys.readouterr().out
    finally:
        structlog.reset_defaults()

    assert "below threshold" not in output
    assert "at threshold" in output


def test_operations_base_class_is_abstract():
    """The operations mixin cannot be used without a request implementation."""
    with pytest.raises(TypeError):
        client.FootballDataOperations()


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


def test_request_sends_auth_headers(api_client, handler):
    api_client.get_competition(2021)

    request = handler.requests[0]
    assert request.method == "GET"
    assert request.headers["X-Auth-Token"] == "AUTH_TOKEN"
    assert request.headers["Content-Type"] == "application/json"


def test_request_url_embeds_identifier(api_client, handler):
    api_client.get_match(327117)
    assert str(handler.requests[0].url) == "http://api.football-data.org/v2/matches/327117"


def test_request_url_with_query(api_client, handler):
    api_client.get_competition_matches(
        2021,
        date_from="2022-01-01",
        status="FINISHED",
        matchday=3,
    )

    url = handler.requests[0].url
    assert url.path == "/v2/competitions/2021/matches"
    assert dict(url.params) == {
        "dateFrom": "2022-01-01",
        "status": "FINISHED",
        "matchday": "3",
    }


def test_request_omits_empty_filters(api_client, handler):
    api_client.get_available_competitions()

    url = handler.requests[0].url
    assert url.path == "/v2/competitions/"
    assert not url.params


def test_request_list_filters_are_comma_joined(api_client, handler):
    api_client.get_available_competitions(areas=[2072, 2088], plan="TIER_ONE")

    params = handler.requests[0].url.params
    assert params["areas"] == "2072,2088"
    assert params["plan"] == "TIER_ONE"


def test_team_matches_sends_date_from_and_default_limit(api_client, handler):
    api_client.get_team_matches(57, date_from="2022-01-01", venue="HOME")

    url = handler.requests[0].url
    assert url.path == "/v2/teams/57/matches/"
    assert dict(url.params) == {"dateFrom": "2022-01-01", "venue": "HOME", "limit": "10"}


def test_player_matches_default_limit(api_client, handler):
    api_client.get_player_matches(44, competitions=[2021, 2014])

    params = handler.requests[0].url.params
    assert params["competitions"] == "2021,2014"
    assert params["limit"] == "10"


def test_competition_scorers_custom_limit(api_client, handler):
    api_client.get_competition_scorers(2021, limit=25)
    assert handler.requests[0].url.params["limit"] == "25"


@pytest.mark.parametrize(
    ("operation", "args", "expected_path"),
    [
        ("get_competition", (2021,), "/v2/competitions/2021"),
        ("get_competition_teams", (2021,), "/v2/competitions/2021/teams"),
        ("get_competition_standings", (2021,), "/v2/competitions/2021/standings"),
        ("get_matches", (), "/v2/matches"),
        ("get_team", (57,), "/v2/teams/57"),
        ("get_areas", (), "/v2/areas/"),
        ("get_area", (2072,), "/v2/areas/2072"),
        ("get_player", (44,), "/v2/players/44"),
        ("get_player_matches", (44,), "/v2/players/44/matches"),
    ],
)
def test_operation_paths(api_client, handler, operation, args, expected_path):
    getattr(api_client, operation)(*args)
    assert handler.requests[0].url.path == expected_path


def test_invalid_parameter_never_reaches_network(api_client, handler):
    """Validation failures abort the call before any request is made."""
    with pytest.raises(InvalidParameterError) as exc_info:
        api_client.get_matches(date_from="2022-01-01", status="WRONG_STATUS")

    assert exc_info.value.key == "status"
    assert handler.requests == []


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


def test_success_payload_returned_unchanged():
    payload = {"count": 1, "competitions": [{"id": 2021, "name": "Premier League"}]}
    handler = RecordingHandler(payload=payload)
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    assert api_client.get_available_competitions() == payload


def test_success_non_object_payload_returned_unchanged():
    handler = RecordingHandler(payload=[1, 2, 3])
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    assert api_client.get_areas() == [1, 2, 3]


def test_error_document_raises_upstream_error():
    """An errorCode in the body raises UpstreamAPIError with message, code and url."""
    handler = RecordingHandler(
        status_code=400,
        payload={"errorCode": 400, "message": "x"},
    )
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(UpstreamAPIError) as exc_info:
        api_client.get_competition(2021)

    error = exc_info.value
    assert error.code == 400
    assert error.message == "x"
    assert error.url == "http://api.football-data.org/v2/competitions/2021"
    assert error.url in str(error)


def test_null_error_code_is_not_an_error():
    """A null errorCode does not mark the document as an error."""
    payload = {"errorCode": None, "message": "m", "count": 0}
    handler = RecordingHandler(payload=payload)
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    assert api_client.get_areas() == payload


def test_non_numeric_error_code_kept_raw():
    """A non-numeric errorCode still raises, keeping the code as sent."""
    handler = RecordingHandler(
        status_code=400,
        payload={"errorCode": "E400", "message": "bad"},
    )
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(UpstreamAPIError) as exc_info:
        api_client.get_areas()
    assert exc_info.value.code == "E400"
    assert exc_info.value.message == "bad"


def test_numeric_string_error_code_converted():
    handler = RecordingHandler(payload={"errorCode": "429", "message": "slow down"})
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(UpstreamAPIError) as exc_info:
        api_client.get_areas()
    assert exc_info.value.code == 429


def test_error_document_with_success_status_still_raises():
    handler = RecordingHandler(payload={"errorCode": 403, "message": "restricted"})
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(UpstreamAPIError) as exc_info:
        api_client.get_team(57)
    assert exc_info.value.code == 403


def test_non_json_error_status_raises_http_status_error():
    handler = RecordingHandler(status_code=502, text="<html>Bad Gateway</html>")
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(httpx.HTTPStatusError):
        api_client.get_areas()


def test_non_json_success_body_raises_decode_error():
    handler = RecordingHandler(text="not json")
    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(json.JSONDecodeError):
        api_client.get_areas()


def test_transport_error_propagates():
    """Network failures are re-raised unmodified."""

    def failing_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api_client = client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(failing_handler),
    )

    with pytest.raises(httpx.ConnectError, match="connection refused"):
        api_client.get_areas()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


def test_context_manager_closes_client(handler):
    with client.FootballDataClient(
        "AUTH_TOKEN",
        transport=httpx.MockTransport(handler),
    ) as api_client:
        http_client = api_client.client
        api_client.get_areas()

    assert http_client.is_closed


def test_client_reused_within_thread(api_client):
    assert api_client.client is api_client.client


def test_client_recreated_after_close(api_client):
    first = api_client.client
    api_client.close()
    assert api_client.client is not first
