"""Endpoint table for the football-data.org v2 API.

Maps each client operation to its path template and the ordered list of
query parameters it accepts. Identifiers are formatted into the path,
optional filters go through the query builder.
"""

from dataclasses import dataclass
from typing import Any

from . import validators
from .query import QueryParameter, ResourceRequest, Validator


@dataclass(frozen=True)
class ParamSpec:
    """Maps a client argument to its wire key and validator."""

    argument: str
    key: str
    validator: Validator | None = None


@dataclass(frozen=True)
class Endpoint:
    """Path template and accepted parameters of one API resource."""

    path: str
    params: tuple[ParamSpec, ...] = ()

    def request(self, **arguments: Any) -> ResourceRequest:
        """Bind call arguments to this endpoint.

        Arguments named in the path template are formatted into it, the
        remaining ones are matched to the parameter specs in table order.

        Raises:
            TypeError: If an argument is not accepted by this endpoint.
        """
        path_args = {
            name: arguments.pop(name)
            for name in list(arguments)
            if f"{{{name}}}" in self.path
        }
        known = {spec.argument for spec in self.params}
        if unknown := set(arguments) - known:
            msg = f"Unexpected arguments for {self.path}: {', '.join(sorted(unknown))}"
            raise TypeError(msg)

        return ResourceRequest(
            path=self.path.format(**path_args),
            query_parameters=[
                QueryParameter(spec.key, arguments.get(spec.argument), spec.validator)
                for spec in self.params
            ],
        )


_DATE_FROM = ParamSpec("date_from", "dateFrom", validators.validate_date)
_DATE_TO = ParamSpec("date_to", "dateTo", validators.validate_date)
_STATUS = ParamSpec("status", "status", validators.validate_status)
_SEASON = ParamSpec("season", "season", validators.validate_season)
_COMPETITIONS = ParamSpec(
    "competitions",
    "competitions",
    validators.validate_string_ints,
)
_LIMIT = ParamSpec("limit", "limit")

ENDPOINTS: dict[str, Endpoint] = {
    "competitions": Endpoint(
        "competitions/?",
        (
            ParamSpec("areas", "areas", validators.validate_string_ints),
            ParamSpec("plan", "plan", validators.validate_plan),
        ),
    ),
    "competition": Endpoint("competitions/{competition_id}"),
    "competition_teams": Endpoint(
        "competitions/{competition_id}/teams?",
        (_SEASON, ParamSpec("stage", "stage")),
    ),
    "competition_standings": Endpoint(
        "competitions/{competition_id}/standings?",
        (
            ParamSpec(
                "standing_type",
                "standingType",
                validators.validate_standing_type,
            ),
        ),
    ),
    "competition_matches": Endpoint(
        "competitions/{competition_id}/matches?",
        (
            _DATE_FROM,
            _DATE_TO,
            ParamSpec("stage", "stage"),
            _STATUS,
            ParamSpec("matchday", "matchday"),
            ParamSpec("group", "group"),
            _SEASON,
        ),
    ),
    "competition_scorers": Endpoint(
        "competitions/{competition_id}/scorers?",
        (_LIMIT,),
    ),
    "matches": Endpoint(
        "matches?",
        (_COMPETITIONS, _DATE_FROM, _DATE_TO, _STATUS),
    ),
    "match": Endpoint("matches/{match_id}"),
    "team_matches": Endpoint(
        "teams/{team_id}/matches/?",
        (
            _DATE_FROM,
            _DATE_TO,
            _STATUS,
            ParamSpec("venue", "venue", validators.validate_venue),
            _LIMIT,
        ),
    ),
    "team": Endpoint("teams/{team_id}"),
    "areas": Endpoint("areas/"),
    "area": Endpoint("areas/{area_id}"),
    "player": Endpoint("players/{player_id}"),
    "player_matches": Endpoint(
        "players/{player_id}/matches?",
        (_DATE_FROM, _DATE_TO, _STATUS, _COMPETITIONS, _LIMIT),
    ),
}


def build_resource(name: str, **arguments: Any) -> str:
    """Build the resource string for a named endpoint.

    Raises:
        KeyError: If the endpoint name is unknown.
        InvalidParameterError: If a parameter value fails validation.
    """
    return ENDPOINTS[name].request(**arguments).build()
