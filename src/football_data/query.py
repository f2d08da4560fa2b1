"""Query string construction for API resources.

A resource is a path followed by an ordered list of optional parameters.
Parameters are serialized, empty ones are dropped and the rest are checked
by their validator before being appended to the query string.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from .errors import InvalidParameterError

Validator: TypeAlias = Callable[[str], bool]
RawValue: TypeAlias = str | int | Iterable[int | str] | None


def serialize(value: RawValue) -> str:
    """Serialize a raw parameter value for the query string.

    ``None`` becomes the empty string, booleans become ``true``/``false``,
    integers are stringified and sequences are joined with commas.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    return ",".join(str(item) for item in value)


def append_query(
    current_query: str,
    key: str,
    value: str,
    validator: Validator | None = None,
) -> str:
    """Append ``key=value`` to a query string.

    Args:
        current_query: Query accumulated so far. Ends in ``?`` until the
            first parameter is appended.
        key: Wire name of the parameter.
        value: Serialized parameter value. Empty values are skipped.
        validator: Optional predicate the value must satisfy.

    Returns:
        The extended query string, or ``current_query`` if value is empty.

    Raises:
        InvalidParameterError: If the validator rejects the value.
    """
    if value == "":
        return current_query

    if validator is not None and not validator(value):
        raise InvalidParameterError(key, value)

    if not current_query.endswith("?"):
        current_query += "&"
    return f"{current_query}{key}={value}"


@dataclass(frozen=True)
class QueryParameter:
    """A named, optionally validated query parameter."""

    name: str
    raw_value: RawValue
    validator: Validator | None = None

    @property
    def value(self) -> str:
        """Serialized value as it appears on the wire."""
        return serialize(self.raw_value)


@dataclass(frozen=True)
class ResourceRequest:
    """A resource path together with its ordered query parameters."""

    path: str
    query_parameters: list[QueryParameter] = field(default_factory=list)

    def build(self) -> str:
        """Build the resource string.

        Parameters are appended in order. The first rejected value aborts
        the build.

        Raises:
            InvalidParameterError: If any parameter fails validation.
        """
        resource = self.path
        for param in self.query_parameters:
            resource = append_query(resource, param.name, param.value, param.validator)
        return resource
