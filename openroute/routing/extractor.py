"""Read raw parameter values out of an incoming request."""

from urllib.parse import unquote

from starlette.requests import Request

from openroute.core.exceptions import UnsupportedLocationError
from openroute.core.types import QueryParams, RawValue
from openroute.schema.parameters import Location


def parse_query_string(url: str) -> QueryParams:
    """Parse the query string of ``url``.

    The whole URL is percent-decoded first, then split once on the first
    ``?``. Repeated keys are promoted to lists in order of appearance. A bare
    key (no ``=``) has no value: it maps to None, which validation treats as
    absent, and a later ``key=value`` takes its place. ``key=`` keeps the
    empty string.

    Examples:
        >>> parse_query_string("/todos?tag=a&tag=b&done&page=")
        {'tag': ['a', 'b'], 'done': None, 'page': ''}
    """
    decoded = unquote(url)
    if "?" not in decoded:
        return {}

    query: QueryParams = {}
    for pair in decoded.split("?", 1)[1].split("&"):
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        current = query.get(key)
        if current is None:
            query[key] = value if sep else None
        elif not sep:
            continue
        elif isinstance(current, list):
            current.append(value)
        else:
            query[key] = [current, value]
    return query


def extract_parameter(
    request: Request, query: QueryParams, location: Location, name: str
) -> RawValue:
    """Return the raw value of parameter ``name``, or None when absent.

    Raises:
        UnsupportedLocationError: For cookie parameters.
    """
    if location is Location.QUERY:
        return query.get(name)
    if location is Location.PATH:
        value = request.path_params.get(name)
        return None if value is None else str(value)
    if location is Location.HEADER:
        return request.headers.get(name)
    raise UnsupportedLocationError(location.value)
