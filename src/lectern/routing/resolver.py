"""Location parsing: turn the current URL into a route candidate.

Pure functions. The runtime reads the location synchronously; nothing
here waits for the navigation layer to settle.
"""

from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from lectern.config import RoutingConfig, RoutingMethod
from lectern.routing.route import DEFAULT_API_NAME, Candidate, Route, RouteType

# Matches no route. Path routing only expects paths, so a query string on
# the bare root is not-found rather than the entrance.
UNMATCHED = Candidate(type="")


@dataclass(frozen=True, slots=True)
class LocationSnapshot:
    """The parts of a browser location the router reads.

    ``redirect_path`` is the route path a scaffold redirect page stored
    before sending the browser back to the root document.
    """

    path: str = "/"
    query: str = ""
    redirect_path: str | None = None

    @classmethod
    def from_url(cls, url: str, *, redirect_path: str | None = None) -> "LocationSnapshot":
        parts = urlsplit(url)
        return cls(path=parts.path or "/", query=parts.query, redirect_path=redirect_path)

    @classmethod
    def for_route(cls, route: Route, routing: RoutingConfig) -> "LocationSnapshot":
        """The location a browser shows after navigating to *route*."""
        if routing.method is RoutingMethod.QUERY:
            return cls(path=routing.base, query=route.path.removeprefix("?"))
        return cls(path=routing.base + route.path)


def candidate_from_query(query: str) -> Candidate | None:
    """Read the first ``key=value`` pair: ``type=name``."""
    query = query.lstrip("?&")
    if not query:
        return None
    key, _, value = query.split("&", 1)[0].partition("=")
    return Candidate(type=key.lower(), name=unquote(value) or None)


def candidate_from_path(path: str, *, base: str = "/", main_document: str = "index.html") -> Candidate | None:
    """Read ``api[/name]`` or ``name`` from a path below *base*."""
    if path.startswith(base):
        path = path[len(base) :]
    elif path + "/" == base:
        path = ""
    path = path.strip("/")
    if path == main_document or path.endswith("/" + main_document):
        path = path.removesuffix(main_document).rstrip("/")
    if not path:
        return None
    head, _, rest = path.partition("/")
    if head.lower() == RouteType.API:
        return Candidate(type=RouteType.API.value, name=unquote(rest.strip("/")) or None)
    return Candidate(type=RouteType.CONTENT.value, name=unquote(path))


def candidate_from_id(route_id: str | None) -> Candidate | None:
    """Parse a route id such as ``"content:guide"`` or a bare ``"api"``."""
    if not route_id:
        return None
    route_type, _, name = route_id.partition(":")
    if route_type == RouteType.API and name == DEFAULT_API_NAME:
        name = ""
    return Candidate(type=route_type.lower(), name=name or None)


def resolve_candidate(
    location: LocationSnapshot,
    routing: RoutingConfig,
    *,
    main_document: str = "index.html",
) -> Candidate | None:
    """Extract a ``(type, name)`` candidate, or ``None`` for a bare root.

    ``None`` means "no routing information" (callers use the entrance
    route), which is different from a candidate that later fails to
    match (not-found).
    """
    if routing.method is RoutingMethod.QUERY:
        return candidate_from_query(location.query)

    if location.redirect_path:
        return candidate_from_path(location.redirect_path, main_document=main_document)
    candidate = candidate_from_path(location.path, base=routing.base, main_document=main_document)
    if candidate is None and location.query.lstrip("?"):
        return UNMATCHED
    return candidate
