"""Route table construction.

Routes are registered in discovery order and frozen into an immutable
``RouteTable`` once the build has seen every documented unit.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import quote

from lectern.config import RoutingConfig, RoutingMethod
from lectern.errors import NameRule, RouteValidationError
from lectern.routing.names import normalize_name, validate_name
from lectern.routing.route import (
    DEFAULT_API_NAME,
    ApiRoute,
    ContentRoute,
    Route,
    RouteType,
    SourceType,
)

logger = logging.getLogger("lectern.build")


def route_path(route_type: RouteType, name: str, method: RoutingMethod) -> str:
    """Compute the addressable path of a route.

    Examples::

        (api, "_def_", query)     -> "?api"
        (api, "web", query)       -> "?api=web"
        (content, "guide", query) -> "?content=guide"
        (api, "_def_", path)      -> "api/"
        (api, "web", path)        -> "api/web/"
        (content, "guide", path)  -> "guide/"
        (content, "faq?", path)   -> "faq%3F/"

    The name is percent-encoded (slashes kept) so the path survives a
    trip through a browser address bar.
    """
    segment = "" if route_type is RouteType.API and name == DEFAULT_API_NAME else quote(name, safe="/")
    if method is RoutingMethod.QUERY:
        return f"?{route_type}" + (f"={segment}" if segment else "")
    parts = []
    if route_type is RouteType.API:
        parts.append("api")
    if segment:
        parts.append(segment)
    return "/".join(parts) + "/"


@dataclass(slots=True)
class RouteStats:
    """Per-type route counters for the build summary."""

    api: int = 0
    content: int = 0

    @property
    def total(self) -> int:
        return self.api + self.content


class RouteTable:
    """Immutable, ordered collection of routes.

    Order is insertion order and only matters for enumeration (menus,
    listings). Lookups always go through ``(type, name)``.
    """

    __slots__ = ("_by_key", "_routes")

    def __init__(self, routes: tuple[Route, ...] = ()) -> None:
        self._routes = routes
        self._by_key: dict[tuple[str, str], Route] = {}
        for route in routes:
            key = (route.type.value, route.name)
            if key in self._by_key:
                msg = f"Cannot have duplicate route name {route.name!r} with the same route type {route.type.value!r}."
                raise RouteValidationError(route.name, NameRule.DUPLICATE, msg)
            self._by_key[key] = route

    def get(self, route_type: str, name: str) -> Route | None:
        return self._by_key.get((route_type, name))

    def get_by_id(self, route_id: str) -> Route | None:
        route_type, _, name = route_id.partition(":")
        return self.get(route_type, name)

    def __contains__(self, route: object) -> bool:
        if not isinstance(route, Route):
            return False
        return self._by_key.get((route.type.value, route.name)) == route

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def __bool__(self) -> bool:
        return bool(self._routes)

    def to_list(self) -> list[dict[str, object]]:
        return [route.to_dict() for route in self._routes]


class RouteTableBuilder:
    """Validates route names and assembles the route table.

    Usage::

        builder = RouteTableBuilder(RoutingConfig())
        builder.add_route("README", SourceType.TEXT)
        builder.add_route(DEFAULT_API_NAME, SourceType.DOC)
        table = builder.build()
        table.get("content", "readme").path  # "?content=readme"
    """

    __slots__ = ("_built", "_keys", "_routes", "routing", "stats")

    def __init__(self, routing: RoutingConfig) -> None:
        self.routing = routing
        self.stats = RouteStats()
        self._routes: list[Route] = []
        self._keys: set[tuple[RouteType, str]] = set()
        self._built = False

    def add_route(self, name: str, source_type: SourceType | str) -> Route:
        """Register one documented unit. Must be called before build().

        Raises ``RouteValidationError`` when the name breaks an invariant;
        the build cannot continue with an ambiguous or unsafe table.
        """
        if self._built:
            msg = "Cannot add routes after the route table is built."
            raise RuntimeError(msg)

        source_type = SourceType(source_type)
        route_type = source_type.route_type
        name = normalize_name(name, case_sensitive=self.routing.case_sensitive)
        validate_name(name, self.routing)

        if route_type is RouteType.CONTENT and name == DEFAULT_API_NAME:
            msg = f"Route name {name!r} is reserved for the default api group."
            raise RouteValidationError(name, NameRule.RESERVED, msg)

        key = (route_type, name)
        if key in self._keys:
            msg = f"Cannot have duplicate route name {name!r} with the same route type {route_type.value!r}."
            raise RouteValidationError(name, NameRule.DUPLICATE, msg)

        path = route_path(route_type, name, self.routing.method)
        route: Route
        if route_type is RouteType.API:
            route = ApiRoute(name=name, path=path, source_type=source_type)
            self.stats.api += 1
        else:
            route = ContentRoute(name=name, path=path, source_type=source_type)
            self.stats.content += 1

        self._keys.add(key)
        self._routes.append(route)
        logger.debug("Route added: %s -> %s", route.id, route.path)
        return route

    def build(self) -> RouteTable:
        """Freeze the builder. No more routes can be added."""
        self._built = True
        return RouteTable(tuple(self._routes))
