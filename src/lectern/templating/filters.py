"""Built-in lectern template filters.

Registered on every kida Environment lectern creates: the build-time
environment for the main document and the runtime one for partials.
"""

import re
from typing import Any

from lectern.routing.route import DEFAULT_API_NAME, Route, RouteType

_NON_ID_CHARS = re.compile(r"[^a-z0-9_.$-]+")


def route_href(route: Route | None, base: str = "") -> str:
    """Link to a route, relative to the app base.

    Example:
        <a href="{{ route | route_href(app.base) }}">{{ route.name }}</a>
        → "/docs/?content=guide" or "/docs/guide/"

    """
    if route is None:
        return base or "#"
    return f"{base}{route.path}"


def symbol_href(longname: str, route: Route | None = None, base: str = "") -> str:
    """Link to a documented symbol on its api route.

    Example:
        {{ symbol.longname | symbol_href(route, app.base) }}  → "/docs/?api=web#web.Client"

    """
    anchor = f"#{idify(longname)}"
    if route is None:
        return anchor
    return route_href(route, base) + anchor


def idify(value: str) -> str:
    """Turn a heading or symbol name into an element id.

    Example:
        {{ "Getting Started" | idify }}  → "getting-started"

    """
    return _NON_ID_CHARS.sub("-", value.lower()).strip("-")


def route_label(route: Route) -> str:
    """Human label for navigation menus. The default api group reads "API"."""
    if route.type is RouteType.API and route.name == DEFAULT_API_NAME:
        return "API"
    return route.name


BUILTIN_FILTERS: dict[str, Any] = {
    "idify": idify,
    "route_href": route_href,
    "route_label": route_label,
    "symbol_href": symbol_href,
}
