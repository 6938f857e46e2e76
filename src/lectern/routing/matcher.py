"""Candidate lookup against the route table."""

from lectern.config import RoutingConfig
from lectern.routing.route import DEFAULT_API_NAME, Candidate, Route, RouteType
from lectern.routing.table import RouteTable


def match(candidate: Candidate | None, table: RouteTable, routing: RoutingConfig) -> Route | None:
    """Return the route for *candidate*, or ``None`` (not-found).

    Applies the same case policy as the table builder. An api candidate
    without a name addresses the default api group.
    """
    if candidate is None or not candidate.type:
        return None

    name = candidate.name
    if not name:
        if candidate.type != RouteType.API:
            return None
        name = DEFAULT_API_NAME
    elif not routing.case_sensitive:
        name = name.lower()

    return table.get(candidate.type, name.strip("/"))
