"""Partial rendering for resolved routes.

Bridges the router to the kida templates shipped with the built site.
The ``Container`` stands in for the page element the SPA writes into.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, assert_never

from kida import Environment, FileSystemLoader
from kida.template import Markup

from lectern.routing.route import ApiRoute, ContentRoute, Route
from lectern.routing.schema import ApiDocs, RoutePayload
from lectern.templating.filters import BUILTIN_FILTERS

PARTIALS_DIR = "partials"


@dataclass(slots=True)
class Container:
    """Receives rendered HTML. ``writes`` counts how often it was replaced."""

    html: str = ""
    writes: int = 0

    def write(self, html: str) -> None:
        self.html = html
        self.writes += 1


def create_partials_environment(output_root: str | Path) -> Environment:
    """Create a kida Environment over a built site's ``partials/`` directory."""
    env = Environment(
        loader=FileSystemLoader(str(Path(output_root) / PARTIALS_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.update_filters(BUILTIN_FILTERS)
    return env


class Renderer:
    """Renders the api, content and not-found partials into a container.

    Usage::

        renderer = Renderer(payload, create_partials_environment("site"))
        renderer.render_route(route, container)
    """

    __slots__ = ("_env", "container", "payload")

    def __init__(self, payload: RoutePayload, env: Environment, container: Container | None = None) -> None:
        self.payload = payload
        self._env = env
        self.container = container or Container()

    def _base_context(self) -> dict[str, Any]:
        return {
            "title": self.payload.title,
            "base": self.payload.routing.base,
            "routes": list(self.payload.routes),
        }

    def _render_partial(self, name: str, context: dict[str, Any]) -> str:
        template = self._env.get_template(f"{name}.html")
        return template.render({**self._base_context(), **context})

    def render_route(self, route: Route, fragment: str = "") -> str:
        """Render *route*; *fragment* is the fetched HTML of a content route."""
        partials = self.payload.partials
        match route:
            case ApiRoute():
                docs = self.payload.apis.get(route.name) or ApiDocs()
                html = self._render_partial(
                    partials.api,
                    {
                        "route": route,
                        "documentation": docs.documentation,
                        "symbols": docs.symbols,
                    },
                )
            case ContentRoute():
                html = self._render_partial(
                    partials.content,
                    {"route": route, "content": Markup(fragment)},
                )
            case _:
                assert_never(route)
        self.container.write(html)
        return html

    def render_not_found(self) -> str:
        html = self._render_partial(self.payload.partials.not_found, {"route": None})
        self.container.write(html)
        return html
