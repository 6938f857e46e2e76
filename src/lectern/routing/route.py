"""Route, ApiRoute, ContentRoute and Candidate frozen dataclasses."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from lectern.runtime.router import Router

# Name of the unnamed api group; addressed as bare ``?api`` / ``api/``.
DEFAULT_API_NAME = "_def_"


class RouteType(StrEnum):
    API = "api"
    CONTENT = "content"


class SourceType(StrEnum):
    """Which collaborator produced the routed unit. Informational only."""

    DOC = "doc"
    TEXT = "text"
    MARKUP = "markup"

    @property
    def route_type(self) -> RouteType:
        return RouteType.API if self is SourceType.DOC else RouteType.CONTENT


@dataclass(frozen=True, slots=True)
class Route:
    """A routable unit of the generated SPA.

    Never constructed directly: the builder creates ``ApiRoute`` or
    ``ContentRoute`` instances, and the renderer matches on those.
    """

    name: str
    path: str
    source_type: SourceType

    type: RouteType = RouteType.API  # overridden by subclasses

    @property
    def id(self) -> str:
        return f"{self.type}:{self.name}"

    @property
    def content_path(self) -> str | None:
        return None

    def exists(self) -> bool:
        return bool(self.name and self.path)

    def is_equal_to(self, other: Route | None) -> bool:
        """Routes are equal when both exist and share a path."""
        if other is None or not other.exists() or not self.exists():
            return False
        return other.path == self.path

    def is_current(self, router: Router) -> bool:
        return self.is_equal_to(router.current_route)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "name": self.name,
            "path": self.path,
            "contentPath": self.content_path,
            "sourceType": self.source_type.value,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> ApiRoute | ContentRoute:
        """Rebuild a route from its payload dict."""
        route_type = RouteType(data["type"])
        source_type = SourceType(data["sourceType"])
        if route_type is RouteType.API:
            return ApiRoute(name=data["name"], path=data["path"], source_type=source_type)
        return ContentRoute(name=data["name"], path=data["path"], source_type=source_type)

    def __str__(self) -> str:
        return ", ".join(f"{key}: {value}" for key, value in self.to_dict().items())


@dataclass(frozen=True, slots=True)
class ApiRoute(Route):
    """A named group of documented-symbol sources.

    Rendered straight from the documentation data embedded in the payload.
    """

    type: RouteType = RouteType.API

    @property
    def is_default(self) -> bool:
        return self.name == DEFAULT_API_NAME


@dataclass(frozen=True, slots=True)
class ContentRoute(Route):
    """One narrative unit (markdown or HTML), rendered from a fetched fragment."""

    type: RouteType = RouteType.CONTENT

    @property
    def content_path(self) -> str:
        return f"content/{self.name}.html"


@dataclass(frozen=True, slots=True)
class Candidate:
    """A ``(type, name)`` pair read from a location, before matching.

    ``type`` stays a plain string: locations can carry any query key.
    """

    type: str
    name: str | None = None
