"""The route payload: the contract between build time and runtime.

The builder serializes the route table, routing config and api data into
a bootstrap script (``js/lectern-data.js``). The runtime reads it back.
The ``schema`` field lets a runtime refuse a payload it does not
understand instead of silently misrouting.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lectern import __version__
from lectern.config import RoutingConfig
from lectern.errors import SchemaVersionError
from lectern.routing.route import Route
from lectern.routing.table import RouteTable

SCHEMA_VERSION = 1
BOOTSTRAP_FILE = "js/lectern-data.js"

_PREFIX = "window.lectern = "


@dataclass(frozen=True, slots=True)
class Partials:
    """Names of the partial templates the renderer invokes."""

    api: str = "lectern-api"
    content: str = "lectern-content"
    not_found: str = "lectern-404"

    def to_dict(self) -> dict[str, str]:
        return {"api": self.api, "content": self.content, "notFound": self.not_found}

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "Partials":
        defaults = cls()
        return cls(
            api=data.get("api", defaults.api),
            content=data.get("content", defaults.content),
            not_found=data.get("notFound", defaults.not_found),
        )


@dataclass(frozen=True, slots=True)
class ApiDocs:
    """Parsed documentation of one api group."""

    documentation: list[dict[str, Any]] = field(default_factory=list)
    symbols: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class RoutePayload:
    """Everything the runtime needs, deserialized."""

    routing: RoutingConfig
    routes: RouteTable
    title: str = ""
    apis: Mapping[str, ApiDocs] = field(default_factory=dict)
    partials: Partials = field(default_factory=Partials)
    generator: str = __version__

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema": SCHEMA_VERSION,
            "generator": self.generator,
            "app": {"title": self.title, **self.routing.to_dict()},
            "routes": self.routes.to_list(),
            "apis": {
                name: {"documentation": docs.documentation, "symbols": docs.symbols}
                for name, docs in self.apis.items()
            },
            "partials": self.partials.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoutePayload":
        schema = data.get("schema")
        if schema != SCHEMA_VERSION:
            raise SchemaVersionError(schema, SCHEMA_VERSION)
        app = data.get("app") or {}
        return cls(
            routing=RoutingConfig.from_dict(app),
            routes=RouteTable(tuple(Route.from_dict(item) for item in data.get("routes", ()))),
            title=app.get("title", ""),
            apis={
                name: ApiDocs(
                    documentation=list(docs.get("documentation", ())),
                    symbols=list(docs.get("symbols", ())),
                )
                for name, docs in (data.get("apis") or {}).items()
            },
            partials=Partials.from_dict(data.get("partials") or {}),
            generator=data.get("generator", ""),
        )


def dump_bootstrap(payload: RoutePayload) -> str:
    """Render the payload as the bootstrap script embedded in the SPA."""
    body = json.dumps(payload.to_dict(), ensure_ascii=False, separators=(",", ":"))
    # "</" would close the surrounding <script> element if inlined.
    body = body.replace("</", "<\\/")
    return f"{_PREFIX}{body};\n"


def load_bootstrap(text: str) -> RoutePayload:
    """Parse a bootstrap script (or bare JSON) back into a payload."""
    text = text.strip()
    if text.startswith(_PREFIX):
        text = text[len(_PREFIX) :]
    text = text.removesuffix(";")
    return RoutePayload.from_dict(json.loads(text))


def read_bootstrap(output_root: str | Path) -> RoutePayload:
    """Load the payload of a built site from its output directory."""
    path = Path(output_root) / BOOTSTRAP_FILE
    return load_bootstrap(path.read_text(encoding="utf-8"))
