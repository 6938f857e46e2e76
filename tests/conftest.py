"""Shared fixtures: a small built-site directory and its route payload."""

from pathlib import Path

import pytest

from lectern.config import RoutingConfig, RoutingMethod
from lectern.routing.route import DEFAULT_API_NAME, SourceType
from lectern.routing.schema import ApiDocs, RoutePayload
from lectern.routing.table import RouteTableBuilder

API_PARTIAL = (
    "<section class=\"api\">{{ route.name }}"
    "{% for symbol in symbols %}[{{ symbol }}]{% end %}</section>"
)
CONTENT_PARTIAL = "<section class=\"content\">{{ route.name }}|{{ content }}</section>"
NOT_FOUND_PARTIAL = "<section class=\"missing\">Not found in {{ title }}</section>"


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """An output directory with test partials and one content fragment.

    ``content/broken.html`` is deliberately absent.
    """
    root = tmp_path / "site"
    partials = root / "partials"
    partials.mkdir(parents=True)
    (partials / "lectern-api.html").write_text(API_PARTIAL)
    (partials / "lectern-content.html").write_text(CONTENT_PARTIAL)
    (partials / "lectern-404.html").write_text(NOT_FOUND_PARTIAL)
    (root / "content").mkdir()
    (root / "content" / "guide.html").write_text("<p>The guide</p>")
    return root


def make_payload(routing: RoutingConfig | None = None) -> RoutePayload:
    routing = routing or RoutingConfig(method=RoutingMethod.QUERY)
    builder = RouteTableBuilder(routing)
    builder.add_route(DEFAULT_API_NAME, SourceType.DOC)
    builder.add_route("web", SourceType.DOC)
    builder.add_route("guide", SourceType.TEXT)
    builder.add_route("broken", SourceType.MARKUP)
    return RoutePayload(
        routing=routing,
        routes=builder.build(),
        title="Test Docs",
        apis={
            DEFAULT_API_NAME: ApiDocs(),
            "web": ApiDocs(
                documentation=[{"kind": "class", "longname": "web.Client"}],
                symbols=["web.Client"],
            ),
        },
    )


@pytest.fixture
def payload() -> RoutePayload:
    return make_payload()


@pytest.fixture
def payload_factory():
    """Build the test payload for a given ``RoutingConfig``."""
    return make_payload
