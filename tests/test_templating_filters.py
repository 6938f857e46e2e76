"""Tests for lectern.templating.filters — built-in template filters."""

from lectern.routing.route import ApiRoute, ContentRoute, SourceType
from lectern.templating.filters import BUILTIN_FILTERS, idify, route_href, route_label, symbol_href

WEB = ApiRoute(name="web", path="?api=web", source_type=SourceType.DOC)
DEFAULT = ApiRoute(name="_def_", path="api/", source_type=SourceType.DOC)
GUIDE = ContentRoute(name="guide", path="guide/", source_type=SourceType.TEXT)


class TestRouteHref:
    def test_query_path(self) -> None:
        assert route_href(WEB, "/docs/") == "/docs/?api=web"

    def test_path_path(self) -> None:
        assert route_href(GUIDE, "/docs/") == "/docs/guide/"

    def test_missing_route(self) -> None:
        assert route_href(None) == "#"
        assert route_href(None, "/docs/") == "/docs/"


class TestSymbolHref:
    def test_with_route(self) -> None:
        assert symbol_href("web.Client", WEB, "/") == "/?api=web#web.client"

    def test_anchor_only(self) -> None:
        assert symbol_href("web.Client.get") == "#web.client.get"


class TestIdify:
    def test_heading(self) -> None:
        assert idify("Getting Started!") == "getting-started"

    def test_keeps_dots_and_dollar(self) -> None:
        assert idify("$.fn") == "$.fn"


class TestRouteLabel:
    def test_default_group(self) -> None:
        assert route_label(DEFAULT) == "API"

    def test_named(self) -> None:
        assert route_label(WEB) == "web"
        assert route_label(GUIDE) == "guide"


def test_builtin_filters_registered() -> None:
    assert set(BUILTIN_FILTERS) == {"idify", "route_href", "route_label", "symbol_href"}
