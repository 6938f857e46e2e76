"""Tests for lectern.routing.route — route variants and identity."""

import pytest

from lectern.routing.route import (
    DEFAULT_API_NAME,
    ApiRoute,
    ContentRoute,
    Route,
    RouteType,
    SourceType,
)


def _api(name: str = "web", path: str = "?api=web") -> ApiRoute:
    return ApiRoute(name=name, path=path, source_type=SourceType.DOC)


def _content(name: str = "guide", path: str = "?content=guide") -> ContentRoute:
    return ContentRoute(name=name, path=path, source_type=SourceType.TEXT)


class TestRouteVariants:
    def test_api_route(self) -> None:
        route = _api()
        assert route.type is RouteType.API
        assert route.id == "api:web"
        assert route.content_path is None
        assert route.is_default is False

    def test_default_api_route(self) -> None:
        assert _api(DEFAULT_API_NAME, "?api").is_default is True

    def test_content_route(self) -> None:
        route = _content()
        assert route.type is RouteType.CONTENT
        assert route.id == "content:guide"
        assert route.content_path == "content/guide.html"

    def test_source_type_decides_route_type(self) -> None:
        assert SourceType.DOC.route_type is RouteType.API
        assert SourceType.TEXT.route_type is RouteType.CONTENT
        assert SourceType.MARKUP.route_type is RouteType.CONTENT

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            _api().name = "other"  # type: ignore[misc]


class TestRouteEquality:
    def test_equal_by_path(self) -> None:
        assert _api().is_equal_to(_api())

    def test_different_path(self) -> None:
        assert not _api().is_equal_to(_content())

    def test_missing_other(self) -> None:
        assert not _api().is_equal_to(None)

    def test_non_existent_route_is_never_equal(self) -> None:
        empty = ContentRoute(name="", path="", source_type=SourceType.TEXT)
        assert empty.exists() is False
        assert not empty.is_equal_to(empty)


class TestRouteSerialization:
    def test_to_dict(self) -> None:
        assert _content().to_dict() == {
            "id": "content:guide",
            "type": "content",
            "name": "guide",
            "path": "?content=guide",
            "contentPath": "content/guide.html",
            "sourceType": "text",
        }

    def test_from_dict_restores_variant(self) -> None:
        restored = Route.from_dict(_content().to_dict())
        assert isinstance(restored, ContentRoute)
        assert restored == _content()
        assert isinstance(Route.from_dict(_api().to_dict()), ApiRoute)

    def test_str_lists_fields(self) -> None:
        text = str(_api())
        assert "id: api:web" in text
        assert "path: ?api=web" in text
