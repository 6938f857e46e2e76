"""Tests for lectern.build.builder — the end-to-end build pipeline."""

from pathlib import Path
from typing import Any

import pytest

from lectern.build import SiteBuilder, build, plan_routes
from lectern.cli._render import render_location
from lectern.config import BuildConfig
from lectern.errors import BuildError, ConfigurationError, MarkdownError, RouteValidationError
from lectern.routing.schema import BOOTSTRAP_FILE, read_bootstrap

WEB_SOURCE = '''\
"""Web helpers."""


class Client:
    """A small HTTP client."""
'''


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A documentation project: doc sources, markdown and HTML."""
    (tmp_path / "web").mkdir()
    (tmp_path / "web" / "client.py").write_text(WEB_SOURCE)
    (tmp_path / "README.md").write_text("# Readme\n\nHello.\n")
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "guide.html").write_text("<p>Hand-written guide</p>")
    return tmp_path


def _config(project: Path, **overrides: Any) -> BuildConfig:
    data: dict[str, Any] = {
        "src": [{"web": "web/*.py"}, "README.md", "docs/*.html"],
        "dest": "site",
        "app": {"title": "Project Docs"},
    }
    data.update(overrides)
    return BuildConfig.from_mapping(data, base_dir=project)


class TestPlanRoutes:
    def test_route_order(self, project: Path) -> None:
        plan = plan_routes(_config(project))
        assert [r.id for r in plan.table] == [
            "api:_def_",
            "api:web",
            "content:readme",
            "content:guide",
        ]
        assert (plan.stats.api, plan.stats.content) == (2, 2)
        assert plan.sources["api:_def_"] == []
        assert [p.name for p in plan.sources["api:web"]] == ["client.py"]

    def test_writes_nothing(self, project: Path) -> None:
        plan_routes(_config(project))
        assert not (project / "site").exists()

    def test_duplicate_names_fail(self, project: Path) -> None:
        (project / "a").mkdir()
        (project / "b").mkdir()
        (project / "a" / "CHANGELOG.md").write_text("a")
        (project / "b" / "changelog.md").write_text("b")
        with pytest.raises(RouteValidationError):
            plan_routes(_config(project, src=["a/*.md", "b/*.md"]))


class TestSiteBuilder:
    def test_query_build(self, project: Path) -> None:
        result = build(_config(project))
        site = project / "site"

        assert result.dest == site
        assert result.stats.total == 4
        index = (site / "index.html").read_text()
        assert "<title>Project Docs</title>" in index
        assert 'src="js/lectern-data.js"' in index
        assert 'href="/?api=web"' in index

        assert (site / BOOTSTRAP_FILE).read_text().startswith("window.lectern = ")
        assert "<h1" in (site / "content" / "readme.html").read_text()
        assert (site / "content" / "guide.html").read_text() == "<p>Hand-written guide</p>"
        assert (site / "partials" / "lectern-api.html").is_file()
        assert (site / "css" / "lectern.css").is_file()

        payload = read_bootstrap(site)
        assert payload.title == "Project Docs"
        assert payload.apis["web"].symbols == ["client", "client.Client"]
        assert payload.apis["_def_"].documentation == []

    def test_path_build_writes_redirects(self, project: Path) -> None:
        config = _config(project, app={"routing": "path", "server": "github"})
        build(config)
        site = project / "site"
        assert "redirectPath" in (site / "api" / "web" / "index.html").read_text()
        assert (site / "readme" / "index.html").is_file()
        assert (site / "api" / "index.html").is_file()
        assert not (site / ".htaccess").exists()

    def test_apache_build_writes_htaccess(self, project: Path) -> None:
        build(_config(project, app={"routing": "path", "server": "apache", "base": "/docs/"}))
        site = project / "site"
        assert "RewriteBase /docs/" in (site / ".htaccess").read_text()
        assert not (site / "api" / "web").exists()

    def test_user_template_overrides_partial(self, project: Path) -> None:
        theme = project / "theme" / "partials"
        theme.mkdir(parents=True)
        (theme / "lectern-404.html").write_text("<p>custom missing</p>")
        build(_config(project, template={"path": "theme"}))
        assert (project / "site" / "partials" / "lectern-404.html").read_text() == "<p>custom missing</p>"

    def test_assets_and_favicon(self, project: Path) -> None:
        (project / "img").mkdir()
        (project / "img" / "logo.png").write_bytes(b"png")
        (project / "favicon.ico").write_bytes(b"ico")
        build(_config(project, assets={"/img": "img/*.png"}, app={"favicon": "favicon.ico"}))
        site = project / "site"
        assert (site / "img" / "logo.png").read_bytes() == b"png"
        assert (site / "favicon.ico").read_bytes() == b"ico"
        assert 'href="favicon.ico"' in (site / "index.html").read_text()

    def test_clean_removes_stale_files(self, project: Path) -> None:
        stale = project / "site" / "old.html"
        stale.parent.mkdir()
        stale.write_text("old")
        build(_config(project, clean=True))
        assert not stale.exists()
        assert (project / "site" / "index.html").is_file()

    def test_without_clean_keeps_files(self, project: Path) -> None:
        kept = project / "site" / "old.html"
        kept.parent.mkdir()
        kept.write_text("old")
        build(_config(project))
        assert kept.exists()

    def test_clean_refuses_project_directory(self, project: Path) -> None:
        with pytest.raises(ConfigurationError, match="Refusing to clean"):
            build(_config(project, dest=".", clean=True))

    def test_unreadable_source(self, project: Path) -> None:
        (project / "bad.md").write_bytes(b"\xff\xfe\x00bad")
        with pytest.raises(BuildError):
            build(_config(project, src=["bad.md"]))

    def test_broken_user_template(self, project: Path) -> None:
        theme = project / "theme"
        theme.mkdir()
        (theme / "index.html").write_text("<title>{% for x in %}</title>")
        with pytest.raises(BuildError, match="Template error") as exc_info:
            build(_config(project, template={"path": "theme"}))
        assert exc_info.value.__cause__ is not None

    def test_markdown_failure(self, project: Path) -> None:
        class Failing:
            def render(self, source: str, *, origin: str = "") -> str:
                raise MarkdownError(f"cannot convert {origin}")

        with pytest.raises(BuildError, match="README.md"):
            SiteBuilder(_config(project), markdown=Failing()).build()  # type: ignore[arg-type]

    def test_custom_markdown_renderer(self, project: Path) -> None:
        class Upper:
            def render(self, source: str, *, origin: str = "") -> str:
                return source.upper()

        SiteBuilder(_config(project), markdown=Upper()).build()  # type: ignore[arg-type]
        assert (project / "site" / "content" / "readme.html").read_text().startswith("# README")


class TestBuiltSiteRenders:
    @pytest.mark.anyio
    async def test_api_route(self, project: Path) -> None:
        build(_config(project))
        found, html = await render_location(project / "site", "/?api=web")
        assert found
        assert "client.Client" in html
        assert "A small HTTP client." in html

    @pytest.mark.anyio
    async def test_content_route(self, project: Path) -> None:
        build(_config(project))
        found, html = await render_location(project / "site", "/?content=guide")
        assert found
        assert "<p>Hand-written guide</p>" in html

    @pytest.mark.anyio
    async def test_path_route_not_found(self, project: Path) -> None:
        build(_config(project, app={"routing": "path"}))
        found, html = await render_location(project / "site", "/nothing-here/")
        assert not found
        assert "Page not found" in html
