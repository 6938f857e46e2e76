"""Build pipeline.

Turns a ``BuildConfig`` into a finished SPA output directory:

1. discover sources and register one route per documented unit,
2. parse doc groups and render narrative fragments,
3. copy template files and assets,
4. write the route payload and render the main document,
5. write host scaffolding for ``path`` routing.

The route table is frozen after step 1; nothing later can add routes.
"""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from kida import TemplateError
from kida.lexer import LexerError

from lectern import __version__
from lectern.build.docparse import parse_group
from lectern.build.sources import SourceSet, discover, expand
from lectern.config import BuildConfig
from lectern.errors import BuildError, ConfigurationError, MarkdownError
from lectern.markdown import MarkdownRenderer
from lectern.routing.route import ApiRoute, SourceType
from lectern.routing.schema import BOOTSTRAP_FILE, ApiDocs, RoutePayload, dump_bootstrap
from lectern.routing.table import RouteStats, RouteTable, RouteTableBuilder
from lectern.scaffold import write_scaffold
from lectern.templating import copy_template_files, create_environment, render_main_document

logger = logging.getLogger("lectern.build")


@dataclass(frozen=True, slots=True)
class RoutePlan:
    """The route table of a build, before anything is written.

    ``sources`` maps each route id to the files it was built from.
    """

    table: RouteTable
    stats: RouteStats
    sources: dict[str, list[Path]]
    source_set: SourceSet


@dataclass(slots=True)
class BuildResult:
    dest: Path
    table: RouteTable
    stats: RouteStats
    written: list[Path] = field(default_factory=list)


def plan_routes(config: BuildConfig) -> RoutePlan:
    """Discover sources and build the route table without writing files.

    Api groups are registered first, in discovery order, then narrative
    units. The default api group is always registered so that the
    default entrance resolves even when no doc sources exist.
    """
    source_set = discover(config.src, config.base_dir)
    builder = RouteTableBuilder(config.routing)
    sources: dict[str, list[Path]] = {}

    for name, files in source_set.doc_groups.items():
        route = builder.add_route(name, SourceType.DOC)
        sources[route.id] = list(files)

    for narrative in source_set.narratives:
        route = builder.add_route(narrative.name, narrative.source_type)
        sources[route.id] = [narrative.path]

    table = builder.build()
    return RoutePlan(table=table, stats=builder.stats, sources=sources, source_set=source_set)


class SiteBuilder:
    """Runs a complete build for one ``BuildConfig``.

    Usage::

        result = SiteBuilder(load_config("lectern.json")).build()
        print(result.stats.total)
    """

    __slots__ = ("_markdown", "config")

    def __init__(self, config: BuildConfig, *, markdown: MarkdownRenderer | None = None) -> None:
        self.config = config
        self._markdown = markdown

    @property
    def markdown(self) -> MarkdownRenderer:
        if self._markdown is None:
            options = self.config.markdown
            self._markdown = MarkdownRenderer(
                plugins=list(options.plugins) or None,
                highlight=options.highlight,
                gfm=options.gfm,
            )
        return self._markdown

    def build(self) -> BuildResult:
        """Run every build step. Raises ``LecternError`` subclasses on failure."""
        config = self.config
        dest = Path(config.dest)
        logger.info("Building documentation into %s", dest)

        try:
            if config.clean:
                self._clean(dest)
            plan = plan_routes(config)
            result = BuildResult(dest=dest, table=plan.table, stats=plan.stats)

            apis = self._parse_apis(plan)
            result.written.extend(self._write_content(plan, dest))
            result.written.extend(copy_template_files(config, dest))
            result.written.extend(self._copy_assets(dest))
            favicon = self._copy_favicon(dest, result.written)

            payload = RoutePayload(
                routing=config.routing,
                routes=plan.table,
                title=config.app.title,
                apis=apis,
            )
            result.written.append(self._write_text(dest / BOOTSTRAP_FILE, dump_bootstrap(payload)))
            result.written.append(self._write_main_document(dest, plan.table, favicon))
        except (OSError, UnicodeDecodeError, MarkdownError) as exc:
            raise BuildError(f"Build failed: {exc}") from exc
        except (TemplateError, LexerError) as exc:
            raise BuildError(f"Template error: {exc}") from exc

        # Scaffold I/O errors surface as ScaffoldError, not BuildError.
        result.written.extend(
            write_scaffold(plan.table, config.routing, dest, main_document=config.main_document)
        )

        stats = plan.stats
        logger.info("Total routes: %d (%d API, %d content)", stats.total, stats.api, stats.content)
        logger.info("Documentation is built successfully.")
        return result

    def _clean(self, dest: Path) -> None:
        resolved = dest.resolve()
        if resolved in (self.config.base_dir.resolve(), *self.config.base_dir.resolve().parents):
            raise ConfigurationError(f"Refusing to clean {dest}: it contains the project directory.")
        if resolved.exists():
            logger.info("Cleaning destination directory: %s", dest)
            shutil.rmtree(resolved)

    def _parse_apis(self, plan: RoutePlan) -> dict[str, ApiDocs]:
        apis: dict[str, ApiDocs] = {}
        for route in plan.table:
            if not isinstance(route, ApiRoute):
                continue
            files = plan.sources.get(route.id, [])
            if files:
                logger.info("Parsing %d doc source(s) for %s", len(files), route.id)
            apis[route.name] = parse_group(files)
        return apis

    def _write_content(self, plan: RoutePlan, dest: Path) -> list[Path]:
        written: list[Path] = []
        for route in plan.table:
            content_path = route.content_path
            if content_path is None:
                continue
            (source,) = plan.sources[route.id]
            text = source.read_text(encoding="utf-8")
            if route.source_type is SourceType.TEXT:
                logger.debug("Converting markdown: %s", source)
                text = self.markdown.render(text, origin=str(source))
            written.append(self._write_text(dest / content_path, text))
        return written

    def _copy_assets(self, dest: Path) -> list[Path]:
        copied: list[Path] = []
        for target, patterns in self.config.assets.items():
            target_dir = dest / target.strip("/")
            for pattern in patterns:
                files = expand(pattern, self.config.base_dir)
                if not files:
                    logger.warning(" » No assets matched: %s", pattern)
                for source in files:
                    copied.append(_copy_file(source, target_dir / source.name))
        if copied:
            logger.info("Copied %d asset(s)", len(copied))
        return copied

    def _copy_favicon(self, dest: Path, written: list[Path]) -> str:
        favicon = self.config.app.favicon
        if not favicon:
            return ""
        source = self.config.base_dir / favicon
        if not source.is_file():
            logger.warning("Favicon not found: %s", source)
            return ""
        written.append(_copy_file(source, dest / source.name))
        return source.name

    def _write_main_document(self, dest: Path, table: RouteTable, favicon: str) -> Path:
        config = self.config
        env = create_environment(config, {"version": __version__})
        context: dict[str, Any] = {
            "title": config.app.title,
            "base": config.routing.base,
            "routes": list(table),
            "bootstrap": BOOTSTRAP_FILE,
            "favicon": favicon,
        }
        logger.info("Writing main document: %s", config.main_document)
        return self._write_text(dest / config.main_document, render_main_document(env, config, context))

    @staticmethod
    def _write_text(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path


def _copy_file(source: Path, target: Path) -> Path:
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    return target


def build(config: BuildConfig) -> BuildResult:
    """Functional shorthand for ``SiteBuilder(config).build()``."""
    return SiteBuilder(config).build()
