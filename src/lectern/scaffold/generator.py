"""Host scaffolding for ``path`` routing.

With ``query`` routing every route resolves on the root document, so no
scaffolding is needed. With ``path`` routing a deep link such as
``/docs/api/web/`` must reach the root document first:

- Apache rewrites sub-paths to the root document via ``.htaccess``.
- Hosts that serve files as-is (GitHub Pages, static, Windows) get one
  ``index.html`` per route that stores the route path in
  ``sessionStorage`` and meta-refreshes back to the root document
  (the same approach as jekyll-redirect-from).
"""

import importlib.resources
import logging
import re
from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from urllib.parse import unquote

from lectern.config import RoutingConfig, RoutingMethod, ensure_end_slash
from lectern.errors import ScaffoldError
from lectern.routing.route import Route

logger = logging.getLogger("lectern.scaffold")

_ASSETS_PACKAGE = "lectern.scaffold.assets"


def load_asset(name: str) -> str:
    """Read a bundled scaffold template (``htaccess`` or ``redirect.html``)."""
    candidate = PurePosixPath(name)
    if candidate.is_absolute() or ".." in candidate.parts or not candidate.parts:
        raise ValueError(f"Invalid asset name: {name}")
    with (
        importlib.resources.files(_ASSETS_PACKAGE)
        .joinpath(*candidate.parts)
        .open("r", encoding="utf-8") as handle
    ):
        return handle.read()


def render_htaccess(template: str, *, base: str, main_document: str) -> str:
    return (
        template.replace("%{LECTERN_MAIN_ESC}", re.escape(main_document))
        .replace("%{LECTERN_MAIN}", main_document)
        .replace("%{LECTERN_BASE}", ensure_end_slash(base))
    )


def render_redirect(template: str, route: Route) -> str:
    # "guide/" -> "../", "api/web/" -> "../../"
    back_to_base = "../" * route.path.count("/")
    return template.replace("%{BACK_TO_BASE}", back_to_base).replace(
        "%{REDIRECT_PATH}", route.path.lstrip("/")
    )


class ServerScaffoldGenerator:
    """Writes rewrite rules or redirect documents for a finished route table.

    Usage::

        generator = ServerScaffoldGenerator(routing, main_document="index.html")
        written = generator.write(table, Path("site"))
    """

    __slots__ = ("main_document", "routing")

    def __init__(self, routing: RoutingConfig, *, main_document: str = "index.html") -> None:
        self.routing = routing
        self.main_document = main_document

    def write(self, routes: Iterable[Route], output_root: Path) -> list[Path]:
        """Emit scaffolding under *output_root*; return the files written.

        Raises ``ScaffoldError`` on any I/O failure, after removing the
        files this call already created. A half-written scaffold leaves
        some deep links working and others broken.
        """
        if self.routing.method is not RoutingMethod.PATH:
            return []

        written: list[Path] = []
        try:
            if self.routing.server.rewrites:
                written.append(self._write_htaccess(output_root))
            else:
                written.extend(self._write_redirects(routes, output_root))
        except OSError as exc:
            _rollback(written)
            msg = f"Could not write server scaffolding for {self.routing.server.value!r}: {exc}"
            raise ScaffoldError(msg) from exc
        return written

    def _write_htaccess(self, output_root: Path) -> Path:
        dest = output_root / ".htaccess"
        logger.info("Generating Apache config file (.htaccess): %s", dest)
        content = render_htaccess(
            load_asset("htaccess"),
            base=self.routing.base,
            main_document=self.main_document,
        )
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(content, encoding="utf-8")
        return dest

    def _write_redirects(self, routes: Iterable[Route], output_root: Path) -> list[Path]:
        logger.info("Generating indexed directories...")
        template = load_asset("redirect.html")
        written: list[Path] = []
        created: list[Path] = []
        try:
            for route in routes:
                dest = output_root.joinpath(*PurePosixPath(unquote(route.path)).parts, "index.html")
                if dest.exists():
                    # Hand-authored document at this path; keep it.
                    logger.debug("Kept existing %s", dest)
                    continue
                created.extend(_missing_dirs(dest.parent, output_root))
                dest.parent.mkdir(parents=True, exist_ok=True)
                dest.write_text(render_redirect(template, route), encoding="utf-8")
                written.append(dest)
        except OSError:
            _rollback(written, created)
            raise
        return written


def _missing_dirs(directory: Path, output_root: Path) -> list[Path]:
    """Directories between *output_root* and *directory* that do not exist yet, outermost first."""
    missing: list[Path] = []
    while directory != output_root and not directory.exists():
        missing.append(directory)
        directory = directory.parent
    return missing[::-1]


def _rollback(paths: list[Path], directories: list[Path] | None = None) -> None:
    for path in reversed(paths):
        path.unlink(missing_ok=True)
    paths.clear()
    # Deepest first; a directory that still holds other files is left alone.
    for directory in reversed(directories or []):
        try:
            directory.rmdir()
        except OSError:
            logger.debug("Kept non-empty directory %s", directory)


def write_scaffold(
    routes: Iterable[Route],
    routing: RoutingConfig,
    output_root: Path,
    *,
    main_document: str = "index.html",
) -> list[Path]:
    """Functional shorthand for ``ServerScaffoldGenerator(...).write(...)``."""
    return ServerScaffoldGenerator(routing, main_document=main_document).write(routes, output_root)
