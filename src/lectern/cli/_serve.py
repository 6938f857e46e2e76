"""``lectern serve`` — preview a built site locally.

Files are served as they are. Under ``path`` routing a deep link with no
file behind it is answered with the main document, as a rewriting host
would, so the router can resolve it from the address bar.
"""

import argparse
import http.server
import logging
import mimetypes
import sys
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

from lectern.config import RoutingMethod
from lectern.errors import LecternError

logger = logging.getLogger("lectern.serve")


@dataclass(frozen=True, slots=True)
class ServedFile:
    status: int
    path: Path | None = None
    location: str | None = None


class SiteFiles:
    """Maps request paths of a built site to files on disk.

    Usage::

        files = SiteFiles.for_site(Path("site"))
        files.resolve("/docs/api/web/")  # ServedFile(200, site/index.html)
    """

    __slots__ = ("base", "main_document", "root", "spa_fallback")

    def __init__(
        self,
        root: Path,
        *,
        base: str = "/",
        main_document: str = "index.html",
        spa_fallback: bool = False,
    ) -> None:
        self.root = root.resolve()
        self.base = base
        self.main_document = main_document
        self.spa_fallback = spa_fallback

    @classmethod
    def for_site(cls, root: Path, *, main_document: str = "index.html") -> "SiteFiles":
        """Read base path and routing method from the site's route payload."""
        from lectern.routing.schema import read_bootstrap

        routing = read_bootstrap(root).routing
        return cls(
            root,
            base=routing.base,
            main_document=main_document,
            spa_fallback=routing.method is RoutingMethod.PATH,
        )

    def resolve(self, target: str) -> ServedFile:
        path = unquote(urlsplit(target).path) or "/"
        if path + "/" == self.base or (path == "/" and self.base != "/"):
            return ServedFile(301, location=self.base)
        if not path.startswith(self.base):
            return ServedFile(404)

        relative = path[len(self.base) :]
        file_path = (self.root / relative).resolve()
        if not file_path.is_relative_to(self.root):
            return ServedFile(403)

        if file_path.is_dir():
            index = file_path / self.main_document
            if index.is_file():
                if not path.endswith("/"):
                    return ServedFile(301, location=path + "/")
                return ServedFile(200, index)
        elif file_path.is_file():
            return ServedFile(200, file_path)

        if self.spa_fallback:
            main = self.root / self.main_document
            if main.is_file():
                return ServedFile(200, main)
        return ServedFile(404)


class SiteServer(http.server.ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], files: SiteFiles) -> None:
        super().__init__(address, SiteRequestHandler)
        self.files = files


class SiteRequestHandler(http.server.BaseHTTPRequestHandler):
    server_version = "lectern"

    def do_GET(self) -> None:
        self._handle()

    def do_HEAD(self) -> None:
        self._handle()

    def log_message(self, format: str, *args: object) -> None:
        logger.info(format, *args)

    def _handle(self) -> None:
        files: SiteFiles = self.server.files  # type: ignore[attr-defined]
        served = files.resolve(self.path)
        if served.location is not None:
            self.send_response(served.status)
            self.send_header("Location", served.location)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return
        if served.path is None:
            self.send_error(served.status)
            return

        body = served.path.read_bytes()
        content_type, _ = mimetypes.guess_type(served.path.name)
        self.send_response(served.status)
        self.send_header("Content-Type", content_type or "application/octet-stream")
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)


def run_serve(args: argparse.Namespace) -> None:
    """Serve ``args.dest`` until interrupted."""
    dest = Path(args.dest)
    if not dest.is_dir():
        print(f"Error: Cannot serve {dest}: directory does not exist.", file=sys.stderr)
        raise SystemExit(1)
    try:
        files = SiteFiles.for_site(dest, main_document=args.main_document)
    except (LecternError, OSError, ValueError) as exc:
        print(f"Error: {dest} is not a built lectern site: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    with SiteServer((args.host, args.port), files) as server:
        host, port = server.server_address[:2]
        logger.info("Serving %s at http://%s:%d%s", dest, host, port, files.base)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Stopped.")
