"""Lectern CLI — build sites, list routes, render locations and preview sites.

Entry point registered as ``lectern`` in ``pyproject.toml``::

    [project.scripts]
    lectern = "lectern.cli:main"
"""

import argparse
import logging
import sys

from lectern.config import RoutingMethod, ServerType


def _add_build_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help="Path to a JSON build configuration (default: ./lectern.json if present)",
    )
    parser.add_argument(
        "--src",
        action="append",
        default=None,
        help="Source glob; repeat for several (overrides the config's src)",
    )
    parser.add_argument("--dest", default=None, help="Output directory")
    parser.add_argument(
        "--routing",
        choices=[m.value for m in RoutingMethod],
        default=None,
        help="Routing method of the generated app",
    )
    parser.add_argument(
        "--case-insensitive",
        action="store_true",
        help="Lower-case route names",
    )
    parser.add_argument(
        "--server",
        choices=[s.value for s in ServerType],
        default=None,
        help="Host the site will be served from",
    )
    parser.add_argument("--base", default=None, help="Base path of the app (e.g. /docs/)")
    parser.add_argument("--entrance", default=None, help="Entrance route id (e.g. content:guide)")
    parser.add_argument("--title", default=None, help="Application title")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``lectern`` command."""
    parser = argparse.ArgumentParser(
        prog="lectern",
        description="Lectern — static documentation sites with a single-page route model.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- lectern build ----------------------------------------------------
    build_parser = subparsers.add_parser("build", help="Build the documentation site")
    _add_build_arguments(build_parser)
    build_parser.add_argument(
        "--clean",
        action="store_true",
        help="Empty the output directory before building",
    )

    # -- lectern routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes a build would create")
    _add_build_arguments(routes_parser)

    # -- lectern render ---------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render a location of a built site")
    render_parser.add_argument("dest", help="Output directory of a previous build")
    render_parser.add_argument("location", help="Location to render (e.g. '/?content=guide')")
    render_parser.add_argument(
        "--base-url",
        default=None,
        help="Fetch content fragments from this URL instead of the output directory",
    )
    render_parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    # -- lectern serve ----------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Preview a built site on a local HTTP server")
    serve_parser.add_argument("dest", help="Output directory of a previous build")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=9000, help="Port (default: 9000)")
    serve_parser.add_argument(
        "--main-document",
        default="index.html",
        help="Root document of the site (default: index.html)",
    )
    serve_parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    if args.command == "build":
        from lectern.cli._build import run_build

        run_build(args)
    elif args.command == "routes":
        from lectern.cli._routes import run_routes

        run_routes(args)
    elif args.command == "render":
        from lectern.cli._render import run_render

        run_render(args)
    elif args.command == "serve":
        from lectern.cli._serve import run_serve

        run_serve(args)
