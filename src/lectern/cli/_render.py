"""``lectern render`` — navigate a built site headlessly.

Loads the route payload of a previous build, runs the router against the
given location and prints the rendered HTML. Exits with status 1 when
the location does not resolve to an existing route.
"""

import argparse
import sys
from pathlib import Path

import anyio
from kida import TemplateError

from lectern.errors import LecternError


async def render_location(dest: Path, location: str, base_url: str | None = None) -> tuple[bool, str]:
    """Render *location* of the site in *dest*; return ``(found, html)``."""
    from lectern.routing.resolver import LocationSnapshot
    from lectern.routing.schema import read_bootstrap
    from lectern.runtime import FileFetcher, HttpFetcher, Renderer, Router, create_partials_environment

    payload = read_bootstrap(dest)
    renderer = Renderer(payload, create_partials_environment(dest))
    snapshot = LocationSnapshot.from_url(location)

    if base_url is None:
        router = Router(payload, renderer, FileFetcher(dest))
        found = await router.start(snapshot)
    else:
        async with HttpFetcher(base_url) as fetcher:
            router = Router(payload, renderer, fetcher)
            found = await router.start(snapshot)
    return found, renderer.container.html


def run_render(args: argparse.Namespace) -> None:
    """Print the HTML the router renders for ``args.location``."""
    dest = Path(args.dest)
    try:
        found, html = anyio.run(render_location, dest, args.location, args.base_url)
    except (LecternError, OSError, ValueError, TemplateError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(html)
    if not found:
        print(f"Error: no route for {args.location}", file=sys.stderr)
        raise SystemExit(1)
