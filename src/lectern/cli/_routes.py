"""``lectern routes`` — list the routes a build would create.

Discovers sources and builds the route table without writing anything,
then prints ID, PATH and SOURCE for each route.
"""

import argparse
import sys
from pathlib import Path

from lectern.cli._config import config_from_args
from lectern.errors import LecternError


def _describe_sources(files: list[Path], base_dir: Path) -> str:
    if not files:
        return "(no sources)"
    first = files[0]
    shown = first.relative_to(base_dir) if first.is_relative_to(base_dir) else first
    if len(files) == 1:
        return str(shown)
    return f"{shown} (+{len(files) - 1} more)"


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table for the configured sources."""
    from lectern.build import plan_routes

    try:
        config = config_from_args(args)
        plan = plan_routes(config)
    except LecternError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    base_dir = config.base_dir.resolve()
    rows: list[tuple[str, str, str]] = [
        (route.id, route.path, _describe_sources(plan.sources.get(route.id, []), base_dir))
        for route in plan.table
    ]

    max_id = max(max(len(r[0]) for r in rows), 2)  # "ID" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_id}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("ID", "PATH", "SOURCE"))
    sep_len = max_id + max_path + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for route_id, path, source in rows:
        print(fmt.format(route_id, path, source))

    stats = plan.stats
    print()
    print(f"Total routes: {stats.total} ({stats.api} API, {stats.content} content)")
