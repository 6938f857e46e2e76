"""``lectern build`` — build the documentation site."""

import argparse
import sys

from lectern.cli._config import config_from_args
from lectern.errors import LecternError


def run_build(args: argparse.Namespace) -> None:
    """Build the site described by the config file and flags.

    Any lectern error (invalid configuration, route name violations,
    unwritable output) aborts with exit status 1.
    """
    from lectern.build import SiteBuilder

    try:
        config = config_from_args(args)
        result = SiteBuilder(config).build()
    except LecternError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"Built {result.stats.total} route(s) into {result.dest}")
