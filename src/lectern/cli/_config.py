"""Resolve a ``BuildConfig`` from a config file and command-line flags."""

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any

from lectern.config import BuildConfig, load_config

DEFAULT_CONFIG_FILE = "lectern.json"


def config_from_args(args: argparse.Namespace) -> BuildConfig:
    """Load the config file (explicit or ``./lectern.json``), then apply flags.

    Without any config file, ``--src`` and ``--dest`` are required.
    """
    config_path = args.config
    if config_path is None and Path(DEFAULT_CONFIG_FILE).is_file():
        config_path = DEFAULT_CONFIG_FILE

    if config_path is not None:
        config = load_config(config_path)
        if args.src:
            config = replace(config, src=tuple(args.src))
        if args.dest:
            config = replace(config, dest=Path.cwd() / args.dest)
    else:
        config = BuildConfig.from_mapping({"src": args.src, "dest": args.dest})

    routing_changes: dict[str, Any] = {}
    if args.routing:
        routing_changes["method"] = args.routing
    if args.case_insensitive:
        routing_changes["case_sensitive"] = False
    if args.server:
        routing_changes["server"] = args.server
    if args.base:
        routing_changes["base"] = args.base
    if args.entrance:
        routing_changes["entrance"] = args.entrance
    if routing_changes:
        config = config.with_routing(**routing_changes)

    if args.title is not None:
        config = replace(config, app=replace(config.app, title=args.title))
    if getattr(args, "clean", False):
        config = replace(config, clean=True)
    return config
