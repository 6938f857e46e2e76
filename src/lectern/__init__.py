"""Lectern — static documentation sites with a single-page route model.

Scans docstring sources and narrative files, assigns every documented
unit a durable route, and writes a single-page application that resolves
locations back into those routes.

Basic usage::

    from lectern import load_config, SiteBuilder

    SiteBuilder(load_config("lectern.json")).build()

Headless rendering of a built site::

    from lectern import Router, Renderer, read_bootstrap
"""

__version__ = "0.1.0"
__all__ = [
    "BuildConfig",
    "ConfigurationError",
    "LecternError",
    "Renderer",
    "Route",
    "RouteNotFound",
    "RouteTableBuilder",
    "Router",
    "RoutingConfig",
    "ServerScaffoldGenerator",
    "SiteBuilder",
    "load_config",
    "read_bootstrap",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import lectern`` fast and lets submodules import
    ``__version__`` without import cycles.
    """
    if name in ("BuildConfig", "RoutingConfig", "load_config"):
        from lectern import config as _config

        return getattr(_config, name)

    if name == "Route":
        from lectern.routing.route import Route

        return Route

    if name == "RouteTableBuilder":
        from lectern.routing.table import RouteTableBuilder

        return RouteTableBuilder

    if name == "read_bootstrap":
        from lectern.routing.schema import read_bootstrap

        return read_bootstrap

    if name == "ServerScaffoldGenerator":
        from lectern.scaffold import ServerScaffoldGenerator

        return ServerScaffoldGenerator

    if name == "SiteBuilder":
        from lectern.build import SiteBuilder

        return SiteBuilder

    if name in ("Renderer", "Router"):
        from lectern import runtime as _runtime

        return getattr(_runtime, name)

    if name in ("ConfigurationError", "LecternError", "RouteNotFound"):
        from lectern import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
