"""Runtime — the navigation half of the route model.

Reads the route payload a build embedded into the site and turns
locations into rendered partials::

    payload = read_bootstrap("site")
    renderer = Renderer(payload, create_partials_environment("site"))
    router = Router(payload, renderer, FileFetcher("site"))
    await router.start(LocationSnapshot.from_url("/?content=guide"))
    print(renderer.container.html)
"""

from lectern.runtime.events import EventEmitter, RouterEvent
from lectern.runtime.fetch import FetchResult, FileFetcher, HttpFetcher
from lectern.runtime.renderer import Container, Renderer, create_partials_environment
from lectern.runtime.router import Router, RouterState

__all__ = [
    "Container",
    "EventEmitter",
    "FetchResult",
    "FileFetcher",
    "HttpFetcher",
    "Renderer",
    "Router",
    "RouterEvent",
    "RouterState",
    "create_partials_environment",
]
