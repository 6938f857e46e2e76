"""The navigation state machine of a generated SPA.

One ``Router`` per page session. It owns the current route, decides
whether a navigation is a no-op, drives the renderer and emits the
lifecycle events ``route``, ``render``, ``ready`` and ``navigate``.

States per navigation::

    IDLE -> RESOLVING -> RENDERING -> IDLE
                      -> NOT_FOUND -> IDLE

Concurrency:
    Everything runs on one event loop. The only suspension point inside a
    navigation is the content fetch, so ``current_route`` can change while
    a fetch is in flight. Each render captures a generation number before
    fetching and drops the response if a newer render started meanwhile.
"""

import inspect
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

from lectern.errors import RouteNotFound
from lectern.routing.matcher import match
from lectern.routing.resolver import LocationSnapshot, candidate_from_id, resolve_candidate
from lectern.routing.route import ApiRoute, ContentRoute, Route
from lectern.routing.schema import RoutePayload
from lectern.runtime.events import EventEmitter, Listener, RouterEvent
from lectern.runtime.fetch import FetchResult, Fetcher
from lectern.runtime.renderer import Renderer

logger = logging.getLogger("lectern.router")

# Called with the HTTP-like status of the render: 200 or 404.
StatusCallback = Callable[[int], Any]


class RouterState(StrEnum):
    IDLE = "idle"
    RESOLVING = "resolving"
    RENDERING = "rendering"
    NOT_FOUND = "not-found"


class Router:
    """Resolves locations against the embedded route table and renders them.

    Usage::

        payload = read_bootstrap("site")
        router = Router(payload, renderer, FileFetcher("site"))
        router.on("render", on_render)
        await router.start(LocationSnapshot.from_url("/docs/?content=guide"))
    """

    __slots__ = (
        "_current_route",
        "_events",
        "_generation",
        "entrance_route",
        "fetcher",
        "initial_load_pending",
        "main_document",
        "payload",
        "renderer",
        "state",
    )

    def __init__(
        self,
        payload: RoutePayload,
        renderer: Renderer,
        fetcher: Fetcher,
        *,
        main_document: str = "index.html",
    ) -> None:
        self.payload = payload
        self.renderer = renderer
        self.fetcher = fetcher
        self.main_document = main_document
        self.state = RouterState.IDLE
        self.initial_load_pending = False
        self.entrance_route: Route | None = None
        self._current_route: Route | None = None
        self._generation = 0
        self._events = EventEmitter()

    # -- Events -----------------------------------------------------------

    def on(self, event: RouterEvent | str, listener: Listener) -> "Router":
        self._events.on(event, listener)
        return self

    def once(self, event: RouterEvent | str, listener: Listener) -> "Router":
        self._events.once(event, listener)
        return self

    def off(self, event: RouterEvent | str, listener: Listener | None = None) -> "Router":
        self._events.off(event, listener)
        return self

    # -- Route lookup -----------------------------------------------------

    @property
    def current_route(self) -> Route | None:
        return self._current_route

    def create_route(self, name: str | None, route_type: str) -> Route | None:
        """Look up a route by type and name; ``None`` when it does not exist."""
        return self.create_route_from_id(f"{route_type}:{name or ''}")

    def create_route_from_id(self, route_id: str | None) -> Route | None:
        candidate = candidate_from_id(route_id)
        return match(candidate, self.payload.routes, self.payload.routing)

    def resolve(self, location: LocationSnapshot) -> Route | None:
        """Resolve *location* to a route; a bare root yields the entrance route."""
        candidate = resolve_candidate(location, self.payload.routing, main_document=self.main_document)
        if candidate is None:
            return self.entrance_route
        return match(candidate, self.payload.routes, self.payload.routing)

    def exists(self, route: Route | None) -> bool:
        return route is not None and route.exists() and route in self.payload.routes

    def is_current(self, route: Route | None) -> bool:
        return route is not None and route.is_equal_to(self._current_route)

    # -- Navigation -------------------------------------------------------

    async def start(self, location: LocationSnapshot) -> bool:
        """Handle the initial page load. Returns whether a route rendered."""
        self.initial_load_pending = True
        self.entrance_route = self.create_route_from_id(self.payload.routing.entrance)
        if self.entrance_route is None:
            logger.warning("Entrance route %r does not exist.", self.payload.routing.entrance)
        logger.info("Routing method: %s", self.payload.routing.method.value)
        return await self.navigate(location)

    async def navigate(self, location: LocationSnapshot) -> bool:
        """Handle a navigation trigger (load, click, popstate).

        Returns ``True`` when the location resolved to an existing route,
        ``False`` when the not-found view was rendered.
        """
        self.state = RouterState.RESOLVING
        route = self.resolve(location)

        if not self.exists(route):
            logger.warning("Unknown route: %s?%s", location.path, location.query)
            await self.apply_route(None, _ignore_status)
            return False

        if self.is_current(route):
            # Duplicate trigger for the route already on screen.
            self.state = RouterState.IDLE
            await self._events.emit(RouterEvent.NAVIGATE, route)
            return True

        statuses: list[int] = []
        await self.apply_route(route, statuses.append)
        if statuses == [200]:
            await self._events.emit(RouterEvent.NAVIGATE, route)
        return statuses == [200]

    async def apply_route(self, route: Route | None, callback: StatusCallback | None = None) -> None:
        """Make *route* current and render it.

        A missing route renders the not-found partial and reports 404 to
        *callback*; without a callback ``RouteNotFound`` is raised, since
        the caller has no other way to learn about it. Applying the route
        that is already current does nothing.
        """
        if route is None or not self.exists(route):
            await self._events.emit(RouterEvent.ROUTE, None)
            await self._render_not_found(route, callback)
            return
        if self.is_current(route):
            return

        self._current_route = route
        self._generation += 1
        generation = self._generation
        await self._events.emit(RouterEvent.ROUTE, route)
        self.state = RouterState.RENDERING

        match route:
            case ApiRoute():
                self.renderer.render_route(route)
            case ContentRoute():
                result = await self._fetch(route)
                if generation != self._generation:
                    logger.debug("Dropped stale response for %s", route.id)
                    return
                if not result.ok:
                    await self._render_not_found(route, callback)
                    return
                self.renderer.render_route(route, result.text)

        await self._after_render()
        await _call(callback, 200)

    async def render(self, route: Route | None, callback: StatusCallback | None = None) -> None:
        """Public render entry point for templates and embedding code."""
        await self.apply_route(route, callback)

    # -- Internals --------------------------------------------------------

    async def _fetch(self, route: ContentRoute) -> FetchResult:
        try:
            result = await self.fetcher.fetch(route.content_path)
        except Exception:
            logger.exception("Fetching %s failed", route.content_path)
            return FetchResult(500)
        logger.debug("GET %s %s", result.status, route.content_path)
        return result

    async def _after_render(self) -> None:
        await self._events.emit(RouterEvent.RENDER, self._current_route)
        if self.initial_load_pending:
            self.initial_load_pending = False
            await self._events.emit(RouterEvent.READY)
        self.state = RouterState.IDLE

    async def _render_not_found(self, route: Route | None, callback: StatusCallback | None) -> None:
        self.state = RouterState.NOT_FOUND
        self._current_route = None
        self._generation += 1
        self.renderer.render_not_found()
        await self._events.emit(RouterEvent.RENDER, None)
        self.state = RouterState.IDLE
        if callback is None:
            raise RouteNotFound(f"Page or content not found for route: {route}")
        await _call(callback, 404)


def _ignore_status(status: int) -> None:
    pass


async def _call(callback: StatusCallback | None, status: int) -> None:
    if callback is None:
        return
    result = callback(status)
    if inspect.isawaitable(result):
        await result
