"""Router lifecycle events.

Listeners may be plain callables or coroutine functions; ``emit`` awaits
the latter in registration order, so a listener always sees events in
the order the router produced them.
"""

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

logger = logging.getLogger("lectern.router")

Listener = Callable[..., Any]


class RouterEvent(StrEnum):
    READY = "ready"  # first successful render of the page session
    ROUTE = "route"  # a route is about to be rendered
    RENDER = "render"  # a route (or the not-found view) was rendered
    NAVIGATE = "navigate"  # navigation to an existing route finished


@dataclass(slots=True)
class _Subscription:
    listener: Listener
    once: bool


class EventEmitter:
    """Minimal subscribe/once/unsubscribe event channel.

    Usage::

        events = EventEmitter()
        events.on(RouterEvent.RENDER, lambda route: print(route))
        await events.emit(RouterEvent.RENDER, route)
    """

    __slots__ = ("_subscriptions",)

    def __init__(self) -> None:
        self._subscriptions: dict[RouterEvent, list[_Subscription]] = {}

    def on(self, event: RouterEvent | str, listener: Listener) -> None:
        self._subscriptions.setdefault(RouterEvent(event), []).append(
            _Subscription(listener, once=False)
        )

    def once(self, event: RouterEvent | str, listener: Listener) -> None:
        self._subscriptions.setdefault(RouterEvent(event), []).append(
            _Subscription(listener, once=True)
        )

    def off(self, event: RouterEvent | str, listener: Listener | None = None) -> None:
        """Remove *listener*, or every listener of *event* when omitted."""
        event = RouterEvent(event)
        if listener is None:
            self._subscriptions.pop(event, None)
            return
        subs = self._subscriptions.get(event, [])
        self._subscriptions[event] = [s for s in subs if s.listener is not listener]

    def listener_count(self, event: RouterEvent | str) -> int:
        return len(self._subscriptions.get(RouterEvent(event), ()))

    async def emit(self, event: RouterEvent, *args: Any) -> None:
        logger.debug("Event: %s %s", event.value, args[0] if args else "")
        subs = self._subscriptions.get(event)
        if not subs:
            return
        # Drop one-shot listeners before calling, so re-entrant emits skip them.
        self._subscriptions[event] = [s for s in subs if not s.once]
        for sub in subs:
            result = sub.listener(*args)
            if inspect.isawaitable(result):
                await result
