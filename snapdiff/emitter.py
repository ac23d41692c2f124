"""Synchronous event emitter with awaitable broadcast and pass-through.

Handlers are called in registration order. ``emit`` is fully synchronous;
``emit_and_wait`` additionally awaits whatever awaitables the handlers
return, so plugins can do asynchronous setup on events like ``INIT``.
"""

import asyncio
import inspect
from typing import Any, Callable, Iterable

Handler = Callable[..., Any]
Unsubscribe = Callable[[], None]


class EventEmitter:
    """Minimal publish/subscribe channel."""

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = {}

    def on(self, event: str, handler: Handler) -> Unsubscribe:
        """Subscribe ``handler`` to ``event``.

        Returns:
            Callable that removes the subscription.
        """
        self._handlers.setdefault(event, []).append(handler)
        return lambda: self.off(event, handler)

    def once(self, event: str, handler: Handler) -> Unsubscribe:
        """Subscribe ``handler`` for a single emission of ``event``."""
        def wrapper(*args):
            self.off(event, wrapper)
            return handler(*args)

        return self.on(event, wrapper)

    def off(self, event: str, handler: Handler) -> None:
        """Remove ``handler`` from ``event``. Unknown handlers are ignored."""
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)
        if not handlers:
            self._handlers.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    def emit(self, event: str, *args: Any) -> bool:
        """Call every handler of ``event`` with ``args``.

        Returns:
            True if the event had handlers.
        """
        handlers = list(self._handlers.get(event, []))
        for handler in handlers:
            handler(*args)
        return bool(handlers)

    async def emit_and_wait(self, event: str, *args: Any) -> list[Any]:
        """Emit ``event`` and wait for every awaitable returned by handlers.

        Returns:
            Results of all handlers, in registration order.

        Raises:
            Exception: First failure raised by a handler or its awaitable.
        """
        results = [handler(*args) for handler in list(self._handlers.get(event, []))]
        pending = [r for r in results if inspect.isawaitable(r)]
        if not pending:
            return results

        resolved = iter(await asyncio.gather(*pending))
        return [next(resolved) if inspect.isawaitable(r) else r for r in results]


class PassthroughEmitter(EventEmitter):
    """Emitter that can re-emit events of another emitter under the same names."""

    def passthrough_event(self, source: EventEmitter, events: Iterable[str]) -> Unsubscribe:
        """Forward each of ``events`` from ``source`` to this emitter.

        Returns:
            Callable that removes every forwarding subscription.
        """
        unsubscribes = [
            source.on(event, self._forwarder(event))
            for event in events
        ]

        def unsubscribe_all():
            for unsubscribe in unsubscribes:
                unsubscribe()

        return unsubscribe_all

    def _forwarder(self, event: str) -> Handler:
        return lambda *args: self.emit(event, *args)
