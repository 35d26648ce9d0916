"""Synchronous topic-based publish/subscribe bus.

Handlers subscribe either to an exact topic name (``str``) or to a
precompiled regular expression (``re.Pattern``). Publishing a topic invokes
the exact-match handlers in registration order, then every pattern handler
whose pattern matches the literal topic.

Dispatch is synchronous and reentrant: a handler that publishes triggers a
nested fan-out that completes before the outer ``publish`` call returns.
There is no queue and no ordering guarantee across topics published from
within a handler.

By default each handler runs inside an error boundary: a failing handler is
logged and the remaining handlers of the same fan-out still run. Build the
bus with ``isolate_errors=False`` to let the first exception propagate to
the publisher instead.
"""

import re
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

Handler = Callable[[Any], None]


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class EventBus:
    """Exact-name and pattern topic bus with in-order fan-out."""

    def __init__(self, isolate_errors: bool = True) -> None:
        self.isolate_errors = isolate_errors
        self._handlers: dict[str, list[Handler]] = {}
        # Keyed by (pattern source, flags) so an equal pattern compiled
        # elsewhere unsubscribes the same registration.
        self._patterns: dict[tuple[str, int], tuple[re.Pattern, list[Handler]]] = {}

    # -------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------
    def subscribe(self, topic: str | re.Pattern, handler: Handler) -> None:
        """Register ``handler`` for ``topic``. Re-registering is a no-op."""
        if not callable(handler):
            raise TypeError(f"Handler for {topic!r} is not callable: {handler!r}")

        handlers = self._registry_for(topic, create=True)
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, topic: str | re.Pattern, handler: Handler) -> None:
        """Remove ``handler`` from ``topic``. Unknown handlers are ignored."""
        handlers = self._registry_for(topic, create=False)
        if handlers is None or handler not in handlers:
            return

        handlers.remove(handler)
        if not handlers:
            if isinstance(topic, re.Pattern):
                del self._patterns[(topic.pattern, topic.flags)]
            else:
                del self._handlers[topic]

    def has_subscribers(self, topic: str) -> bool:
        """Whether publishing ``topic`` would reach at least one handler."""
        if self._handlers.get(topic):
            return True
        return any(pattern.search(topic) for pattern, _ in self._patterns.values())

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()
        self._patterns.clear()

    # -------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------
    def publish(self, topic: str, payload: Any = None) -> None:
        """Deliver ``payload`` to every handler subscribed to ``topic``."""
        if not isinstance(topic, str):
            raise TypeError(f"Topics are published by name, got {topic!r}")

        # Snapshot so handlers may (un)subscribe while we iterate
        exact = list(self._handlers.get(topic, ()))
        matched = [
            handler
            for pattern, handlers in list(self._patterns.values())
            if pattern.search(topic)
            for handler in list(handlers)
        ]

        for handler in exact + matched:
            self._dispatch(topic, handler, payload)

    def trigger(self, topic: str, context: dict | None = None) -> Handler:
        """Return a callback that publishes ``topic`` when called.

        Views bind these to their controls. ``context`` keys are merged
        over a mapping payload; any other payload is published as is.
        """
        if not isinstance(topic, str):
            raise TypeError(f"Topics are published by name, got {topic!r}")

        def publish_topic(payload: Any = None) -> None:
            if context and (payload is None or isinstance(payload, dict)):
                payload = {**(payload or {}), **context}
            self.publish(topic, payload)

        return publish_topic

    def _dispatch(self, topic: str, handler: Handler, payload: Any) -> None:
        if not self.isolate_errors:
            handler(payload)
            return

        try:
            handler(payload)
        except Exception:
            logger.exception(
                "Event handler failed",
                topic=topic,
                handler=_handler_name(handler),
            )

    def _registry_for(self, topic: str | re.Pattern, create: bool) -> list[Handler] | None:
        if isinstance(topic, re.Pattern):
            key = (topic.pattern, topic.flags)
            if key not in self._patterns:
                if not create:
                    return None
                self._patterns[key] = (topic, [])
            return self._patterns[key][1]

        if not isinstance(topic, str):
            raise TypeError(f"Topic must be a string or compiled pattern, got {topic!r}")

        if create:
            return self._handlers.setdefault(topic, [])
        return self._handlers.get(topic)
