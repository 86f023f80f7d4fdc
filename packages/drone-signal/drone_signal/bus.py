"""In-memory pub/sub bus with explicit flush semantics."""
from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

_Handler = Callable[[str, dict[str, Any]], None]

# Subscribing under this name receives every signal.
WILDCARD = "*"


class EffectsBus:
    """Queues signals until ``flush()`` dispatches them in publish order.

    A handler that raises is logged and skipped; the remaining handlers
    and signals are still delivered.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []
        self._last_errors: list[Exception] = []

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def pending(self) -> list[str]:
        return [name for name, _ in self._queue]

    def flush(self) -> int:
        """Dispatch queued signals. Signals published by handlers go out in the same flush."""
        self._last_errors = []
        delivered = 0
        while self._queue:
            snapshot = self._queue
            self._queue = []
            for signal_name, data in snapshot:
                handlers = self._subscribers.get(signal_name, []) + self._subscribers.get(WILDCARD, [])
                for handler in handlers:
                    try:
                        handler(signal_name, data)
                    except Exception as exc:
                        self._last_errors.append(exc)
                        logger.exception(
                            "Handler %r failed on signal %r",
                            getattr(handler, "__qualname__", handler),
                            signal_name,
                        )
                delivered += 1
        return delivered

    def last_errors(self) -> list[Exception]:
        return list(self._last_errors)

    def clear(self) -> None:
        self._queue.clear()
