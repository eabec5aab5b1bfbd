"""
Signals
========
Minimal observer channel. Each emitter owns its Signal objects and
consumers connect/disconnect handlers for their own lifetime.
"""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class Signal:
    """
    Ordered list of handlers called synchronously on emit().

    A handler that raises is logged and skipped; the remaining handlers
    still run so one broken consumer cannot cut the notification chain.
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: List[Callable] = []

    def connect(self, handler: Callable) -> Callable:
        """Register a handler. Connecting the same handler twice is a no-op."""
        if handler not in self._handlers:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable) -> bool:
        """Remove a handler. Returns False if it was not connected."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    def clear(self):
        self._handlers.clear()

    def emit(self, *args) -> int:
        """Call every handler with args. Returns how many ran without error."""
        ok = 0
        # copy so handlers may disconnect themselves while being called
        for handler in list(self._handlers):
            try:
                handler(*args)
                ok += 1
            except Exception:
                logger.exception(f"Handler {handler!r} failed on signal '{self.name}'")
        return ok

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def __repr__(self):
        return f"Signal({self.name!r}, handlers={len(self._handlers)})"
