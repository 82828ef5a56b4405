import logging
from typing import Callable, Dict, List, Literal, Optional

log = logging.getLogger(__name__)

EventName = Literal["start", "end", "error", "raised"]
EVENTS = ("start", "end", "error", "raised")

# Payloads:
#   start()
#   end()
#   error(err: Exception)
#   raised(previous: TrackedCount, current: TrackedCount)
Listener = Callable[..., None]


class EventEmitter:
    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {name: [] for name in EVENTS}

    def on(self, event: EventName, listener: Optional[Listener] = None):
        """Register ``listener``; without one, return a decorator that does."""
        self._check(event)
        if listener is None:
            return lambda f: self.on(event, f)
        self._listeners[event].append(listener)
        return listener

    def off(self, event: EventName, listener: Listener):
        self._check(event)
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def listener_count(self, event: EventName) -> int:
        self._check(event)
        return len(self._listeners[event])

    def emit(self, event: EventName, *args) -> bool:
        self._check(event)
        listeners = list(self._listeners[event])
        if not listeners:
            if event == "error":
                log.warning("Unhandled error event: %s", args[0] if args else None)
            return False
        for listener in listeners:
            try:
                listener(*args)
            except Exception:
                log.exception("Listener %r for %s event failed", listener, event)
        return True

    @staticmethod
    def _check(event: str):
        if event not in EVENTS:
            raise ValueError(f"Unknown event {event!r}; expected one of {', '.join(EVENTS)}")
