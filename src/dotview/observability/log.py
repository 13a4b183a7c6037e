"""Event log — bounded, thread-safe record of pipeline activity.

Backs the ``/__dotview/stats`` endpoint: per-type counts, frames delivered
to closed connections, the newest successful reload and the newest failed
read.  When the newest read attempt failed, the page is showing a stale
snapshot.

Thread Safety:
    All methods are protected by a ``threading.Lock``.  Safe for
    concurrent writes from the watcher thread and reads from request
    handlers.

"""

import threading
from collections import deque
from collections.abc import Sequence
from typing import Any

from dotview.observability.events import (
    ClientDisconnected,
    ContentReloaded,
    ReloadFailed,
    StackEvent,
)


def _newest[E](events: Sequence[StackEvent], event_type: type[E]) -> E | None:
    for event in reversed(events):
        if isinstance(event, event_type):
            return event
    return None


class EventLog:
    """Ring buffer of pipeline events.

    Events are stored in a deque with maxlen.  When the buffer is full, the
    oldest events are discarded automatically.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 1_000) -> None:
        self._max_events = max_events
        self._events: deque[StackEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: StackEvent) -> None:
        """Record an event in the log."""
        with self._lock:
            self._events.append(event)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Summarise the log for the stats endpoint."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        frames_sent = 0
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1
            if isinstance(event, ClientDisconnected):
                frames_sent += event.events_sent

        reload = _newest(events, ContentReloaded)
        failure = _newest(events, ReloadFailed)
        stale = isinstance(_newest(events, ContentReloaded | ReloadFailed), ReloadFailed)

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": type_counts,
            "frames_sent": frames_sent,
            "last_reload": None if reload is None else {
                "revision": reload.revision,
                "length": reload.length,
                "clients_notified": reload.clients_notified,
                "read_ms": round(reload.read_ms, 2),
            },
            "last_failure": None if failure is None else {"error": failure.error},
            "stale": stale,
        }
