"""Observability — in-memory event log for the live preview pipeline.

Records events from:
- **Watcher**: file re-reads and failed reads
- **Push endpoint**: client connects and disconnects

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from the watcher thread and request handlers.

Quick Start:
    >>> from dotview.observability import StackCollector, EventLog
    >>> log = EventLog()
    >>> collector = StackCollector(log)
    >>> collector.record_connect("client-1")
    >>> len(log)
    1

"""

from dotview.observability.collector import StackCollector
from dotview.observability.events import (
    ClientConnected,
    ClientDisconnected,
    ContentReloaded,
    ReloadFailed,
    StackEvent,
    now_ns,
)
from dotview.observability.log import EventLog

__all__ = [
    "ClientConnected",
    "ClientDisconnected",
    "ContentReloaded",
    "EventLog",
    "ReloadFailed",
    "StackCollector",
    "StackEvent",
    "now_ns",
]
