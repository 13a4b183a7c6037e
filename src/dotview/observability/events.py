"""Event model for the watch → store → broadcast pipeline.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Watcher events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ContentReloaded:
    """The watched file was re-read and stored.

    Attributes:
        path: Absolute path to the DOT file.
        revision: Revision of the snapshot that was stored.
        length: Length of the new text in characters.
        clients_notified: Number of subscribers woken by the publish.
        read_ms: Time spent reading the file in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    revision: int
    length: int
    clients_notified: int
    read_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ReloadFailed:
    """Re-reading the watched file failed; the previous snapshot was kept.

    Attributes:
        path: Absolute path to the DOT file.
        error: ``repr``-style description of the failure.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Push endpoint events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ClientConnected:
    """A client opened the push endpoint."""

    client_id: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ClientDisconnected:
    """A push endpoint connection closed.

    Attributes:
        client_id: Identifier assigned on connect.
        events_sent: Number of ``dotChanged`` frames written to the client.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    client_id: str
    events_sent: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type StackEvent = (
    ContentReloaded
    | ReloadFailed
    | ClientConnected
    | ClientDisconnected
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
