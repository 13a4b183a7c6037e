"""Stack collector — records pipeline events into dotview's event log.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from the watcher thread and request handlers.

"""

from __future__ import annotations

from dotview.observability.events import (
    ClientConnected,
    ClientDisconnected,
    ContentReloaded,
    ReloadFailed,
    now_ns,
)
from dotview.observability.log import EventLog


class StackCollector:
    """Event collector for the watcher and the push endpoint.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    # ----- Watcher events -----

    def record_reload(
        self,
        path: str,
        *,
        revision: int,
        length: int,
        clients_notified: int = 0,
        read_ms: float = 0.0,
    ) -> None:
        """Record a successful re-read of the watched file."""
        self._log.append(
            ContentReloaded(
                path=path,
                revision=revision,
                length=length,
                clients_notified=clients_notified,
                read_ms=read_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_reload_failed(self, path: str, error: BaseException) -> None:
        """Record a failed re-read of the watched file."""
        self._log.append(
            ReloadFailed(
                path=path,
                error=f"{type(error).__name__}: {error}",
                timestamp_ns=now_ns(),
            )
        )

    # ----- Push endpoint events -----

    def record_connect(self, client_id: str) -> None:
        """Record a push endpoint connection."""
        self._log.append(ClientConnected(client_id=client_id, timestamp_ns=now_ns()))

    def record_disconnect(self, client_id: str, *, events_sent: int = 0) -> None:
        """Record a push endpoint disconnect."""
        self._log.append(
            ClientDisconnected(
                client_id=client_id,
                events_sent=events_sent,
                timestamp_ns=now_ns(),
            )
        )
