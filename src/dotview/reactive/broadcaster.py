"""SSE broadcaster — bridges the NotificationBus into async event streams.

The bus is a blocking, thread-based primitive.  Each open push endpoint
connection parks one thread of the broadcaster's own executor in
``NotificationBus.wait`` so the event loop keeps serving ``GET /`` while
connections wait, and the default executor stays free for request work.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from dotview.observability.collector import StackCollector
    from dotview.reactive.bus import NotificationBus, Subscriber


# SSE frame emitted on every change: ``event: dotChanged\ndata: update\n\n``
CHANGE_EVENT = "dotChanged"
CHANGE_DATA = "update"


class Broadcaster:
    """Turns bus wake-ups into ``dotChanged`` SSE events.

    Args:
        bus: The NotificationBus the watcher publishes on.
        collector: Optional StackCollector for connect/disconnect events.
        poll_interval: Upper bound on a single worker-thread wait, so parked
            threads notice shutdown even if nothing publishes.
        max_waiters: Size of the wait-thread pool.  Connections beyond it
            queue for a thread and see their signal up to one poll later.

    """

    def __init__(
        self,
        bus: NotificationBus,
        *,
        collector: StackCollector | None = None,
        poll_interval: float = 1.0,
        max_waiters: int = 64,
    ) -> None:
        self._bus = bus
        self._collector = collector
        self._poll_interval = poll_interval
        self._executor = ThreadPoolExecutor(
            max_workers=max_waiters, thread_name_prefix="dotview-sse",
        )

    @property
    def subscriber_count(self) -> int:
        """Number of open push endpoint connections."""
        return self._bus.subscriber_count

    def connect(self) -> Subscriber:
        """Register a new push endpoint connection."""
        sub = self._bus.subscribe()
        if self._collector is not None:
            self._collector.record_connect(sub.client_id)
        return sub

    def disconnect(self, sub: Subscriber, *, events_sent: int = 0) -> None:
        """Release a push endpoint connection."""
        self._bus.unsubscribe(sub)
        if self._collector is not None:
            self._collector.record_disconnect(sub.client_id, events_sent=events_sent)

    async def next_signal(self, sub: Subscriber) -> bool:
        """Wait for the next change signal without blocking the event loop.

        Returns:
            True on a signal, False once the subscriber or bus is gone.

        """
        loop = asyncio.get_running_loop()
        while sub.active and not self._bus.closed:
            woke = await loop.run_in_executor(
                self._executor, self._bus.wait, sub, self._poll_interval,
            )
            if woke:
                return True
        return False

    def close(self) -> None:
        """Release the wait threads.  Call after the bus is closed."""
        self._executor.shutdown(wait=False, cancel_futures=True)

    async def client_generator(self, sub: Subscriber) -> AsyncIterator[Any]:
        """Async generator yielding one SSE event per change signal.

        Used as the generator for Chirp's ``EventStream``.  The subscription
        is released when the generator finishes for any reason: client
        disconnect, task cancellation, or bus teardown.

        """
        from chirp import SSEEvent

        sent = 0
        try:
            while await self.next_signal(sub):
                yield SSEEvent(data=CHANGE_DATA, event=CHANGE_EVENT)
                sent += 1
        except (asyncio.CancelledError, GeneratorExit):
            return
        finally:
            self.disconnect(sub, events_sent=sent)
