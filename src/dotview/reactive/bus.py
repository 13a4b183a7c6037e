"""Notification bus — zero-payload fan-out signal.

One publisher (the file watcher) wakes any number of blocked subscribers
(push endpoint connections).  Signals carry no data: a woken subscriber
re-reads the ContentStore.

Delivery is tracked with a generation counter rather than per-subscriber
queues.  Each subscriber remembers the last generation it observed, so any
number of publishes between two ``wait`` calls collapse into one wake-up,
and a subscriber registered after N publishes only sees publish N+1.

Thread Safety:
    All state is guarded by one ``threading.Condition``.  ``publish`` only
    bumps a counter and calls ``notify_all``; it never blocks on waiters.

"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotview._types import ClientID


@dataclass(eq=False, slots=True)
class Subscriber:
    """A registered listener.

    Attributes:
        client_id: Unique identifier for this listener.
        seen: Last bus generation this listener was woken for.
        active: False once unsubscribed or the bus is closed.

    """

    client_id: ClientID = field(default_factory=lambda: str(uuid.uuid4()))
    seen: int = 0
    active: bool = True


class NotificationBus:
    """Broadcasts change signals to every waiting subscriber."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._generation = 0
        self._subscribers: set[Subscriber] = set()
        self._closed = False

    @property
    def generation(self) -> int:
        """Number of publishes so far."""
        with self._cond:
            return self._generation

    @property
    def subscriber_count(self) -> int:
        """Number of registered subscribers."""
        with self._cond:
            return len(self._subscribers)

    @property
    def closed(self) -> bool:
        """Whether the bus has been torn down."""
        with self._cond:
            return self._closed

    def subscribe(self, client_id: ClientID | None = None) -> Subscriber:
        """Register a subscriber that will see only future publishes."""
        with self._cond:
            sub = Subscriber(seen=self._generation)
            if client_id is not None:
                sub.client_id = client_id
            if self._closed:
                sub.active = False
            else:
                self._subscribers.add(sub)
            return sub

    def unsubscribe(self, subscriber: Subscriber) -> None:
        """Release *subscriber* and wake its pending ``wait``."""
        with self._cond:
            subscriber.active = False
            self._subscribers.discard(subscriber)
            self._cond.notify_all()

    def publish(self) -> int:
        """Wake every waiting subscriber.

        Returns:
            Number of subscribers registered at publish time.

        """
        with self._cond:
            if self._closed:
                return 0
            self._generation += 1
            self._cond.notify_all()
            return len(self._subscribers)

    def wait(self, subscriber: Subscriber, timeout: float | None = None) -> bool:
        """Block until a publish the subscriber has not yet seen.

        Returns:
            True when woken by a publish.  False on timeout, or when the
            subscriber was unsubscribed or the bus closed.

        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while True:
                if not subscriber.active or self._closed:
                    return False
                if self._generation > subscriber.seen:
                    subscriber.seen = self._generation
                    return True
                if deadline is None:
                    self._cond.wait()
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        return False
                    self._cond.wait(remaining)

    def close(self) -> None:
        """Tear down the bus; every outstanding and future wait returns False."""
        with self._cond:
            self._closed = True
            for sub in self._subscribers:
                sub.active = False
            self._subscribers.clear()
            self._cond.notify_all()
