"""Content store — the single current snapshot of the watched file.

Thread Safety:
    Snapshots are frozen and replaced wholesale under a ``threading.Lock``,
    so a reader never observes a partially written value.

"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotview._types import Revision


@dataclass(frozen=True, slots=True)
class ContentSnapshot:
    """Full text of the watched file at one instant.

    Attributes:
        text: File content.
        revision: Monotonic counter, 0 for the initial read and +1 per write.

    """

    text: str
    revision: Revision


class ContentStore:
    """Holds the current ContentSnapshot for one watch target.

    Created once at startup and passed by reference to the watcher and the
    preview server.  Writes serialize; the last writer wins in store order.

    """

    __slots__ = ("_lock", "_snapshot")

    def __init__(self, initial_text: str = "") -> None:
        self._lock = threading.Lock()
        self._snapshot = ContentSnapshot(text=initial_text, revision=0)

    @property
    def revision(self) -> Revision:
        """Revision of the current snapshot."""
        return self.read().revision

    def read(self) -> ContentSnapshot:
        """Return the most recently stored snapshot."""
        with self._lock:
            return self._snapshot

    def write(self, text: str) -> ContentSnapshot:
        """Replace the snapshot with *text* and a fresh revision."""
        with self._lock:
            self._snapshot = ContentSnapshot(
                text=text,
                revision=self._snapshot.revision + 1,
            )
            return self._snapshot
