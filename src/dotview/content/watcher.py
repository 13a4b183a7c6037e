"""File watcher — keeps the ContentStore in sync with the DOT file on disk.

Watches the *directory* that contains the DOT file and filters events by
base name.  Watching the file itself misses saves from editors that write a
temporary file and rename it over the original.

On a relevant change the watcher re-reads the file, stores the new text and
only then publishes on the NotificationBus, so a woken subscriber always
reads content at least as new as the change that woke it.
"""

from __future__ import annotations

import sys
import threading
import time
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change

from dotview._errors import WatchError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dotview._types import WatchedFile
    from dotview.content.store import ContentSnapshot, ContentStore
    from dotview.observability.collector import StackCollector
    from dotview.reactive.bus import NotificationBus


class ChangeWatcher:
    """Watches one file and pushes its content through the store and bus.

    Uses watchfiles on the parent directory (non-recursive).  Runs in a
    background daemon thread for the lifetime of the process.

    Args:
        path: Absolute path of the watched file.
        store: ContentStore receiving the re-read text.
        bus: NotificationBus signalled after every successful store write.
        collector: Optional StackCollector for reload events.
        debounce_ms: watchfiles debounce window.
        step_ms: watchfiles polling step.

    """

    def __init__(
        self,
        path: WatchedFile,
        store: ContentStore,
        bus: NotificationBus,
        *,
        collector: StackCollector | None = None,
        debounce_ms: int = 100,
        step_ms: int = 50,
    ) -> None:
        self._path = path
        self._store = store
        self._bus = bus
        self._collector = collector
        self._debounce_ms = debounce_ms
        self._step_ms = step_ms
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def path(self) -> WatchedFile:
        """The watched file."""
        return self._path

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching the file's directory in a background thread.

        Raises:
            WatchError: If the parent directory does not exist.

        """
        if self.is_running:
            return

        if not self._path.parent.is_dir():
            msg = f"Cannot watch {self._path}: {self._path.parent} is not a directory"
            raise WatchError(msg)

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="dotview-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    def is_relevant(self, changed: str | Path) -> bool:
        """Whether a path reported for the watched directory is our file."""
        return Path(changed).name == self._path.name

    def handle_changes(self, raw_changes: Iterable[tuple[Change, str]]) -> bool:
        """Process one batch of watchfiles changes.

        A batch holding several events for the file (editors often save in
        more than one syscall) triggers a single reload.  Deletion-only
        batches are skipped; the directory watch stays registered, so a
        recreated file is picked up by a later batch.

        Returns:
            True if the batch caused a successful reload.

        """
        kinds = {kind for kind, path in raw_changes if self.is_relevant(path)}
        if not kinds:
            return False

        if kinds == {Change.deleted}:
            print(
                f"  {self._path.name} removed — waiting for it to reappear",
                file=sys.stderr,
            )
            return False

        return self.reload() is not None

    def reload(self) -> ContentSnapshot | None:
        """Re-read the file, store it, then publish a change signal.

        Returns:
            The new snapshot, or None if the read failed (the previous
            snapshot is kept and nothing is published).

        """
        t0 = time.perf_counter()
        try:
            text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"  Read error: {self._path.name}: {exc}", file=sys.stderr)
            if self._collector is not None:
                self._collector.record_reload_failed(str(self._path), exc)
            return None
        read_ms = (time.perf_counter() - t0) * 1000

        snapshot = self._store.write(text)
        notified = self._bus.publish()

        if self._collector is not None:
            self._collector.record_reload(
                str(self._path),
                revision=snapshot.revision,
                length=len(text),
                clients_notified=notified,
                read_ms=read_ms,
            )
        self._log_change(snapshot.revision, notified)
        return snapshot

    def _log_change(self, revision: int, client_count: int) -> None:
        """Log a reload to stderr."""
        clients = "client" if client_count == 1 else "clients"
        print(
            f"  {self._path.name} changed — revision {revision}, "
            f"{client_count} {clients} notified",
            file=sys.stderr,
        )

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and reload on relevant batches."""
        from watchfiles import watch

        name = self._path.name

        try:
            for raw_changes in watch(
                self._path.parent,
                watch_filter=lambda _change, path: Path(path).name == name,
                stop_event=self._stop_event,
                debounce=self._debounce_ms,
                step=self._step_ms,
                recursive=False,
            ):
                self.handle_changes(raw_changes)
        except OSError as exc:
            print(f"  Watcher stopped: {self._path.parent}: {exc}", file=sys.stderr)
