"""Content layer — the current DOT snapshot and the watcher that refreshes it."""

from dotview.content.store import ContentSnapshot, ContentStore
from dotview.content.watcher import ChangeWatcher

__all__ = [
    "ChangeWatcher",
    "ContentSnapshot",
    "ContentStore",
]
