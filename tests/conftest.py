"""Shared test fixtures for dotview."""

from __future__ import annotations

from pathlib import Path

import pytest

from dotview.config import DotviewConfig
from dotview.content.store import ContentStore
from dotview.content.watcher import ChangeWatcher
from dotview.observability import EventLog, StackCollector
from dotview.reactive.bus import NotificationBus

INITIAL_DOT = "digraph G { a -> b; }"
UPDATED_DOT = "digraph G { a -> b; c; }"


@pytest.fixture
def dot_file(tmp_path: Path) -> Path:
    """A DOT file inside its own watched directory."""
    graphs = tmp_path / "graphs"
    graphs.mkdir()
    path = graphs / "graph.dot"
    path.write_text(INITIAL_DOT, encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path: Path, dot_file: Path) -> DotviewConfig:
    """A DotviewConfig rooted at the temp directory, pointing at dot_file."""
    return DotviewConfig(dot_file=dot_file, root=tmp_path, debounce_ms=50, step_ms=20)


@pytest.fixture
def store() -> ContentStore:
    return ContentStore(INITIAL_DOT)


@pytest.fixture
def bus() -> NotificationBus:
    bus = NotificationBus()
    yield bus
    bus.close()


@pytest.fixture
def collector() -> StackCollector:
    return StackCollector(EventLog())


@pytest.fixture
def watcher(
    dot_file: Path,
    store: ContentStore,
    bus: NotificationBus,
    collector: StackCollector,
) -> ChangeWatcher:
    """A ChangeWatcher wired to the fixtures but not started."""
    watcher = ChangeWatcher(
        dot_file, store, bus, collector=collector, debounce_ms=50, step_ms=20,
    )
    yield watcher
    watcher.stop()
