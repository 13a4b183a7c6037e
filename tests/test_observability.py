"""Tests for dotview.observability — event log and collector."""

import threading

from dotview.observability import (
    ClientConnected,
    ContentReloaded,
    EventLog,
    ReloadFailed,
    StackCollector,
    now_ns,
)


def _reloaded(revision: int = 1, read_ms: float = 0.1234) -> ContentReloaded:
    return ContentReloaded(
        path="/g.dot", revision=revision, length=10,
        clients_notified=0, read_ms=read_ms, timestamp_ns=now_ns(),
    )


def _failed(error: str = "OSError: gone") -> ReloadFailed:
    return ReloadFailed(path="/g.dot", error=error, timestamp_ns=now_ns())


class TestEventLog:
    """Tests for the event log store."""

    def test_append_and_len(self) -> None:
        log = EventLog()
        assert len(log) == 0
        log.append(_reloaded())
        assert len(log) == 1

    def test_max_events_enforced(self) -> None:
        log = EventLog(max_events=5)
        for i in range(10):
            log.append(_reloaded(revision=i))
        assert len(log) == 5
        assert log.stats()["last_reload"]["revision"] == 9

    def test_empty_stats(self) -> None:
        stats = EventLog().stats()
        assert stats["total"] == 0
        assert stats["by_type"] == {}
        assert stats["frames_sent"] == 0
        assert stats["last_reload"] is None
        assert stats["last_failure"] is None
        assert stats["stale"] is False

    def test_stats_counts_by_type(self) -> None:
        log = EventLog(max_events=50)
        log.append(_reloaded())
        log.append(_reloaded())
        log.append(ClientConnected(client_id="c1", timestamp_ns=now_ns()))
        stats = log.stats()
        assert stats["total"] == 3
        assert stats["max_events"] == 50
        assert stats["by_type"] == {"ContentReloaded": 2, "ClientConnected": 1}

    def test_last_reload_is_newest(self) -> None:
        log = EventLog()
        log.append(_reloaded(revision=1))
        log.append(_reloaded(revision=2, read_ms=1.23456))
        assert log.stats()["last_reload"] == {
            "revision": 2, "length": 10, "clients_notified": 0, "read_ms": 1.23,
        }

    def test_failure_after_reload_is_stale(self) -> None:
        log = EventLog()
        log.append(_reloaded())
        log.append(_failed("PermissionError: denied"))
        stats = log.stats()
        assert stats["stale"] is True
        assert stats["last_failure"] == {"error": "PermissionError: denied"}

    def test_reload_after_failure_recovers(self) -> None:
        log = EventLog()
        log.append(_failed())
        log.append(_reloaded(revision=2))
        stats = log.stats()
        assert stats["stale"] is False
        assert stats["last_failure"] == {"error": "OSError: gone"}

    def test_concurrent_appends(self) -> None:
        log = EventLog(max_events=10_000)

        def worker() -> None:
            for _ in range(500):
                log.append(_reloaded())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(log) == 2000


class TestStackCollector:
    """Tests for the collector's record_* helpers."""

    def test_default_log(self) -> None:
        assert isinstance(StackCollector().log, EventLog)

    def test_record_reload(self) -> None:
        collector = StackCollector()
        collector.record_reload("/g.dot", revision=3, length=42, clients_notified=2)
        last = collector.log.stats()["last_reload"]
        assert last["revision"] == 3
        assert last["length"] == 42
        assert last["clients_notified"] == 2

    def test_record_reload_failed(self) -> None:
        collector = StackCollector()
        collector.record_reload_failed("/g.dot", FileNotFoundError("gone"))
        assert collector.log.stats()["last_failure"] == {"error": "FileNotFoundError: gone"}

    def test_record_connect_disconnect(self) -> None:
        collector = StackCollector()
        collector.record_connect("c1")
        collector.record_disconnect("c1", events_sent=4)
        stats = collector.log.stats()
        assert stats["by_type"] == {"ClientConnected": 1, "ClientDisconnected": 1}
        assert stats["frames_sent"] == 4
