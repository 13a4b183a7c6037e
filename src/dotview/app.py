"""Dotview application — wires the store, watcher, bus and Chirp app together.

The two public functions (preview, display) are the primary entry points.
"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING

from dotview._errors import TargetNotFoundError, TargetReadError
from dotview.config import DotviewConfig
from dotview.config_loader import load_config

if TYPE_CHECKING:
    from chirp import App
    from pounce.server import Server

    from dotview.content.store import ContentStore
    from dotview.content.watcher import ChangeWatcher
    from dotview.observability.collector import StackCollector
    from dotview.reactive.broadcaster import Broadcaster
    from dotview.reactive.bus import NotificationBus


@dataclass(slots=True)
class PreviewSession:
    """Everything owned by one running preview.

    The store and bus are created here and handed by reference to the
    watcher and the router; nothing lives at module level.

    """

    config: DotviewConfig
    store: ContentStore
    bus: NotificationBus
    broadcaster: Broadcaster
    watcher: ChangeWatcher
    collector: StackCollector
    app: App


def _read_target(config: DotviewConfig) -> str:
    """Read the DOT file at startup.

    Raises:
        TargetNotFoundError: If the file does not exist.
        TargetReadError: If the file cannot be read as UTF-8 text.

    """
    if not config.dot_file.is_file():
        raise TargetNotFoundError(config.dot_file)
    try:
        return config.dot_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TargetReadError(config.dot_file, exc) from exc


def _create_chirp_app(config: DotviewConfig, *, debug: bool = False) -> App:
    """Create a Chirp App for the preview server."""
    from chirp import App, AppConfig

    app_config = AppConfig(
        debug=debug,
        host=config.host,
        port=config.port,
    )
    return App(config=app_config)


def _teardown(session: PreviewSession) -> None:
    """Stop the watcher and release every parked SSE wait.  Idempotent."""
    session.watcher.stop()
    session.bus.close()
    session.broadcaster.close()


def _wire_lifecycle(app: App, session: PreviewSession) -> None:
    """Start the watcher with the server and tear everything down on shutdown.

    Closing the bus wakes every worker thread parked in ``NotificationBus.wait``
    so open SSE streams end together with the server.

    """

    @app.on_startup
    async def _start_watcher() -> None:
        session.watcher.start()

    @app.on_shutdown
    async def _stop_watcher() -> None:
        _teardown(session)


def create_session(config: DotviewConfig, *, debug: bool = False) -> PreviewSession:
    """Build a fully wired, not yet running preview for *config*.

    Raises:
        TargetNotFoundError: If the DOT file does not exist.
        TargetReadError: If the DOT file cannot be read.

    """
    from dotview.content.store import ContentStore
    from dotview.content.watcher import ChangeWatcher
    from dotview.observability import EventLog, StackCollector
    from dotview.reactive.broadcaster import Broadcaster
    from dotview.reactive.bus import NotificationBus
    from dotview.server.router import PreviewRouter

    store = ContentStore(_read_target(config))
    bus = NotificationBus()
    collector = StackCollector(EventLog())
    broadcaster = Broadcaster(bus, collector=collector)
    watcher = ChangeWatcher(
        config.dot_file,
        store,
        bus,
        collector=collector,
        debounce_ms=config.debounce_ms,
        step_ms=config.step_ms,
    )

    app = _create_chirp_app(config, debug=debug)
    router = PreviewRouter(app, store, config)
    router.register_page()
    router.register_asset()
    router.register_sse_endpoint(broadcaster)
    router.register_stats_endpoint(broadcaster, collector)

    session = PreviewSession(
        config=config,
        store=store,
        bus=bus,
        broadcaster=broadcaster,
        watcher=watcher,
        collector=collector,
        app=app,
    )
    _wire_lifecycle(app, session)
    return session


def _create_server(session: PreviewSession) -> Server:
    """Create the Pounce server for *session*.

    Always a single worker: the store, bus and watcher live in this process,
    and a forked worker would keep serving its own copy of the startup text.

    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    server_config = ServerConfig(
        host=session.config.host,
        port=session.config.port,
        workers=1,
    )
    return Server(server_config, session.app)


def _announce(server: Server, session: PreviewSession, *, load_ms: float) -> None:
    """Print the bound port and the banner.

    Runs as a startup hook: Pounce binds the listener before lifespan
    startup and accepts connections only after it, so the port printed here
    is the one being served.

    """
    from dotview.banner import print_banner

    if server.bound_addr is not None:
        session.config = replace(session.config, port=server.bound_addr[1])

    print(f"Server started on port {session.config.port}", flush=True)
    print_banner(session.config, session.store.read(), load_ms=load_ms)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def display(dot_file: str | Path, root: str | Path = ".") -> None:
    """Print the DOT file to stdout and return.  No server is started.

    Raises:
        TargetNotFoundError: If the file does not exist.
        TargetReadError: If the file cannot be read.

    """
    config = DotviewConfig(dot_file=Path(dot_file), root=Path(root))
    text = _read_target(config)
    print(text, end="" if text.endswith("\n") else "\n")


def preview(dot_file: str | Path | None = None, root: str | Path = ".", **kwargs: object) -> None:
    """Serve a live-updating preview of a DOT file.

    Reads the file, then runs a single-worker Pounce server on an
    OS-chosen port unless ``port`` is given.  The watcher starts with the
    server, and the bound port is printed to stdout before the first
    connection is accepted.

    Args:
        dot_file: Path to the DOT file (defaults to ``docs/sample.dot``).
        root: Working directory for relative paths and config files.
        **kwargs: Override DotviewConfig fields.

    Raises:
        TargetNotFoundError: If the DOT file does not exist.
        TargetReadError: If the DOT file cannot be read.

    """
    config = load_config(Path(root), dot_file=dot_file, **kwargs)
    t0 = time.perf_counter()

    # Reads the file first: a missing target fails before any socket is opened.
    session = create_session(config)
    server = _create_server(session)
    load_ms = (time.perf_counter() - t0) * 1000

    @session.app.on_startup
    async def _report_port() -> None:
        _announce(server, session, load_ms=load_ms)

    session.app.freeze()

    try:
        server.run()
    finally:
        _teardown(session)
        print("  Preview stopped", file=sys.stderr)
