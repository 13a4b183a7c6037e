"""Preview router — registers dotview's HTTP surface on a Chirp app.

Routes:
    ``/``                 rendering page with the current DOT source embedded
    ``/viz-global.js``    the Viz.js rendering script (404 when missing)
    ``/dot-events``       SSE stream of ``dotChanged`` events
    ``/__dotview/stats``  JSON summary of the store, bus and event log
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Any

from dotview.reactive.broadcaster import CHANGE_EVENT
from dotview.server.page import render_page

if TYPE_CHECKING:
    from chirp import App, Request

    from dotview.config import DotviewConfig
    from dotview.content.store import ContentStore
    from dotview.observability.collector import StackCollector
    from dotview.reactive.broadcaster import Broadcaster


PAGE_ENDPOINT = "/"
ASSET_ENDPOINT = "/viz-global.js"
SSE_ENDPOINT = "/dot-events"
STATS_ENDPOINT = "/__dotview/stats"


class PreviewRouter:
    """Serves the current ContentStore snapshot and its live-update channel.

    Args:
        app: Chirp App to register routes on (must not yet be frozen).
        store: ContentStore read on every page request.
        config: Resolved DotviewConfig (asset location, page title).

    """

    def __init__(self, app: App, store: ContentStore, config: DotviewConfig) -> None:
        self._app = app
        self._store = store
        self._config = config

    def register_page(self) -> None:
        """Register ``GET /``.

        Each request reads one snapshot from the store; the response is a
        pure function of that snapshot, so repeated requests without an
        intervening change return identical bodies.

        """
        store = self._store
        title = self._config.title

        async def page_handler(request: Request) -> Any:
            from chirp import Response

            snapshot = store.read()
            body = render_page(
                snapshot.text,
                title=title,
                asset_url=ASSET_ENDPOINT,
                events_url=SSE_ENDPOINT,
                event_name=CHANGE_EVENT,
            )
            return Response(
                body=body,
                status=200,
                content_type="text/html; charset=utf-8",
            )

        page_handler.__name__ = "dotview_page"
        page_handler.__qualname__ = "PreviewRouter.dotview_page"

        self._app.route(PAGE_ENDPOINT, name="dotview:page")(page_handler)

    def register_asset(self) -> None:
        """Register ``GET /viz-global.js``.

        The file is read per request so it can be added after startup.  A
        missing file answers 404 and leaves the server running.

        """
        asset_path = self._config.asset_path

        async def asset_handler(request: Request) -> Any:
            from chirp import Response

            try:
                body = await asyncio.to_thread(asset_path.read_bytes)
            except OSError:
                return Response(
                    body=f"Not found: {asset_path.name}",
                    status=404,
                    content_type="text/plain; charset=utf-8",
                )
            return Response(
                body=body,
                status=200,
                content_type="text/javascript; charset=utf-8",
            )

        asset_handler.__name__ = "dotview_asset"
        asset_handler.__qualname__ = "PreviewRouter.dotview_asset"

        self._app.route(ASSET_ENDPOINT, name="dotview:asset")(asset_handler)

    def register_sse_endpoint(self, broadcaster: Broadcaster) -> None:
        """Register the ``/dot-events`` SSE endpoint.

        The route returns a Chirp ``EventStream`` that writes one
        ``dotChanged`` event per bus wake-up.  The subscription is taken when
        streaming starts and released when the client goes away.

        Args:
            broadcaster: Broadcaster bridging the NotificationBus.

        """
        from chirp import EventStream

        async def sse_handler(request: Request) -> Any:
            async def generate():  # type: ignore[return]
                stream = broadcaster.client_generator(broadcaster.connect())
                try:
                    async for event in stream:
                        yield event
                finally:
                    await stream.aclose()

            return EventStream(generate())

        sse_handler.__name__ = "dotview_sse"
        sse_handler.__qualname__ = "PreviewRouter.dotview_sse"

        self._app.route(SSE_ENDPOINT, name="dotview:events")(sse_handler)

    def register_stats_endpoint(
        self, broadcaster: Broadcaster, collector: StackCollector,
    ) -> None:
        """Register the ``/__dotview/stats`` JSON endpoint."""
        store = self._store

        async def stats_handler(request: Request) -> Any:
            from chirp import Response

            snapshot = store.read()
            payload = json.dumps(
                {
                    "revision": snapshot.revision,
                    "length": len(snapshot.text),
                    "subscribers": broadcaster.subscriber_count,
                    "event_log": collector.log.stats(),
                },
                indent=2,
            )
            return Response(
                body=payload,
                status=200,
                content_type="application/json",
            )

        stats_handler.__name__ = "dotview_stats"
        stats_handler.__qualname__ = "PreviewRouter.dotview_stats"

        self._app.route(STATS_ENDPOINT, name="dotview:stats")(stats_handler)
