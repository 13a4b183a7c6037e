"""HTTP surface — rendering page, Viz.js asset, SSE push endpoint."""

from dotview.server.page import embed_source, extract_source, render_page
from dotview.server.router import (
    ASSET_ENDPOINT,
    PAGE_ENDPOINT,
    SSE_ENDPOINT,
    STATS_ENDPOINT,
    PreviewRouter,
)

__all__ = [
    "ASSET_ENDPOINT",
    "PAGE_ENDPOINT",
    "SSE_ENDPOINT",
    "STATS_ENDPOINT",
    "PreviewRouter",
    "embed_source",
    "extract_source",
    "render_page",
]
