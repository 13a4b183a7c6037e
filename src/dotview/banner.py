"""Startup banner — status output for the preview server.

Prints the watched file, snapshot size, URL and push endpoint to stderr.
Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotview.config import DotviewConfig
    from dotview.content.store import ContentSnapshot


# ---------------------------------------------------------------------------
# ANSI helpers — respect NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_BOLD}{_CYAN}{url}{_RESET}\033]8;;\033\\"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: DotviewConfig,
    snapshot: ContentSnapshot,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the dotview startup banner to stderr.

    Args:
        config: Resolved DotviewConfig (with the bound port).
        snapshot: The initial ContentSnapshot.
        load_ms: Time spent reading the file and wiring the app.
        warnings: Optional list of warning messages to display.

    """
    from dotview import __version__
    from dotview.server.router import SSE_ENDPOINT

    lines: list[str] = [
        "",
        f"  {_BOLD}dotview{_RESET} {_DIM}v{__version__}{_RESET}",
        f"  {_DIM}{'─' * 43}{_RESET}",
    ]

    line_count = len(snapshot.text.splitlines())
    lines_label = "line" if line_count == 1 else "lines"
    timing = f" {_DIM}in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines.append(
        f"  {_DIM}├─{_RESET} {config.dot_name}: "
        f"{line_count} {lines_label} loaded{timing}"
    )
    lines.append(f"  {_DIM}├─{_RESET} watching: {_DIM}{config.watch_dir}{_RESET}")
    lines.append(
        f"  {_DIM}└─{_RESET} {_GREEN}live{_RESET} "
        f"- SSE on {_DIM}{SSE_ENDPOINT}{_RESET}"
    )

    if not config.asset_path.is_file():
        warnings = [*(warnings or []), f"Viz.js not found at {config.asset_path}"]

    url = f"http://{config.host}:{config.port}/"
    lines.append("")
    lines.append(f"  {_clickable_url(url)}")

    if warnings:
        lines.append("")
        lines.extend(f"  {_YELLOW}!{_RESET} {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
