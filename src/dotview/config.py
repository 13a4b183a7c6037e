"""Dotview configuration.

DotviewConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DotviewConfig:
    """Configuration for a dotview session.

    Attributes:
        dot_file: The DOT file to preview. Resolved against ``root`` and made
              absolute on construction.
        root: Working directory used to resolve relative paths and to find
              ``dotview.yaml`` / ``dotview.toml``.
        host: Bind address for the preview server.
        port: Bind port for the preview server (0 = let the OS choose).
        asset_path: Location of the Viz.js rendering script served at
              ``/viz-global.js``.
        title: Page title of the rendering page.
        debounce_ms: watchfiles debounce window; events inside one window are
              grouped into a single batch.
        step_ms: watchfiles polling step while waiting for a batch.

    """

    dot_file: Path = field(default_factory=lambda: Path("docs/sample.dot"))
    root: Path = field(default_factory=Path.cwd)
    host: str = "127.0.0.1"
    port: int = 0
    asset_path: Path = field(default_factory=lambda: Path("static/js/viz-global.js"))
    title: str = "Graphviz DOT Viewer"
    debounce_ms: int = 100
    step_ms: int = 50

    def __post_init__(self) -> None:
        # watchfiles reports absolute paths, so every path we compare
        # against has to be absolute too.
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())
        if not self.dot_file.is_absolute():
            object.__setattr__(self, "dot_file", (self.root / self.dot_file).resolve())
        if not self.asset_path.is_absolute():
            object.__setattr__(self, "asset_path", self.root / self.asset_path)

    @property
    def watch_dir(self) -> Path:
        """Directory registered with the filesystem watcher."""
        return self.dot_file.parent

    @property
    def dot_name(self) -> str:
        """Base name used to filter directory events."""
        return self.dot_file.name
