"""Tests for dotview.banner — startup banner output."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import patch

from dotview.banner import print_banner
from dotview.config import DotviewConfig
from dotview.content.store import ContentSnapshot


class TestPrintBanner:
    """Tests for the startup banner."""

    def _capture_banner(self, config: DotviewConfig, text: str = "a\nb\n", **kwargs: object) -> str:
        buf = io.StringIO()
        with patch.object(sys, "stderr", buf):
            print_banner(config, ContentSnapshot(text=text, revision=0), **kwargs)
        return buf.getvalue()

    def test_banner_contents(self, tmp_path: Path) -> None:
        config = DotviewConfig(dot_file=tmp_path / "g.dot", root=tmp_path, port=4321)
        output = self._capture_banner(config, load_ms=12.3)

        assert "dotview" in output
        assert "g.dot: 2 lines loaded" in output
        assert "12ms" in output
        assert "/dot-events" in output
        assert "http://127.0.0.1:4321/" in output
        assert str(tmp_path) in output

    def test_single_line_singular(self, tmp_path: Path) -> None:
        config = DotviewConfig(dot_file=tmp_path / "g.dot", root=tmp_path)
        assert "1 line loaded" in self._capture_banner(config, text="graph {}")

    def test_missing_asset_warning(self, tmp_path: Path) -> None:
        config = DotviewConfig(dot_file=tmp_path / "g.dot", root=tmp_path)
        assert "Viz.js not found" in self._capture_banner(config)

    def test_no_warning_when_asset_present(self, tmp_path: Path) -> None:
        asset = tmp_path / "viz.js"
        asset.write_text("")
        config = DotviewConfig(dot_file=tmp_path / "g.dot", root=tmp_path, asset_path=asset)
        assert "Viz.js not found" not in self._capture_banner(config)

    def test_extra_warnings(self, tmp_path: Path) -> None:
        asset = tmp_path / "viz.js"
        asset.write_text("")
        config = DotviewConfig(dot_file=tmp_path / "g.dot", root=tmp_path, asset_path=asset)
        output = self._capture_banner(config, warnings=["Port 80 needs root"])
        assert "Port 80 needs root" in output
