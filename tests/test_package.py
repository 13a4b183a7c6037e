"""Tests for dotview package exports and metadata."""

import pytest

import dotview


class TestPackageMetadata:
    """Package-level exports and metadata."""

    def test_version_string(self) -> None:
        assert isinstance(dotview.__version__, str)
        assert "0.1.0" in dotview.__version__

    def test_free_threading_declaration(self) -> None:
        assert dotview._Py_mod_gil == 0

    def test_all_exports_resolvable(self) -> None:
        for name in dotview.__all__:
            getattr(dotview, name)

    def test_invalid_attribute_raises(self) -> None:
        with pytest.raises(AttributeError, match="no attribute"):
            dotview.nonexistent_thing  # type: ignore[attr-defined]  # noqa: B018
