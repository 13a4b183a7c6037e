"""Load DotviewConfig from dotview.yaml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

from pathlib import Path

from dotview._errors import ConfigError
from dotview.config import DotviewConfig

_KNOWN_KEYS = frozenset({
    "dot_file", "host", "port", "asset_path", "title", "debounce_ms", "step_ms",
})

_PATH_KEYS = ("dot_file", "asset_path")


def load_config(root: Path, **overrides: object) -> DotviewConfig:
    """Load DotviewConfig from root, optionally merging dotview.yaml.

    Looks for dotview.yaml, dotview.yml, or dotview.toml in root. If found,
    loads and merges with overrides. Overrides whose value is None are
    ignored so that unset CLI flags do not mask file values.

    Raises:
        ConfigError: If an override names an unknown setting.

    """
    unknown = set(overrides) - _KNOWN_KEYS
    if unknown:
        msg = f"Unknown dotview setting(s): {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    file_config = _read_dotview_config(root)
    merged = {
        **file_config,
        **{k: v for k, v in overrides.items() if v is not None},
    }
    for key in _PATH_KEYS:
        if key in merged and not isinstance(merged[key], Path):
            merged[key] = Path(str(merged[key]))
    try:
        return DotviewConfig(root=root, **merged)  # type: ignore[arg-type]
    except TypeError as exc:
        msg = f"Invalid dotview configuration: {exc}"
        raise ConfigError(msg) from exc


def _read_dotview_config(root: Path) -> dict[str, object]:
    """Read dotview config from yaml/toml if present. Returns empty dict otherwise."""
    for name in ("dotview.yaml", "dotview.yml"):
        path = root / name
        if path.is_file():
            return _parse_yaml(path)
    toml_path = root / "dotview.toml"
    if toml_path.is_file():
        return _parse_toml(toml_path)
    return {}


def _parse_yaml(path: Path) -> dict[str, object]:
    """Parse YAML config. Returns empty dict on error."""
    import yaml

    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError):
        return {}
    if not isinstance(data, dict):
        return {}
    return _flatten_dotview_section(data)


def _parse_toml(path: Path) -> dict[str, object]:
    """Parse TOML config. Returns empty dict on error."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text())
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return _flatten_dotview_section(data)


def _flatten_dotview_section(data: dict[str, object]) -> dict[str, object]:
    """Extract dotview.* keys into top-level config."""
    result: dict[str, object] = {}
    section = data.get("dotview")
    if isinstance(section, dict):
        for k, v in section.items():
            if k in _KNOWN_KEYS:
                result[k] = v
    for k, v in data.items():
        if k != "dotview" and k in _KNOWN_KEYS:
            result[k] = v
    return result
