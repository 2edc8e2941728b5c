"""Per-project defaults from ``.stencil.yml``.

Example::

    project: Acme
    author: Jane Appleseed
    organization: Acme Inc.
    tokens:
      PACKAGENAME: AcmeKit
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from stencil_cli.errors import ConfigError

CONFIG_FILENAME = ".stencil.yml"

_STRING_KEYS = ("project", "author", "organization", "header")
_KNOWN_KEYS = frozenset({*_STRING_KEYS, "tokens"})


@dataclass
class StencilConfig:
    """Values applied when the matching command-line flag is not given."""

    project: str | None = None
    author: str | None = None
    organization: str | None = None
    header: str | None = None
    tokens: dict[str, str] = field(default_factory=dict)
    path: Path | None = None


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) to find ``.stencil.yml``."""
    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        candidate = parent / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> StencilConfig:
    """Parse *path* into a ``StencilConfig``; raise ``ConfigError`` if unusable."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(path, f"Cannot read file: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(path, f"Invalid YAML: {exc}") from exc

    if data is None:
        return StencilConfig(path=path)
    if not isinstance(data, dict):
        raise ConfigError(path, "Configuration must be a YAML mapping.")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(path, f"Unknown configuration key(s): {', '.join(unknown)}")

    config = StencilConfig(path=path)
    for key in _STRING_KEYS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(path, f"'{key}' must be a string.")
        setattr(config, key, value)

    tokens = data.get("tokens") or {}
    if not isinstance(tokens, dict):
        raise ConfigError(path, "'tokens' must be a mapping of token name to string.")
    for name, value in tokens.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise ConfigError(path, f"Token {name!r} must map a name to a string value.")
        config.tokens[name] = value

    return config


def discover_config(start: Path | None = None) -> StencilConfig:
    """Load the nearest ``.stencil.yml``, or return empty defaults."""
    path = find_config(start)
    if path is None:
        return StencilConfig()
    return load_config(path)
