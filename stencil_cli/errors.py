"""Exceptions raised while resolving tokens and expanding templates."""

from __future__ import annotations

from pathlib import Path


class StencilError(Exception):
    """Base class for every error the CLI reports to the user."""


class MissingTokenError(StencilError):
    """A placeholder in the skeleton has no value in the token set."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unresolved template token: ___{token}___")


class EmptyIdentifierError(StencilError):
    """Sanitizing a value left nothing usable as an identifier."""

    def __init__(self, raw: str, token: str | None = None) -> None:
        self.raw = raw
        self.token = token
        where = f" for token ___{token}___" if token else ""
        super().__init__(f"Cannot derive an identifier from {raw!r}{where}.")


class ConfigError(StencilError):
    """The ``.stencil.yml`` defaults file could not be used."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")
