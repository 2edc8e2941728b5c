"""Stencil CLI – new-file template expander.

Provides the ``stencil`` CLI plus helpers to expand the MVI SwiftUI view
template (``___FILEBASENAME___View.swift``) by token substitution.

The importable package is ``stencil_cli`` (underscore); the PyPI
distribution name is ``stencil-cli``.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("stencil-cli")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
