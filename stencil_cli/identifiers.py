"""Identifier-safe forms of token values.

``as_identifier`` backs every ``…ASIDENTIFIER`` and ``…:identifier``
token; ``as_rfc1034_identifier`` backs ``…:rfc1034identifier`` (bundle
identifier segments).
"""

from __future__ import annotations

import re

_INVALID_IDENTIFIER_CHARS_RE = re.compile(r"[^A-Za-z0-9_]")
_INVALID_RFC1034_CHARS_RE = re.compile(r"[^A-Za-z0-9-]")


def as_identifier(raw: str) -> str:
    """Return *raw* with non-identifier characters stripped.

    Only ASCII letters, digits and ``_`` are kept, so non-ASCII letters
    are dropped even where the target language would accept them
    (``"Café"`` becomes ``"Caf"``).  A leading digit gets a ``_`` prefix.
    Returns ``""`` when nothing survives; callers decide whether that is
    an error.

    >>> as_identifier("My Feature")
    'MyFeature'
    >>> as_identifier("2fa screen")
    '_2fascreen'
    """
    cleaned = _INVALID_IDENTIFIER_CHARS_RE.sub("", raw)
    if cleaned[:1].isdigit():
        cleaned = f"_{cleaned}"
    return cleaned


def as_rfc1034_identifier(raw: str) -> str:
    """Return *raw* with every character outside ``[A-Za-z0-9-]`` replaced by ``-``."""
    return _INVALID_RFC1034_CHARS_RE.sub("-", raw)
