"""Token sets and token resolution.

Responsibilities
----------------
* Build the token set a new-file action supplies (file name, product
  name, header text and the usual date/author values).
* Resolve a placeholder name against a token set, deriving the
  identifier-safe variants (``…ASIDENTIFIER``, ``…:identifier``,
  ``…:rfc1034identifier``) from their raw source values on demand.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date

from stencil_cli.errors import EmptyIdentifierError, MissingTokenError
from stencil_cli.identifiers import as_identifier, as_rfc1034_identifier

# ── Constants ────────────────────────────────────────────────────────────────

PRODUCT_NAME_TOKEN = "VARIABLE_productName"

_AS_IDENTIFIER_SUFFIX = "ASIDENTIFIER"

_MODIFIERS: dict[str, Callable[[str], str]] = {
    "identifier": as_identifier,
    "c99extidentifier": as_identifier,
    "rfc1034identifier": as_rfc1034_identifier,
}


# ── Resolution ───────────────────────────────────────────────────────────────


def _sanitized(name: str, raw: str, sanitize: Callable[[str], str]) -> str:
    value = sanitize(raw)
    if not value:
        raise EmptyIdentifierError(raw, name)
    return value


def _derivation(name: str) -> tuple[str, Callable[[str], str]] | None:
    """Return ``(source_name, sanitizer)`` for identifier-position *name*."""
    if name.endswith(_AS_IDENTIFIER_SUFFIX) and len(name) > len(_AS_IDENTIFIER_SUFFIX):
        return name[: -len(_AS_IDENTIFIER_SUFFIX)], as_identifier

    base, sep, modifier = name.rpartition(":")
    if sep and modifier in _MODIFIERS:
        return base, _MODIFIERS[modifier]
    return None


def resolve_token(name: str, tokens: Mapping[str, str]) -> str:
    """Return the value for placeholder *name*.

    An explicit entry in *tokens* wins over derivation; otherwise
    ``XASIDENTIFIER`` and ``X:<modifier>`` are derived from ``X``.  Either
    way, identifier-position values are sanitized.  Raises
    ``MissingTokenError`` when nothing applies.
    """
    derivation = _derivation(name)

    if name in tokens:
        if derivation is None:
            return tokens[name]
        return _sanitized(name, tokens[name], derivation[1])

    if derivation is None:
        raise MissingTokenError(name)

    source, sanitize = derivation
    try:
        raw = resolve_token(source, tokens)
    except MissingTokenError:
        raise MissingTokenError(name) from None
    return _sanitized(name, raw, sanitize)


# ── Header text ──────────────────────────────────────────────────────────────


def comment_header(text: str) -> str:
    """Turn header *text* into the value of ``FILEHEADER``.

    The skeleton supplies the ``//`` of the first line; every following
    line gets its own ``//`` prefix.  Trailing whitespace is dropped.
    """
    first, *rest = text.split("\n")
    lines = [first.rstrip()] + [f"//{line}".rstrip() for line in rest]
    return "\n".join(lines)


def default_header_text(
    *,
    file_name: str,
    project_name: str,
    full_user_name: str,
    created: date,
    copyright_line: str = "",
) -> str:
    """Return the conventional header block (before comment prefixes)."""
    lines = [
        "",
        f"  {file_name}",
        f"  {project_name}",
        "",
        f"  Created by {full_user_name} on {created.month}/{created.day}/{created:%y}.",
    ]
    if copyright_line:
        lines.append(f"  {copyright_line}")
    lines.append("")
    return "\n".join(lines)


# ── Token set ────────────────────────────────────────────────────────────────


def build_tokens(
    *,
    file_base_name: str,
    product_name: str,
    file_header: str | None = None,
    project_name: str = "",
    full_user_name: str = "",
    organization_name: str = "",
    today: date | None = None,
    extension: str = "swift",
    extra: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the token set for creating ``<file_base_name>.<extension>``.

    Parameters
    ----------
    file_base_name : str
        Base name of the file being created, e.g. ``"ProfileView"``.
    product_name : str
        Value the user typed for the template's ``productName`` option.
    file_header : str | None
        Literal header text; defaults to the file/project/author block.
    extra : Mapping[str, str] | None
        Additional tokens; these override the computed ones.
    """
    if not file_base_name.strip():
        raise ValueError("file_base_name must not be blank")
    if not product_name.strip():
        raise ValueError("product_name must not be blank")

    created = today or date.today()
    file_name = f"{file_base_name}.{extension}" if extension else file_base_name
    copyright_line = (
        f"Copyright © {created.year} {organization_name}. All rights reserved."
        if organization_name
        else ""
    )

    if file_header is None:
        header = comment_header(
            default_header_text(
                file_name=file_name,
                project_name=project_name,
                full_user_name=full_user_name,
                created=created,
                copyright_line=copyright_line,
            )
        )
    else:
        header = comment_header(file_header.rstrip("\n"))

    tokens = {
        "FILEHEADER": header,
        "FILEBASENAME": file_base_name,
        "FILENAME": file_name,
        "FILEEXTENSION": extension,
        PRODUCT_NAME_TOKEN: product_name,
        "PRODUCTNAME": product_name,
        "PROJECTNAME": project_name,
        "FULLUSERNAME": full_user_name,
        "ORGANIZATIONNAME": organization_name,
        "DATE": f"{created.month}/{created.day}/{created:%y}",
        "YEAR": str(created.year),
    }
    if copyright_line:
        tokens["COPYRIGHT"] = copyright_line
    if extra:
        tokens.update(extra)
    return tokens
