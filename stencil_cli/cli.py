"""Command-line interface for Stencil (``stencil`` command).

Usage examples::

    stencil new Profile --product profile
    stencil new Settings --product "My Feature" --out Sources/Settings
    stencil tokens
    stencil check Templates/___FILEBASENAME___Intent.swift --product profile
"""

from __future__ import annotations

import argparse
import getpass
import sys
from pathlib import Path

from stencil_cli import __version__
from stencil_cli.checker import run_check
from stencil_cli.config import StencilConfig, discover_config
from stencil_cli.errors import StencilError
from stencil_cli.template import (
    FILE_NAME_SKELETON,
    SKELETON,
    expand,
    find_tokens,
    output_file_name,
)
from stencil_cli.tokens import build_tokens

_PATH_SEPARATORS = ("/", "\\")

# ── Shared helpers ───────────────────────────────────────────────────────────


def _parse_token_pairs(pairs: list[str] | None) -> dict[str, str]:
    """Turn ``KEY=VALUE`` flags into a token mapping."""
    values: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise StencilError(f"Invalid --token {pair!r} (expected KEY=VALUE).")
        values[key] = value
    return values


def _login_name() -> str:
    """Fallback author for the header; empty when the OS cannot tell."""
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return ""


def _load_skeleton(path: str | None) -> tuple[str, str]:
    """Return ``(skeleton_text, file_name_skeleton)`` for *path* or the built-in."""
    if path is None:
        return SKELETON, FILE_NAME_SKELETON
    skeleton_path = Path(path)
    try:
        text = skeleton_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise StencilError(f"Cannot read skeleton {skeleton_path}: {exc}") from exc
    return text, skeleton_path.name


def _token_set(args: argparse.Namespace, config: StencilConfig, file_name: str) -> dict[str, str]:
    """Merge flags over ``.stencil.yml`` defaults into a full token set."""
    header = config.header
    if args.header_file:
        try:
            header = Path(args.header_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise StencilError(f"Cannot read header file {args.header_file}: {exc}") from exc

    extra = dict(config.tokens)
    extra.update(_parse_token_pairs(args.token))

    file_path = Path(file_name)
    try:
        return build_tokens(
            file_base_name=file_path.stem,
            product_name=args.product or args.name,
            file_header=header,
            project_name=args.project or config.project or "",
            full_user_name=args.author or config.author or _login_name(),
            organization_name=args.organization or config.organization or "",
            extension=file_path.suffix.lstrip("."),
            extra=extra,
        )
    except ValueError as exc:
        raise StencilError(str(exc)) from exc


# ── Subcommand handlers ─────────────────────────────────────────────────────


def _handle_new(args: argparse.Namespace) -> int:
    """Create a new file from the template."""
    if any(sep in args.name for sep in _PATH_SEPARATORS):
        print(f"ERROR: Name {args.name!r} must not contain a path separator.", file=sys.stderr)
        return 1

    try:
        config = discover_config()
        skeleton, name_skeleton = _load_skeleton(args.skeleton)
        file_name = output_file_name(args.name, name_skeleton)
    except StencilError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    target_dir = Path(args.out)
    target = target_dir / file_name

    if target.exists() and not args.force:
        print(f"ERROR: {target} already exists.", file=sys.stderr)
        return 1

    try:
        content = expand(skeleton, _token_set(args, config, file_name))
    except StencilError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        print(f"ERROR: Cannot write {target}: {exc}", file=sys.stderr)
        return 1
    print(f"Created {target}")
    return 0


def _handle_tokens(args: argparse.Namespace) -> int:
    """List the placeholders a skeleton references."""
    try:
        skeleton, _ = _load_skeleton(args.skeleton)
    except StencilError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    for name in find_tokens(skeleton):
        print(name)
    return 0


def _handle_check(args: argparse.Namespace) -> int:
    """Check skeleton file(s) against the token set."""
    try:
        config = discover_config()
        tokens = _token_set(args, config, output_file_name(args.name))
    except StencilError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    return run_check(args.paths, tokens)


# ── Argument parser ─────────────────────────────────────────────────────────


def _token_value_parser() -> argparse.ArgumentParser:
    """Flags shared by ``new`` and ``check`` that feed the token set."""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--product",
        default=None,
        help="Product name used for the Intent/Model type names (default: NAME)",
    )
    parent.add_argument("--project", default=None, help="Project name for the file header")
    parent.add_argument("--author", default=None, help="Author shown in the file header")
    parent.add_argument(
        "--organization",
        default=None,
        help="Organization for the copyright line in the file header",
    )
    parent.add_argument(
        "--header-file",
        default=None,
        help="Use the contents of this file as the header text",
    )
    parent.add_argument(
        "--token",
        action="append",
        metavar="KEY=VALUE",
        help="Extra token value; may be repeated",
    )
    return parent


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stencil",
        description=f"Stencil – MVI SwiftUI view template expander (v{__version__})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    token_values = _token_value_parser()

    # ── stencil new ──────────────────────────────────────────────────────
    new_parser = subparsers.add_parser(
        "new",
        parents=[token_values],
        help="Create a new view file from the template",
    )
    new_parser.add_argument("name", help='Name of the new view, e.g. "Profile"')
    new_parser.add_argument(
        "--out",
        default=".",
        help="Directory to create the file in (default: current directory)",
    )
    new_parser.add_argument(
        "--skeleton",
        default=None,
        help="Custom skeleton file; its file name is the output file-name template",
    )
    new_parser.add_argument(
        "--force",
        action="store_true",
        default=False,
        help="Overwrite the target file if it exists",
    )
    new_parser.set_defaults(func=_handle_new)

    # ── stencil tokens ───────────────────────────────────────────────────
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="List the placeholders a skeleton references",
    )
    tokens_parser.add_argument(
        "--skeleton",
        default=None,
        help="Skeleton file to inspect (default: built-in template)",
    )
    tokens_parser.set_defaults(func=_handle_tokens)

    # ── stencil check ────────────────────────────────────────────────────
    check_parser = subparsers.add_parser(
        "check",
        parents=[token_values],
        help="Check that every placeholder in skeleton file(s) resolves",
    )
    check_parser.add_argument("paths", nargs="+", help="Skeleton file(s) to check")
    check_parser.add_argument(
        "--name",
        default="Untitled",
        help='Sample view name used to build the token set (default: "Untitled")',
    )
    check_parser.set_defaults(func=_handle_check)

    return parser


# ── Entrypoint ───────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint (installed as ``stencil``)."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
