"""Skeleton checking for ``stencil check``.

Reads a skeleton file, lists its placeholders, and reports every one the
given token set cannot resolve.  Provides structured, grouped error
output.
"""

from __future__ import annotations

import sys
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from stencil_cli.errors import EmptyIdentifierError, MissingTokenError
from stencil_cli.template import find_tokens
from stencil_cli.tokens import resolve_token

# ── Exit codes ───────────────────────────────────────────────────────────────

EXIT_OK = 0
EXIT_MISSING = 2
EXIT_INVALID = 3


# ── Data classes ─────────────────────────────────────────────────────────────


@dataclass
class ValidationError:
    """A single unresolvable placeholder."""

    file: str
    message: str
    category: str = "general"

    def __str__(self) -> str:
        return f"{self.file}: {self.message}"


@dataclass
class CheckResult:
    """Result of checking a single skeleton file."""

    path: str
    tokens: list[str] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0


# ── Checking ─────────────────────────────────────────────────────────────────


def check_text(skeleton: str, tokens: Mapping[str, str], path: str = "<skeleton>") -> CheckResult:
    """Check every placeholder in *skeleton* against *tokens*."""
    result = CheckResult(path=path, tokens=find_tokens(skeleton))
    for name in result.tokens:
        try:
            resolve_token(name, tokens)
        except MissingTokenError as exc:
            result.errors.append(ValidationError(path, str(exc), "missing"))
        except EmptyIdentifierError as exc:
            result.errors.append(ValidationError(path, str(exc), "identifier"))
    return result


def check_skeleton(filepath: str | Path, tokens: Mapping[str, str]) -> CheckResult:
    """Read and check a skeleton file.

    Unreadable files yield a single ``"read"`` error instead of raising.
    """
    filepath = Path(filepath)
    try:
        text = filepath.read_text(encoding="utf-8")
    except OSError as exc:
        result = CheckResult(path=str(filepath))
        result.errors.append(ValidationError(str(filepath), f"Cannot read file: {exc}", "read"))
        return result
    return check_text(text, tokens, str(filepath))


# ── Pretty error output ─────────────────────────────────────────────────────


def _print_errors(all_errors: list[ValidationError]) -> None:
    """Print errors grouped by file with structured formatting."""
    grouped: dict[str, list[ValidationError]] = defaultdict(list)
    for err in all_errors:
        grouped[err.file].append(err)

    print(
        f"\n✗ Check failed: {len(all_errors)} error(s) in {len(grouped)} file(s)\n",
        file=sys.stderr,
    )

    for filepath, errors in grouped.items():
        print(f"  ── {filepath} ──", file=sys.stderr)

        by_cat: dict[str, list[ValidationError]] = defaultdict(list)
        for e in errors:
            by_cat[e.category].append(e)

        for cat, errs in by_cat.items():
            label = cat.capitalize()
            for e in errs:
                print(f"    ✗ [{label}] {e.message}", file=sys.stderr)

        print(file=sys.stderr)


# ── Main check routine ──────────────────────────────────────────────────────


def run_check(paths: list[str | Path], tokens: Mapping[str, str]) -> int:
    """Execute the ``stencil check`` pipeline.

    Returns
    -------
    int
        Exit code: 0 = ok, 2 = skeleton missing or unreadable,
        3 = unresolved placeholders.
    """
    results = [check_skeleton(p, tokens) for p in paths]

    unreadable = [e for r in results for e in r.errors if e.category == "read"]
    if unreadable:
        _print_errors(unreadable)
        return EXIT_MISSING

    all_errors = [e for r in results for e in r.errors]
    if all_errors:
        _print_errors(all_errors)
        return EXIT_INVALID

    total = sum(len(r.tokens) for r in results)
    print(f"✓ {len(results)} skeleton(s) checked, {total} placeholder(s) resolved.")
    return EXIT_OK
