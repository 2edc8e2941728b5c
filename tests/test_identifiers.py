"""Tests for identifier sanitization."""

from __future__ import annotations

import pytest

from stencil_cli.identifiers import as_identifier, as_rfc1034_identifier

SAMPLES = ["My Feature", "profile", "2fa screen", "hello-world!", "Café", "__init__", "!!!", ""]


class TestAsIdentifier:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("My Feature", "MyFeature"),
            ("profile", "profile"),
            ("ProfileView", "ProfileView"),
            ("2fa screen", "_2fascreen"),
            ("hello-world!", "helloworld"),
            ("Café", "Caf"),
            ("snake_case", "snake_case"),
            ("!!!", ""),
        ],
    )
    def test_sanitize(self, raw: str, expected: str) -> None:
        assert as_identifier(raw) == expected

    @pytest.mark.parametrize("raw", SAMPLES)
    def test_idempotent(self, raw: str) -> None:
        once = as_identifier(raw)
        assert as_identifier(once) == once

    @pytest.mark.parametrize("raw", ["a", " 9 ", "-x-", "é1"])
    def test_total_when_a_legal_char_exists(self, raw: str) -> None:
        result = as_identifier(raw)
        assert result
        assert result.isidentifier()


class TestAsRfc1034Identifier:
    def test_replaces_invalid_chars(self) -> None:
        assert as_rfc1034_identifier("My App_2") == "My-App-2"

    def test_keeps_hyphens(self) -> None:
        assert as_rfc1034_identifier("com-acme") == "com-acme"
