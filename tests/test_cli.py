"""Integration tests for the ``stencil`` command."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from stencil_cli.cli import main


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ── stencil new ──────────────────────────────────────────────────────────────


class TestNewCommand:
    def test_creates_view(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = _run(["new", "Profile", "--product", "profile", "--author", "Jane"])
        assert code == 0

        target = workdir / "ProfileView.swift"
        assert target.exists()
        content = target.read_text(encoding="utf-8")
        assert content.startswith("//\n//  ProfileView.swift\n")
        assert "//  Created by Jane on " in content
        assert "struct ProfileView: IntentBindingType {" in content
        assert "Container<profileIntentType, profileModel.State>" in content
        assert "___" not in content
        assert f"Created {target.relative_to(workdir)}" in capsys.readouterr().out

    def test_product_defaults_to_name(self, workdir: Path) -> None:
        assert _run(["new", "Profile", "--author", "Jane"]) == 0
        content = (workdir / "ProfileView.swift").read_text(encoding="utf-8")
        assert "static func build(intent: ProfileIntent) -> UIViewController {" in content

    def test_product_with_space(self, workdir: Path) -> None:
        assert _run(["new", "Feature", "--product", "My Feature", "--author", "Jane"]) == 0
        content = (workdir / "FeatureView.swift").read_text(encoding="utf-8")
        assert "MyFeatureIntentType" in content
        assert "My Feature" not in content

    def test_leading_digit_name(self, workdir: Path) -> None:
        assert _run(["new", "2fa", "--product", "auth", "--author", "Jane"]) == 0
        content = (workdir / "2faView.swift").read_text(encoding="utf-8")
        assert "struct _2faView: IntentBindingType {" in content

    def test_out_directory(self, workdir: Path) -> None:
        code = _run(["new", "Profile", "--out", "Sources/Profile", "--author", "Jane"])
        assert code == 0
        assert (workdir / "Sources" / "Profile" / "ProfileView.swift").exists()

    def test_existing_file_fails(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        target = workdir / "ProfileView.swift"
        target.write_text("keep me", encoding="utf-8")

        assert _run(["new", "Profile", "--author", "Jane"]) == 1
        assert "already exists" in capsys.readouterr().err
        assert target.read_text(encoding="utf-8") == "keep me"

    def test_force_overwrites(self, workdir: Path) -> None:
        target = workdir / "ProfileView.swift"
        target.write_text("old", encoding="utf-8")

        assert _run(["new", "Profile", "--author", "Jane", "--force"]) == 0
        assert "struct ProfileView" in target.read_text(encoding="utf-8")

    def test_empty_identifier_writes_nothing(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(["new", "Profile", "--product", "!!!", "--author", "Jane"]) == 1
        assert "ERROR: Cannot derive an identifier from '!!!'" in capsys.readouterr().err
        assert not (workdir / "ProfileView.swift").exists()

    def test_header_file(self, workdir: Path) -> None:
        (workdir / "HEADER.txt").write_text(" Licensed under MIT.\n", encoding="utf-8")
        code = _run(["new", "Profile", "--author", "Jane", "--header-file", "HEADER.txt"])
        assert code == 0
        content = (workdir / "ProfileView.swift").read_text(encoding="utf-8")
        assert content.startswith("// Licensed under MIT.\n\nimport Foundation\n")

    def test_missing_header_file(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["new", "Profile", "--author", "Jane", "--header-file", "nope.txt"]) == 1
        assert "Cannot read header file" in capsys.readouterr().err

    def test_out_is_a_file(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / "afile").write_text("", encoding="utf-8")
        assert _run(["new", "Profile", "--author", "Jane", "--out", "afile"]) == 1
        assert "ERROR: Cannot write afile" in capsys.readouterr().err

    @pytest.mark.parametrize("name", ["../Profile", "Sub/Profile", "Sub\\Profile"])
    def test_name_with_path_separator(
        self, workdir: Path, name: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (workdir / "out").mkdir()
        assert _run(["new", name, "--author", "Jane", "--out", "out"]) == 1
        assert "must not contain a path separator" in capsys.readouterr().err
        assert not list(workdir.rglob("*.swift"))


class TestNewWithCustomSkeleton:
    def test_missing_token_writes_nothing(
        self, workdir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        skeleton = workdir / "___FILEBASENAME___Intent.swift"
        skeleton.write_text("final class ___FILEBASENAME___: ___UNKNOWN___ {}\n", encoding="utf-8")

        code = _run(["new", "Profile", "--skeleton", str(skeleton), "--author", "Jane"])
        assert code == 1
        assert "ERROR: Unresolved template token: ___UNKNOWN___" in capsys.readouterr().err
        assert not (workdir / "ProfileIntent.swift").exists()

    def test_token_flag(self, workdir: Path) -> None:
        skeleton = workdir / "___FILEBASENAME___Intent.swift"
        skeleton.write_text("final class ___FILEBASENAME___: ___BASE___ {}\n", encoding="utf-8")

        code = _run(
            [
                "new",
                "Profile",
                "--skeleton",
                str(skeleton),
                "--author",
                "Jane",
                "--token",
                "BASE=ObservableObject",
            ]
        )
        assert code == 0
        content = (workdir / "ProfileIntent.swift").read_text(encoding="utf-8")
        assert content == "final class ProfileIntent: ObservableObject {}\n"

    def test_bad_token_flag(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["new", "Profile", "--author", "Jane", "--token", "NOVALUE"]) == 1
        assert "expected KEY=VALUE" in capsys.readouterr().err


class TestNewWithConfig:
    def test_config_defaults(self, workdir: Path) -> None:
        (workdir / ".stencil.yml").write_text(
            textwrap.dedent("""\
                project: Acme
                author: Jane Appleseed
                organization: Acme Inc.
            """),
            encoding="utf-8",
        )
        assert _run(["new", "Profile"]) == 0
        content = (workdir / "ProfileView.swift").read_text(encoding="utf-8")
        assert "//  Acme\n" in content
        assert "//  Created by Jane Appleseed on " in content
        assert "All rights reserved." in content

    def test_flags_override_config(self, workdir: Path) -> None:
        (workdir / ".stencil.yml").write_text("project: Acme\n", encoding="utf-8")
        assert _run(["new", "Profile", "--project", "Other", "--author", "Jane"]) == 0
        content = (workdir / "ProfileView.swift").read_text(encoding="utf-8")
        assert "//  Other\n" in content

    def test_invalid_config(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (workdir / ".stencil.yml").write_text("projekt: Acme\n", encoding="utf-8")
        assert _run(["new", "Profile", "--author", "Jane"]) == 1
        assert "Unknown configuration key(s): projekt" in capsys.readouterr().err
        assert not (workdir / "ProfileView.swift").exists()


# ── stencil tokens / check / --version ───────────────────────────────────────


class TestTokensCommand:
    def test_builtin(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["tokens"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "FILEHEADER",
            "FILEBASENAMEASIDENTIFIER",
            "VARIABLE_productName:identifier",
        ]

    def test_missing_skeleton(self, workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["tokens", "--skeleton", "nope.swift"]) == 1
        assert "Cannot read skeleton" in capsys.readouterr().err


class TestCheckCommand:
    def test_ok(self, workdir: Path) -> None:
        skeleton = workdir / "View.swift"
        skeleton.write_text("struct ___FILEBASENAMEASIDENTIFIER___ {}\n", encoding="utf-8")
        assert _run(["check", str(skeleton), "--author", "Jane"]) == 0

    def test_unresolved(self, workdir: Path) -> None:
        skeleton = workdir / "View.swift"
        skeleton.write_text("___UNKNOWN___\n", encoding="utf-8")
        assert _run(["check", str(skeleton), "--author", "Jane"]) == 3


class TestVersion:
    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(["--version"]) == 0
        assert capsys.readouterr().out.startswith("stencil ")
