from __future__ import annotations

import json
from pathlib import Path

import pytest

from repokit.args import USAGE
from repokit.cli import main

NODE_LIB_FILES = {
    ".gitignore",
    "README.md",
    "package.json",
    "tsconfig.json",
    "eslint.config.js",
    "src/index.ts",
}


def _files(root: Path) -> set[str]:
    return {path.relative_to(root).as_posix() for path in root.rglob("*") if path.is_file()}


def test_default_kind_creates_node_lib(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    exit_code = main(["widgets"], cwd=tmp_path, environ={})
    captured = capsys.readouterr()

    assert exit_code == 0
    assert _files(tmp_path / "packages" / "widgets") == NODE_LIB_FILES
    assert captured.out.splitlines() == [
        "Created packages/widgets (node-lib).",
        "Next steps:",
        "1) Review generated metadata and exports",
        "2) pnpm install",
        "3) pnpm -C packages/widgets lint",
        "4) pnpm -C packages/widgets check-types",
        "5) pnpm -C packages/widgets build",
    ]
    assert captured.err == ""


def test_react_library_extends_react_base(tmp_path: Path):
    assert main(["ui", "--type", "react-library"], cwd=tmp_path, environ={}) == 0
    tsconfig = json.loads((tmp_path / "packages" / "ui" / "tsconfig.json").read_text(encoding="utf-8"))
    assert tsconfig["extends"] == "@repo/typescript-config/react-library.json"


def test_config_only_next_steps(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    exit_code = main(["commitlint-config", "--type=config-only"], cwd=tmp_path, environ={})
    out = capsys.readouterr().out

    assert exit_code == 0
    assert _files(tmp_path / "packages" / "commitlint-config") == {
        ".gitignore",
        "README.md",
        "package.json",
        "index.js",
    }
    assert "3) Customize packages/commitlint-config/index.js" in out
    assert "4) Update packages/commitlint-config/README.md" in out
    assert "5)" not in out


def test_invalid_name_exits_without_creating(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    exit_code = main(["bad_name"], cwd=tmp_path, environ={})
    captured = capsys.readouterr()

    assert exit_code == 1
    assert not (tmp_path / "packages").exists()
    assert 'Invalid package name "bad_name"' in captured.err
    assert USAGE in captured.err
    assert captured.out == ""


def test_second_run_reports_existing_target(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["widgets"], cwd=tmp_path, environ={}) == 0
    readme = tmp_path / "packages" / "widgets" / "README.md"
    original = readme.read_text(encoding="utf-8")
    capsys.readouterr()

    exit_code = main(["widgets", "--type", "config-only"], cwd=tmp_path, environ={})
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Target already exists: packages/widgets" in captured.err
    assert readme.read_text(encoding="utf-8") == original
    assert not (tmp_path / "packages" / "widgets" / "index.js").exists()


@pytest.mark.parametrize(
    "argv, message",
    [
        (["pkg", "--type"], "Missing value for --type."),
        ([], "Missing package name."),
        (["pkg", "--type", "rust-crate"], 'Invalid package type "rust-crate"'),
        (["pkg", "--force"], "Unknown option: --force"),
        (["pkg", "extra"], "Unexpected extra argument: extra"),
    ],
)
def test_usage_errors_exit_one(tmp_path: Path, capsys: pytest.CaptureFixture[str], argv, message):
    exit_code = main(argv, cwd=tmp_path, environ={})
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.startswith(message)
    assert USAGE in captured.err
    assert not (tmp_path / "packages").exists()


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help_prints_usage(tmp_path: Path, capsys: pytest.CaptureFixture[str], flag: str):
    exit_code = main(["widgets", flag], cwd=tmp_path, environ={})
    captured = capsys.readouterr()

    assert exit_code == 0
    assert captured.out.strip() == USAGE
    assert not (tmp_path / "packages").exists()


def test_environment_settings_are_applied(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    environ = {"REPOKIT_SCOPE": "acme", "REPOKIT_PACKAGES_DIR": "libs", "REPOKIT_PACKAGE_MANAGER": "yarn@4.1.0"}
    assert main(["widgets"], cwd=tmp_path, environ=environ) == 0
    out = capsys.readouterr().out

    manifest = json.loads((tmp_path / "libs" / "widgets" / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "@acme/widgets"
    assert "Created libs/widgets (node-lib)." in out
    assert "2) yarn install" in out


def test_invalid_environment_settings_exit_one(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    exit_code = main(["widgets"], cwd=tmp_path, environ={"REPOKIT_SCOPE": "Not Valid"})
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "REPOKIT_SCOPE" in captured.err
    assert not (tmp_path / "packages").exists()


def test_main_defaults_to_process_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.argv", ["scaffold-package", "from-argv"])
    assert main() == 0
    assert (tmp_path / "packages" / "from-argv" / "package.json").is_file()


def test_symlinked_target_is_reported_as_existing(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    outside = tmp_path / "outside" / "elsewhere"
    (tmp_path / "packages").mkdir()
    (tmp_path / "packages" / "widgets").symlink_to(outside, target_is_directory=True)

    exit_code = main(["widgets"], cwd=tmp_path, environ={})
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Target already exists: packages/widgets" in captured.err
    assert not (tmp_path / "outside").exists()


def test_empty_name_token_is_skipped_for_the_next_one(tmp_path: Path):
    assert main(["", "widgets"], cwd=tmp_path, environ={}) == 0
    assert (tmp_path / "packages" / "widgets" / "package.json").is_file()


def test_only_empty_name_token_is_missing_name(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main([""], cwd=tmp_path, environ={}) == 1
    assert capsys.readouterr().err.startswith("Missing package name.")
