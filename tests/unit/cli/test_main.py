"""Unit tests for CLI command handling."""

from __future__ import annotations

import shutil
from pathlib import Path

from cli.main import main
from tests.fixture_paths import fixture_path


def test_cli_build_exports_catalog(tmp_path: Path, capsys) -> None:
    """CLI build should print counts and write the manifest."""
    output_dir = tmp_path / "catalog"
    args = [
        "--registry-root",
        str(fixture_path("atlas")),
        "build",
        "--output-dir",
        str(output_dir),
    ]

    exit_code = main(args)
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert output[0] == "4 feeds across 4 operators"
    assert (output_dir / "manifest.json").exists()


def test_cli_feed_lists_attached_operators(capsys) -> None:
    """Feed lookup prints operator ids with agency ids."""
    exit_code = main(["--registry-root", str(fixture_path("atlas")), "feed", "f-ucla~bruinbus"])
    output = capsys.readouterr().out.splitlines()

    assert exit_code == 0
    assert output == ["o-9q5c-bruinbus\tBB", "o-9q5-metro~losangeles\t42"]


def test_cli_operator_reports_unknown_id(capsys) -> None:
    """Unknown operator ids exit with status 1."""
    exit_code = main(["--registry-root", str(fixture_path("atlas")), "operator", "o-nope"])

    assert exit_code == 1
    assert "o-nope" in capsys.readouterr().err


def test_cli_build_reports_missing_source(tmp_path: Path, capsys) -> None:
    """Missing required directories become a one-line error and exit 1."""
    registry_root = tmp_path / "atlas"
    shutil.copytree(fixture_path("atlas"), registry_root)
    shutil.rmtree(registry_root / "operators" / "switzerland")

    exit_code = main(
        ["--registry-root", str(registry_root), "build", "--output-dir", str(tmp_path / "out")]
    )

    assert exit_code == 1
    assert "operators/switzerland" in capsys.readouterr().err


def test_cli_build_accepts_optional_source(tmp_path: Path, capsys) -> None:
    """Optional sources let the build continue without them."""
    registry_root = tmp_path / "atlas"
    shutil.copytree(fixture_path("atlas"), registry_root)
    shutil.rmtree(registry_root / "operators" / "switzerland")

    exit_code = main(
        [
            "--registry-root",
            str(registry_root),
            "build",
            "--output-dir",
            str(tmp_path / "out"),
            "--optional-source",
            "operators/switzerland",
        ]
    )

    assert exit_code == 0
    assert capsys.readouterr().out.startswith("4 feeds across 3 operators")
