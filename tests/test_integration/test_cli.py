"""End-to-end tests for the peergen CLI (init, sync, plan, config)."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest
from typer.testing import CliRunner

from peergen import __version__
from peergen.app import app

runner = CliRunner()


@pytest.fixture
def cli_env(isolated_config: Path, project_file: Path) -> Path:
    """Isolated config plus the sample project on disk; returns the model path."""
    return project_file


class TestRootCommand:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"peergen {__version__}" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("init", "sync", "plan", "config"):
            assert name in result.output


    def test_verbose_flag_reaches_output(self, isolated_config: Path, project_file: Path) -> None:
        result = runner.invoke(app, ["--verbose", "--no-color", "plan", "-P", str(project_file)])
        assert result.exit_code == 0, result.output
        assert "[debug] Planned library peer AKt for A" in result.output


class TestInit:
    def test_fresh_project(self, cli_env: Path, project_root: Path) -> None:
        result = runner.invoke(app, ["--plain", "--no-color", "init", "--project", str(cli_env)])

        assert result.exit_code == 0, result.output
        assert "# Kotlin peer targets for Sample" in result.stdout
        assert "Initialized 2 peer target(s)." in result.output

        descriptor = (project_root / "Package.swift").read_text()
        assert "// MARK: Skip Kotlin Peer Targets" in descriptor
        assert '.target(name: "AKt", dependencies: [' in descriptor
        assert '.testTarget(name: "AKtTests", dependencies: [' in descriptor
        assert (project_root / "Sources/AKt/Skip/skip.yml").is_file()
        assert (project_root / "Tests/AKtTests/Skip/skip.yml").is_file()
        assert "missing destination" in result.output

    def test_rerun_is_byte_identical(self, cli_env: Path, project_root: Path) -> None:
        runner.invoke(app, ["-q", "init", "-P", str(cli_env)])
        first = (project_root / "Package.swift").read_bytes()

        result = runner.invoke(app, ["-q", "init", "-P", str(cli_env)])

        assert result.exit_code == 0
        assert (project_root / "Package.swift").read_bytes() == first

    def test_skip_inplace(self, cli_env: Path, project_root: Path) -> None:
        before = (project_root / "Package.swift").read_text()
        result = runner.invoke(app, ["-q", "init", "-P", str(cli_env), "--skip", "inplace"])

        assert result.exit_code == 0
        assert (project_root / "Package.swift").read_text() == before

    def test_unknown_option_is_usage_error(self, cli_env: Path) -> None:
        result = runner.invoke(app, ["--no-color", "init", "-P", str(cli_env), "--option", "bogus"])
        assert result.exit_code == 2
        assert "Unknown option 'bogus'" in result.output

    def test_missing_project_model(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--no-color", "init", "-P", str(isolated_config / "nope.yaml")])
        assert result.exit_code == 7
        assert "Project model not found" in result.output

    def test_no_project_configured(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--no-color", "init"])
        assert result.exit_code == 2
        assert "No project model given" in result.output

    def test_project_from_local_config(self, cli_env: Path, isolated_config: Path) -> None:
        (isolated_config / "peergen.json").write_text(json.dumps({"project": str(cli_env)}))
        result = runner.invoke(app, ["-q", "init", "--option", "targets"])
        assert result.exit_code == 0, result.output


class TestSync:
    def test_links_then_prunes(
        self, cli_env: Path, project_root: Path, make_output
    ) -> None:
        make_output(project_root, "AKt", "A")
        tests_output = make_output(project_root, "AKtTests", "A")
        links = project_root / "Packages" / "Skip"

        result = runner.invoke(app, ["--plain", "--no-color", "sync", "-P", str(cli_env)])

        assert result.exit_code == 0, result.output
        assert "Linked 2 peer target(s), skipped 0." in result.output
        assert (links / "AKt" / "settings.gradle.kts").is_symlink()
        assert (links / "AKt" / "A").is_symlink()
        assert (links / "AKtTests" / "A").is_symlink()

        shutil.rmtree(tests_output)
        result = runner.invoke(app, ["--plain", "--no-color", "sync", "-P", str(cli_env)])

        assert result.exit_code == 0, result.output
        assert "Linked 1 peer target(s), skipped 1." in result.output
        assert "Not creating link from" in result.output
        assert not (links / "AKtTests").exists()
        assert (links / "AKt" / "A").is_symlink()

    def test_sync_leaves_descriptor(self, cli_env: Path, project_root: Path) -> None:
        before = (project_root / "Package.swift").read_bytes()
        result = runner.invoke(app, ["-q", "sync", "-P", str(cli_env)])
        assert result.exit_code == 0
        assert (project_root / "Package.swift").read_bytes() == before


class TestPlan:
    def test_json_rows(self, cli_env: Path, project_root: Path, make_output) -> None:
        make_output(project_root, "AKt", "A")

        result = runner.invoke(app, ["--json", "-q", "plan", "-P", str(cli_env)])

        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert rows == [
            {
                "Source": "A",
                "Peer": "AKt",
                "Kind": "library",
                "Dependencies": "A, SkipFoundationKt",
                "Output": "present",
            },
            {
                "Source": "ATests",
                "Peer": "AKtTests",
                "Kind": "test",
                "Dependencies": "AKt, SkipUnitKt",
                "Output": "missing",
            },
        ]

    def test_plan_writes_nothing(self, cli_env: Path, project_root: Path) -> None:
        result = runner.invoke(app, ["--plain", "--no-color", "-q", "plan", "-P", str(cli_env), "-t", "A"])

        assert result.exit_code == 0
        assert "AKt" in result.stdout
        assert not (project_root / "Sources" / "AKt").exists()
        assert not (project_root / "Packages").exists()


class TestConfigCommands:
    def test_show_defaults(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--json", "-q", "config", "show"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["project"] is None
        assert data["conventions"]["links_root"] == "Packages/Skip"

    def test_set_then_show(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "set", "conventions.links_root", "Links"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(app, ["--json", "-q", "config", "show"])
        assert json.loads(result.stdout)["conventions"]["links_root"] == "Links"

    def test_set_unknown_key(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "set", "conventions.nope", "x"])
        assert result.exit_code == 2

    def test_reset_with_force(self, isolated_config: Path) -> None:
        runner.invoke(app, ["config", "set", "project", "p.yaml"])
        result = runner.invoke(app, ["--force", "config", "reset"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["--json", "-q", "config", "show"])
        assert json.loads(result.stdout)["project"] is None
