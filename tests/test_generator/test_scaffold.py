"""Tests for peergen.generator.scaffold -- peer folders and stub files."""

from __future__ import annotations

from pathlib import Path

import pytest

from peergen.exceptions import FileAccessError
from peergen.generator.planner import plan_targets
from peergen.generator.scaffold import scaffold_entries, write_scaffold


@pytest.fixture
def plans(sample_project, conventions, quiet_output):
    return plan_targets(sample_project, sample_project.targets, conventions)


class TestScaffoldEntries:
    def test_library_entries(self, plans, conventions, project_root: Path) -> None:
        lib = plans[0]
        paths = [e.path for e in scaffold_entries(lib, conventions)]
        peer = project_root / "Sources" / "AKt"
        assert paths == [
            peer / "Skip" / "skip.yml",
            peer / "AModuleKt.swift",
            peer / "Skip" / "AKtSupport.kt",
        ]

    def test_test_entries(self, plans, conventions, project_root: Path) -> None:
        test = plans[1]
        entries = scaffold_entries(test, conventions)
        peer = project_root / "Tests" / "AKtTests"
        assert [e.path for e in entries] == [peer / "Skip" / "skip.yml", peer / "AKtTests.swift"]
        assert "class AKtTests: JUnitTestCase" in entries[1].content

    def test_settings_content_names_source(self, plans, conventions) -> None:
        settings = scaffold_entries(plans[1], conventions)[0]
        assert settings.content == "# Skip configuration file for ATests\n"


class TestWriteScaffold:
    def test_creates_everything(self, plans, conventions, project_root: Path, quiet_output) -> None:
        report = write_scaffold(plans, conventions)

        assert (project_root / "Sources/AKt/Skip/skip.yml").is_file()
        assert (project_root / "Sources/AKt/AModuleKt.swift").is_file()
        assert (project_root / "Tests/AKtTests/Skip/skip.yml").is_file()
        assert (project_root / "Tests/AKtTests/AKtTests.swift").is_file()
        assert len(report.created_directories) == 2
        assert len(report.created_files) == 5
        assert report.kept_files == []

    def test_idempotent(self, plans, conventions, project_root: Path, quiet_output) -> None:
        write_scaffold(plans, conventions)
        snapshot = {p: p.read_bytes() for p in project_root.rglob("*") if p.is_file()}

        report = write_scaffold(plans, conventions)

        assert report.created_files == []
        assert report.created_directories == []
        assert len(report.kept_files) == 5
        assert {p: p.read_bytes() for p in project_root.rglob("*") if p.is_file()} == snapshot

    def test_user_edits_survive(self, plans, conventions, project_root: Path, quiet_output) -> None:
        write_scaffold(plans, conventions)
        settings = project_root / "Tests/AKtTests/Skip/skip.yml"
        settings.write_text("build:\n  contents: custom\n")

        write_scaffold(plans, conventions)

        assert settings.read_text() == "build:\n  contents: custom\n"

    def test_recreates_deleted_file_only(self, plans, conventions, project_root: Path, quiet_output) -> None:
        write_scaffold(plans, conventions)
        missing = project_root / "Sources/AKt/AModuleKt.swift"
        missing.unlink()

        report = write_scaffold(plans, conventions)

        assert report.created_files == [missing]
        assert missing.is_file()

    def test_reports_created_folder(self, plans, conventions, plain_output, capsys) -> None:
        write_scaffold(plans, conventions)
        assert "Creating target folder:" in capsys.readouterr().err

    def test_unwritable_location(self, plans, conventions, project_root: Path, quiet_output) -> None:
        # A regular file where the peer folder should be.
        (project_root / "Sources" / "AKt").write_text("not a folder")

        with pytest.raises(FileAccessError):
            write_scaffold(plans, conventions)

    def test_empty_plans(self, conventions, quiet_output) -> None:
        report = write_scaffold([], conventions)
        assert report.created_files == []
