"""Shared test fixtures for peergen.

Provides an isolated config environment, output-state management, a small
sample Swift package on disk (``A`` plus ``ATests``), and helpers that fake
the transpiler's output directories.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
import yaml

from peergen.models import (
    Conventions,
    ProjectModel,
    SourceTarget,
    TargetDependency,
    TargetKind,
)
from peergen.output import OutputFormat, OutputManager, reset_output, set_output


PACKAGE_SWIFT = """\
// swift-tools-version: 5.8
import PackageDescription

let package = Package(
    name: "sample",
    products: [.library(name: "A", targets: ["A"])],
    targets: [
        .target(name: "A"),
        .testTarget(name: "ATests", dependencies: ["A"]),
    ]
)
"""


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches sys.stdout/sys.stderr at creation time; a
    manager created under CliRunner would otherwise write to closed
    streams in the next test.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the XDG directories into tmp_path and clear PEERGEN_* variables.

    Also changes the working directory to tmp_path so no stray
    ``peergen.json`` is picked up.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setattr("peergen.config._is_xdg_platform", lambda: True)

    for var in ["PEERGEN_PROJECT", "PEERGEN_LINKS_ROOT", "PEERGEN_OUTPUT_BASE"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN output manager for tests that ignore remarks."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def plain_output() -> OutputManager:
    """Install an uncoloured PLAIN output manager so remarks can be read from capsys."""
    output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Sample project
# ---------------------------------------------------------------------------


@pytest.fixture
def conventions() -> Conventions:
    return Conventions()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A package root with Sources/A, Tests/ATests and a Package.swift."""
    root = tmp_path / "sample"
    (root / "Sources" / "A").mkdir(parents=True)
    (root / "Tests" / "ATests").mkdir(parents=True)
    (root / "Package.swift").write_text(PACKAGE_SWIFT, encoding="utf-8")
    return root


@pytest.fixture
def sample_project(project_root: Path) -> ProjectModel:
    """Project model with ``A`` (no deps) and ``ATests`` (depends on ``A``)."""
    return ProjectModel(
        id="sample",
        name="Sample",
        directory=project_root,
        targets=[
            SourceTarget(
                name="ATests",
                kind=TargetKind.TEST,
                directory=project_root / "Tests" / "ATests",
                dependencies=[TargetDependency(name="A")],
            ),
            SourceTarget(name="A", directory=project_root / "Sources" / "A"),
        ],
    )


@pytest.fixture
def project_file(project_root: Path) -> Path:
    """The sample project written as ``project.yaml`` inside the package root."""
    path = project_root / "project.yaml"
    data = {
        "id": "sample",
        "name": "Sample",
        "directory": ".",
        "targets": [
            {"name": "A", "directory": "Sources/A"},
            {
                "name": "ATests",
                "kind": "test",
                "directory": "Tests/ATests",
                "dependencies": [{"target": "A"}],
            },
        ],
    }
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


@pytest.fixture
def make_output(conventions: Conventions) -> Callable[[Path, str, str], Path]:
    """Return a helper that fakes the transpiler output of one peer.

    ``make_output(project_root, "AKt", "A")`` creates
    ``<root>/.build/plugins/outputs/sample.output/AKt/skip-transpiler`` with a
    settings file and a module folder, and returns that directory.
    """

    def _make(root: Path, peer: str, base: str) -> Path:
        out = (
            root / conventions.output_base / "sample.output" / peer / conventions.output_subdir
        )
        (out / base).mkdir(parents=True, exist_ok=True)
        (out / conventions.output_settings).write_text("rootProject.name = \"x\"\n")
        return out

    return _make
