"""Tests for peergen.generator.guide -- the Markdown setup guide."""

from __future__ import annotations

from pathlib import Path

import pytest

from peergen.generator.fragment import render_fragment
from peergen.generator.guide import render_guide, scaffold_commands
from peergen.generator.planner import plan_targets
from peergen.models import ProjectModel, SourceTarget


@pytest.fixture
def plans(sample_project, conventions, quiet_output):
    return plan_targets(sample_project, sample_project.targets, conventions)


class TestRenderGuide:
    def test_contains_table_and_fragment(self, plans, sample_project, conventions) -> None:
        fragment = render_fragment(plans, conventions)
        guide = render_guide(plans, fragment, sample_project, conventions)

        assert guide.startswith("# Kotlin peer targets for Sample\n")
        assert "| A | AKt | library |" in guide
        assert "| ATests | AKtTests | test |" in guide
        assert fragment in guide
        assert "`Package.swift`" in guide

    def test_lists_scaffold_commands(self, plans, sample_project, conventions) -> None:
        guide = render_guide(plans, render_fragment(plans, conventions), sample_project, conventions)
        assert "mkdir -p Sources/AKt/Skip/ && touch Sources/AKt/Skip/skip.yml" in guide
        assert "mkdir -p Tests/AKtTests/Skip/ && touch Tests/AKtTests/Skip/skip.yml" in guide

    def test_falls_back_to_project_id(self, conventions, tmp_path: Path) -> None:
        project = ProjectModel(id="pkg", directory=tmp_path)
        guide = render_guide([], render_fragment([], conventions), project, conventions)
        assert guide.startswith("# Kotlin peer targets for pkg\n")

    def test_deterministic(self, plans, sample_project, conventions) -> None:
        fragment = render_fragment(plans, conventions)
        assert render_guide(plans, fragment, sample_project, conventions) == render_guide(
            plans, fragment, sample_project, conventions
        )


class TestScaffoldCommands:
    def test_quotes_paths_with_spaces(self, conventions, tmp_path: Path, quiet_output) -> None:
        target = SourceTarget(name="My Lib", directory=tmp_path / "Sources" / "My Lib")
        project = ProjectModel(id="p", directory=tmp_path, targets=[target])
        plans = plan_targets(project, project.targets, conventions)

        (command,) = scaffold_commands(plans, project, conventions)

        assert command == "mkdir -p 'Sources/My LibKt/Skip/' && touch 'Sources/My LibKt/Skip/skip.yml'"
