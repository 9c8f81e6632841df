"""Render the setup guide printed by ``peergen init``.

The guide restates the managed ``Package.swift`` block and lists the shell
commands that create each peer's folders by hand, for users who prefer to
apply the changes themselves (``--skip inplace --skip scaffold``).

The Markdown is produced from ``templates/guide.md.j2`` with Jinja2.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from peergen.models import Conventions, PeerTargetPlan, ProjectModel


TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_guide(
    plans: list[PeerTargetPlan],
    fragment: str,
    project: ProjectModel,
    conventions: Conventions,
) -> str:
    """Render the Markdown setup guide for *plans*."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    template = env.get_template("guide.md.j2")
    return template.render(
        project_name=project.name or project.id,
        plans=plans,
        descriptor=conventions.descriptor,
        marker=conventions.marker,
        fragment=fragment,
        scaffold_commands=scaffold_commands(plans, project, conventions),
    )


def scaffold_commands(
    plans: list[PeerTargetPlan],
    project: ProjectModel,
    conventions: Conventions,
) -> list[str]:
    """Shell commands that create each peer's resource folder and settings file."""
    commands = []
    for plan in plans:
        resources = _relative(plan.scaffold_directory / conventions.resource_dir, project.directory)
        settings = f"{resources}/{conventions.settings_file}"
        commands.append(f"mkdir -p {shlex.quote(resources + '/')} && touch {shlex.quote(settings)}")
    return commands


def _relative(path: Path, root: Path) -> str:
    return Path(os.path.relpath(path, root)).as_posix()
