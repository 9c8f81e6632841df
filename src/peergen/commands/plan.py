"""Plan command -- show the peers ``init`` would create, without touching disk.

Prints one row per planned peer: its source target, peer name, kind,
dependencies, and whether the transpiler output already exists. With
``--json`` the rows are emitted as an array of objects.
"""

from __future__ import annotations

from typing import Optional

import typer

from peergen.output import error, get_output


def plan_command(
    project: Optional[str] = typer.Option(
        None, "--project", "-P", help="Project model file, URL, or '-' for stdin."
    ),
    target: Optional[list[str]] = typer.Option(
        None, "--target", "-t", help="Only plan this target (repeatable)."
    ),
) -> None:
    """List the peer targets planned for the project.

    Example::

        peergen plan --project project.yaml
        peergen --json plan
    """
    from peergen.commands.build import load_project_model
    from peergen.exceptions import PeergenError
    from peergen.generator import plan_targets
    from peergen.project import select_targets

    try:
        model, conventions = load_project_model(project)
        plans = plan_targets(model, select_targets(model, target), conventions)
    except PeergenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["Source", "Peer", "Kind", "Dependencies", "Output"]
    rows = []
    for plan in plans:
        rows.append([
            plan.source_name,
            plan.peer_name,
            plan.kind.value,
            ", ".join(dep.name for dep in plan.dependencies),
            "present" if plan.output_directory.is_dir() else "missing",
        ])

    get_output().print_table(
        headers, rows, title=f"{model.name or model.id} -- Peer targets ({len(rows)})"
    )
