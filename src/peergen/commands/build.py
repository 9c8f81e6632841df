"""Build commands -- ``peergen init`` and ``peergen sync``.

Both commands run :func:`~peergen.build.perform_build`; they differ only in
their default option set. ``init`` does everything (guide, scaffold,
preflight and transpile plugins, declarations, in-place edit, links);
``sync`` only refreshes the ``Packages/Skip`` links and is meant to run
after each build of the transpiled output.

Steps are chosen with ``--option`` (replaces the defaults, repeatable or
comma-separated) and ``--skip`` (removes from them)::

    peergen init --skip inplace                  # print the block, do not edit Package.swift
    peergen init --option scaffold --option link
    peergen sync --target Hello
"""

from __future__ import annotations

from typing import Optional

import typer

from peergen.build import BuildCommand, BuildResult
from peergen.models import ProjectModel
from peergen.output import debug, error, info, print_data, success, suggest


_PROJECT_HELP = "Project model file, URL, or '-' for stdin (default: from config)."
_TARGET_HELP = "Only mirror this target (repeatable). Unknown names are ignored."
_OPTION_HELP = (
    "Step to perform, replacing the defaults (repeatable): project, scaffold, "
    "preflight, transpile, targets, inplace, link."
)
_SKIP_HELP = "Step to leave out of the defaults (repeatable)."


def init_command(
    project: Optional[str] = typer.Option(None, "--project", "-P", help=_PROJECT_HELP),
    target: Optional[list[str]] = typer.Option(None, "--target", "-t", help=_TARGET_HELP),
    option: Optional[list[str]] = typer.Option(None, "--option", "-O", help=_OPTION_HELP),
    skip: Optional[list[str]] = typer.Option(None, "--skip", "-x", help=_SKIP_HELP),
) -> None:
    """Initialize Kotlin peer targets for the project's Swift targets.

    Plans one peer per selected target, prints the setup guide, creates
    the peer folders, rewrites the managed block of ``Package.swift``, and
    links any transpiler output that already exists.

    Example::

        peergen init --project project.yaml
        peergen init -P project.yaml --target Hello --skip inplace
    """
    result = _run(BuildCommand.INIT, project, target, option, skip)

    if result.guide is not None:
        print_data(result.guide)
    if result.scaffold is not None:
        debug(
            f"Scaffold: {len(result.scaffold.created_files)} created, "
            f"{len(result.scaffold.kept_files)} kept"
        )
    success(f"Initialized {len(result.plans)} peer target(s).")
    if result.sync is not None and result.sync.skipped:
        suggest("Build the package, then run: peergen sync")


def sync_command(
    project: Optional[str] = typer.Option(None, "--project", "-P", help=_PROJECT_HELP),
    target: Optional[list[str]] = typer.Option(None, "--target", "-t", help=_TARGET_HELP),
    option: Optional[list[str]] = typer.Option(None, "--option", "-O", help=_OPTION_HELP),
    skip: Optional[list[str]] = typer.Option(None, "--skip", "-x", help=_SKIP_HELP),
) -> None:
    """Synchronize the Packages/Skip links with the transpiler output.

    Removes stale links and empty folders, then links the Gradle settings
    file and module sources of every peer whose output exists. Peers
    without output yet are reported and skipped.

    Example::

        peergen sync
        peergen sync --project project.json --target Hello
    """
    result = _run(BuildCommand.SYNC, project, target, option, skip)

    if result.guide is not None:
        print_data(result.guide)
    if result.sync is not None:
        success(
            f"Linked {len(result.sync.linked)} peer target(s), "
            f"skipped {len(result.sync.skipped)}."
        )


def _run(
    command: BuildCommand,
    project: Optional[str],
    targets: Optional[list[str]],
    only: Optional[list[str]],
    skip: Optional[list[str]],
) -> BuildResult:
    from peergen.build import perform_build, resolve_options
    from peergen.exceptions import PeergenError

    try:
        options = resolve_options(command, only, skip)
        model, conventions = load_project_model(project)
        return perform_build(command, model, conventions, targets, options)
    except PeergenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def load_project_model(project: Optional[str]):  # noqa: ANN201
    """Resolve the configuration and load the project model it names.

    Returns:
        A ``(ProjectModel, Conventions)`` tuple.

    Raises:
        InvalidUsageError: When no project model is configured.
        ProjectModelError: When the model cannot be loaded.
        ConfigError: When a config file is invalid.
    """
    from peergen.config import resolve_config
    from peergen.exceptions import InvalidUsageError
    from peergen.project import open_project

    _, conventions, source = resolve_config(cli_project=project)
    if source is None:
        raise InvalidUsageError(
            "No project model given. Pass --project, set PEERGEN_PROJECT, "
            "or add \"project\" to peergen.json."
        )
    info(f"Reading project model from: {source}")
    model: ProjectModel = open_project(source)
    return model, conventions
