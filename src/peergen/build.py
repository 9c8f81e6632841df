"""Run the peer pipeline for one ``init`` or ``sync`` invocation.

:func:`perform_build` reads the selected targets, plans their peers once,
and hands the same plan list to every step enabled in the
:class:`~peergen.models.BuildOption` set:

1. render the managed block (always; it is cheap and pure),
2. ``project`` -- render the setup guide,
3. ``scaffold`` -- create missing peer folders and stubs,
4. ``inplace`` -- write the managed block into the descriptor,
5. ``link`` -- synchronize the output links.

Steps 2-4 are independent of each other. Linking runs last so it sees any
output produced by earlier builds. A :class:`~peergen.exceptions.FileAccessError`
from any step aborts the run; steps already completed stay on disk.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from peergen.exceptions import InvalidUsageError
from peergen.generator import (
    ScaffoldReport,
    apply_fragment,
    plan_targets,
    render_fragment,
    render_guide,
    write_scaffold,
)
from peergen.models import (
    SINGLE_OPTIONS,
    BuildOption,
    Conventions,
    PeerTargetPlan,
    ProjectModel,
    option_names,
)
from peergen.output import info
from peergen.project import select_targets
from peergen.sync import SyncReport, links_root_directory, synchronize_links


class BuildCommand(str, enum.Enum):
    """The two entry points of the pipeline."""

    INIT = "init"
    """Initialize peers for the selected targets."""
    SYNC = "sync"
    """Synchronize the output links only."""


@dataclass
class BuildResult:
    """Everything a run produced, for the CLI to report and tests to inspect."""

    options: BuildOption
    plans: list[PeerTargetPlan]
    fragment: str
    guide: Optional[str] = None
    descriptor_text: Optional[str] = None
    scaffold: Optional[ScaffoldReport] = None
    sync: Optional[SyncReport] = None


def default_options(command: BuildCommand) -> BuildOption:
    if command == BuildCommand.INIT:
        return BuildOption.DEFAULT
    return BuildOption.LINK


def parse_options(names: Iterable[str]) -> BuildOption:
    """Combine option names (``"scaffold"``, ``"link"``, ...) into a bit set.

    Raises:
        InvalidUsageError: If a name is not a known option.
    """
    valid = {o.name.lower(): o for o in SINGLE_OPTIONS}
    options = BuildOption.NONE
    for name in names:
        for part in name.split(","):
            key = part.strip().lower()
            if not key:
                continue
            if key not in valid:
                choices = ", ".join(valid)
                raise InvalidUsageError(f"Unknown option '{part.strip()}' (choose from: {choices})")
            options |= valid[key]
    return options


def resolve_options(
    command: BuildCommand,
    only: Optional[Iterable[str]] = None,
    skip: Optional[Iterable[str]] = None,
) -> BuildOption:
    """Apply ``--option`` (replaces the defaults) and ``--skip`` (removes) to the defaults."""
    only = list(only or [])
    options = parse_options(only) if only else default_options(command)
    if skip:
        options &= ~parse_options(skip)
    return options


def perform_build(
    command: BuildCommand,
    project: ProjectModel,
    conventions: Conventions,
    target_names: Optional[Iterable[str]] = None,
    options: Optional[BuildOption] = None,
) -> BuildResult:
    """Plan the peers of *project* and run every step enabled in *options*.

    Args:
        command: ``init`` or ``sync``; selects the default options.
        project: The host project model.
        conventions: Naming constants and paths.
        target_names: Optional ``--target`` filter.
        options: Explicit option set; ``None`` uses the command default.

    Raises:
        FileAccessError: When a filesystem step fails.
    """
    if options is None:
        options = default_options(command)
    info(f"Performing {command.value} with options: {', '.join(option_names(options)) or 'none'}")

    targets = select_targets(project, target_names)
    plans = plan_targets(project, targets, conventions, options)
    fragment = render_fragment(plans, conventions, options)
    result = BuildResult(options=options, plans=plans, fragment=fragment)

    if BuildOption.PROJECT in options:
        result.guide = render_guide(plans, fragment, project, conventions)

    if BuildOption.SCAFFOLD in options:
        result.scaffold = write_scaffold(plans, conventions)

    if BuildOption.INPLACE in options:
        descriptor = project.directory / conventions.descriptor
        result.descriptor_text = apply_fragment(descriptor, fragment, conventions.marker)

    if BuildOption.LINK in options:
        result.sync = synchronize_links(
            plans, links_root_directory(project, conventions), conventions
        )

    return result
