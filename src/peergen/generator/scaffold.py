"""Scaffold writer -- create the directories and stub files a peer needs to build.

Every write is conditional on absence: a file that already exists is never
touched, so users can edit scaffolded files freely and re-run ``peergen
init``. For a plan with peer directory ``Sources/FooKt`` the scaffold is::

    Sources/FooKt/
        FooModuleKt.swift         # library peers: bundle accessor
        Skip/
            skip.yml              # per-peer settings
            FooKtSupport.kt       # library peers: Kotlin support hook

and for a test peer ``Tests/FooKtTests``::

    Tests/FooKtTests/
        FooKtTests.swift          # JUnit harness test case
        Skip/
            skip.yml
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from peergen.config import atomic_write
from peergen.exceptions import FileAccessError
from peergen.models import Conventions, PeerTargetPlan, ScaffoldEntry
from peergen.output import debug, info


_SETTINGS_TEMPLATE = """\
# Skip configuration file for {source}
"""

_TEST_CASE_TEMPLATE = """\
import SkipUnit

/// Runs the transpiled tests of the {source} module through the `JUnitTestCase.testProjectGradle()` harness.
/// Tests belong in {source}; this file does not need to change.
class {peer}: JUnitTestCase {{
}}
"""

_BUNDLE_TEMPLATE = """\
import Foundation

/// Resource bundle of the {accessor} module
public extension Bundle {{
    static let {accessor} = Bundle.module
}}
"""

_SUPPORT_TEMPLATE = """\
// Kotlin in this file is added to the transpiled package for {source}.
// Use it for support functions needed by Kotlin-specific Swift code.
"""


@dataclass
class ScaffoldReport:
    """What a :func:`write_scaffold` run did.

    Attributes:
        created_directories: Resource directories that did not exist before.
        created_files: Files written by this run.
        kept_files: Files left untouched because they already existed.
    """

    created_directories: list[Path] = field(default_factory=list)
    created_files: list[Path] = field(default_factory=list)
    kept_files: list[Path] = field(default_factory=list)


def resource_directory(plan: PeerTargetPlan, conventions: Conventions) -> Path:
    return plan.scaffold_directory / conventions.resource_dir


def scaffold_entries(plan: PeerTargetPlan, conventions: Conventions) -> list[ScaffoldEntry]:
    """Return the files *plan* needs, with their initial contents."""
    resources = resource_directory(plan, conventions)
    entries = [
        ScaffoldEntry(
            path=resources / conventions.settings_file,
            content=_SETTINGS_TEMPLATE.format(source=plan.source_name),
        )
    ]

    if plan.is_test:
        entries.append(
            ScaffoldEntry(
                path=plan.scaffold_directory / f"{plan.peer_name}.swift",
                content=_TEST_CASE_TEMPLATE.format(source=plan.source_name, peer=plan.peer_name),
            )
        )
    else:
        accessor = f"{plan.source_name}ModuleKt"
        entries.append(
            ScaffoldEntry(
                path=plan.scaffold_directory / f"{accessor}.swift",
                content=_BUNDLE_TEMPLATE.format(accessor=accessor),
            )
        )
        entries.append(
            ScaffoldEntry(
                path=resources / f"{plan.source_name}KtSupport.kt",
                content=_SUPPORT_TEMPLATE.format(source=plan.source_name),
            )
        )
    return entries


def write_scaffold(plans: list[PeerTargetPlan], conventions: Conventions) -> ScaffoldReport:
    """Create the resource directory and missing files for every plan.

    Raises:
        FileAccessError: If a directory cannot be created or a file cannot
            be written. Files written before the failure stay on disk.
    """
    report = ScaffoldReport()
    for plan in plans:
        resources = resource_directory(plan, conventions)
        if not resources.is_dir():
            info(f"Creating target folder: {resources}")
            try:
                resources.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise FileAccessError(resources, "create directory", exc.strerror or exc) from exc
            report.created_directories.append(resources)

        for entry in scaffold_entries(plan, conventions):
            _write_entry(entry, report)
    return report


def _write_entry(entry: ScaffoldEntry, report: ScaffoldReport) -> None:
    if entry.path.exists() or entry.path.is_symlink():
        debug(f"Keeping existing {entry.path}")
        report.kept_files.append(entry.path)
        return
    try:
        atomic_write(entry.path, entry.content)
    except OSError as exc:
        raise FileAccessError(entry.path, "write", exc.strerror or exc) from exc
    debug(f"Created {entry.path}")
    report.created_files.append(entry.path)
