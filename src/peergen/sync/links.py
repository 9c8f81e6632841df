"""Output link synchronizer -- keep ``Packages/Skip`` in step with the plan list.

The links root exposes the Gradle project that the transpiler generates for
each peer under a stable path::

    Packages/Skip/
        FooKt/
            settings.gradle.kts -> <output>/FooKt/skip-transpiler/settings.gradle.kts
            Foo                 -> <output>/FooKt/skip-transpiler/Foo
        FooKtTests/
            settings.gradle.kts -> <output>/FooKtTests/skip-transpiler/settings.gradle.kts
            Foo                 -> <output>/FooKtTests/skip-transpiler/Foo

No manifest of earlier runs is kept: each run rediscovers the current
state by scanning the links root, removes every symbolic link (and every
folder left empty by that), then recreates links for the plans whose
output exists. Running twice converges to the same tree.

Concurrent runs against the same project are not supported.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path

from peergen.exceptions import FileAccessError
from peergen.models import Conventions, PeerTargetPlan, ProjectModel
from peergen.output import debug, info


@dataclass
class SyncReport:
    """What a :func:`synchronize_links` run did.

    Attributes:
        removed_links: Symbolic links deleted during the clear phase.
        removed_directories: Peer folders deleted because they were left empty.
        linked: Peer names whose links were (re)created.
        skipped: Peer names without build output yet.
    """

    removed_links: list[Path] = field(default_factory=list)
    removed_directories: list[Path] = field(default_factory=list)
    linked: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def package_output_directory(project: ProjectModel, conventions: Conventions) -> Path:
    """Directory holding the transpiler output of every peer of *project*.

    With a known build work directory ``W`` this is
    ``W/../../<project id>.<ext>``, where ``ext`` is the extension of ``W``
    itself (``output`` when it has none). Otherwise it is
    ``<project root>/<output_base>/<project id>.output``.
    """
    if project.work_directory is not None:
        ext = project.work_directory.suffix.lstrip(".") or "output"
        return project.work_directory.parent.parent / f"{project.id}.{ext}"
    return project.directory / conventions.output_base / f"{project.id}.output"


def links_root_directory(project: ProjectModel, conventions: Conventions) -> Path:
    return project.directory / conventions.links_root


def synchronize_links(
    plans: list[PeerTargetPlan],
    links_root: Path,
    conventions: Conventions,
) -> SyncReport:
    """Reconcile *links_root* against *plans*.

    After a successful run the root holds exactly one folder per plan whose
    output directory exists, each with two links: the Gradle settings file
    and the module source folder named after the plan's base name.

    Raises:
        FileAccessError: If the root cannot be created or listed, or a link
            or folder cannot be removed or created. Nothing is rolled back.
    """
    report = SyncReport()
    try:
        links_root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileAccessError(links_root, "create directory", exc.strerror or exc) from exc

    clear_links(links_root, report)

    for plan in plans:
        _link_plan(plan, links_root, conventions, report)
    return report


def clear_links(links_root: Path, report: SyncReport) -> None:
    """Remove every link under *links_root* and any peer folder left empty."""
    _clear_folder(links_root, report)
    for entry in _entries(links_root):
        if entry.is_dir() and not entry.is_symlink():
            _clear_folder(entry, report)
            if not _entries(entry):
                debug(f"Removing empty folder {entry}")
                try:
                    entry.rmdir()
                except OSError as exc:
                    raise FileAccessError(entry, "remove directory", exc.strerror or exc) from exc
                report.removed_directories.append(entry)


def _clear_folder(folder: Path, report: SyncReport) -> None:
    for entry in _entries(folder):
        if entry.is_symlink():
            debug(f"Clearing link {entry}")
            try:
                entry.unlink()
            except OSError as exc:
                raise FileAccessError(entry, "remove link", exc.strerror or exc) from exc
            report.removed_links.append(entry)


def _link_plan(
    plan: PeerTargetPlan,
    links_root: Path,
    conventions: Conventions,
    report: SyncReport,
) -> None:
    destination = plan.output_directory
    link_base = links_root / plan.peer_name

    if not destination.is_dir():
        info(f"Not creating link from {link_base} to {destination} (missing destination)")
        report.skipped.append(plan.peer_name)
        return

    info(f"Creating link from {link_base} to {destination}")
    try:
        link_base.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileAccessError(link_base, "create directory", exc.strerror or exc) from exc

    _replace_link(link_base / conventions.output_settings, destination / conventions.output_settings)
    _replace_link(link_base / plan.base_name, destination / plan.base_name, directory=True)
    report.linked.append(plan.peer_name)


def _replace_link(link: Path, target: Path, directory: bool = False) -> None:
    try:
        if link.is_symlink() or link.is_file():
            link.unlink()
        elif link.is_dir():
            shutil.rmtree(link)
    except OSError as exc:
        raise FileAccessError(link, "remove existing entry", exc.strerror or exc) from exc

    try:
        link.symlink_to(target, target_is_directory=directory)
    except OSError as exc:
        raise FileAccessError(link, "create link", exc.strerror or exc) from exc


def _entries(folder: Path) -> list[Path]:
    try:
        return sorted(folder.iterdir())
    except OSError as exc:
        raise FileAccessError(folder, "list", exc.strerror or exc) from exc
