"""Validate a raw project model and select the targets to mirror.

:func:`read_project` turns the ``dict`` produced by
:mod:`peergen.project.loader` into a :class:`~peergen.models.ProjectModel`,
resolving relative directories and classifying every dependency edge.
:func:`select_targets` applies the ``--target`` filter.

Dependency edges are accepted in a short form and an explicit form::

    dependencies:
      - Core                                  # target by name
      - target: Util                          # target
      - product: Collections                  # product of another package
        package: swift-collections
      - {type: product, name: Algorithms, package: swift-algorithms}

Anything else is kept as :class:`~peergen.models.UnknownDependency` so the
planner can skip it with a diagnostic instead of failing the whole read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from peergen.exceptions import ProjectModelError
from peergen.generator.naming import is_peer_name
from peergen.models import (
    DependencyEdge,
    ProductDependency,
    ProjectModel,
    SourceTarget,
    TargetDependency,
    UnknownDependency,
)
from peergen.output import debug, warning


def read_project(raw: dict[str, Any], base_directory: Optional[Path] = None) -> ProjectModel:
    """Build a :class:`ProjectModel` from a raw project document.

    Args:
        raw: The parsed JSON/YAML document.
        base_directory: Directory that a relative ``directory`` entry
            resolves against. Defaults to the working directory.

    Returns:
        The validated project model with absolute target directories.

    Raises:
        ProjectModelError: If required fields are missing, a target kind is
            unknown, or two targets share a name.
    """
    base = (base_directory or Path.cwd()).resolve()
    project_id = raw.get("id") or raw.get("name")
    if not project_id:
        raise ProjectModelError("Project model has no 'id'")

    root = _resolve(base, raw.get("directory", "."))
    work_directory = raw.get("work_directory")

    raw_targets = raw.get("targets") or []
    if not isinstance(raw_targets, list):
        raise ProjectModelError("Project model 'targets' must be a list")

    targets = [_read_target(entry, root) for entry in raw_targets]

    seen: set[str] = set()
    for target in targets:
        if target.name in seen:
            raise ProjectModelError(f"Duplicate target name in project model: {target.name}")
        seen.add(target.name)

    try:
        return ProjectModel(
            id=str(project_id),
            name=raw.get("name"),
            directory=root,
            work_directory=_resolve(root, work_directory) if work_directory else None,
            targets=targets,
        )
    except ValidationError as exc:
        raise ProjectModelError(f"Invalid project model: {exc}") from exc


def select_targets(
    project: ProjectModel, names: Optional[Iterable[str]] = None
) -> list[SourceTarget]:
    """Return the source targets to mirror with peers.

    When *names* selects nothing (or is empty), every target is used.
    Targets that are themselves peers (``...Kt`` / ``...KtTests``) and
    non-source targets (binary, system) are always excluded. The result
    keeps the host's enumeration order; the planner sorts.
    """
    requested = list(names or [])
    selected: list[SourceTarget] = []
    for name in requested:
        target = project.target_named(name)
        if target is None:
            warning(f"No target named '{name}' in project {project.id}")
        elif target not in selected:
            selected.append(target)

    if not selected:
        selected = list(project.targets)

    result = []
    for target in selected:
        if is_peer_name(target.name):
            debug(f"Ignoring peer target {target.name}")
        elif not target.is_source_module:
            debug(f"Ignoring {target.kind.value} target {target.name}")
        else:
            result.append(target)
    return result


# "ordinary" is the generic name for a non-test source module.
_KIND_ALIASES = {"ordinary": "regular"}


def _read_target(entry: Any, root: Path) -> SourceTarget:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise ProjectModelError(f"Target entry must be an object with a 'name': {entry!r}")

    name = str(entry["name"])
    kind = entry.get("kind", entry.get("type", "regular"))
    if isinstance(kind, str):
        kind = _KIND_ALIASES.get(kind, kind)
    directory = entry.get("directory") or entry.get("path")
    if directory is None:
        prefix = "Tests" if kind == "test" else "Sources"
        directory = f"{prefix}/{name}"

    raw_deps = entry.get("dependencies") or []
    if not isinstance(raw_deps, list):
        raise ProjectModelError(f"Dependencies of target {name} must be a list")

    try:
        return SourceTarget(
            name=name,
            kind=kind,
            directory=_resolve(root, directory),
            dependencies=[parse_dependency(dep) for dep in raw_deps],
        )
    except ValidationError as exc:
        raise ProjectModelError(f"Invalid target {name}: {exc}") from exc


def parse_dependency(entry: Any) -> DependencyEdge:
    """Classify one raw dependency entry into a :data:`DependencyEdge` variant."""
    if isinstance(entry, str) and entry:
        return TargetDependency(name=entry)
    if isinstance(entry, dict):
        kind = entry.get("type")
        if kind == "target" and entry.get("name"):
            return TargetDependency(name=str(entry["name"]))
        if kind == "product" and entry.get("name") and entry.get("package"):
            return ProductDependency(name=str(entry["name"]), package=str(entry["package"]))
        if kind is None and entry.get("target"):
            return TargetDependency(name=str(entry["target"]))
        if kind is None and entry.get("product") and entry.get("package"):
            return ProductDependency(name=str(entry["product"]), package=str(entry["package"]))
    return UnknownDependency(raw=entry)


def _resolve(base: Path, value: Any) -> Path:
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = base / path
    return Path(path)
