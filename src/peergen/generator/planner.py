"""Peer target planner -- one :class:`~peergen.models.PeerTargetPlan` per source target.

The planner is the only place that walks the dependency graph. Every
other component (fragment rendering, scaffolding, link synchronization)
consumes the plan list it returns, so ordering decided here is the
ordering of every generated artifact.

Targets are sorted by name before planning: the host's enumeration order
is unspecified and must not leak into generated text.
"""

from __future__ import annotations

from typing import Iterable

from peergen.generator.naming import (
    classify,
    has_test_suffix,
    product_peer_name,
)
from peergen.models import (
    BuildOption,
    Conventions,
    PeerDependency,
    PeerKind,
    PeerTargetPlan,
    PluginReference,
    ProductDependency,
    ProjectModel,
    SourceTarget,
    TargetDependency,
)
from peergen.output import debug, warning
from peergen.sync.links import package_output_directory


def plan_targets(
    project: ProjectModel,
    targets: Iterable[SourceTarget],
    conventions: Conventions,
    options: BuildOption = BuildOption.DEFAULT,
) -> list[PeerTargetPlan]:
    """Plan a peer for every target in *targets*, sorted by target name.

    Args:
        project: The host project, used to look up dependency kinds and
            to locate the build output directory.
        targets: The selected source targets (see
            :func:`~peergen.project.reader.select_targets`).
        conventions: Naming constants for products, plugins and paths.
        options: Only :attr:`BuildOption.TRANSPILE` is consulted here; it
            controls whether peers carry the transpile plugin.

    Returns:
        The plan list in name order, one entry per peer name. Targets
        whose peer name is already taken are skipped with a warning.
    """
    output_root = package_output_directory(project, conventions)
    candidates = [
        _plan_target(project, target, conventions, options, output_root)
        for target in sorted(targets, key=lambda t: t.name)
    ]

    # One plan per peer name. A test target named without the Tests suffix
    # yields to a correctly named one, otherwise the first by name wins.
    claimed: dict[str, PeerTargetPlan] = {}
    for plan in sorted(candidates, key=lambda p: (not _well_named(p), p.source_name)):
        owner = claimed.get(plan.peer_name)
        if owner is None:
            claimed[plan.peer_name] = plan
        else:
            warning(
                f"Skipping target '{plan.source_name}': peer name '{plan.peer_name}' "
                f"is already used by '{owner.source_name}'"
            )
    return [plan for plan in candidates if claimed[plan.peer_name] is plan]


def _well_named(plan: PeerTargetPlan) -> bool:
    return not plan.is_test or has_test_suffix(plan.source_name)


def _plan_target(project, target, conventions, options, output_root) -> PeerTargetPlan:
    peer_name, kind, base_name = classify(target)
    if kind == PeerKind.TEST and not has_test_suffix(target.name):
        warning(
            f"Test target '{target.name}' does not end in 'Tests'; "
            f"using '{peer_name}' as its peer name"
        )

    dependencies: list[PeerDependency] = []
    if kind == PeerKind.LIBRARY:
        dependencies.append(PeerDependency(name=target.name))
    dependencies.extend(map_dependencies(project, target))
    if kind == PeerKind.LIBRARY:
        dependencies.append(
            PeerDependency(name=conventions.runtime_product, package=conventions.products_package)
        )
    else:
        dependencies.append(
            PeerDependency(name=conventions.test_product, package=conventions.products_package)
        )

    plugins = []
    if BuildOption.TRANSPILE in options:
        plugins.append(
            PluginReference(name=conventions.transpile_plugin, package=conventions.plugin_package)
        )

    plan = PeerTargetPlan(
        peer_name=peer_name,
        kind=kind,
        base_name=base_name,
        source_name=target.name,
        dependencies=_unique(dependencies),
        resources=[conventions.resource_dir],
        plugins=plugins,
        scaffold_directory=target.directory.parent / peer_name,
        output_directory=output_root / peer_name / conventions.output_subdir,
    )
    debug(f"Planned {plan.kind.value} peer {plan.peer_name} for {target.name}")
    return plan


def map_dependencies(project: ProjectModel, target: SourceTarget) -> list[PeerDependency]:
    """Map the edges of *target* to peer dependencies.

    Unknown edges and edges to binary or system targets are skipped with a
    warning.
    """
    mapped = []
    for edge in target.dependencies:
        if isinstance(edge, TargetDependency):
            dependency = project.target_named(edge.name)
            if dependency is not None and not dependency.is_source_module:
                warning(
                    f"Skipping dependency of {target.name} on {dependency.kind.value} "
                    f"target {dependency.name}: it has no peer"
                )
                continue
            if dependency is not None:
                name, _, _ = classify(dependency)
            else:
                name = product_peer_name(edge.name)
            mapped.append(PeerDependency(name=name))
        elif isinstance(edge, ProductDependency):
            mapped.append(PeerDependency(name=product_peer_name(edge.name), package=edge.package))
        else:
            warning(f"Skipping unrecognized dependency of {target.name}: {getattr(edge, 'raw', edge)!r}")
    return mapped


def _unique(dependencies: list[PeerDependency]) -> list[PeerDependency]:
    seen = set()
    result = []
    for dep in dependencies:
        key = (dep.name, dep.package)
        if key not in seen:
            seen.add(key)
            result.append(dep)
    return result
