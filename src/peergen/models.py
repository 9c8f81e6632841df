"""Canonical Pydantic models shared across all peergen modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Host project model** -- read-only input describing the Swift package:
    :class:`TargetKind`, :class:`TargetDependency`,
    :class:`ProductDependency`, :class:`UnknownDependency`,
    :class:`SourceTarget`, and :class:`ProjectModel`.

**Synthesized models** -- built fresh on every run and never persisted:
    :class:`PeerKind`, :class:`PeerDependency`, :class:`PluginReference`,
    :class:`PeerTargetPlan`, :class:`ScaffoldEntry`, and
    :class:`BuildOption`.

**Configuration models** -- serialised as JSON in the user's config
directory or the project's ``peergen.json``:
    :class:`Conventions`, :class:`OutputConfig`, and :class:`GlobalConfig`.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# --- Host project model ---


class TargetKind(str, enum.Enum):
    """Kinds of build target a host project can declare.

    Only source-module kinds are mirrored by peers; ``binary`` and
    ``system`` targets wrap prebuilt artifacts and are never selected.
    Project files may spell ``regular`` as ``ordinary``.
    """

    REGULAR = "regular"
    EXECUTABLE = "executable"
    TEST = "test"
    MACRO = "macro"
    PLUGIN = "plugin"
    SNIPPET = "snippet"
    BINARY = "binary"
    SYSTEM = "system"


NON_SOURCE_KINDS = frozenset({TargetKind.BINARY, TargetKind.SYSTEM})


class TargetDependency(BaseModel):
    """A dependency edge on another target of the same project."""

    model_config = ConfigDict(frozen=True)

    type: Literal["target"] = "target"
    name: str


class ProductDependency(BaseModel):
    """A dependency edge on a product vended by another package."""

    model_config = ConfigDict(frozen=True)

    type: Literal["product"] = "product"
    name: str
    package: str = Field(description="Identifier of the package owning the product")


class UnknownDependency(BaseModel):
    """A dependency edge the reader could not classify.

    Kept in the model rather than dropped so the planner can report it;
    the planner skips it with a diagnostic.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["unknown"] = "unknown"
    raw: Any = None


DependencyEdge = Annotated[
    Union[TargetDependency, ProductDependency, UnknownDependency],
    Field(discriminator="type"),
]


class SourceTarget(BaseModel):
    """A build module as known to the host project."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: TargetKind = TargetKind.REGULAR
    directory: Path
    dependencies: list[DependencyEdge] = Field(default_factory=list)

    @property
    def is_test(self) -> bool:
        return self.kind == TargetKind.TEST

    @property
    def is_source_module(self) -> bool:
        return self.kind not in NON_SOURCE_KINDS


class ProjectModel(BaseModel):
    """The host project: identity, root directory, and its targets.

    ``work_directory`` is the external build's per-invocation working
    directory. When present, the package output directory is derived from
    it; see :func:`~peergen.sync.links.package_output_directory`.
    """

    id: str
    name: Optional[str] = None
    directory: Path
    work_directory: Optional[Path] = None
    targets: list[SourceTarget] = Field(default_factory=list)

    def target_named(self, name: str) -> Optional[SourceTarget]:
        for target in self.targets:
            if target.name == name:
                return target
        return None


# --- Synthesized models ---


class PeerKind(str, enum.Enum):
    """The two kinds of synthesized peer target."""

    LIBRARY = "library"
    TEST = "test"


class PeerDependency(BaseModel):
    """A dependency of a peer target.

    A plain target reference when ``package`` is ``None``, otherwise a
    product vended by ``package``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    package: Optional[str] = None

    @property
    def is_product(self) -> bool:
        return self.package is not None


class PluginReference(BaseModel):
    """A build-tool plugin attached to a peer target."""

    model_config = ConfigDict(frozen=True)

    name: str
    package: str


class PeerTargetPlan(BaseModel):
    """Everything needed to declare, scaffold and link one peer target.

    ``peer_name`` is a pure function of ``(base_name, kind)``:
    ``<base>Kt`` for libraries and ``<base>KtTests`` for tests.
    """

    model_config = ConfigDict(frozen=True)

    peer_name: str
    kind: PeerKind
    base_name: str
    source_name: str
    dependencies: list[PeerDependency] = Field(default_factory=list)
    resources: list[str] = Field(
        default_factory=list, description="Directories copied as resources"
    )
    plugins: list[PluginReference] = Field(default_factory=list)
    scaffold_directory: Path
    output_directory: Path

    @property
    def is_test(self) -> bool:
        return self.kind == PeerKind.TEST


class ScaffoldEntry(BaseModel):
    """A file that must exist after scaffolding, with its initial content."""

    model_config = ConfigDict(frozen=True)

    path: Path
    content: str


class BuildOption(enum.Flag):
    """The steps a run performs, combined as a bit set."""

    NONE = 0
    PROJECT = 1 << 0
    """Emit the setup guide (declarations plus manual scaffold commands)."""
    SCAFFOLD = 1 << 1
    """Create the peer directories and stub files."""
    PREFLIGHT = 1 << 2
    """Attach the preflight plugin to each selected source target."""
    TRANSPILE = 1 << 3
    """Attach the transpile plugin to each peer target."""
    TARGETS = 1 << 4
    """Declare the peer products and targets in the marker block."""
    INPLACE = 1 << 5
    """Write the marker block into the descriptor instead of only printing it."""
    LINK = 1 << 6
    """Synchronize the output links directory."""
    DEFAULT = PROJECT | SCAFFOLD | PREFLIGHT | TRANSPILE | TARGETS | INPLACE | LINK


SINGLE_OPTIONS: tuple[BuildOption, ...] = (
    BuildOption.PROJECT,
    BuildOption.SCAFFOLD,
    BuildOption.PREFLIGHT,
    BuildOption.TRANSPILE,
    BuildOption.TARGETS,
    BuildOption.INPLACE,
    BuildOption.LINK,
)


def option_names(options: BuildOption) -> list[str]:
    """Return the lower-case names of the single options set in *options*."""
    return [o.name.lower() for o in SINGLE_OPTIONS if o in options]


# --- Configuration models ---


class Conventions(BaseModel):
    """Naming constants shared by the planner, generators and synchronizer.

    Every field can be overridden from the global config's ``conventions``
    block or from the project-local ``peergen.json``.
    """

    model_config = ConfigDict(extra="forbid")

    marker: str = Field(
        default="// MARK: Skip Kotlin Peer Targets",
        description="Comment line delimiting the managed block in the descriptor",
    )
    descriptor: str = Field(
        default="Package.swift", description="Build descriptor file at the project root"
    )
    links_root: str = Field(
        default="Packages/Skip", description="Links directory, relative to the project root"
    )
    output_base: str = Field(
        default=".build/plugins/outputs",
        description="Directory holding <project-id>.output when no work directory is known",
    )
    output_subdir: str = Field(
        default="skip-transpiler", description="Per-peer subdirectory holding the Gradle project"
    )
    output_settings: str = Field(
        default="settings.gradle.kts", description="Gradle settings file linked for each peer"
    )
    resource_dir: str = Field(default="Skip", description="Peer resource directory name")
    settings_file: str = Field(default="skip.yml", description="Per-peer settings file name")
    runtime_product: str = "SkipFoundationKt"
    test_product: str = "SkipUnitKt"
    products_package: str = "skiphub"
    plugin_package: str = "skip"
    transpile_plugin: str = "transpile"
    preflight_plugin: str = "preflight"


class OutputConfig(BaseModel):
    """Default output preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/peergen/config.json``.

    Loaded and saved by :func:`~peergen.config.load_global_config` and
    :func:`~peergen.config.save_global_config`. These values have the
    lowest precedence; see :func:`~peergen.config.resolve_config`.
    """

    project: Optional[str] = Field(
        default=None, description="Default project model source (file, URL or '-')"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    conventions: Conventions = Field(default_factory=Conventions)
