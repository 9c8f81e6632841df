"""Target graph reader -- load the host project model and select targets.

Sub-modules:

* :mod:`~peergen.project.loader` -- I/O layer (URL, file, stdin) with
  JSON/YAML detection.
* :mod:`~peergen.project.reader` -- validation into a
  :class:`~peergen.models.ProjectModel` and ``--target`` selection.

Typical usage::

    from peergen.project import open_project, select_targets

    project = open_project("project.yaml")
    targets = select_targets(project, ["Hello"])
"""

from __future__ import annotations

from peergen.models import ProjectModel
from peergen.project.loader import load_project, source_base_directory
from peergen.project.reader import read_project, select_targets


def open_project(source: str) -> ProjectModel:
    """Load and validate the project model named by *source*."""
    return read_project(load_project(source), source_base_directory(source))


__all__ = ["load_project", "open_project", "read_project", "select_targets"]
