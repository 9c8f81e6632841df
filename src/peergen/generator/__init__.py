"""Peer generation -- naming, planning, and everything rendered from the plans.

This sub-package turns selected source targets into
:class:`~peergen.models.PeerTargetPlan` objects and produces the artifacts
derived from them:

* :mod:`~peergen.generator.naming` -- peer name and kind rules.
* :mod:`~peergen.generator.planner` -- the deterministic plan list.
* :mod:`~peergen.generator.fragment` -- the managed ``Package.swift``
  block and its in-place application.
* :mod:`~peergen.generator.scaffold` -- idempotent peer folders and stubs.
* :mod:`~peergen.generator.guide` -- the Markdown setup guide.
"""

from peergen.generator.fragment import apply_fragment, render_fragment
from peergen.generator.guide import render_guide
from peergen.generator.naming import classify
from peergen.generator.planner import plan_targets
from peergen.generator.scaffold import ScaffoldReport, scaffold_entries, write_scaffold

__all__ = [
    "ScaffoldReport",
    "apply_fragment",
    "classify",
    "plan_targets",
    "render_fragment",
    "render_guide",
    "scaffold_entries",
    "write_scaffold",
]
