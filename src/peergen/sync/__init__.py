"""Output link synchronization for the ``Packages/Skip`` folder.

See :mod:`peergen.sync.links` for the reconciliation rules.
"""

from peergen.sync.links import (
    SyncReport,
    links_root_directory,
    package_output_directory,
    synchronize_links,
)

__all__ = [
    "SyncReport",
    "links_root_directory",
    "package_output_directory",
    "synchronize_links",
]
