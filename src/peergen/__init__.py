"""peergen -- Synthesize Kotlin peer targets for a Swift package and keep their output links in sync.

Given a package's target dependency graph, peergen derives one *peer*
target per source or test module, renders the ``Package.swift`` block that
declares those peers, scaffolds the files each peer needs to build, and
maintains a ``Packages/Skip`` directory of symbolic links into the
transpiler's generated Gradle projects.

Typical workflow::

    peergen init --project project.json   # plan, scaffold, edit Package.swift, link
    peergen sync --project project.json   # refresh the output links after a build

Modules:
    app: Typer application factory and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration and naming conventions.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
