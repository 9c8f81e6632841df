"""Render peer declarations into the managed block of ``Package.swift``.

The descriptor is treated as *prefix text + marker + managed block*. The
prefix is arbitrary and never parsed; the block after the marker is owned
by peergen and regenerated wholesale on every run. :func:`render_fragment`
is pure text generation; :func:`apply_fragment` performs the in-place
edit.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from peergen.config import atomic_write
from peergen.exceptions import FileAccessError
from peergen.models import BuildOption, Conventions, PeerDependency, PeerTargetPlan
from peergen.output import info


_PRODUCT_TEMPLATE = '''\

package.products += [
    .library(name: "{peer}", targets: ["{peer}"])
]
'''

_TARGET_TEMPLATE = '''\

package.targets += [
    .{declaration}(name: "{peer}", dependencies: [
{dependencies}    ],
    {clauses})
]

'''

_PREFLIGHT_TEMPLATE = '''\

for target in package.targets where [{names}].contains(target.name) {{
    target.plugins = (target.plugins ?? []) + [.plugin(name: "{plugin}", package: "{package}")]
}}

'''


def render_fragment(
    plans: list[PeerTargetPlan],
    conventions: Conventions,
    options: BuildOption = BuildOption.DEFAULT,
) -> str:
    """Render the marker block for *plans*, in plan order.

    The result starts with ``conventions.marker`` and is byte-identical
    for identical input. Declarations are emitted only with
    :attr:`BuildOption.TARGETS`; :attr:`BuildOption.PREFLIGHT` appends a
    statement attaching the preflight plugin to the source targets.
    """
    parts = [conventions.marker, "\n\n"]

    if BuildOption.TARGETS in options:
        for plan in plans:
            parts.append(render_declaration(plan))

    if BuildOption.PREFLIGHT in options and plans:
        names = ", ".join(f'"{plan.source_name}"' for plan in plans)
        parts.append(
            _PREFLIGHT_TEMPLATE.format(
                names=names,
                plugin=conventions.preflight_plugin,
                package=conventions.plugin_package,
            )
        )

    return "".join(parts)


def render_declaration(plan: PeerTargetPlan) -> str:
    """Render the product and target declarations for one plan."""
    text = ""
    if not plan.is_test:
        text += _PRODUCT_TEMPLATE.format(peer=plan.peer_name)

    clauses = ["resources: [" + ", ".join(f'.copy("{r}")' for r in plan.resources) + "]"]
    if plan.plugins:
        plugins = ", ".join(
            f'.plugin(name: "{p.name}", package: "{p.package}")' for p in plan.plugins
        )
        clauses.append(f"plugins: [{plugins}]")

    text += _TARGET_TEMPLATE.format(
        declaration="testTarget" if plan.is_test else "target",
        peer=plan.peer_name,
        dependencies="".join(f"        {_dependency(dep)},\n" for dep in plan.dependencies),
        clauses=",\n    ".join(clauses),
    )
    return text


def _dependency(dep: PeerDependency) -> str:
    if dep.is_product:
        return f'.product(name: "{dep.name}", package: "{dep.package}")'
    return f'.target(name: "{dep.name}")'


def apply_fragment(descriptor: Path, fragment: str, marker: str) -> str:
    """Replace the managed block of *descriptor* with *fragment*.

    Everything before the first occurrence of *marker* is kept as is (the
    whole file when the marker is absent), a newline is added if the kept
    text does not end with one, and *fragment* is appended using the
    kept text's line endings (CRLF when the prefix contains any). The file
    is rewritten atomically in the encoding it was read with.

    Returns:
        The new file contents.

    Raises:
        FileAccessError: If the descriptor cannot be read, decoded or written.
    """
    try:
        raw = descriptor.read_bytes()
    except OSError as exc:
        raise FileAccessError(descriptor, "read", exc.strerror or exc) from exc

    encoding = detect_encoding(raw)
    try:
        text = raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise FileAccessError(descriptor, f"decode ({encoding})", exc) from exc

    prefix = text.split(marker, 1)[0]
    newline = "\r\n" if "\r\n" in prefix else "\n"
    if prefix and not prefix.endswith("\n"):
        prefix += newline
    if newline != "\n":
        fragment = fragment.replace("\r\n", "\n").replace("\n", newline)
    updated = prefix + fragment

    try:
        atomic_write(descriptor, updated, encoding=encoding)
    except (OSError, UnicodeEncodeError) as exc:
        raise FileAccessError(descriptor, "write", exc) from exc

    info(f"Updated {descriptor.name} with peer targets")
    return updated


_BOM_ENCODINGS = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def detect_encoding(raw: bytes) -> str:
    """Guess the text encoding of *raw*.

    A byte-order mark wins. The BOM itself is decoded as ``U+FEFF`` and so
    survives a decode/encode round trip with the returned codec. Without a
    BOM, UTF-8 is used when the bytes are valid UTF-8, Latin-1 otherwise.
    """
    for bom, encoding in _BOM_ENCODINGS:
        if raw.startswith(bom):
            return encoding
    try:
        raw.decode("utf-8")
    except UnicodeDecodeError:
        return "latin-1"
    return "utf-8"
