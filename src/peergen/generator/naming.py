"""Peer naming rules.

A source target ``Foo`` gets the library peer ``FooKt``; a test target
``FooTests`` gets the test peer ``FooKtTests``. Products vended by other
packages follow the library rule (``Bar`` -> ``BarKt``).
"""

from __future__ import annotations

from peergen.models import PeerKind, SourceTarget

PEER_SUFFIX = "Kt"
TEST_SUFFIX = "Tests"
PEER_TEST_SUFFIX = PEER_SUFFIX + TEST_SUFFIX


def classify(target: SourceTarget) -> tuple[str, PeerKind, str]:
    """Derive ``(peer_name, peer_kind, base_name)`` for a source target.

    A test target whose name does not end in ``Tests`` keeps its full name
    as the base name; :func:`has_test_suffix` lets callers report it.

    Example::

        classify(SourceTarget(name="Foo", directory=...))
        # ("FooKt", PeerKind.LIBRARY, "Foo")
        classify(SourceTarget(name="FooTests", kind="test", directory=...))
        # ("FooKtTests", PeerKind.TEST, "Foo")
    """
    if target.is_test:
        base_name = strip_test_suffix(target.name)
        return base_name + PEER_TEST_SUFFIX, PeerKind.TEST, base_name
    return target.name + PEER_SUFFIX, PeerKind.LIBRARY, target.name


def has_test_suffix(name: str) -> bool:
    return name.endswith(TEST_SUFFIX) and len(name) > len(TEST_SUFFIX)


def strip_test_suffix(name: str) -> str:
    if has_test_suffix(name):
        return name[: -len(TEST_SUFFIX)]
    return name


def product_peer_name(product: str) -> str:
    return product + PEER_SUFFIX


def is_peer_name(name: str) -> bool:
    """True for names that already denote a peer (``...Kt`` or ``...KtTests``)."""
    return name.endswith(PEER_SUFFIX) or name.endswith(PEER_TEST_SUFFIX)
