"""Tests for peergen.generator.naming -- peer name and kind derivation."""

from __future__ import annotations

from pathlib import Path

import pytest

from peergen.generator.naming import (
    classify,
    has_test_suffix,
    is_peer_name,
    product_peer_name,
    strip_test_suffix,
)
from peergen.models import PeerKind, SourceTarget, TargetKind


def _target(name: str, kind: TargetKind = TargetKind.REGULAR) -> SourceTarget:
    return SourceTarget(name=name, kind=kind, directory=Path("/pkg/Sources") / name)


class TestClassify:
    def test_library_target(self) -> None:
        assert classify(_target("Foo")) == ("FooKt", PeerKind.LIBRARY, "Foo")

    def test_test_target(self) -> None:
        assert classify(_target("FooTests", TargetKind.TEST)) == (
            "FooKtTests",
            PeerKind.TEST,
            "Foo",
        )

    def test_executable_is_a_library_peer(self) -> None:
        assert classify(_target("Tool", TargetKind.EXECUTABLE)) == (
            "ToolKt",
            PeerKind.LIBRARY,
            "Tool",
        )

    def test_test_target_without_suffix_keeps_full_name(self) -> None:
        assert classify(_target("Integration", TargetKind.TEST)) == (
            "IntegrationKtTests",
            PeerKind.TEST,
            "Integration",
        )

    def test_test_target_named_only_tests(self) -> None:
        """A bare 'Tests' name has nothing left to strip."""
        assert classify(_target("Tests", TargetKind.TEST)) == (
            "TestsKtTests",
            PeerKind.TEST,
            "Tests",
        )

    def test_library_named_tests_is_not_stripped(self) -> None:
        """Only the kind decides test-ness, not the name."""
        assert classify(_target("HelperTests")) == (
            "HelperTestsKt",
            PeerKind.LIBRARY,
            "HelperTests",
        )

    def test_deterministic(self) -> None:
        target = _target("BarTests", TargetKind.TEST)
        assert classify(target) == classify(target)


class TestSuffixHelpers:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("FooTests", True), ("Foo", False), ("Tests", False), ("FooTest", False)],
    )
    def test_has_test_suffix(self, name: str, expected: bool) -> None:
        assert has_test_suffix(name) is expected

    def test_strip_test_suffix(self) -> None:
        assert strip_test_suffix("FooTests") == "Foo"
        assert strip_test_suffix("Foo") == "Foo"

    def test_product_peer_name(self) -> None:
        assert product_peer_name("Collections") == "CollectionsKt"

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("FooKt", True),
            ("FooKtTests", True),
            ("Foo", False),
            ("FooTests", False),
            ("Kotlin", False),
        ],
    )
    def test_is_peer_name(self, name: str, expected: bool) -> None:
        assert is_peer_name(name) is expected
