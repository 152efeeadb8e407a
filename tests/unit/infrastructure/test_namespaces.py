"""Tests for infrastructure/namespaces.py."""

import pytest

from decoratable.infrastructure.namespaces import (
    ChainedNamespace,
    ImportNamespace,
    MappingNamespace,
    default_namespace,
)
from decoratable.policies import POLICIES, count
from tests.factories import getter_offset


class TestMappingNamespace:
    """Tests for MappingNamespace."""

    def test_lookup(self) -> None:
        namespace = MappingNamespace({"offset": getter_offset})
        assert namespace.lookup("offset") is getter_offset
        assert namespace.lookup("missing") is None

    def test_names(self) -> None:
        assert MappingNamespace({"offset": getter_offset}).names == frozenset({"offset"})

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeError, match="must be callable"):
            MappingNamespace({"bad": 3})  # type: ignore[dict-item]

    def test_copy_of_entries(self) -> None:
        entries = {"offset": getter_offset}
        namespace = MappingNamespace(entries)
        entries["other"] = getter_offset
        assert namespace.lookup("other") is None


class TestImportNamespace:
    """Tests for ImportNamespace."""

    def test_module_attribute(self) -> None:
        assert ImportNamespace().lookup("tests.factories.getter_offset") is getter_offset

    def test_nested_package_attribute(self) -> None:
        assert ImportNamespace().lookup("decoratable.policies.observing.count") is count

    def test_undotted_name(self) -> None:
        assert ImportNamespace().lookup("count") is None

    def test_missing_attribute(self) -> None:
        assert ImportNamespace().lookup("tests.factories.nope") is None

    def test_missing_module(self) -> None:
        assert ImportNamespace().lookup("no_such_package_xyz.thing") is None

    def test_non_callable_target(self) -> None:
        assert ImportNamespace().lookup("decoratable.policies.POLICIES") is None


class TestChainedNamespace:
    """Tests for ChainedNamespace."""

    def test_first_answer_wins(self) -> None:
        chained = ChainedNamespace(MappingNamespace({"count": getter_offset}), MappingNamespace(POLICIES))
        assert chained.lookup("count") is getter_offset
        assert chained.lookup("nshot") is POLICIES["nshot"]

    def test_requires_namespaces(self) -> None:
        with pytest.raises(ValueError, match="at least one"):
            ChainedNamespace()


class TestDefaultNamespace:
    """Policies by bare name, then import paths."""

    def test_policies(self) -> None:
        assert default_namespace().lookup("count") is count

    def test_import_path(self) -> None:
        assert default_namespace().lookup("tests.factories.getter_offset") is getter_offset
