"""
Unit tests for type oracles and import-path helpers.
"""

import collections
import collections.abc
from typing import Protocol, runtime_checkable

import pytest

from confcheck.core.rules import ImportTypeOracle, MappingTypeOracle, TypeOracle
from confcheck.utils.imports import import_object, is_dotted_path


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None:
        ...


class FileLike:
    def close(self) -> None:
        pass


class TestImportTypeOracle:
    """Tests for ImportTypeOracle"""

    def test_satisfies_protocol(self):
        assert isinstance(ImportTypeOracle(), TypeOracle)
        assert isinstance(MappingTypeOracle({}), TypeOracle)

    def test_subtype_by_name(self):
        oracle = ImportTypeOracle()

        assert oracle.is_subtype("collections.OrderedDict", "dict")
        assert oracle.is_subtype("bool", "int")
        assert not oracle.is_subtype("int", "bool")

    def test_subtype_of_itself(self):
        assert ImportTypeOracle().is_subtype(dict, dict)

    def test_abc_capabilities(self):
        """Test ABCs with subclass hooks count as implemented"""
        oracle = ImportTypeOracle()

        assert oracle.implements("builtins.list", "collections.abc.Sized")
        assert oracle.implements(collections.deque, collections.abc.MutableSequence)
        assert not oracle.implements("builtins.int", collections.abc.Iterable)

    def test_runtime_checkable_protocol(self):
        oracle = ImportTypeOracle()

        assert oracle.implements(FileLike, Closeable)
        assert not oracle.implements(int, Closeable)

    def test_unknown_name(self):
        with pytest.raises(LookupError):
            ImportTypeOracle().is_subtype("no_such_module.Thing", "object")

    def test_non_class_rejected(self):
        with pytest.raises(LookupError):
            ImportTypeOracle().resolve("os.path.join")


class TestMappingTypeOracle:
    """Tests for MappingTypeOracle"""

    @pytest.fixture
    def oracle(self):
        return MappingTypeOracle({
            "GzipCodec": ["Codec"],
            "Codec": ["Serializable"],
            "A": ["B"],
            "B": ["A"],
        })

    def test_transitive(self, oracle):
        assert oracle.is_subtype("GzipCodec", "Serializable")
        assert oracle.implements("GzipCodec", "Codec")
        assert not oracle.is_subtype("Serializable", "GzipCodec")

    def test_cycles_terminate(self, oracle):
        assert oracle.is_subtype("A", "B")
        assert not oracle.is_subtype("A", "Codec")

    def test_unknown_type(self, oracle):
        with pytest.raises(LookupError):
            oracle.is_subtype("Missing", "Codec")

    def test_type_objects_use_qualified_names(self):
        oracle = MappingTypeOracle({f"{__name__}.FileLike": ["io.Closeable"]})
        assert oracle.implements(FileLike, "io.Closeable")


class TestImportHelpers:
    """Tests for import path utilities"""

    @pytest.mark.parametrize("path", ["os", "collections.abc.Mapping", "_private.x1"])
    def test_dotted_paths(self, path):
        assert is_dotted_path(path)

    @pytest.mark.parametrize("path", ["", "a b", "a..b", "1abc", ".a", None])
    def test_not_dotted_paths(self, path):
        assert not is_dotted_path(path)

    def test_import_nested_attribute(self):
        assert import_object("collections.abc.Mapping") is collections.abc.Mapping
        assert import_object("collections.OrderedDict.fromkeys") == collections.OrderedDict.fromkeys

    def test_builtin_names(self):
        assert import_object("int") is int

    def test_missing_attribute(self):
        with pytest.raises(LookupError) as exc_info:
            import_object("collections.NoSuchThing")

        assert "collections" in str(exc_info.value)

    def test_malformed_path(self):
        with pytest.raises(LookupError):
            import_object("not a path")
