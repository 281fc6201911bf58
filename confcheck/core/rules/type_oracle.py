"""
Type oracles answer the two questions the type-relationship rules ask:
"is A a subtype of B" and "does A implement capability B".

Types are referenced either by object or by name. ImportTypeOracle resolves
names as Python import paths; MappingTypeOracle answers from an explicit
hierarchy table for type systems the Python interpreter does not know about.
"""

from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from confcheck.utils.imports import import_object

TypeRef = str | type


@runtime_checkable
class TypeOracle(Protocol):
    """
    Protocol for type-relationship lookups.

    Implementations raise LookupError when a referenced type is unknown.
    """

    def is_subtype(self, candidate: TypeRef, base: TypeRef) -> bool:
        ...

    def implements(self, candidate: TypeRef, capability: TypeRef) -> bool:
        ...


class ImportTypeOracle:
    """
    Resolves dotted names with importlib and compares with issubclass().

    ABCs with __subclasshook__ and runtime-checkable protocols count as
    implemented when issubclass() says so.
    """

    def resolve(self, ref: TypeRef) -> type:
        """
        Turn a type reference into a class.

        Raises:
            LookupError: If the name cannot be imported or is not a class
        """
        obj = import_object(ref) if isinstance(ref, str) else ref
        if not isinstance(obj, type):
            raise LookupError(f"'{ref}' does not refer to a class")
        return obj

    def is_subtype(self, candidate: TypeRef, base: TypeRef) -> bool:
        return self._issubclass(self.resolve(candidate), self.resolve(base))

    def implements(self, candidate: TypeRef, capability: TypeRef) -> bool:
        return self._issubclass(self.resolve(candidate), self.resolve(capability))

    @staticmethod
    def _issubclass(candidate: type, base: type) -> bool:
        try:
            return issubclass(candidate, base)
        except TypeError:
            # Protocols with non-method members reject issubclass()
            return False


class MappingTypeOracle:
    """
    Answers from an explicit table of type name -> direct supertypes.

    Capabilities are treated as supertypes, so implements() and
    is_subtype() share the same transitive lookup.

        oracle = MappingTypeOracle({
            "GzipCodec": ["Codec"],
            "Codec": ["Serializable"],
        })
        oracle.is_subtype("GzipCodec", "Serializable")  # True
    """

    def __init__(self, hierarchy: Mapping[str, Iterable[str]]):
        self.hierarchy: dict[str, tuple[str, ...]] = {
            name: tuple(parents) for name, parents in hierarchy.items()
        }

    def _name(self, ref: TypeRef) -> str:
        name = f"{ref.__module__}.{ref.__qualname__}" if isinstance(ref, type) else ref
        if name not in self.hierarchy and not self._is_known_parent(name):
            raise LookupError(f"unknown type '{name}'")
        return name

    def _is_known_parent(self, name: str) -> bool:
        return any(name in parents for parents in self.hierarchy.values())

    def is_subtype(self, candidate: TypeRef, base: TypeRef) -> bool:
        start, target = self._name(candidate), self._name(base)
        pending, visited = [start], set()
        while pending:
            name = pending.pop()
            if name == target:
                return True
            if name in visited:
                continue
            visited.add(name)
            pending.extend(self.hierarchy.get(name, ()))
        return False

    def implements(self, candidate: TypeRef, capability: TypeRef) -> bool:
        return self.is_subtype(candidate, capability)
