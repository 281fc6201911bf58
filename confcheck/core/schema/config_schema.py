"""
ConfigSchema: an ordered table of FieldSpecs.

A schema is what the engine validates a record against. Schemas coming from
different sources (core settings, daemon settings, plugin settings) can be
merged into one.
"""

from collections.abc import Iterable, Iterator

from confcheck.core.errors import ConfigurationError
from confcheck.core.models import FieldSpec, Rule


class ConfigSchema:
    """
    Ordered collection of FieldSpecs keyed by field name.

    Field names are unique; use merge() to combine rules from several
    schemas that describe the same key.
    """

    def __init__(self, fields: Iterable[FieldSpec] = (), name: str = "config"):
        """
        Initialize schema.

        Args:
            fields: FieldSpecs in declaration order
            name: Label used in logs

        Raises:
            ConfigurationError: If two FieldSpecs share a name
        """
        self.name = name
        self._fields: dict[str, FieldSpec] = {}
        for spec in fields:
            if spec.name in self._fields:
                raise ConfigurationError(f"Field '{spec.name}' is declared twice in schema '{name}'")
            self._fields[spec.name] = spec

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._fields

    def __getitem__(self, field_name: str) -> FieldSpec:
        return self._fields[field_name]

    @property
    def field_names(self) -> list[str]:
        return list(self._fields)

    def rules(self) -> Iterator[Rule]:
        """Every top-level rule in the schema."""
        for spec in self._fields.values():
            yield from spec.rules

    def merge(self, other: "ConfigSchema") -> "ConfigSchema":
        """
        Combine two schemas into a new one.

        Fields only in one schema are kept as-is. For fields in both, the
        rules of this schema come first, followed by the other's, and the
        field is secret if either side marks it secret.

        Args:
            other: Schema to merge in

        Returns:
            A new ConfigSchema; neither input is modified
        """
        merged = dict(self._fields)
        for spec in other:
            existing = merged.get(spec.name)
            if existing is None:
                merged[spec.name] = spec
            else:
                merged[spec.name] = FieldSpec(
                    name=spec.name,
                    rules=existing.rules + spec.rules,
                    secret=existing.secret or spec.secret,
                )
        return ConfigSchema(merged.values(), name=f"{self.name}+{other.name}")

    def __repr__(self) -> str:
        return f"ConfigSchema(name={self.name!r}, fields={len(self)})"
