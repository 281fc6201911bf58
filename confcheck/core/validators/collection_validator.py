"""
Collection validators - list and map entry checks, duplicates, and
serializer registration lists.

Entry checks look at one level of entries only. Empty lists and maps pass.
"""

from confcheck.core.errors import RuleViolation
from confcheck.core.models import RuleKind, Value, ValueKind

from .base_validator import BaseValidator, ValidationContext


def _require_list(value: Value, context: ValidationContext) -> None:
    if not value.is_list:
        raise RuleViolation(f"must be a list, got {context.describe(value)}")


def _require_map(value: Value, context: ValidationContext) -> None:
    if not value.is_map:
        raise RuleViolation(f"must be a map, got {context.describe(value)}")


class ListEntryTypeValidator(BaseValidator):
    """
    Validates that a value is a list whose entries all match a type.

    Null entries never match.

    Parameters:
    - type: ValueType every entry must match
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        _require_list(value, context)

        bad = [
            f"[{i}] {context.describe(entry)}"
            for i, entry in enumerate(value.entries)
            if entry.is_null or not params.type.matches(entry)
        ]
        if bad:
            raise RuleViolation(
                f"must be a list of {params.type.value} entries, bad entries: {', '.join(bad)}"
            )

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_LIST_ENTRY_TYPE


class StringListValidator(ListEntryTypeValidator):
    """ListEntryTypeValidator whose entry type defaults to string."""

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_STRING_LIST


class NoDuplicateInListValidator(BaseValidator):
    """Validates that no two entries of a list are equal (maps compare regardless of key order)."""

    def check(self, value: Value, params, context: ValidationContext) -> None:
        _require_list(value, context)

        seen: list[Value] = []
        repeated: list[Value] = []
        for entry in value.entries:
            if entry in seen:
                if entry not in repeated:
                    repeated.append(entry)
            else:
                seen.append(entry)

        if repeated:
            shown = ", ".join(context.display(entry) for entry in repeated)
            raise RuleViolation(f"must not contain duplicates, repeated: {shown}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_NO_DUPLICATE_IN_LIST


class ListEntryCustomValidator(BaseValidator):
    """
    Validates every list entry against every nested rule.

    Nested rules see each entry on its own, never the list as a whole.

    Parameters:
    - entry_rules: Rules each entry must pass
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        _require_list(value, context)

        problems = []
        for i, entry in enumerate(value.entries):
            for rule in params.entry_rules:
                violation = context.evaluate(rule, entry)
                if violation is not None:
                    problems.append(f"[{i}] {rule}: {violation.message}")

        if problems:
            raise RuleViolation(f"has invalid entries: {'; '.join(problems)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_LIST_ENTRY_CUSTOM


class MapEntryTypeValidator(BaseValidator):
    """
    Validates that a value is a map with typed keys and values.

    Parameters:
    - key_type: ValueType every key must match
    - value_type: ValueType every value must match
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        _require_map(value, context)

        problems = []
        for key, val in value.items:
            if key.is_null or not params.key_type.matches(key):
                problems.append(f"key {context.display(key)} must be {params.key_type.label}")
            if val.is_null or not params.value_type.matches(val):
                problems.append(
                    f"value for key {context.display(key)} must be {params.value_type.label}, "
                    f"got {context.describe(val)}"
                )

        if problems:
            raise RuleViolation("; ".join(problems))

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_MAP_ENTRY_TYPE


class MapEntryCustomValidator(BaseValidator):
    """
    Validates map keys and values against nested rules.

    Parameters:
    - key_rules: Rules every key must pass
    - value_rules: Rules every value must pass
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        _require_map(value, context)

        problems = []
        for key, val in value.items:
            for rule in params.key_rules:
                violation = context.evaluate(rule, key)
                if violation is not None:
                    problems.append(f"key {context.display(key)} {rule}: {violation.message}")
            for rule in params.value_rules:
                violation = context.evaluate(rule, val)
                if violation is not None:
                    problems.append(f"value for key {context.display(key)} {rule}: {violation.message}")

        if problems:
            raise RuleViolation(f"has invalid entries: {'; '.join(problems)}")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_MAP_ENTRY_CUSTOM


class KryoRegValidator(BaseValidator):
    """
    Validates serializer registrations.

    Accepted shapes:
    - a list whose entries are class names, or maps of class name to options
    - a single map of class name to options (when allow_map_form is set)

    Parameters:
    - option_kinds: Value kinds accepted as registration options
    - allow_map_form: Accept the top-level map form
    """

    def check(self, value: Value, params, context: ValidationContext) -> None:
        problems = []
        if value.is_list:
            for i, entry in enumerate(value.entries):
                if entry.is_string:
                    continue
                if entry.is_map:
                    problems.extend(
                        f"[{i}] {p}" for p in self._check_pairs(entry, params.option_kinds, context)
                    )
                else:
                    problems.append(
                        f"[{i}] must be a class name or a name-to-options map, "
                        f"got {context.describe(entry)}"
                    )
        elif value.is_map and params.allow_map_form:
            problems.extend(self._check_pairs(value, params.option_kinds, context))
        else:
            raise RuleViolation(
                f"must be a list of serializer registrations, got {context.describe(value)}"
            )

        if problems:
            raise RuleViolation(f"has invalid registrations: {'; '.join(problems)}")

    def _check_pairs(
        self, mapping: Value, option_kinds: frozenset[ValueKind], context: ValidationContext
    ) -> list[str]:
        problems = []
        for name, options in mapping.items:
            if not name.is_string:
                problems.append(f"class name must be a string, got {context.describe(name)}")
            elif options.kind not in option_kinds:
                allowed = ", ".join(sorted(kind.value for kind in option_kinds))
                problems.append(
                    f"options for {context.display(name)} must be one of ({allowed}), "
                    f"got {context.describe(options)}"
                )
        return problems

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.IS_KRYO_REG
