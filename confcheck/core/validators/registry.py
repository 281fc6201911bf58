"""
Validator registry: the fixed table from rule kind to validator.

The table is checked for completeness when the registry is built and is
read-only afterwards, so one registry can be shared by any number of
concurrent validations.
"""

from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType

from confcheck.core.errors import ConfigurationError
from confcheck.core.models import Rule, RuleKind

from .base_validator import BaseValidator
from .collection_validator import (
    KryoRegValidator,
    ListEntryCustomValidator,
    ListEntryTypeValidator,
    MapEntryCustomValidator,
    MapEntryTypeValidator,
    NoDuplicateInListValidator,
    StringListValidator,
)
from .custom_validator import CustomValidator, ExactlyOneOfValidator
from .number_validator import (
    IntegerValidator,
    LongValidator,
    NumberValidator,
    PositiveNumberValidator,
    PowerOf2Validator,
)
from .string_validator import StringOrStringListValidator, StringValidator
from .type_validator import (
    BooleanValidator,
    DerivedTypeValidator,
    ImplementsClassValidator,
    NotNullValidator,
    SimpleTypeValidator,
)

VALIDATOR_REGISTRY: Mapping[RuleKind, type[BaseValidator]] = {
    RuleKind.IS_TYPE: SimpleTypeValidator,
    RuleKind.IS_DERIVED_FROM: DerivedTypeValidator,
    RuleKind.IS_STRING: StringValidator,
    RuleKind.IS_STRING_LIST: StringListValidator,
    RuleKind.IS_LIST_ENTRY_TYPE: ListEntryTypeValidator,
    RuleKind.IS_NUMBER: NumberValidator,
    RuleKind.IS_BOOLEAN: BooleanValidator,
    RuleKind.IS_INTEGER: IntegerValidator,
    RuleKind.IS_LONG: LongValidator,
    RuleKind.NOT_NULL: NotNullValidator,
    RuleKind.IS_NO_DUPLICATE_IN_LIST: NoDuplicateInListValidator,
    RuleKind.IS_LIST_ENTRY_CUSTOM: ListEntryCustomValidator,
    RuleKind.IS_MAP_ENTRY_TYPE: MapEntryTypeValidator,
    RuleKind.IS_MAP_ENTRY_CUSTOM: MapEntryCustomValidator,
    RuleKind.IS_POSITIVE_NUMBER: PositiveNumberValidator,
    RuleKind.IS_IMPLEMENTATION_OF_CLASS: ImplementsClassValidator,
    RuleKind.IS_STRING_OR_STRING_LIST: StringOrStringListValidator,
    RuleKind.IS_KRYO_REG: KryoRegValidator,
    RuleKind.IS_POWER_OF_2: PowerOf2Validator,
    RuleKind.IS_EXACTLY_ONE_OF: ExactlyOneOfValidator,
    RuleKind.CUSTOM_VALIDATOR: CustomValidator,
}


class ValidatorRegistry:
    """
    Maps every RuleKind to the validator that implements it.
    """

    def __init__(self, validator_classes: Mapping[RuleKind, type[BaseValidator]] | None = None):
        """
        Build the registry.

        Args:
            validator_classes: Kind-to-class table (default: VALIDATOR_REGISTRY)

        Raises:
            ConfigurationError: If a kind has no validator, or a validator is
                                registered under a kind it does not implement
        """
        table = VALIDATOR_REGISTRY if validator_classes is None else validator_classes

        validators: dict[RuleKind, BaseValidator] = {}
        for kind, validator_class in table.items():
            try:
                validator = validator_class()
            except Exception as e:
                raise ConfigurationError(
                    f"Failed to create validator for {getattr(kind, 'value', kind)}: {e}"
                ) from e
            if validator.rule_kind != kind:
                raise ConfigurationError(
                    f"{validator_class.__name__} implements {validator.rule_kind.value}, "
                    f"but is registered for {getattr(kind, 'value', kind)}"
                )
            validators[kind] = validator

        missing = [kind.value for kind in RuleKind if kind not in validators]
        if missing:
            raise ConfigurationError(f"No validator registered for: {', '.join(missing)}")

        self._validators = MappingProxyType(validators)

    def resolve(self, kind: RuleKind) -> BaseValidator:
        """
        Look up the validator for a rule kind.

        Raises:
            ConfigurationError: If the kind is not registered
        """
        try:
            return self._validators[kind]
        except KeyError:
            raise ConfigurationError(f"Unknown rule kind: {kind!r}") from None

    def verify(self, rule: Rule) -> None:
        """
        Resolve a rule and all of its nested rules.

        Raises:
            ConfigurationError: If any kind in the rule tree is not registered
        """
        self.resolve(rule.kind)
        for nested in rule.nested_rules():
            self.verify(nested)

    @property
    def kinds(self) -> list[RuleKind]:
        return list(self._validators)

    def __len__(self) -> int:
        return len(self._validators)

    def __repr__(self) -> str:
        return f"ValidatorRegistry(kinds={len(self)})"


@lru_cache(maxsize=None)
def default_registry() -> ValidatorRegistry:
    """Process-wide registry built from VALIDATOR_REGISTRY on first use."""
    return ValidatorRegistry()
