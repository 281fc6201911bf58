"""
Rule model: a closed set of rule kinds, each with its own typed parameters.
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from confcheck.core.errors import ConfigurationError

from .value import ValueKind, ValueType


class RuleKind(str, Enum):
    """Every validation behaviour the engine knows about."""

    IS_TYPE = "IsType"
    IS_DERIVED_FROM = "IsDerivedFrom"
    IS_STRING = "IsString"
    IS_STRING_LIST = "IsStringList"
    IS_LIST_ENTRY_TYPE = "IsListEntryType"
    IS_NUMBER = "IsNumber"
    IS_BOOLEAN = "IsBoolean"
    IS_INTEGER = "IsInteger"
    IS_LONG = "IsLong"
    NOT_NULL = "NotNull"
    IS_NO_DUPLICATE_IN_LIST = "IsNoDuplicateInList"
    IS_LIST_ENTRY_CUSTOM = "IsListEntryCustom"
    IS_MAP_ENTRY_TYPE = "IsMapEntryType"
    IS_MAP_ENTRY_CUSTOM = "IsMapEntryCustom"
    IS_POSITIVE_NUMBER = "IsPositiveNumber"
    IS_IMPLEMENTATION_OF_CLASS = "IsImplementationOfClass"
    IS_STRING_OR_STRING_LIST = "IsStringOrStringList"
    IS_KRYO_REG = "IsKryoReg"
    IS_POWER_OF_2 = "IsPowerOf2"
    IS_EXACTLY_ONE_OF = "IsExactlyOneOf"
    CUSTOM_VALIDATOR = "CustomValidator"


class RuleParams(BaseModel):
    """Base class for per-kind rule parameters."""

    class Config:
        frozen = True
        extra = "forbid"
        arbitrary_types_allowed = True

    def nested_rules(self) -> tuple["Rule", ...]:
        """Rules evaluated by a composite rule (none for simple rules)."""
        return ()


class NoParams(RuleParams):
    """Parameters of kinds that take none."""


class TypeParams(RuleParams):
    type: ValueType


class StringListParams(RuleParams):
    type: ValueType = ValueType.STRING


class DerivedFromParams(RuleParams):
    base_type: str | type


class ImplementsClassParams(RuleParams):
    implements_class: str | type


class StringParams(RuleParams):
    accepted_values: frozenset[str] | None = None

    @field_validator("accepted_values")
    @classmethod
    def check_not_empty(cls, v):
        """An explicit accepted set must contain something."""
        if v is not None and not v:
            raise ValueError("accepted_values must not be empty when given")
        return v


class MapEntryTypeParams(RuleParams):
    key_type: ValueType
    value_type: ValueType


class PositiveNumberParams(RuleParams):
    include_zero: bool = False


class KryoRegParams(RuleParams):
    """
    Structural grammar of serializer registrations.

    A registration is either a bare class name or a name paired with its
    options. ``option_kinds`` lists the shapes accepted as options and
    ``allow_map_form`` allows the whole registration to be a single
    name-to-options map instead of a list.
    """

    option_kinds: frozenset[ValueKind] = frozenset({ValueKind.STRING, ValueKind.NULL, ValueKind.MAP})
    allow_map_form: bool = True


class CustomParams(RuleParams):
    delegate: Callable[..., Any]
    name: str | None = None

    @property
    def delegate_name(self) -> str:
        return self.name or getattr(self.delegate, "__qualname__", repr(self.delegate))


class Rule(BaseModel):
    """
    An immutable validation rule.

    Build rules with ``Rule.of(kind, **params)``, which turns malformed
    definitions into ConfigurationError.

    Attributes:
        kind: Which check to run
        params: Parameters of that check; the model class is fixed per kind
    """

    kind: RuleKind
    params: RuleParams = Field(default_factory=NoParams)

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def build_params(cls, data: Any) -> Any:
        """Coerce params into the model registered for the rule kind."""
        if not isinstance(data, dict):
            return data
        kind = RuleKind(data.get("kind"))
        params_model = PARAMS_BY_KIND[kind]
        params = data.get("params")
        if params is None:
            params = params_model()
        elif isinstance(params, Mapping):
            params = params_model(**params)
        elif type(params) is not params_model:
            raise ValueError(
                f"{kind.value} expects {params_model.__name__}, got {type(params).__name__}"
            )
        return {**data, "kind": kind, "params": params}

    @classmethod
    def of(cls, kind: "RuleKind | str", **params: Any) -> "Rule":
        """
        Build a rule, reporting bad definitions as ConfigurationError.

        Args:
            kind: RuleKind or its name (e.g. "IsInteger")
            **params: Parameters of the kind's parameter model

        Returns:
            The constructed Rule

        Raises:
            ConfigurationError: Unknown kind, or missing/invalid parameters
        """
        label = getattr(kind, "value", kind)
        try:
            return cls(kind=kind, params=params or None)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {label} rule: {e}") from e

    def nested_rules(self) -> tuple["Rule", ...]:
        return self.params.nested_rules()

    def __str__(self) -> str:
        fields = self.params.model_dump(exclude_defaults=True)
        if not fields or self.nested_rules():
            return self.kind.value
        args = ", ".join(f"{key}={_short(val)}" for key, val in fields.items())
        return f"{self.kind.value}({args})"


def _short(val: Any) -> str:
    if isinstance(val, Enum):
        return str(val.value)
    if isinstance(val, (set, frozenset)):
        return "{" + ", ".join(sorted(str(v) for v in val)) + "}"
    return getattr(val, "__name__", str(val))


def _as_rule(item: Any) -> Rule:
    if isinstance(item, Rule):
        return item
    if isinstance(item, Mapping):
        if "kind" not in item:
            raise ConfigurationError(f"Nested rule definition is missing 'kind': {dict(item)}")
        return Rule.of(item["kind"], **(item.get("params") or {}))
    if isinstance(item, (RuleKind, str)):
        return Rule.of(item)
    raise ConfigurationError(f"Cannot build a rule from {type(item).__name__}")


def expand_rules(value: Any) -> Any:
    """Turn bare kinds and {kind, params} maps in a rule list into Rules."""
    if isinstance(value, (list, tuple)):
        return tuple(_as_rule(item) for item in value)
    return value


class ListEntryCustomParams(RuleParams):
    entry_rules: tuple[Rule, ...] = Field(..., min_length=1)

    expand_entry_rules = field_validator("entry_rules", mode="before")(expand_rules)

    def nested_rules(self) -> tuple[Rule, ...]:
        return self.entry_rules


class MapEntryCustomParams(RuleParams):
    key_rules: tuple[Rule, ...] = ()
    value_rules: tuple[Rule, ...] = ()

    expand_map_rules = field_validator("key_rules", "value_rules", mode="before")(expand_rules)

    @model_validator(mode="after")
    def check_not_empty(self):
        """At least one side of the map must carry rules."""
        if not self.key_rules and not self.value_rules:
            raise ValueError("key_rules and value_rules cannot both be empty")
        return self

    def nested_rules(self) -> tuple[Rule, ...]:
        return self.key_rules + self.value_rules


class ExactlyOneOfParams(RuleParams):
    value_rules: tuple[Rule, ...] = Field(..., min_length=1)

    expand_value_rules = field_validator("value_rules", mode="before")(expand_rules)

    def nested_rules(self) -> tuple[Rule, ...]:
        return self.value_rules


PARAMS_BY_KIND: dict[RuleKind, type[RuleParams]] = {
    RuleKind.IS_TYPE: TypeParams,
    RuleKind.IS_DERIVED_FROM: DerivedFromParams,
    RuleKind.IS_STRING: StringParams,
    RuleKind.IS_STRING_LIST: StringListParams,
    RuleKind.IS_LIST_ENTRY_TYPE: TypeParams,
    RuleKind.IS_NUMBER: NoParams,
    RuleKind.IS_BOOLEAN: NoParams,
    RuleKind.IS_INTEGER: NoParams,
    RuleKind.IS_LONG: NoParams,
    RuleKind.NOT_NULL: NoParams,
    RuleKind.IS_NO_DUPLICATE_IN_LIST: NoParams,
    RuleKind.IS_LIST_ENTRY_CUSTOM: ListEntryCustomParams,
    RuleKind.IS_MAP_ENTRY_TYPE: MapEntryTypeParams,
    RuleKind.IS_MAP_ENTRY_CUSTOM: MapEntryCustomParams,
    RuleKind.IS_POSITIVE_NUMBER: PositiveNumberParams,
    RuleKind.IS_IMPLEMENTATION_OF_CLASS: ImplementsClassParams,
    RuleKind.IS_STRING_OR_STRING_LIST: NoParams,
    RuleKind.IS_KRYO_REG: KryoRegParams,
    RuleKind.IS_POWER_OF_2: NoParams,
    RuleKind.IS_EXACTLY_ONE_OF: ExactlyOneOfParams,
    RuleKind.CUSTOM_VALIDATOR: CustomParams,
}
