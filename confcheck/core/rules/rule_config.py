"""
Rule configuration management.

Loads FieldSpec tables from YAML files and provides a builder for
assembling them in code.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from confcheck.core.errors import ConfigurationError
from confcheck.core.models import FieldSpec, Rule, RuleKind, ValueType
from confcheck.core.schema import ConfigSchema
from confcheck.observability.logger import get_logger, log_operation
from confcheck.utils.imports import import_object

logger = get_logger(__name__)

NESTED_RULE_PARAMS = ("entry_rules", "key_rules", "value_rules")


class RuleConfigLoader:
    """
    Loads field rules from YAML configuration files.

    Expected YAML format:
    ```yaml
    fields:
      topology.workers:
        - kind: IsInteger
        - kind: IsPositiveNumber
          params:
            include_zero: true

      topology.kryo.register:
        - IsKryoReg

      storm.zookeeper.auth.password:
        secret: true
        rules:
          - NotNull
          - IsString

      storm.messaging.transport:
        - kind: IsExactlyOneOf
          params:
            value_rules:
              - IsString
              - kind: IsListEntryType
                params: {type: string}

      nimbus.port:
        - kind: CustomValidator
          params:
            delegate: mypkg.checks.check_port
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML rule file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_schema(self) -> ConfigSchema:
        """
        Load and parse the rule file.

        Returns:
            ConfigSchema named after the file

        Raises:
            ConfigurationError: If the YAML is invalid or a rule is malformed
        """
        with log_operation("Loading rule file", logger=logger, path=str(self.config_path)):
            with open(self.config_path) as f:
                try:
                    document = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

            return parse_schema(document, name=self.config_path.stem)

    def load_field_specs(self) -> list[FieldSpec]:
        return list(self.load_schema())


def parse_schema(document: Any, name: str = "config") -> ConfigSchema:
    """
    Build a ConfigSchema from an already-parsed rule document.

    Args:
        document: Mapping with a 'fields' section
        name: Schema name

    Raises:
        ConfigurationError: If the document or any rule is malformed
    """
    if not isinstance(document, Mapping) or "fields" not in document:
        raise ConfigurationError("Rule configuration must contain a 'fields' section")

    fields = document["fields"]
    if not isinstance(fields, Mapping):
        raise ConfigurationError("'fields' must map field names to rules")

    specs = [_parse_field(str(field_name), definition) for field_name, definition in fields.items()]
    return ConfigSchema(specs, name=name)


def _parse_field(field_name: str, definition: Any) -> FieldSpec:
    secret = False
    if isinstance(definition, Mapping):
        unknown = set(definition) - {"rules", "secret"}
        if unknown:
            raise ConfigurationError(
                f"Unknown keys for field '{field_name}': {', '.join(sorted(unknown))}"
            )
        secret = bool(definition.get("secret", False))
        definition = definition.get("rules") or []

    if definition is None:
        definition = []
    if not isinstance(definition, list):
        raise ConfigurationError(f"Rules for field '{field_name}' must be a list")

    rules = tuple(parse_rule(rule_def, field_name) for rule_def in definition)
    return FieldSpec(name=field_name, rules=rules, secret=secret)


def parse_rule(rule_def: Any, field_name: str = "<nested>") -> Rule:
    """
    Parse one rule definition.

    Args:
        rule_def: Kind name, or mapping with 'kind' and optional 'params'
        field_name: Field the rule belongs to (for error messages)

    Returns:
        The constructed Rule

    Raises:
        ConfigurationError: If the rule definition is invalid
    """
    if isinstance(rule_def, str):
        return Rule.of(rule_def)

    if not isinstance(rule_def, Mapping) or "kind" not in rule_def:
        raise ConfigurationError(f"Rule for field '{field_name}' is missing 'kind'")

    params = rule_def.get("params") or {}
    if not isinstance(params, Mapping):
        raise ConfigurationError(f"'params' for field '{field_name}' must be a mapping")
    params = dict(params)
    for key in NESTED_RULE_PARAMS:
        if key in params:
            if not isinstance(params[key], list):
                raise ConfigurationError(f"'{key}' for field '{field_name}' must be a list")
            params[key] = [parse_rule(nested, field_name) for nested in params[key]]

    if isinstance(params.get("delegate"), str):
        try:
            params["delegate"] = import_object(params["delegate"])
        except LookupError as e:
            raise ConfigurationError(f"Cannot load delegate for field '{field_name}': {e}") from e

    return Rule.of(rule_def["kind"], **params)


class RuleConfigBuilder:
    """
    Programmatically build rule configurations.

        schema = RuleConfigBuilder() \\
            .add_not_null("topology.workers") \\
            .add_rule("topology.workers", RuleKind.IS_INTEGER) \\
            .build()
    """

    def __init__(self, name: str = "config"):
        """Initialize empty rule configuration."""
        self.name = name
        self._rules: dict[str, list[Rule]] = {}
        self._secret: set[str] = set()

    def add_field(self, field_name: str, *rules: Rule | RuleKind | str, secret: bool = False) -> "RuleConfigBuilder":
        """Declare a field with some rules (more may be added later)."""
        target = self._rules.setdefault(field_name, [])
        target.extend(r if isinstance(r, Rule) else Rule.of(r) for r in rules)
        if secret:
            self._secret.add(field_name)
        return self

    def add_rule(self, field_name: str, kind: RuleKind | str, **params: Any) -> "RuleConfigBuilder":
        """Append one rule to a field."""
        self._rules.setdefault(field_name, []).append(Rule.of(kind, **params))
        return self

    def add_not_null(self, field_name: str) -> "RuleConfigBuilder":
        """Add a NotNull rule."""
        return self.add_rule(field_name, RuleKind.NOT_NULL)

    def add_type(self, field_name: str, value_type: ValueType | str) -> "RuleConfigBuilder":
        """Add an IsType rule."""
        return self.add_rule(field_name, RuleKind.IS_TYPE, type=value_type)

    def add_string(self, field_name: str, accepted_values: list[str] | None = None) -> "RuleConfigBuilder":
        """Add an IsString rule, optionally restricted to accepted values."""
        if accepted_values is None:
            return self.add_rule(field_name, RuleKind.IS_STRING)
        return self.add_rule(field_name, RuleKind.IS_STRING, accepted_values=accepted_values)

    def add_positive_number(self, field_name: str, include_zero: bool = False) -> "RuleConfigBuilder":
        """Add an IsPositiveNumber rule."""
        return self.add_rule(field_name, RuleKind.IS_POSITIVE_NUMBER, include_zero=include_zero)

    def add_password(self, field_name: str) -> "RuleConfigBuilder":
        """Mark a field secret and require it to be set."""
        return self.add_field(field_name, RuleKind.NOT_NULL, secret=True)

    def build(self) -> ConfigSchema:
        """Build and return the schema."""
        specs = [
            FieldSpec(name=name, rules=tuple(rules), secret=name in self._secret)
            for name, rules in self._rules.items()
        ]
        return ConfigSchema(specs, name=self.name)
