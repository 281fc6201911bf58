"""
Unit tests for YAML rule loading and the rule builder.
"""

import operator

import pytest

from confcheck.core.errors import ConfigurationError
from confcheck.core.models import RuleKind, ValueType
from confcheck.core.rules import RuleConfigBuilder, RuleConfigLoader, parse_rule, parse_schema

TOPOLOGY_RULES = """
fields:
  topology.workers:
    - NotNull
    - kind: IsInteger
    - kind: IsPositiveNumber
      params:
        include_zero: false

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

  nimbus.seeds:
    - kind: IsListEntryCustom
      params:
        entry_rules:
          - kind: IsString
            params:
              accepted_values: [nimbus-a, nimbus-b]

  worker.childopts:
    - kind: CustomValidator
      params:
        delegate: operator.ne
        name: not_same_as_field_name
"""


class TestRuleConfigLoader:
    """Tests for RuleConfigLoader"""

    def test_load_schema(self, rule_file):
        schema = RuleConfigLoader(rule_file(TOPOLOGY_RULES, name="topology.yaml")).load_schema()

        assert schema.name == "topology"
        assert schema.field_names == [
            "topology.workers",
            "topology.kryo.register",
            "storm.zookeeper.auth.password",
            "storm.messaging.transport",
            "nimbus.seeds",
            "worker.childopts",
        ]
        assert [r.kind for r in schema["topology.workers"].rules] == [
            RuleKind.NOT_NULL,
            RuleKind.IS_INTEGER,
            RuleKind.IS_POSITIVE_NUMBER,
        ]

    def test_secret_field(self, rule_file):
        schema = RuleConfigLoader(rule_file(TOPOLOGY_RULES)).load_schema()

        assert schema["storm.zookeeper.auth.password"].secret is True
        assert schema["topology.workers"].secret is False

    def test_nested_rules(self, rule_file):
        schema = RuleConfigLoader(rule_file(TOPOLOGY_RULES)).load_schema()

        transport = schema["storm.messaging.transport"].rules[0]
        nested = transport.nested_rules()
        assert [r.kind for r in nested] == [RuleKind.IS_STRING, RuleKind.IS_LIST_ENTRY_TYPE]
        assert nested[1].params.type is ValueType.STRING

        seeds = schema["nimbus.seeds"].rules[0]
        assert seeds.nested_rules()[0].params.accepted_values == frozenset({"nimbus-a", "nimbus-b"})

    def test_delegate_resolved_by_import_path(self, rule_file):
        schema = RuleConfigLoader(rule_file(TOPOLOGY_RULES)).load_schema()

        params = schema["worker.childopts"].rules[0].params
        assert params.delegate is operator.ne
        assert params.delegate_name == "not_same_as_field_name"

    def test_loaded_schema_validates(self, rule_file, engine):
        schema = RuleConfigLoader(rule_file(TOPOLOGY_RULES)).load_schema()

        report = engine.validate(schema, {
            "topology.workers": 2,
            "storm.zookeeper.auth.password": "secret",
            "storm.messaging.transport": ["netty"],
            "nimbus.seeds": ["nimbus-a", "nimbus-c"],
            "worker.childopts": "worker.childopts",
        })

        assert report.failed_fields == ["nimbus.seeds", "worker.childopts"]

    def test_load_field_specs(self, rule_file):
        specs = RuleConfigLoader(rule_file(TOPOLOGY_RULES)).load_field_specs()
        assert len(specs) == 6

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, rule_file):
        loader = RuleConfigLoader(rule_file("fields: [unclosed"))
        with pytest.raises(ConfigurationError):
            loader.load_schema()

    def test_missing_fields_section(self, rule_file):
        with pytest.raises(ConfigurationError):
            RuleConfigLoader(rule_file("rules: {}")).load_schema()

    def test_empty_file(self, rule_file):
        with pytest.raises(ConfigurationError):
            RuleConfigLoader(rule_file("")).load_schema()

    def test_unknown_rule_kind(self, rule_file):
        loader = RuleConfigLoader(rule_file("fields:\n  a:\n    - IsPrime\n"))
        with pytest.raises(ConfigurationError):
            loader.load_schema()

    def test_unresolvable_delegate(self, rule_file):
        text = """
fields:
  a:
    - kind: CustomValidator
      params:
        delegate: no_such_module.check
"""
        with pytest.raises(ConfigurationError) as exc_info:
            RuleConfigLoader(rule_file(text)).load_schema()

        assert "Cannot load delegate for field 'a'" in str(exc_info.value)


class TestParseRule:
    """Tests for parse_rule and parse_schema"""

    def test_kind_name(self):
        assert parse_rule("IsBoolean").kind is RuleKind.IS_BOOLEAN

    def test_missing_kind(self):
        with pytest.raises(ConfigurationError):
            parse_rule({"params": {}}, "a")

    @pytest.mark.parametrize("params", [["include_zero"], "include_zero", 5])
    def test_params_must_be_mapping(self, params):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_rule({"kind": "IsPositiveNumber", "params": params}, "a")

        assert "must be a mapping" in str(exc_info.value)

    def test_nested_rules_must_be_list(self):
        with pytest.raises(ConfigurationError):
            parse_rule({"kind": "IsExactlyOneOf", "params": {"value_rules": "IsString"}}, "a")

    def test_unknown_field_keys(self):
        with pytest.raises(ConfigurationError) as exc_info:
            parse_schema({"fields": {"a": {"rules": [], "required": True}}})

        assert "required" in str(exc_info.value)

    def test_field_rules_must_be_list(self):
        with pytest.raises(ConfigurationError):
            parse_schema({"fields": {"a": "IsString"}})

    def test_field_without_rules(self):
        schema = parse_schema({"fields": {"a": None, "b": {"secret": True}}})

        assert schema["a"].rules == ()
        assert schema["b"].secret is True

    def test_fields_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            parse_schema({"fields": ["a"]})


class TestRuleConfigBuilder:
    """Tests for RuleConfigBuilder"""

    def test_builder(self):
        schema = (
            RuleConfigBuilder("daemon")
            .add_not_null("nimbus.port")
            .add_type("nimbus.port", ValueType.INTEGER)
            .add_string("nimbus.host")
            .add_string("nimbus.mode", accepted_values=["local", "distributed"])
            .add_positive_number("nimbus.port", include_zero=False)
            .add_field("nimbus.seeds", RuleKind.IS_STRING_LIST, "IsNoDuplicateInList")
            .build()
        )

        assert schema.name == "daemon"
        assert schema.field_names == ["nimbus.port", "nimbus.host", "nimbus.mode", "nimbus.seeds"]
        assert [r.kind for r in schema["nimbus.port"].rules] == [
            RuleKind.NOT_NULL,
            RuleKind.IS_TYPE,
            RuleKind.IS_POSITIVE_NUMBER,
        ]
        assert schema["nimbus.mode"].rules[0].params.accepted_values == frozenset({"local", "distributed"})

    def test_password(self):
        schema = RuleConfigBuilder().add_password("ui.password").build()

        assert schema["ui.password"].secret is True
        assert schema["ui.password"].rules[0].kind is RuleKind.NOT_NULL

    def test_invalid_rule_rejected_immediately(self):
        with pytest.raises(ConfigurationError):
            RuleConfigBuilder().add_rule("a", RuleKind.IS_MAP_ENTRY_TYPE, key_type="string")
