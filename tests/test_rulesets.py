"""
Tests for the ruleset registry, built-in rulesets and YAML configuration.
"""

from pathlib import Path

import pytest
import yaml

from modules.feedback import FieldType, RuleSet, RuleSetRegistry, evaluate, rule
from modules.feedback.core.base import BaseCheck
from modules.feedback.core.config_loader import FeedbackConfigLoader
from modules.feedback.core.exceptions import (
    ConfigurationException,
    MalformedRuleSetError,
    UnknownCheckError,
    UnknownFieldTypeError,
)
from modules.feedback.core.registry import create_check, is_registered, list_checks, register_check


@pytest.fixture
def registry():
    return RuleSetRegistry()


def write_config(tmp_path, content):
    path = tmp_path / "rules.yaml"
    path.write_text(content)
    return str(path)


class TestBuiltInRulesets:

    def test_every_field_type_has_a_ruleset(self, registry):
        for field_type in FieldType:
            assert isinstance(registry.rules_for(field_type), RuleSet)

    def test_password_rules(self, registry):
        rules = registry.rules_for(FieldType.PASSWORD)
        assert rules.ids == ("length", "uppercase", "lowercase", "number", "special")
        assert [r.id for r in rules.required] == ["length", "uppercase", "lowercase", "number"]
        assert [r.id for r in rules.optional] == ["special"]

    def test_text_ruleset_is_empty(self, registry):
        assert len(registry.rules_for("text")) == 0

    def test_string_and_enum_lookup_match(self, registry):
        assert registry.rules_for("email") is registry.rules_for(FieldType.EMAIL)

    def test_unknown_field_type(self, registry):
        with pytest.raises(UnknownFieldTypeError):
            registry.rules_for("favourite_colour")

    @pytest.mark.parametrize("field_type,value,expected", [
        ("email", "user@example.com", True),
        ("email", "user@example", False),
        ("email", "user@@example.com", False),
        ("phone", "5551234567", True),
        ("phone", "+1 (555) 123-4567", True),
        ("phone", "555-1234", False),
        ("phone", "555123456x", False),
        ("name", "Jo", True),
        ("name", "O'Brien-Smith", True),
        ("name", "J", False),
        ("name", "John3", False),
        ("card", "4539 1488 0343 6467", True),
        ("card", "4539148803436467", True),
        ("card", "1234567812345678", True),
        ("card", "12345", False),
        ("date", "02/29/2024", True),
        ("date", "02/29/2023", True),
        ("date", "2024-02-29", False),
        ("zipcode", "12345", True),
        ("zipcode", "12345-6789", True),
        ("zipcode", "1234", False),
        ("zipcode", "123456", False),
        ("text", "anything", True),
    ])
    def test_default_validity(self, registry, field_type, value, expected):
        assert evaluate(value, registry.rules_for(field_type)).is_valid is expected

    def test_card_outcomes_report_checksum_failure(self, registry):
        outcomes = evaluate("1234567812345678", registry.rules_for("card")).outcomes
        assert {o.rule.id: o.satisfied for o in outcomes} == {"format": True, "luhn": False}

    def test_date_outcomes_report_calendar_failure(self, registry):
        outcomes = evaluate("02/29/2023", registry.rules_for("date")).outcomes
        assert {o.rule.id: o.satisfied for o in outcomes} == {"format": True, "valid": False}


class TestRuleSet:

    def test_duplicate_ids_fail_fast(self):
        with pytest.raises(MalformedRuleSetError, match="length"):
            RuleSet([
                rule("length", "At least 3", "min_length", {"min_length": 3}),
                rule("length", "At least 5", "min_length", {"min_length": 5}),
            ])

    def test_register_rejects_duplicates(self, registry):
        with pytest.raises(MalformedRuleSetError):
            registry.register("pin", [
                rule("digits", "Digits", "digit_count", {"min_digits": 4}),
                rule("digits", "Digits", "digit_count", {"min_digits": 6}),
            ])

    def test_keeps_registration_order(self):
        ruleset = RuleSet([
            rule("b", "B", "min_length", {"min_length": 1}),
            rule("a", "A", "min_length", {"min_length": 2}),
        ])
        assert ruleset.ids == ("b", "a")
        assert ruleset[1].id == "a"
        assert ruleset.get("a").label == "A"
        assert ruleset.get("missing") is None

    def test_custom_ruleset_replaces_default(self, registry):
        custom = [rule("length", "At least 4 characters", "min_length", {"min_length": 4}, required=True)]
        resolved = registry.resolve(FieldType.PASSWORD, custom)
        assert resolved.ids == ("length",)
        assert evaluate("abcd", resolved).is_valid is True

    def test_register_named_ruleset(self, registry):
        registry.register("pin", [rule("digits", "Four digits", "pattern",
                                       {"pattern": "[0-9]{4}", "full_match": True}, required=True)])
        assert "pin" in registry.list_field_types()
        assert evaluate("1234", registry.rules_for("pin")).is_valid is True
        assert evaluate("12a4", registry.rules_for("pin")).is_valid is False


class TestCheckRegistry:

    def test_builtin_checks_registered(self):
        for name in ("pattern", "min_length", "digit_count", "email_domain", "all_of",
                     "predicate", "luhn", "calendar_date"):
            assert is_registered(name)
        assert list_checks()["luhn"] == "LuhnCheck"

    def test_unknown_check(self):
        with pytest.raises(UnknownCheckError):
            create_check("no_such_check")

    def test_pattern_requires_pattern(self):
        with pytest.raises(ConfigurationException):
            create_check("pattern", {})

    def test_invalid_regex(self):
        with pytest.raises(ConfigurationException):
            create_check("pattern", {"pattern": "("})

    def test_predicate_requires_callable(self):
        with pytest.raises(ConfigurationException):
            create_check("predicate", {"predicate": "not callable"})

    def test_register_custom_check(self):
        @register_check("starts_with_acme")
        class StartsWithAcmeCheck(BaseCheck):
            def check(self, value):
                return value.startswith("ACME-")

        check = create_check("starts_with_acme")
        assert check.check("ACME-1") is True
        assert check.check("ACM-1") is False

    def test_rule_metadata_is_inspectable(self):
        r = rule("special", "One special character", "pattern", {"pattern": "[!@#]"}, hint="!@#")
        assert r.to_dict() == {
            "id": "special",
            "label": "One special character",
            "required": False,
            "hint": "!@#",
            "error_message": None,
        }


class TestYamlConfiguration:

    def test_loads_custom_rulesets(self, tmp_path):
        path = write_config(tmp_path, """
global:
  generic_message: "Fix the {field_type}"
rulesets:
  username:
    - id: length
      label: At least 3 characters
      check: min_length
      params: {min_length: 3}
      required: true
      error_message: Too short
    - id: charset
      label: Letters and digits
      check: pattern
      params: {pattern: "[A-Za-z0-9]+", full_match: true}
      required: true
""")
        registry = RuleSetRegistry(path)

        rules = registry.rules_for("username")
        assert rules.ids == ("length", "charset")
        assert rules[0].error_message == "Too short"
        assert evaluate("jane42", rules).is_valid is True
        assert evaluate("j!", rules).is_valid is False
        assert registry.format_generic_message("username") == "Fix the username"

    def test_yaml_ruleset_overrides_builtin(self, tmp_path):
        path = write_config(tmp_path, """
rulesets:
  zipcode:
    - id: format
      label: Four digit postcode
      check: pattern
      params: {pattern: "[0-9]{4}", full_match: true}
""")
        registry = RuleSetRegistry(path)
        assert evaluate("2000", registry.rules_for("zipcode")).is_valid is True
        assert evaluate("12345", registry.rules_for("zipcode")).is_valid is False

    def test_nested_all_of_from_yaml(self, tmp_path):
        path = write_config(tmp_path, """
rulesets:
  mobile:
    - id: format
      label: Digits and spaces, 10+ digits
      check: all_of
      params:
        checks:
          - check: pattern
            params: {pattern: "[0-9 ]+", full_match: true}
          - check: digit_count
            params: {min_digits: 10}
      required: true
""")
        registry = RuleSetRegistry(path)
        rules = registry.rules_for("mobile")
        assert evaluate("0412 345 678", rules).is_valid is True
        assert evaluate("0412 345", rules).is_valid is False

    def test_duplicate_ids_in_yaml(self, tmp_path):
        path = write_config(tmp_path, """
rulesets:
  username:
    - {id: length, label: A, check: min_length, params: {min_length: 3}}
    - {id: length, label: B, check: min_length, params: {min_length: 4}}
""")
        with pytest.raises(MalformedRuleSetError):
            RuleSetRegistry(path)

    def test_unknown_check_in_yaml(self, tmp_path):
        path = write_config(tmp_path, """
rulesets:
  username:
    - {id: length, label: A, check: longer_than}
""")
        with pytest.raises(UnknownCheckError):
            RuleSetRegistry(path)

    def test_incomplete_rule_in_yaml(self, tmp_path):
        path = write_config(tmp_path, """
rulesets:
  username:
    - {id: length, check: min_length}
""")
        with pytest.raises(ConfigurationException):
            RuleSetRegistry(path)

    @pytest.mark.parametrize("content", [
        "rulesets:\n  - id: length\n    label: A\n    check: min_length\n",
        "- first\n- second\n",
        "just a string\n",
        "global: plain text\n",
        "rulesets:\n  username:\n    length: {label: A, check: min_length}\n",
    ], ids=["rulesets_list", "document_list", "document_scalar", "global_scalar", "ruleset_mapping"])
    def test_wrongly_shaped_yaml(self, tmp_path, content):
        path = write_config(tmp_path, content)
        with pytest.raises(ConfigurationException):
            RuleSetRegistry(path)

    def test_unparseable_yaml_is_logged(self, tmp_path, caplog):
        path = write_config(tmp_path, "rulesets: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            RuleSetRegistry(path)
        assert any(
            r.levelname == "ERROR" and "Failed to parse feedback config" in r.getMessage()
            for r in caplog.records
        )

    def test_reload_picks_up_file_changes(self, tmp_path):
        path = write_config(tmp_path, """
rulesets:
  username:
    - {id: length, label: A, check: min_length, params: {min_length: 3}}
""")
        loader = FeedbackConfigLoader(path)
        assert [r.id for r in loader.get_rulesets()["username"]] == ["length"]

        write_config(tmp_path, """
rulesets:
  nickname:
    - {id: charset, label: B, check: pattern, params: {pattern: "^[a-z]+$"}}
""")
        config = loader.reload()
        assert set(config["rulesets"]) == {"nickname"}
        assert [r.id for r in loader.get_rulesets()["nickname"]] == ["charset"]

    def test_missing_file_uses_defaults(self, tmp_path):
        registry = RuleSetRegistry(str(tmp_path / "missing.yaml"))
        assert set(registry.list_field_types()) == {t.value for t in FieldType}
        assert registry.format_generic_message("email") == "Please check email requirements"

    def test_bundled_example_config(self):
        registry = RuleSetRegistry(str(Path(__file__).parent.parent / "config" / "feedback" / "rules.yaml"))
        assert registry.rules_for("username").ids == ("length", "charset")
        assert evaluate("ABC-1234", registry.rules_for("reference_code")).is_valid is True
