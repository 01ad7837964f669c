"""
RuleSet registry.

Maps a field type tag to an ordered, immutable list of validation rules.
Built-in rulesets are fixed per field type; custom rulesets come from code
or from the YAML file loaded by FeedbackConfigLoader, and always replace
the defaults rather than merging with them.
"""

from functools import lru_cache
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from modules.feedback.core.base import FieldType, ValidationRule
from modules.feedback.core.config_loader import FeedbackConfigLoader, RuleConfig
from modules.feedback.core.exceptions import MalformedRuleSetError, UnknownFieldTypeError
from modules.feedback.core.registry import create_check
from shared.utils.config import settings
from shared.utils.logger import setup_logger

# Import checks to trigger registration
from modules.feedback import validators  # noqa: F401

logger = setup_logger(__name__)

PASSWORD_SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'


class RuleSet:
    """
    Ordered, immutable collection of rules.

    Rule ids must be unique; duplicates fail at construction time.
    """

    def __init__(self, rules: Iterable[ValidationRule] = ()):
        self._rules: Tuple[ValidationRule, ...] = tuple(rules)

        seen = set()
        duplicates = []
        for rule in self._rules:
            if rule.id in seen:
                duplicates.append(rule.id)
            seen.add(rule.id)
        if duplicates:
            raise MalformedRuleSetError(
                f"Duplicate rule ids in ruleset: {', '.join(sorted(set(duplicates)))}"
            )

    def __iter__(self) -> Iterator[ValidationRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, index: int) -> ValidationRule:
        return self._rules[index]

    def __repr__(self) -> str:
        return f"RuleSet({list(self.ids)!r})"

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(rule.id for rule in self._rules)

    @property
    def required(self) -> Tuple[ValidationRule, ...]:
        return tuple(rule for rule in self._rules if rule.required)

    @property
    def optional(self) -> Tuple[ValidationRule, ...]:
        return tuple(rule for rule in self._rules if not rule.required)

    def get(self, rule_id: str) -> Optional[ValidationRule]:
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None


def rule(
    rule_id: str,
    label: str,
    check: str,
    params: Optional[Dict[str, Any]] = None,
    **metadata: Any
) -> ValidationRule:
    """
    Build a rule from a registered check name.

    Args:
        rule_id: Rule id
        label: Requirement text
        check: Registered check name
        params: Check parameters
        **metadata: required, hint, error_message

    Returns:
        ValidationRule
    """
    return ValidationRule(id=rule_id, label=label, check=create_check(check, params), **metadata)


def rule_from_config(config: RuleConfig) -> ValidationRule:
    """Build a rule from a validated YAML entry"""
    return rule(
        config.id,
        config.label,
        config.check,
        config.params,
        required=config.required,
        hint=config.hint,
        error_message=config.error_message,
    )


def build_default_rulesets() -> Dict[str, RuleSet]:
    """
    Build the built-in ruleset for every field type.

    Returns:
        Mapping of field type value to RuleSet
    """
    return {
        FieldType.EMAIL.value: RuleSet([
            rule('format', 'Valid email format', 'pattern',
                 {'pattern': r'[^\s@]+@[^\s@]+\.[^\s@]+', 'full_match': True},
                 error_message='Please enter a valid email address'),
            rule('domain', 'Valid domain', 'email_domain',
                 hint='e.g., user@example.com'),
        ]),
        FieldType.PASSWORD.value: RuleSet([
            rule('length', 'At least 8 characters', 'min_length', {'min_length': 8}, required=True),
            rule('uppercase', 'One uppercase letter', 'pattern', {'pattern': r'[A-Z]'}, required=True),
            rule('lowercase', 'One lowercase letter', 'pattern', {'pattern': r'[a-z]'}, required=True),
            rule('number', 'One number', 'pattern', {'pattern': r'[0-9]'}, required=True),
            rule('special', 'One special character', 'pattern',
                 {'pattern': r'[!@#$%^&*(),.?":{}|<>]'},
                 hint=PASSWORD_SPECIAL_CHARACTERS),
        ]),
        FieldType.PHONE.value: RuleSet([
            rule('format', 'Valid phone format', 'all_of', {'checks': [
                {'check': 'pattern', 'params': {'pattern': r'\+?[0-9\s\-()]+', 'full_match': True}},
                {'check': 'digit_count', 'params': {'min_digits': 10}},
            ]}, error_message='Please enter a valid phone number'),
            rule('digits', '10+ digits', 'digit_count', {'min_digits': 10}),
        ]),
        FieldType.NAME.value: RuleSet([
            rule('length', 'At least 2 characters', 'min_length',
                 {'min_length': 2, 'strip': True}, required=True),
            rule('valid', 'Only letters and spaces', 'pattern',
                 {'pattern': r"[a-zA-Z\s'-]+", 'full_match': True},
                 hint='No numbers or special characters'),
        ]),
        FieldType.CARD.value: RuleSet([
            rule('format', 'Valid card number', 'pattern',
                 {'pattern': r'[0-9]{13,19}', 'full_match': True, 'remove': r'\s'},
                 error_message='Please enter a valid card number'),
            rule('luhn', 'Valid card checksum', 'luhn'),
        ]),
        FieldType.DATE.value: RuleSet([
            rule('format', 'Valid date format', 'pattern',
                 {'pattern': r'[0-9]{2}/[0-9]{2}/[0-9]{4}', 'full_match': True},
                 hint='MM/DD/YYYY'),
            rule('valid', 'Valid date', 'calendar_date'),
        ]),
        FieldType.ZIPCODE.value: RuleSet([
            rule('format', 'Valid ZIP code', 'pattern',
                 {'pattern': r'[0-9]{5}(-[0-9]{4})?', 'full_match': True},
                 hint='12345 or 12345-6789'),
        ]),
        FieldType.TEXT.value: RuleSet(),
    }


class RuleSetRegistry:
    """
    Resolves field types to rulesets.

    Usage:
        registry = RuleSetRegistry()
        rules = registry.rules_for(FieldType.PASSWORD)
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize registry with built-ins plus any configured rulesets.

        Args:
            config_path: Path to rules YAML file
                        If None, uses FEEDBACK_RULES_PATH from settings
        """
        self.config_loader = FeedbackConfigLoader(config_path)
        self.config_loader.load()
        self._rulesets: Dict[str, RuleSet] = build_default_rulesets()

        global_settings = self.config_loader.get_global_settings()
        self.generic_message: str = global_settings.get(
            'generic_message', settings.FEEDBACK_GENERIC_MESSAGE
        )

        for name, entries in self.config_loader.get_rulesets().items():
            self.register(name, [rule_from_config(entry) for entry in entries])

        logger.info(f"RuleSetRegistry initialized with {len(self._rulesets)} rulesets")

    def register(self, name: Union[FieldType, str], rules: Iterable[ValidationRule]) -> RuleSet:
        """
        Register a ruleset under a field type name, replacing any existing one.

        Raises:
            MalformedRuleSetError: If rule ids are not unique
        """
        key = _field_type_key(name)
        ruleset = rules if isinstance(rules, RuleSet) else RuleSet(rules)
        if key in self._rulesets:
            logger.warning(f"Ruleset '{key}' is already registered. Replacing it")
        self._rulesets[key] = ruleset
        logger.debug(f"Registered ruleset: {key} -> {list(ruleset.ids)}")
        return ruleset

    def rules_for(self, field_type: Union[FieldType, str]) -> RuleSet:
        """
        Get the ruleset for a field type.

        Raises:
            UnknownFieldTypeError: If nothing is registered for field_type
        """
        key = _field_type_key(field_type)
        try:
            return self._rulesets[key]
        except KeyError:
            raise UnknownFieldTypeError(f"No ruleset registered for field type '{key}'") from None

    def resolve(
        self,
        field_type: Union[FieldType, str],
        rules: Optional[Iterable[ValidationRule]] = None
    ) -> RuleSet:
        """
        Use the custom rules when given, otherwise the field type's ruleset.
        """
        if rules is not None:
            return rules if isinstance(rules, RuleSet) else RuleSet(rules)
        return self.rules_for(field_type)

    def list_field_types(self) -> List[str]:
        return list(self._rulesets.keys())

    def format_generic_message(self, field_type: Union[FieldType, str]) -> str:
        return self.generic_message.format(field_type=_field_type_key(field_type))


def _field_type_key(field_type: Union[FieldType, str]) -> str:
    if isinstance(field_type, FieldType):
        return field_type.value
    return str(field_type)


@lru_cache()
def get_registry() -> RuleSetRegistry:
    """
    Get cached registry instance built from settings.
    """
    return RuleSetRegistry()


def rules_for(field_type: Union[FieldType, str]) -> RuleSet:
    """
    Get the ruleset for a field type from the shared registry.

    Example:
        rules_for("password").required  # length, uppercase, lowercase, number
    """
    return get_registry().rules_for(field_type)
