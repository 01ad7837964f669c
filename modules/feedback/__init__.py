"""
Field feedback module.

Provides rule-based validation and inline feedback for single form fields.

Main components:
- FieldValidator: Per-field state holder (value, outcomes, touched rules)
- evaluate / transition: Pure evaluation functions
- RuleSetRegistry: Built-in and custom rulesets per field type
- suggestions_for: "Did you mean" hints for common mistakes

Usage:
    from modules.feedback import FieldValidator, FieldType

    validator = FieldValidator(FieldType.EMAIL)
    feedback = validator.validate("user@gmial.com")

    if not feedback.is_valid:
        print(feedback.message)
    for suggestion in feedback.suggestions:
        print(suggestion)
"""

__version__ = "1.0.0"

from modules.feedback.core.base import (
    BaseCheck,
    FieldStatus,
    FieldType,
    RuleOutcome,
    ValidationRule,
    ValidationState,
)
from modules.feedback.core.registry import register_check, CHECK_REGISTRY
from modules.feedback.engine import (
    Evaluation,
    FieldFeedback,
    FieldValidator,
    evaluate,
    primary_message,
    transition,
    validate_value,
)
from modules.feedback.rulesets import RuleSet, RuleSetRegistry, get_registry, rule, rules_for
from modules.feedback.suggestions import suggestions_for
from modules.feedback.tracker import TouchedRuleTracker
from modules.feedback.validators.checksum_validators import is_valid_date, luhn_check

__all__ = [
    'BaseCheck',
    'FieldStatus',
    'FieldType',
    'RuleOutcome',
    'ValidationRule',
    'ValidationState',
    'register_check',
    'CHECK_REGISTRY',
    'Evaluation',
    'FieldFeedback',
    'FieldValidator',
    'evaluate',
    'primary_message',
    'transition',
    'validate_value',
    'RuleSet',
    'RuleSetRegistry',
    'get_registry',
    'rule',
    'rules_for',
    'suggestions_for',
    'TouchedRuleTracker',
    'is_valid_date',
    'luhn_check',
]
