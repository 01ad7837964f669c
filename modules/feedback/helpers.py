"""
Input helpers built on the field rules.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from modules.feedback.core.base import FieldType
from modules.feedback.engine import evaluate
from modules.feedback.rulesets import RuleSetRegistry, get_registry
from shared.utils.helpers import format_phone_number, sanitize_input


# Feedback text per built-in password rule id
PASSWORD_FEEDBACK = {
    'length': 'At least 8 characters',
    'uppercase': 'Contains uppercase letter',
    'lowercase': 'Contains lowercase letter',
    'number': 'Contains number',
    'special': 'Contains special character',
}


@dataclass
class PasswordStrength:
    """Password strength summary"""
    score: float  # 0 to 100
    feedback: List[str] = field(default_factory=list)
    is_valid: bool = False


def password_strength(value: str, registry: Optional[RuleSetRegistry] = None) -> PasswordStrength:
    """
    Score a password against every password rule, optional ones included.

    Args:
        value: Password
        registry: Ruleset registry (defaults to the shared one)

    Returns:
        PasswordStrength with feedback for unmet rules (rule label for
        rules without a PASSWORD_FEEDBACK entry);
        valid only when every rule passes
    """
    rules = (registry or get_registry()).rules_for(FieldType.PASSWORD)
    outcomes = evaluate(value, rules).outcomes
    if not outcomes:
        return PasswordStrength(score=100.0, is_valid=True)

    passed = [o for o in outcomes if o.satisfied]
    return PasswordStrength(
        score=len(passed) / len(outcomes) * 100,
        feedback=[
            PASSWORD_FEEDBACK.get(o.rule.id, o.rule.label)
            for o in outcomes if not o.satisfied
        ],
        is_valid=len(passed) == len(outcomes),
    )


__all__ = ['PasswordStrength', 'password_strength', 'format_phone_number', 'sanitize_input']
