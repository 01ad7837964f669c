"""
Base classes and data models for the field feedback system.

This module provides the foundation for all rules:
- BaseCheck: Abstract base class for every rule check
- ValidationRule: A named check plus required/hint/message metadata
- RuleOutcome: Result of running one rule against a value
- ValidationState: Per-field-instance evaluation state
- FieldType / FieldStatus: Field type tags and display status
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field as dataclass_field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional, Tuple


class FieldType(str, Enum):
    """Field type tags that select a default ruleset"""
    EMAIL = "email"
    PASSWORD = "password"
    PHONE = "phone"
    NAME = "name"
    CARD = "card"
    DATE = "date"
    ZIPCODE = "zipcode"
    TEXT = "text"


class FieldStatus(str, Enum):
    """Display status of a field"""
    IDLE = "idle"
    VALIDATING = "validating"
    VALID = "valid"
    INVALID = "invalid"


class BaseCheck(ABC):
    """
    Abstract base class for all rule checks.

    A check has a single capability: decide whether a string value passes.
    Checks are created from configuration params and must not keep state
    between calls.

    Example:
        @register_check("min_length")
        class MinLengthCheck(BaseCheck):
            def check(self, value: str) -> bool:
                return len(value) >= self.params.get('min_length', 1)
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        """
        Initialize check with configuration.

        Args:
            params: Check-specific settings from code or YAML
        """
        self.params = dict(params or {})

    @abstractmethod
    def check(self, value: str) -> bool:
        """
        Run the check against a value.

        Args:
            value: Current field value

        Returns:
            True if the value satisfies the check
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.params!r})"


@dataclass(frozen=True)
class ValidationRule:
    """
    A single validation rule.

    Rule metadata (id, label, required, hint, error_message) is inspectable
    without running the check. Identity is the id.
    """
    id: str
    label: str
    check: BaseCheck = dataclass_field(compare=False)
    required: bool = False
    hint: Optional[str] = None
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule metadata to dictionary"""
        return {
            'id': self.id,
            'label': self.label,
            'required': self.required,
            'hint': self.hint,
            'error_message': self.error_message,
        }


@dataclass(frozen=True)
class RuleOutcome:
    """Result of evaluating one rule against the current value"""
    rule: ValidationRule
    satisfied: bool

    def to_dict(self) -> Dict[str, Any]:
        data = self.rule.to_dict()
        data['satisfied'] = self.satisfied
        return data


@dataclass(frozen=True)
class ValidationState:
    """
    Evaluation state owned by one field instance.

    touched_rule_ids only grows between resets.
    """
    current_value: str = ""
    outcomes: Tuple[RuleOutcome, ...] = ()
    touched_rule_ids: FrozenSet[str] = frozenset()
    is_validating: bool = False

