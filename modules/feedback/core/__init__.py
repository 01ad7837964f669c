"""
Feedback core module.

Contains base classes, interfaces, and utilities for the feedback system.
"""

from modules.feedback.core.base import (
    BaseCheck,
    FieldStatus,
    FieldType,
    RuleOutcome,
    ValidationRule,
    ValidationState,
)
from modules.feedback.core.registry import CHECK_REGISTRY, register_check, get_check, create_check

__all__ = [
    'BaseCheck',
    'FieldStatus',
    'FieldType',
    'RuleOutcome',
    'ValidationRule',
    'ValidationState',
    'CHECK_REGISTRY',
    'register_check',
    'get_check',
    'create_check',
]
