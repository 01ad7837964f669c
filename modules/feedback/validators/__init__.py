"""
Checks module.

Contains all built-in checks organized by category:
- field_checks: Generic string checks (pattern, length, digits, domain)
- checksum_validators: Luhn checksum and calendar date checks

All checks are automatically registered via decorators.
"""

# Import all checks to trigger registration
from modules.feedback.validators import field_checks
from modules.feedback.validators import checksum_validators

__all__ = ['field_checks', 'checksum_validators']
