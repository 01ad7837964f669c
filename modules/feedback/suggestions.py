"""
Suggestion engine.

Heuristic "did you mean" hints for common input mistakes. Suggestions are
advisory text only: they never change validity, and the caller decides
whether to write them back into the field.
"""

import re
from types import MappingProxyType
from typing import List, Mapping, Union

from modules.feedback.core.base import FieldType
from modules.feedback.core.exceptions import SuggestionComputationFault
from shared.utils.helpers import strip_non_digits
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

# Known misspelled domain -> correct domain, scanned in this order
EMAIL_DOMAIN_TYPOS: Mapping[str, str] = MappingProxyType({
    'gmial.com': 'gmail.com',
    'gmai.com': 'gmail.com',
    'yahooo.com': 'yahoo.com',
    'yaho.com': 'yahoo.com',
    'hotmial.com': 'hotmail.com',
    'hotmai.com': 'hotmail.com',
    'outlok.com': 'outlook.com',
    'iclould.com': 'icloud.com',
    'icoud.com': 'icloud.com',
})

_PHONE_SEPARATORS = re.compile(r"[\s\-()]")


def suggestions_for(field_type: Union[FieldType, str], value: str) -> List[str]:
    """
    Compute suggestions for a field value.

    Never raises: any internal failure yields an empty list.

    Args:
        field_type: Field type tag
        value: Current field value

    Returns:
        Ordered list of suggestion strings

    Example:
        suggestions_for("email", "user@gmial.com")  # ["Did you mean @gmail.com?"]
    """
    try:
        if not value:
            return []
        key = field_type.value if isinstance(field_type, FieldType) else str(field_type)
        if key == FieldType.EMAIL.value:
            return email_suggestions(value)
        if key == FieldType.PHONE.value:
            return phone_suggestions(value)
        return []
    except Exception as e:
        fault = SuggestionComputationFault(f"{field_type}: {e}")
        logger.warning(f"Suggestion computation failed: {fault}")
        return []


def email_suggestions(value: str) -> List[str]:
    """Suggest corrections for misspelled domains and a missing "@"."""
    suggestions: List[str] = []
    email = value.lower()

    for typo, correction in EMAIL_DOMAIN_TYPOS.items():
        if typo in email:
            suggestions.append(f"Did you mean @{correction}?")
            break

    if "@" not in email and "." in email:
        parts = email.split(".")
        if len(parts) == 2 and all(parts):
            suggestions.append(f"Did you mean {parts[0]}@{parts[1]}.com?")

    return suggestions


def phone_suggestions(value: str) -> List[str]:
    """Suggest grouped formats for bare 10-digit and 1-prefixed 11-digit numbers."""
    suggestions: List[str] = []
    digits = strip_non_digits(value)

    if len(digits) == 10 and not _PHONE_SEPARATORS.search(value):
        suggestions.append(f"({digits[:3]}) {digits[3:6]}-{digits[6:]}")

    if len(digits) == 11 and digits.startswith("1"):
        suggestions.append(f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}")

    return suggestions
