"""
Helper utility functions.
"""

import re

_NON_DIGITS = re.compile(r"[^0-9]")
_ANGLE_BRACKETS = re.compile(r"[<>]")


def strip_non_digits(value: str) -> str:
    """
    Remove every non-digit character from a string.

    Example:
        strip_non_digits("(555) 123-4567")  # Returns "5551234567"
    """
    return _NON_DIGITS.sub("", value)


def sanitize_input(value: str) -> str:
    """
    Trim surrounding whitespace and drop angle brackets.

    Args:
        value: Raw user input

    Returns:
        Sanitized string
    """
    return _ANGLE_BRACKETS.sub("", value.strip())


def format_phone_number(value: str) -> str:
    """
    Format a 10-digit phone number as (ddd) ddd-dddd.

    Args:
        value: Phone number in any format

    Returns:
        Formatted number, or the input unchanged when it does not hold
        exactly 10 digits
    """
    digits = strip_non_digits(value)
    if len(digits) != 10:
        return value
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
